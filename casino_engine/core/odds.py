"""
Odds override loader.
Every game ships its payout table as class defaults; odds.json may override
any of them at runtime and is re-read when the file changes.
"""

from typing import Dict, Any, Optional
from datetime import datetime

import orjson

from casino_engine.core.logger import get_logger
from casino_engine.config import settings

logger = get_logger("odds")

_odds_cache: Optional[Dict] = None
_last_load_time: Optional[datetime] = None


def load_odds(force_reload: bool = False) -> Dict[str, Any]:
    """
    Load odds overrides from the configured odds file.
    Caches the result and reloads if the file has changed.

    Args:
        force_reload: Force reload even if cached

    Returns:
        Dict of game -> overrides (empty when no file is present)
    """
    global _odds_cache, _last_load_time

    odds_file = settings.paths.get_odds_path()

    if _odds_cache is not None and not force_reload:
        try:
            file_mtime = datetime.fromtimestamp(odds_file.stat().st_mtime)
        except FileNotFoundError:
            if not _odds_cache:
                return _odds_cache
        else:
            if _last_load_time and file_mtime <= _last_load_time:
                return _odds_cache

    try:
        _odds_cache = orjson.loads(odds_file.read_bytes())
        logger.info(f"Loaded game odds from {odds_file.name}")
    except FileNotFoundError:
        logger.debug(f"{odds_file.name} not found, using default paytables")
        _odds_cache = {}
    except orjson.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {odds_file.name}: {e}")
        _odds_cache = {}
    _last_load_time = datetime.now()

    return _odds_cache


def get_game_odds(game: str) -> Dict[str, Any]:
    """Get the overrides for a single game (empty dict if none)."""
    return load_odds().get(game, {})


def reload_odds() -> Dict[str, Any]:
    """Force reload odds from file."""
    return load_odds(force_reload=True)
