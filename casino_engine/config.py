"""
Configuration management for the casino engine.
Supports config.json with environment variable overrides.
All paths are resolved relative to the project root.
"""

import json
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Project root directory (parent of the 'casino_engine' folder)
PROJECT_ROOT = Path(__file__).parent.parent


def get_env(key: str, default: str = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes", "on")


def get_env_int(key: str, default: int = 0) -> int:
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_env_float(key: str, default: float = 0.0) -> float:
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# ==================== Configuration Models ====================

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    name: str = "Casino Engine"


class EconomyConfig(BaseModel):
    starting_balance: float = 1000.0
    transaction_history_size: int = 500


class GameConfig(BaseModel):
    enabled: bool = True
    min_bet: float = 1.0
    max_bet: float = 1000.0

    class Config:
        extra = "allow"  # Per-game settings


class GamesConfig(BaseModel):
    slots: GameConfig = Field(default_factory=GameConfig)
    dice: GameConfig = Field(default_factory=GameConfig)
    coinflip: GameConfig = Field(default_factory=GameConfig)
    roulette: GameConfig = Field(default_factory=GameConfig)
    wheel: GameConfig = Field(default_factory=GameConfig)
    baccarat: GameConfig = Field(default_factory=GameConfig)
    keno: GameConfig = Field(default_factory=GameConfig)
    plinko: GameConfig = Field(default_factory=GameConfig)
    crash: GameConfig = Field(default_factory=GameConfig)
    mines: GameConfig = Field(default_factory=GameConfig)
    hilo: GameConfig = Field(default_factory=GameConfig)
    blackjack: GameConfig = Field(default_factory=GameConfig)


class SessionConfig(BaseModel):
    timeout_seconds: int = 600  # Idle multi-step games are forfeited after 10 minutes


class HistoryConfig(BaseModel):
    max_records: int = 10000


class RateLimitConfig(BaseModel):
    enabled: bool = True
    game_requests: str = "30/minute"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_to_file: bool = False
    formatter: str = "color"


class PathsConfig(BaseModel):
    """All paths are relative to PROJECT_ROOT."""
    odds_file: str = "odds.json"
    log_file: str = "data/engine.log"

    def get_odds_path(self) -> Path:
        return PROJECT_ROOT / self.odds_file

    def get_log_path(self) -> Path:
        return PROJECT_ROOT / self.log_file


class AppConfig(BaseModel):
    """Main application configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    economy: EconomyConfig = Field(default_factory=EconomyConfig)
    games: GamesConfig = Field(default_factory=GamesConfig)
    sessions: SessionConfig = Field(default_factory=SessionConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    def get_game_config(self, game_type: str) -> Optional[GameConfig]:
        """Return the table settings for a game, or None if the game is not configured."""
        return getattr(self.games, game_type, None)


# ==================== Configuration Loading ====================

def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from config.json with environment variable overrides.
    Environment variables take precedence over config.json values.
    """
    config_path = config_path or PROJECT_ROOT / "config.json"

    data = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if get_env("SERVER_HOST"):
        data.setdefault("server", {})["host"] = get_env("SERVER_HOST")
    if get_env("SERVER_PORT"):
        data.setdefault("server", {})["port"] = get_env_int("SERVER_PORT", 8000)
    if get_env("DEBUG"):
        data.setdefault("server", {})["debug"] = get_env_bool("DEBUG")

    if get_env("STARTING_BALANCE"):
        data.setdefault("economy", {})["starting_balance"] = get_env_float("STARTING_BALANCE", 1000.0)
    if get_env("SESSION_TIMEOUT"):
        data.setdefault("sessions", {})["timeout_seconds"] = get_env_int("SESSION_TIMEOUT", 600)

    if get_env("LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = get_env("LOG_LEVEL")
    if get_env("LOG_TO_FILE"):
        data.setdefault("logging", {})["log_to_file"] = get_env_bool("LOG_TO_FILE")
    if get_env("LOG_FORMATTER"):
        data.setdefault("logging", {})["formatter"] = get_env("LOG_FORMATTER")

    if get_env("RATE_LIMIT_ENABLED"):
        data.setdefault("rate_limit", {})["enabled"] = get_env_bool("RATE_LIMIT_ENABLED", True)
    if get_env("RATE_LIMIT_GAME_REQUESTS"):
        data.setdefault("rate_limit", {})["game_requests"] = get_env("RATE_LIMIT_GAME_REQUESTS")

    return AppConfig(**data)


# Global config instance
settings = load_config()
