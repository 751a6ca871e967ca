"""
History/audit collaborator: one record per settled bet, used for the
player's game history and the winnings leaderboard.
"""

import threading
import time
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from casino_engine.config import settings
from casino_engine.core.logger import get_logger

logger = get_logger("history")


@dataclass
class GameRecord:
    user_id: str
    game_type: str
    bet_amount: float
    win_amount: float
    multiplier: float
    result: str
    outcome: dict
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "gameType": self.game_type,
            "betAmount": self.bet_amount,
            "winAmount": self.win_amount,
            "multiplier": self.multiplier,
            "result": self.result,
            "gameData": self.outcome,
            "createdAt": self.created_at,
        }


@dataclass
class PlayerStats:
    user_id: str
    total_winnings: float = 0.0
    total_losses: float = 0.0
    games_played: int = 0
    biggest_win: float = 0.0

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "totalWinnings": self.total_winnings,
            "totalLosses": self.total_losses,
            "gamesPlayed": self.games_played,
            "biggestWin": self.biggest_win,
        }


class GameHistory:
    """Bounded, thread-safe in-memory history."""

    def __init__(self, max_records: Optional[int] = None):
        self._records: deque = deque(maxlen=max_records or settings.history.max_records)
        self._stats: Dict[str, PlayerStats] = {}
        self._lock = threading.Lock()

    def record(self, user_id: str, game_type: str, bet_amount: float, win_amount: float,
               multiplier: float, result: str, outcome: dict) -> GameRecord:
        entry = GameRecord(
            user_id=user_id,
            game_type=game_type,
            bet_amount=bet_amount,
            win_amount=win_amount,
            multiplier=multiplier,
            result=result,
            outcome=outcome,
        )
        with self._lock:
            self._records.append(entry)
            stats = self._stats.setdefault(user_id, PlayerStats(user_id))
            stats.games_played += 1
            net = win_amount - bet_amount
            if net > 0:
                stats.total_winnings = round(stats.total_winnings + net, 2)
                stats.biggest_win = max(stats.biggest_win, win_amount)
            elif net < 0:
                stats.total_losses = round(stats.total_losses - net, 2)

        logger.info(
            f"{game_type} bet settled: {result}",
            extra={"user_id": user_id, "bet": bet_amount, "win": win_amount, "multiplier": multiplier},
        )
        return entry

    def get_user_history(self, user_id: str, limit: int = 50) -> List[GameRecord]:
        """Newest first."""
        with self._lock:
            matches = [r for r in reversed(self._records) if r.user_id == user_id]
        return matches[:limit]

    def get_leaderboard(self, limit: int = 10) -> List[dict]:
        """Top players by total winnings."""
        with self._lock:
            ranked = sorted(self._stats.values(), key=lambda s: s.total_winnings, reverse=True)
        return [s.to_dict() for s in ranked[:limit]]


# Singleton
history = GameHistory()
