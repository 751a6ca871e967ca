"""
Routes a gameType to its settlement function.
"""

from typing import Any, Dict, Iterable, Optional

from casino_engine.core.exceptions import UnknownGameError
from casino_engine.core.games import ALL_GAMES, BaseGame, SettlementResult
from casino_engine.core.logger import get_logger

logger = get_logger("dispatcher")


class GameDispatcher:
    """Registry of games keyed by gameType."""

    def __init__(self, games: Iterable[BaseGame] = ALL_GAMES):
        self._games: Dict[str, BaseGame] = {game.game_type: game for game in games}

    @property
    def game_types(self) -> list:
        return list(self._games)

    def get_game(self, game_type: str) -> BaseGame:
        game = self._games.get(game_type) if isinstance(game_type, str) else None
        if game is None:
            raise UnknownGameError(game_type)
        return game

    def dispatch(
        self,
        game_type: str,
        bet_amount: float,
        game_data: Optional[Dict[str, Any]] = None,
        rng=None,
        state: Optional[Dict[str, Any]] = None,
    ) -> SettlementResult:
        """Settle one step of `game_type`. Unknown games are rejected before any draw."""
        game = self.get_game(game_type)
        result = game.settle(bet_amount, game_data, rng=rng, state=state)
        logger.debug(
            f"{game_type} settled",
            extra={
                "game_type": game_type,
                "multiplier": result.multiplier,
                "game_complete": result.game_complete,
            },
        )
        return result


dispatcher = GameDispatcher()
