"""
Shared settlement types for all games.

A game is a pure function of (bet amount, gameData, random source, prior
state). It never touches the wallet or the session store; the engine does.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from casino_engine.core.exceptions import InvalidBetError, GameSessionError
from casino_engine.core.rng import rng as default_rng


@dataclass
class SettlementResult:
    """Outcome of one settlement step."""
    multiplier: float
    win_amount: float
    outcome: Dict[str, Any]
    game_complete: bool = True
    state: Optional[Dict[str, Any]] = None  # next server-held state while in progress


def classify(bet_amount: float, win_amount: float) -> str:
    """Generic win/push/loss classification of a settled bet."""
    if win_amount > bet_amount:
        return "win"
    if win_amount == bet_amount:
        return "push"
    return "loss"


class BaseGame(ABC):
    """Abstract base for every game's settlement logic."""

    game_type: str = "base"
    display_name: str = "Base Game"
    stateful: bool = False

    def settle(
        self,
        bet_amount: float,
        game_data: Optional[Dict[str, Any]] = None,
        rng=None,
        state: Optional[Dict[str, Any]] = None,
    ) -> SettlementResult:
        """Validate the payload, draw, and price the outcome."""
        return self._settle(bet_amount, game_data or {}, rng or default_rng, state)

    @abstractmethod
    def _settle(self, bet_amount: float, game_data: dict, rng, state: Optional[dict]) -> SettlementResult:
        ...

    def _result(
        self,
        bet_amount: float,
        multiplier: float,
        outcome: Dict[str, Any],
        game_complete: bool = True,
        state: Optional[Dict[str, Any]] = None,
    ) -> SettlementResult:
        if multiplier < 0:
            raise ValueError(f"{self.game_type}: negative multiplier {multiplier}")
        return SettlementResult(
            multiplier=multiplier,
            win_amount=bet_amount * multiplier,
            outcome=outcome,
            game_complete=game_complete,
            state=state,
        )

    # ---------- gameData validation helpers ----------

    def _require_choice(self, data: dict, key: str, allowed: Iterable[str]) -> str:
        value = data.get(key)
        allowed = tuple(allowed)
        if not isinstance(value, str) or value.lower().strip() not in allowed:
            raise InvalidBetError(
                f"{self.display_name}: '{key}' must be one of {', '.join(allowed)}"
            )
        return value.lower().strip()

    def _require_bet(self, data: dict) -> dict:
        bet = data.get("bet")
        if not isinstance(bet, dict) or "type" not in bet:
            raise InvalidBetError(f"{self.display_name}: 'bet' must be an object with a 'type'")
        return bet

    def _require_int(self, data: dict, key: str, min_val: int, max_val: int) -> int:
        value = data.get(key)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or not min_val <= value <= max_val:
            raise InvalidBetError(
                f"{self.display_name}: '{key}' must be an integer between {min_val} and {max_val}"
            )
        return value


class MultiStepGame(BaseGame):
    """
    Base for games that span several requests (start -> actions -> terminal).
    The first action creates state; every later action needs the prior state.
    """

    stateful = True
    start_action: str = "start"
    actions: tuple = ()

    def _settle(self, bet_amount, game_data, rng, state):
        action = self.get_action(game_data)

        if action == self.start_action:
            if state is not None:
                raise GameSessionError(f"{self.display_name}: game already in progress")
            return self.start(bet_amount, game_data, rng)

        if state is None:
            raise GameSessionError(f"{self.display_name}: no game in progress for '{action}'")
        handler = getattr(self, action)
        return handler(bet_amount, game_data, rng, state)

    def get_action(self, game_data: Optional[dict]) -> str:
        """Return the requested action, rejecting anything outside this game's action set."""
        action = (game_data or {}).get("action", self.start_action)
        if not isinstance(action, str) or action not in self.actions:
            raise InvalidBetError(
                f"{self.display_name}: unknown action '{action}'. "
                f"Must be one of {', '.join(self.actions)}"
            )
        return action

    @abstractmethod
    def start(self, bet_amount: float, game_data: dict, rng) -> SettlementResult:
        ...
