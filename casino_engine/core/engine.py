"""
Game engine service: validates a bet, runs the dispatcher, and settles the
wallet and history on terminal outcomes.

Multi-step games only touch the wallet when they end; while in progress the
stake is reserved and the game state lives in the session store.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from casino_engine.config import settings
from casino_engine.core.dispatcher import GameDispatcher, dispatcher as default_dispatcher
from casino_engine.core.economy import Wallet, wallet as default_wallet
from casino_engine.core.exceptions import GameError, InsufficientFundsError, InvalidBetError
from casino_engine.core.games import MultiStepGame, SettlementResult, classify
from casino_engine.core.history import GameHistory, history as default_history
from casino_engine.core.logger import get_logger
from casino_engine.core.rng import rng as default_rng
from casino_engine.core.sessions import GameSession, SessionStore

logger = get_logger("engine")


@dataclass
class PlayResult:
    result: str  # win | push | loss | pending
    multiplier: float
    win_amount: float
    bet_amount: float
    game_data: Dict[str, Any]
    game_complete: bool
    new_balance: float

    def to_dict(self) -> dict:
        return {
            "result": self.result,
            "multiplier": self.multiplier,
            "winAmount": self.win_amount,
            "betAmount": self.bet_amount,
            "gameData": self.game_data,
            "gameComplete": self.game_complete,
            "newBalance": self.new_balance,
        }


class GameEngine:

    def __init__(
        self,
        dispatcher: Optional[GameDispatcher] = None,
        wallet: Optional[Wallet] = None,
        history: Optional[GameHistory] = None,
        sessions: Optional[SessionStore] = None,
        rng=None,
        config=None,
    ):
        self.config = config or settings
        self.dispatcher = dispatcher or default_dispatcher
        self.rng = rng or default_rng

        if config is None:
            # Global settings share the module-level wallet and history
            self.wallet = wallet or default_wallet
            self.history = history or default_history
        else:
            self.wallet = wallet or Wallet(
                starting_balance=config.economy.starting_balance,
                history_size=config.economy.transaction_history_size,
            )
            self.history = history or GameHistory(max_records=config.history.max_records)
        self.sessions = sessions or SessionStore(timeout_seconds=self.config.sessions.timeout_seconds)

    # ---------- validation ----------

    def _validate_bet(self, game_type: str, bet_amount) -> float:
        if isinstance(bet_amount, bool) or not isinstance(bet_amount, (int, float)):
            raise InvalidBetError("Bet amount must be a number")
        if not math.isfinite(bet_amount) or bet_amount <= 0:
            raise InvalidBetError("Bet amount must be positive")

        game_config = self.config.get_game_config(game_type)
        if game_config is not None:
            if not game_config.enabled:
                raise InvalidBetError(f"{game_type} is currently disabled")
            if not game_config.min_bet <= bet_amount <= game_config.max_bet:
                raise InvalidBetError(
                    f"Bet must be between {game_config.min_bet} and {game_config.max_bet}"
                )
        return float(bet_amount)

    # ---------- play ----------

    def play(self, user_id: str, game_type: str, bet_amount, game_data: Optional[dict] = None) -> PlayResult:
        """
        Play one request of a game for `user_id`.

        Raises:
            GameError: invalid input or insufficient funds. Nothing is drawn
                and the wallet is unchanged.
        """
        try:
            return self._play(user_id, game_type, bet_amount, game_data)
        except GameError as e:
            logger.warning(f"Rejected {game_type} request from user {user_id}: {e}")
            raise

    def _play(self, user_id: str, game_type: str, bet_amount, game_data: Optional[dict]) -> PlayResult:
        self.expire_sessions()

        game = self.dispatcher.get_game(game_type)
        if game_data is None:
            game_data = {}
        if not isinstance(game_data, dict):
            raise InvalidBetError("gameData must be an object")

        session: Optional[GameSession] = None
        if isinstance(game, MultiStepGame) and game.get_action(game_data) != game.start_action:
            session = self.sessions.checkout(game_data.get("gameId"), user_id, game_type)
            bet_amount = session.bet_amount
        else:
            bet_amount = self._validate_bet(game_type, bet_amount)
            if not self.wallet.has_sufficient_funds(user_id, bet_amount):
                raise InsufficientFundsError()

        try:
            settlement = self.dispatcher.dispatch(
                game_type,
                bet_amount,
                game_data,
                rng=self.rng,
                state=session.state if session else None,
            )
        except Exception:
            # Rejected or failed action: the game stays where it was
            if session is not None:
                self.sessions.restore(session)
            raise

        if not settlement.game_complete:
            return self._continue(user_id, game_type, bet_amount, settlement, session)
        return self._settle(user_id, game_type, bet_amount, settlement, session)

    def _continue(self, user_id: str, game_type: str, bet_amount: float,
                  settlement: SettlementResult, session: Optional[GameSession]) -> PlayResult:
        if session is None:
            self.wallet.reserve(user_id, bet_amount)
            session = self.sessions.open(user_id, game_type, bet_amount, settlement.state)
        else:
            self.sessions.save(session, settlement.state)

        return PlayResult(
            result="pending",
            multiplier=settlement.multiplier,
            win_amount=settlement.win_amount,
            bet_amount=bet_amount,
            game_data={"gameId": session.game_id, **settlement.outcome},
            game_complete=False,
            new_balance=self.wallet.get_balance(user_id),
        )

    def _settle(self, user_id: str, game_type: str, bet_amount: float,
                settlement: SettlementResult, session: Optional[GameSession]) -> PlayResult:
        new_balance = self.wallet.apply_delta(
            user_id,
            debit=bet_amount,
            credit=settlement.win_amount,
            reserved=bet_amount if session else 0.0,
            description=f"{game_type} bet",
        )
        result = classify(bet_amount, settlement.win_amount)

        game_data = dict(settlement.outcome)
        if session is not None:
            game_data["gameId"] = session.game_id

        self.history.record(
            user_id,
            game_type,
            bet_amount,
            settlement.win_amount,
            settlement.multiplier,
            result,
            game_data,
        )

        return PlayResult(
            result=result,
            multiplier=settlement.multiplier,
            win_amount=settlement.win_amount,
            bet_amount=bet_amount,
            game_data=game_data,
            game_complete=True,
            new_balance=new_balance,
        )

    def expire_sessions(self) -> int:
        """Forfeit multi-step games that sat idle past the session timeout."""
        expired = self.sessions.expire()
        for session in expired:
            self.wallet.apply_delta(
                session.user_id,
                debit=session.bet_amount,
                credit=0.0,
                reserved=session.bet_amount,
                description=f"{session.game_type} forfeited (expired)",
            )
            self.history.record(
                session.user_id,
                session.game_type,
                session.bet_amount,
                0.0,
                0,
                "loss",
                {"gameId": session.game_id, "expired": True},
            )
        return len(expired)


# Singleton
engine = GameEngine()
