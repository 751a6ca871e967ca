"""
Wallet collaborator.

In-memory reference wallet: balances, stakes reserved by games still in
progress, and a per-user transaction log. Every read-modify-write happens
under one lock so two concurrent plays cannot both spend the same balance.
"""

import threading
import time
from collections import defaultdict, deque
from typing import Dict, List, Optional

from casino_engine.config import settings
from casino_engine.core.exceptions import InsufficientFundsError
from casino_engine.core.logger import get_logger

logger = get_logger("economy")


class Wallet:
    """Thread-safe virtual wallet."""

    def __init__(self, starting_balance: Optional[float] = None, history_size: Optional[int] = None):
        self.starting_balance = (
            settings.economy.starting_balance if starting_balance is None else starting_balance
        )
        self._history_size = history_size or settings.economy.transaction_history_size
        self._balances: Dict[str, float] = {}
        self._reserved: Dict[str, float] = defaultdict(float)
        self._transactions: Dict[str, deque] = {}
        self._lock = threading.Lock()

    def _ensure_account(self, user_id: str) -> float:
        # Caller holds the lock
        if user_id not in self._balances:
            self._balances[user_id] = round(self.starting_balance, 2)
            self._transactions[user_id] = deque(maxlen=self._history_size)
            logger.info(f"Opened wallet for user {user_id} with {self._balances[user_id]:.2f}")
        return self._balances[user_id]

    def _log_transaction(self, user_id: str, tx_type: str, amount: float,
                         balance_after: float, description: str = ""):
        self._transactions[user_id].append(
            {
                "type": tx_type,
                "amount": round(amount, 2),
                "balanceAfter": balance_after,
                "description": description,
                "createdAt": time.time(),
            }
        )

    def get_balance(self, user_id: str) -> float:
        with self._lock:
            return self._ensure_account(user_id)

    def get_available(self, user_id: str) -> float:
        """Balance minus stakes held by games still in progress."""
        with self._lock:
            return round(self._ensure_account(user_id) - self._reserved[user_id], 2)

    def has_sufficient_funds(self, user_id: str, amount: float) -> bool:
        return self.get_available(user_id) >= amount

    def reserve(self, user_id: str, amount: float):
        """Hold a stake for a multi-step game. The balance itself is not changed."""
        with self._lock:
            available = self._ensure_account(user_id) - self._reserved[user_id]
            if available < amount:
                raise InsufficientFundsError()
            self._reserved[user_id] += amount

    def apply_delta(self, user_id: str, debit: float, credit: float,
                    reserved: float = 0.0, description: str = "") -> float:
        """
        Settle a bet atomically: release `reserved`, take `debit`, pay `credit`.

        Args:
            user_id: Wallet owner
            debit: Stake to take (the bet amount)
            credit: Amount paid back (the win amount, 0 on a loss)
            reserved: Stake previously held with `reserve`
            description: Free text stored on the transaction records

        Returns:
            The new balance

        Raises:
            InsufficientFundsError: if the stake exceeds the available balance
        """
        with self._lock:
            balance = self._ensure_account(user_id)
            self._reserved[user_id] = max(0.0, self._reserved[user_id] - reserved)

            if balance - self._reserved[user_id] < debit:
                # Put the hold back; nothing was settled
                self._reserved[user_id] += reserved
                raise InsufficientFundsError()

            after_bet = round(balance - debit, 2)
            self._log_transaction(user_id, "bet", -debit, after_bet, description)

            new_balance = after_bet
            if credit > 0:
                new_balance = round(after_bet + credit, 2)
                self._log_transaction(user_id, "win", credit, new_balance, description)

            self._balances[user_id] = new_balance
            return new_balance

    def get_transactions(self, user_id: str, limit: int = 50) -> List[dict]:
        """Newest first."""
        with self._lock:
            self._ensure_account(user_id)
            return list(reversed(self._transactions[user_id]))[:limit]


# Singleton
wallet = Wallet()
