"""
Crash - the player picks a cash-out multiplier before the round; the crash
point is drawn once at settlement, uniform in [1, 11).
"""

from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.exceptions import InvalidBetError
from casino_engine.core.odds import get_game_odds


class CrashGame(BaseGame):

    game_type = "crash"
    display_name = "Crash"

    MIN_CRASH = 1.0
    CRASH_RANGE = 10.0

    def draw_crash_point(self, rng) -> float:
        config = get_game_odds("crash")
        low = config.get("min_crash", self.MIN_CRASH)
        span = config.get("crash_range", self.CRASH_RANGE)
        return low + rng.random_float() * span

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        cashout = game_data.get("cashoutMultiplier")
        if isinstance(cashout, bool) or not isinstance(cashout, (int, float)) or cashout < 1:
            raise InvalidBetError("Crash: 'cashoutMultiplier' must be a number >= 1")

        crash_point = self.draw_crash_point(rng)
        success = cashout <= crash_point
        multiplier = cashout if success else 0

        return self._result(
            bet_amount,
            multiplier,
            {
                "crashPoint": crash_point,
                "cashoutMultiplier": cashout,
                "success": success,
            },
        )


crash_game = CrashGame()
