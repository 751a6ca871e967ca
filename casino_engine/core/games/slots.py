from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.odds import get_game_odds
from typing import Dict, List


class SlotsGame(BaseGame):
    """
    3-reel slot machine over 6 equally likely symbols.
    Three of a kind pays by symbol, any pair among the reels pays 2x.
    """

    game_type = "slots"
    display_name = "Slots"

    SYMBOLS = ["🍒", "🍋", "🔔", "⭐", "💎", "7️⃣"]

    # Three of a kind: top symbol, second tier, everything else
    PAYOUTS_3X = {
        "💎": 50,
        "7️⃣": 25,
    }
    DEFAULT_3X = 10
    PAYOUT_2X = 2

    def _get_odds(self) -> tuple:
        config = get_game_odds("slots")
        return (
            config.get("symbols", self.SYMBOLS),
            config.get("payouts_3x", self.PAYOUTS_3X),
            config.get("default_3x", self.DEFAULT_3X),
            config.get("payout_2x", self.PAYOUT_2X),
        )

    def _calculate_multiplier(
        self, reels: List[str], payouts_3x: Dict[str, float], default_3x: float, payout_2x: float
    ) -> tuple:
        """Returns (multiplier, win_type) for a set of reels."""
        if reels[0] == reels[1] == reels[2]:
            multiplier = payouts_3x.get(reels[0], default_3x)
            win_type = "jackpot" if multiplier == max(payouts_3x.values(), default=default_3x) else "triple"
            return multiplier, win_type

        if reels[0] == reels[1] or reels[1] == reels[2] or reels[0] == reels[2]:
            return payout_2x, "double"

        return 0, "lose"

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        symbols, payouts_3x, default_3x, payout_2x = self._get_odds()

        reels = [rng.random_choice(symbols) for _ in range(3)]
        multiplier, win_type = self._calculate_multiplier(reels, payouts_3x, default_3x, payout_2x)

        return self._result(
            bet_amount,
            multiplier,
            {"reels": reels, "winType": win_type, "multiplier": multiplier},
        )


slots_game = SlotsGame()
