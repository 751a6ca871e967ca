"""
Dice - roll 1-100 and call it high (51-100) or low (1-50).
"""

from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.odds import get_game_odds


class DiceGame(BaseGame):

    game_type = "dice"
    display_name = "Dice"

    PREDICTIONS = ("high", "low")
    MIDPOINT = 50  # A roll of exactly 50 is low
    PAYOUT_MULTIPLIER = 1.95  # 2.5% house edge on an even-money call

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        prediction = self._require_choice(game_data, "prediction", self.PREDICTIONS)
        payout = get_game_odds("dice").get("payout_multiplier", self.PAYOUT_MULTIPLIER)

        roll = rng.random_int(1, 100)
        if prediction == "high":
            win = roll > self.MIDPOINT
        else:
            win = roll <= self.MIDPOINT

        return self._result(
            bet_amount,
            payout if win else 0,
            {"roll": roll, "prediction": prediction, "win": win},
        )


dice_game = DiceGame()
