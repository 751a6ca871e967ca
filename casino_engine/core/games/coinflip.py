from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.odds import get_game_odds


class CoinflipGame(BaseGame):
    """
    Simple 50/50 coin flip with house edge.
    """

    game_type = "coinflip"
    display_name = "Coin Flip"

    CHOICES = ("heads", "tails")
    # Payout multiplier (1.95x gives 2.5% house edge)
    PAYOUT_MULTIPLIER = 1.95

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        choice = self._require_choice(game_data, "choice", self.CHOICES)
        payout = get_game_odds("coinflip").get("payout_multiplier", self.PAYOUT_MULTIPLIER)

        result = "heads" if rng.random_float() < 0.5 else "tails"
        win = choice == result

        return self._result(
            bet_amount,
            payout if win else 0,
            {"result": result, "choice": choice, "win": win},
        )


coinflip_game = CoinflipGame()
