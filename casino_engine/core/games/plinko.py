from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.odds import get_game_odds


class PlinkoGame(BaseGame):
    """
    Plinko with 13 landing slots.
    The authoritative result is one uniform slot draw; any bounce path shown
    by a client is decoration produced on its side.
    """

    game_type = "plinko"
    display_name = "Plinko"

    # Symmetric: edges 0.2x, center 10x
    MULTIPLIERS = [0.2, 0.5, 1, 1.5, 2, 5, 10, 5, 2, 1.5, 1, 0.5, 0.2]

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        multipliers = get_game_odds("plinko").get("multipliers", self.MULTIPLIERS)

        slot = rng.random_int(0, len(multipliers) - 1)
        multiplier = multipliers[slot]

        return self._result(
            bet_amount,
            multiplier,
            {"slot": slot, "multiplier": multiplier, "bigWin": multiplier >= 5},
        )


plinko_game = PlinkoGame()
