"""
Keno - pick 1 to 10 numbers from 1-80, the house draws 20.
Pays from a fixed table keyed by (numbers picked, numbers matched).
"""

from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.exceptions import InvalidBetError
from casino_engine.core.odds import get_game_odds
from typing import Dict, List


class KenoGame(BaseGame):

    game_type = "keno"
    display_name = "Keno"

    BOARD_SIZE = 80
    DRAW_COUNT = 20
    MAX_PICKS = 10

    # spots picked -> {matches: multiplier}; missing combination pays 0
    PAYTABLE: Dict[int, Dict[int, float]] = {
        1: {1: 3},
        2: {2: 12},
        3: {2: 1, 3: 42},
        4: {2: 1, 3: 4, 4: 142},
        5: {3: 1, 4: 12, 5: 810},
        6: {3: 1, 4: 3, 5: 72, 6: 1800},
        7: {4: 1, 5: 21, 6: 400, 7: 7000},
        8: {5: 12, 6: 98, 7: 1652, 8: 25000},
        9: {5: 5, 6: 44, 7: 335, 8: 4700, 9: 25000},
        10: {5: 2, 6: 24, 7: 142, 8: 1000, 9: 4500, 10: 25000},
    }

    def _get_paytable(self) -> Dict[int, Dict[int, float]]:
        override = get_game_odds("keno").get("paytable")
        if not override:
            return self.PAYTABLE
        # JSON keys are strings
        return {
            int(spots): {int(hits): mult for hits, mult in row.items()}
            for spots, row in override.items()
        }

    def validate_numbers(self, numbers) -> List[int]:
        if not isinstance(numbers, list) or not 1 <= len(numbers) <= self.MAX_PICKS:
            raise InvalidBetError(f"Keno: pick between 1 and {self.MAX_PICKS} numbers")
        for n in numbers:
            if isinstance(n, bool) or not isinstance(n, int) or not 1 <= n <= self.BOARD_SIZE:
                raise InvalidBetError(f"Keno: numbers must be between 1 and {self.BOARD_SIZE}")
        if len(set(numbers)) != len(numbers):
            raise InvalidBetError("Keno: duplicate numbers not allowed")
        return numbers

    def get_multiplier(self, spots: int, matches: int) -> float:
        return self._get_paytable().get(spots, {}).get(matches, 0)

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        selected = self.validate_numbers(game_data.get("selectedNumbers"))

        drawn = rng.sample(range(1, self.BOARD_SIZE + 1), self.DRAW_COUNT)
        drawn_set = set(drawn)
        hits = [n for n in selected if n in drawn_set]
        multiplier = self.get_multiplier(len(selected), len(hits))

        return self._result(
            bet_amount,
            multiplier,
            {
                "drawnNumbers": drawn,
                "selectedNumbers": list(selected),
                "hits": hits,
                "matches": len(hits),
                "multiplier": multiplier,
            },
        )


keno_game = KenoGame()
