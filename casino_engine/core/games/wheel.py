"""
Wheel of fortune - 12 fixed segments, duplicates weight the odds.
"""

from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.exceptions import InvalidBetError
from casino_engine.core.odds import get_game_odds


class WheelGame(BaseGame):

    game_type = "wheel"
    display_name = "Wheel"

    # Duplicates set the odds: 2x 6/12, 5x 3/12, 10x, 20x and 40x 1/12 each
    SEGMENTS = [
        {"number": 1, "color": "red", "multiplier": 2},
        {"number": 2, "color": "blue", "multiplier": 2},
        {"number": 5, "color": "yellow", "multiplier": 5},
        {"number": 10, "color": "green", "multiplier": 10},
        {"number": 1, "color": "red", "multiplier": 2},
        {"number": 2, "color": "blue", "multiplier": 2},
        {"number": 5, "color": "yellow", "multiplier": 5},
        {"number": 20, "color": "purple", "multiplier": 20},
        {"number": 1, "color": "red", "multiplier": 2},
        {"number": 2, "color": "blue", "multiplier": 2},
        {"number": 5, "color": "yellow", "multiplier": 5},
        {"number": 40, "color": "orange", "multiplier": 40},
    ]

    BET_TYPES = ("number", "color", "multiplier")
    COLOR_PAYOUT = 2  # Flat, whatever the segment's own multiplier

    def _get_odds(self) -> tuple:
        config = get_game_odds("wheel")
        return config.get("segments", self.SEGMENTS), config.get("color_payout", self.COLOR_PAYOUT)

    def _spin(self, segments: list, rng) -> tuple:
        index = rng.random_int(0, len(segments) - 1)
        return index, segments[index]

    def _validate_bet(self, bet: dict, segments: list) -> tuple:
        bet_type, value = bet.get("type"), bet.get("value")
        if bet_type not in self.BET_TYPES:
            raise InvalidBetError(f"Wheel: invalid bet type: {bet_type}")

        # Only values that some segment can land on
        allowed = {s[bet_type] for s in segments}
        if bet_type == "color":
            if not isinstance(value, str) or value not in allowed:
                raise InvalidBetError(f"Wheel: color must be one of {', '.join(sorted(allowed))}")
        elif isinstance(value, bool) or not isinstance(value, int) or value not in allowed:
            choices = ", ".join(str(v) for v in sorted(allowed))
            raise InvalidBetError(f"Wheel: {bet_type} bets need one of {choices}")

        return bet_type, value

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        segments, color_payout = self._get_odds()
        bet_type, value = self._validate_bet(self._require_bet(game_data), segments)

        index, segment = self._spin(segments, rng)

        multiplier = 0
        if bet_type == "number" and value == segment["number"]:
            multiplier = segment["multiplier"]
        elif bet_type == "color" and value == segment["color"]:
            multiplier = color_payout
        elif bet_type == "multiplier" and value == segment["multiplier"]:
            multiplier = segment["multiplier"]

        return self._result(
            bet_amount,
            multiplier,
            {
                "segmentIndex": index,
                "winningSegment": dict(segment),
                "bet": {"type": bet_type, "value": value},
                "multiplier": multiplier,
            },
        )


wheel_game = WheelGame()
