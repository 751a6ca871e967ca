from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.exceptions import InvalidBetError
from casino_engine.core.odds import get_game_odds
from typing import Any


class RouletteGame(BaseGame):
    """
    Single-zero roulette (37 pockets: 0-36).
    Bet types: straight number, color, odd/even.

    Colors default to the parity rule (odd red, even black, 0 green).
    Setting "color_mapping": "european" in odds.json switches to the real
    wheel's red/black table; that changes which pockets pay color bets.
    """

    game_type = "roulette"
    display_name = "Roulette"

    # Red numbers on a European wheel
    RED_NUMBERS = {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}

    COLORS = ("red", "black", "green")
    PARITIES = ("odd", "even")

    PAYOUTS = {
        "number": 35,
        "color": 2,
        "odd_even": 2,
    }

    def _get_odds(self) -> tuple:
        config = get_game_odds("roulette")
        payouts = {**self.PAYOUTS, **config.get("payouts", {})}
        return payouts, config.get("color_mapping", "parity")

    def _get_color(self, number: int, color_mapping: str = "parity") -> str:
        """Get the color of a roulette number."""
        if number == 0:
            return "green"
        if color_mapping == "european":
            return "red" if number in self.RED_NUMBERS else "black"
        return "black" if number % 2 == 0 else "red"

    def _validate_bet(self, bet: dict) -> tuple:
        bet_type = bet.get("type")
        value: Any = bet.get("value")

        if bet_type == "number":
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 36:
                raise InvalidBetError("Roulette: number bets need a value between 0 and 36")
        elif bet_type == "color":
            if value not in self.COLORS:
                raise InvalidBetError(f"Roulette: color must be one of {', '.join(self.COLORS)}")
        elif bet_type == "odd_even":
            if value not in self.PARITIES:
                raise InvalidBetError("Roulette: odd_even bets need 'odd' or 'even'")
        else:
            raise InvalidBetError(f"Roulette: invalid bet type: {bet_type}")

        return bet_type, value

    def _check_win(self, number: int, color: str, bet_type: str, value) -> bool:
        """Check if a bet wins based on the spin result."""
        if bet_type == "number":
            return number == value
        if bet_type == "color":
            return color == value
        # Zero is neither odd nor even
        if number == 0:
            return False
        return (number % 2 == 0) == (value == "even")

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        bet_type, value = self._validate_bet(self._require_bet(game_data))
        payouts, color_mapping = self._get_odds()

        number = rng.random_int(0, 36)
        color = self._get_color(number, color_mapping)

        win = self._check_win(number, color, bet_type, value)
        multiplier = payouts[bet_type] if win else 0

        return self._result(
            bet_amount,
            multiplier,
            {
                "number": number,
                "color": color,
                "bet": {"type": bet_type, "value": value},
                "multiplier": multiplier,
            },
        )


roulette_game = RouletteGame()
