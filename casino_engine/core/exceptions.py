
class GameError(Exception):
    """Base class for errors caused by the caller's request (no draw, no wallet change)."""

    status_code = 400

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message)
        self.message = message


class InvalidBetError(GameError):
    """Malformed bet amount or gameData, disabled game, or bet outside the table limits."""


class UnknownGameError(InvalidBetError):
    def __init__(self, game_type):
        super().__init__(f"Invalid game type: {game_type}")
        self.game_type = game_type


class GameSessionError(InvalidBetError):
    """Multi-step game not found, expired, owned by someone else, or action out of order."""


class InsufficientFundsError(GameError):
    def __init__(self, message: str = "Insufficient balance"):
        super().__init__(message)
