"""Game modules for the casino engine."""

from .base import BaseGame, MultiStepGame, SettlementResult, classify
from .slots import SlotsGame, slots_game
from .dice import DiceGame, dice_game
from .coinflip import CoinflipGame, coinflip_game
from .roulette import RouletteGame, roulette_game
from .wheel import WheelGame, wheel_game
from .baccarat import BaccaratGame, baccarat_game
from .keno import KenoGame, keno_game
from .plinko import PlinkoGame, plinko_game
from .crash import CrashGame, crash_game
from .mines import MinesGame, mines_game
from .hilo import HiLoGame, hilo_game
from .blackjack import BlackjackGame, blackjack_game

ALL_GAMES = [
    slots_game,
    dice_game,
    coinflip_game,
    roulette_game,
    wheel_game,
    baccarat_game,
    keno_game,
    plinko_game,
    crash_game,
    mines_game,
    hilo_game,
    blackjack_game,
]

__all__ = [
    "BaseGame",
    "MultiStepGame",
    "SettlementResult",
    "classify",
    "SlotsGame",
    "slots_game",
    "DiceGame",
    "dice_game",
    "CoinflipGame",
    "coinflip_game",
    "RouletteGame",
    "roulette_game",
    "WheelGame",
    "wheel_game",
    "BaccaratGame",
    "baccarat_game",
    "KenoGame",
    "keno_game",
    "PlinkoGame",
    "plinko_game",
    "CrashGame",
    "crash_game",
    "MinesGame",
    "mines_game",
    "HiLoGame",
    "hilo_game",
    "BlackjackGame",
    "blackjack_game",
    "ALL_GAMES",
]
