import secrets
import random
from typing import Iterable, List, Sequence


class TrueRNG:
    """
    Random source backed by Python's `secrets` module.
    Holds no seedable state, so concurrent settlements never observe each other's draws.
    """

    @staticmethod
    def random_float() -> float:
        """Returns a random float in the range [0.0, 1.0)."""
        precision = 10**12
        return secrets.randbelow(precision) / precision

    @staticmethod
    def random_int(min_val: int, max_val: int) -> int:
        """Returns a random integer in the range [min_val, max_val] (inclusive)."""
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        return min_val + secrets.randbelow(max_val - min_val + 1)

    @staticmethod
    def random_choice(options: Sequence):
        """Returns a random element from a non-empty sequence."""
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        return secrets.choice(options)

    @staticmethod
    def shuffle(deck: Iterable) -> list:
        """Returns a new list with the elements shuffled (Fisher-Yates over os.urandom)."""
        shuffled_deck = list(deck)
        random.SystemRandom().shuffle(shuffled_deck)
        return shuffled_deck

    @staticmethod
    def sample(population: Sequence, k: int) -> list:
        """Returns k unique elements drawn without replacement."""
        return random.SystemRandom().sample(list(population), k)


class SeededRNG:
    """
    Reproducible random source with the same interface as TrueRNG.
    Each instance owns its generator; used by simulations and tests.
    """

    def __init__(self, seed: int = 42):
        self.seed = seed
        self._random = random.Random(seed)

    def random_float(self) -> float:
        return self._random.random()

    def random_int(self, min_val: int, max_val: int) -> int:
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        return self._random.randint(min_val, max_val)

    def random_choice(self, options: Sequence):
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        return self._random.choice(options)

    def shuffle(self, deck: Iterable) -> List:
        shuffled_deck = list(deck)
        self._random.shuffle(shuffled_deck)
        return shuffled_deck

    def sample(self, population: Sequence, k: int) -> List:
        return self._random.sample(list(population), k)


rng = TrueRNG()
