import pytest

from casino_engine.config import AppConfig
from casino_engine.core.economy import Wallet
from casino_engine.core.engine import GameEngine
from casino_engine.core.history import GameHistory
from casino_engine.core.rng import SeededRNG
from casino_engine.core.sessions import SessionStore


class FixedRNG:
    """Random source that replays queued draws, so a test can pick the outcome."""

    def __init__(self, ints=(), floats=(), choices=(), samples=None):
        self.ints = list(ints)
        self.floats = list(floats)
        self.choices = list(choices)
        self.samples = samples

    def random_int(self, min_val, max_val):
        value = self.ints.pop(0)
        assert min_val <= value <= max_val, f"{value} outside [{min_val}, {max_val}]"
        return value

    def random_float(self):
        return self.floats.pop(0)

    def random_choice(self, options):
        value = self.choices.pop(0) if self.choices else options[0]
        assert value in options
        return value

    def shuffle(self, deck):
        return list(deck)

    def sample(self, population, k):
        return list(self.samples)[:k]


class ScriptedDeckRNG(SeededRNG):
    """Shuffles so that the deck deals `ranks` in order."""

    def __init__(self, ranks):
        super().__init__(0)
        self.ranks = list(ranks)

    def shuffle(self, deck):
        remaining = list(deck)
        picked = []
        for rank in self.ranks:
            card = next(c for c in remaining if c.rank == rank)
            remaining.remove(card)
            picked.append(card)
        # Cards are dealt from the end of the list
        return remaining + picked[::-1]


@pytest.fixture
def fixed_rng():
    return FixedRNG


@pytest.fixture
def deck_rng():
    return ScriptedDeckRNG


@pytest.fixture
def seeded_rng():
    return SeededRNG(1234)


@pytest.fixture
def engine(seeded_rng):
    """Engine wired to private collaborators so tests never share balances."""
    return GameEngine(
        wallet=Wallet(starting_balance=1000.0, history_size=100),
        history=GameHistory(max_records=100),
        sessions=SessionStore(timeout_seconds=60),
        rng=seeded_rng,
        config=AppConfig(),
    )
