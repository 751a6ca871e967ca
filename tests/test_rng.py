import pytest

from casino_engine.core.rng import TrueRNG, SeededRNG, rng


def test_random_int_is_inclusive_and_bounded():
    seen = {rng.random_int(1, 6) for _ in range(2000)}
    assert seen == {1, 2, 3, 4, 5, 6}


def test_random_int_rejects_inverted_range():
    with pytest.raises(ValueError):
        TrueRNG.random_int(5, 1)
    with pytest.raises(ValueError):
        SeededRNG().random_int(5, 1)


def test_random_int_single_value_range():
    assert rng.random_int(7, 7) == 7


def test_random_float_in_unit_interval():
    for _ in range(1000):
        value = rng.random_float()
        assert 0.0 <= value < 1.0


def test_random_choice_empty_sequence():
    with pytest.raises(IndexError):
        rng.random_choice([])


def test_shuffle_returns_new_permutation():
    deck = list(range(52))
    shuffled = rng.shuffle(deck)
    assert deck == list(range(52))
    assert sorted(shuffled) == deck


def test_sample_is_without_replacement():
    drawn = rng.sample(range(1, 81), 20)
    assert len(drawn) == 20
    assert len(set(drawn)) == 20
    assert all(1 <= n <= 80 for n in drawn)


def test_seeded_rng_is_reproducible():
    a, b = SeededRNG(99), SeededRNG(99)
    assert [a.random_int(1, 100) for _ in range(20)] == [b.random_int(1, 100) for _ in range(20)]
    assert a.shuffle(range(10)) == b.shuffle(range(10))
    assert a.sample(range(80), 5) == b.sample(range(80), 5)


def test_seeded_rng_instances_are_independent():
    a, b = SeededRNG(1), SeededRNG(1)
    a.random_float()
    # Drawing from one generator must not advance the other
    assert b.random_float() == SeededRNG(1).random_float()
