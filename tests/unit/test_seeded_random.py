"""Tests for the seeded Park-Miller generator."""

import pytest

from baseplan.geometry.seeded_random import MODULUS, SeededRandom


class TestSeededRandom:
    """Tests for SeededRandom."""

    def test_first_value_matches_park_miller_step(self):
        rng = SeededRandom(42)
        assert rng.next() == (42 * 16807 - 1) / (MODULUS - 1)

    def test_same_seed_same_sequence(self):
        first = SeededRandom(42)
        second = SeededRandom(42)

        a = [first.next() for _ in range(5)]
        b = [second.next() for _ in range(5)]

        assert a == b

    def test_different_seeds_differ(self):
        assert SeededRandom(42).next() != SeededRandom(43).next()

    def test_values_in_unit_interval(self):
        rng = SeededRandom(12345)
        for _ in range(1000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    @pytest.mark.parametrize("seed", [0, MODULUS, -5, -MODULUS])
    def test_non_positive_state_is_normalized(self, seed):
        """Seeds whose remainder is <= 0 get shifted into the positive range."""
        rng = SeededRandom(seed)
        assert 0 < rng.state < MODULUS

    def test_zero_seed_normalization(self):
        assert SeededRandom(0).state == MODULUS - 1

    def test_negative_seed_uses_truncated_remainder(self):
        assert SeededRandom(-5).state == MODULUS - 1 - 5

    def test_next_range_bounds(self):
        rng = SeededRandom(7)
        for _ in range(500):
            value = rng.next_range(-1, 1)
            assert -1 <= value < 1

    def test_next_range_is_affine_in_next(self):
        a = SeededRandom(99)
        b = SeededRandom(99)
        assert a.next_range(10, 20) == 10 + b.next() * 10

    def test_next_int_inclusive(self):
        rng = SeededRandom(2024)
        values = {rng.next_int(1, 3) for _ in range(500)}
        assert values == {1, 2, 3}

    def test_callable_shortcut(self):
        a = SeededRandom(5)
        b = SeededRandom(5)
        assert a() == b.next()
