"""Tests for the seeded PRNG and its sampling helpers."""

import pytest

from terra_gen.core.alea_prng import AleaPRNG


class TestAleaPRNG:
    def test_same_seed_same_sequence(self):
        a = AleaPRNG("world")
        b = AleaPRNG("world")
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_different_seeds_differ(self):
        a = AleaPRNG("world")
        b = AleaPRNG("other")
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_range(self, rng):
        values = [rng.random() for _ in range(500)]
        assert all(0 <= v < 1 for v in values)

    def test_randint_inclusive(self, rng):
        values = {rng.randint(1, 3) for _ in range(300)}
        assert values == {1, 2, 3}

    def test_pick_and_take(self, rng):
        items = ["a", "b", "c"]
        assert rng.pick(items) in items

        taken = rng.take(items)
        assert taken not in items
        assert len(items) == 2

        with pytest.raises(IndexError):
            rng.pick([])
        with pytest.raises(IndexError):
            rng.take([])

    def test_shuffle_is_permutation(self, rng):
        items = list(range(30))
        shuffled = rng.shuffle(items)

        assert shuffled is items
        assert sorted(shuffled) == list(range(30))
