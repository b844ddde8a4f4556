import random

import pytest

from groth16_sim.common.msm import pippenger, window_size


Q = 1000003


def add(a, b):
    return (a + b) % Q


def double(a):
    return 2 * a % Q


def naive(bases, scalars):
    return sum(b * s for b, s in zip(bases, scalars)) % Q


@pytest.mark.parametrize("size", [1, 2, 3, 4, 9, 33, 130])
def test_matches_naive_sum(size):
    rng = random.Random(size)
    bases = [rng.randrange(Q) for _ in range(size)]
    scalars = [rng.randrange(2**64) for _ in range(size)]
    assert pippenger(bases, scalars, add, double, 0, 64) == naive(bases, scalars)


def test_empty_input_is_identity():
    assert pippenger([], [], add, double, 0, 64) == 0


def test_zero_and_max_scalars():
    bases = [5, 7, 11]
    scalars = [0, 2**16 - 1, 1]
    assert pippenger(bases, scalars, add, double, 0, 16) == naive(bases, scalars)


def test_length_mismatch_fails_fast():
    with pytest.raises(ValueError, match="one scalar per base"):
        pippenger([1, 2, 3], [4, 5], add, double, 0, 8)


@pytest.mark.parametrize("n,expected", [(0, 1), (3, 1), (4, 2), (64, 4), (1024, 8)])
def test_window_size(n, expected):
    assert window_size(n) == expected
