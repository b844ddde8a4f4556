"""Shared fixtures: a fast counting stand-in for the curve arithmetic."""

import random

import pytest

from groth16_sim.common.curve import check_same_length
from groth16_sim.common.msm import pippenger


# Mersenne prime, big enough that random collisions never matter here
TOY_ORDER = 2**61 - 1


class ToyArithmetic:
    """
    Group arithmetic over Z_q (additive), with a call log.

    Points and scalars are ints mod q, the "pairing" is multiplication mod q
    (bilinear, lands in Z_q too). Every operation issued by ``simulate`` is
    appended to ``calls`` so tests can check what ran and in which order.
    """

    name = "toy"

    def __init__(self):
        self.calls = []
        self.sampled = 0

    def random_scalar(self, rng):
        self.sampled += 1
        return rng.randrange(TOY_ORDER)

    def random_point(self, group, rng):
        self.sampled += 1
        return rng.randrange(1, TOY_ORDER)

    def identity(self, group):
        return 0

    def to_affine(self, point):
        return point

    def scalar_mul(self, point, scalar):
        self.calls.append(("scalar_mul", point))
        return point * scalar % TOY_ORDER

    def multi_exp(self, group, bases, scalars):
        check_same_length(bases, scalars, "multi_exp")
        self.calls.append(("multi_exp", group, len(bases)))
        return pippenger(bases, scalars,
                         lambda a, b: (a + b) % TOY_ORDER,
                         lambda a: 2 * a % TOY_ORDER,
                         0, TOY_ORDER.bit_length())

    def pairing(self, g1, g2):
        self.calls.append(("pairing", g1))
        return g1 * g2 % TOY_ORDER

    def multi_pairing(self, g1s, g2s):
        check_same_length(g1s, g2s, "multi_pairing")
        self.calls.append(("multi_pairing", len(g1s)))
        return sum(a * b for a, b in zip(g1s, g2s)) % TOY_ORDER


@pytest.fixture
def toy():
    return ToyArithmetic()


@pytest.fixture
def rng():
    return random.Random(1234)
