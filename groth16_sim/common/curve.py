"""
BLS12-381 Group Arithmetic.

This module exposes the handful of pairing-group operations a Groth16 prover
and verifier are made of, backed by ``py_ecc``'s optimized BLS12-381
implementation:

    - Random sampling of scalars and G1 / G2 points
    - Scalar multiplication ("exponentiation" in multiplicative notation)
    - Multi-scalar multiplication ("multi-exponentiation")
    - Bilinear pairing e: G1 x G2 -> Gt
    - Multi-pairing: one shared Miller loop over all pairs, a single final
      exponentiation

Points are ``py_ecc`` projective triples (x, y, z). The affine form used
before pairing is the same triple normalized to z = 1.

Hardware Context:
    - BLS12-381 scalars are 255 bits, base field elements 381 bits
    - G2 lives over Fq2, so every G2 operation costs ~3x a G1 operation
    - The final exponentiation is about as expensive as a Miller loop, which
      is why sharing it across pairs (multi-pairing) pays off
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Protocol, Sequence, Tuple, runtime_checkable
import random

from py_ecc.optimized_bls12_381 import (
    FQ12,
    G1,
    G2,
    Z1,
    Z2,
    add,
    b,
    b2,
    curve_order,
    double,
    eq,
    final_exponentiate,
    is_inf,
    is_on_curve,
    multiply,
    normalize,
    pairing,
    twist,
)
from py_ecc.optimized_bls12_381.optimized_pairing import (
    cast_point_to_fq12,
    linefunc,
    pseudo_binary_encoding,
)

from .msm import pippenger


# Projective point triple as produced by py_ecc
Point = Any

SCALAR_BITS = curve_order.bit_length()


class Group(Enum):
    """The two source groups of the pairing."""
    G1 = 1
    G2 = 2

    @property
    def generator(self) -> Point:
        return G1 if self is Group.G1 else G2

    @property
    def identity(self) -> Point:
        return Z1 if self is Group.G1 else Z2


def check_same_length(lhs: Sequence, rhs: Sequence, what: str) -> None:
    """Fail fast when two parallel operand sequences differ in length."""
    if len(lhs) != len(rhs):
        raise ValueError(
            f"{what}: operand length mismatch ({len(lhs)} vs {len(rhs)})"
        )


@runtime_checkable
class GroupArithmetic(Protocol):
    """Operations a workload needs from a group arithmetic provider."""

    def random_scalar(self, rng: random.Random) -> int: ...

    def random_point(self, group: Group, rng: random.Random) -> Point: ...

    def scalar_mul(self, point: Point, scalar: int) -> Point: ...

    def to_affine(self, point: Point) -> Point: ...

    def multi_exp(self, group: Group, bases: Sequence[Point],
                  scalars: Sequence[int]) -> Point: ...

    def pairing(self, g1_affine: Point, g2_affine: Point) -> Any: ...

    def multi_pairing(self, g1s: Sequence[Point], g2s: Sequence[Point]) -> Any: ...


@dataclass
class _PairState:
    """Per-pair running values of a shared Miller loop."""
    q: Point
    twist_q: Any
    r: Point
    twist_r: Any
    p12: Any


def multi_miller_loop(pairs: Sequence[Tuple[Point, Point]]) -> FQ12:
    """
    Miller loop over several (G1, G2) pairs at once, without final exponentiation.

    All pairs walk the same ate loop bits together: the running Fq12
    numerator and denominator are squared once per bit, every pair's line
    values are multiplied in, and a single division closes the loop. The
    result equals the product of the per-pair Miller-loop outputs.

    Pairs with an identity point contribute 1 and are skipped, as in
    ``py_ecc``'s ``pairing``.

    Raises:
        ValueError: If a point is not on its curve
    """
    states: List[_PairState] = []
    for p, q in pairs:
        if not is_on_curve(q, b2):
            raise ValueError("multi_pairing: G2 point is not on the curve")
        if not is_on_curve(p, b):
            raise ValueError("multi_pairing: G1 point is not on the curve")
        if is_inf(p) or is_inf(q):
            continue
        twist_q = twist(q)
        states.append(_PairState(q, twist_q, q, twist_q, cast_point_to_fq12(p)))

    f_num, f_den = FQ12.one(), FQ12.one()
    if not states:
        return f_num

    for v in pseudo_binary_encoding[62::-1]:
        f_num = f_num * f_num
        f_den = f_den * f_den
        for st in states:
            _n, _d = linefunc(st.twist_r, st.twist_r, st.p12)
            f_num = f_num * _n
            f_den = f_den * _d
            st.r = double(st.r)
            st.twist_r = twist(st.r)
        if v == 1:
            for st in states:
                _n, _d = linefunc(st.twist_r, st.twist_q, st.p12)
                f_num = f_num * _n
                f_den = f_den * _d
                st.r = add(st.r, st.q)
                st.twist_r = twist(st.r)
    return f_num / f_den


class BLS12381Arithmetic:
    """
    Group arithmetic provider over BLS12-381.

    Every operation is a thin call into ``py_ecc`` except the bucket
    multi-exp and the shared Miller loop, which ``py_ecc`` lacks.

    Usage:
        >>> arith = BLS12381Arithmetic()
        >>> rng = random.Random(7)
        >>> p = arith.random_point(Group.G1, rng)
        >>> s = arith.random_scalar(rng)
        >>> q = arith.scalar_mul(p, s)
    """

    name = "bls12_381"

    def random_scalar(self, rng: random.Random) -> int:
        """Uniform scalar in [0, r)."""
        return rng.randrange(curve_order)

    def random_point(self, group: Group, rng: random.Random) -> Point:
        """Uniform non-identity point of ``group``."""
        return multiply(group.generator, rng.randrange(1, curve_order))

    def identity(self, group: Group) -> Point:
        return group.identity

    def scalar_mul(self, point: Point, scalar: int) -> Point:
        return multiply(point, scalar)

    def to_affine(self, point: Point) -> Point:
        """Normalize a projective point to z = 1 (identity is left as is)."""
        if is_inf(point):
            return point
        x, y = normalize(point)
        return (x, y, type(x).one())

    def multi_exp(self, group: Group, bases: Sequence[Point],
                  scalars: Sequence[int]) -> Point:
        """
        Compute sum_i scalars[i] * bases[i].

        Equal to adding up ``scalar_mul`` results, but uses the bucket
        method. An empty multi-exp is the group identity.
        """
        check_same_length(bases, scalars, "multi_exp")
        return pippenger(bases, scalars, add, double, group.identity, SCALAR_BITS)

    def pairing(self, g1_affine: Point, g2_affine: Point) -> FQ12:
        """Full pairing e(P, Q): Miller loop plus final exponentiation."""
        return pairing(g2_affine, g1_affine)

    def multi_pairing(self, g1s: Sequence[Point], g2s: Sequence[Point]) -> FQ12:
        """
        Compute prod_i e(g1s[i], g2s[i]) with a single final exponentiation.

        Both sequences are converted to affine form and paired by position,
        then run through ``multi_miller_loop`` and exponentiated once.

        Raises:
            ValueError: If the two sequences differ in length
        """
        check_same_length(g1s, g2s, "multi_pairing")
        pairs = [(self.to_affine(p), self.to_affine(q)) for p, q in zip(g1s, g2s)]
        return final_exponentiate(multi_miller_loop(pairs))

    # Helpers for checking results (not used inside timed regions)

    def eq(self, a: Point, b: Point) -> bool:
        return eq(a, b)

    def add(self, a: Point, b: Point) -> Point:
        return add(a, b)

    def gt_one(self) -> FQ12:
        return FQ12.one()

    def gt_mul(self, a: FQ12, b: FQ12) -> FQ12:
        return a * b

    def __repr__(self) -> str:
        return f"BLS12381Arithmetic(scalar_bits={SCALAR_BITS})"
