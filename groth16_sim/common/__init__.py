"""
Common Group Arithmetic

Shared building blocks for the simulator:
    - curve: BLS12-381 group arithmetic provider (py_ecc backed)
    - msm: Bucket (Pippenger) multi-scalar multiplication
"""

from .curve import (
    BLS12381Arithmetic,
    Group,
    GroupArithmetic,
    SCALAR_BITS,
    check_same_length,
    multi_miller_loop,
)
from .msm import pippenger, window_size

__all__ = [
    "BLS12381Arithmetic",
    "Group",
    "GroupArithmetic",
    "SCALAR_BITS",
    "check_same_length",
    "multi_miller_loop",
    "pippenger",
    "window_size",
]
