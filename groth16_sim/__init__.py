"""
Groth16 Cost Simulator
======================

Measures what the group operations of a Groth16 prover and verifier cost on
BLS12-381, by running randomized workloads of the right shape instead of a
real proof system.

Modules:
    - simulator: Cost model, workloads and timing harness
    - common: BLS12-381 group arithmetic and multi-exp

Quick Start:
    >>> from groth16_sim import Group
    >>> from groth16_sim.simulator import groth16_schedule
    >>> prover, verifier = groth16_schedule(n=1000, k=16, t=666, l=50)
    >>> prover.exponentiations(Group.G1)
    1084
"""

__version__ = "0.1.0"

from . import common
from . import simulator
from .common import Group
