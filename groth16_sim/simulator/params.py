"""
Circuit Parameters and Run Configuration for Groth16 Simulation.

This module defines the knobs that drive a simulation run.

Circuit Parameters (Groth16Params):
    - n: Number of multiplication gates
    - k: Number of public inputs
    - t: Degree bound of the polynomial evaluation domain
    - l: Number of linear-combination (output) wires

Run Configuration (SimulationConfig):
    - repeats: How many timed runs per schedule
    - seed: Seed for the operand random source (None = fresh entropy)
    - breakdown: Also time each workload item on its own

Circuit parameters are deliberately not validated: the cost model is a pure
arithmetic mapping and degenerate inputs simply give degenerate schedules.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional


@dataclass(frozen=True)
class Groth16Params:
    """
    Groth16 circuit shape.

    Attributes:
        n: Multiplication gate count
        k: Public input count
        t: Evaluation-domain degree bound
        l: Output wire count

    Example:
        >>> params = Groth16Params(n=1000, k=16, t=666, l=50)
        >>> print(params)
        Groth16, n=1000, k=16, t=666, l=50
    """
    n: int = 0
    k: int = 0
    t: int = 0
    l: int = 0

    def as_tuple(self):
        return (self.n, self.k, self.t, self.l)

    def summary(self) -> str:
        return f"Groth16, n={self.n}, k={self.k}, t={self.t}, l={self.l}"

    def __str__(self) -> str:
        return self.summary()


@dataclass
class SimulationConfig:
    """
    Configuration for one simulation run.

    Attributes:
        params: Circuit parameters to simulate
        repeats: Number of timed runs per schedule (at least 1)
        seed: Operand random seed, None for a fresh random source
        breakdown: Time each workload item separately as well

    Example:
        >>> config = SimulationConfig(create_small_params(), repeats=3, seed=1)
        >>> config.repeats
        3
    """
    params: Groth16Params = field(default_factory=Groth16Params)
    repeats: int = 1
    seed: Optional[int] = None
    breakdown: bool = False

    def __post_init__(self):
        """Validate run settings (circuit parameters are left alone)."""
        if self.repeats < 1:
            raise ValueError("repeats must be at least 1")

    def summary(self) -> str:
        seed = "random" if self.seed is None else str(self.seed)
        return (
            f"SimulationConfig:\n"
            f"  Circuit: {self.params.summary()}\n"
            f"  Repeats: {self.repeats}\n"
            f"  Seed: {seed}\n"
            f"  Breakdown: {'yes' if self.breakdown else 'no'}"
        )


# =============================================================================
# PREDEFINED PARAMETERS
# =============================================================================

def create_reference_params() -> Groth16Params:
    """
    The reference workload: 1000 gates, 16 public inputs, 50 outputs.

    With a pure-Python curve backend this takes a while (tens of thousands
    of G1 operations on the prover side alone).
    """
    return Groth16Params(n=1000, k=16, t=666, l=50)


def create_small_params() -> Groth16Params:
    """Small circuit that finishes in seconds, useful for quick looks."""
    return Groth16Params(n=16, k=4, t=10, l=4)


def create_minimal_params() -> Groth16Params:
    """All-zero circuit: only the constant-size parts of the schedules remain."""
    return Groth16Params(n=0, k=0, t=0, l=0)


PRESETS: Dict[str, Callable[[], Groth16Params]] = {
    "reference": create_reference_params,
    "small": create_small_params,
    "minimal": create_minimal_params,
}


def get_preset(name: str) -> Groth16Params:
    """Look up a named parameter preset."""
    try:
        return PRESETS[name]()
    except KeyError:
        raise ValueError(
            f"unknown preset {name!r}, expected one of {sorted(PRESETS)}"
        ) from None
