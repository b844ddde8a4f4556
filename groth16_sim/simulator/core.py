"""
Groth16 Group-Operation Timing Harness.

This module turns operation schedules into wall-clock measurements:

    1. The cost model (``schedule``) lists the group operations of a Groth16
       prover and verifier for given circuit parameters
    2. A ``WorkloadBuilder`` samples random operands of the right shapes
    3. The builder runs inside a ``perf_counter`` window, possibly several
       times, and the durations are summarized with numpy

Only the operation volume is real; no proof is produced or checked. The
measured time is therefore a lower bound on a real prover / verifier on the
same curve backend (witness handling, FFTs and hashing are not modeled).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import random
import time

import numpy as np

from ..common.curve import BLS12381Arithmetic, GroupArithmetic
from .params import Groth16Params, SimulationConfig
from .schedule import OpKind, OperationSchedule, groth16_schedule_for
from .workload import ResultSink, WorkloadBuilder, simulate


logger = logging.getLogger(__name__)


@dataclass
class TimingMetrics:
    """
    Wall-clock timings of one schedule.

    Attributes:
        name: Schedule name (Prover / Verifier)
        durations: Seconds taken by each timed run
        results: Results consumed per run (sanity check that work happened)
    """
    name: str
    durations: List[float] = field(default_factory=list)
    results: int = 0

    @property
    def runs(self) -> int:
        return len(self.durations)

    @property
    def mean(self) -> float:
        return float(np.mean(self.durations)) if self.durations else 0.0

    @property
    def std(self) -> float:
        return float(np.std(self.durations)) if self.durations else 0.0

    @property
    def min(self) -> float:
        return float(np.min(self.durations)) if self.durations else 0.0

    @property
    def max(self) -> float:
        return float(np.max(self.durations)) if self.durations else 0.0

    @property
    def median(self) -> float:
        return float(np.median(self.durations)) if self.durations else 0.0

    def summary(self) -> str:
        """Return summary string."""
        if self.runs == 1:
            return format_duration(self.mean)
        return (
            f"{format_duration(self.mean)} "
            f"± {format_duration(self.std)} over {self.runs} runs "
            f"(min {format_duration(self.min)}, max {format_duration(self.max)})"
        )

    def to_dict(self) -> Dict:
        return {
            "runs": self.runs,
            "mean_s": self.mean,
            "std_s": self.std,
            "min_s": self.min,
            "max_s": self.max,
            "median_s": self.median,
            "results": self.results,
        }

    def __repr__(self) -> str:
        return (f"TimingMetrics(name='{self.name}', runs={self.runs}, "
                f"mean={self.mean:.6f}s)")


@dataclass
class ItemTiming:
    """Time spent on one workload item."""
    label: str
    seconds: float
    calls: int


@dataclass
class ScheduleResult:
    """Schedule, its operation counts and its timings."""
    schedule: OperationSchedule
    timing: TimingMetrics
    operation_counts: Dict[str, int]
    breakdown: List[ItemTiming] = field(default_factory=list)


@dataclass
class Groth16Result:
    """
    Prover and verifier timings for one set of circuit parameters.

    Example:
        >>> from groth16_sim.simulator.params import create_small_params
        >>> result = simulate_groth16(SimulationConfig(create_small_params()))
        >>> print(result.summary())
    """
    params: Groth16Params
    prover: ScheduleResult
    verifier: ScheduleResult

    def summary(self) -> str:
        lines = [self.params.summary()]
        for part in (self.prover, self.verifier):
            lines.append(f"{part.schedule.name}:")
            lines.append(f"  {format_duration(part.timing.mean)}")
        return "\n".join(lines)

    def to_dict(self) -> Dict:
        out = {"params": dict(zip("nktl", self.params.as_tuple()))}
        for part in (self.prover, self.verifier):
            entry = part.timing.to_dict()
            entry["operations"] = dict(part.operation_counts)
            if part.breakdown:
                entry["breakdown"] = [
                    {"item": b.label, "seconds": b.seconds, "calls": b.calls}
                    for b in part.breakdown
                ]
            out[part.schedule.name.lower()] = entry
        return out


def format_duration(seconds: float) -> str:
    """Human readable duration: ms below one second, s otherwise."""
    if seconds < 1.0:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


def estimate_operation_count(schedule: OperationSchedule) -> Dict[str, int]:
    """
    Count primitive calls per operation kind, and the total number of
    operands fed to multi-exps / multi-pairings.

    Non-positive counts or sizes contribute nothing.
    """
    counts = {kind.value: 0 for kind in OpKind}
    counts["multi_exp_terms"] = 0
    counts["miller_loops"] = 0

    for entry in schedule:
        calls = max(0, entry.count)
        size = max(0, entry.size)
        counts[entry.kind.value] += calls
        if entry.kind is OpKind.MULTI_EXPONENTIATION:
            counts["multi_exp_terms"] += calls * size
        elif entry.kind is OpKind.PAIRING:
            counts["miller_loops"] += calls
        elif entry.kind is OpKind.MULTI_PAIRING:
            counts["miller_loops"] += calls * size

    return counts


def time_workload(builder: WorkloadBuilder, repeats: int = 1,
                  name: str = "workload") -> TimingMetrics:
    """
    Time ``builder.run()``.

    Every run reuses the same pre-sampled operands; only the group
    arithmetic falls inside the timed window.
    """
    metrics = TimingMetrics(name=name)
    for run in range(repeats):
        sink = ResultSink()
        start = time.perf_counter()
        builder.run(sink)
        elapsed = time.perf_counter() - start
        metrics.durations.append(elapsed)
        metrics.results = sink.count
        logger.debug("%s run %d/%d: %.6fs (%d results)",
                     name, run + 1, repeats, elapsed, sink.count)
    return metrics


def profile_workload(builder: WorkloadBuilder) -> List[ItemTiming]:
    """Time every item of ``builder`` on its own, in order."""
    timings = []
    sink = ResultSink()
    for item in builder.items:
        start = time.perf_counter()
        simulate(item, builder.arithmetic, sink)
        timings.append(ItemTiming(item.label(), time.perf_counter() - start,
                                  item.num_calls))
    return timings


def simulate_schedule(schedule: OperationSchedule, rng: random.Random,
                      arithmetic: Optional[GroupArithmetic] = None,
                      repeats: int = 1,
                      breakdown: bool = False) -> ScheduleResult:
    """
    Build a workload for ``schedule`` and time it.

    Args:
        schedule: Operations to run
        rng: Random source for operand sampling
        arithmetic: Group arithmetic provider (BLS12-381 by default)
        repeats: Timed runs
        breakdown: Also time each item separately, in one extra pass

    Returns:
        ScheduleResult with timings and operation counts
    """
    logger.debug("building workload for %s (%d entries)", schedule.name, len(schedule))
    builder = WorkloadBuilder.from_schedule(schedule, rng, arithmetic)
    timing = time_workload(builder, repeats, name=schedule.name)
    items = profile_workload(builder) if breakdown else []
    return ScheduleResult(
        schedule=schedule,
        timing=timing,
        operation_counts=estimate_operation_count(schedule),
        breakdown=items,
    )


def simulate_groth16(config: SimulationConfig,
                     arithmetic: Optional[GroupArithmetic] = None) -> Groth16Result:
    """
    Time the prover and verifier group operations for ``config.params``.

    Both schedules draw operands from one random source, seeded from
    ``config.seed`` when given. The prover runs first.
    """
    if arithmetic is None:
        arithmetic = BLS12381Arithmetic()
    rng = random.Random(config.seed)

    prover_schedule, verifier_schedule = groth16_schedule_for(config.params)
    logger.debug("simulating %s", config.params)

    prover = simulate_schedule(prover_schedule, rng, arithmetic,
                               config.repeats, config.breakdown)
    verifier = simulate_schedule(verifier_schedule, rng, arithmetic,
                                 config.repeats, config.breakdown)
    return Groth16Result(config.params, prover, verifier)


def print_report(result: Groth16Result, show_breakdown: bool = False) -> None:
    """
    Print the parameters, then a Prover and a Verifier section with their
    elapsed times.
    """
    print(result.params.summary())
    for part in (result.prover, result.verifier):
        print(f"{part.schedule.name}:")
        print(f"  elapsed: {part.timing.summary()}")
        ops = part.operation_counts
        print(f"  exps={ops['exp']:,} multi_exps={ops['multi_exp']:,} "
              f"(terms={ops['multi_exp_terms']:,}) pairings={ops['pairing']:,} "
              f"multi_pairings={ops['multi_pairing']:,}")

        if show_breakdown and part.breakdown:
            print(f"  {'Item':<32} {'Calls':>10} {'Time':>12}")
            print("  " + "-" * 56)
            for b in part.breakdown:
                print(f"  {b.label:<32} {b.calls:>10,} {format_duration(b.seconds):>12}")
