"""
Groth16 Group-Operation Simulator

This module estimates what the group operations of a Groth16 prover and
verifier cost on a real pairing-friendly curve, without running Groth16.

Key Components:
    - Groth16Params / SimulationConfig: Circuit shape and run settings
    - groth16_schedule: Cost model, circuit shape -> operation schedule
    - WorkloadBuilder: Random operands of the right shapes, run in order
    - simulate_groth16: Timed prover and verifier runs

The cost model counts:
    - Scalar multiplications in G1 and G2
    - Multi-scalar multiplications and their sizes
    - Pairings and multi-pairings

Usage:
    >>> from groth16_sim.simulator import groth16_schedule, SimulationConfig
    >>> from groth16_sim.simulator import simulate_groth16, create_small_params
    >>>
    >>> prover, verifier = groth16_schedule(n=1000, k=16, t=666, l=50)
    >>> print(prover.summary())
    >>>
    >>> result = simulate_groth16(SimulationConfig(create_small_params(), seed=1))
    >>> print(result.summary())
"""

from .params import (
    Groth16Params,
    SimulationConfig,
    PRESETS,
    create_reference_params,
    create_small_params,
    create_minimal_params,
    get_preset,
)
from .schedule import (
    OpKind,
    ScheduleEntry,
    OperationSchedule,
    groth16_schedule,
    groth16_schedule_for,
)
from .workload import (
    WorkloadKind,
    WorkloadItem,
    WorkloadBuilder,
    ResultSink,
    simulate,
)
from .core import (
    TimingMetrics,
    ItemTiming,
    ScheduleResult,
    Groth16Result,
    estimate_operation_count,
    time_workload,
    profile_workload,
    simulate_schedule,
    simulate_groth16,
    print_report,
)

__all__ = [
    "Groth16Params",
    "SimulationConfig",
    "PRESETS",
    "create_reference_params",
    "create_small_params",
    "create_minimal_params",
    "get_preset",
    # Cost model
    "OpKind",
    "ScheduleEntry",
    "OperationSchedule",
    "groth16_schedule",
    "groth16_schedule_for",
    # Workloads
    "WorkloadKind",
    "WorkloadItem",
    "WorkloadBuilder",
    "ResultSink",
    "simulate",
    # Timing
    "TimingMetrics",
    "ItemTiming",
    "ScheduleResult",
    "Groth16Result",
    "estimate_operation_count",
    "time_workload",
    "profile_workload",
    "simulate_schedule",
    "simulate_groth16",
    "print_report",
]
