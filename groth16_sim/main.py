"""
Groth16 Cost Simulator - Main Entry Point

Builds the prover and verifier operation schedules for a set of circuit
parameters, runs them against BLS12-381 and prints how long each took.

Run with:
    python -m groth16_sim.main                      # reference circuit
    python -m groth16_sim.main --preset small
    python -m groth16_sim.main -n 64 -k 4 -t 42 -l 8 --repeats 3 --breakdown
    python -m groth16_sim.main --preset small --schedule-only
"""

import argparse
import json
import logging
import sys

from groth16_sim.simulator.core import print_report, simulate_groth16
from groth16_sim.simulator.params import (
    PRESETS,
    Groth16Params,
    SimulationConfig,
    get_preset,
)
from groth16_sim.simulator.schedule import groth16_schedule_for


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="groth16-sim",
        description="Time the group operations of a Groth16 prover and verifier.",
    )
    parser.add_argument("--preset", choices=sorted(PRESETS), default="reference",
                        help="circuit parameter preset (default: reference)")
    parser.add_argument("-n", type=int, help="multiplication gates")
    parser.add_argument("-k", type=int, help="public inputs")
    parser.add_argument("-t", type=int, help="evaluation-domain degree bound")
    parser.add_argument("-l", type=int, help="output wires")
    parser.add_argument("--repeats", type=int, default=1,
                        help="timed runs per schedule (default: 1)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for operand sampling")
    parser.add_argument("--breakdown", action="store_true",
                        help="also time every workload item separately")
    parser.add_argument("--schedule-only", action="store_true",
                        help="print the operation schedules without running them")
    parser.add_argument("--json", action="store_true",
                        help="print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def resolve_params(args: argparse.Namespace) -> Groth16Params:
    """Start from the preset, then apply any explicit -n/-k/-t/-l."""
    base = get_preset(args.preset)
    return Groth16Params(
        n=base.n if args.n is None else args.n,
        k=base.k if args.k is None else args.k,
        t=base.t if args.t is None else args.t,
        l=base.l if args.l is None else args.l,
    )


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    params = resolve_params(args)

    if args.schedule_only:
        prover, verifier = groth16_schedule_for(params)
        if args.json:
            print(json.dumps({"params": dict(zip("nktl", params.as_tuple())),
                              "prover": prover.shape(),
                              "verifier": verifier.shape()}, indent=2))
        else:
            print(params.summary())
            print(prover.summary())
            print(verifier.summary())
        return 0

    try:
        config = SimulationConfig(params, repeats=args.repeats, seed=args.seed,
                                  breakdown=args.breakdown)
    except ValueError as exc:
        parser.error(str(exc))

    result = simulate_groth16(config)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_report(result, show_breakdown=args.breakdown)
    return 0


if __name__ == "__main__":
    sys.exit(main())
