import json
import random

import pytest

from groth16_sim import main as cli
from groth16_sim.simulator.core import (
    estimate_operation_count,
    format_duration,
    print_report,
    profile_workload,
    simulate_groth16,
    simulate_schedule,
    time_workload,
)
from groth16_sim.simulator.params import (
    Groth16Params,
    SimulationConfig,
    create_minimal_params,
    get_preset,
)
from groth16_sim.simulator.schedule import groth16_schedule
from groth16_sim.simulator.workload import WorkloadBuilder


def test_time_workload_records_each_run(toy, rng):
    builder = WorkloadBuilder(rng, toy).g1_exps(3).g1_multi_exps(2, 4)
    metrics = time_workload(builder, repeats=4, name="demo")

    assert metrics.runs == 4
    assert metrics.results == 5
    assert all(d >= 0 for d in metrics.durations)
    assert metrics.min <= metrics.median <= metrics.max
    assert len(toy.calls) == 4 * 5


def test_profile_workload_one_timing_per_item(toy, rng):
    builder = WorkloadBuilder(rng, toy).g1_exps(3).pairings(2).multi_pairings(4, 3)
    timings = profile_workload(builder)
    assert [t.label for t in timings] == ["G1 exps x3", "pairings x2", "multi_pairings[3] x4"]
    assert [t.calls for t in timings] == [3, 2, 4]


def test_operation_counts_for_reference_prover():
    prover, _ = groth16_schedule(1000, 16, 666, 50)
    counts = estimate_operation_count(prover)
    assert counts["exp"] == 1084 + 667
    assert counts["multi_exp"] == 2 + 17067
    assert counts["multi_exp_terms"] == 2 * 1000 + 17067 * 2
    assert counts["pairing"] == 0
    assert counts["miller_loops"] == 0


def test_operation_counts_for_verifier_miller_loops():
    _, verifier = groth16_schedule(0, 0, 0, 0)
    counts = estimate_operation_count(verifier)
    assert counts["multi_pairing"] == 1
    assert counts["miller_loops"] == 3


def test_simulate_schedule_with_breakdown(toy):
    _, verifier = groth16_schedule(1, 1, 1, 1)
    result = simulate_schedule(verifier, random.Random(5), toy, repeats=2, breakdown=True)
    assert result.timing.runs == 2
    assert len(result.breakdown) == len(verifier)
    assert result.operation_counts["multi_pairing"] == 1


def test_simulate_groth16_runs_prover_then_verifier(toy):
    config = SimulationConfig(create_minimal_params(), seed=7)
    result = simulate_groth16(config, arithmetic=toy)

    assert result.prover.schedule.name == "Prover"
    assert result.verifier.schedule.name == "Verifier"
    # prover: 2 G1 exps, 2 + 1 multi-exps, 1 G2 exp; verifier ends in the multi-pairing
    assert toy.calls[0][0] == "scalar_mul"
    assert toy.calls[-1] == ("multi_pairing", 3)
    assert result.prover.timing.results == 2 + 3 + 1


def test_seeded_runs_sample_the_same_operands(toy):
    config = SimulationConfig(Groth16Params(2, 1, 1, 1), seed=11)
    simulate_groth16(config, arithmetic=toy)
    first = list(toy.calls)
    toy.calls.clear()
    simulate_groth16(config, arithmetic=toy)
    assert toy.calls == first


def test_report_layout(toy, capsys):
    result = simulate_groth16(SimulationConfig(create_minimal_params(), seed=1), toy)
    print_report(result)
    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "Groth16, n=0, k=0, t=0, l=0"
    assert lines[1] == "Prover:"
    assert lines[2].startswith("  elapsed: ")
    assert "Verifier:" in lines


def test_result_to_dict(toy):
    config = SimulationConfig(create_minimal_params(), seed=1, breakdown=True)
    data = simulate_groth16(config, toy).to_dict()
    assert data["params"] == {"n": 0, "k": 0, "t": 0, "l": 0}
    assert data["prover"]["runs"] == 1
    assert data["verifier"]["operations"]["multi_pairing"] == 1
    assert "breakdown" in data["verifier"]
    json.dumps(data)


def test_repeats_must_be_positive():
    with pytest.raises(ValueError, match="repeats"):
        SimulationConfig(create_minimal_params(), repeats=0)


def test_unknown_preset():
    with pytest.raises(ValueError, match="unknown preset"):
        get_preset("huge")


@pytest.mark.parametrize("seconds,text", [(0.0015, "1.500ms"), (2.5, "2.500s")])
def test_format_duration(seconds, text):
    assert format_duration(seconds) == text


def test_cli_schedule_only(capsys):
    assert cli.main(["--preset", "small", "--schedule-only"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Groth16, n=16, k=4, t=10, l=4")
    assert "Prover schedule" in out
    assert "Verifier schedule" in out


def test_cli_overrides_and_json(capsys):
    cli.main(["--preset", "minimal", "-n", "1000", "-k", "16", "-t", "666", "-l", "50",
              "--schedule-only", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["params"] == {"n": 1000, "k": 16, "t": 666, "l": 50}
    assert ["exp", "G1", 1084, 1] == data["prover"][0]


def test_cli_runs_simulation(toy, monkeypatch, capsys):
    monkeypatch.setattr(cli, "simulate_groth16",
                        lambda config: simulate_groth16(config, arithmetic=toy))
    assert cli.main(["--preset", "minimal", "--seed", "3", "--repeats", "2"]) == 0
    out = capsys.readouterr().out
    assert "Prover:" in out
    assert "over 2 runs" in out


def test_cli_rejects_bad_repeats(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--preset", "minimal", "--repeats", "0"])
