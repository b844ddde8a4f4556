import dataclasses
import random

import pytest

from groth16_sim.common.curve import Group
from groth16_sim.simulator.schedule import OpKind, ScheduleEntry, groth16_schedule
from groth16_sim.simulator.workload import (
    ResultSink,
    WorkloadBuilder,
    WorkloadItem,
    WorkloadKind,
    simulate,
)


def test_items_run_in_insertion_order(toy, rng):
    builder = WorkloadBuilder(rng, toy)
    builder.g1_exps(2).g2_multi_exps(num=1, size=3).pairings(1)
    a, b, c = builder.items

    builder.run()

    assert toy.calls == [
        ("scalar_mul", a.bases[0]),
        ("scalar_mul", a.bases[1]),
        ("multi_exp", Group.G2, 3),
        ("pairing", c.bases[0]),
    ]


def test_run_draws_no_randomness(toy, rng):
    builder = WorkloadBuilder(rng, toy).g1_exps(3).multi_pairings(2, 3)
    sampled = toy.sampled
    state = rng.getstate()

    builder.run()

    assert toy.sampled == sampled
    assert rng.getstate() == state


def test_operands_sampled_up_front(toy, rng):
    builder = WorkloadBuilder(rng, toy)
    builder.g1_multi_exps(num=5, size=4)
    item = builder.items[0]
    assert len(item.bases) == 4
    assert len(item.scalars) == 4
    assert toy.sampled == 8
    assert toy.calls == []


def test_multi_exps_repeat_over_same_operands(toy, rng):
    builder = WorkloadBuilder(rng, toy).g1_multi_exps(num=3, size=2)
    sink = builder.run()
    assert toy.calls == [("multi_exp", Group.G1, 2)] * 3
    assert sink.count == 3


def test_multi_pairings_repeat(toy, rng):
    sink = WorkloadBuilder(rng, toy).multi_pairings(num=2, size=3).run()
    assert toy.calls == [("multi_pairing", 3), ("multi_pairing", 3)]
    assert sink.count == 2


def test_every_result_reaches_the_sink(toy, rng):
    builder = WorkloadBuilder(rng, toy)
    builder.g1_exps(4).g2_exps(1).pairings(2)
    sink = ResultSink()

    returned = builder.run(sink)

    assert returned is sink
    assert sink.count == 7
    pair = builder.items[2]
    assert sink.last == pair.bases[1] * pair.partners[1] % (2**61 - 1)


def test_zero_sized_batches_are_no_ops(toy, rng):
    builder = WorkloadBuilder(rng, toy)
    builder.g1_exps(0).g1_multi_exps(num=0, size=5).pairings(0)
    builder.g1_multi_exps(num=2, size=0).multi_pairings(num=1, size=0)

    sink = builder.run()

    assert toy.calls == [
        ("multi_exp", Group.G1, 0),
        ("multi_exp", Group.G1, 0),
        ("multi_pairing", 0),
    ]
    assert sink.count == 3


def test_negative_counts_do_nothing(toy, rng):
    sink = WorkloadBuilder(rng, toy).g2_exps(-2).g1_multi_exps(-1, 3).run()
    assert sink.count == 0


def test_exponentiations_need_a_group(toy, rng):
    builder = WorkloadBuilder(rng, toy)
    with pytest.raises(ValueError, match="needs a group"):
        builder.add(WorkloadKind.MULTI_EXPONENTIATIONS, None, num=1, size=2)
    assert len(builder) == 0


def test_unknown_kind_is_rejected(toy):
    item = WorkloadItem("bogus", None, 1, 1, ())
    with pytest.raises(ValueError, match="unknown workload kind"):
        simulate(item, toy, ResultSink())


def test_mismatched_pairing_operands_fail_fast(toy):
    item = WorkloadItem(WorkloadKind.PAIRINGS, None, 2, 1, (1, 2), partners=(3,))
    with pytest.raises(ValueError, match="length mismatch"):
        simulate(item, toy, ResultSink())
    assert toy.calls == []


def test_items_are_immutable(toy, rng):
    item = WorkloadBuilder(rng, toy).g1_exps(1).items[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.num = 5


def test_add_entry_maps_schedule_kinds(toy, rng):
    builder = WorkloadBuilder(rng, toy)
    builder.add_entry(ScheduleEntry(OpKind.EXPONENTIATION, Group.G2, 3))
    builder.add_entry(ScheduleEntry(OpKind.MULTI_EXPONENTIATION, Group.G1, 4, 5))
    builder.add_entry(ScheduleEntry(OpKind.PAIRING, None, 2))
    builder.add_entry(ScheduleEntry(OpKind.MULTI_PAIRING, None, 1, 3))

    kinds = [(i.kind, i.group, i.num, i.size) for i in builder.items]
    assert kinds == [
        (WorkloadKind.EXPONENTIATIONS, Group.G2, 3, 1),
        (WorkloadKind.MULTI_EXPONENTIATIONS, Group.G1, 4, 5),
        (WorkloadKind.PAIRINGS, None, 2, 1),
        (WorkloadKind.MULTI_PAIRINGS, None, 1, 3),
    ]


def test_from_schedule_runs_every_entry(toy):
    _, verifier = groth16_schedule(2, 1, 2, 1)
    builder = WorkloadBuilder.from_schedule(verifier, random.Random(0), toy)
    assert len(builder) == len(verifier)

    builder.run()

    multi_exps = [c for c in toy.calls if c[0] == "multi_exp"]
    expected = sum(max(0, e.count) for e in verifier
                   if e.kind is OpKind.MULTI_EXPONENTIATION)
    assert len(multi_exps) == expected
    assert toy.calls[-1] == ("multi_pairing", 3)


def test_item_labels():
    item = WorkloadItem(WorkloadKind.MULTI_EXPONENTIATIONS, Group.G1, 2, 17, ())
    assert item.label() == "G1 multi_exps[17] x2"
    assert WorkloadItem(WorkloadKind.PAIRINGS, None, 4, 1, ()).label() == "pairings x4"
