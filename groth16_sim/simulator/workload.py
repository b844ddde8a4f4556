"""
Group-Operation Workloads.

A workload is an ordered list of items, each item holding pre-sampled random
operands for one kind of group operation:

    - EXPONENTIATIONS: N independent (base, scalar) scalar multiplications
    - MULTI_EXPONENTIATIONS: one size-``size`` multi-exp, repeated ``num`` times
    - PAIRINGS: N independent pairings of (G1, G2) affine points
    - MULTI_PAIRINGS: one size-``size`` multi-pairing, repeated ``num`` times

All randomness is spent while building items, so running a workload only
costs group arithmetic. Every result is handed to a ``ResultSink``, which
keeps the computed values observably used.

Usage:
    >>> import random
    >>> builder = WorkloadBuilder(random.Random(1))
    >>> _ = builder.g1_exps(3).g1_multi_exps(num=2, size=4).multi_pairings(1, 3)
    >>> sink = builder.run()
    >>> sink.count
    6
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple
import logging
import random

from ..common.curve import (
    BLS12381Arithmetic,
    Group,
    GroupArithmetic,
    check_same_length,
)
from .schedule import OpKind, OperationSchedule, ScheduleEntry


logger = logging.getLogger(__name__)


class WorkloadKind(Enum):
    """Tag of a workload item."""
    EXPONENTIATIONS = "exps"
    MULTI_EXPONENTIATIONS = "multi_exps"
    PAIRINGS = "pairings"
    MULTI_PAIRINGS = "multi_pairings"


# Schedule operation kind -> workload item kind
KIND_FOR_OP = {
    OpKind.EXPONENTIATION: WorkloadKind.EXPONENTIATIONS,
    OpKind.MULTI_EXPONENTIATION: WorkloadKind.MULTI_EXPONENTIATIONS,
    OpKind.PAIRING: WorkloadKind.PAIRINGS,
    OpKind.MULTI_PAIRING: WorkloadKind.MULTI_PAIRINGS,
}


class ResultSink:
    """
    Receives every result computed by a workload.

    The sink counts results and holds on to the latest one, so nothing a
    workload computes is ever dead.
    """

    def __init__(self):
        self.count = 0
        self.last: Any = None

    def consume(self, value: Any) -> None:
        self.count += 1
        self.last = value

    def __repr__(self) -> str:
        return f"ResultSink(count={self.count})"


@dataclass(frozen=True)
class WorkloadItem:
    """
    Pre-sampled operands for one batch of group operations.

    Attributes:
        kind: Which operation the item runs
        group: Source group for exponentiation kinds, None for pairings
        num: Number of calls (exps / pairings: one per operand)
        size: Operands per call
        bases: Group elements (G1 elements for pairing kinds)
        scalars: Scalars, exponentiation kinds only
        partners: G2 elements, pairing kinds only
    """
    kind: WorkloadKind
    group: Optional[Group]
    num: int
    size: int
    bases: Tuple[Any, ...]
    scalars: Tuple[int, ...] = ()
    partners: Tuple[Any, ...] = ()

    @property
    def num_calls(self) -> int:
        """Primitive operations ``simulate`` will issue."""
        return max(0, self.num)

    def label(self) -> str:
        where = f"{self.group.name} " if self.group is not None else ""
        if self.kind in (WorkloadKind.EXPONENTIATIONS, WorkloadKind.PAIRINGS):
            return f"{where}{self.kind.value} x{self.num}"
        return f"{where}{self.kind.value}[{self.size}] x{self.num}"


# =============================================================================
# ITEM CONSTRUCTION
# =============================================================================

def make_exponentiations(arithmetic: GroupArithmetic, rng: random.Random,
                         group: Group, num: int) -> WorkloadItem:
    bases = tuple(arithmetic.random_point(group, rng) for _ in range(num))
    scalars = tuple(arithmetic.random_scalar(rng) for _ in range(num))
    return WorkloadItem(WorkloadKind.EXPONENTIATIONS, group, num, 1, bases, scalars)


def make_multi_exponentiations(arithmetic: GroupArithmetic, rng: random.Random,
                               group: Group, num: int, size: int) -> WorkloadItem:
    bases = tuple(arithmetic.random_point(group, rng) for _ in range(size))
    scalars = tuple(arithmetic.random_scalar(rng) for _ in range(size))
    return WorkloadItem(WorkloadKind.MULTI_EXPONENTIATIONS, group, num, size,
                        bases, scalars)


def make_pairings(arithmetic: GroupArithmetic, rng: random.Random,
                  num: int) -> WorkloadItem:
    """Pairing operands are stored in affine form, ready to pair."""
    g1s = tuple(arithmetic.to_affine(arithmetic.random_point(Group.G1, rng))
                for _ in range(num))
    g2s = tuple(arithmetic.to_affine(arithmetic.random_point(Group.G2, rng))
                for _ in range(num))
    return WorkloadItem(WorkloadKind.PAIRINGS, None, num, 1, g1s, partners=g2s)


def make_multi_pairings(arithmetic: GroupArithmetic, rng: random.Random, num: int,
                        size: int) -> WorkloadItem:
    """
    Multi-pairing operands stay projective; the affine conversion is part of
    every multi-pairing call and so part of what gets timed.
    """
    g1s = tuple(arithmetic.random_point(Group.G1, rng) for _ in range(size))
    g2s = tuple(arithmetic.random_point(Group.G2, rng) for _ in range(size))
    return WorkloadItem(WorkloadKind.MULTI_PAIRINGS, None, num, size, g1s, partners=g2s)


# =============================================================================
# SIMULATION
# =============================================================================

def simulate(item: WorkloadItem, arithmetic: GroupArithmetic,
             sink: ResultSink) -> None:
    """
    Run the group operations described by ``item``.

    Dispatches on the item's kind. Results go to ``sink``; nothing is
    returned.

    Raises:
        ValueError: On an unknown kind or mismatched operand lengths
    """
    if item.kind is WorkloadKind.EXPONENTIATIONS:
        check_same_length(item.bases, item.scalars, "exponentiations")
        for base, scalar in zip(item.bases, item.scalars):
            sink.consume(arithmetic.scalar_mul(base, scalar))

    elif item.kind is WorkloadKind.MULTI_EXPONENTIATIONS:
        for _ in range(item.num):
            sink.consume(arithmetic.multi_exp(item.group, item.bases, item.scalars))

    elif item.kind is WorkloadKind.PAIRINGS:
        check_same_length(item.bases, item.partners, "pairings")
        for g1, g2 in zip(item.bases, item.partners):
            sink.consume(arithmetic.pairing(g1, g2))

    elif item.kind is WorkloadKind.MULTI_PAIRINGS:
        for _ in range(item.num):
            sink.consume(arithmetic.multi_pairing(item.bases, item.partners))

    else:
        raise ValueError(f"unknown workload kind: {item.kind!r}")


# =============================================================================
# BUILDER
# =============================================================================

class WorkloadBuilder:
    """
    Accumulates workload items against one random source and runs them.

    Items run in the order they were added, one after the other. The
    builder does no timing itself; wrap ``run()`` to measure it (see
    ``core.time_workload``).

    Args:
        rng: Random source, used by this builder only
        arithmetic: Group arithmetic provider (BLS12-381 by default)

    Example:
        >>> builder = WorkloadBuilder(random.Random(0))
        >>> _ = builder.g1_exps(2).pairings(1)
        >>> len(builder)
        2
    """

    def __init__(self, rng: random.Random,
                 arithmetic: Optional[GroupArithmetic] = None):
        self._rng = rng
        self.arithmetic: GroupArithmetic = (
            arithmetic if arithmetic is not None else BLS12381Arithmetic())
        self._items: List[WorkloadItem] = []

    @classmethod
    def from_schedule(cls, schedule: OperationSchedule, rng: random.Random,
                      arithmetic: Optional[GroupArithmetic] = None) -> WorkloadBuilder:
        """Builder holding one item per entry of ``schedule``."""
        return cls(rng, arithmetic).extend(schedule)

    @property
    def items(self) -> Tuple[WorkloadItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, kind: WorkloadKind, group: Optional[Group] = None,
            num: int = 0, size: int = 1) -> WorkloadBuilder:
        """
        Sample operands for a new item and append it.

        Args:
            kind: Item kind
            group: Source group, required for exponentiation kinds
            num: Number of calls
            size: Operands per call (multi kinds only)
        """
        arith, rng = self.arithmetic, self._rng

        if kind in (WorkloadKind.EXPONENTIATIONS, WorkloadKind.MULTI_EXPONENTIATIONS):
            if group is None:
                raise ValueError(f"{kind.value} needs a group (G1 or G2)")

        if kind is WorkloadKind.EXPONENTIATIONS:
            item = make_exponentiations(arith, rng, group, num)
        elif kind is WorkloadKind.MULTI_EXPONENTIATIONS:
            item = make_multi_exponentiations(arith, rng, group, num, size)
        elif kind is WorkloadKind.PAIRINGS:
            item = make_pairings(arith, rng, num)
        elif kind is WorkloadKind.MULTI_PAIRINGS:
            item = make_multi_pairings(arith, rng, num, size)
        else:
            raise ValueError(f"unknown workload kind: {kind!r}")

        logger.debug("added workload item %s", item.label())
        self._items.append(item)
        return self

    # Convenience methods

    def g1_exps(self, num: int) -> WorkloadBuilder:
        return self.add(WorkloadKind.EXPONENTIATIONS, Group.G1, num)

    def g2_exps(self, num: int) -> WorkloadBuilder:
        return self.add(WorkloadKind.EXPONENTIATIONS, Group.G2, num)

    def g1_multi_exps(self, num: int, size: int) -> WorkloadBuilder:
        return self.add(WorkloadKind.MULTI_EXPONENTIATIONS, Group.G1, num, size)

    def g2_multi_exps(self, num: int, size: int) -> WorkloadBuilder:
        return self.add(WorkloadKind.MULTI_EXPONENTIATIONS, Group.G2, num, size)

    def pairings(self, num: int) -> WorkloadBuilder:
        return self.add(WorkloadKind.PAIRINGS, None, num)

    def multi_pairings(self, num: int, size: int) -> WorkloadBuilder:
        return self.add(WorkloadKind.MULTI_PAIRINGS, None, num, size)

    def add_entry(self, entry: ScheduleEntry) -> WorkloadBuilder:
        """Append the item matching one schedule entry."""
        return self.add(KIND_FOR_OP[entry.kind], entry.group, entry.count, entry.size)

    def extend(self, schedule: OperationSchedule) -> WorkloadBuilder:
        for entry in schedule:
            self.add_entry(entry)
        return self

    def run(self, sink: Optional[ResultSink] = None) -> ResultSink:
        """
        Simulate every item in insertion order.

        Returns:
            The sink that received the results
        """
        if sink is None:
            sink = ResultSink()
        logger.debug("running %d workload items", len(self._items))
        for item in self._items:
            simulate(item, self.arithmetic, sink)
        return sink
