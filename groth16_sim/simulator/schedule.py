"""
Groth16 Operation Cost Model.

This module translates Groth16 circuit parameters into the group operations
a prover and a verifier have to perform. The output is an operation
schedule: an ordered list of entries, each one reading

    "call <kind> in <group> <count> times, each call over <size> operands"

Operation kinds:
    - EXPONENTIATION: single scalar multiplication (size is always 1)
    - MULTI_EXPONENTIATION: weighted sum of ``size`` group elements
    - PAIRING: one full pairing (size is always 1)
    - MULTI_PAIRING: product of ``size`` pairings, one final exponentiation

The schedule says nothing about how long each operation takes; the timing
harness in ``core`` executes it against real curve arithmetic for that.

Parameters:
    n: multiplication gates, k: public inputs,
    t: evaluation-domain degree bound, l: output wires
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..common.curve import Group
from .params import Groth16Params


class OpKind(Enum):
    """Kinds of group operation a schedule can ask for."""
    EXPONENTIATION = "exp"
    MULTI_EXPONENTIATION = "multi_exp"
    PAIRING = "pairing"
    MULTI_PAIRING = "multi_pairing"

    @property
    def needs_group(self) -> bool:
        return self in (OpKind.EXPONENTIATION, OpKind.MULTI_EXPONENTIATION)


@dataclass(frozen=True)
class ScheduleEntry:
    """
    One line of an operation schedule.

    Attributes:
        kind: Operation kind
        group: Source group (None for pairing kinds)
        count: How many times the operation is called
        size: Operands per call (1 for exponentiations and pairings)
    """
    kind: OpKind
    group: Optional[Group]
    count: int
    size: int = 1

    @property
    def is_empty(self) -> bool:
        """True when the entry contributes no work."""
        return self.count <= 0 or self.size <= 0

    def label(self) -> str:
        where = f"{self.group.name} " if self.group is not None else ""
        if self.kind in (OpKind.EXPONENTIATION, OpKind.PAIRING):
            return f"{where}{self.kind.value} x{self.count}"
        return f"{where}{self.kind.value}[{self.size}] x{self.count}"


@dataclass
class OperationSchedule:
    """
    Ordered list of schedule entries for one party (prover or verifier).

    Example:
        >>> prover, verifier = groth16_schedule(0, 0, 0, 0)
        >>> prover.exponentiations(Group.G1)
        2
        >>> verifier.multi_pairings()
        [(1, 3)]
    """
    name: str
    entries: List[ScheduleEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    # Builders

    def add_exps(self, group: Group, count: int) -> OperationSchedule:
        self.entries.append(ScheduleEntry(OpKind.EXPONENTIATION, group, count))
        return self

    def add_multi_exps(self, group: Group, count: int, size: int) -> OperationSchedule:
        self.entries.append(ScheduleEntry(OpKind.MULTI_EXPONENTIATION, group, count, size))
        return self

    def add_pairings(self, count: int) -> OperationSchedule:
        self.entries.append(ScheduleEntry(OpKind.PAIRING, None, count))
        return self

    def add_multi_pairings(self, count: int, size: int) -> OperationSchedule:
        self.entries.append(ScheduleEntry(OpKind.MULTI_PAIRING, None, count, size))
        return self

    # Queries

    def entries_of(self, kind: OpKind, group: Optional[Group] = None) -> List[ScheduleEntry]:
        return [e for e in self.entries
                if e.kind is kind and (group is None or e.group is group)]

    def exponentiations(self, group: Group) -> int:
        """Total single exponentiations in ``group``."""
        return sum(e.count for e in self.entries_of(OpKind.EXPONENTIATION, group))

    def multi_exponentiations(self, group: Group) -> List[Tuple[int, int]]:
        """(count, size) of each multi-exp entry in ``group``, in order."""
        return [(e.count, e.size)
                for e in self.entries_of(OpKind.MULTI_EXPONENTIATION, group)]

    def pairings(self) -> int:
        """Total single pairings."""
        return sum(e.count for e in self.entries_of(OpKind.PAIRING))

    def multi_pairings(self) -> List[Tuple[int, int]]:
        return [(e.count, e.size) for e in self.entries_of(OpKind.MULTI_PAIRING)]

    def shape(self) -> List[Tuple[str, Optional[str], int, int]]:
        """Plain-tuple view of the schedule, handy for comparisons."""
        return [(e.kind.value, e.group.name if e.group else None, e.count, e.size)
                for e in self.entries]

    def summary(self) -> str:
        lines = [f"{self.name} schedule ({len(self.entries)} entries):"]
        for entry in self.entries:
            marker = " (no-op)" if entry.is_empty else ""
            lines.append(f"  {entry.label()}{marker}")
        return "\n".join(lines)


def groth16_schedule(n: int, k: int, t: int, l: int) -> Tuple[OperationSchedule, OperationSchedule]:
    """
    Operation schedules of a Groth16 prover and verifier.

    Args:
        n: Multiplication gate count
        k: Public input count
        t: Evaluation-domain degree bound
        l: Output wire count

    Returns:
        (prover, verifier) schedules. Inputs are not validated; degenerate
        values give schedules with empty (no-op) entries.

    Example:
        >>> prover, _ = groth16_schedule(1000, 16, 666, 50)
        >>> prover.exponentiations(Group.G1)
        1084
    """
    prover = (
        OperationSchedule("Prover")
        .add_exps(Group.G1, n + 2 * k + l + 2)
        .add_multi_exps(Group.G1, 2, n)
        .add_multi_exps(Group.G1, n * k + n + k + l + 1, 2)
        .add_exps(Group.G2, t + 1)
        .add_pairings(0)
    )

    verifier = (
        OperationSchedule("Verifier")
        .add_exps(Group.G1, n + 2)
        .add_multi_exps(Group.G1, 1, 2)
        .add_multi_exps(Group.G1, 2, n + 1)
        .add_multi_exps(Group.G1, n, k + 1)
        .add_multi_exps(Group.G1, 1, l + 1)
        .add_multi_exps(Group.G1, 1, k * n * l + l + 1)
        .add_multi_exps(Group.G1, 1, n + 2)
        .add_multi_exps(Group.G1, 2, k)
        .add_exps(Group.G2, 1)
        .add_multi_exps(Group.G2, 1, t + 1)
        .add_multi_exps(Group.G2, 1, k)
        .add_pairings(0)
        # Three pairings folded into one multi-pairing. Folding costs one
        # extra field inversion, which is not charged here.
        .add_multi_pairings(1, 3)
    )

    return prover, verifier


def groth16_schedule_for(params: Groth16Params) -> Tuple[OperationSchedule, OperationSchedule]:
    """``groth16_schedule`` taking a ``Groth16Params``."""
    return groth16_schedule(params.n, params.k, params.t, params.l)
