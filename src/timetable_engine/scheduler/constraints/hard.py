"""Hard constraint implementations for the scheduler.

Hard constraints are mandatory requirements that must never be violated.
A candidate violating any hard constraint is rejected.

Hard Constraints:
- no-faculty-clash: Faculty single allocation per (day, period)
- no-room-clash: Room single allocation per (day, period)
- no-batch-clash: Batch single allocation per (day, period)
- room-capacity: Room capacity must fit the batch
"""

from ..constants import BATCH_CLASH, FACULTY_CLASH, ROOM_CAPACITY, ROOM_CLASH
from ..models import Conflict, ConflictType, Severity, TimetableEntry
from .base import ConstraintBase


def _find_clash(
    placed: list[TimetableEntry], candidate: TimetableEntry, attribute: str
) -> TimetableEntry | None:
    """Find the first placed entry sharing the resource and slot."""
    resource_id = getattr(candidate, attribute).id
    day = candidate.time_slot.day
    period = candidate.time_slot.period
    for entry in placed:
        if getattr(entry, attribute).id == resource_id and entry.occupies(day, period):
            return entry
    return None


class FacultyClashConstraint(ConstraintBase):
    """A faculty member can only teach one class at any given slot."""

    constraint_id = FACULTY_CLASH

    def check(
        self, candidate: TimetableEntry, placed: list[TimetableEntry]
    ) -> Conflict | None:
        clash = _find_clash(placed, candidate, "faculty")
        if clash is None:
            return None
        return Conflict(
            id=self._conflict_id(),
            type=ConflictType.FACULTY_CLASH,
            description=(
                f"Faculty {candidate.faculty.name} is already assigned to "
                f"{clash.subject.name}"
            ),
            severity=Severity.HIGH,
            affected_entries=[candidate.id, clash.id],
            suggestions=["Assign different faculty", "Change time slot"],
        )


class RoomClashConstraint(ConstraintBase):
    """A room can only host one class at any given slot."""

    constraint_id = ROOM_CLASH

    def check(
        self, candidate: TimetableEntry, placed: list[TimetableEntry]
    ) -> Conflict | None:
        clash = _find_clash(placed, candidate, "room")
        if clash is None:
            return None
        return Conflict(
            id=self._conflict_id(),
            type=ConflictType.ROOM_CLASH,
            description=(
                f"Room {candidate.room.name} is already occupied by {clash.subject.name}"
            ),
            severity=Severity.HIGH,
            affected_entries=[candidate.id, clash.id],
            suggestions=["Assign different room", "Change time slot"],
        )


class BatchClashConstraint(ConstraintBase):
    """A batch can only attend one class at any given slot."""

    constraint_id = BATCH_CLASH

    def check(
        self, candidate: TimetableEntry, placed: list[TimetableEntry]
    ) -> Conflict | None:
        clash = _find_clash(placed, candidate, "batch")
        if clash is None:
            return None
        return Conflict(
            id=self._conflict_id(),
            type=ConflictType.BATCH_CLASH,
            description=f"Batch {candidate.batch.name} already has {clash.subject.name}",
            severity=Severity.HIGH,
            affected_entries=[candidate.id, clash.id],
            suggestions=["Change time slot", "Split batch"],
        )


class RoomCapacityConstraint(ConstraintBase):
    """Room capacity must be at least the batch size."""

    constraint_id = ROOM_CAPACITY

    def check(
        self, candidate: TimetableEntry, placed: list[TimetableEntry]
    ) -> Conflict | None:
        if candidate.room.capacity >= candidate.batch.size:
            return None
        return Conflict(
            id=self._conflict_id(),
            type=ConflictType.CONSTRAINT_VIOLATION,
            description=(
                f"Room capacity ({candidate.room.capacity}) insufficient for "
                f"batch size ({candidate.batch.size})"
            ),
            severity=Severity.HIGH,
            affected_entries=[candidate.id],
            suggestions=["Assign larger room", "Split batch"],
        )


class HardConstraints:
    """The registered hard rules, in checking order."""

    RULES: list[type[ConstraintBase]] = [
        FacultyClashConstraint,
        RoomClashConstraint,
        BatchClashConstraint,
        RoomCapacityConstraint,
    ]

    def __init__(self, disabled: set[str] | None = None):
        """
        Initialize the rule set.

        Args:
            disabled: Constraint ids whose rules are skipped.
        """
        disabled = disabled or set()
        self.rules: list[ConstraintBase] = [
            rule() for rule in self.RULES if rule.constraint_id not in disabled
        ]

    @classmethod
    def rule_ids(cls) -> list[str]:
        """Ids of constraints that have a checking rule."""
        return [rule.constraint_id for rule in cls.RULES]

    def apply(
        self, candidate: TimetableEntry, placed: list[TimetableEntry]
    ) -> list[Conflict]:
        """Run every rule and collect the violations."""
        conflicts = []
        for rule in self.rules:
            conflict = rule.check(candidate, placed)
            if conflict is not None:
                conflicts.append(conflict)
        return conflicts
