"""Conflict detection for schedule generation."""

import logging

from .constants import DEFAULT_HARD_CONSTRAINTS
from .constraints import HardConstraints
from .models import Conflict, HardConstraint, TimetableEntry

logger = logging.getLogger(__name__)


def default_hard_constraints() -> list[HardConstraint]:
    """Fresh copies of the default hard constraint definitions."""
    return [HardConstraint.from_dict(c) for c in DEFAULT_HARD_CONSTRAINTS]


class ConflictChecker:
    """Reports every hard-rule violation of a candidate entry.

    Rules run in a fixed order: faculty clash, room clash, batch clash,
    room capacity. Each violated rule yields one Conflict (the first
    clashing entry is reported). A rule is skipped when its HardConstraint
    definition is disabled. Definitions without a rule (such as
    faculty-availability) are not enforced.

    The checker never mutates the candidate or the placed entries.
    """

    def __init__(self, hard_constraints: list[HardConstraint] | None = None) -> None:
        if hard_constraints is None:
            hard_constraints = default_hard_constraints()
        self.hard_constraints = hard_constraints

        disabled = {c.id for c in hard_constraints if not c.enabled}
        self._rules = HardConstraints(disabled=disabled)

        unenforced = [
            c.id
            for c in hard_constraints
            if c.enabled and c.id not in HardConstraints.rule_ids()
        ]
        if unenforced:
            logger.debug(f"No checking rule for hard constraints: {', '.join(unenforced)}")

    def check(
        self, candidate: TimetableEntry, placed: list[TimetableEntry]
    ) -> list[Conflict]:
        """Check a candidate against the already-placed entries.

        Args:
            candidate: Entry being considered
            placed: Entries already accepted

        Returns:
            List of conflicts, empty if the candidate is feasible
        """
        return self._rules.apply(candidate, placed)

    def is_feasible(self, candidate: TimetableEntry, placed: list[TimetableEntry]) -> bool:
        """Check if the candidate violates no hard rule."""
        return not self.check(candidate, placed)
