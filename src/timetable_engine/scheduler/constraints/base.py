"""Base class for constraint implementations."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from ..models import Conflict, TimetableEntry


class ConstraintBase(ABC):
    """Abstract base class for hard rules.

    A rule inspects one candidate entry against the entries already placed
    and reports at most one Conflict.
    """

    # Id of the HardConstraint definition this rule implements
    constraint_id: str = ""

    @abstractmethod
    def check(
        self, candidate: "TimetableEntry", placed: list["TimetableEntry"]
    ) -> "Conflict | None":
        """
        Check the candidate against the placed entries.

        Args:
            candidate: Entry being considered for placement.
            placed: Entries already accepted.

        Returns:
            A Conflict if the rule is violated, None otherwise.
        """
        pass

    def _conflict_id(self) -> str:
        return f"{self.constraint_id}-{uuid4().hex[:8]}"
