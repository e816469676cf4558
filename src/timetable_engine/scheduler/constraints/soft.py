"""Soft constraint definitions for the scheduler.

Soft constraints are preferences that should be satisfied when possible.
The greedy scheduler and the coverage score do not consult them yet; they
are held here so the constraint manager can edit them and a searching
solver can weigh them.
"""

from ..constants import DEFAULT_SOFT_CONSTRAINTS, MAX_SOFT_WEIGHT, MIN_SOFT_WEIGHT
from ..models import SoftConstraint


class SoftConstraints:
    """Collection of weighted soft constraints."""

    def __init__(self, constraints: list[SoftConstraint] | None = None):
        if constraints is None:
            constraints = [SoftConstraint.from_dict(c) for c in DEFAULT_SOFT_CONSTRAINTS]
        for constraint in constraints:
            self._validate(constraint)
        self.constraints = constraints

    @staticmethod
    def _validate(constraint: SoftConstraint) -> None:
        if not MIN_SOFT_WEIGHT <= constraint.weight <= MAX_SOFT_WEIGHT:
            raise ValueError(
                f"Soft constraint '{constraint.id}' weight {constraint.weight} "
                f"outside {MIN_SOFT_WEIGHT}-{MAX_SOFT_WEIGHT}"
            )

    def get_enabled(self) -> list[SoftConstraint]:
        """Get enabled soft constraints."""
        return [c for c in self.constraints if c.enabled]

    def get_weights(self) -> dict[str, int]:
        """Map of enabled constraint id to weight."""
        return {c.id: c.weight for c in self.get_enabled()}
