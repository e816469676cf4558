"""Constraint implementations for the scheduler."""

from .base import ConstraintBase
from .hard import (
    BatchClashConstraint,
    FacultyClashConstraint,
    HardConstraints,
    RoomCapacityConstraint,
    RoomClashConstraint,
)
from .soft import SoftConstraints

__all__ = [
    "ConstraintBase",
    "HardConstraints",
    "SoftConstraints",
    "FacultyClashConstraint",
    "RoomClashConstraint",
    "BatchClashConstraint",
    "RoomCapacityConstraint",
]
