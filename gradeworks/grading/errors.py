"""Exceptions for grading operations."""

from __future__ import annotations

import enum
import typing as t

if t.TYPE_CHECKING:
    from gradeworks.model import GradeComponentID

    from .forest import Violation


class ErrorKind(enum.Enum):
    InvalidWeightDistribution = "invalid_weight_distribution"
    InvalidArgument = "invalid_argument"
    IncompleteGrading = "incomplete_grading"
    MalformedTree = "malformed_tree"


class GradingError(Exception):
    """Error raised by the grade tree builder or the eligibility evaluator."""

    kind: t.ClassVar[ErrorKind]

    def __init__(self, message: str, violations: t.Sequence[Violation] = ()) -> None:
        super().__init__(message)
        self.violations = tuple(violations)


class InvalidWeightDistribution(GradingError):
    """Sibling weights do not sum to the required total."""

    kind = ErrorKind.InvalidWeightDistribution


class InvalidArgument(GradingError, ValueError):
    """Malformed input to a builder or evaluator call."""

    kind = ErrorKind.InvalidArgument


class IncompleteGrading(GradingError):
    """A leaf needed for the grade has no recorded score yet.

    This is the expected "not ready" state, not a defect.
    """

    kind = ErrorKind.IncompleteGrading

    def __init__(self, message: str, missing: t.Sequence[GradeComponentID] = ()) -> None:
        super().__init__(message)
        self.missing = tuple(missing)


class MalformedTree(GradingError):
    """Cycle, self-parenting or dangling parent reference."""

    kind = ErrorKind.MalformedTree


ErrorTypes: dict[ErrorKind, type[GradingError]] = {
    ErrorKind.InvalidWeightDistribution: InvalidWeightDistribution,
    ErrorKind.InvalidArgument: InvalidArgument,
    ErrorKind.IncompleteGrading: IncompleteGrading,
    ErrorKind.MalformedTree: MalformedTree,
}
