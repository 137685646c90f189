"""Hierarchical weighted grading and eligibility evaluation."""

from .builder import ComponentLayout, GradeTreeBuilder
from .errors import ErrorKind, GradingError, IncompleteGrading, InvalidArgument, InvalidWeightDistribution, \
    MalformedTree
from .evaluator import EligibilityEvaluator
from .forest import Forest, ValidationReport, Violation
from .measure import collect_measurements
from .template import seed_subject, SubjectSchema

__all__ = [
    "ComponentLayout",
    "EligibilityEvaluator",
    "ErrorKind",
    "Forest",
    "GradeTreeBuilder",
    "GradingError",
    "IncompleteGrading",
    "InvalidArgument",
    "InvalidWeightDistribution",
    "MalformedTree",
    "SubjectSchema",
    "ValidationReport",
    "Violation",
    "collect_measurements",
    "seed_subject",
]
