"""Derive criterion measured values from a graded forest."""

from __future__ import annotations

import decimal
import typing as t

from gradeworks.model import GradeComponent, MeasurementSource, SubjectCriterion, SubjectCriterionID

from .errors import IncompleteGrading
from .evaluator import EligibilityEvaluator, MeasuredValues
from .forest import Forest


def lowest_leaf_score(forest: Forest) -> decimal.Decimal | None:
    scores = [leaf.score for leaf in forest.leaves]
    if not scores or any(s is None for s in scores):
        return None
    return min(t.cast(list[decimal.Decimal], scores))


def collect_measurements(
    forest: Forest | t.Iterable[GradeComponent],
    criteria: t.Sequence[SubjectCriterion],
    external: MeasuredValues | None = None,
    *,
    evaluator: EligibilityEvaluator | None = None,
) -> dict[SubjectCriterionID, decimal.Decimal | int | float | str]:
    """Build the measured-values mapping for ``EligibilityEvaluator.evaluate``.

    Tree-derived criteria get the computed grade or the lowest leaf score;
    everything else is copied from ``external``. Values that cannot be measured
    yet are left out, so the evaluator fails those criteria closed.
    """
    if not isinstance(forest, Forest):
        forest = Forest(forest)
    evaluator = evaluator or EligibilityEvaluator()
    external = external or {}

    grade: decimal.Decimal | None = None
    if any(c.source is MeasurementSource.AverageGrade for c in criteria) and len(forest):
        try:
            grade = evaluator.compute_grade(forest)
        except IncompleteGrading:
            grade = None

    measurements: dict[SubjectCriterionID, decimal.Decimal | int | float | str] = {}
    for criterion in criteria:
        value: decimal.Decimal | int | float | str | None
        match criterion.source:
            case MeasurementSource.AverageGrade:
                value = grade
            case MeasurementSource.LowestComponent:
                value = lowest_leaf_score(forest)
            case MeasurementSource.External:
                value = external.get(criterion.criterion_id)
        if value is not None:
            measurements[criterion.criterion_id] = value
    return measurements
