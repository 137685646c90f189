"""Weighted grade aggregation and pass/fail eligibility decisions."""

from __future__ import annotations

import decimal
import logging
import typing as t

from gradeworks.model import CriterionOutcome, EvaluationResult, EvaluationStatus, GradeComponent, \
    GradeComponentID, SubjectCriterion, SubjectCriterionID, Verdict

from .errors import IncompleteGrading, InvalidArgument, MalformedTree
from .forest import DefaultMaxDepth, Forest

logger = logging.getLogger(__name__)

MeasuredValues = t.Mapping[SubjectCriterionID, decimal.Decimal | int | float | str]


class EligibilityEvaluator(object):
    """Computes a subject grade from its forest and decides pass/fail.

    Pure over its arguments; holds no state between calls.
    """

    def __init__(self, max_depth: int = DefaultMaxDepth) -> None:
        self.max_depth = max_depth

    def compute_grade(self, forest: Forest | t.Iterable[GradeComponent]) -> decimal.Decimal:
        """Weight-normalized average over the roots, each root's value derived
        recursively from its children.

        Raises:
            InvalidArgument: the forest has no components
            MalformedTree: cycles, dangling parents or scored internal nodes
            IncompleteGrading: some leaf has no recorded score
        """
        forest = self._prepare(forest)

        missing = [leaf.component_id for leaf in forest.leaves if leaf.score is None]
        if missing:
            names = ", ".join(repr(forest[i].name) for i in missing)
            raise IncompleteGrading(f"{len(missing)} component(s) not yet graded: {names}", missing)

        grade = _weighted_mean([(self._value(forest, root), root.weight) for root in forest.roots])
        logger.debug("computed grade", extra={"grade": grade, "components": len(forest)})
        return grade

    def evaluate(
        self,
        forest: Forest | t.Iterable[GradeComponent],
        criteria: t.Sequence[SubjectCriterion],
        measured_values: MeasuredValues,
    ) -> EvaluationResult:
        """Grade the forest, then check every criterion in the order given.

        Unmeasured criteria fail. Any failing mandatory criterion fails the
        subject and the first one, in criteria order, is named as the reason;
        advisory criteria are reported but never change the verdict.
        """
        if forest is None or criteria is None or measured_values is None:
            raise InvalidArgument("forest, criteria and measured values are required")
        if not isinstance(forest, Forest):
            forest = Forest(forest)

        grade: decimal.Decimal | None = None
        if len(forest) == 0:
            if criteria:
                raise InvalidArgument(
                    f"cannot evaluate {len(criteria)} criteria for a subject without grade components"
                )
        else:
            try:
                grade = self.compute_grade(forest)
            except IncompleteGrading as e:
                logger.debug("evaluation deferred, grading incomplete", extra={"missing": len(e.missing)})
                return EvaluationResult(status=EvaluationStatus.Incomplete, missing_component_ids=list(e.missing))

        outcomes: list[CriterionOutcome] = []
        failure: CriterionOutcome | None = None
        for criterion in criteria:
            measured = _measured(measured_values, criterion)
            outcome = CriterionOutcome(
                criterion_id=criterion.criterion_id,
                name=criterion.name,
                measured=measured,
                threshold=criterion.min_score,
                passed=measured is not None and measured >= criterion.min_score,
                mandatory=criterion.is_mandatory,
            )
            outcomes.append(outcome)
            if failure is None and outcome.mandatory and not outcome.passed:
                failure = outcome

        if failure is None:
            result = EvaluationResult(
                status=EvaluationStatus.Complete, grade=grade, verdict=Verdict.Pass, outcomes=outcomes
            )
        else:
            if failure.measured is None:
                reason = f"{failure.name}: no measurement recorded"
            else:
                reason = f"{failure.name}: {failure.measured} is below the minimum of {failure.threshold}"
            result = EvaluationResult(
                status=EvaluationStatus.Complete,
                grade=grade,
                verdict=Verdict.Fail,
                outcomes=outcomes,
                reason=reason,
                failed_criterion_id=failure.criterion_id,
            )

        logger.debug(
            "evaluated eligibility",
            extra={"verdict": result.verdict, "grade": grade, "advisories": len(result.advisories)},
        )
        return result

    def _prepare(self, forest: Forest | t.Iterable[GradeComponent]) -> Forest:
        if forest is None:
            raise InvalidArgument("forest is required")
        if not isinstance(forest, Forest):
            forest = Forest(forest)
        if len(forest) == 0:
            raise InvalidArgument("cannot compute a grade without grade components")
        if violations := forest.weight_violations():
            raise InvalidArgument("; ".join(v.message for v in violations), violations)
        if violations := forest.structural_violations(self.max_depth):
            raise MalformedTree("; ".join(v.message for v in violations), violations)
        return forest

    def _value(self, forest: Forest, component: GradeComponent) -> decimal.Decimal:
        children = forest.children(component.component_id)
        if not children:
            assert component.score is not None
            return component.score
        return _weighted_mean([(self._value(forest, child), child.weight) for child in children])


def _weighted_mean(values: t.Sequence[tuple[decimal.Decimal, int]]) -> decimal.Decimal:
    total_weight = sum(weight for _, weight in values)
    if total_weight == 0:
        # a zero-weight node still has a well-defined value: its plain average
        return sum((value for value, _ in values), decimal.Decimal(0)) / len(values)
    return sum((value * weight for value, weight in values), decimal.Decimal(0)) / total_weight


def _measured(measured_values: MeasuredValues, criterion: SubjectCriterion) -> decimal.Decimal | None:
    raw = measured_values.get(criterion.criterion_id)
    if raw is None:
        return None
    try:
        value = raw if isinstance(raw, decimal.Decimal) else decimal.Decimal(str(raw))
    except decimal.InvalidOperation as e:
        raise InvalidArgument(f"measured value for {criterion.name!r} is not a number: {raw!r}") from e
    if not value.is_finite():
        raise InvalidArgument(f"measured value for {criterion.name!r} must be finite, got {raw!r}")
    return value
