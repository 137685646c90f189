import decimal

from .base import BaseModel, Record
from .enum import EvaluationStatus, Verdict
from .id import GradeComponentID, SubjectCriterionID


class CriterionOutcome(Record):
    criterion_id: SubjectCriterionID
    name: str
    measured: decimal.Decimal | None
    threshold: decimal.Decimal
    passed: bool
    mandatory: bool


class EvaluationResult(BaseModel):
    status: EvaluationStatus
    grade: decimal.Decimal | None = None
    verdict: Verdict | None = None
    outcomes: list[CriterionOutcome] = []
    reason: str | None = None
    failed_criterion_id: SubjectCriterionID | None = None
    missing_component_ids: list[GradeComponentID] = []

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.Pass

    @property
    def advisories(self) -> list[CriterionOutcome]:
        """Failed criteria that did not block the verdict."""
        return [o for o in self.outcomes if not o.mandatory and not o.passed]
