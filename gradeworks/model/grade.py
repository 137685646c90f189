from __future__ import annotations

import decimal

import pydantic as p

from .base import Record
from .id import GradeComponentID, SubjectID


class GradeComponent(Record):
    """A node in a subject's weighted grade forest.

    Weight is a whole percentage of the parent (or of the subject, for roots).
    Only leaves carry a score; an internal node's value is always derived.
    Range checks on weight are left to validation so that records supplied by
    persistence can be reported on rather than rejected outright.
    """

    component_id: GradeComponentID
    subject_id: SubjectID
    name: str
    weight: int
    parent_id: GradeComponentID | None = None
    score: decimal.Decimal | None = p.Field(default=None, allow_inf_nan=False)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def with_score(self, score: decimal.Decimal | int | str | None) -> GradeComponent:
        value = None if score is None else decimal.Decimal(score)
        return GradeComponent.model_validate({**self.model_dump(), "score": value})
