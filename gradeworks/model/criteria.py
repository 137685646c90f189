import decimal

import pydantic as p

from .base import Record
from .enum import MeasurementSource
from .id import SubjectCriterionID, SubjectID


class SubjectCriterion(Record):
    criterion_id: SubjectCriterionID
    subject_id: SubjectID

    name: str
    description: str = ""
    min_score: decimal.Decimal = p.Field(ge=0, allow_inf_nan=False)
    is_mandatory: bool = True

    # only consulted when collecting measurements, never by the evaluator
    source: MeasurementSource = MeasurementSource.External
