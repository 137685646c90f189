__all__ = [
    # Base
    "BaseModel",
    "Record",
    # Enums
    "DeploymentEnvironment",
    "EvaluationStatus",
    "MeasurementSource",
    "Verdict",
    # ID Types
    "GradeComponentID",
    "SubjectCriterionID",
    "SubjectID",
    # Subjects
    "Subject",
    # Grading
    "GradeComponent",
    "SubjectCriterion",
    # Evaluation
    "CriterionOutcome",
    "EvaluationResult",
]

from .base import BaseModel, Record
from .criteria import SubjectCriterion
from .enum import DeploymentEnvironment, EvaluationStatus, MeasurementSource, Verdict
from .evaluation import CriterionOutcome, EvaluationResult
from .grade import GradeComponent
from .id import GradeComponentID, SubjectCriterionID, SubjectID
from .subject import Subject
