import enum


class DeploymentEnvironment(enum.Enum):
    Production = "production"
    Development = "development"
    Staging = "staging"
    Test = "test"
    Local = "local"


class MeasurementSource(enum.Enum):
    External = "external"
    AverageGrade = "average_grade"
    LowestComponent = "lowest_component"


class EvaluationStatus(enum.Enum):
    Complete = "complete"
    Incomplete = "incomplete"


class Verdict(enum.Enum):
    Pass = "pass"
    Fail = "fail"
