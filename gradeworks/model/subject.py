from .base import Record
from .id import SubjectID


class Subject(Record):
    subject_id: SubjectID
    code: str
    name: str
