"""Default grading schemas for new subjects, chosen by subject code.

The structure template depends on whether the subject is practical (lab or
project work) or theory. Criteria are the base requirements every subject has,
followed by those of each category whose code prefix matches.
"""

from __future__ import annotations

import decimal
import logging
import typing as t

from gradeworks.model import BaseModel, GradeComponent, MeasurementSource, Subject, SubjectCriterion, \
    SubjectCriterionID

from .builder import ComponentLayout, GradeTreeBuilder

logger = logging.getLogger(__name__)


class CriterionTemplate(t.NamedTuple):
    name: str
    description: str
    min_score: str
    is_mandatory: bool = True
    source: MeasurementSource = MeasurementSource.External


class CriteriaCategory(t.NamedTuple):
    name: str
    prefixes: tuple[str, ...]
    criteria: tuple[CriterionTemplate, ...]


class SubjectSchema(BaseModel):
    subject: Subject
    components: list[GradeComponent]
    criteria: list[SubjectCriterion]


PracticalMarkers = ("LAB", "PRJ")

PracticalStructure: tuple[ComponentLayout, ...] = (
    ComponentLayout("Lab Exercises", 30, ("Lab 1", "Lab 2")),
    ComponentLayout("Midterm Exam", 30),
    ComponentLayout("Final Exam", 40),
)

TheoryStructure: tuple[ComponentLayout, ...] = (
    ComponentLayout("Assignments", 20, ("Assignment 1", "Assignment 2")),
    ComponentLayout("Progress Tests", 30, ("Progress Test 1", "Progress Test 2")),
    ComponentLayout("Final Exam", 50),
)

BaseCriteria: tuple[CriterionTemplate, ...] = (
    CriterionTemplate(
        "Minimum Attendance Requirement",
        "Student must attend at least 75% of all class sessions to be eligible for final exam",
        "75.0",
    ),
    CriterionTemplate(
        "Minimum Average Grade",
        "Overall average grade must be at least 5.0 to pass the subject",
        "5.0",
        source=MeasurementSource.AverageGrade,
    ),
    CriterionTemplate(
        "No Failing Component Scores",
        "No individual grade component (quiz, midterm, final, etc.) can be below 3.0",
        "3.0",
        source=MeasurementSource.LowestComponent,
    ),
)

Categories: tuple[CriteriaCategory, ...] = (
    CriteriaCategory(
        "software_engineering",
        ("PRF", "CEA", "PRO", "CSD", "DBI", "PRJ", "SWP", "SWT", "SEP"),
        (
            CriterionTemplate(
                "Project Completion",
                "Must complete and present a software project with minimum score of 5.0",
                "5.0",
            ),
            CriterionTemplate("Lab Work Submission", "Must submit at least 80% of lab assignments", "80.0"),
        ),
    ),
    CriteriaCategory(
        "database",
        ("DBI",),
        (
            CriterionTemplate(
                "Database Practical Exam", "Must achieve at least 5.0 in database practical exam", "5.0"
            ),
            CriterionTemplate(
                "SQL Assignment Completion",
                "Must complete all SQL assignments with average score >= 6.0",
                "6.0",
                is_mandatory=False,
            ),
        ),
    ),
    CriteriaCategory(
        "web",
        ("PRJ", "WDU"),
        (
            CriterionTemplate(
                "Web Application Project",
                "Must develop and deploy a complete web application with minimum score of 6.0",
                "6.0",
            ),
            CriterionTemplate(
                "Project Presentation", "Must present the web project to class with minimum score of 5.0", "5.0"
            ),
        ),
    ),
    CriteriaCategory(
        "math",
        ("MAE", "MAD", "MAS"),
        (
            CriterionTemplate(
                "Midterm Exam Minimum", "Must achieve at least 4.0 in midterm exam to be eligible for final", "4.0"
            ),
            CriterionTemplate(
                "Final Exam Minimum", "Must achieve at least 4.0 in final exam to pass the subject", "4.0"
            ),
        ),
    ),
    CriteriaCategory(
        "computer_science",
        ("CSI", "CSD", "PRF", "PRO"),
        (
            CriterionTemplate(
                "Programming Assignments",
                "Must submit at least 85% of programming assignments with average >= 5.5",
                "5.5",
            ),
            CriterionTemplate(
                "Coding Challenge Participation",
                "Must participate in at least 2 coding challenges",
                "2.0",
                is_mandatory=False,
            ),
        ),
    ),
    CriteriaCategory(
        "design",
        ("DRP", "DTG", "DRS", "VCM", "TPG", "DGP", "ANS", "ANC", "GRP"),
        (
            CriterionTemplate(
                "Portfolio Review", "Must submit a portfolio piece approved by the studio mentor", "6.0"
            ),
            CriterionTemplate(
                "Studio Critique Participation",
                "Participate in at least two critique sessions during the course",
                "2.0",
                is_mandatory=False,
            ),
        ),
    ),
)


def is_practical(code: str) -> bool:
    upper = (code or "").upper()
    return any(marker in upper for marker in PracticalMarkers)


def structure_for(code: str) -> tuple[ComponentLayout, ...]:
    return PracticalStructure if is_practical(code) else TheoryStructure


def categories_for(code: str) -> list[CriteriaCategory]:
    """Categories whose prefixes match the start of ``code``, case-insensitively."""
    code = (code or "").strip().upper()
    if not code:
        return []
    return [c for c in Categories if any(code.startswith(p) for p in c.prefixes)]


def criteria_for(subject: Subject) -> list[SubjectCriterion]:
    templates = list(BaseCriteria)
    for category in categories_for(subject.code):
        templates.extend(category.criteria)
    return [
        SubjectCriterion(
            criterion_id=SubjectCriterionID(),
            subject_id=subject.subject_id,
            name=tpl.name,
            description=tpl.description,
            min_score=decimal.Decimal(tpl.min_score),
            is_mandatory=tpl.is_mandatory,
            source=tpl.source,
        )
        for tpl in templates
    ]


def seed_subject(subject: Subject, builder: GradeTreeBuilder | None = None) -> SubjectSchema:
    builder = builder or GradeTreeBuilder()
    components = builder.build(subject.subject_id, structure_for(subject.code))
    criteria = criteria_for(subject)
    logger.info(
        "seeded subject grading schema",
        extra={
            "subject": subject.code,
            "components": len(components),
            "mandatory": sum(1 for c in criteria if c.is_mandatory),
            "advisory": sum(1 for c in criteria if not c.is_mandatory),
        },
    )
    return SubjectSchema(subject=subject, components=components, criteria=criteria)
