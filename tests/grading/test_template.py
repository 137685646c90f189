"""Tests for default grading schemas chosen by subject code."""

from __future__ import annotations

import decimal

import pytest

from gradeworks.grading import GradeTreeBuilder, seed_subject
from gradeworks.grading.template import categories_for, criteria_for, is_practical, structure_for
from gradeworks.model import MeasurementSource, Subject, SubjectID


def _subject(code: str) -> Subject:
    return Subject(subject_id=SubjectID(), code=code, name=f"Subject {code}")


class TestStructureSelection(object):
    """Tests for picking a practical or theory structure."""

    @pytest.mark.parametrize(("code", "expected"), [("PRJ301", True), ("lab211", True), ("DBI202", False), ("", False)])
    def test_is_practical(self, code: str, expected: bool) -> None:
        assert is_practical(code) is expected

    def test_practical_structure(self) -> None:
        assert [(s.name, s.weight) for s in structure_for("PRJ301")] == [
            ("Lab Exercises", 30),
            ("Midterm Exam", 30),
            ("Final Exam", 40),
        ]

    def test_theory_structure(self) -> None:
        assert [(s.name, s.weight) for s in structure_for("MAE101")] == [
            ("Assignments", 20),
            ("Progress Tests", 30),
            ("Final Exam", 50),
        ]


class TestCriteriaSelection(object):
    """Tests for matching criteria categories by code prefix."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("PRJ301", ["software_engineering", "web"]),
            ("csd201", ["software_engineering", "computer_science"]),
            ("DBI202", ["software_engineering", "database"]),
            ("MAE101", ["math"]),
            ("GRP101", ["design"]),
            ("XYZ999", []),
            ("  ", []),
        ],
    )
    def test_categories_for(self, code: str, expected: list[str]) -> None:
        assert [c.name for c in categories_for(code)] == expected

    def test_base_criteria_come_first(self) -> None:
        criteria = criteria_for(_subject("XYZ999"))

        assert [c.name for c in criteria] == [
            "Minimum Attendance Requirement",
            "Minimum Average Grade",
            "No Failing Component Scores",
        ]
        assert [c.source for c in criteria] == [
            MeasurementSource.External,
            MeasurementSource.AverageGrade,
            MeasurementSource.LowestComponent,
        ]
        assert criteria[0].min_score == decimal.Decimal("75.0")

    def test_category_criteria_follow(self) -> None:
        subject = _subject("DBI202")

        criteria = criteria_for(subject)

        assert [c.name for c in criteria[3:]] == [
            "Project Completion",
            "Lab Work Submission",
            "Database Practical Exam",
            "SQL Assignment Completion",
        ]
        assert not criteria[-1].is_mandatory
        assert all(c.subject_id == subject.subject_id for c in criteria)


class TestSeedSubject(object):
    """Tests for seed_subject."""

    def test_practical_subject(self, builder: GradeTreeBuilder) -> None:
        schema = seed_subject(_subject("PRJ301"), builder)

        assert [(c.name, c.weight) for c in schema.components] == [
            ("Lab Exercises", 30),
            ("Lab 1", 15),
            ("Lab 2", 15),
            ("Midterm Exam", 30),
            ("Final Exam", 40),
        ]
        assert len(schema.criteria) == 7
        assert builder.validate(schema.components, schema.criteria).ok

    def test_theory_subject(self) -> None:
        schema = seed_subject(_subject("MAE101"))

        assert [(c.name, c.weight) for c in schema.components] == [
            ("Assignments", 20),
            ("Assignment 1", 10),
            ("Assignment 2", 10),
            ("Progress Tests", 30),
            ("Progress Test 1", 15),
            ("Progress Test 2", 15),
            ("Final Exam", 50),
        ]
        assert [c.name for c in schema.criteria][-2:] == ["Midterm Exam Minimum", "Final Exam Minimum"]
