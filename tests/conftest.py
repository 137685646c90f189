"""Pytest fixtures for gradeworks tests.

Factories build immutable grading records with sensible defaults, so tests
only spell out the fields they care about:

    def test_leaf(component_factory: ComponentFactory):
        leaf = component_factory(name="Lab 1", weight=15, score="7.5")
"""

from __future__ import annotations

import decimal
import logging
import typing as t
from pathlib import Path

import pydantic as p
import pytest

import gradeworks
from gradeworks.core import GradeworksContainer
from gradeworks.grading import EligibilityEvaluator, GradeTreeBuilder
from gradeworks.model import DeploymentEnvironment, GradeComponent, GradeComponentID, MeasurementSource, \
    SubjectCriterion, SubjectCriterionID, SubjectID

ComponentFactory = t.Callable[..., GradeComponent]
CriterionFactory = t.Callable[..., SubjectCriterion]

ConfigRoot = Path(gradeworks.__file__).resolve().parents[1] / "config"


@pytest.fixture(autouse=True)
def restore_logging() -> t.Generator[None]:
    """Booting a container reconfigures logging against captured streams; undo it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def config_root() -> Path:
    return ConfigRoot


@pytest.fixture
def container() -> t.Generator[GradeworksContainer]:
    """A container booted against the repository's config in the Test environment."""
    ct = GradeworksContainer()
    GradeworksContainer.boot(
        ct,
        debug=True,
        env=DeploymentEnvironment.Test,
        config_root=p.FileUrl(f"file://{ConfigRoot}"),
        override=(),
    )

    yield ct

    ct.shutdown_resources()


@pytest.fixture
def subject_id() -> SubjectID:
    return SubjectID()


@pytest.fixture
def builder() -> GradeTreeBuilder:
    return GradeTreeBuilder()


@pytest.fixture
def evaluator() -> EligibilityEvaluator:
    return EligibilityEvaluator()


@pytest.fixture
def component_factory(subject_id: SubjectID) -> ComponentFactory:
    def create_component(
        name: str = "Component",
        weight: int = 100,
        parent: GradeComponent | None = None,
        score: decimal.Decimal | int | str | None = None,
        **kwargs: t.Any,
    ) -> GradeComponent:
        return GradeComponent(
            component_id=kwargs.pop("component_id", None) or GradeComponentID(),
            subject_id=kwargs.pop("subject_id", None) or (parent.subject_id if parent else subject_id),
            name=name,
            weight=weight,
            parent_id=kwargs.pop("parent_id", None) or (parent.component_id if parent else None),
            score=None if score is None else decimal.Decimal(str(score)),
            **kwargs,
        )

    return create_component


@pytest.fixture
def criterion_factory(subject_id: SubjectID) -> CriterionFactory:
    def create_criterion(
        name: str = "Criterion",
        min_score: decimal.Decimal | int | str = "5.0",
        is_mandatory: bool = True,
        source: MeasurementSource = MeasurementSource.External,
        **kwargs: t.Any,
    ) -> SubjectCriterion:
        return SubjectCriterion(
            criterion_id=kwargs.pop("criterion_id", None) or SubjectCriterionID(),
            subject_id=kwargs.pop("subject_id", None) or subject_id,
            name=name,
            min_score=decimal.Decimal(str(min_score)),
            is_mandatory=is_mandatory,
            source=source,
            **kwargs,
        )

    return create_criterion
