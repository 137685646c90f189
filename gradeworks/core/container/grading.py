from __future__ import annotations

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Provider, Singleton

from gradeworks.grading import EligibilityEvaluator, GradeTreeBuilder


class GradingContainer(DeclarativeContainer):
    config: Configuration = Configuration()

    builder: Provider[GradeTreeBuilder] = Singleton(GradeTreeBuilder, max_depth=config.max_depth)
    evaluator: Provider[EligibilityEvaluator] = Singleton(EligibilityEvaluator, max_depth=config.max_depth)
