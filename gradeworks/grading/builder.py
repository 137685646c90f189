"""Construction and validation of grade-component forests."""

from __future__ import annotations

import logging
import typing as t

from gradeworks.model import GradeComponent, GradeComponentID, SubjectCriterion, SubjectID

from .errors import ErrorKind, InvalidArgument, InvalidWeightDistribution
from .forest import DefaultMaxDepth, Forest, ValidationReport, Violation

logger = logging.getLogger(__name__)

# Root weights of one subject are whole percentages of the final grade
RootWeightTotal = 100


class ComponentLayout(t.NamedTuple):
    name: str
    weight: int
    children: tuple[str, ...] = ()


class GradeTreeBuilder(object):
    """Builds a subject's grade forest and checks its invariants.

    Stateless; a single instance may be shared across threads.
    """

    def __init__(self, max_depth: int = DefaultMaxDepth) -> None:
        if max_depth < 1:
            raise InvalidArgument(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth

    def build_root(self, subject_id: SubjectID, weights: t.Sequence[tuple[str, int]]) -> list[GradeComponent]:
        """Create the root components of a subject from ordered (name, weight) pairs.

        No pairs yields no roots; a subject without grade components is only
        warned about, as in validate().

        Raises:
            InvalidArgument: empty subject id, empty name or weight outside [0, 100]
            InvalidWeightDistribution: weights do not sum to exactly 100
        """
        if not subject_id:
            raise InvalidArgument("subject id is required")
        if not weights:
            logger.warning("subject has no grade components", extra={"subject_id": subject_id})
            return []
        for name, weight in weights:
            _check_component_args(name, weight)

        total = sum(weight for _, weight in weights)
        if total != RootWeightTotal:
            raise InvalidWeightDistribution(
                f"root weights for {subject_id} sum to {total}, expected {RootWeightTotal}",
                [
                    Violation(
                        kind=ErrorKind.InvalidWeightDistribution,
                        message=f"root weights sum to {total}, expected {RootWeightTotal}",
                    )
                ],
            )

        roots = [
            GradeComponent(component_id=GradeComponentID(), subject_id=subject_id, name=name, weight=weight)
            for name, weight in weights
        ]
        logger.debug("built root components", extra={"subject_id": subject_id, "count": len(roots)})
        return roots

    def split_weight(self, parent: GradeComponent, child_names: t.Sequence[str]) -> list[GradeComponent]:
        """Split a parent's weight evenly across named children.

        The first ``weight % n`` children, in the order given, absorb the
        remainder one point each, so 100 over three children is 34/33/33.
        """
        if not child_names:
            raise InvalidArgument(f"cannot split {parent.name!r}: no child names given")
        _check_component_args(parent.name, parent.weight)
        for name in child_names:
            if not name or not name.strip():
                raise InvalidArgument("child component name must not be empty")

        base, remainder = divmod(parent.weight, len(child_names))
        return [
            GradeComponent(
                component_id=GradeComponentID(),
                subject_id=parent.subject_id,
                name=name,
                weight=base + (1 if i < remainder else 0),
                parent_id=parent.component_id,
            )
            for i, name in enumerate(child_names)
        ]

    def build(self, subject_id: SubjectID, structure: t.Sequence[ComponentLayout]) -> list[GradeComponent]:
        """Build a complete forest: roots in order, each followed by its split children."""
        roots = self.build_root(subject_id, [(layout.name, layout.weight) for layout in structure])
        components: list[GradeComponent] = []
        for root, layout in zip(roots, structure):
            components.append(root)
            if layout.children:
                components.extend(self.split_weight(root, layout.children))

        self.validate(components).raise_for_violations()
        return components

    def validate(
        self,
        forest: Forest | t.Iterable[GradeComponent],
        criteria: t.Sequence[SubjectCriterion] | None = None,
    ) -> ValidationReport:
        """Check every forest invariant and report all violations found."""
        if forest is None:
            raise InvalidArgument("forest is required")
        if not isinstance(forest, Forest):
            forest = Forest(forest)

        violations: list[Violation] = []
        warnings: list[str] = []

        violations.extend(forest.weight_violations())
        violations.extend(forest.structural_violations(self.max_depth))

        roots_by_subject: dict[SubjectID, list[GradeComponent]] = {}
        for root in forest.roots:
            roots_by_subject.setdefault(root.subject_id, []).append(root)
        for subject_id, roots in roots_by_subject.items():
            total = sum(r.weight for r in roots)
            if total != RootWeightTotal:
                violations.append(
                    Violation(
                        kind=ErrorKind.InvalidWeightDistribution,
                        message=f"root weights for {subject_id} sum to {total}, expected {RootWeightTotal}",
                    )
                )

        for c in forest:
            children = forest.children(c.component_id)
            if not children:
                continue
            total = sum(child.weight for child in children)
            if total != c.weight:
                violations.append(
                    Violation(
                        kind=ErrorKind.InvalidWeightDistribution,
                        component_id=c.component_id,
                        message=f"children of {c.name!r} sum to {total}, expected {c.weight}",
                    )
                )

        if not forest.roots:
            if criteria:
                violations.append(
                    Violation(
                        kind=ErrorKind.InvalidArgument,
                        message=f"subject has {len(criteria)} criteria but no grade components",
                    )
                )
            else:
                warnings.append("subject has no grade components")

        subject_ids = set(forest.subject_ids)
        for criterion in criteria or ():
            if subject_ids and criterion.subject_id not in subject_ids:
                violations.append(
                    Violation(
                        kind=ErrorKind.InvalidArgument,
                        message=f"criterion {criterion.name!r} belongs to {criterion.subject_id}, not this subject",
                    )
                )

        report = ValidationReport(violations=violations, warnings=warnings)
        for w in warnings:
            logger.warning(w)
        logger.debug(
            "validated grade forest",
            extra={"components": len(forest), "violations": len(violations), "warnings": len(warnings)},
        )
        return report


def _check_component_args(name: str, weight: int) -> None:
    if not name or not name.strip():
        raise InvalidArgument("component name must not be empty")
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise InvalidArgument(f"weight of {name!r} must be a whole percentage, got {weight!r}")
    if not 0 <= weight <= 100:
        raise InvalidArgument(f"weight of {name!r} must be within 0..100, got {weight}")
