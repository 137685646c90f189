"""Arena representation of a subject's grade-component forest."""

from __future__ import annotations

import typing as t

from gradeworks.model import BaseModel, GradeComponent, GradeComponentID, Record, SubjectID

from .errors import ErrorKind, ErrorTypes

# Grading schemas are a handful of levels deep; anything past this is corrupt data
DefaultMaxDepth = 8


class Violation(Record):
    kind: ErrorKind
    component_id: GradeComponentID | None = None
    message: str


class ValidationReport(BaseModel):
    violations: list[Violation] = []
    warnings: list[str] = []

    @property
    def ok(self) -> bool:
        return not self.violations

    def of_kind(self, kind: ErrorKind) -> list[Violation]:
        return [v for v in self.violations if v.kind is kind]

    def raise_for_violations(self) -> None:
        """Raise the error type of the first violation, carrying all of them."""
        if self.ok:
            return
        first = self.violations[0]
        summary = first.message
        if len(self.violations) > 1:
            summary = f"{summary} (and {len(self.violations) - 1} more violation(s))"
        raise ErrorTypes[first.kind](summary, self.violations)


class Forest(object):
    """Components indexed by identifier, children resolved by lookup.

    Input order is preserved everywhere: roots, children and leaves come back in
    the order the components were supplied.
    """

    def __init__(self, components: t.Iterable[GradeComponent]) -> None:
        self._components: tuple[GradeComponent, ...] = tuple(components)
        self._index: dict[GradeComponentID, GradeComponent] = {}
        self._children: dict[GradeComponentID, list[GradeComponentID]] = {}
        self._roots: list[GradeComponentID] = []
        self.duplicates: list[GradeComponentID] = []

        for c in self._components:
            if c.component_id in self._index:
                self.duplicates.append(c.component_id)
                continue
            self._index[c.component_id] = c

        for c in self._index.values():
            if c.is_root:
                self._roots.append(c.component_id)
            elif c.parent_id != c.component_id:
                self._children.setdefault(c.parent_id, []).append(c.component_id)

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> t.Iterator[GradeComponent]:
        return iter(self._index.values())

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._index

    def __getitem__(self, component_id: GradeComponentID) -> GradeComponent:
        return self._index[component_id]

    @property
    def components(self) -> tuple[GradeComponent, ...]:
        return self._components

    @property
    def roots(self) -> list[GradeComponent]:
        return [self._index[i] for i in self._roots]

    @property
    def subject_ids(self) -> list[SubjectID]:
        seen: dict[SubjectID, None] = {}
        for c in self:
            seen.setdefault(c.subject_id, None)
        return list(seen)

    def children(self, component_id: GradeComponentID) -> list[GradeComponent]:
        return [self._index[i] for i in self._children.get(component_id, ())]

    def is_leaf(self, component_id: GradeComponentID) -> bool:
        return not self._children.get(component_id)

    @property
    def leaves(self) -> list[GradeComponent]:
        return [c for c in self if self.is_leaf(c.component_id)]

    def ancestry(self, component_id: GradeComponentID) -> list[GradeComponentID]:
        """Parent chain from the component upwards, stopping at a root, a
        dangling parent reference, or the first repeated node."""
        chain: list[GradeComponentID] = []
        seen: set[GradeComponentID] = set()
        current: GradeComponentID | None = component_id
        while current is not None and current in self._index and current not in seen:
            seen.add(current)
            chain.append(current)
            current = self._index[current].parent_id
        if current is not None:
            chain.append(current)
        return chain

    def weight_violations(self) -> list[Violation]:
        """Components whose weight is not a whole percentage in 0..100."""
        return [
            Violation(
                kind=ErrorKind.InvalidArgument,
                component_id=c.component_id,
                message=f"{c.name!r} has weight {c.weight}, expected 0..100",
            )
            for c in self
            if not 0 <= c.weight <= 100
        ]

    def structural_violations(self, max_depth: int = DefaultMaxDepth) -> list[Violation]:
        """Duplicate ids, self-parenting, dangling or cross-subject parents,
        cycles, excessive depth and scores recorded on internal nodes."""
        violations: list[Violation] = []
        for dup in self.duplicates:
            violations.append(
                Violation(kind=ErrorKind.MalformedTree, component_id=dup, message=f"duplicate component id {dup}")
            )

        reported_cycles: set[frozenset[GradeComponentID]] = set()
        for c in self:
            cid, parent_id = c.component_id, c.parent_id
            if parent_id is None:
                continue
            if parent_id == cid:
                violations.append(
                    Violation(kind=ErrorKind.MalformedTree, component_id=cid, message=f"{c.name!r} is its own parent")
                )
                continue
            if parent_id not in self._index:
                violations.append(
                    Violation(
                        kind=ErrorKind.MalformedTree,
                        component_id=cid,
                        message=f"{c.name!r} references missing parent {parent_id}",
                    )
                )
                continue
            parent = self._index[parent_id]
            if parent.subject_id != c.subject_id:
                violations.append(
                    Violation(
                        kind=ErrorKind.MalformedTree,
                        component_id=cid,
                        message=f"{c.name!r} belongs to {c.subject_id} but its parent belongs to {parent.subject_id}",
                    )
                )

            chain = self.ancestry(cid)
            last = chain[-1]
            if last not in self._index:
                # dangling reference further up, reported against the ancestor
                continue
            if chain.count(last) > 1:
                # the walk stopped on a repeated node: everything from its first
                # occurrence onwards is the cycle
                cycle = frozenset(chain[chain.index(last) : -1])
                if len(cycle) > 1 and cycle not in reported_cycles:
                    reported_cycles.add(cycle)
                    names = " -> ".join(self._index[i].name for i in chain[chain.index(last) :])
                    violations.append(
                        Violation(kind=ErrorKind.MalformedTree, component_id=cid, message=f"cycle detected: {names}")
                    )
            elif len(chain) > max_depth:
                violations.append(
                    Violation(
                        kind=ErrorKind.MalformedTree,
                        component_id=cid,
                        message=f"{c.name!r} is nested {len(chain)} levels deep (limit {max_depth})",
                    )
                )

        for c in self:
            if c.score is not None and not self.is_leaf(c.component_id):
                violations.append(
                    Violation(
                        kind=ErrorKind.MalformedTree,
                        component_id=c.component_id,
                        message=f"{c.name!r} has children but carries a recorded score",
                    )
                )
        return violations
