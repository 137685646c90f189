"""CLI commands for grading schemas: seed, validate and evaluate."""

from __future__ import annotations

import decimal
from pathlib import Path

import pydantic as p
import yaml

import gradeworks.lib.cli as click
import gradeworks.lib.json as json
from gradeworks.core import di
from gradeworks.grading import collect_measurements, EligibilityEvaluator, GradeTreeBuilder, seed_subject
from gradeworks.model import BaseModel, EvaluationResult, EvaluationStatus, GradeComponent, Subject, \
    SubjectCriterion, SubjectCriterionID, SubjectID

SnapshotPath = click.Path(exists=True, dir_okay=False, path_type=Path)


class GradingSnapshot(BaseModel):
    """A subject's grading state as exported by ``grading template`` and
    filled in by hand: component scores plus externally measured values."""

    subject: Subject | None = None
    components: list[GradeComponent] = []
    criteria: list[SubjectCriterion] = []
    measurements: dict[SubjectCriterionID, decimal.Decimal] = {}


def load_snapshot(path: Path) -> GradingSnapshot:
    with path.open() as f:
        doc = yaml.safe_load(f) or {}
    try:
        return GradingSnapshot.model_validate(doc)
    except p.ValidationError as e:
        raise click.BadParameter(f"{path} is not a grading snapshot\n{e}") from e


@click.group("grading")
def grading():
    """Seed, validate and evaluate subject grading schemas."""
    ...


@grading.command("template")
@click.argument("subject_code")
@click.option("--name", "-n", default=None, help="Subject display name (defaults to the code)")
@di.inject
def template(
    subject_code: str,
    name: str | None,
    builder: GradeTreeBuilder = di.Provide["grading.builder"],
) -> None:
    """Print the default grading schema for SUBJECT_CODE as JSON.

    Practical subjects (codes containing LAB or PRJ) get the lab/midterm/final
    structure; everything else gets assignments/progress tests/final.
    """
    subject = Subject(subject_id=SubjectID(), code=subject_code.strip().upper(), name=name or subject_code)
    schema = seed_subject(subject, builder)
    click.echo(json.dumps(schema, indent=2))


@grading.command("validate")
@click.argument("path", type=SnapshotPath)
@di.inject
def validate(path: Path, builder: GradeTreeBuilder = di.Provide["grading.builder"]) -> None:
    """Check every structural and weight invariant of the snapshot at PATH."""
    snapshot = load_snapshot(path)
    report = builder.validate(snapshot.components, snapshot.criteria)

    for warning in report.warnings:
        click.echo(click.style("warning: ", fg="yellow") + warning)
    if report.ok:
        click.echo(f"{path.name}: {len(snapshot.components)} components, {len(snapshot.criteria)} criteria, OK")
        return

    for v in report.violations:
        click.echo(click.style(f"{v.kind.value}: ", fg="red") + v.message, err=True)
    click.echo(f"{path.name}: {len(report.violations)} violation(s)", err=True)
    raise SystemExit(1)


@grading.command("evaluate")
@click.argument("path", type=SnapshotPath)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result as JSON")
@di.inject
def evaluate(
    path: Path,
    as_json: bool,
    evaluator: EligibilityEvaluator = di.Provide["grading.evaluator"],
) -> None:
    """Compute the grade for the snapshot at PATH and decide pass/fail.

    Average-grade and lowest-component criteria are measured from the
    components; the rest come from the snapshot's ``measurements``.
    """
    snapshot = load_snapshot(path)
    measured = collect_measurements(
        snapshot.components, snapshot.criteria, snapshot.measurements, evaluator=evaluator
    )
    result = evaluator.evaluate(snapshot.components, snapshot.criteria, measured)

    if as_json:
        click.echo(json.dumps(result, indent=2))
    else:
        _echo_result(result, snapshot)


def _echo_result(result: EvaluationResult, snapshot: GradingSnapshot) -> None:
    if result.status is EvaluationStatus.Incomplete:
        names = {c.component_id: c.name for c in snapshot.components}
        click.echo(click.style("incomplete", fg="yellow") + ": waiting on scores for")
        for component_id in result.missing_component_ids:
            click.echo(f"  - {names.get(component_id, component_id)}")
        return

    assert result.verdict is not None
    click.echo(f"grade:   {'-' if result.grade is None else result.grade.quantize(decimal.Decimal('0.01'))}")
    colour = "green" if result.passed else "red"
    click.echo(f"verdict: {click.style(result.verdict.value, fg=colour)}")
    if result.reason:
        click.echo(f"reason:  {result.reason}")
    for outcome in result.outcomes:
        mark = "ok" if outcome.passed else ("FAIL" if outcome.mandatory else "advisory")
        measured = "-" if outcome.measured is None else outcome.measured
        click.echo(f"  [{mark:>8}] {outcome.name}: {measured} / {outcome.threshold}")
