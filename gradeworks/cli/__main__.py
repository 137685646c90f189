from __future__ import annotations

import importlib
import sys
import threading
import traceback
import types
import typing as t
from pathlib import Path

import pydantic as p

import gradeworks
import gradeworks.lib.cli as click
from gradeworks.core import GradeworksContainer
from gradeworks.model import DeploymentEnvironment

DefaultConfigRoot = Path(gradeworks.__file__).resolve().parents[1] / "config"

_commands = ("grading", "pin")
_loaded: dict[str, types.ModuleType] = {}


class LazyGroup(click.Group):
    """Imports ``gradeworks.cli.<name>`` only when that subcommand is run."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(_commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in _commands:
            return None
        if cmd_name not in _loaded:
            _loaded[cmd_name] = importlib.import_module(f"{__package__}.{cmd_name}")
        return getattr(_loaded[cmd_name], cmd_name)


@click.group(cls=LazyGroup)
@click.version_option(gradeworks.__version__, prog_name="gradeworks")
@click.option("-E", "--env", default=DeploymentEnvironment.Local.value, type=click.EnumType(DeploymentEnvironment))
@click.option("-c", "--config-root", default=str(DefaultConfigRoot), type=click.FileURLType())
@click.option("-s", "--secrets-path", default=None, type=click.FileURLType(), help="directory holding secrets")
@click.option("-o", "--override", multiple=True, help="override a setting, e.g. -o grading.max_depth=4")
@click.option("-D", "--debug", is_flag=True, default=False, help="print tracebacks and capture warnings")
@click.pass_obj
def main(
    ct: GradeworksContainer,
    env: DeploymentEnvironment,
    config_root: p.FileUrl,
    secrets_path: p.FileUrl | None,
    override: tuple[str, ...],
    debug: bool,
) -> None:
    """Build grade trees and evaluate subject eligibility."""
    GradeworksContainer.boot(
        ct,
        debug=debug,
        env=env,
        config_root=config_root,
        secrets_path=secrets_path,
        override=override,
        wiring=tuple(_loaded.values()),
    )


def execute_command(*argv: str) -> None:
    threading.current_thread().name = "gradeworks-0"
    prog, *args = argv or sys.argv
    container = GradeworksContainer()

    try:
        with main.make_context(Path(prog).name, args=args) as ctx:
            ctx.obj = container
            sys.exit(t.cast(int | None, main.invoke(ctx)) or 0)
    except (EOFError, KeyboardInterrupt, click.Abort):
        click.echo("Aborted!", file=sys.stderr)
        sys.exit(1)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        click.secho("ERROR ", fg="red", nl=False, err=True)
        click.echo(str(e), err=True)
        booted = container.booted()
        if (booted.debug if booted else "-D" in args or "--debug" in args):
            traceback.print_exc()
        sys.exit(1)
    finally:
        container.shutdown_resources()


if __name__ == "__main__":
    execute_command(*sys.argv)
