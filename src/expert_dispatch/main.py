"""CLI entrypoint for expert-dispatch."""

from collections.abc import Callable
from pathlib import Path

import rich_click as click

from expert_dispatch import __version__
from expert_dispatch.config import Settings
from expert_dispatch.controllers import (
    DispatchCliController,
    ExpertCleanupCommand,
    ExpertPrepareCommand,
    PlanProgressCommand,
    PlanShowCommand,
    TaskNewCommand,
)
from expert_dispatch.errors import DispatchError
from expert_dispatch.models.effort import EffortLevel
from expert_dispatch.models.task import TaskPriority

click.rich_click.USE_MARKDOWN = True
CONTROLLER = DispatchCliController()

_QUEUE_PATH_OPTION = click.option(
    "--queue-path",
    type=click.Path(path_type=Path),
    default=None,
    help="Queue directory (defaults to EXPERT_DISPATCH_QUEUE_PATH).",
)


@click.group()
@click.version_option(version=__version__, prog_name="expert-dispatch")
@click.option("--log-level", default=None, help="Override EXPERT_DISPATCH_LOG_LEVEL.")
def expert_dispatch(log_level: str | None) -> None:
    """Plan parsing and expert instruction artifacts."""

    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level.strip().upper()
    try:
        settings.validate()
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    settings.configure_logging()


@expert_dispatch.group()
def plan() -> None:
    """Checklist plan commands."""


@plan.command("show")
@click.argument("plan_path", type=click.Path(path_type=Path))
@click.option("--pending-only", is_flag=True, help="Hide completed tasks.")
def plan_show(plan_path: Path, pending_only: bool) -> None:
    """List the tasks of a plan in source order."""

    _run(lambda: CONTROLLER.show_plan(PlanShowCommand(plan_path, pending_only)))


@plan.command("progress")
@click.argument("plan_path", type=click.Path(path_type=Path))
def plan_progress(plan_path: Path) -> None:
    """Show completed/pending counts and the next pending task."""

    _run(lambda: CONTROLLER.plan_progress(PlanProgressCommand(plan_path)))


@expert_dispatch.group()
def effort() -> None:
    """Effort level commands."""


@effort.command("list")
def effort_list() -> None:
    """Show the limits attached to each effort level."""

    _run(CONTROLLER.list_efforts)


@expert_dispatch.group()
def task() -> None:
    """Task record commands."""


@task.command("new")
@click.option("--expert-id", type=click.IntRange(min=0), required=True)
@click.option("--expert-name", required=True)
@click.option("--description", required=True)
@click.option(
    "--priority",
    type=click.Choice([priority.value for priority in TaskPriority]),
    default=TaskPriority.NORMAL.value,
    show_default=True,
)
@click.option(
    "--effort",
    "effort_level",
    type=click.Choice([level.value for level in EffortLevel]),
    default=None,
    help="Attach the canonical limits for this effort level.",
)
@click.option("--scope", "scope_boundary", default=None, help="Scope boundary for the effort.")
@click.option("--file", "files", multiple=True, help="Context file. Can be repeated.")
@click.option("--notes", default=None, help="Free-form context notes.")
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the task JSON here instead of printing it.",
)
def task_new(  # noqa: PLR0913
    expert_id: int,
    expert_name: str,
    description: str,
    priority: str,
    effort_level: str | None,
    scope_boundary: str | None,
    files: tuple[str, ...],
    notes: str | None,
    output_path: Path | None,
) -> None:
    """Build a pending task record as JSON."""

    _run(
        lambda: CONTROLLER.new_task(
            TaskNewCommand(
                expert_id=expert_id,
                expert_name=expert_name,
                description=description,
                priority=priority,
                effort=effort_level,
                scope_boundary=scope_boundary,
                files=files,
                notes=notes,
                output_path=output_path,
            ),
        ),
    )


@expert_dispatch.group()
def expert() -> None:
    """Per-expert instruction artifacts."""


@expert.command("prepare")
@_QUEUE_PATH_OPTION
@click.option("--expert-id", type=click.IntRange(min=0), required=True)
@click.option("--expert-name", required=True)
@click.option("--role", default="general", show_default=True)
def expert_prepare(
    queue_path: Path | None,
    expert_id: int,
    expert_name: str,
    role: str,
) -> None:
    """Write instruction, agents and settings files for one expert."""

    _run(
        lambda: CONTROLLER.prepare_expert(
            ExpertPrepareCommand(
                queue_path=queue_path,
                expert_id=expert_id,
                expert_name=expert_name,
                role=role,
            ),
        ),
    )


@expert.command("cleanup")
@_QUEUE_PATH_OPTION
@click.option("--expert-id", type=click.IntRange(min=0), required=True)
def expert_cleanup(queue_path: Path | None, expert_id: int) -> None:
    """Remove the instruction file of one expert."""

    _run(lambda: CONTROLLER.cleanup_expert(ExpertCleanupCommand(queue_path, expert_id)))


def _run(action: Callable[[], list[str]]) -> None:
    try:
        lines = action()
    except (DispatchError, ValueError) as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(lines)


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    expert_dispatch()
