import textwrap
from pathlib import Path

import anyio
import click

from goalkeeper.core.errors import (
    DuplicateWorkspaceError,
    GoalExistsError,
    GoalkeeperError,
    GoalNotFoundError,
    InvalidNameError,
    InvalidTimestampError,
    LearningExistsError,
    LearningNotFoundError,
    WorkspaceNotFoundError,
)
from goalkeeper.core.log import setup_logging
from goalkeeper.core.managers import GoalStore, WorkspaceRegistry
from goalkeeper.core.models import Learning, format_timestamp, now_timestamp
from goalkeeper.core.settings import GoalsSettings, get_settings

_MESSAGES: dict[type[GoalkeeperError], str] = {
    WorkspaceNotFoundError: "Workspace '{}' not found.",
    DuplicateWorkspaceError: "Workspace '{}' already exists.",
    GoalNotFoundError: "Goal '{}' not found.",
    GoalExistsError: "Goal '{}' already exists.",
    LearningNotFoundError: "Learning '{}' not found.",
    LearningExistsError: "Learning '{}' already exists.",
    InvalidNameError: "Invalid goal name: {}.",
    InvalidTimestampError: "Invalid timestamp '{}' (expected YYYY-MM-DDTHH:MM:SS.sssZ).",
}


def _run(func, *args):
    """Run an async operation, turning domain errors into CLI errors."""
    try:
        return anyio.run(func, *args)
    except GoalkeeperError as exc:
        template = _MESSAGES.get(type(exc), "{}")
        raise click.ClickException(template.format(exc)) from exc


async def _open_registry(settings: GoalsSettings) -> WorkspaceRegistry:
    registry = WorkspaceRegistry(settings.data_root)
    await registry.init()
    return registry


async def _open_store(settings: GoalsSettings, workspace: str) -> GoalStore:
    """Resolve *workspace* through the registry, mark it active and open its goal store."""
    registry = await _open_registry(settings)
    ws = await registry.touch(workspace)
    store = GoalStore(ws.path)
    await store.init()
    return store


@click.group()
@click.option("--log-level", default=None, help="Log level (default: from GOALS_LOG_LEVEL or INFO).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Goalkeeper - goals, plans and learnings per workspace."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)
    ctx.obj = settings


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@main.group()
def workspace() -> None:
    """Register and list workspaces."""


@workspace.command("create")
@click.argument("name")
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.pass_obj
def workspace_create(settings: GoalsSettings, name: str, path: Path) -> None:
    """Register workspace NAME rooted at PATH."""

    async def _create():
        registry = await _open_registry(settings)
        return await registry.create(name, path)

    ws = _run(_create)
    click.echo(f'Workspace "{ws.name}" created successfully')


@workspace.command("init")
@click.argument("name")
@click.pass_obj
def workspace_init(settings: GoalsSettings, name: str) -> None:
    """Mark workspace NAME as active and bootstrap its goals directory."""

    async def _init():
        registry = await _open_registry(settings)
        ws = await registry.touch(name)
        await GoalStore(ws.path).init()
        return ws

    ws = _run(_init)
    click.echo(f'Workspace "{ws.name}" initialized')


@workspace.command("list")
@click.pass_obj
def workspace_list(settings: GoalsSettings) -> None:
    """List workspaces, most recently active first."""
    registry = _run(_open_registry, settings)
    for ws in registry.list():
        click.echo(f"{ws.name}: {ws.path} ({format_timestamp(ws.last_active)})")


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


@main.group()
def goal() -> None:
    """Create goals and manage their plans."""


@goal.command("create")
@click.argument("workspace")
@click.argument("name")
@click.option("--plan-file", type=click.File("r", encoding="utf-8"), default=None, help="Initial plan ('-' for stdin).")
@click.pass_obj
def goal_create(settings: GoalsSettings, workspace: str, name: str, plan_file) -> None:
    """Create goal NAME in WORKSPACE."""
    plan = plan_file.read() if plan_file is not None else ""

    async def _create():
        store = await _open_store(settings, workspace)
        return await store.create_goal(name, plan)

    created = _run(_create)
    click.echo(f'Goal "{created.name}" created successfully')


@goal.command("list")
@click.argument("workspace")
@click.pass_obj
def goal_list(settings: GoalsSettings, workspace: str) -> None:
    """List goals in WORKSPACE with their descriptions."""

    async def _list():
        store = await _open_store(settings, workspace)
        return await store.get_goal_summaries(), store.get_active_goal()

    summaries, active = _run(_list)
    for summary in summaries:
        marker = "*" if summary.name == active else "-"
        click.echo(f"{marker} {summary.name}")
        if summary.description:
            click.echo(textwrap.indent(summary.description, "    ", lambda line: True))


@goal.command("plan")
@click.argument("workspace")
@click.argument("name")
@click.pass_obj
def goal_plan(settings: GoalsSettings, workspace: str, name: str) -> None:
    """Print the plan of goal NAME."""

    async def _plan():
        store = await _open_store(settings, workspace)
        return await store.get_plan(name)

    plan = _run(_plan)
    if plan is None:
        raise click.ClickException(f"Goal '{name}' has no plan.")
    click.echo(plan)


@goal.command("update-plan")
@click.argument("workspace")
@click.argument("name")
@click.argument("plan_file", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def goal_update_plan(settings: GoalsSettings, workspace: str, name: str, plan_file) -> None:
    """Replace the plan of goal NAME with the contents of PLAN_FILE ('-' for stdin)."""
    content = plan_file.read()

    async def _update():
        store = await _open_store(settings, workspace)
        await store.update_plan(name, content)

    _run(_update)
    click.echo(f'Plan for goal "{name}" updated')


@goal.command("activate")
@click.argument("workspace")
@click.argument("name")
@click.pass_obj
def goal_activate(settings: GoalsSettings, workspace: str, name: str) -> None:
    """Make goal NAME the active goal of WORKSPACE."""

    async def _activate():
        store = await _open_store(settings, workspace)
        await store.set_active_goal(name)

    _run(_activate)
    click.echo(f'Goal "{name}" is now active')


@goal.command("active")
@click.argument("workspace")
@click.pass_obj
def goal_active(settings: GoalsSettings, workspace: str) -> None:
    """Print the active goal of WORKSPACE."""

    async def _active():
        store = await _open_store(settings, workspace)
        return store.get_active_goal()

    active = _run(_active)
    click.echo(active if active is not None else "No active goal.")


# ---------------------------------------------------------------------------
# Learnings
# ---------------------------------------------------------------------------


@main.group()
def learning() -> None:
    """Record and read learnings."""


_goal_option = click.option("--goal", "goal_name", default=None, help="Goal scope (default: workspace-level).")


@learning.command("add")
@click.argument("workspace")
@click.option("--title", required=True)
@click.option("--context", "context_", default="")
@click.option("--details", default="")
@click.option("--rationale", default="")
@click.option("--alternatives", default="")
@click.option("--references", default="")
@click.option("--timestamp", default=None, help="Canonical UTC timestamp (default: now).")
@_goal_option
@click.pass_obj
def learning_add(
    settings: GoalsSettings,
    workspace: str,
    title: str,
    context_: str,
    details: str,
    rationale: str,
    alternatives: str,
    references: str,
    timestamp: str | None,
    goal_name: str | None,
) -> None:
    """Record a learning in WORKSPACE."""
    entry = Learning(
        timestamp=timestamp or now_timestamp(),
        title=title,
        context=context_,
        details=details,
        rationale=rationale,
        alternatives=alternatives,
        references=references,
    )

    async def _add():
        store = await _open_store(settings, workspace)
        await store.add_learning(entry, goal_name)

    _run(_add)
    click.echo(f"Learning {entry.timestamp} recorded")


@learning.command("list")
@click.argument("workspace")
@_goal_option
@click.pass_obj
def learning_list(settings: GoalsSettings, workspace: str, goal_name: str | None) -> None:
    """Print all learnings in a scope, newest first."""

    async def _list():
        store = await _open_store(settings, workspace)
        return await store.get_learnings(goal_name)

    for entry in _run(_list):
        click.echo(f"=== {entry.timestamp} ===")
        click.echo(entry.content)


@learning.command("show")
@click.argument("workspace")
@click.argument("timestamp")
@_goal_option
@click.pass_obj
def learning_show(settings: GoalsSettings, workspace: str, timestamp: str, goal_name: str | None) -> None:
    """Print the learning recorded at TIMESTAMP."""

    async def _show():
        store = await _open_store(settings, workspace)
        return await store.get_learning(timestamp, goal_name)

    click.echo(_run(_show))


if __name__ == "__main__":
    main()
