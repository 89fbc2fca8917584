"""tasksync CLI - local-first task list."""

import json
import logging
import sys

import click

from .config import load_config
from .core.tasks import Task, TasksFilterType
from .errors import TaskSyncError
from .repository import TaskRepository
from .workflows import add_task, build_repository, load_tasks, task_statistics


def _open_repository() -> TaskRepository:
    try:
        return build_repository(load_config())
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _find_task(repository: TaskRepository, task_id: str) -> Task:
    task = repository.get_task(task_id)
    if task is None:
        click.echo(f"Error: Task {task_id} not found", err=True)
        sys.exit(1)
    return task


@click.group()
@click.version_option(package_name="tasksync")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """tasksync - local-first task list."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command("list")
@click.option(
    "--filter",
    "filter_name",
    type=click.Choice([f.value for f in TasksFilterType]),
    default=TasksFilterType.ALL.value,
    help="Which tasks to show",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(filter_name: str, as_json: bool):
    """List tasks, refreshed from the backend."""
    repository = _open_repository()
    try:
        tasks = load_tasks(repository, TasksFilterType(filter_name), force_update=True)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([t.to_api() for t in tasks or []], indent=2))
        return

    if not tasks:
        click.echo("No tasks.")
        return

    for task in tasks:
        marker = "x" if task.completed else " "
        click.echo(f"[{marker}] {task.title_for_list}  ({task.id})")


@main.command()
@click.argument("task_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(task_id: str, as_json: bool):
    """Show one task."""
    repository = _open_repository()
    try:
        task = _find_task(repository, task_id)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(task.to_api(), indent=2))
        return

    status = "completed" if task.completed else "active"
    click.echo(f"{task.title} [{status}]")
    if task.description:
        click.echo(task.description)


@main.command()
@click.argument("title")
@click.option("--description", "-d", default="", help="Task description")
def add(title: str, description: str):
    """Add a task."""
    repository = _open_repository()
    try:
        task = add_task(repository, title, description)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Added {task.id}")


@main.command()
@click.argument("task_id")
def complete(task_id: str):
    """Mark a task completed."""
    repository = _open_repository()
    try:
        task = _find_task(repository, task_id)
        repository.complete_task(task)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Completed: {task.title_for_list}")


@main.command()
@click.argument("task_id")
def activate(task_id: str):
    """Mark a task active again."""
    repository = _open_repository()
    try:
        task = _find_task(repository, task_id)
        repository.activate_task(task)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Activated: {task.title_for_list}")


@main.command("clear-completed")
def clear_completed():
    """Delete all completed tasks."""
    repository = _open_repository()
    try:
        repository.clear_completed_tasks()
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("Cleared completed tasks.")


@main.command()
@click.argument("task_id")
def delete(task_id: str):
    """Delete a task."""
    repository = _open_repository()
    try:
        repository.delete_task(task_id)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Deleted {task_id}")


@main.command("delete-all")
@click.confirmation_option(prompt="Delete every task?")
def delete_all():
    """Delete every task."""
    repository = _open_repository()
    try:
        repository.delete_all_tasks()
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("Deleted all tasks.")


@main.command()
def stats():
    """Show active and completed task counts."""
    repository = _open_repository()
    try:
        counts = task_statistics(repository, force_update=True)
    except TaskSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not counts.total:
        click.echo("No tasks.")
        return
    click.echo(f"Active: {counts.active}")
    click.echo(f"Completed: {counts.completed} ({counts.completed_percent:.0f}%)")


if __name__ == "__main__":
    main()
