"""Rich spinner driven by task-status snapshots.

This module bridges the tracker's ``progress_callback`` with a Rich
status spinner.  It is used by the CLI layer — the infra layer only
forwards :class:`~admiral_cli.core.models.TaskStatus` objects.

Design
------
* :class:`TaskSpinner` manages a Rich ``Status`` context.
* :meth:`__call__` is the callback passed to the tracker.
* Without Rich the spinner degrades to a no-op.
"""

from __future__ import annotations

from typing import Any

from admiral_cli.cli.console import get_rich_console
from admiral_cli.core.models import TaskStatus
from admiral_cli.exceptions import EnvironmentError


class TaskSpinner:
    """Callable progress adapter for Rich.

    Usage::

        with TaskSpinner("Removing 10.0.0.5") as spinner:
            tracker = RequestStatusTracker(client, ..., progress_callback=spinner)
            tracker.wait(task_id)
    """

    def __init__(self, description: str) -> None:
        self._description = description
        self._status: Any = None
        try:
            console = get_rich_console()
        except EnvironmentError:
            return
        self._status = console.status(f"[bold blue]{description}[/bold blue]")

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> TaskSpinner:
        if self._status is not None:
            self._status.start()
        return self

    def __exit__(self, *_args: object) -> None:
        if self._status is not None:
            self._status.stop()

    # ------------------------------------------------------------------
    # Callback
    # ------------------------------------------------------------------

    @staticmethod
    def describe(description: str, status: TaskStatus) -> str:
        """Build the spinner label for *status*."""
        label = f"{description} ({status.stage.lower()})"
        if status.progress is not None:
            label += f" {status.progress}%"
        return label

    def __call__(self, status: TaskStatus) -> None:
        if self._status is None:
            return
        self._status.update(f"[bold blue]{self.describe(self._description, status)}[/bold blue]")
