"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exposed: :data:`console` writes diagnostics and errors
to stderr, :data:`output` writes command results to stdout.
"""

from __future__ import annotations

import sys
from typing import Any

from admiral_cli.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def rich_available() -> bool:
	try:
		_load_rich_console_class()
	except EnvironmentError:
		return False
	return True


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=sys.stderr if self._stderr else sys.stdout)
			return
		rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
output = _ConsoleProxy(stderr=False)
