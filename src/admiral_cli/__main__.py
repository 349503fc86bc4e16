"""Allow ``python -m admiral_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m admiral_cli`` behaves identically to the ``admiral``
console script.
"""

from __future__ import annotations

from admiral_cli.cli.app import cli

if __name__ == "__main__":
    cli()
