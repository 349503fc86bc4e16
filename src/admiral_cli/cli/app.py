"""CLI application entry point and command routing for admiral-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~admiral_cli.exceptions.AdmiralCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the command
  modules, which in turn call the core services.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from admiral_cli.cli import exit_codes
from admiral_cli.cli.console import console
from admiral_cli.exceptions import AdmiralCliError
from admiral_cli.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``admiral host {add,rm,enable,disable,update,ls}``
    * ``admiral policy {add,rm,update,ls}``
    * ``admiral doctor``  — environment diagnostics
    * ``admiral --version``
    """
    from admiral_cli.cli import hosts, policies

    parser = argparse.ArgumentParser(
        prog="admiral",
        description="Command-line front-end for the Admiral container-host service.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--url", help="Service base URL (env: ADMIRAL_URL).")
    parser.add_argument("--token", help="Auth token (env: ADMIRAL_TOKEN).")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (env: ADMIRAL_TIMEOUT).")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS certificate verification.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    group_parsers = {
        "host": hosts.register(subparsers),
        "policy": policies.register(subparsers),
    }
    doctor = subparsers.add_parser("doctor", help="Run environment diagnostics.")
    doctor.set_defaults(handler=_handle_doctor)

    parser.set_defaults(group_parsers=group_parsers)
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from admiral_cli.cli.doctor import run_doctor

    return run_doctor(args)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the admiral CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from admiral_cli.cli.log import setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    handler = getattr(args, "handler", None)
    if handler is None:
        # Command group given without an action, e.g. ``admiral host``.
        args.group_parsers[args.command].print_help()
        return exit_codes.SUCCESS

    logger.debug("Running %s %s", args.command, getattr(args, "action", "") or "")
    return handler(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AdmiralCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected error", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
