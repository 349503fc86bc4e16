"""``admiral doctor`` — environment and connectivity diagnostics.

Gathers system information and renders a Rich table summarising
whether the runtime environment can talk to the configured service.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import argparse
import platform
import sys

from admiral_cli.cli import exit_codes
from admiral_cli.cli.console import console, rich_available
from admiral_cli.cli.session import settings_from_args
from admiral_cli.config import Settings
from admiral_cli.exceptions import AdmiralCliError
from admiral_cli.infra.http_client import AdmiralClient
from admiral_cli.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _httpx_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the httpx row."""
    try:
        import httpx
    except ImportError:
        return "httpx", "NOT INSTALLED", "[red]FAIL[/red]"
    return "httpx", getattr(httpx, "__version__", "unknown"), "[green]OK[/green]"


def _questionary_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the questionary row.

    Missing questionary only disables interactive prompts, so it is a
    warning rather than a failure.
    """
    try:
        import questionary
    except ImportError:
        return "questionary", "not installed", "[yellow]WARN[/yellow]"
    return "questionary", getattr(questionary, "__version__", "unknown"), "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _cli_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the admiral-cli version row."""
    return "admiral-cli", __version__, "[green]OK[/green]"


def _service_check(settings: Settings | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the service connectivity row."""
    if settings is None:
        return "Service", "not configured", "[red]FAIL[/red]"
    try:
        with AdmiralClient(settings) as client:
            status_code = client.ping()
    except AdmiralCliError:
        return "Service", f"{settings.url} unreachable", "[red]FAIL[/red]"
    if status_code in (401, 403) and not settings.token:
        return "Service", f"{settings.url} (HTTP {status_code}, no token)", "[yellow]WARN[/yellow]"
    return "Service", f"{settings.url} (HTTP {status_code})", "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nadmiral doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(args: argparse.Namespace | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    config_error: AdmiralCliError | None = None
    settings: Settings | None = None
    try:
        settings = settings_from_args(args or argparse.Namespace())
    except AdmiralCliError as exc:
        config_error = exc

    checks = [
        _cli_version_check(),
        _python_version_check(),
        _httpx_version_check(),
        _questionary_check(),
        _os_check(),
        _service_check(settings),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    use_rich = rich_available()

    if use_rich:
        from rich.table import Table

        table = Table(
            title="admiral doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if config_error is not None:
        console.print(f"Configuration error: {config_error}")

    if has_failure:
        console.print("Some checks failed." if not use_rich else "[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("All checks passed." if not use_rich else "[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
