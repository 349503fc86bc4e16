"""Interactive confirmation prompts for the CLI layer.

This module is responsible for:

* Asking the user to confirm a host removal.
* Showing an untrusted host certificate and asking whether to trust it.

Both prompts go through questionary, imported lazily so that commands
which never prompt (``--force``, ``--accept``) work without it.
"""

from __future__ import annotations

from typing import Any

from admiral_cli.cli.console import console
from admiral_cli.core.models import Certificate
from admiral_cli.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _ask_yes_no(message: str) -> bool:
    """Ask a yes/no question; Esc / Ctrl+C answers count as "no"."""
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=False).ask()
    return bool(answer)


def confirm_removal(address: str) -> bool:
    """Return ``True`` when the user agrees to remove *address*."""
    return _ask_yes_no(f"Are you sure you want to remove {address}?")


def _describe_certificate(certificate: Certificate) -> None:
    console.print()
    console.print("[bold yellow]The host presented an untrusted certificate.[/bold yellow]")
    if certificate.subject:
        console.print(f"[bold cyan]Subject:[/bold cyan]     {certificate.subject}")
    if certificate.issuer:
        console.print(f"[bold cyan]Issuer:[/bold cyan]      {certificate.issuer}")
    if certificate.fingerprint:
        console.print(f"[bold cyan]Fingerprint:[/bold cyan] {certificate.fingerprint}")
    if not (certificate.subject or certificate.issuer or certificate.fingerprint):
        console.print(certificate.pem)
    console.print()


def confirm_certificate(certificate: Certificate) -> bool:
    """Show *certificate* and return ``True`` when the user trusts it."""
    _describe_certificate(certificate)
    return _ask_yes_no("Trust this certificate?")
