"""Table rendering for ``host ls`` and ``policy ls``.

Rows are built by pure helpers; rendering uses a Rich table on stdout,
or fixed-width plain text when Rich is not installed.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from admiral_cli.cli.console import output
from admiral_cli.core.models import Host, Policy
from admiral_cli.core.units import UNIT_MULTIPLIERS

NOT_AVAILABLE = "n/a"

HOST_COLUMNS: tuple[str, ...] = ("ID", "ADDRESS", "NAME", "STATE", "CONTAINERS", "CUSTOM PROPERTIES")
POLICY_COLUMNS: tuple[str, ...] = (
    "ID",
    "NAME",
    "GROUP",
    "RESOURCE POOL",
    "DEPLOYMENT POLICY",
    "PRIORITY",
    "INSTANCES",
    "CPU SHARES",
    "MEMORY LIMIT",
)


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def _format_optional(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def format_memory(size: int | None) -> str:
    """Render a byte count with the largest exact decimal unit."""
    if not size:
        return "-"
    for unit in ("gb", "mb", "kb"):
        multiplier = UNIT_MULTIPLIERS[unit]
        if size % multiplier == 0:
            return f"{size // multiplier}{unit}"
    return f"{size}b"


def _format_properties(props: dict[str, str] | object) -> str:
    if not isinstance(props, dict) or not props:
        return "-"
    return ", ".join(f"{key}={value}" for key, value in sorted(props.items()))


def host_rows(hosts: Sequence[Host]) -> list[tuple[str, ...]]:
    return [
        (
            host.id,
            host.address,
            _format_optional(host.name),
            host.power_state,
            _format_optional(host.containers),
            _format_properties(dict(host.custom_properties)),
        )
        for host in hosts
    ]


def policy_rows(policies: Sequence[Policy]) -> list[tuple[str, ...]]:
    return [
        (
            policy.id,
            policy.name,
            _format_optional(policy.group),
            _format_optional(policy.resource_pool_id),
            _format_optional(policy.deployment_policy_id),
            _format_optional(policy.priority),
            _format_optional(policy.instances),
            _format_optional(policy.cpu_shares),
            format_memory(policy.memory_limit),
        )
        for policy in policies
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_plain(columns: Sequence[str], rows: Sequence[tuple[str, ...]]) -> None:
    widths = [
        max([len(column)] + [len(row[i]) for row in rows])
        for i, column in enumerate(columns)
    ]
    print("  ".join(c.ljust(w) for c, w in zip(columns, widths)).rstrip(), file=sys.stdout)
    for row in rows:
        print("  ".join(v.ljust(w) for v, w in zip(row, widths)).rstrip(), file=sys.stdout)


def render_table(columns: Sequence[str], rows: Sequence[tuple[str, ...]]) -> None:
    """Print *rows* under *columns*, or ``n/a`` when there are none."""
    if not rows:
        output.print(NOT_AVAILABLE)
        return

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain(columns, rows)
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    output.print(table)


def print_hosts(hosts: Sequence[Host]) -> None:
    render_table(HOST_COLUMNS, host_rows(hosts))


def print_policies(policies: Sequence[Policy]) -> None:
    render_table(POLICY_COLUMNS, policy_rows(policies))
