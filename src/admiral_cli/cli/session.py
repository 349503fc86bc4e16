"""Per-command connection setup shared by the ``host`` and ``policy`` commands."""

from __future__ import annotations

import argparse

from admiral_cli.config import Settings, load_settings
from admiral_cli.infra.http_client import AdmiralClient


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Load settings with the global command-line options applied on top."""
    return load_settings(
        url=getattr(args, "url", None),
        token=getattr(args, "token", None),
        timeout=getattr(args, "timeout", None),
        verify_tls=False if getattr(args, "insecure", False) else None,
    )


def connect(args: argparse.Namespace) -> AdmiralClient:
    """Open an :class:`AdmiralClient` for one command invocation."""
    return AdmiralClient(settings_from_args(args))
