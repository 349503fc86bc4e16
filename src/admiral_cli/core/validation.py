"""Argument-shape checks shared by every command.

Validation runs before any remote call, so a missing address or id
never reaches the service.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from admiral_cli.exceptions import MissingArgumentError

logger = logging.getLogger(__name__)

HOST_ADDRESS_NOT_PROVIDED = "Host address not provided."
POLICY_ID_NOT_PROVIDED = "Policy ID not provided."
POLICY_NAME_NOT_PROVIDED = "Policy name not provided."


def require_value(value: str | None, message: str) -> str:
    """Return *value* stripped, or raise ``MissingArgumentError`` when blank."""
    if value is None or not value.strip():
        raise MissingArgumentError(message)
    return value.strip()


def require_first_arg(args: Sequence[str] | None, message: str) -> str:
    """Return the first positional argument or raise ``MissingArgumentError``.

    Additional positional arguments are ignored.
    """
    if not args or not args[0].strip():
        raise MissingArgumentError(message)
    if len(args) > 1:
        logger.warning("Ignoring extra arguments: %s", " ".join(args[1:]))
    return args[0].strip()
