"""Pure conversion of human-readable memory sizes to bytes.

Multipliers are decimal (1000-based), matching what the service expects
for placement-policy memory limits.
"""

from __future__ import annotations

import logging
import re

from admiral_cli.exceptions import MemoryParseError

logger = logging.getLogger(__name__)

_MEMORY_RE = re.compile(r"([0-9]+)([a-zA-Z]+)")

UNIT_MULTIPLIERS: dict[str, int] = {
    "kb": 1000,
    "mb": 1000 * 1000,
    "gb": 1000 * 1000 * 1000,
}

PARSE_ERROR_MESSAGE = "Unable to parse the memory provided."


def parse_memory(memory: str) -> int:
    """Convert ``<digits><unit>`` (unit: kb/mb/gb, any case) to bytes.

    Only the first ``<digits><letters>`` run is considered; surrounding
    text is ignored with a warning.

    Raises
    ------
    MemoryParseError
        When no size/unit pair is found or the unit is not recognised.
    """
    match = _MEMORY_RE.search(memory)
    if match is None:
        raise MemoryParseError(
            PARSE_ERROR_MESSAGE,
            hint="Use a number followed by kb, mb or gb, e.g. 1024mb",
        )

    digits, unit = match.groups()
    multiplier = UNIT_MULTIPLIERS.get(unit.lower())
    if multiplier is None:
        raise MemoryParseError(
            PARSE_ERROR_MESSAGE,
            hint=f"Unknown unit '{unit}'. Units supported: kb/mb/gb",
        )

    if match.group(0) != memory.strip():
        logger.warning(
            "Memory value %r: using %r and ignoring the remaining text",
            memory,
            match.group(0),
        )

    return int(digits) * multiplier
