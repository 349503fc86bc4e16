"""Parsing of ``--cp KEY=VALUE,...`` custom host properties."""

from __future__ import annotations

from collections.abc import Iterable

from admiral_cli.exceptions import InvalidCustomPropertyError


def parse_custom_properties(values: Iterable[str] | None) -> dict[str, str]:
    """Merge repeated ``KEY=VALUE[,KEY=VALUE...]`` strings into one dict.

    Later keys override earlier ones.  Values may contain ``=``; only
    the first one separates key from value.
    """
    result: dict[str, str] = {}
    for raw in values or ():
        for item in raw.split(","):
            item = item.strip()
            if not item:
                continue
            key, sep, value = item.partition("=")
            key = key.strip()
            if not sep or not key:
                raise InvalidCustomPropertyError(
                    f"Invalid custom property: {item}",
                    hint="Custom properties must be given as KEY=VALUE.",
                )
            result[key] = value.strip()
    return result
