"""Helpers for the service's document links.

Every document on the service is addressed by a *self link* such as
``/resources/compute/8f2c1a``.  Users only ever type the trailing id;
the client converts back and forth with these two helpers.
"""

from __future__ import annotations


def link_id(link: str | None) -> str:
    """Return the trailing id of a document link (``""`` for ``None``)."""
    if not link:
        return ""
    return link.rstrip("/").rsplit("/", 1)[-1]


def make_link(factory: str, doc_id: str) -> str:
    """Join a factory path and an id, accepting ids that are full links."""
    if doc_id.startswith(factory.rstrip("/") + "/"):
        return doc_id
    return f"{factory.rstrip('/')}/{doc_id.strip('/')}"
