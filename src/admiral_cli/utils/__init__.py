"""Shared utilities — link helpers and cross-cutting concerns.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from admiral_cli.utils.links import link_id, make_link

__all__: list[str] = ["link_id", "make_link"]
