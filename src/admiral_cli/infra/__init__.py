"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Admiral REST API (via httpx)
and the local filesystem.  Every raw third-party exception must be
caught here and re-raised as an
:class:`~admiral_cli.exceptions.AdmiralCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from admiral_cli.infra.certificates import read_certificate
from admiral_cli.infra.hosts_api import RestHostGateway
from admiral_cli.infra.http_client import AdmiralClient
from admiral_cli.infra.policies_api import RestPolicyGateway
from admiral_cli.infra.task_tracker import RequestStatusTracker

__all__: list[str] = [
    "AdmiralClient",
    "RequestStatusTracker",
    "RestHostGateway",
    "RestPolicyGateway",
    "read_certificate",
]
