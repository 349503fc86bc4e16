"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from admiral_cli.core.host_service import HostService, credentials_from_flags
from admiral_cli.core.models import (
    Certificate,
    CredentialsSpec,
    Host,
    HostSpec,
    HostSubmission,
    HostUpdate,
    Policy,
    PolicySpec,
    PolicyUpdate,
    TaskStatus,
)
from admiral_cli.core.policy_service import PolicyService
from admiral_cli.core.protocols import HostGateway, PolicyGateway, TaskWaiter
from admiral_cli.core.units import parse_memory

__all__: list[str] = [
    "Certificate",
    "CredentialsSpec",
    "Host",
    "HostGateway",
    "HostService",
    "HostSpec",
    "HostSubmission",
    "HostUpdate",
    "Policy",
    "PolicyGateway",
    "PolicyService",
    "PolicySpec",
    "PolicyUpdate",
    "TaskStatus",
    "TaskWaiter",
    "credentials_from_flags",
    "parse_memory",
]
