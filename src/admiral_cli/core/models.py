"""Domain models for admiral-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live only for a single command invocation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CredentialsSpec:
    """New credentials to create before registering a host.

    Exactly one of the two pairs is populated: a PEM certificate pair
    (``public_key`` / ``private_key``) or ``username`` / ``password``.
    """

    public_key: str | None = None
    private_key: str | None = None
    username: str | None = None
    password: str | None = None

    @property
    def is_certificate(self) -> bool:
        return self.public_key is not None and self.private_key is not None


# ---------------------------------------------------------------------------
# Hosts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HostSpec:
    """Parameters for registering a new host."""

    address: str
    resource_pool_id: str
    deployment_policy_id: str | None = None
    credentials_id: str | None = None
    custom_properties: Mapping[str, str] = field(default_factory=dict)
    accept_certificate: bool = False


@dataclass(frozen=True, slots=True)
class HostUpdate:
    """Changes to apply to an existing host.  ``None`` leaves a field as is."""

    address: str
    name: str | None = None
    credentials_id: str | None = None
    resource_pool_id: str | None = None
    deployment_policy_id: str | None = None
    accept_certificate: bool = False


@dataclass(frozen=True, slots=True)
class Host:
    """A host as reported by the service."""

    id: str
    address: str
    name: str
    power_state: str
    containers: int | None = None
    resource_pool_id: str = ""
    custom_properties: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Certificate:
    """An untrusted server certificate the user must accept."""

    pem: str
    subject: str = ""
    issuer: str = ""
    fingerprint: str = ""


@dataclass(frozen=True, slots=True)
class HostSubmission:
    """Outcome of submitting a host to the service.

    Either ``host_id`` is set (the host was stored) or ``certificate``
    is set (the service does not trust the host yet).
    """

    host_id: str | None = None
    certificate: Certificate | None = None

    @property
    def needs_trust(self) -> bool:
        return self.certificate is not None


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PolicySpec:
    """Parameters for creating a placement policy."""

    name: str
    instances: int | None
    group: str | None
    resource_pool_id: str | None
    deployment_policy_id: str | None
    cpu_shares: int | None = None
    priority: int | None = None
    memory_limit: int = 0
    """Memory limit in bytes; ``0`` means unlimited."""


@dataclass(frozen=True, slots=True)
class PolicyUpdate:
    """Changes to apply to an existing policy.  ``None`` leaves a field as is."""

    policy_id: str
    name: str | None = None
    group: str | None = None
    resource_pool_id: str | None = None
    deployment_policy_id: str | None = None
    cpu_shares: int | None = None
    instances: int | None = None
    priority: int | None = None
    memory_limit: int | None = None

    def has_changes(self) -> bool:
        return any(
            value is not None
            for value in (
                self.name,
                self.group,
                self.resource_pool_id,
                self.deployment_policy_id,
                self.cpu_shares,
                self.instances,
                self.priority,
                self.memory_limit,
            )
        )


@dataclass(frozen=True, slots=True)
class Policy:
    """A placement policy as reported by the service."""

    id: str
    name: str
    group: str
    resource_pool_id: str
    deployment_policy_id: str
    priority: int | None
    instances: int | None
    cpu_shares: int | None
    memory_limit: int | None


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TaskStatus:
    """Progress snapshot of an asynchronous service request."""

    task_id: str
    stage: str
    failure_message: str | None = None
    progress: int | None = None
    """Completion percentage reported by the service, when known."""

    TERMINAL_STAGES = ("FINISHED", "FAILED", "CANCELLED")

    @property
    def is_terminal(self) -> bool:
        return self.stage in self.TERMINAL_STAGES

    @property
    def succeeded(self) -> bool:
        return self.stage == "FINISHED"
