"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from admiral_cli.core.models import (
    CredentialsSpec,
    Host,
    HostSpec,
    HostSubmission,
    HostUpdate,
    Policy,
    PolicySpec,
    PolicyUpdate,
)


class HostGateway(Protocol):
    """Contract for the remote host API.

    Implementations must map all backend-specific exceptions to
    :class:`~admiral_cli.exceptions.AdmiralCliError` subclasses.
    """

    def create_credentials(self, credentials: CredentialsSpec) -> str:
        """Store *credentials* remotely and return the new credentials id."""
        ...  # pragma: no cover

    def submit_host(self, spec: HostSpec, *, accept_certificate: bool) -> HostSubmission:
        """Register a host.

        Returns a :class:`HostSubmission` carrying either the new host id
        or the certificate the service refused to trust.
        """
        ...  # pragma: no cover

    def submit_update(self, update: HostUpdate, *, accept_certificate: bool) -> HostSubmission:
        """Apply *update* to an existing host (same trust flow as submit)."""
        ...  # pragma: no cover

    def set_power_state(self, address: str, *, enabled: bool) -> str:
        """Enable or disable the host at *address*; return its id.

        Raises
        ------
        HostNotFoundError
            When no host is registered under *address*.
        """
        ...  # pragma: no cover

    def remove_host(self, address: str) -> tuple[str, str]:
        """Request removal of the host at *address*.

        Returns ``(host_id, task_id)``; the task tracks the removal.
        """
        ...  # pragma: no cover

    def list_hosts(self, query: str | None = None) -> list[Host]:
        """Return registered hosts, optionally filtered by *query*."""
        ...  # pragma: no cover


class PolicyGateway(Protocol):
    """Contract for the remote placement-policy API."""

    def create_policy(self, spec: PolicySpec) -> str:
        ...  # pragma: no cover

    def update_policy(self, update: PolicyUpdate) -> str:
        ...  # pragma: no cover

    def delete_policy(self, policy_id: str) -> str:
        ...  # pragma: no cover

    def list_policies(self) -> list[Policy]:
        ...  # pragma: no cover


class TaskWaiter(Protocol):
    """Contract for blocking until an asynchronous service task completes."""

    def wait(self, task_id: str) -> None:
        """Return once *task_id* finished successfully.

        Raises
        ------
        TaskFailedError
            When the task ends in a failure stage.
        TaskTimeoutError
            When the task does not finish within the configured timeout.
        """
        ...  # pragma: no cover
