"""Core host service — orchestrates host registration and maintenance.

This is the central service class consumed by the ``host`` commands.
It depends on a :class:`~admiral_cli.core.protocols.HostGateway`
injected at construction time (dependency inversion), keeping the core
free of any network imports.  User interaction (confirmation prompts)
is injected as plain callables.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``, no filesystem access.
* Only :class:`~admiral_cli.exceptions.AdmiralCliError` subclasses escape.
* Argument checks run before the gateway is touched.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from admiral_cli.core.models import (
    Certificate,
    CredentialsSpec,
    Host,
    HostSpec,
    HostSubmission,
    HostUpdate,
)
from admiral_cli.core.protocols import HostGateway, TaskWaiter
from admiral_cli.core.validation import HOST_ADDRESS_NOT_PROVIDED, require_value
from admiral_cli.exceptions import (
    AdmiralCliError,
    ApiError,
    CertificateNotAcceptedError,
    IncompleteCredentialsError,
    OperationAbortedError,
)

logger = logging.getLogger(__name__)

ConfirmCertificate = Callable[[Certificate], bool]
ConfirmRemoval = Callable[[str], bool]

REMOVE_ABORTED = "Remove command aborted!"


def credentials_from_flags(
    *,
    public: str | None = None,
    private: str | None = None,
    username: str | None = None,
    password: str | None = None,
    read_file: Callable[[str], str],
) -> CredentialsSpec | None:
    """Build new credentials from ``host add`` flags.

    Certificate paths are read through *read_file* only after both
    halves of the pair are known to be present.  Returns ``None`` when
    no credential flags were given.
    """
    if public or private:
        if not (public and private):
            raise IncompleteCredentialsError(
                "Both public and private certificates are required.",
                hint="Pass --public CERT and --private CERT together.",
            )
        return CredentialsSpec(public_key=read_file(public), private_key=read_file(private))

    if username or password:
        if not (username and password):
            raise IncompleteCredentialsError(
                "Both username and password are required.",
                hint="Pass --username and --password together.",
            )
        return CredentialsSpec(username=username, password=password)

    return None


class HostService:
    """Stateless service driving the ``host`` commands.

    Parameters
    ----------
    gateway:
        Any object satisfying the :class:`HostGateway` protocol.
    waiter:
        Optional :class:`TaskWaiter` used to block on removals.
    """

    def __init__(self, gateway: HostGateway, waiter: TaskWaiter | None = None) -> None:
        self._gateway: HostGateway = gateway
        self._waiter: TaskWaiter | None = waiter

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(
        self,
        spec: HostSpec,
        credentials: CredentialsSpec | None = None,
        *,
        confirm_certificate: ConfirmCertificate | None = None,
    ) -> str:
        """Register a host and return its id.

        Raises
        ------
        MissingArgumentError
            If the host address is empty.
        CertificateNotAcceptedError
            If the host certificate is untrusted and the user refuses it.
        """
        self._require_address(spec.address)

        if credentials is not None:
            if spec.credentials_id:
                logger.warning(
                    "Existing credentials %s given; ignoring new credential flags",
                    spec.credentials_id,
                )
            else:
                credentials_id = self._gateway.create_credentials(credentials)
                logger.info("Created credentials %s", credentials_id)
                spec = dataclasses.replace(spec, credentials_id=credentials_id)

        return self._submit_trusted(
            lambda accept: self._gateway.submit_host(spec, accept_certificate=accept),
            accept=spec.accept_certificate,
            confirm=confirm_certificate,
        )

    def update(
        self,
        update: HostUpdate,
        *,
        confirm_certificate: ConfirmCertificate | None = None,
    ) -> str:
        """Apply *update* to an existing host and return its id."""
        self._require_address(update.address)
        return self._submit_trusted(
            lambda accept: self._gateway.submit_update(update, accept_certificate=accept),
            accept=update.accept_certificate,
            confirm=confirm_certificate,
        )

    def remove(
        self,
        address: str,
        *,
        force: bool = False,
        async_task: bool = False,
        confirm: ConfirmRemoval | None = None,
    ) -> str:
        """Remove the host at *address* and return its id.

        Unless *force* is set, *confirm* is asked first and a negative
        answer aborts before anything is sent to the service.  Without
        *async_task* the call blocks until the removal task finishes.
        """
        self._require_address(address)

        if not force:
            if confirm is None or not confirm(address):
                raise OperationAbortedError(REMOVE_ABORTED)

        host_id, task_id = self._gateway.remove_host(address)
        if async_task or self._waiter is None:
            logger.info("Removal of %s submitted as task %s", address, task_id)
        else:
            self._waiter.wait(task_id)
        return host_id

    def enable(self, address: str) -> str:
        self._require_address(address)
        return self._gateway.set_power_state(address, enabled=True)

    def disable(self, address: str) -> str:
        self._require_address(address)
        return self._gateway.set_power_state(address, enabled=False)

    def list(self, query: str | None = None) -> list[Host]:
        return self._gateway.list_hosts(query or None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_address(address: str | None) -> None:
        require_value(address, HOST_ADDRESS_NOT_PROVIDED)

    @staticmethod
    def _submit_trusted(
        submit: Callable[[bool], HostSubmission],
        *,
        accept: bool,
        confirm: ConfirmCertificate | None,
    ) -> str:
        """Submit, resolving an untrusted-certificate answer once."""
        result = submit(accept)
        if result.needs_trust and not accept:
            if confirm is None or not confirm(result.certificate):
                raise CertificateNotAcceptedError(
                    "Certificate not accepted. Host was not saved.",
                    hint="Re-run with --accept to trust the host certificate.",
                )
            result = submit(True)

        if result.needs_trust:
            raise ApiError("The service did not accept the host certificate.")
        if not result.host_id:
            raise AdmiralCliError("The service did not return a host id.")
        return result.host_id
