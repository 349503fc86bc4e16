"""Custom exception hierarchy for admiral-cli.

All exceptions that cross layer boundaries must inherit from
:class:`AdmiralCliError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
AdmiralCliError
├── MissingArgumentError
├── MemoryParseError
├── InvalidCustomPropertyError
├── IncompleteCredentialsError
├── CertificateFileError
├── OperationAbortedError
│   └── CertificateNotAcceptedError
├── HostNotFoundError
├── ApiError
│   ├── AuthenticationError
│   ├── NotFoundError
│   └── ServerError
├── ServiceUnreachableError
├── TaskFailedError
├── TaskTimeoutError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from typing import Any


class AdmiralCliError(Exception):
    """Base exception for all admiral-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument handling -----------------------------------------------------

class MissingArgumentError(AdmiralCliError):
    """Raised when a required positional argument was not provided."""


class MemoryParseError(AdmiralCliError):
    """Raised when a memory size string cannot be converted to bytes."""


class InvalidCustomPropertyError(AdmiralCliError):
    """Raised when a ``--cp`` item is not of the form ``KEY=VALUE``."""


# --- Credentials -----------------------------------------------------------

class IncompleteCredentialsError(AdmiralCliError):
    """Raised when only one half of a credential pair was supplied."""


class CertificateFileError(AdmiralCliError):
    """Raised when a certificate file cannot be read."""


# --- User interaction ------------------------------------------------------

class OperationAbortedError(AdmiralCliError):
    """Raised when the user declines a confirmation prompt."""


class CertificateNotAcceptedError(OperationAbortedError):
    """Raised when the user refuses to trust a host certificate."""


# --- Remote service --------------------------------------------------------

class HostNotFoundError(AdmiralCliError):
    """Raised when no host is registered under the given address."""


class ApiError(AdmiralCliError):
    """Raised when the service answers with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: Any = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code
        self.detail: Any = detail


class AuthenticationError(ApiError):
    """Authentication failed (401/403)."""


class NotFoundError(ApiError):
    """Resource not found (404)."""


class ServerError(ApiError):
    """Server-side error (5xx)."""


class ServiceUnreachableError(AdmiralCliError):
    """Raised when the service cannot be reached at all."""


class TaskFailedError(AdmiralCliError):
    """Raised when a tracked service task ends in a failure stage."""


class TaskTimeoutError(AdmiralCliError):
    """Raised when a tracked service task does not finish in time."""


# --- Environment / configuration -------------------------------------------

class ConfigurationError(AdmiralCliError):
    """Raised when the loaded configuration is invalid."""


class EnvironmentError(AdmiralCliError):
    """Raised when a required runtime dependency is not available."""
