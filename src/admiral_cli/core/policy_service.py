"""Core policy service — placement-policy commands."""

from __future__ import annotations

from admiral_cli.core.models import Policy, PolicySpec, PolicyUpdate
from admiral_cli.core.protocols import PolicyGateway
from admiral_cli.core.validation import (
    POLICY_ID_NOT_PROVIDED,
    POLICY_NAME_NOT_PROVIDED,
    require_value,
)
from admiral_cli.exceptions import AdmiralCliError


class PolicyService:
    """Stateless service driving the ``policy`` commands.

    Parameters
    ----------
    gateway:
        Any object satisfying the :class:`PolicyGateway` protocol.
    """

    def __init__(self, gateway: PolicyGateway) -> None:
        self._gateway: PolicyGateway = gateway

    def add(self, spec: PolicySpec) -> str:
        require_value(spec.name, POLICY_NAME_NOT_PROVIDED)
        if spec.memory_limit < 0:
            raise AdmiralCliError("Memory limit must not be negative.")
        return self._gateway.create_policy(spec)

    def update(self, update: PolicyUpdate) -> str:
        self._require_id(update.policy_id)
        if not update.has_changes():
            raise AdmiralCliError(
                "Nothing to update.",
                hint="Pass at least one of the policy update options.",
            )
        return self._gateway.update_policy(update)

    def remove(self, policy_id: str) -> str:
        self._require_id(policy_id)
        return self._gateway.delete_policy(policy_id)

    def list(self) -> list[Policy]:
        return self._gateway.list_policies()

    @staticmethod
    def _require_id(policy_id: str | None) -> None:
        require_value(policy_id, POLICY_ID_NOT_PROVIDED)
