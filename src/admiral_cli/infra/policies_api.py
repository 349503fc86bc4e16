"""REST implementation of :class:`~admiral_cli.core.protocols.PolicyGateway`.

Placement policies are documents under ``/resources/group-policies``.
A policy's *group* is stored as a tenant link (``/tenants/<group>``).
"""

from __future__ import annotations

from typing import Any

from admiral_cli.core.models import Policy, PolicySpec, PolicyUpdate
from admiral_cli.exceptions import ApiError
from admiral_cli.infra.hosts_api import DEPLOYMENT_POLICIES_FACTORY, RESOURCE_POOLS_FACTORY
from admiral_cli.infra.http_client import AdmiralClient, iter_documents
from admiral_cli.utils.links import link_id, make_link

POLICIES_FACTORY = "/resources/group-policies"
TENANTS_FACTORY = "/tenants"


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class RestPolicyGateway:
    """Concrete :class:`PolicyGateway` backed by :class:`AdmiralClient`."""

    def __init__(self, client: AdmiralClient) -> None:
        self._client = client

    def create_policy(self, spec: PolicySpec) -> str:
        body: dict[str, Any] = {
            "name": spec.name,
            "memoryLimit": spec.memory_limit,
        }
        if spec.instances is not None:
            body["maxNumberInstances"] = spec.instances
        if spec.cpu_shares is not None:
            body["cpuShares"] = spec.cpu_shares
        if spec.priority is not None:
            body["priority"] = spec.priority
        if spec.group:
            body["tenantLinks"] = [make_link(TENANTS_FACTORY, spec.group)]
        if spec.resource_pool_id:
            body["resourcePoolLink"] = make_link(RESOURCE_POOLS_FACTORY, spec.resource_pool_id)
        if spec.deployment_policy_id:
            body["deploymentPolicyLink"] = make_link(
                DEPLOYMENT_POLICIES_FACTORY, spec.deployment_policy_id
            )

        created = self._client.post_json(POLICIES_FACTORY, body)
        if not isinstance(created, dict) or not created.get("documentSelfLink"):
            raise ApiError("The service did not return a link for the new policy.")
        return link_id(created["documentSelfLink"])

    def update_policy(self, update: PolicyUpdate) -> str:
        link = make_link(POLICIES_FACTORY, update.policy_id)
        doc = self._client.get_json(link)
        if not isinstance(doc, dict):
            raise ApiError(f"Unexpected response for policy {update.policy_id}.")

        if update.name is not None:
            doc["name"] = update.name
        if update.group is not None:
            doc["tenantLinks"] = [make_link(TENANTS_FACTORY, update.group)]
        if update.resource_pool_id is not None:
            doc["resourcePoolLink"] = make_link(RESOURCE_POOLS_FACTORY, update.resource_pool_id)
        if update.deployment_policy_id is not None:
            doc["deploymentPolicyLink"] = make_link(
                DEPLOYMENT_POLICIES_FACTORY, update.deployment_policy_id
            )
        if update.cpu_shares is not None:
            doc["cpuShares"] = update.cpu_shares
        if update.instances is not None:
            doc["maxNumberInstances"] = update.instances
        if update.priority is not None:
            doc["priority"] = update.priority
        if update.memory_limit is not None:
            doc["memoryLimit"] = update.memory_limit

        self._client.put_json(link, doc)
        return link_id(link)

    def delete_policy(self, policy_id: str) -> str:
        link = make_link(POLICIES_FACTORY, policy_id)
        self._client.delete(link)
        return link_id(link)

    def list_policies(self) -> list[Policy]:
        body = self._client.get_json(POLICIES_FACTORY, params={"expand": "true"})
        return [self._parse_policy(doc) for doc in iter_documents(body)]

    @staticmethod
    def _parse_policy(doc: dict[str, Any]) -> Policy:
        tenants = doc.get("tenantLinks") or []
        return Policy(
            id=link_id(doc.get("documentSelfLink")),
            name=str(doc.get("name") or ""),
            group=", ".join(link_id(t) for t in tenants),
            resource_pool_id=link_id(doc.get("resourcePoolLink")),
            deployment_policy_id=link_id(doc.get("deploymentPolicyLink")),
            priority=_optional_int(doc.get("priority")),
            instances=_optional_int(doc.get("maxNumberInstances")),
            cpu_shares=_optional_int(doc.get("cpuShares")),
            memory_limit=_optional_int(doc.get("memoryLimit")),
        )
