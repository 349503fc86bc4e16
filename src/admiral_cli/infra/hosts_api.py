"""REST implementation of :class:`~admiral_cli.core.protocols.HostGateway`.

Hosts are compute documents under ``/resources/compute``; they are
created and reconfigured through the ``/resources/hosts`` endpoint,
which also runs the certificate-trust handshake.  Removal goes through
the request broker and is tracked as a task.
"""

from __future__ import annotations

import logging
from typing import Any

from admiral_cli.core.models import (
    Certificate,
    CredentialsSpec,
    Host,
    HostSpec,
    HostSubmission,
    HostUpdate,
)
from admiral_cli.exceptions import ApiError, HostNotFoundError
from admiral_cli.infra.http_client import AdmiralClient, decode_json, iter_documents
from admiral_cli.utils.links import link_id, make_link

logger = logging.getLogger(__name__)

COMPUTE_FACTORY = "/resources/compute"
HOSTS_ENDPOINT = "/resources/hosts"
CREDENTIALS_FACTORY = "/core/auth/credentials"
RESOURCE_POOLS_FACTORY = "/resources/pools"
DEPLOYMENT_POLICIES_FACTORY = "/resources/deployment-policies"
REQUESTS_FACTORY = "/requests"

CREDENTIALS_PROP = "__authCredentialsLink"
DEPLOYMENT_POLICY_PROP = "__deploymentPolicyLink"
CONTAINERS_PROP = "__Containers"
ADAPTER_TYPE_PROP = "__adapterDockerType"
HOST_MARKER_FILTER = "customProperties/__computeContainerHost eq 'true'"

POWER_ON = "ON"
POWER_SUSPEND = "SUSPEND"


def _odata_quote(value: str) -> str:
    return value.replace("'", "''")


class RestHostGateway:
    """Concrete :class:`HostGateway` backed by :class:`AdmiralClient`.

    This class satisfies the protocol structurally — no explicit
    inheritance required.
    """

    def __init__(self, client: AdmiralClient) -> None:
        self._client = client

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def create_credentials(self, credentials: CredentialsSpec) -> str:
        if credentials.is_certificate:
            body: dict[str, Any] = {
                "type": "PublicKey",
                "publicKey": credentials.public_key,
                "privateKey": credentials.private_key,
            }
        else:
            body = {
                "type": "Password",
                "userEmail": credentials.username,
                "privateKey": credentials.password,
            }
        created = self._client.post_json(CREDENTIALS_FACTORY, body)
        return self._self_link_id(created, "credentials")

    # ------------------------------------------------------------------
    # Registration / reconfiguration
    # ------------------------------------------------------------------

    def submit_host(self, spec: HostSpec, *, accept_certificate: bool) -> HostSubmission:
        props: dict[str, Any] = {ADAPTER_TYPE_PROP: "API"}
        props.update(spec.custom_properties)
        if spec.credentials_id:
            props[CREDENTIALS_PROP] = make_link(CREDENTIALS_FACTORY, spec.credentials_id)
        if spec.deployment_policy_id:
            props[DEPLOYMENT_POLICY_PROP] = make_link(
                DEPLOYMENT_POLICIES_FACTORY, spec.deployment_policy_id
            )

        host_state: dict[str, Any] = {
            "address": spec.address,
            "customProperties": props,
        }
        if spec.resource_pool_id:
            host_state["resourcePoolLink"] = make_link(RESOURCE_POOLS_FACTORY, spec.resource_pool_id)

        return self._put_host(host_state, accept_certificate=accept_certificate, update=False)

    def submit_update(self, update: HostUpdate, *, accept_certificate: bool) -> HostSubmission:
        host_state = dict(self._find_host(update.address))
        props = dict(host_state.get("customProperties") or {})

        if update.name:
            host_state["name"] = update.name
        if update.resource_pool_id:
            host_state["resourcePoolLink"] = make_link(
                RESOURCE_POOLS_FACTORY, update.resource_pool_id
            )
        if update.credentials_id:
            props[CREDENTIALS_PROP] = make_link(CREDENTIALS_FACTORY, update.credentials_id)
        if update.deployment_policy_id:
            props[DEPLOYMENT_POLICY_PROP] = make_link(
                DEPLOYMENT_POLICIES_FACTORY, update.deployment_policy_id
            )
        host_state["customProperties"] = props

        result = self._put_host(host_state, accept_certificate=accept_certificate, update=True)
        if result.host_id is None and result.certificate is None:
            return HostSubmission(host_id=link_id(host_state.get("documentSelfLink")))
        return result

    def _put_host(
        self,
        host_state: dict[str, Any],
        *,
        accept_certificate: bool,
        update: bool,
    ) -> HostSubmission:
        body = {
            "hostState": host_state,
            "acceptCertificate": accept_certificate,
            "isUpdateOperation": update,
        }
        response = self._client.request("PUT", HOSTS_ENDPOINT, json=body)

        payload = decode_json(response)

        if isinstance(payload, dict) and payload.get("certificate"):
            logger.info("Service reports an untrusted certificate for %s", host_state.get("address"))
            return HostSubmission(certificate=self._parse_certificate(payload))

        location = response.headers.get("location")
        if location:
            return HostSubmission(host_id=link_id(location))
        if isinstance(payload, dict) and payload.get("documentSelfLink"):
            return HostSubmission(host_id=link_id(payload["documentSelfLink"]))
        return HostSubmission()

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def set_power_state(self, address: str, *, enabled: bool) -> str:
        doc = self._find_host(address)
        link = doc["documentSelfLink"]
        self._client.patch_json(link, {"powerState": POWER_ON if enabled else POWER_SUSPEND})
        return link_id(link)

    def remove_host(self, address: str) -> tuple[str, str]:
        doc = self._find_host(address)
        link = doc["documentSelfLink"]
        request = self._client.post_json(
            REQUESTS_FACTORY,
            {
                "resourceType": "CONTAINER_HOST",
                "operation": "REMOVE_RESOURCE",
                "resourceLinks": [link],
            },
        )
        return link_id(link), self._self_link_id(request, "removal request")

    def list_hosts(self, query: str | None = None) -> list[Host]:
        body = self._client.get_json(COMPUTE_FACTORY, params=self._list_params(query))
        return [self._parse_host(doc) for doc in iter_documents(body)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _list_params(query: str | None = None, *, address: str | None = None) -> dict[str, str]:
        clauses = [HOST_MARKER_FILTER]
        if address is not None:
            clauses.append(f"address eq '{_odata_quote(address)}'")
        if query:
            clauses.append(f"ALL_FIELDS eq '*{_odata_quote(query)}*'")
        return {"expand": "true", "$filter": " and ".join(clauses)}

    def _find_host(self, address: str) -> dict[str, Any]:
        """Return the compute document whose address equals *address* exactly.

        The address must be written as the service stores it (see
        ``admiral host ls``), e.g. ``https://10.0.0.5:2376``.
        """
        body = self._client.get_json(COMPUTE_FACTORY, params=self._list_params(address=address))
        docs = iter_documents(body)
        if not docs:
            raise HostNotFoundError(
                f"Host not found: {address}",
                hint="Run 'admiral host ls' to see registered hosts.",
            )
        if len(docs) > 1:
            logger.warning("%d hosts match %s; using the first one", len(docs), address)
        doc = docs[0]
        if not doc.get("documentSelfLink"):
            raise ApiError(
                f"The service returned host {address} without a document link.",
                detail=doc,
            )
        return doc

    @staticmethod
    def _self_link_id(body: Any, what: str) -> str:
        if isinstance(body, dict) and body.get("documentSelfLink"):
            return link_id(body["documentSelfLink"])
        raise ApiError(f"The service did not return a link for the new {what}.")

    @staticmethod
    def _parse_certificate(payload: dict[str, Any]) -> Certificate:
        return Certificate(
            pem=str(payload.get("certificate", "")),
            subject=str(payload.get("commonName") or payload.get("subject") or ""),
            issuer=str(payload.get("issuerName") or ""),
            fingerprint=str(payload.get("fingerprint") or ""),
        )

    @staticmethod
    def _parse_host(doc: dict[str, Any]) -> Host:
        props = doc.get("customProperties") or {}
        raw_containers = props.get(CONTAINERS_PROP)
        try:
            containers: int | None = int(raw_containers) if raw_containers is not None else None
        except (TypeError, ValueError):
            containers = None
        return Host(
            id=link_id(doc.get("documentSelfLink")),
            address=str(doc.get("address", "")),
            name=str(doc.get("name") or ""),
            power_state=str(doc.get("powerState") or "UNKNOWN"),
            containers=containers,
            resource_pool_id=link_id(doc.get("resourcePoolLink")),
            custom_properties={
                str(key): str(value)
                for key, value in props.items()
                if not str(key).startswith("__")
            },
        )
