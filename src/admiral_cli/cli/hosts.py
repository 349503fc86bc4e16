"""``admiral host`` sub-commands.

Each handler validates arguments, converts flags into core models,
opens one client for the service and prints a one-line result.  No
business logic lives here; it is all delegated to
:class:`~admiral_cli.core.host_service.HostService`.
"""

from __future__ import annotations

import argparse

from admiral_cli.cli import exit_codes
from admiral_cli.cli.console import output
from admiral_cli.cli.progress import TaskSpinner
from admiral_cli.cli.prompts import confirm_certificate, confirm_removal
from admiral_cli.cli.session import connect
from admiral_cli.cli.tables import print_hosts
from admiral_cli.config import Settings
from admiral_cli.core.host_service import HostService, credentials_from_flags
from admiral_cli.core.models import HostSpec, HostUpdate
from admiral_cli.core.properties import parse_custom_properties
from admiral_cli.core.validation import (
    HOST_ADDRESS_NOT_PROVIDED,
    require_first_arg,
    require_value,
)
from admiral_cli.infra.certificates import read_certificate
from admiral_cli.infra.hosts_api import RestHostGateway
from admiral_cli.infra.http_client import AdmiralClient
from admiral_cli.infra.task_tracker import RequestStatusTracker

CUSTOM_PROPERTIES_HELP = "Custom properties as KEY=VALUE, comma separated. May be repeated."
ADDRESS_HELP = "Host address exactly as listed by 'admiral host ls', e.g. https://10.0.0.5:2376."


# ---------------------------------------------------------------------------
# Parser wiring
# ---------------------------------------------------------------------------

def register(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    """Attach the ``host`` command group to the root parser."""
    host_parser = subparsers.add_parser("host", help="Manage container hosts.")
    host_sub = host_parser.add_subparsers(dest="action", metavar="ACTION")

    add = host_sub.add_parser("add", help="Add host.")
    add.add_argument("--ip", help="(Required) Address of host.")
    add.add_argument("--resource-pool", dest="resource_pool", help="(Required) Resource pool ID.")
    add.add_argument("--credentials", help="(Required if using existing one.) Credentials ID.")
    add.add_argument("--username", help="(Required if adding new credentials) Username.")
    add.add_argument("--password", help="(Required if adding new credentials) Password.")
    add.add_argument("--public", help="(Required if adding new credentials) Public certificate file.")
    add.add_argument("--private", help="(Required if adding new credentials) Private certificate file.")
    add.add_argument("--deployment-policy", dest="deployment_policy", help="Deployment policy ID.")
    add.add_argument("--accept", action="store_true", help="Auto accept if certificate is not trusted.")
    add.add_argument("--cp", action="append", default=[], metavar="KEY=VALUE", help=CUSTOM_PROPERTIES_HELP)
    add.set_defaults(handler=run_host_add)

    rm = host_sub.add_parser("rm", help="Remove existing host.")
    rm.add_argument("address", nargs="*", metavar="HOST-ADDRESS", help=ADDRESS_HELP)
    rm.add_argument("--force", action="store_true", help="Do not ask for confirmation.")
    rm.add_argument(
        "--async",
        dest="async_task",
        action="store_true",
        help="Return as soon as the removal was requested.",
    )
    rm.set_defaults(handler=run_host_remove)

    enable = host_sub.add_parser("enable", help="Enable host with address provided.")
    enable.add_argument("address", nargs="*", metavar="HOST-ADDRESS", help=ADDRESS_HELP)
    enable.set_defaults(handler=run_host_enable)

    disable = host_sub.add_parser("disable", help="Disable host with address provided.")
    disable.add_argument("address", nargs="*", metavar="HOST-ADDRESS", help=ADDRESS_HELP)
    disable.set_defaults(handler=run_host_disable)

    update = host_sub.add_parser("update", help="Edit existing hosts.")
    update.add_argument("address", nargs="*", metavar="HOST-ADDRESS", help=ADDRESS_HELP)
    update.add_argument("--name", help="New host name.")
    update.add_argument("--credentials", help="New credentials ID.")
    update.add_argument("--resource-pool", dest="resource_pool", help="New resource pool ID.")
    update.add_argument("--deployment-policy", dest="deployment_policy", help="New deployment policy ID.")
    update.add_argument("--accept", action="store_true", help="Auto accept if certificate is not trusted.")
    update.set_defaults(handler=run_host_update)

    ls = host_sub.add_parser("ls", help="Lists existing hosts.")
    ls.add_argument("-q", "--query", help="Add query.")
    ls.set_defaults(handler=run_host_list)

    return host_parser


# ---------------------------------------------------------------------------
# Removal tracking
# ---------------------------------------------------------------------------

class _SpinnerWaiter:
    """TaskWaiter that shows a spinner only while actually waiting."""

    def __init__(self, client: AdmiralClient, settings: Settings, description: str) -> None:
        self._client = client
        self._settings = settings
        self._description = description

    def wait(self, task_id: str) -> None:
        with TaskSpinner(self._description) as spinner:
            RequestStatusTracker(
                self._client,
                timeout=self._settings.task_timeout,
                poll_interval=self._settings.poll_interval,
                progress_callback=spinner,
            ).wait(task_id)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def run_host_add(args: argparse.Namespace) -> int:
    address = require_value(args.ip, HOST_ADDRESS_NOT_PROVIDED)
    properties = parse_custom_properties(args.cp)
    credentials = None
    if not args.credentials:
        credentials = credentials_from_flags(
            public=args.public,
            private=args.private,
            username=args.username,
            password=args.password,
            read_file=read_certificate,
        )

    spec = HostSpec(
        address=address,
        resource_pool_id=args.resource_pool or "",
        deployment_policy_id=args.deployment_policy,
        credentials_id=args.credentials,
        custom_properties=properties,
        accept_certificate=args.accept,
    )
    with connect(args) as client:
        service = HostService(RestHostGateway(client))
        host_id = service.add(spec, credentials, confirm_certificate=confirm_certificate)

    output.print(f"Host added: {host_id}")
    return exit_codes.SUCCESS


def run_host_remove(args: argparse.Namespace) -> int:
    address = require_first_arg(args.address, HOST_ADDRESS_NOT_PROVIDED)
    with connect(args) as client:
        waiter = _SpinnerWaiter(client, client.settings, f"Removing {address}")
        service = HostService(RestHostGateway(client), waiter)
        host_id = service.remove(
            address,
            force=args.force,
            async_task=args.async_task,
            confirm=confirm_removal,
        )

    output.print(f"Host removed: {host_id}")
    return exit_codes.SUCCESS


def run_host_enable(args: argparse.Namespace) -> int:
    address = require_first_arg(args.address, HOST_ADDRESS_NOT_PROVIDED)
    with connect(args) as client:
        host_id = HostService(RestHostGateway(client)).enable(address)

    output.print(f"Host enabled: {host_id}")
    return exit_codes.SUCCESS


def run_host_disable(args: argparse.Namespace) -> int:
    address = require_first_arg(args.address, HOST_ADDRESS_NOT_PROVIDED)
    with connect(args) as client:
        host_id = HostService(RestHostGateway(client)).disable(address)

    output.print(f"Host disabled: {host_id}")
    return exit_codes.SUCCESS


def run_host_update(args: argparse.Namespace) -> int:
    address = require_first_arg(args.address, HOST_ADDRESS_NOT_PROVIDED)
    update = HostUpdate(
        address=address,
        name=args.name,
        credentials_id=args.credentials,
        resource_pool_id=args.resource_pool,
        deployment_policy_id=args.deployment_policy,
        accept_certificate=args.accept,
    )
    with connect(args) as client:
        service = HostService(RestHostGateway(client))
        host_id = service.update(update, confirm_certificate=confirm_certificate)

    output.print(f"Host updated: {host_id}")
    return exit_codes.SUCCESS


def run_host_list(args: argparse.Namespace) -> int:
    with connect(args) as client:
        hosts = HostService(RestHostGateway(client)).list(args.query)

    print_hosts(hosts)
    return exit_codes.SUCCESS
