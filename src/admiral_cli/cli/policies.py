"""``admiral policy`` sub-commands."""

from __future__ import annotations

import argparse

from admiral_cli.cli import exit_codes
from admiral_cli.cli.console import output
from admiral_cli.cli.session import connect
from admiral_cli.cli.tables import print_policies
from admiral_cli.core.models import PolicySpec, PolicyUpdate
from admiral_cli.core.policy_service import PolicyService
from admiral_cli.core.units import parse_memory
from admiral_cli.core.validation import (
    POLICY_ID_NOT_PROVIDED,
    POLICY_NAME_NOT_PROVIDED,
    require_first_arg,
)
from admiral_cli.infra.policies_api import RestPolicyGateway

MEMORY_HELP = "Memory limit. Units supported: kb/mb/gb. Example: 1024mb"


def register(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    """Attach the ``policy`` command group to the root parser."""
    policy_parser = subparsers.add_parser("policy", help="Manage placement policies.")
    policy_sub = policy_parser.add_subparsers(dest="action", metavar="ACTION")

    add = policy_sub.add_parser("add", help="Add policy.")
    add.add_argument("name", nargs="*", metavar="NAME")
    add.add_argument("--cpu", type=int, help="CPU shares.")
    add.add_argument("--instances", type=int, help="(Required) Instances.")
    add.add_argument("--prio", type=int, help="Priority.")
    add.add_argument("--group", help="(Required) Group.")
    add.add_argument("--resource-pool", dest="resource_pool", help="(Required) Resource pool ID.")
    add.add_argument("--deployment-policy", dest="deployment_policy", help="(Required) Deployment policy ID.")
    add.add_argument("--memory", default="0kb", help=MEMORY_HELP)
    add.set_defaults(handler=run_policy_add)

    rm = policy_sub.add_parser("rm", help="Remove existing policy.")
    rm.add_argument("policy_id", nargs="*", metavar="POLICY-ID")
    rm.set_defaults(handler=run_policy_remove)

    update = policy_sub.add_parser("update", help="Update policy.")
    update.add_argument("policy_id", nargs="*", metavar="POLICY-ID")
    update.add_argument("--name", help="New name.")
    update.add_argument("--cpu", type=int, help="New CPU shares.")
    update.add_argument("--instances", type=int, help="New instances.")
    update.add_argument("--prio", type=int, help="New priority.")
    update.add_argument("--group", help="New group.")
    update.add_argument("--resource-pool", dest="resource_pool", help="New resource pool ID.")
    update.add_argument("--deployment-policy", dest="deployment_policy", help="New deployment policy ID.")
    update.add_argument("--memory", help=f"New {MEMORY_HELP.lower()}")
    update.set_defaults(handler=run_policy_update)

    ls = policy_sub.add_parser("ls", help="Lists existing policies.")
    ls.set_defaults(handler=run_policy_list)

    return policy_parser


def run_policy_add(args: argparse.Namespace) -> int:
    name = require_first_arg(args.name, POLICY_NAME_NOT_PROVIDED)
    spec = PolicySpec(
        name=name,
        instances=args.instances,
        group=args.group,
        resource_pool_id=args.resource_pool,
        deployment_policy_id=args.deployment_policy,
        cpu_shares=args.cpu,
        priority=args.prio,
        memory_limit=parse_memory(args.memory),
    )
    with connect(args) as client:
        policy_id = PolicyService(RestPolicyGateway(client)).add(spec)

    output.print(f"Policy added: {policy_id}")
    return exit_codes.SUCCESS


def run_policy_remove(args: argparse.Namespace) -> int:
    policy_id = require_first_arg(args.policy_id, POLICY_ID_NOT_PROVIDED)
    with connect(args) as client:
        removed = PolicyService(RestPolicyGateway(client)).remove(policy_id)

    output.print(f"Policy removed: {removed}")
    return exit_codes.SUCCESS


def run_policy_update(args: argparse.Namespace) -> int:
    policy_id = require_first_arg(args.policy_id, POLICY_ID_NOT_PROVIDED)
    update = PolicyUpdate(
        policy_id=policy_id,
        name=args.name,
        group=args.group,
        resource_pool_id=args.resource_pool,
        deployment_policy_id=args.deployment_policy,
        cpu_shares=args.cpu,
        instances=args.instances,
        priority=args.prio,
        memory_limit=parse_memory(args.memory) if args.memory is not None else None,
    )
    with connect(args) as client:
        updated = PolicyService(RestPolicyGateway(client)).update(update)

    output.print(f"Policy updated: {updated}")
    return exit_codes.SUCCESS


def run_policy_list(args: argparse.Namespace) -> int:
    with connect(args) as client:
        policies = PolicyService(RestPolicyGateway(client)).list()

    print_policies(policies)
    return exit_codes.SUCCESS
