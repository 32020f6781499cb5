#!/usr/bin/env python
"""
Command line front end for the lifeguard admin portal.

Usage:
    lifeguard-portal regions list
    lifeguard-portal regions create --slug north --location "Main Pool=1 Beach Rd"
    lifeguard-portal managers create --name Ana --email ana@example.com --region north
    lifeguard-portal incidents list --status unfinished --expand
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, Optional, Sequence

from .config import get_settings
from .forms import LocationEntry
from .incident_view import StatusFilter, status_label
from .shell import PortalShell
from .stores.base import ConfirmCallback

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _prompt_confirm(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _print_alert(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _parse_location(raw: str) -> LocationEntry:
    name, _, address = raw.partition("=")
    return LocationEntry(name=name, address=address)


def _fail(message: Optional[str]) -> int:
    _print_alert(message or "Unknown error")
    return 1


# ---------- regions ----------


async def _regions(shell: PortalShell, args: argparse.Namespace) -> int:
    store = shell.regions
    if not await store.refresh():
        return _fail(store.error)

    if args.action == "list":
        if not len(store.items):
            print("No regions yet.")
        for region in store.items:
            managers = ", ".join(badge.name for badge in store.manager_badges(region.id)) or "-"
            print(f"{region.id}  {region.slug}  managers: {managers}")
            for name, address in region.locations.items():
                print(f"    {name}: {address}")
        return 0

    if args.action == "create":
        store.create_draft.slug = args.slug
        store.create_draft.entries = [_parse_location(raw) for raw in args.location] or [
            LocationEntry()
        ]
        created = await store.create()
        if created is None:
            return _fail(store.create_error)
        print(f"Region {created.slug!r} created ({created.id})")
        return 0

    if args.action == "delete":
        return 0 if await store.delete(args.id) else 1

    if args.action in {"assign", "unassign"}:
        region = store.items.get(args.region_id)
        if region is None:
            return _fail(f"Region {args.region_id} not found")
        if region.has_manager(args.manager_id) == (args.action == "assign"):
            print(f"Nothing to do: manager already {args.action}ed")
            return 0
        updated = await store.toggle_manager(args.region_id, args.manager_id)
        if updated is None:
            return 1
        print(f"{updated.slug}: {len(updated.managers)} manager(s)")
        return 0

    return 2


# ---------- managers ----------


async def _managers(shell: PortalShell, args: argparse.Namespace) -> int:
    store = shell.managers
    if not await store.refresh():
        return _fail(store.error)

    if args.action == "list":
        if not len(store.items):
            print("No managers yet.")
        for manager in store.items:
            regions = ", ".join(badge.slug for badge in store.region_badges(manager.id)) or "-"
            print(f"{manager.id}  {manager.name} <{manager.email}>  regions: {regions}")
        return 0

    if args.action == "create":
        store.create_draft.name = args.name
        store.create_draft.email = args.email
        store.create_draft.region_slugs = list(args.region)
        created = await store.create()
        if created is None:
            return _fail(store.create_error)
        print(f"Manager {created.name!r} created ({created.id})")
        return 0

    if args.action == "delete":
        return 0 if await store.delete(args.id) else 1

    return 2


# ---------- lifeguards ----------


async def _lifeguards(shell: PortalShell, args: argparse.Namespace) -> int:
    store = shell.lifeguards
    if not await store.refresh():
        return _fail(store.error)

    if args.action == "list":
        if not len(store.items):
            print("No lifeguards yet.")
        for lifeguard in store.items:
            region = store.region_label(lifeguard.region_id)
            print(f"{lifeguard.id}  {lifeguard.name}  {lifeguard.phone}  region: {region}")
        return 0

    if args.action == "create":
        store.create_draft.name = args.name
        store.create_draft.phone = args.phone
        store.create_draft.region_id = args.region_id
        created = await store.create()
        if created is None:
            return _fail(store.create_error)
        print(f"Lifeguard {created.name!r} created ({created.id})")
        return 0

    if args.action == "phone":
        lifeguard = await store.find_by_phone(args.phone)
        if lifeguard is None:
            return _fail(store.lookup_error)
        print(f"{lifeguard.id}  {lifeguard.name}  region: {store.region_label(lifeguard.region_id)}")
        return 0

    if args.action == "delete":
        return 0 if await store.delete(args.id) else 1

    return 2


# ---------- incidents ----------


async def _incidents(shell: PortalShell, args: argparse.Namespace) -> int:
    store = shell.incidents
    if not await store.refresh():
        return _fail(store.error)

    if args.action == "list":
        store.set_filters(
            name=args.name, date=args.date, region_id=args.region_id, status=args.status
        )
        groups = store.groups
        if not groups:
            print(store.empty_message())
        for group in groups:
            primary = group.primary
            count = "" if group.is_single else f"  ({len(group.incidents)} incidents)"
            print(
                f"[{group.group_id}] {primary.person_involved_name}{count}  "
                f"{status_label(primary.state)}  {primary.date_of_incident}  "
                f"region: {store.region_label(primary.region_id)}  "
                f"employee: {primary.employee_completing_report}"
            )
            if args.expand:
                store.toggle_group(group.group_id)
            if store.is_expanded(group.group_id):
                for incident in group.incidents:
                    print(
                        f"    {incident.id}  {incident.date_of_incident}  "
                        f"{status_label(incident.state)}  {incident.incident_summary}"
                    )
        return 0

    if args.action == "delete":
        return 0 if await store.delete(args.id) else 1

    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifeguard-portal", description="Manage regions, managers, lifeguards and incidents"
    )
    parser.add_argument("--base-url", help="Backend base URL (overrides LIFEGUARD_PORTAL_API_BASE_URL)")
    parser.add_argument("--yes", action="store_true", help="Answer yes to delete confirmations")
    parser.add_argument("--log-level", default=None)
    entities = parser.add_subparsers(dest="entity", required=True)

    regions = entities.add_parser("regions").add_subparsers(dest="action", required=True)
    regions.add_parser("list")
    create = regions.add_parser("create")
    create.add_argument("--slug", required=True)
    create.add_argument("--location", action="append", default=[], metavar="NAME=ADDRESS")
    regions.add_parser("delete").add_argument("id")
    for action in ("assign", "unassign"):
        edge = regions.add_parser(action)
        edge.add_argument("region_id")
        edge.add_argument("manager_id")

    managers = entities.add_parser("managers").add_subparsers(dest="action", required=True)
    managers.add_parser("list")
    create = managers.add_parser("create")
    create.add_argument("--name", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--region", action="append", default=[], metavar="SLUG")
    managers.add_parser("delete").add_argument("id")

    lifeguards = entities.add_parser("lifeguards").add_subparsers(dest="action", required=True)
    lifeguards.add_parser("list")
    create = lifeguards.add_parser("create")
    create.add_argument("--name", required=True)
    create.add_argument("--phone", required=True)
    create.add_argument("--region-id", required=True)
    lifeguards.add_parser("phone").add_argument("phone")
    lifeguards.add_parser("delete").add_argument("id")

    incidents = entities.add_parser("incidents").add_subparsers(dest="action", required=True)
    listing = incidents.add_parser("list")
    listing.add_argument("--name", default="")
    listing.add_argument("--date", default="", help="YYYY-MM-DD")
    listing.add_argument("--region-id", default="")
    listing.add_argument(
        "--status", default=StatusFilter.ALL.value, choices=[choice.value for choice in StatusFilter]
    )
    listing.add_argument("--expand", action="store_true", help="Show every report in each group")
    incidents.add_parser("delete").add_argument("id")

    return parser


HANDLERS: dict[str, Callable[[PortalShell, argparse.Namespace], Awaitable[int]]] = {
    "regions": _regions,
    "managers": _managers,
    "lifeguards": _lifeguards,
    "incidents": _incidents,
}


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.base_url:
        settings = settings.model_copy(update={"api_base_url": args.base_url.rstrip("/")})
    confirm: ConfirmCallback = (lambda message: True) if args.yes else _prompt_confirm
    async with PortalShell(settings, confirm=confirm, alert=_print_alert) as shell:
        return await HANDLERS[args.entity](shell, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
