#!/usr/bin/env python3
"""
Command line front end of the entity administration console.

Usage examples::

    entity-admin sections
    entity-admin open entities-manage
    entity-admin list locations
    entity-admin show users 4
    entity-admin create entity-types --set name="Cooperativa"
    entity-admin update locations 7 --data '{"is_active": false}'
    entity-admin delete branch-hours 3 --yes

Records are printed as JSON on stdout.  Notifications are printed on
stderr (``[+]`` for success, ``[!]`` for failures) and any failure
makes the command exit with status 1.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from entity_admin.client import ApiClient, ApiError
from entity_admin.console import Notification, Notifier, RecordForm, RecordList
from entity_admin.core.config import settings
from entity_admin.core.logging_config import setup_logging
from entity_admin.services import RESOURCES_BY_KEY, ServiceRegistry
from entity_admin.state import SECTIONS, AppState, JsonFileStore, KeyValueStore

_JSON_LITERALS = {"true", "false", "null"}
_JSON_OPENERS = ("\"", "[", "{")


def _print_notification(notification: Notification) -> None:
    marker = "[!]" if notification.variant == "destructive" else "[+]"
    print(f"{marker} {notification.description}", file=sys.stderr)


def _dump(value: Any) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in value]
    return json.dumps(value, ensure_ascii=False, indent=2)


def _parse_assignment(text: str) -> tuple:
    """Parse ``key=value``.

    Values stay strings (the schemas coerce numeric ids) unless they are
    ``true``/``false``/``null`` or quoted or structured JSON, so that
    codes such as ``code=4711`` keep their text type.
    """
    key, sep, raw = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected key=value, got {text!r}")
    value: Any = raw
    if raw in _JSON_LITERALS or raw[:1] in _JSON_OPENERS:
        try:
            value = json.loads(raw)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid JSON value for {key.strip()}: {raw!r}")
    return key.strip(), value


def _record_data(args: argparse.Namespace) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if args.data:
        loaded = json.loads(args.data)
        if not isinstance(loaded, dict):
            raise ValueError("--data must be a JSON object")
        data.update(loaded)
    for key, value in args.set or []:
        data[key] = value
    return data


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="entity-admin", description="Manage entities, branches and related records.")
    ap.add_argument("--base-url", help=f"API base URL (default: {settings.base_url})")
    ap.add_argument("--api-key", help="Bearer token for the API")
    ap.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("sections", help="List console sections")
    p = sub.add_parser("open", help="Make a section active")
    p.add_argument("section")

    resources = sorted(RESOURCES_BY_KEY)
    p = sub.add_parser("list", help="List records of a resource")
    p.add_argument("resource", choices=resources)

    p = sub.add_parser("show", help="Show one record")
    p.add_argument("resource", choices=resources)
    p.add_argument("id", type=int)

    p = sub.add_parser("related", help="Show the choices for a resource's foreign keys")
    p.add_argument("resource", choices=resources)

    for name, with_id in (("create", False), ("update", True)):
        p = sub.add_parser(name, help=f"{name.capitalize()} a record")
        p.add_argument("resource", choices=resources)
        if with_id:
            p.add_argument("id", type=int)
        p.add_argument("--data", help="Record fields as a JSON object")
        p.add_argument("--set", action="append", type=_parse_assignment, metavar="KEY=VALUE", help="Set one field")

    p = sub.add_parser("delete", help="Delete a record")
    p.add_argument("resource", choices=resources)
    p.add_argument("id", type=int)
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    return ap


def _confirm(record: Any) -> bool:
    record_id = record.id if isinstance(record, BaseModel) else record
    answer = input(f"Delete record #{record_id}? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def main(
    argv: Optional[List[str]] = None,
    *,
    registry: Optional[ServiceRegistry] = None,
    store: Optional[KeyValueStore] = None,
) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or settings.log_level, settings.log_file)

    notifier = Notifier(_print_notification)
    state = AppState(store if store is not None else JsonFileStore(settings.state_file))

    if args.command == "sections":
        for section in SECTIONS:
            marker = "*" if section.id == state.active_section else " "
            print(f"{marker} {section.id:<24} {section.label}")
        return 0
    if args.command == "open":
        try:
            section = state.select(args.section)
        except KeyError as e:
            print(f"[!] {e.args[0]}", file=sys.stderr)
            return 1
        print(f"{section.label}: {section.description}")
        return 0

    if registry is None:
        config = dataclasses.replace(
            settings,
            base_url=args.base_url or settings.base_url,
            api_key=args.api_key or settings.api_key,
        )
        registry = ServiceRegistry(ApiClient.from_settings(config))

    try:
        return _run_resource_command(args, registry, notifier, state)
    finally:
        registry.client.close()


def _run_resource_command(
    args: argparse.Namespace, registry: ServiceRegistry, notifier: Notifier, state: AppState
) -> int:
    records = RecordList(registry, args.resource, notifier=notifier, on_success=state.form_succeeded)

    if args.command == "list":
        failures = len(notifier.history)
        rows = records.load()
        if any(n.variant == "destructive" for n in notifier.history[failures:]):
            return 1
        print(_dump(rows))
        return 0

    if args.command == "show":
        try:
            record = registry[args.resource].get_by_id(args.id)
        except ApiError:
            notifier.error(f"Failed to load {records.resource.singular}")
            return 1
        print(_dump(record))
        return 0

    if args.command == "related":
        failures = len(notifier.history)
        options = records.load_related()
        print(_dump({field: {str(k): v for k, v in choices.items()} for field, choices in options.items()}))
        return 1 if len(notifier.history) > failures else 0

    if args.command == "delete":
        confirm = None if args.yes else _confirm
        return 0 if records.remove(args.id, confirm=confirm) else 1

    try:
        data = _record_data(args)
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1

    if args.command == "create":
        form: Optional[RecordForm] = RecordForm(
            registry, args.resource, notifier=notifier, on_success=state.form_succeeded
        )
    else:
        form = records.edit(args.id)
        if form is None:
            return 1
    saved = form.submit(data)
    if saved is None:
        for field, message in form.errors.items():
            print(f"[!] {field}: {message}", file=sys.stderr)
        return 1
    print(_dump(saved))
    return 0


if __name__ == "__main__":
    sys.exit(main())
