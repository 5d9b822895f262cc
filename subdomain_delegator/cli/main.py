#!/usr/bin/env python3
"""
Subdomain Delegator - Command Line Interface

Runs the collision check, the NS update, or a dry-run plan of the update
from an operator's shell.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..core.delegation_manager import DelegationManager
from ..core.models import NSChangeSet, ReconciliationOutcome, Status
from ..exceptions import DelegationError
from ..parsers.request_parser import parse_request
from ..utils.config import configure_logging, load_settings

console = Console()
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Subdomain Delegator - Cloudflare to Route53 NS delegation"
    )

    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Configuration file path (default: built-in defaults)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the outcome as JSON"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("check", "Check the subdomain for colliding DNS records"),
        ("update", "Sync the subdomain NS records to the given name servers"),
        ("plan", "Show the NS changes an update would make"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("--domain", "-d", required=True, help="Parent domain")
        command.add_argument("--subdomain", "-s", required=True, help="Subdomain label(s)")
        command.add_argument(
            "--secret-ref",
            "-r",
            required=True,
            help="Secret holding the API token (Secrets Manager ID or env var name)",
        )
        if name != "check":
            command.add_argument(
                "--name-server",
                "-n",
                action="append",
                dest="name_servers",
                required=True,
                help="Authoritative name server (repeatable)",
            )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except DelegationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    configure_logging(settings, verbose=args.verbose)
    manager = DelegationManager(settings)

    raw_request = {
        "requestKind": "Update",
        "domain": args.domain,
        "subdomain": args.subdomain,
        "secretRef": args.secret_ref,
        "action": "check" if args.command == "check" else "update",
    }
    if args.command != "check":
        raw_request["nameServers"] = args.name_servers

    if args.command == "plan":
        sys.exit(run_plan(manager, raw_request, args.json))

    outcome = manager.handle(raw_request)
    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        display_outcome(outcome)

    sys.exit(0 if outcome.status is Status.SUCCESS else 1)


def run_plan(manager: DelegationManager, raw_request, as_json: bool) -> int:
    """Print the change set for an update without applying it."""
    try:
        request = parse_request(raw_request)
        changes = manager.ns_reconciler.plan(request)
    except DelegationError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if as_json:
        print(
            json.dumps(
                {
                    "toAdd": changes.to_add,
                    "toRemove": [r.content for r in changes.to_remove],
                    "unchanged": [r.content for r in changes.unchanged],
                },
                indent=2,
            )
        )
        return 0

    console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")
    display_changes_summary(changes)
    return 0


def display_changes_summary(changes: NSChangeSet):
    """Display a summary of planned changes."""
    table = Table(title="NS Changes Summary")
    table.add_column("Operation", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_column("Name servers", style="white")

    if changes.to_add:
        table.add_row("Create", str(len(changes.to_add)), ", ".join(changes.to_add))
    if changes.to_remove:
        table.add_row(
            "Delete",
            str(len(changes.to_remove)),
            ", ".join(r.content for r in changes.to_remove),
        )
    if changes.unchanged:
        table.add_row(
            "No Change",
            str(len(changes.unchanged)),
            ", ".join(r.content for r in changes.unchanged),
        )

    console.print(table)
    console.print(f"\n[bold]Total changes: {changes.total_changes}[/bold]")


def display_outcome(outcome: ReconciliationOutcome):
    """Display an outcome as a table."""
    colour = {Status.SUCCESS: "green", Status.FAILED: "red"}.get(outcome.status, "yellow")
    console.print(f"[{colour}]{outcome.status.value}[/{colour}]: {outcome.reason}")

    data = outcome.data
    if not data:
        return

    table = Table(title="Delegation Result")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    for key, value in data.items():
        if key == "warnings":
            continue
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(key, str(value))
    console.print(table)

    for error in outcome.delete_errors + outcome.add_errors:
        console.print(f"[yellow]Warning: {error}[/yellow]")


if __name__ == "__main__":
    main()
