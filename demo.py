#!/usr/bin/env python3
"""
Subdomain Delegator - Demo Script

Walks through the collision check, a dry-run plan and the NS update
against the in-memory mock provider. No real DNS changes are made.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from subdomain_delegator.cli.main import display_changes_summary, display_outcome
from subdomain_delegator.core.delegation_manager import DelegationManager
from subdomain_delegator.core.models import DNSRecord
from subdomain_delegator.parsers.request_parser import parse_request
from subdomain_delegator.providers.mock_provider import MockDNSProvider
from subdomain_delegator.providers.secret_resolver import StaticSecretResolver
from subdomain_delegator.utils.config import Settings

console = Console()

DOMAIN = "example.com"
SUBDOMAIN = "api"
SECRET_REF = "demo/cloudflare/api-token"
ROUTE53_NAME_SERVERS = [
    "ns-1536.awsdns-00.co.uk.",
    "ns-0.awsdns-00.com.",
    "ns-1024.awsdns-00.org.",
    "ns-512.awsdns-00.net.",
]


def display_demo_header():
    console.print(
        Panel.fit(
            "[bold blue]Subdomain Delegator Demo[/bold blue]\n"
            f"Delegating [cyan]{SUBDOMAIN}.{DOMAIN}[/cyan] from Cloudflare to Route53\n"
            "[yellow]Using the mock provider - no real DNS changes[/yellow]",
            border_style="blue",
        )
    )
    console.print()


def display_records(provider: MockDNSProvider, title: str):
    """Display the records currently held by the mock provider."""
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Content", style="magenta")
    table.add_column("TTL", style="yellow")

    for record in provider.records:
        table.add_row(record.name, record.record_type, record.content, str(record.ttl))

    console.print(table)
    console.print()


def main():
    """Main demo function."""
    display_demo_header()

    fqdn = f"{SUBDOMAIN}.{DOMAIN}"
    provider = MockDNSProvider(
        zones={DOMAIN: "023e105f4ecef8ad9ca31a8372d0c353"},
        records=[
            DNSRecord(id="stale-1", record_type="NS", name=fqdn, content="ns1.old-host.net.", ttl=3600),
            DNSRecord(id="keep-1", record_type="NS", name=fqdn, content="ns-0.awsdns-00.com", ttl=3600),
        ],
    )
    manager = DelegationManager(
        Settings.from_dict({"provider": {"name": "mock"}}),
        secret_resolver=StaticSecretResolver({SECRET_REF: "demo-token"}),
        provider_factory=lambda *args: provider,
    )
    request = {
        "requestKind": "Create",
        "domain": DOMAIN,
        "subdomain": SUBDOMAIN,
        "secretRef": SECRET_REF,
    }

    display_records(provider, "Cloudflare records (before)")

    console.print("[bold]Step 1: Collision check[/bold]")
    display_outcome(manager.handle(dict(request, action="check")))
    console.print()

    update = dict(request, action="update", nameServers=ROUTE53_NAME_SERVERS)

    console.print("[bold]Step 2: Dry run[/bold]")
    display_changes_summary(manager.ns_reconciler.plan(parse_request(update)))
    console.print()

    console.print("[bold]Step 3: NS update[/bold]")
    display_outcome(manager.handle(update))
    console.print()

    display_records(provider, "Cloudflare records (after)")

    console.print("[bold]Step 4: Second update converges[/bold]")
    display_outcome(manager.handle(update))


if __name__ == "__main__":
    main()
