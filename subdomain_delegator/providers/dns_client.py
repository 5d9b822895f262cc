"""
DNS Client - Scoped session over the configured DNS provider

A DNSClient is built from a resolved token at the start of an invocation
and closed at its end. There is no process-wide client.
"""

import logging
from typing import Callable, List, Optional

from .base_provider import DNSProvider
from .cloudflare_provider import CloudflareProvider
from ..core.cancellation import CancellationToken
from ..core.models import DNSRecord, ZoneHandle
from ..utils.config import Settings

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, Settings, CancellationToken], DNSProvider]


def default_provider_factory(
    token: str, settings: Settings, cancel_token: CancellationToken
) -> DNSProvider:
    """Get DNS provider based on configuration."""
    provider_name = settings.provider.name

    if provider_name == "cloudflare":
        return CloudflareProvider(token, settings.provider, cancel_token)

    # Settings validation only admits cloudflare and mock
    from .mock_provider import MockDNSProvider

    logger.warning("Using in-memory mock provider, no real DNS changes will be made")
    return MockDNSProvider(default_zone_id="mock-zone")


class DNSClient:
    """Scoped DNS session for one invocation."""

    def __init__(
        self,
        token: str,
        settings: Settings,
        cancel_token: Optional[CancellationToken] = None,
        provider_factory: Optional[ProviderFactory] = None,
    ):
        """Initialize DNS client with a resolved token."""
        self.settings = settings
        self.cancel_token = cancel_token or CancellationToken()
        factory = provider_factory or default_provider_factory
        self.provider = factory(token, settings, self.cancel_token)

    def __enter__(self) -> "DNSClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.provider.close()

    def resolve_zone(self, domain: str) -> ZoneHandle:
        """Resolve the zone for a parent domain."""
        self.cancel_token.raise_if_cancelled()
        zone_id = self.provider.zone_id_by_name(domain)
        return ZoneHandle(zone_id=zone_id, name=domain)

    def list_records(self, zone: ZoneHandle, name: str) -> List[DNSRecord]:
        """Get all DNS records at a name."""
        self.cancel_token.raise_if_cancelled()
        return self.provider.list_records(zone.zone_id, name)

    def create_ns_record(self, zone: ZoneHandle, name: str, nameserver: str) -> str:
        """Create an NS record with the configured TTL."""
        self.cancel_token.raise_if_cancelled()
        return self.provider.create_record(
            zone.zone_id, "NS", name, nameserver, self.settings.provider.ns_record_ttl
        )

    def delete_record(self, zone: ZoneHandle, record: DNSRecord) -> None:
        """Delete a DNS record."""
        self.cancel_token.raise_if_cancelled()
        self.provider.delete_record(zone.zone_id, record.id)
