"""
Shared steps of the delegation phases.

Both the collision check and the NS update start the same way: resolve the
API token, open a scoped provider session, resolve the parent zone and list
the records at the delegated name. Any failure here aborts the invocation
before a mutation is attempted.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from .cancellation import CancellationToken
from .models import DNSRecord, ReconciliationRequest, ZoneHandle
from ..exceptions import (
    ProviderError,
    SecretError,
    TokenMissing,
    ZoneNotFound,
)
from ..providers.dns_client import DNSClient, ProviderFactory
from ..providers.secret_resolver import SecretResolver
from ..utils.config import Settings

logger = logging.getLogger(__name__)


class PhaseFailure(Exception):
    """A read-only step failed; carries the outcome reason and zone, if known."""

    def __init__(self, reason: str, zone: Optional[ZoneHandle] = None):
        super().__init__(reason)
        self.reason = reason
        self.zone = zone


class DelegationPhase:
    """Base class for the check and update phases."""

    def __init__(
        self,
        settings: Settings,
        secret_resolver: SecretResolver,
        provider_factory: Optional[ProviderFactory] = None,
    ):
        self.settings = settings
        self.secret_resolver = secret_resolver
        self.provider_factory = provider_factory

    def _resolve_token(self, request: ReconciliationRequest) -> str:
        try:
            token = self.secret_resolver.resolve(request.secret_ref)
        except TokenMissing as e:
            raise PhaseFailure(str(e))
        except SecretError as e:
            raise PhaseFailure(f"Failed to get secret: {e}")

        if not token:
            raise PhaseFailure(str(TokenMissing()))
        return token

    @contextmanager
    def _open_client(
        self, request: ReconciliationRequest, cancel_token: CancellationToken
    ) -> Iterator[DNSClient]:
        token = self._resolve_token(request)
        cancel_token.raise_if_cancelled()

        with DNSClient(token, self.settings, cancel_token, self.provider_factory) as client:
            yield client

    def _load_records(
        self, client: DNSClient, request: ReconciliationRequest
    ) -> Tuple[ZoneHandle, List[DNSRecord]]:
        """Resolve the parent zone and list the records at the subdomain."""
        try:
            zone = client.resolve_zone(request.domain)
        except (ZoneNotFound, ProviderError) as e:
            raise PhaseFailure(f"Failed to get zone ID for {request.domain}: {e}")
        logger.info(f"Found zone ID: {zone.zone_id} for domain {request.domain}")

        try:
            records = client.list_records(zone, request.fqdn)
        except ProviderError as e:
            raise PhaseFailure(f"Failed to check DNS records: {e}", zone=zone)

        return zone, records
