"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores zones and records in
memory, journals every call, and can be told to fail individual creates
and deletes.
"""

import itertools
import logging
from typing import Dict, Iterable, List, Optional, Set

from .base_provider import DNSProvider
from ..core.models import DNSRecord
from ..exceptions import ProviderError, ZoneNotFound

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(
        self,
        zones: Optional[Dict[str, str]] = None,
        records: Optional[Iterable[DNSRecord]] = None,
        fail_create_for: Iterable[str] = (),
        fail_delete_for: Iterable[str] = (),
        fail_list: bool = False,
        default_zone_id: Optional[str] = None,
    ):
        """
        Args:
            zones: Mapping of domain name to zone ID.
            records: Initial records, shared by all zones.
            fail_create_for: Record contents whose creation raises ProviderError.
            fail_delete_for: Record contents whose deletion raises ProviderError.
            fail_list: Make every list_records call raise ProviderError.
            default_zone_id: Zone ID returned for domains missing from `zones`.
        """
        self.zones = dict(zones or {})
        self.records: List[DNSRecord] = list(records or [])
        self.fail_create_for: Set[str] = set(fail_create_for)
        self.fail_delete_for: Set[str] = set(fail_delete_for)
        self.fail_list = fail_list
        self.default_zone_id = default_zone_id
        self.calls: List[tuple] = []
        self.closed = False
        self._ids = itertools.count(1)
        logger.info("Mock DNS provider initialized")

    def zone_id_by_name(self, domain: str) -> str:
        self.calls.append(("zone_id_by_name", domain))
        if domain in self.zones:
            return self.zones[domain]
        if self.default_zone_id:
            return self.default_zone_id
        raise ZoneNotFound(domain)

    def list_records(self, zone_id: str, name: str) -> List[DNSRecord]:
        self.calls.append(("list_records", zone_id, name))
        if self.fail_list:
            raise ProviderError("Mock: list failure")
        matching = [record for record in self.records if record.name == name]
        logger.info(f"Mock: Retrieved {len(matching)} records for {name}")
        return matching

    def create_record(
        self, zone_id: str, record_type: str, name: str, content: str, ttl: int
    ) -> str:
        self.calls.append(("create_record", zone_id, record_type, name, content, ttl))
        if content in self.fail_create_for:
            raise ProviderError(f"Mock: refused to create {content}")

        record = DNSRecord(
            id=f"mock-{next(self._ids)}",
            record_type=record_type,
            name=name,
            content=content,
            ttl=ttl,
        )
        self.records.append(record)
        logger.info(f"Mock: Created record {name} {record_type} {content}")
        return record.id

    def delete_record(self, zone_id: str, record_id: str) -> None:
        self.calls.append(("delete_record", zone_id, record_id))
        for i, existing in enumerate(self.records):
            if existing.id == record_id:
                if existing.content in self.fail_delete_for:
                    raise ProviderError(f"Mock: refused to delete {existing.content}")
                del self.records[i]
                logger.info(f"Mock: Deleted record {record_id}")
                return

        raise ProviderError(f"Record {record_id} not found for deletion")

    def close(self) -> None:
        self.closed = True

    @property
    def mutations(self) -> List[tuple]:
        """Journal entries for calls that change provider state."""
        return [call for call in self.calls if call[0] in ("create_record", "delete_record")]
