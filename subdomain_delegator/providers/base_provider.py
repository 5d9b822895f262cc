"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
A provider instance is one authenticated session and lives for one invocation.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.models import DNSRecord


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def zone_id_by_name(self, domain: str) -> str:
        """Return the provider zone ID for a domain, or raise ZoneNotFound."""
        pass

    @abstractmethod
    def list_records(self, zone_id: str, name: str) -> List[DNSRecord]:
        """Return all records, of any type, whose name equals `name`."""
        pass

    @abstractmethod
    def create_record(
        self, zone_id: str, record_type: str, name: str, content: str, ttl: int
    ) -> str:
        """Create a DNS record and return its provider ID."""
        pass

    @abstractmethod
    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a DNS record by provider ID."""
        pass

    def close(self) -> None:
        """Release the session held by this provider."""
