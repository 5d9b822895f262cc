"""
Cloudflare DNS provider implementation.

This module talks to the Cloudflare API v4 over a requests session that
carries the API token. The provider never retries; callers decide the
retry policy.
"""

import logging
from typing import Dict, List, Optional

import requests

from .base_provider import DNSProvider
from ..core.cancellation import CancellationToken
from ..core.models import DNSRecord
from ..exceptions import OperationCancelled, ProviderError, ZoneNotFound
from ..utils.config import ProviderSettings

logger = logging.getLogger(__name__)


class CloudflareProvider(DNSProvider):
    """Cloudflare provider scoped to one API token."""

    def __init__(
        self,
        token: str,
        settings: ProviderSettings,
        cancel_token: Optional[CancellationToken] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Cloudflare provider."""
        self.base_url = settings.api_base_url.rstrip("/")
        self.request_timeout = settings.request_timeout
        self.page_size = settings.page_size
        self.cancel_token = cancel_token or CancellationToken()

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            }
        )
        self.cancel_token.add_callback(self.close)

        logger.debug(f"Cloudflare provider initialized for {self.base_url}")

    def zone_id_by_name(self, domain: str) -> str:
        """Resolve the zone ID for a domain name."""
        payload = self._request("GET", "/zones", params={"name": domain})
        zones = payload.get("result") or []

        if not zones:
            raise ZoneNotFound(domain)
        if len(zones) > 1:
            raise ProviderError(
                f"ambiguous zone name; {len(zones)} zones match {domain}"
            )

        zone_id = zones[0].get("id") if isinstance(zones[0], dict) else None
        if not zone_id:
            raise ProviderError(f"zone lookup for {domain} returned no zone id")

        return zone_id

    def list_records(self, zone_id: str, name: str) -> List[DNSRecord]:
        """List all records with the given name, following pagination."""
        records = []
        page = 1

        while True:
            payload = self._request(
                "GET",
                f"/zones/{zone_id}/dns_records",
                params={"name": name, "page": page, "per_page": self.page_size},
            )
            for item in payload.get("result") or []:
                records.append(self._to_record(item))

            result_info = payload.get("result_info") or {}
            total_pages = result_info.get("total_pages") or 1
            if page >= total_pages:
                break
            page += 1

        logger.debug(f"Retrieved {len(records)} records for {name}")
        return records

    def create_record(
        self, zone_id: str, record_type: str, name: str, content: str, ttl: int
    ) -> str:
        """Create a DNS record."""
        payload = self._request(
            "POST",
            f"/zones/{zone_id}/dns_records",
            json={"type": record_type, "name": name, "content": content, "ttl": ttl},
        )
        return (payload.get("result") or {}).get("id", "")

    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a DNS record."""
        self._request("DELETE", f"/zones/{zone_id}/dns_records/{record_id}")

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict:
        """Perform one API call and unwrap the Cloudflare response envelope."""
        self.cancel_token.raise_if_cancelled()

        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", timeout=self._timeout(), **kwargs
            )
        except requests.RequestException as e:
            if self.cancel_token.cancelled:
                raise OperationCancelled(f"{method} {path} aborted: {e}")
            raise ProviderError(f"{method} {path} failed: {e}")

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if not response.ok or not payload.get("success", False):
            raise ProviderError(
                f"{method} {path} failed ({response.status_code}): "
                f"{self._error_message(payload, response)}",
                status_code=response.status_code,
            )

        return payload

    def _timeout(self) -> float:
        remaining = self.cancel_token.remaining()
        if remaining is None:
            return self.request_timeout
        return max(min(self.request_timeout, remaining), 0.001)

    @staticmethod
    def _error_message(payload: Dict, response: requests.Response) -> str:
        errors = payload.get("errors") or []
        messages = [
            f"{error.get('message', 'unknown error')} ({error.get('code')})"
            if isinstance(error, dict)
            else str(error)
            for error in errors
        ]
        if messages:
            return "; ".join(messages)
        return response.reason or "unexpected response"

    @staticmethod
    def _to_record(item: Dict) -> DNSRecord:
        return DNSRecord(
            id=item.get("id", ""),
            record_type=item.get("type", ""),
            name=item.get("name", ""),
            content=item.get("content", ""),
            ttl=item.get("ttl", 1),
        )
