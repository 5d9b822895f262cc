"""
Subdomain Delegator - Cloudflare to Route53 subdomain delegation

Checks a Cloudflare-managed subdomain for colliding records and keeps its
NS records in sync with the name servers of a Route53 hosted zone.
"""

__version__ = "1.0.0"
__author__ = "Subdomain Delegator Team"
__description__ = "NS delegation of Cloudflare subdomains to Route53 hosted zones"

from .core.delegation_manager import DelegationManager
from .core.models import ReconciliationOutcome, ReconciliationRequest, Status
from .providers.dns_client import DNSClient

__all__ = [
    "DelegationManager",
    "ReconciliationOutcome",
    "ReconciliationRequest",
    "Status",
    "DNSClient",
]
