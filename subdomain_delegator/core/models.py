"""
Models - Request-scoped value types for subdomain delegation

Every value here is created at the start of an invocation from the incoming
request and the provider's live state, and discarded once the outcome has
been emitted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class RequestKind(str, Enum):
    """Provisioning lifecycle phase that triggered the invocation."""

    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class Action(str, Enum):
    """Which delegation phase to run."""

    CHECK = "check"
    UPDATE = "update"


class Status(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class ReconciliationRequest:
    """Validated request for a single check or update invocation."""

    request_kind: RequestKind
    domain: str = ""
    subdomain: str = ""
    secret_ref: str = ""
    action: Optional[Action] = None
    desired_name_servers: Tuple[str, ...] = ()

    @property
    def fqdn(self) -> str:
        """Fully-qualified name of the delegated subdomain."""
        return f"{self.subdomain}.{self.domain}"


@dataclass(frozen=True)
class DNSRecord:
    """Read-only snapshot of a provider-side DNS record."""

    id: str
    record_type: str
    name: str
    content: str
    ttl: int = 1


@dataclass(frozen=True)
class ZoneHandle:
    zone_id: str
    name: str


@dataclass
class NSChangeSet:
    """Planned NS changes for one subdomain."""

    to_add: List[str] = field(default_factory=list)
    to_remove: List[DNSRecord] = field(default_factory=list)
    unchanged: List[DNSRecord] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.to_add) + len(self.to_remove)


@dataclass(frozen=True)
class ReconciliationOutcome:
    """
    The single result of an invocation.

    Build instances through the classmethod constructors so that every code
    path yields a complete outcome.
    """

    status: Status
    reason: str
    domain: str = ""
    subdomain: str = ""
    zone_id: str = ""
    phase: Optional[Action] = None
    message: str = ""
    ns_records_added: int = 0
    ns_records_removed: int = 0
    name_servers: Tuple[str, ...] = ()
    add_errors: Tuple[str, ...] = ()
    delete_errors: Tuple[str, ...] = ()

    @classmethod
    def success(cls, reason: str, **kwargs) -> "ReconciliationOutcome":
        return cls(status=Status.SUCCESS, reason=reason, **kwargs)

    @classmethod
    def failed(cls, reason: str, **kwargs) -> "ReconciliationOutcome":
        return cls(status=Status.FAILED, reason=reason, **kwargs)

    @classmethod
    def cancelled(cls, reason: str, **kwargs) -> "ReconciliationOutcome":
        return cls(status=Status.CANCELLED, reason=reason, **kwargs)

    @property
    def succeeded(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def has_warnings(self) -> bool:
        return bool(self.add_errors or self.delete_errors)

    @property
    def data(self) -> Dict:
        """Structured result data in the outbound contract's key names."""
        data = {}
        if self.domain or self.subdomain or self.zone_id:
            data.update(
                {
                    "domain": self.domain,
                    "subdomain": self.subdomain,
                    "zoneId": self.zone_id,
                }
            )

        if self.phase is Action.CHECK and self.message:
            data["message"] = self.message

        if self.phase is Action.UPDATE and self.zone_id:
            data["nsRecordsAdded"] = self.ns_records_added
            data["nsRecordsRemoved"] = self.ns_records_removed
            data["route53NameServers"] = list(self.name_servers)

        if self.has_warnings:
            data["warnings"] = {
                "deleteErrors": list(self.delete_errors),
                "addErrors": list(self.add_errors),
            }

        return data

    def to_dict(self) -> Dict:
        return {"status": self.status.value, "reason": self.reason, "data": self.data}
