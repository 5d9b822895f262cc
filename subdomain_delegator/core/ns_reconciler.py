"""
NS Reconciler - Converge provider NS records to the authoritative name servers

This module computes the difference between the NS records present at the
DNS provider and the desired name servers, then applies it best-effort:
deletions first, then creations, each item independent of the others.

Additions are load-bearing; without them the subdomain may not resolve.
Deletions are not: a stale extra NS record rarely breaks resolution and a
later run can clean it up. So the update fails only when additions were
required and none of them succeeded.
"""

import logging
from typing import List, Optional, Sequence

from .cancellation import CancellationToken
from .models import (
    Action,
    DNSRecord,
    NSChangeSet,
    ReconciliationOutcome,
    ReconciliationRequest,
)
from .phase import DelegationPhase, PhaseFailure
from ..exceptions import DelegationError, OperationCancelled
from ..providers.dns_client import DNSClient
from ..utils.validators import normalize_nameserver

logger = logging.getLogger(__name__)


def plan_ns_changes(
    existing_records: Sequence[DNSRecord], desired_name_servers: Sequence[str]
) -> NSChangeSet:
    """
    Analyze changes between existing NS records and desired name servers.

    Args:
        existing_records: Records at the subdomain; non-NS records are ignored
        desired_name_servers: Authoritative name servers, in order

    Returns:
        NSChangeSet with the values to add and the records to remove
    """
    existing_ns = [r for r in existing_records if r.record_type == "NS"]
    existing_values = {normalize_nameserver(r.content) for r in existing_ns}
    desired_values = [normalize_nameserver(ns) for ns in desired_name_servers]
    desired_set = set(desired_values)

    changes = NSChangeSet()

    # Duplicates in the desired list are kept as given
    for value in desired_values:
        if value not in existing_values:
            changes.to_add.append(value)
            logger.info(f"Add needed: NS {value}")

    for record in existing_ns:
        if normalize_nameserver(record.content) in desired_set:
            changes.unchanged.append(record)
        else:
            changes.to_remove.append(record)
            logger.info(f"Remove needed: NS {record.content}")

    logger.info(
        f"Change analysis complete: {len(changes.to_add)} to add, "
        f"{len(changes.to_remove)} to remove, {len(changes.unchanged)} unchanged"
    )
    return changes


class NSReconciler(DelegationPhase):
    """Keeps the NS records of a delegated subdomain in sync."""

    def plan(
        self,
        request: ReconciliationRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> NSChangeSet:
        """
        Compute the change set without applying it.

        Raises:
            DelegationError: token, zone or record lookup failed
        """
        cancel_token = cancel_token or CancellationToken()
        try:
            with self._open_client(request, cancel_token) as client:
                _, records = self._load_records(client, request)
        except PhaseFailure as e:
            raise DelegationError(e.reason)

        return plan_ns_changes(records, request.desired_name_servers)

    def reconcile(
        self,
        request: ReconciliationRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ReconciliationOutcome:
        cancel_token = cancel_token or CancellationToken()
        logger.info(f"Starting NS record update for {request.fqdn}")

        name_servers = tuple(normalize_nameserver(ns) for ns in request.desired_name_servers)
        context = {
            "domain": request.domain,
            "subdomain": request.subdomain,
            "phase": Action.UPDATE,
            "name_servers": name_servers,
        }

        result = _ApplyResult()
        zone_id = ""

        try:
            with self._open_client(request, cancel_token) as client:
                zone, records = self._load_records(client, request)
                zone_id = zone.zone_id

                changes = plan_ns_changes(records, request.desired_name_servers)
                self._apply_changes(client, zone, request.fqdn, changes, result)

        except PhaseFailure as e:
            logger.error(e.reason)
            return ReconciliationOutcome.failed(
                e.reason, zone_id=e.zone.zone_id if e.zone else "", **context
            )
        except OperationCancelled as e:
            logger.error(f"NS record update cancelled: {e}")
            return ReconciliationOutcome.cancelled(
                f"Cancelled: {e}", zone_id=zone_id, **result.counts(), **context
            )

        return self._build_outcome(changes, result, zone_id, context)

    def _apply_changes(self, client: DNSClient, zone, fqdn: str, changes: NSChangeSet, result):
        """Apply deletions, then creations. Item failures never stop a loop."""
        for record in changes.to_remove:
            try:
                client.delete_record(zone, record)
                result.deleted += 1
                logger.info(f"Deleted NS record {record.content}")
            except OperationCancelled:
                raise
            except DelegationError as e:
                error = f"Error deleting NS record {record.content}: {e}"
                logger.error(error)
                result.delete_errors.append(error)

        for nameserver in changes.to_add:
            try:
                client.create_ns_record(zone, fqdn, nameserver)
                result.added += 1
                logger.info(f"Created NS record for {nameserver}")
            except OperationCancelled:
                raise
            except DelegationError as e:
                error = f"Error creating NS record for {nameserver}: {e}"
                logger.error(error)
                result.add_errors.append(error)

    def _build_outcome(self, changes: NSChangeSet, result, zone_id: str, context) -> ReconciliationOutcome:
        if result.delete_errors or result.add_errors:
            logger.warning(
                f"There were {len(result.delete_errors)} delete errors and "
                f"{len(result.add_errors)} add errors during NS record update"
            )

        if changes.to_add and result.added == 0:
            return ReconciliationOutcome.failed(
                f"Failed to add any of the {len(changes.to_add)} required NS records. "
                "See logs for details.",
                zone_id=zone_id,
                **result.counts(),
                **context,
            )

        if changes.to_remove and result.deleted == 0:
            logger.warning("Failed to delete any of the outdated NS records")

        return ReconciliationOutcome.success(
            "NS records updated successfully",
            zone_id=zone_id,
            **result.counts(),
            **context,
        )


class _ApplyResult:
    """Running tally of one apply pass."""

    def __init__(self):
        self.added = 0
        self.deleted = 0
        self.add_errors: List[str] = []
        self.delete_errors: List[str] = []

    def counts(self):
        return {
            "ns_records_added": self.added,
            "ns_records_removed": self.deleted,
            "add_errors": tuple(self.add_errors),
            "delete_errors": tuple(self.delete_errors),
        }
