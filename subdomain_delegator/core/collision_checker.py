"""
Collision Checker - Read-only pre-flight for subdomain delegation

Fails when the target subdomain already carries records other than NS at
the DNS provider. This phase never creates, modifies or deletes a record.
"""

import logging
from typing import List, Optional

from .cancellation import CancellationToken
from .models import Action, DNSRecord, ReconciliationOutcome, ReconciliationRequest
from .phase import DelegationPhase, PhaseFailure
from ..exceptions import CollisionError, OperationCancelled

logger = logging.getLogger(__name__)

NO_COLLISION_MESSAGE = "No colliding DNS records found"


def find_collisions(records: List[DNSRecord]) -> List[DNSRecord]:
    """Return the records that block delegation, i.e. every non-NS record."""
    return [record for record in records if record.record_type != "NS"]


class CollisionChecker(DelegationPhase):
    """Checks a subdomain for records that collide with an NS delegation."""

    def check(
        self,
        request: ReconciliationRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ReconciliationOutcome:
        cancel_token = cancel_token or CancellationToken()
        logger.info(f"Starting DNS collision check for {request.fqdn}")

        context = {
            "domain": request.domain,
            "subdomain": request.subdomain,
            "phase": Action.CHECK,
        }
        zone_id = ""

        try:
            with self._open_client(request, cancel_token) as client:
                zone, records = self._load_records(client, request)
                zone_id = zone.zone_id

            collisions = find_collisions(records)
            if collisions:
                # Types only; record contents stay out of logs and outputs
                raise CollisionError(request.fqdn, [r.record_type for r in collisions])

        except PhaseFailure as e:
            logger.error(e.reason)
            if e.zone:
                zone_id = e.zone.zone_id
            return ReconciliationOutcome.failed(e.reason, zone_id=zone_id, **context)
        except CollisionError as e:
            logger.error(str(e))
            return ReconciliationOutcome.failed(str(e), zone_id=zone_id, **context)
        except OperationCancelled as e:
            logger.error(f"Collision check cancelled: {e}")
            return ReconciliationOutcome.cancelled(
                f"Cancelled: {e}", zone_id=zone_id, **context
            )

        logger.info(f"No colliding records at {request.fqdn} ({len(records)} NS records)")
        return ReconciliationOutcome.success(
            "DNS collision check completed successfully",
            zone_id=zone_id,
            message=NO_COLLISION_MESSAGE,
            **context,
        )
