"""
CloudFormation custom resource handler.

Entry point for the Lambda function behind the collision-check and
NS-update custom resources. The handler maps the event onto a delegation
request, runs it, and PUTs the result to the pre-signed ResponseURL.
"""

import json
import logging
from typing import Dict, Mapping, Optional

import requests

from ..core.cancellation import CancellationToken
from ..core.delegation_manager import DelegationManager
from ..core.models import ReconciliationOutcome, Status
from ..exceptions import InvalidRequest
from ..parsers.request_parser import request_from_cloudformation
from ..utils.config import Settings, configure_logging, settings_from_env

logger = logging.getLogger(__name__)

RESPONSE_TIMEOUT = 30
# CloudFormation rejects responses larger than 4096 bytes
MAX_REASON_LENGTH = 1024


def lambda_handler(event: Dict, context) -> Dict:
    """Handle one custom resource event."""
    try:
        settings = settings_from_env()
        configure_logging(settings)
        manager = DelegationManager(settings)
    except Exception as e:
        logger.exception("Failed to initialize the delegation manager")
        return respond(event, ReconciliationOutcome.failed(f"Initialization error: {e}"))

    return handle_event(event, context, manager, settings)


def handle_event(
    event: Mapping,
    context,
    manager: DelegationManager,
    settings: Optional[Settings] = None,
) -> Dict:
    """Run the manager for an event and deliver the response."""
    margin = settings.safety_margin_seconds if settings else 5.0
    try:
        cancel_token = CancellationToken.from_lambda_context(context, margin)
        outcome = manager.handle(request_from_cloudformation(event), cancel_token)
    except InvalidRequest as e:
        logger.error(f"Rejected request: {e}")
        outcome = ReconciliationOutcome.failed(str(e))
    except Exception as e:
        logger.exception("Unexpected error while handling the event")
        outcome = ReconciliationOutcome.failed(f"Internal error: {e}")

    logger.info(f"Outcome: {outcome.status.value} - {outcome.reason}")
    return respond(event, outcome)


def respond(event: Mapping, outcome: ReconciliationOutcome) -> Dict:
    """Build the response for an outcome and deliver it."""
    response = build_response(event, outcome)
    send_response(event["ResponseURL"], response)
    return response


def build_response(event: Mapping, outcome: ReconciliationOutcome) -> Dict:
    """Build the CloudFormation response body for an outcome."""
    physical_resource_id = event.get("PhysicalResourceId") or (
        f"{event.get('LogicalResourceId', '')}-cloudflare-dns"
    )

    status = "SUCCESS" if outcome.status is Status.SUCCESS else "FAILED"
    reason = outcome.reason
    if len(reason) > MAX_REASON_LENGTH:
        reason = reason[: MAX_REASON_LENGTH - 3] + "..."

    response = {
        "Status": status,
        "Reason": reason,
        "PhysicalResourceId": physical_resource_id,
        "StackId": event.get("StackId", ""),
        "RequestId": event.get("RequestId", ""),
        "LogicalResourceId": event.get("LogicalResourceId", ""),
    }

    data = outcome.data
    if data:
        response["Data"] = data

    return response


def send_response(response_url: str, response: Dict) -> None:
    """PUT the response document to the pre-signed URL."""
    body = json.dumps(response)

    try:
        # The pre-signed URL is signed without a content type
        result = requests.put(
            response_url,
            data=body,
            headers={"Content-Type": ""},
            timeout=RESPONSE_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"Failed to send response: {e}")
        raise

    if result.status_code >= 400:
        logger.error(f"Error sending response. Status: {result.status_code} {result.reason}")
        raise RuntimeError(f"Error sending response. Status: {result.status_code}")

    logger.info(f"Response sent with status {response['Status']}")
