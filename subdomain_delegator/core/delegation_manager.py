"""
Delegation Manager - Request dispatch for the provisioning hook

Turns one request into exactly one outcome. How the outcome travels back to
the caller is left to the handler that invoked the manager.
"""

import logging
from typing import Mapping, Optional

from .cancellation import CancellationToken
from .collision_checker import CollisionChecker
from .models import Action, ReconciliationOutcome, ReconciliationRequest, RequestKind
from .ns_reconciler import NSReconciler
from ..exceptions import InvalidRequest
from ..parsers.request_parser import parse_request
from ..providers.dns_client import ProviderFactory
from ..providers.secret_resolver import SecretResolver, create_secret_resolver
from ..utils.config import Settings

logger = logging.getLogger(__name__)


class DelegationManager:
    """Main delegation class that routes requests to the check and update phases."""

    def __init__(
        self,
        settings: Settings,
        secret_resolver: Optional[SecretResolver] = None,
        provider_factory: Optional[ProviderFactory] = None,
    ):
        """Initialize the delegation manager with validated settings."""
        self.settings = settings
        self.secret_resolver = secret_resolver or create_secret_resolver(settings.secrets)
        self.collision_checker = CollisionChecker(
            settings, self.secret_resolver, provider_factory
        )
        self.ns_reconciler = NSReconciler(settings, self.secret_resolver, provider_factory)

    def handle(
        self, raw_request: Mapping, cancel_token: Optional[CancellationToken] = None
    ) -> ReconciliationOutcome:
        """Validate an untyped request and process it."""
        try:
            request = parse_request(raw_request)
        except InvalidRequest as e:
            logger.error(f"Rejected request: {e}")
            return ReconciliationOutcome.failed(str(e))

        return self.process(request, cancel_token)

    def process(
        self,
        request: ReconciliationRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ReconciliationOutcome:
        """Run the phase named by a validated request."""
        logger.info(f"Received request type: {request.request_kind.value}")
        cancel_token = cancel_token or CancellationToken()

        if request.request_kind is RequestKind.DELETE:
            return ReconciliationOutcome.success("Resource deleted")

        try:
            if request.action is Action.CHECK:
                return self.collision_checker.check(request, cancel_token)
            if request.action is Action.UPDATE:
                return self.ns_reconciler.reconcile(request, cancel_token)
        except Exception as e:
            logger.exception(f"Unexpected error while processing {request.fqdn}")
            return ReconciliationOutcome.failed(
                f"Internal error: {e}",
                domain=request.domain,
                subdomain=request.subdomain,
                phase=request.action,
            )

        return ReconciliationOutcome.failed(f"Invalid action: {request.action}")
