"""
Exceptions - Error taxonomy for subdomain delegation

Read-only failures (secret resolution, zone lookup, listing) abort an
invocation. Per-record mutation failures are aggregated by the reconciler.
"""

from typing import Iterable


class DelegationError(Exception):
    """Base class for all delegation errors."""


class ConfigurationError(DelegationError):
    """Settings could not be loaded or failed validation."""


class SecretError(DelegationError):
    """Base class for API token resolution failures."""


class SecretUnavailable(SecretError):
    """The secret store could not be reached or the secret does not exist."""


class SecretMalformed(SecretError):
    """The secret content could not be parsed into a token field."""


class TokenMissing(SecretError):
    """The secret was resolved but holds no token."""

    def __init__(self, message: str = "API token not found in secret"):
        super().__init__(message)


class ZoneNotFound(DelegationError):
    """No provider zone matches the parent domain."""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Zone could not be found for {domain}")


class ProviderError(DelegationError):
    """A DNS provider call failed (transport, auth, rate limit, API error)."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class CollisionError(DelegationError):
    """Non-NS records already exist at the target subdomain."""

    def __init__(self, fqdn: str, record_types: Iterable[str]):
        self.fqdn = fqdn
        self.record_types = list(record_types)
        super().__init__(
            f"Found colliding DNS records for {fqdn}: "
            f"[{' '.join(self.record_types)}]. Please remove these records first"
        )


class InvalidRequest(DelegationError):
    """The incoming request is malformed or misses required fields."""


class InvalidRequestType(InvalidRequest):
    def __init__(self, request_kind):
        self.request_kind = request_kind
        super().__init__(f"Invalid request type: {request_kind}")


class InvalidAction(InvalidRequest):
    def __init__(self, action):
        self.action = action
        super().__init__(f"Invalid action: {action}")


class OperationCancelled(DelegationError):
    """The invocation was cancelled or ran past its deadline."""

    def __init__(self, message: str = "Operation cancelled before completion"):
        super().__init__(message)
