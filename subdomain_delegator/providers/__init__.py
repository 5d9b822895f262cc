"""
DNS provider implementations.

This package contains the Cloudflare provider, an in-memory mock provider,
the scoped DNS client, and the API token resolvers.
"""

from .base_provider import DNSProvider
from .cloudflare_provider import CloudflareProvider
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider
from .secret_resolver import (
    EnvSecretResolver,
    SecretResolver,
    SecretsManagerResolver,
    StaticSecretResolver,
    create_secret_resolver,
)

__all__ = [
    "DNSProvider",
    "CloudflareProvider",
    "DNSClient",
    "MockDNSProvider",
    "SecretResolver",
    "SecretsManagerResolver",
    "EnvSecretResolver",
    "StaticSecretResolver",
    "create_secret_resolver",
]
