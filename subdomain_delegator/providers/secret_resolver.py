"""
Secret resolvers for the DNS provider API token.

The AWS resolver reads a Secrets Manager secret whose string value is a JSON
object with an "api_token" field.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import SecretMalformed, SecretUnavailable, TokenMissing
from ..utils.config import SecretSettings

logger = logging.getLogger(__name__)

TOKEN_FIELD = "api_token"


class SecretResolver(ABC):
    """Abstract base class for API token resolvers."""

    @abstractmethod
    def resolve(self, secret_ref: str) -> str:
        """Return a non-empty API token for the given secret reference."""
        pass


class SecretsManagerResolver(SecretResolver):
    """Resolve tokens from AWS Secrets Manager."""

    def __init__(self, region: Optional[str] = None, client=None):
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self.region)
        return self._client

    def resolve(self, secret_ref: str) -> str:
        try:
            result = self.client.get_secret_value(SecretId=secret_ref)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            raise SecretUnavailable(f"failed to get secret value ({code}): {e}")
        except BotoCoreError as e:
            raise SecretUnavailable(f"failed to get secret value: {e}")

        secret_string = result.get("SecretString")
        if secret_string is None:
            raise SecretMalformed("secret has no string value")

        try:
            secret = json.loads(secret_string)
        except ValueError as e:
            raise SecretMalformed(f"failed to parse secret: {e}")

        if not isinstance(secret, dict):
            raise SecretMalformed("secret is not a JSON object")

        token = secret.get(TOKEN_FIELD)
        if token is not None and not isinstance(token, str):
            raise SecretMalformed(f"secret field '{TOKEN_FIELD}' is not a string")
        if not token:
            raise TokenMissing()

        logger.debug(f"Resolved API token from secret {secret_ref}")
        return token


class EnvSecretResolver(SecretResolver):
    """Resolve tokens from the environment variable named by the reference."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def resolve(self, secret_ref: str) -> str:
        if secret_ref not in self.environ:
            raise SecretUnavailable(f"environment variable {secret_ref} is not set")

        token = self.environ[secret_ref].strip()
        if not token:
            raise TokenMissing()
        return token


class StaticSecretResolver(SecretResolver):
    """Resolve tokens from a fixed mapping."""

    def __init__(self, tokens: Dict[str, str]):
        self.tokens = dict(tokens)

    def resolve(self, secret_ref: str) -> str:
        if secret_ref not in self.tokens:
            raise SecretUnavailable(f"secret {secret_ref} not found")
        if not self.tokens[secret_ref]:
            raise TokenMissing()
        return self.tokens[secret_ref]


def create_secret_resolver(settings: SecretSettings) -> SecretResolver:
    """Build the resolver named by the secrets backend setting."""
    if settings.backend == "env":
        return EnvSecretResolver()
    return SecretsManagerResolver(region=settings.region)
