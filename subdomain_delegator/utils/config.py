"""
Configuration - Settings loading and logging setup

Settings are built once at process start, validated, and then passed by
reference into each phase. Nothing in the core reads configuration from
global state.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Optional

import yaml

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
SUPPORTED_PROVIDERS = ("cloudflare", "mock")
SUPPORTED_SECRET_BACKENDS = ("aws", "env")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class ProviderSettings:
    name: str = "cloudflare"
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 30.0
    ns_record_ttl: int = 3600
    page_size: int = 100


@dataclass(frozen=True)
class SecretSettings:
    backend: str = "aws"
    region: Optional[str] = None


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass(frozen=True)
class Settings:
    """Validated, immutable configuration for one process."""

    provider: ProviderSettings = field(default_factory=ProviderSettings)
    secrets: SecretSettings = field(default_factory=SecretSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    safety_margin_seconds: float = 5.0

    def __post_init__(self):
        self._validate()

    def _validate(self):
        if self.provider.name not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Unknown provider '{self.provider.name}', "
                f"expected one of {', '.join(SUPPORTED_PROVIDERS)}"
            )
        if self.secrets.backend not in SUPPORTED_SECRET_BACKENDS:
            raise ConfigurationError(
                f"Unknown secrets backend '{self.secrets.backend}', "
                f"expected one of {', '.join(SUPPORTED_SECRET_BACKENDS)}"
            )
        if not self.provider.api_base_url.startswith(("https://", "http://")):
            raise ConfigurationError(
                f"Invalid api_base_url: {self.provider.api_base_url}"
            )
        if self.provider.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")
        if self.provider.ns_record_ttl != 1 and not 60 <= self.provider.ns_record_ttl <= 86400:
            raise ConfigurationError(
                "ns_record_ttl must be 1 (automatic) or between 60 and 86400"
            )
        if not 5 <= self.provider.page_size <= 5000:
            raise ConfigurationError("page_size must be between 5 and 5000")
        if self.safety_margin_seconds < 0:
            raise ConfigurationError("safety_margin_seconds must not be negative")
        if logging.getLevelName(self.logging.level.upper()) == f"Level {self.logging.level.upper()}":
            raise ConfigurationError(f"Unknown log level: {self.logging.level}")

    @classmethod
    def from_dict(cls, config: Optional[Dict]) -> "Settings":
        """Build settings from a parsed configuration mapping."""
        config = config or {}
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration root must be a mapping")

        try:
            provider = ProviderSettings(**config.get("provider", {}))
            secrets = SecretSettings(**config.get("secrets", {}))
            logging_settings = LoggingSettings(**config.get("logging", {}))
            safety_margin = config.get("cancellation", {}).get(
                "safety_margin_seconds", 5.0
            )
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

        return cls(
            provider=provider,
            secrets=secrets,
            logging=logging_settings,
            safety_margin_seconds=float(safety_margin),
        )


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "provider": {"name": "cloudflare", "api_base_url": DEFAULT_API_BASE_URL},
        "secrets": {"backend": "aws"},
        "cancellation": {"safety_margin_seconds": 5.0},
        "logging": {"level": "INFO"},
    }


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
        logger.info(f"Configuration loaded from {config_path}")
        return config or {}
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}")


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load and validate settings from a YAML file, or the defaults."""
    config = load_config(config_path) if config_path else get_default_config()
    return Settings.from_dict(config)


def settings_from_env(environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build settings for a deployed function.

    DELEGATOR_CONFIG names an optional YAML file; individual environment
    variables override values from that file.
    """
    environ = os.environ if environ is None else environ
    config_path = environ.get("DELEGATOR_CONFIG")
    config = load_config(config_path) if config_path else get_default_config()

    provider = dict(config.get("provider") or {})
    secrets = dict(config.get("secrets") or {})
    logging_config = dict(config.get("logging") or {})

    if environ.get("DELEGATOR_PROVIDER"):
        provider["name"] = environ["DELEGATOR_PROVIDER"]
    if environ.get("CLOUDFLARE_API_BASE_URL"):
        provider["api_base_url"] = environ["CLOUDFLARE_API_BASE_URL"]
    if environ.get("DELEGATOR_SECRETS_BACKEND"):
        secrets["backend"] = environ["DELEGATOR_SECRETS_BACKEND"]
    if environ.get("AWS_REGION") and not secrets.get("region"):
        secrets["region"] = environ["AWS_REGION"]
    if environ.get("DELEGATOR_LOG_LEVEL"):
        logging_config["level"] = environ["DELEGATOR_LOG_LEVEL"]

    config = dict(config, provider=provider, secrets=secrets, logging=logging_config)
    return Settings.from_dict(config)


def configure_logging(settings: Settings, verbose: bool = False):
    """Configure logging."""
    level = "DEBUG" if verbose else settings.logging.level.upper()
    root = logging.getLogger()
    if root.handlers:
        # Handlers already installed, e.g. by the Lambda runtime
        root.setLevel(level)
        return

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.logging.file:
        handlers.append(logging.FileHandler(settings.logging.file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
