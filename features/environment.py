"""
Behave environment configuration for Subdomain Delegator scenarios.
"""

import logging

from subdomain_delegator.utils.config import Settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.settings = Settings.from_dict({"provider": {"name": "mock"}})
    context.secret_ref = "cftor53/cloudflare/api-token"
    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.records = []
    context.fail_create_for = set()
    context.fail_delete_for = set()
    context.provider = None
    context.outcome = None
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    logger.info(f"Completed scenario: {scenario.name}")
