"""
Validators - Input validation for delegation requests

This module provides validation functions for domain names and name server
hostnames, and the name server normalization used when comparing records.
"""

import logging
import re

import dns.exception
import dns.name

logger = logging.getLogger(__name__)

_LABEL_PATTERN = re.compile(r"^[a-zA-Z0-9_]([a-zA-Z0-9-]*[a-zA-Z0-9])?$")


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate a domain name such as a parent domain or a delegated subdomain.

    Args:
        fqdn: The domain name to validate, without a trailing dot

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    if fqdn.endswith("."):
        logger.warning(f"Domain name ends with dot: {fqdn}")
        return False

    if len(fqdn) > 253:
        logger.warning(f"Domain name too long: {fqdn}")
        return False

    labels = fqdn.split(".")
    if any(label == "" for label in labels):
        logger.warning(f"Domain name contains empty labels: {fqdn}")
        return False

    for label in labels:
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in domain name: {fqdn}")
            return False

    return True


def _validate_label(label: str) -> bool:
    """Validate a single domain label."""
    if len(label) == 0 or len(label) > 63:
        return False

    # Letters, digits, hyphens; no leading or trailing hyphen
    return bool(_LABEL_PATTERN.match(label))


def validate_zone_name(zone: str) -> bool:
    """
    Validate a parent zone name. Zones need at least two labels.

    Args:
        zone: The zone name to validate

    Returns:
        True if valid, False otherwise
    """
    if not validate_fqdn(zone):
        return False

    if len(zone.split(".")) < 2:
        logger.warning(f"Zone name must have at least 2 labels: {zone}")
        return False

    return True


def validate_nameserver(nameserver: str) -> bool:
    """
    Validate a name server hostname, with or without the root label dot.

    Args:
        nameserver: Host name such as "ns-1.awsdns-01.com."

    Returns:
        True if valid, False otherwise
    """
    if not nameserver or not isinstance(nameserver, str):
        return False

    if nameserver.strip() != nameserver:
        logger.warning(f"Name server contains surrounding whitespace: {nameserver!r}")
        return False

    try:
        name = dns.name.from_text(nameserver)
    except dns.exception.DNSException as e:
        logger.warning(f"Invalid name server '{nameserver}': {e}")
        return False

    # The root name alone is not a host
    if len(name.labels) < 3:
        logger.warning(f"Name server must have at least 2 labels: {nameserver}")
        return False

    return True


def normalize_nameserver(nameserver: str) -> str:
    """
    Strip a single trailing root-label dot.

    No case folding and no other rewriting: comparison after normalization is
    exact string equality.
    """
    if nameserver and nameserver.endswith("."):
        return nameserver[:-1]
    return nameserver
