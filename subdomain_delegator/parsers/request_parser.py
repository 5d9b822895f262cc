"""
Request parser - Boundary validation for delegation requests

Turns an untyped request mapping into a ReconciliationRequest. Anything
malformed is rejected with InvalidRequest before any provider call.
"""

import logging
from typing import Dict, List, Mapping

from ..core.models import Action, ReconciliationRequest, RequestKind
from ..exceptions import InvalidAction, InvalidRequest, InvalidRequestType
from ..utils.validators import validate_fqdn, validate_nameserver, validate_zone_name

logger = logging.getLogger(__name__)

KNOWN_FIELDS = {"requestKind", "domain", "subdomain", "nameServers", "secretRef", "action"}

# CloudFormation ResourceProperties -> request fields
CLOUDFORMATION_PROPERTY_MAP = {
    "Domain": "domain",
    "Subdomain": "subdomain",
    "NameServers": "nameServers",
    "SecretId": "secretRef",
    "Action": "action",
}
CLOUDFORMATION_IGNORED_PROPERTIES = {"ServiceToken"}


def parse_request(raw: Mapping) -> ReconciliationRequest:
    """
    Validate a request mapping.

    Args:
        raw: Mapping with requestKind, domain, subdomain, nameServers,
            secretRef and action keys

    Returns:
        A validated ReconciliationRequest

    Raises:
        InvalidRequestType: requestKind is not Create, Update or Delete
        InvalidAction: action is not check or update
        InvalidRequest: any other malformed or missing field
    """
    if not isinstance(raw, Mapping):
        raise InvalidRequest("Request must be a mapping")

    request_kind = _parse_request_kind(raw.get("requestKind"))

    # Teardown leaves DNS records as they are
    if request_kind is RequestKind.DELETE:
        return ReconciliationRequest(request_kind=request_kind)

    unknown = sorted(set(raw) - KNOWN_FIELDS)
    if unknown:
        raise InvalidRequest(f"Unknown request fields: {', '.join(unknown)}")

    action = _parse_action(raw.get("action"))

    domain = _string_field(raw, "domain")
    subdomain = _string_field(raw, "subdomain")
    secret_ref = _string_field(raw, "secretRef")

    name_servers = []
    if action is Action.UPDATE:
        name_servers = _name_servers_field(raw.get("nameServers"))

    if not domain or not subdomain or not secret_ref:
        raise InvalidRequest("Missing required parameters")
    if action is Action.UPDATE and not name_servers:
        raise InvalidRequest("Missing required parameters: nameServers")

    if not validate_zone_name(domain):
        raise InvalidRequest(f"Invalid domain: {domain}")
    if not validate_fqdn(f"{subdomain}.{domain}"):
        raise InvalidRequest(f"Invalid subdomain: {subdomain}")

    invalid = [ns for ns in name_servers if not validate_nameserver(ns)]
    if invalid:
        raise InvalidRequest(f"Invalid name servers: {', '.join(invalid)}")

    return ReconciliationRequest(
        request_kind=request_kind,
        domain=domain,
        subdomain=subdomain,
        secret_ref=secret_ref,
        action=action,
        desired_name_servers=tuple(name_servers),
    )


def request_from_cloudformation(event: Mapping) -> Dict:
    """Map a CloudFormation custom resource event onto the request fields."""
    properties = event.get("ResourceProperties") or {}
    if not isinstance(properties, Mapping):
        raise InvalidRequest(
            f"ResourceProperties must be an object, got {type(properties).__name__}"
        )

    request = {"requestKind": event.get("RequestType")}

    for key, value in properties.items():
        if key in CLOUDFORMATION_IGNORED_PROPERTIES:
            continue
        # Unmapped properties pass through so that parse_request rejects them
        request[CLOUDFORMATION_PROPERTY_MAP.get(key, key)] = value

    return request


def _parse_request_kind(value) -> RequestKind:
    try:
        return RequestKind(value)
    except ValueError:
        raise InvalidRequestType(value)


def _parse_action(value) -> Action:
    try:
        return Action(value)
    except ValueError:
        raise InvalidAction(value)


def _string_field(raw: Mapping, name: str) -> str:
    value = raw.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidRequest(f"Field '{name}' must be a string")
    return value.strip()


def _name_servers_field(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        # CloudFormation may deliver a joined list
        return [ns.strip() for ns in value.split(",") if ns.strip()]
    if not isinstance(value, (list, tuple)):
        raise InvalidRequest("Field 'nameServers' must be a list of strings")
    if not all(isinstance(ns, str) for ns in value):
        raise InvalidRequest("Field 'nameServers' must be a list of strings")
    return [ns.strip() for ns in value]
