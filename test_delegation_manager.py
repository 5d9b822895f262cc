#!/usr/bin/env python3
"""
Test suite for the delegation core

Covers request validation, change planning, the collision check, the NS
reconciliation and the request dispatch, against the in-memory provider.
"""

import unittest
from unittest.mock import Mock

from subdomain_delegator.core.cancellation import CancellationToken
from subdomain_delegator.core.delegation_manager import DelegationManager
from subdomain_delegator.core.models import (
    Action,
    DNSRecord,
    ReconciliationOutcome,
    RequestKind,
    Status,
)
from subdomain_delegator.core.ns_reconciler import plan_ns_changes
from subdomain_delegator.exceptions import (
    InvalidAction,
    InvalidRequest,
    InvalidRequestType,
    OperationCancelled,
    SecretMalformed,
    SecretUnavailable,
)
from subdomain_delegator.parsers.request_parser import (
    parse_request,
    request_from_cloudformation,
)
from subdomain_delegator.providers.mock_provider import MockDNSProvider
from subdomain_delegator.providers.secret_resolver import (
    SecretResolver,
    StaticSecretResolver,
)
from subdomain_delegator.utils.config import Settings
from subdomain_delegator.utils.validators import (
    normalize_nameserver,
    validate_fqdn,
    validate_nameserver,
    validate_zone_name,
)

FQDN = "api.example.com"
ZONES = {"example.com": "zone-123"}


def ns_record(record_id, content, name=FQDN):
    return DNSRecord(id=record_id, record_type="NS", name=name, content=content, ttl=3600)


def check_request(**overrides):
    request = {
        "requestKind": "Create",
        "domain": "example.com",
        "subdomain": "api",
        "secretRef": "cf-secret",
        "action": "check",
    }
    request.update(overrides)
    return request


def update_request(name_servers, **overrides):
    request = check_request(action="update", nameServers=list(name_servers))
    request.update(overrides)
    return request


def make_manager(provider, resolver=None):
    settings = Settings.from_dict({"provider": {"name": "mock"}})
    resolver = resolver or StaticSecretResolver({"cf-secret": "token-123"})
    return DelegationManager(
        settings,
        secret_resolver=resolver,
        provider_factory=lambda token, settings, cancel_token: provider,
    )


class TestValidators(unittest.TestCase):
    """Test the validation functions."""

    def test_validate_fqdn_valid(self):
        """Test valid domain names."""
        for fqdn in ["example.com", "api.example.com", "1api.dev.example.co.uk", "_acme.example.com"]:
            with self.subTest(fqdn=fqdn):
                self.assertTrue(validate_fqdn(fqdn))

    def test_validate_fqdn_invalid(self):
        """Test invalid domain names."""
        invalid_fqdns = [
            "",  # Empty
            "example.com.",  # Ends with dot
            "example..com",  # Consecutive dots
            "-api.example.com",  # Starts with hyphen
            "api-.example.com",  # Ends with hyphen
            "a" * 64 + ".com",  # Label too long
            "api example.com",  # Whitespace
        ]
        for fqdn in invalid_fqdns:
            with self.subTest(fqdn=fqdn):
                self.assertFalse(validate_fqdn(fqdn))

    def test_validate_zone_name_requires_two_labels(self):
        self.assertTrue(validate_zone_name("example.com"))
        self.assertFalse(validate_zone_name("localhost"))

    def test_validate_nameserver(self):
        """Name servers are accepted with or without the root dot."""
        self.assertTrue(validate_nameserver("ns-1.awsdns-01.com."))
        self.assertTrue(validate_nameserver("ns-2.awsdns-02.org"))
        self.assertFalse(validate_nameserver(""))
        self.assertFalse(validate_nameserver("ns..example.com"))
        self.assertFalse(validate_nameserver("localhost"))
        self.assertFalse(validate_nameserver(" ns1.example.com"))

    def test_normalize_nameserver_strips_single_dot(self):
        self.assertEqual(normalize_nameserver("ns1.example.com."), "ns1.example.com")
        self.assertEqual(normalize_nameserver("ns1.example.com"), "ns1.example.com")
        self.assertEqual(normalize_nameserver("ns1.example.com.."), "ns1.example.com.")

    def test_normalize_nameserver_keeps_case(self):
        self.assertEqual(normalize_nameserver("NS1.Example.com."), "NS1.Example.com")


class TestRequestParser(unittest.TestCase):
    """Test boundary validation of incoming requests."""

    def test_parse_check_request(self):
        request = parse_request(check_request())

        self.assertEqual(request.request_kind, RequestKind.CREATE)
        self.assertEqual(request.action, Action.CHECK)
        self.assertEqual(request.fqdn, FQDN)
        self.assertEqual(request.desired_name_servers, ())

    def test_parse_update_request_keeps_order(self):
        request = parse_request(
            update_request(["ns-2.awsdns-02.org.", "ns-1.awsdns-01.com."])
        )

        self.assertEqual(request.action, Action.UPDATE)
        self.assertEqual(
            request.desired_name_servers, ("ns-2.awsdns-02.org.", "ns-1.awsdns-01.com.")
        )

    def test_delete_skips_field_validation(self):
        request = parse_request({"requestKind": "Delete"})
        self.assertEqual(request.request_kind, RequestKind.DELETE)

    def test_invalid_request_type(self):
        with self.assertRaises(InvalidRequestType) as ctx:
            parse_request(check_request(requestKind="Replace"))
        self.assertIn("invalid request type", str(ctx.exception).lower())

    def test_invalid_action(self):
        with self.assertRaises(InvalidAction) as ctx:
            parse_request(check_request(action="sync"))
        self.assertIn("invalid action", str(ctx.exception).lower())

    def test_missing_required_fields(self):
        for field in ("domain", "subdomain", "secretRef"):
            with self.subTest(field=field):
                with self.assertRaises(InvalidRequest):
                    parse_request(check_request(**{field: ""}))

    def test_update_requires_name_servers(self):
        with self.assertRaises(InvalidRequest):
            parse_request(update_request([]))

    def test_unknown_fields_rejected(self):
        with self.assertRaises(InvalidRequest) as ctx:
            parse_request(check_request(ttl=300))
        self.assertIn("ttl", str(ctx.exception))

    def test_wrong_types_rejected(self):
        with self.assertRaises(InvalidRequest):
            parse_request(check_request(domain=["example.com"]))
        with self.assertRaises(InvalidRequest):
            parse_request(update_request([], nameServers=[1, 2]))

    def test_invalid_names_rejected(self):
        with self.assertRaises(InvalidRequest):
            parse_request(check_request(subdomain="-api"))
        with self.assertRaises(InvalidRequest):
            parse_request(update_request(["ns..example.com"]))

    def test_comma_separated_name_servers(self):
        request = parse_request(
            update_request([], nameServers="ns-1.awsdns-01.com, ns-2.awsdns-02.org")
        )
        self.assertEqual(
            request.desired_name_servers, ("ns-1.awsdns-01.com", "ns-2.awsdns-02.org")
        )

    def test_request_from_cloudformation(self):
        event = {
            "RequestType": "Update",
            "ResourceProperties": {
                "ServiceToken": "arn:aws:lambda:eu-north-1:123456789012:function:fn",
                "Domain": "example.com",
                "Subdomain": "api",
                "SecretId": "cf-secret",
                "NameServers": ["ns-1.awsdns-01.com."],
                "Action": "update",
            },
        }

        request = parse_request(request_from_cloudformation(event))

        self.assertEqual(request.request_kind, RequestKind.UPDATE)
        self.assertEqual(request.secret_ref, "cf-secret")
        self.assertEqual(request.desired_name_servers, ("ns-1.awsdns-01.com.",))

    def test_unknown_cloudformation_property_rejected(self):
        event = {
            "RequestType": "Create",
            "ResourceProperties": {
                "Domain": "example.com",
                "Subdomain": "api",
                "SecretId": "cf-secret",
                "Action": "check",
                "Proxied": "true",
            },
        }
        with self.assertRaises(InvalidRequest):
            parse_request(request_from_cloudformation(event))


class TestPlanNSChanges(unittest.TestCase):
    """Test the pure NS change analysis."""

    def test_spec_scenario(self):
        """Stale record is removed and both new name servers are added."""
        existing = [ns_record("r1", "ns-old.example.com.")]
        changes = plan_ns_changes(existing, ["ns-1.awsdns-01.com.", "ns-2.awsdns-02.org."])

        self.assertEqual(changes.to_remove, existing)
        self.assertEqual(changes.to_add, ["ns-1.awsdns-01.com", "ns-2.awsdns-02.org"])
        self.assertEqual(changes.total_changes, 3)

    def test_trailing_dot_equivalence(self):
        existing = [ns_record("r1", "ns1.example.com.")]
        changes = plan_ns_changes(existing, ["ns1.example.com"])

        self.assertEqual(changes.to_add, [])
        self.assertEqual(changes.to_remove, [])
        self.assertEqual(changes.unchanged, existing)

    def test_comparison_is_case_sensitive(self):
        existing = [ns_record("r1", "NS1.example.com")]
        changes = plan_ns_changes(existing, ["ns1.example.com"])

        self.assertEqual(changes.to_add, ["ns1.example.com"])
        self.assertEqual(changes.to_remove, existing)

    def test_non_ns_records_ignored(self):
        existing = [
            DNSRecord(id="a1", record_type="A", name=FQDN, content="192.0.2.1"),
            ns_record("r1", "ns1.example.com"),
        ]
        changes = plan_ns_changes(existing, ["ns1.example.com"])

        self.assertEqual(changes.total_changes, 0)

    def test_duplicates_not_deduplicated(self):
        changes = plan_ns_changes([], ["ns1.example.com", "ns1.example.com."])
        self.assertEqual(changes.to_add, ["ns1.example.com", "ns1.example.com"])

        existing = [ns_record("r1", "ns1.example.com"), ns_record("r2", "ns1.example.com.")]
        changes = plan_ns_changes(existing, ["ns1.example.com"])
        self.assertEqual(changes.to_remove, [])
        self.assertEqual(len(changes.unchanged), 2)


class TestCollisionCheck(unittest.TestCase):
    """Test the read-only collision check."""

    def test_no_records_succeeds(self):
        provider = MockDNSProvider(zones=ZONES)
        outcome = make_manager(provider).handle(check_request())

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertEqual(outcome.zone_id, "zone-123")
        self.assertEqual(
            outcome.to_dict()["data"],
            {
                "domain": "example.com",
                "subdomain": "api",
                "zoneId": "zone-123",
                "message": "No colliding DNS records found",
            },
        )
        self.assertIn(("list_records", "zone-123", FQDN), provider.calls)

    def test_only_ns_records_succeeds(self):
        provider = MockDNSProvider(zones=ZONES, records=[ns_record("r1", "ns1.example.com")])
        outcome = make_manager(provider).handle(check_request())

        self.assertEqual(outcome.status, Status.SUCCESS)

    def test_non_ns_records_collide(self):
        provider = MockDNSProvider(
            zones=ZONES,
            records=[
                DNSRecord(id="a1", record_type="A", name=FQDN, content="192.0.2.10"),
                DNSRecord(id="t1", record_type="TXT", name=FQDN, content="v=spf1 -all"),
                ns_record("r1", "ns1.example.com"),
            ],
        )
        outcome = make_manager(provider).handle(check_request())

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn(FQDN, outcome.reason)
        self.assertIn("A", outcome.reason)
        self.assertIn("TXT", outcome.reason)
        self.assertNotIn("192.0.2.10", outcome.reason)
        self.assertNotIn("spf1", outcome.reason)
        self.assertEqual(provider.mutations, [])

    def test_records_at_other_names_ignored(self):
        provider = MockDNSProvider(
            zones=ZONES,
            records=[DNSRecord(id="a1", record_type="A", name="www.example.com", content="192.0.2.1")],
        )
        outcome = make_manager(provider).handle(check_request())

        self.assertEqual(outcome.status, Status.SUCCESS)

    def test_check_never_mutates(self):
        provider = MockDNSProvider(zones=ZONES, records=[ns_record("r1", "ns-old.example.com")])
        make_manager(provider).handle(check_request(nameServers=["ns1.example.com"]))

        self.assertEqual(provider.mutations, [])
        self.assertEqual(len(provider.records), 1)


class TestNSReconciliation(unittest.TestCase):
    """Test NS record reconciliation."""

    def test_spec_scenario(self):
        provider = MockDNSProvider(zones=ZONES, records=[ns_record("r1", "ns-old.example.com.")])
        outcome = make_manager(provider).handle(
            update_request(["ns-1.awsdns-01.com.", "ns-2.awsdns-02.org."])
        )

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertEqual(outcome.ns_records_added, 2)
        self.assertEqual(outcome.ns_records_removed, 1)
        data = outcome.to_dict()["data"]
        self.assertNotIn("warnings", data)
        self.assertEqual(data["route53NameServers"], ["ns-1.awsdns-01.com", "ns-2.awsdns-02.org"])
        self.assertEqual(
            sorted(r.content for r in provider.records),
            ["ns-1.awsdns-01.com", "ns-2.awsdns-02.org"],
        )

    def test_deletions_before_creations(self):
        provider = MockDNSProvider(zones=ZONES, records=[ns_record("r1", "ns-old.example.com")])
        make_manager(provider).handle(update_request(["ns-1.awsdns-01.com"]))

        self.assertEqual([call[0] for call in provider.mutations], ["delete_record", "create_record"])

    def test_created_records_use_configured_ttl(self):
        provider = MockDNSProvider(zones=ZONES)
        make_manager(provider).handle(update_request(["ns-1.awsdns-01.com"]))

        self.assertEqual(
            provider.mutations[0],
            ("create_record", "zone-123", "NS", FQDN, "ns-1.awsdns-01.com", 3600),
        )

    def test_second_run_is_idempotent(self):
        provider = MockDNSProvider(zones=ZONES, records=[ns_record("r1", "ns-old.example.com.")])
        manager = make_manager(provider)
        request = update_request(["ns-1.awsdns-01.com.", "ns-2.awsdns-02.org."])

        manager.handle(request)
        mutations_after_first_run = len(provider.mutations)
        outcome = manager.handle(request)

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertEqual(outcome.ns_records_added, 0)
        self.assertEqual(outcome.ns_records_removed, 0)
        self.assertEqual(len(provider.mutations), mutations_after_first_run)

    def test_trailing_dot_equivalence(self):
        provider = MockDNSProvider(zones=ZONES, records=[ns_record("r1", "ns1.example.com.")])
        outcome = make_manager(provider).handle(update_request(["ns1.example.com"]))

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertEqual(outcome.ns_records_added, 0)
        self.assertEqual(provider.mutations, [])

    def test_partial_failure_succeeds(self):
        """One addition succeeding is enough, even if the deletion failed."""
        provider = MockDNSProvider(
            zones=ZONES,
            records=[ns_record("r1", "ns-c.example.net")],
            fail_create_for={"ns-b.example.net"},
            fail_delete_for={"ns-c.example.net"},
        )
        outcome = make_manager(provider).handle(
            update_request(["ns-a.example.net", "ns-b.example.net"])
        )

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertEqual(outcome.ns_records_added, 1)
        self.assertEqual(outcome.ns_records_removed, 0)
        warnings = outcome.to_dict()["data"]["warnings"]
        self.assertEqual(len(warnings["addErrors"]), 1)
        self.assertIn("ns-b.example.net", warnings["addErrors"][0])
        self.assertEqual(len(warnings["deleteErrors"]), 1)
        self.assertIn("ns-c.example.net", warnings["deleteErrors"][0])

    def test_total_add_failure_fails(self):
        provider = MockDNSProvider(
            zones=ZONES, fail_create_for={"ns-a.example.net", "ns-b.example.net"}
        )
        outcome = make_manager(provider).handle(
            update_request(["ns-a.example.net", "ns-b.example.net"])
        )

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("2", outcome.reason)
        self.assertEqual(outcome.ns_records_added, 0)
        self.assertEqual(len(outcome.add_errors), 2)
        self.assertEqual(outcome.to_dict()["data"]["zoneId"], "zone-123")

    def test_failed_deletions_only_warn(self):
        provider = MockDNSProvider(
            zones=ZONES,
            records=[ns_record("r1", "ns-a.example.net"), ns_record("r2", "ns-c.example.net")],
            fail_delete_for={"ns-c.example.net"},
        )
        outcome = make_manager(provider).handle(update_request(["ns-a.example.net"]))

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertEqual(outcome.ns_records_removed, 0)
        self.assertEqual(len(outcome.delete_errors), 1)

    def test_non_ns_records_left_alone(self):
        a_record = DNSRecord(id="a1", record_type="A", name=FQDN, content="192.0.2.1")
        provider = MockDNSProvider(zones=ZONES, records=[a_record])
        outcome = make_manager(provider).handle(update_request(["ns-a.example.net"]))

        self.assertEqual(outcome.status, Status.SUCCESS)
        self.assertIn(a_record, provider.records)

    def test_duplicate_desired_attempted_twice(self):
        provider = MockDNSProvider(zones=ZONES)
        outcome = make_manager(provider).handle(
            update_request(["ns-a.example.net", "ns-a.example.net."])
        )

        self.assertEqual(len(provider.mutations), 2)
        self.assertEqual(outcome.ns_records_added, 2)


class TestFailFast(unittest.TestCase):
    """Read-only failures abort before any mutation."""

    def test_secret_unavailable(self):
        resolver = Mock(spec=SecretResolver)
        resolver.resolve.side_effect = SecretUnavailable("store unreachable")
        provider = MockDNSProvider(zones=ZONES)

        outcome = make_manager(provider, resolver).handle(update_request(["ns-a.example.net"]))

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("Failed to get secret", outcome.reason)
        self.assertEqual(provider.calls, [])

    def test_secret_malformed(self):
        resolver = Mock(spec=SecretResolver)
        resolver.resolve.side_effect = SecretMalformed("not JSON")

        outcome = make_manager(MockDNSProvider(zones=ZONES), resolver).handle(check_request())

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("not JSON", outcome.reason)

    def test_empty_token(self):
        provider = MockDNSProvider(zones=ZONES)
        resolver = StaticSecretResolver({"cf-secret": ""})

        outcome = make_manager(provider, resolver).handle(check_request())

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertEqual(outcome.reason, "API token not found in secret")
        self.assertEqual(provider.calls, [])

    def test_resolver_returning_empty_token(self):
        resolver = Mock(spec=SecretResolver)
        resolver.resolve.return_value = ""

        outcome = make_manager(MockDNSProvider(zones=ZONES), resolver).handle(check_request())

        self.assertEqual(outcome.reason, "API token not found in secret")

    def test_zone_not_found(self):
        provider = MockDNSProvider(zones={"other.com": "zone-9"})
        outcome = make_manager(provider).handle(update_request(["ns-a.example.net"]))

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("Failed to get zone ID for example.com", outcome.reason)
        self.assertEqual(provider.calls, [("zone_id_by_name", "example.com")])

    def test_list_failure(self):
        provider = MockDNSProvider(zones=ZONES, fail_list=True)
        outcome = make_manager(provider).handle(update_request(["ns-a.example.net"]))

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("Failed to check DNS records", outcome.reason)
        self.assertEqual(outcome.zone_id, "zone-123")
        self.assertEqual(provider.mutations, [])


class TestDelegationManager(unittest.TestCase):
    """Test request dispatch."""

    def test_delete_makes_no_calls(self):
        resolver = Mock(spec=SecretResolver)
        provider = MockDNSProvider(zones=ZONES)

        for request in (
            {"requestKind": "Delete"},
            check_request(requestKind="Delete"),
            update_request(["ns-a.example.net"], requestKind="Delete"),
        ):
            with self.subTest(request=request):
                outcome = make_manager(provider, resolver).handle(request)
                self.assertEqual(outcome.status, Status.SUCCESS)
                self.assertEqual(outcome.to_dict(), {"status": "SUCCESS", "reason": "Resource deleted", "data": {}})

        resolver.resolve.assert_not_called()
        self.assertEqual(provider.calls, [])

    def test_invalid_request_type(self):
        outcome = make_manager(MockDNSProvider()).handle(check_request(requestKind="Import"))

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("invalid request type", outcome.reason.lower())

    def test_invalid_action(self):
        provider = MockDNSProvider(zones=ZONES)
        outcome = make_manager(provider).handle(check_request(action="delete"))

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("invalid action", outcome.reason.lower())
        self.assertEqual(provider.calls, [])

    def test_missing_parameters(self):
        provider = MockDNSProvider(zones=ZONES)
        outcome = make_manager(provider).handle(update_request([]))

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("Missing required parameters", outcome.reason)
        self.assertEqual(provider.calls, [])

    def test_unexpected_error_still_yields_outcome(self):
        settings = Settings.from_dict({"provider": {"name": "mock"}})

        def broken_factory(token, settings, cancel_token):
            raise RuntimeError("boom")

        manager = DelegationManager(
            settings,
            secret_resolver=StaticSecretResolver({"cf-secret": "token"}),
            provider_factory=broken_factory,
        )
        outcome = manager.handle(check_request())

        self.assertEqual(outcome.status, Status.FAILED)
        self.assertIn("boom", outcome.reason)

    def test_session_closed_after_invocation(self):
        provider = MockDNSProvider(zones=ZONES)
        make_manager(provider).handle(check_request())

        self.assertTrue(provider.closed)


class CancellingProvider(MockDNSProvider):
    """Cancels the invocation from inside the first deletion."""

    def __init__(self, cancel_token, **kwargs):
        super().__init__(**kwargs)
        self.cancel_token = cancel_token

    def delete_record(self, zone_id, record_id):
        super().delete_record(zone_id, record_id)
        self.cancel_token.cancel()


class TestCancellation(unittest.TestCase):
    """Test cancellation of invocations."""

    def test_cancelled_before_start(self):
        provider = MockDNSProvider(zones=ZONES)
        token = CancellationToken()
        token.cancel()

        outcome = make_manager(provider).handle(update_request(["ns-a.example.net"]), token)

        self.assertEqual(outcome.status, Status.CANCELLED)
        self.assertEqual(provider.calls, [])

    def test_cancelled_mid_apply_reports_partial_counts(self):
        token = CancellationToken()
        provider = CancellingProvider(
            token, zones=ZONES, records=[ns_record("r1", "ns-old.example.net")]
        )

        outcome = make_manager(provider).handle(update_request(["ns-a.example.net"]), token)

        self.assertEqual(outcome.status, Status.CANCELLED)
        self.assertEqual(outcome.ns_records_removed, 1)
        self.assertEqual(outcome.ns_records_added, 0)
        self.assertEqual([call[0] for call in provider.mutations], ["delete_record"])

    def test_expired_deadline(self):
        provider = MockDNSProvider(zones=ZONES)
        outcome = make_manager(provider).handle(check_request(), CancellationToken.with_timeout(0))

        self.assertEqual(outcome.status, Status.CANCELLED)

    def test_token_callbacks_run_once(self):
        token = CancellationToken()
        callback = Mock()
        token.add_callback(callback)

        token.cancel()
        token.cancel()

        callback.assert_called_once_with()
        self.assertTrue(token.cancelled)
        with self.assertRaises(OperationCancelled):
            token.raise_if_cancelled()

    def test_callback_added_after_cancel_runs_immediately(self):
        token = CancellationToken()
        token.cancel()
        callback = Mock()

        token.add_callback(callback)

        callback.assert_called_once_with()

    def test_unbounded_token(self):
        token = CancellationToken()

        self.assertIsNone(token.remaining())
        self.assertFalse(token.cancelled)

    def test_from_lambda_context(self):
        context = Mock()
        context.get_remaining_time_in_millis.return_value = 10000

        token = CancellationToken.from_lambda_context(context, safety_margin=4)

        self.assertLessEqual(token.remaining(), 6.0)
        self.assertGreater(token.remaining(), 5.0)
        self.assertIsNone(CancellationToken.from_lambda_context(None).remaining())


class TestOutcome(unittest.TestCase):
    """Test outcome rendering."""

    def test_failed_outcome_without_context_has_empty_data(self):
        outcome = ReconciliationOutcome.failed("Invalid action: sync")
        self.assertEqual(outcome.to_dict(), {"status": "FAILED", "reason": "Invalid action: sync", "data": {}})

    def test_update_outcome_data(self):
        outcome = ReconciliationOutcome.success(
            "NS records updated successfully",
            domain="example.com",
            subdomain="api",
            zone_id="zone-123",
            phase=Action.UPDATE,
            ns_records_added=1,
            name_servers=("ns-a.example.net",),
            add_errors=("Error creating NS record for ns-b.example.net: refused",),
        )

        self.assertEqual(
            outcome.to_dict()["data"],
            {
                "domain": "example.com",
                "subdomain": "api",
                "zoneId": "zone-123",
                "nsRecordsAdded": 1,
                "nsRecordsRemoved": 0,
                "route53NameServers": ["ns-a.example.net"],
                "warnings": {
                    "deleteErrors": [],
                    "addErrors": ["Error creating NS record for ns-b.example.net: refused"],
                },
            },
        )


if __name__ == "__main__":
    unittest.main()
