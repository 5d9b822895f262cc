"""
Step definitions for Subdomain Delegator scenarios.
"""

from behave import given, then, when

from subdomain_delegator.core.delegation_manager import DelegationManager
from subdomain_delegator.core.models import DNSRecord
from subdomain_delegator.providers.mock_provider import MockDNSProvider
from subdomain_delegator.providers.secret_resolver import StaticSecretResolver


def _provider(context):
    if context.provider is None:
        context.provider = MockDNSProvider(
            zones={context.domain: context.zone_id},
            records=context.records,
            fail_create_for=context.fail_create_for,
            fail_delete_for=context.fail_delete_for,
        )
    return context.provider


def _run(context, request):
    provider = _provider(context)
    manager = DelegationManager(
        context.settings,
        secret_resolver=StaticSecretResolver({context.secret_ref: "test-token"}),
        provider_factory=lambda *args: provider,
    )
    context.outcome = manager.handle(request)


def _request(context, request_kind, action, subdomain, name_servers=None):
    request = {
        "requestKind": request_kind,
        "domain": context.domain,
        "subdomain": subdomain,
        "secretRef": context.secret_ref,
        "action": action,
    }
    if name_servers is not None:
        request["nameServers"] = [ns.strip() for ns in name_servers.split(",")]
    return request


@given('the parent domain "{domain}" is managed by the provider as zone "{zone_id}"')
def step_impl(context, domain, zone_id):
    context.domain = domain
    context.zone_id = zone_id


@given('the provider has a "{record_type}" record at "{name}" with content "{content}"')
def step_impl(context, record_type, name, content):
    context.records.append(
        DNSRecord(
            id=f"rec-{len(context.records) + 1}",
            record_type=record_type,
            name=name,
            content=content,
            ttl=3600,
        )
    )


@given('creating "{content}" fails at the provider')
def step_impl(context, content):
    context.fail_create_for.add(content)


@given('deleting "{content}" fails at the provider')
def step_impl(context, content):
    context.fail_delete_for.add(content)


@when('I check subdomain "{subdomain}"')
def step_impl(context, subdomain):
    _run(context, _request(context, "Create", "check", subdomain))


@when('I update subdomain "{subdomain}" with name servers "{name_servers}"')
def step_impl(context, subdomain, name_servers):
    _run(context, _request(context, "Update", "update", subdomain, name_servers))


@when('a "{request_kind}" request arrives for subdomain "{subdomain}"')
def step_impl(context, request_kind, subdomain):
    _run(context, _request(context, request_kind, "update", subdomain, "ns-1.awsdns-01.com"))


@then('the outcome status is "{status}"')
def step_impl(context, status):
    assert context.outcome.status.value == status, context.outcome.reason


@then('the reason mentions "{text}"')
def step_impl(context, text):
    assert text in context.outcome.reason, context.outcome.reason


@then('the reason does not mention "{text}"')
def step_impl(context, text):
    assert text not in context.outcome.reason, context.outcome.reason


@then("no records were changed")
def step_impl(context):
    assert context.provider.mutations == [], context.provider.mutations


@then("the provider was not called")
def step_impl(context):
    assert context.provider.calls == [], context.provider.calls


@then("{added:d} NS records were added and {removed:d} removed")
def step_impl(context, added, removed):
    assert context.outcome.ns_records_added == added
    assert context.outcome.ns_records_removed == removed


@then("the outcome has no warnings")
def step_impl(context):
    assert "warnings" not in context.outcome.to_dict()["data"]


@then('there is {count:d} add error mentioning "{text}"')
def step_impl(context, count, text):
    assert len(context.outcome.add_errors) == count
    assert all(text in error for error in context.outcome.add_errors)


@then('the NS records at "{name}" are "{contents}"')
def step_impl(context, name, contents):
    expected = sorted(c.strip() for c in contents.split(","))
    actual = sorted(
        r.content for r in context.provider.records if r.name == name and r.record_type == "NS"
    )
    assert actual == expected, actual
