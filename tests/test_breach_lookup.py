import asyncio

import httpx
import pytest

from shared.config import BreachConfig, NetworkConfig
from selfcheck.collectors.breach_lookup import (
    KNOWN_BREACHES,
    NOT_BREACHED_MESSAGE,
    BreachLookup,
    simulate_breach,
    validate_email,
)
from selfcheck.core.errors import InputRejected


def _lookup(handler, **breach_kwargs):
    return BreachLookup(
        BreachConfig(**breach_kwargs),
        NetworkConfig(timeout=1.0),
        transport=httpx.MockTransport(handler),
    )


def test_not_found_means_not_breached():
    lookup = _lookup(lambda request: httpx.Response(404))
    report = asyncio.run(lookup.lookup("someone@example.com"))

    assert report.breached is False
    assert report.simulated is False
    assert report.message == NOT_BREACHED_MESSAGE


def test_breach_list_is_parsed():
    payload = [
        {"Name": "Adobe", "BreachDate": "2013-10-04", "PwnCount": 152445165,
         "Title": "Adobe", "Domain": "adobe.com"},
        {"Name": "Dropbox", "BreachDate": "2012-07-01", "PwnCount": 68648009,
         "Title": "Dropbox"},
    ]
    lookup = _lookup(lambda request: httpx.Response(200, json=payload))
    report = asyncio.run(lookup.lookup("someone@example.com"))

    assert report.breached is True
    assert report.simulated is False
    assert report.source == "live"
    assert [b.name for b in report.breaches] == ["Adobe", "Dropbox"]
    assert report.breaches[0].pwn_count == 152445165
    assert report.message == "This email was found in 2 data breach(es)."


def test_empty_list_means_not_breached():
    lookup = _lookup(lambda request: httpx.Response(200, json=[]))
    report = asyncio.run(lookup.lookup("someone@example.com"))
    assert report.breached is False
    assert report.simulated is False


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(429),
        httpx.Response(401),
        httpx.Response(200, json={"unexpected": "object"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=[{"BreachDate": "2020-01-01"}]),
    ],
)
def test_unusable_responses_fall_back_to_simulation(response):
    lookup = _lookup(lambda request: response)
    report = asyncio.run(lookup.lookup("someone@example.com"))

    assert report.simulated is True
    assert report.source == "simulation"


def test_transport_failure_falls_back_to_simulation():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    report = asyncio.run(_lookup(handler).lookup("someone@example.com"))
    assert report.simulated is True


def test_request_shape_and_api_key_header():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("hibp-api-key")
        return httpx.Response(404)

    asyncio.run(_lookup(handler, api_key="secret").lookup("a+b@example.com"))

    assert seen["url"].startswith(
        "https://haveibeenpwned.com/api/v3/breachedaccount/a%2Bb%40example.com"
    )
    assert "truncateResponse=false" in seen["url"]
    assert seen["key"] == "secret"


def test_disabled_live_lookup_never_calls_network():
    def handler(request):
        raise AssertionError("network must not be used")

    report = asyncio.run(_lookup(handler, live_lookup=False).lookup("user@example.com"))
    assert report.simulated is True


def test_simulation_is_deterministic_per_domain():
    # ord("e") + len("example.com") = 112 -> breached, 112 % 5 + 1 = 3 breaches
    report = simulate_breach("user@example.com")
    assert report.breached is True
    assert report.breaches == list(KNOWN_BREACHES[:3])
    assert simulate_breach("other@example.com").breaches == report.breaches


def test_simulation_can_report_clean():
    # ord("a") + len("a.com") = 102 -> divisible by 3
    report = simulate_breach("user@a.com")
    assert report.breached is False
    assert report.simulated is True


@pytest.mark.parametrize("email", ["", "   ", "userexample.com", "user@", "@example.com"])
def test_invalid_email_is_rejected(email):
    with pytest.raises(InputRejected):
        validate_email(email)


def test_valid_email_is_trimmed():
    assert validate_email("  user@example.com ") == "user@example.com"
