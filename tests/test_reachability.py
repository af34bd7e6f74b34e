import asyncio
import random

import httpx
import pytest

from shared.config import NetworkConfig, StatusConfig
from selfcheck.collectors.reachability import (
    CANNOT_REACH,
    DOWN,
    DOWN_ISSUES,
    UP,
    ReachabilityCheck,
    normalize_domain,
)
from selfcheck.core.errors import InputRejected

STATUS_API = "https://status.test/api.php"


def _check(handler, live=True):
    return ReachabilityCheck(
        StatusConfig(live_check=live, status_api_url=STATUS_API),
        NetworkConfig(timeout=1.0),
        rng=random.Random(5),
        transport=httpx.MockTransport(handler),
    )


def _handler(*, site=200, status_text="no", status_code=200):
    def handler(request):
        if request.url.host == "status.test":
            return httpx.Response(status_code, text=status_text)
        if isinstance(site, Exception):
            raise site
        return httpx.Response(site)
    return handler


def test_site_up_everywhere():
    report = asyncio.run(_check(_handler()).check("https://example.com/page"))

    assert report.domain == "example.com"
    assert report.user_status == UP
    assert report.global_status == UP
    assert report.status_code == 200
    assert report.issue == "No Issue"
    assert report.is_down is False
    assert report.response_time_ms >= 1
    assert report.simulated is False
    assert report.simulated_fields == []


def test_error_status_still_counts_as_reachable():
    report = asyncio.run(_check(_handler(site=503)).check("example.com"))
    assert report.user_status == UP
    assert report.status_code == 503


def test_down_just_for_user():
    handler = _handler(site=httpx.ConnectError("refused"))
    report = asyncio.run(_check(handler).check("example.com"))

    assert report.user_status == CANNOT_REACH
    assert report.global_status == UP
    assert report.just_for_user is True
    assert report.issue == "Connection Issue"
    assert report.simulated_fields == ["response_time_ms"]
    assert report.simulated is True


def test_down_for_everyone_picks_simulated_issue():
    report = asyncio.run(_check(_handler(status_text="yes")).check("example.com"))

    assert report.global_status == DOWN
    assert report.is_down is True
    assert report.issue in DOWN_ISSUES
    assert "issue" in report.simulated_fields


def test_control_character_in_domain_cannot_reach():
    report = asyncio.run(_check(_handler()).check("exa\tmple.com"))

    assert report.user_status == CANNOT_REACH
    assert report.global_status == UP
    assert report.just_for_user is True


def test_status_api_failure_mirrors_user_view():
    report = asyncio.run(_check(_handler(status_code=500)).check("example.com"))

    assert report.global_status == UP
    assert report.simulated_fields == ["global_status"]
    assert report.simulated is True


def test_offline_mode_is_fully_simulated():
    def handler(request):
        raise AssertionError("network must not be used")

    report = asyncio.run(_check(handler, live=False).check("example.com"))

    assert report.user_status == CANNOT_REACH
    assert report.global_status == DOWN
    assert report.simulated_fields == ["global_status", "issue", "response_time_ms"]
    assert 50 <= report.response_time_ms < 350


@pytest.mark.parametrize(
    "target, domain",
    [
        ("example.com", "example.com"),
        ("https://example.com/a/b?c=d", "example.com"),
        ("  http://sub.example.org/ ", "sub.example.org"),
    ],
)
def test_normalize_domain(target, domain):
    assert normalize_domain(target) == domain


@pytest.mark.parametrize("target", ["", "   ", "https://", "http:///path"])
def test_empty_domain_is_rejected(target):
    with pytest.raises(InputRejected):
        normalize_domain(target)
