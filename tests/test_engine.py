import asyncio
import random

import httpx

from shared.models import Severity
from selfcheck.core.engine import SelfCheckEngine
from selfcheck.core.models import CharsetSelection


def _run(coro):
    return asyncio.run(coro)


def test_password_result_envelope():
    result = _run(SelfCheckEngine().analyze_password("password"))

    assert result.tool_name == "password"
    assert result.target == "[password]"
    assert result.score == 10
    assert result.level == "Weak"
    assert result.findings[0].severity is Severity.HIGH
    assert result.metadata["feedback"][-1] == "Avoid common dictionary words"
    assert result.end_time is not None


def test_password_is_never_stored_in_result():
    secret = "Zq8!unique-Secret"
    result = _run(SelfCheckEngine().analyze_password(secret))
    assert secret not in result.model_dump_json()


def test_empty_password_has_no_score():
    result = _run(SelfCheckEngine().analyze_password(""))
    assert result.score is None
    assert result.rejected is False
    assert result.findings == []


def test_generate_uses_config_defaults(offline_config):
    offline_config.password.symbols = False
    engine = SelfCheckEngine(offline_config, rng=random.Random(9))
    result = _run(engine.generate_password())

    assert result.rejected is False
    password = result.metadata["password"]
    assert len(password) == 16
    assert password.isalnum()
    assert result.metadata["charset"]["symbols"] is False
    assert result.level in {"Weak", "Fair", "Good", "Strong", "Very Strong"}


def test_generate_with_no_pools_is_rejected():
    charset = CharsetSelection(uppercase=False, lowercase=False, digits=False, symbols=False)
    result = _run(SelfCheckEngine().generate_password(12, charset))

    assert result.rejected is True
    assert result.summary == "Select at least one character type"


def test_url_findings_map_to_severities():
    result = _run(SelfCheckEngine().analyze_url("http://paypal-secure-login.com/verify"))

    assert result.level == "Dangerous"
    assert result.score == 80
    risk = [f for f in result.findings if f.title == "Risk Indicator"]
    assert len(risk) == 3
    assert all(f.severity is Severity.HIGH for f in risk)
    assert result.metadata["hostname"] == "paypal-secure-login.com"


def test_safe_url_warnings_are_low():
    result = _run(SelfCheckEngine().analyze_url("http://example.com"))
    assert result.level == "Safe"
    risk = [f for f in result.findings if f.title == "Risk Indicator"]
    assert [f.severity for f in risk] == [Severity.LOW]


def test_invalid_url_is_rejected():
    result = _run(SelfCheckEngine().analyze_url("not a url"))
    assert result.rejected is True
    assert result.level == "Invalid"
    assert result.summary.startswith("Invalid URL format")


def test_wifi_rejection_does_not_raise():
    result = _run(SelfCheckEngine().analyze_wifi("", "WPA2"))
    assert result.rejected is True
    assert result.target == "[empty]"
    assert result.summary == "Please fill in SSID and encryption type"


def test_wifi_result():
    result = _run(SelfCheckEngine().analyze_wifi("linksys", "Open"))
    assert result.score == 75
    assert result.level == "Poor"
    assert result.metadata["encryption"] == "Open"


def test_wifi_recommendations_become_findings():
    result = _run(SelfCheckEngine().analyze_wifi("HomeNetwork5G", "WPA2"))
    advice = [f for f in result.findings if f.title == "WiFi Security Recommendation"]

    assert advice[1].recommendation == "If supported, upgrade router to WPA3"
    assert advice[-1].recommendation == "Hide SSID broadcast (optional extra security)"
    assert result.metadata["recommendations"][0] == "WPA2 is secure, but consider upgrading"


def test_offline_breach_is_flagged_simulated(offline_config):
    result = _run(SelfCheckEngine(offline_config).check_breach("user@example.com"))

    assert result.simulated is True
    assert result.level == "Breached"
    assert len(result.findings) == 3
    assert result.metadata["source"] == "simulation"


def test_invalid_email_is_rejected(offline_config):
    result = _run(SelfCheckEngine(offline_config).check_breach("nope"))
    assert result.rejected is True
    assert result.summary == "Please enter a valid email address"


def test_live_breach_uses_transport():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    result = _run(SelfCheckEngine(transport=transport).check_breach("user@example.com"))

    assert result.simulated is False
    assert result.level == "Not Breached"
    assert result.findings == []


def test_offline_status(offline_config):
    engine = SelfCheckEngine(offline_config, rng=random.Random(2))
    result = _run(engine.check_status("https://example.com/x"))

    assert result.target == "example.com"
    assert result.simulated is True
    assert result.level == "Down"
    assert result.findings[0].title == "Website down"


def test_empty_status_target_is_rejected(offline_config):
    result = _run(SelfCheckEngine(offline_config).check_status("  "))
    assert result.rejected is True
