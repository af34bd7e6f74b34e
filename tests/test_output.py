import asyncio
import json
import random

import pytest

from shared.console import ToolkitConsole
from selfcheck.core.engine import SelfCheckEngine
from selfcheck.output.console import SelfCheckConsoleOutput
from selfcheck.output.report import SelfCheckReportGenerator


def _rendered(result):
    console = ToolkitConsole(record=True)
    SelfCheckConsoleOutput(console).display(result)
    return console.rich.export_text()


def test_simulated_result_shows_banner(offline_config):
    result = asyncio.run(SelfCheckEngine(offline_config).check_breach("user@example.com"))
    text = _rendered(result)

    assert "SIMULATED RESULT" in text
    assert "LinkedIn" in text


def test_live_result_has_no_banner():
    result = asyncio.run(SelfCheckEngine().analyze_url("https://example.com"))
    text = _rendered(result)

    assert "SIMULATED RESULT" not in text
    assert "SAFE" in text
    assert "No major phishing indicators detected" in text


def test_password_display_lists_suggestions():
    result = asyncio.run(SelfCheckEngine().analyze_password("password"))
    text = _rendered(result)
    assert "WEAK" in text
    assert "Avoid common dictionary words" in text


def test_status_display_marks_simulated_fields(offline_config):
    engine = SelfCheckEngine(offline_config, rng=random.Random(4))
    text = _rendered(asyncio.run(engine.check_status("example.com")))
    assert "(simulated)" in text


def test_json_report_contains_envelope(tmp_path, offline_config):
    result = asyncio.run(SelfCheckEngine(offline_config).check_breach("user@example.com"))
    path = SelfCheckReportGenerator().generate_json(result, tmp_path / "out" / "breach.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["tool_name"] == "breach"
    assert data["simulated"] is True
    assert data["severity_counts"]["HIGH"] == 3
    assert data["highest_severity"] == "HIGH"
    assert data["metadata"]["breaches"][0]["name"] == "LinkedIn"


def test_html_report_escapes_and_flags_simulation(tmp_path, offline_config):
    engine = SelfCheckEngine(offline_config)
    url_result = asyncio.run(engine.analyze_url("https://example.com/<script>"))
    html_path = SelfCheckReportGenerator().generate_html(url_result, tmp_path / "url.html")
    page = html_path.read_text(encoding="utf-8")

    assert "<script>" not in page
    assert "&lt;script&gt;" in page
    assert "SIMULATED RESULT" not in page

    breach_result = asyncio.run(engine.check_breach("user@example.com"))
    breach_page = SelfCheckReportGenerator().render_html(breach_result)
    assert "SIMULATED RESULT" in breach_page


@pytest.mark.parametrize("ssid", ["Home[/b]Network", "[guest] Home"])
def test_wifi_display_keeps_brackets_in_ssid(ssid):
    result = asyncio.run(SelfCheckEngine().analyze_wifi(ssid, "WPA2"))
    text = _rendered(result)

    assert ssid in text
    assert "Security Recommendations:" in text
    assert "Disable WPS (WiFi Protected Setup)" in text


def test_status_display_keeps_brackets_in_domain(offline_config):
    engine = SelfCheckEngine(offline_config, rng=random.Random(4))
    text = _rendered(asyncio.run(engine.check_status("ex[/b]ample.com")))

    assert "ex[/b]ample.com appears to be down for everyone." in text


def test_console_messages_are_not_markup():
    console = ToolkitConsole(record=True)
    console.error("bad [/b] input")
    console.info("[guest]")

    text = console.rich.export_text()
    assert "bad [/b] input" in text
    assert "[guest]" in text
