import pytest

from selfcheck.analyzers.url_risk import (
    EMPTY_URL_MESSAGE,
    INVALID_URL_MESSAGE,
    UrlRiskAnalyzer,
    parse_url,
)
from selfcheck.core.models import ThreatLevel


@pytest.fixture
def analyzer():
    return UrlRiskAnalyzer()


def test_phishing_url_is_dangerous(analyzer):
    result = analyzer.analyze("http://paypal-secure-login.com/verify")

    # 25 (no HTTPS) + 35 (brand) + 20 (path keyword)
    assert result.score == 80
    assert result.level is ThreatLevel.DANGEROUS
    assert result.hostname == "paypal-secure-login.com"
    assert result.warnings == [
        "Not using HTTPS - connection is NOT encrypted",
        'Domain mimics "paypal" but uses different domain',
        'URL contains suspicious parameter: "verify"',
    ]


def test_clean_url_forced_to_five(analyzer):
    result = analyzer.analyze("https://example.com")

    assert result.score == 5
    assert result.level is ThreatLevel.SAFE
    assert result.warnings == []
    assert "No major phishing indicators detected" in result.positives
    assert "Using secure HTTPS encryption" in result.positives


def test_plain_http_alone_is_still_safe(analyzer):
    result = analyzer.analyze("http://example.com")
    assert result.score == 25
    assert result.level is ThreatLevel.SAFE
    assert "No major phishing indicators detected" not in result.positives


def test_raw_ip_address(analyzer):
    result = analyzer.analyze("http://192.168.1.1/login")

    # 25 (no HTTPS) + 40 (IP) + 20 (path keyword)
    assert result.score == 85
    assert result.level is ThreatLevel.DANGEROUS


def test_accented_hostname_is_possible_idn_spoofing(analyzer):
    result = analyzer.analyze("https://pàypal.com")

    assert result.score == 30
    assert result.level is ThreatLevel.SUSPICIOUS
    assert result.warnings == [
        "Domain contains non-ASCII characters - possible IDN spoofing",
    ]


def test_brand_on_own_domain_is_not_mimicry(analyzer):
    result = analyzer.analyze("https://www.paypal.com")
    assert not any("mimics" in w for w in result.warnings)
    assert result.level is ThreatLevel.SAFE


def test_excessive_subdomains(analyzer):
    result = analyzer.analyze("https://a.b.c.d.example.com")
    assert "Excessive subdomains (6) - unusual structure" in result.warnings
    assert result.score == 20


def test_non_standard_port(analyzer):
    result = analyzer.analyze("https://example.com:8888/")
    assert result.score == 10
    assert any("Non-standard port 8888" in w for w in result.warnings)


def test_standard_alternate_port_is_fine(analyzer):
    result = analyzer.analyze("https://example.com:8443/")
    assert result.score == 5


def test_only_first_path_keyword_counts(analyzer):
    result = analyzer.analyze("https://example.com/login/verify?reset=1")
    assert result.score == 20
    assert result.warnings == ['URL contains suspicious parameter: "verify"']


def test_many_hyphens_and_digits(analyzer):
    result = analyzer.analyze("https://my-free-gift-card88888.net")
    assert "Multiple hyphens in domain - possible domain spoofing" in result.warnings
    assert "Domain contains many numbers - may be randomly generated" in result.warnings
    assert result.score == 30
    assert result.level is ThreatLevel.SUSPICIOUS


def test_long_url(analyzer):
    result = analyzer.analyze("https://example.com/" + "a" * 160)
    assert "Unusually long URL - may hide malicious parameters" in result.warnings
    assert "URL length is reasonable" not in result.positives


def test_score_is_clamped(analyzer):
    url = "http://paypal-" + "x-" * 3 + "1234.a.b.c.d.com:9999/verify" + "z" * 150
    result = analyzer.analyze(url)
    assert result.score == 100
    assert result.level is ThreatLevel.DANGEROUS


@pytest.mark.parametrize("url", ["not a url", "example.com", "http://", "https://exa mple.com"])
def test_invalid_urls(analyzer, url):
    result = analyzer.analyze(url)
    assert result.level is ThreatLevel.INVALID
    assert result.score == 0
    assert result.findings == ()
    assert result.error == INVALID_URL_MESSAGE


def test_empty_url(analyzer):
    result = analyzer.analyze("   ")
    assert result.level is ThreatLevel.INVALID
    assert result.error == EMPTY_URL_MESSAGE


def test_parse_url_normalises_case_and_path():
    parsed = parse_url("HTTPS://Example.COM")
    assert parsed.scheme == "https"
    assert parsed.hostname == "example.com"
    assert parsed.path == "/"


@pytest.mark.parametrize(
    "score, level",
    [(0, ThreatLevel.SAFE), (25, ThreatLevel.SAFE), (26, ThreatLevel.SUSPICIOUS),
     (60, ThreatLevel.SUSPICIOUS), (61, ThreatLevel.DANGEROUS)],
)
def test_threat_level_thresholds(score, level):
    assert ThreatLevel.from_score(score) is level
