"""Tests for the HTML document assembler and its Content-Security-Policy"""
import base64
import re

import pytest
from bs4 import BeautifulSoup

from portfolio_site.config import AnalyticsConfig
from portfolio_site.document import (
    build_analytics_snippet,
    build_csp_meta,
    build_html_document,
    escape_script_string,
    generate_nonce,
)

from .conftest import FIXED_NONCE

ENABLED = AnalyticsConfig(domain="example.com", host="https://stats.example/")
DISABLED = AnalyticsConfig()


def render(analytics, **kwargs):
    options = dict(
        title="Home",
        description="A page",
        body="<p>Hello</p>",
        pathname="/",
        analytics=analytics,
        site_url="https://example.com",
        nonce_factory=lambda: FIXED_NONCE,
    )
    options.update(kwargs)
    return build_html_document(**options)


def csp_of(html):
    soup = BeautifulSoup(html, "html.parser")
    tags = soup.find_all("meta", attrs={"http-equiv": "Content-Security-Policy"})
    assert len(tags) == 1
    return tags[0]["content"]


class TestNonce:
    def test_sixteen_random_bytes(self):
        assert len(base64.b64decode(generate_nonce())) == 16

    def test_fresh_each_call(self):
        assert generate_nonce() != generate_nonce()

    def test_generated_once_per_document(self):
        calls = []

        def factory():
            calls.append(1)
            return FIXED_NONCE

        render(ENABLED, nonce_factory=factory)
        assert len(calls) == 1


class TestCsp:
    def test_enabled_policy(self):
        policy = csp_of(render(ENABLED))
        assert f"script-src 'self' 'nonce-{FIXED_NONCE}' https://stats.example;" in policy
        assert "connect-src 'self' https://stats.example;" in policy

    def test_disabled_policy(self):
        policy = csp_of(render(DISABLED))
        assert "script-src 'self';" in policy
        assert "connect-src 'self';" in policy
        assert "nonce-" not in policy

    @pytest.mark.parametrize("analytics", [ENABLED, DISABLED])
    def test_fixed_directives(self, analytics):
        policy = build_csp_meta(FIXED_NONCE, analytics)
        for directive in (
            "default-src 'self'",
            "style-src 'self' 'unsafe-inline'",
            "img-src 'self' data:",
            "font-src 'self'",
            "frame-ancestors 'none'",
            "form-action 'self'",
        ):
            assert directive in policy


class TestAnalytics:
    def test_snippet_absent_when_disabled(self):
        assert build_analytics_snippet(FIXED_NONCE, DISABLED) == ""
        html = render(DISABLED)
        assert "plausibleDomain" not in html

    def test_every_nonce_matches_policy(self):
        html = render(ENABLED)
        policy_nonce = re.search(r"'nonce-([^']+)'", csp_of(html)).group(1)
        scripts = BeautifulSoup(html, "html.parser").find_all("script", nonce=True)
        assert len(scripts) == 2
        assert {s["nonce"] for s in scripts} == {policy_nonce}

    def test_snippet_embeds_config_as_js_strings(self):
        snippet = build_analytics_snippet(FIXED_NONCE, ENABLED)
        assert 'var plausibleDomain = "example.com";' in snippet
        assert 'var plausibleHost = "https://stats.example/";' in snippet
        assert f"script.setAttribute('nonce', '{FIXED_NONCE}');" in snippet

    def test_script_string_cannot_close_tag(self):
        assert "</script>" not in escape_script_string("x</script><script>alert(1)")

    def test_analytics_asset_always_deferred(self):
        for analytics in (ENABLED, DISABLED):
            html = render(analytics)
            assert f'<script src="/assets/analytics.js" defer nonce="{FIXED_NONCE}"></script>' in html


class TestDocument:
    def test_shell(self):
        html = render(DISABLED, pathname="/about/")
        assert html.startswith("<!doctype html>")
        soup = BeautifulSoup(html, "html.parser")
        assert soup.find("html")["lang"] == "en"
        assert soup.find("main", id="main-content").find("p").get_text() == "Hello"
        assert soup.find("link", rel="canonical")["href"] == "https://example.com/about/"
        assert soup.find("link", rel="stylesheet")["href"] == "/assets/shell.css"
        assert soup.find("a", class_="shell__skip-link")["href"] == "#main-content"

    def test_title_escaped(self):
        html = render(DISABLED, title="<Home & Co>")
        assert "<title>&lt;Home &amp; Co&gt;</title>" in html

    def test_robots_override(self):
        html = render(DISABLED, robots="noindex,follow")
        assert '<meta name="robots" content="noindex,follow" />' in html

    def test_reads_environment_when_not_given(self):
        env = {"ANALYTICS_DOMAIN": "env.example", "SITE_URL": "https://env.example"}
        html = build_html_document("T", "D", "", env=env, nonce_factory=lambda: FIXED_NONCE)
        assert "https://plausible.io" in csp_of(html)
        assert '<link rel="canonical" href="https://env.example/" />' in html

    def test_host_markup_cannot_escape_meta_tag(self):
        hostile = AnalyticsConfig(domain="example.com", host='https://h.io/"><script>')
        html = render(hostile)
        soup = BeautifulSoup(html, "html.parser")
        assert len(soup.find_all("meta", attrs={"http-equiv": "Content-Security-Policy"})) == 1
        assert 'https://h.io/"><script>' in csp_of(html)
        assert all(script.get("src") or script.get("nonce") for script in soup.find_all("script"))
