import logging

import pytest

from notes.markup import deny_list_url, sanitize_url


@pytest.mark.parametrize(
    "url",
    ["https://example.com/a?b=c", "http://example.com", "/notes/1", "#top"],
)
def test_allowed_targets_pass_through(url):
    assert sanitize_url(url) == url


def test_allowed_target_is_trimmed():
    assert sanitize_url("  https://example.com  ") == "https://example.com"


@pytest.mark.parametrize(
    "url",
    [
        "javascript:alert(1)",
        "JavaScript:alert(1)",
        " java\tscript:alert(1)",
        "data:text/html,<script>alert(1)</script>",
        "vbscript:msgbox(1)",
        "file:///etc/passwd",
    ],
)
def test_blocked_schemes_fall_back(url):
    assert sanitize_url(url) == "#"


def test_unsupported_format_falls_back():
    assert sanitize_url("mailto:someone@example.com") == "#"
    assert sanitize_url("example.com") == "#"


def test_empty_or_non_string_falls_back():
    assert sanitize_url("") == "#"
    assert sanitize_url(None) == "#"
    assert sanitize_url(42) == "#"


def test_explicit_fallback():
    assert sanitize_url("javascript:void(0)", "about:blank") == "about:blank"


def test_configured_fallback(markup_settings):
    markup_settings(LINK_FALLBACK="/blocked")
    assert sanitize_url("javascript:alert(1)") == "/blocked"


def test_configured_prefixes(markup_settings):
    markup_settings(ALLOWED_URL_PREFIXES=["https://"])
    assert sanitize_url("/relative") == "#"
    assert sanitize_url("https://ok.example") == "https://ok.example"


def test_rejection_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="notes.markup.url_guard"):
        sanitize_url("javascript:alert(1)")
    assert "blocked scheme" in caplog.text


def test_deny_list_only_rejects_script_and_data():
    assert deny_list_url("javascript:alert(1)") == "#"
    assert deny_list_url("DATA:text/plain,hi") == "#"
    assert deny_list_url("mailto:someone@example.com") == "mailto:someone@example.com"
    assert deny_list_url("") == "#"
