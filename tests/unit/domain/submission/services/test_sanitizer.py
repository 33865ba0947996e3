"""
Tests for the input sanitizer.

Covers:
- Tag and script pattern removal
- Control characters, trimming, max_length
- Idempotence (including patterns assembled by a previous removal)
- Field helpers (email, phone, name, filename, URL)
"""

import pytest

from src.domain.submission.services import (
    is_safe_filename,
    sanitize_email,
    sanitize_filename,
    sanitize_input,
    sanitize_name,
    sanitize_object,
    sanitize_phone,
    sanitize_url,
)


# ============================================================================
# sanitize_input()
# ============================================================================


def test_strips_tags_and_trims():
    assert sanitize_input("  <b>John</b> Doe ") == "John Doe"


def test_removes_script_element_markup():
    assert "<script>" not in sanitize_input("<script>alert(1)</script>Hi")


def test_removes_javascript_scheme_and_event_handlers():
    result = sanitize_input('javascript:alert(1) onclick=steal()')
    assert "javascript:" not in result.lower()
    assert "onclick=" not in result.lower()


def test_removes_control_characters():
    assert sanitize_input("Jo\x00hn\x1f") == "John"


def test_non_string_input_returns_empty_string():
    assert sanitize_input(None) == ""
    assert sanitize_input(42) == ""


def test_max_length_truncates():
    assert sanitize_input("abcdefgh", max_length=3) == "abc"


@pytest.mark.parametrize(
    "raw",
    [
        "javajavascript:script:alert(1)",
        "<<b>script>alert(1)<</b>/script>",
        "&lt;b&gt;bold&lt;/b&gt;",
        "oonclick=nclick=x",
        "  padded\x00 value  ",
        "<a href='vbscript:x'>link</a> expression(1)",
    ],
)
def test_sanitize_input_is_idempotent(raw):
    once = sanitize_input(raw)
    assert sanitize_input(once) == once


def test_nested_javascript_scheme_fully_removed():
    assert "javascript:" not in sanitize_input("javajavascript:script:x").lower()


# ============================================================================
# FIELD HELPERS
# ============================================================================


def test_sanitize_object_keeps_numbers_and_drops_other_types():
    result = sanitize_object({"name": "<i>Jane</i>", "age": 30, "tags": ["x"], "nested": {"a": "<b>b</b>"}})
    assert result == {"name": "Jane", "age": 30, "nested": {"a": "b"}}


def test_sanitize_email_lowercases_and_drops_invalid_characters():
    assert sanitize_email(" John.Doe+tag@Example.COM ") == "john.doe+tag@example.com"
    assert sanitize_email("a b@c.d") == "ab@c.d"


def test_sanitize_phone_keeps_digits():
    assert sanitize_phone("(123) 456-7890") == "1234567890"


def test_sanitize_name_collapses_whitespace_and_drops_digits():
    assert sanitize_name("  Jane   Doe3 ") == "Jane Doe"


def test_sanitize_filename_replaces_unsafe_characters():
    assert sanitize_filename("John Doe's photo.JPG") == "john_doe_s_photo.jpg"


def test_sanitize_url_accepts_only_http_and_https():
    assert sanitize_url("https://example.com/a") == "https://example.com/a"
    assert sanitize_url("ftp://example.com/a") is None
    assert sanitize_url("javascript:alert(1)") is None


@pytest.mark.parametrize(
    "filename, expected",
    [("photo.jpg", True), ("photo.PNG", True), ("evil.exe", False), ("shell.PHP", False), (None, False)],
)
def test_is_safe_filename(filename, expected):
    assert is_safe_filename(filename) is expected
