"""Tests for boundary validation of legal page input."""

import pytest
from blogcms.legal.models import LegalPageInput, LegalSlug
from blogcms.legal.validation import (
    Err,
    Ok,
    validate_page_input,
    validate_published,
    validate_slug,
)


class TestValidateSlug:
    @pytest.mark.parametrize("raw", ["privacy", "terms"])
    def test_accepts_known_slugs(self, raw):
        result = validate_slug(raw)
        assert isinstance(result, Ok)
        assert result.value == LegalSlug(raw)

    def test_normalizes_case_and_whitespace(self):
        assert validate_slug("  Privacy ") == Ok(LegalSlug.PRIVACY)

    def test_rejects_unknown_slug(self):
        result = validate_slug("cookies")
        assert isinstance(result, Err)
        assert "cookies" in result.reason
        assert "privacy" in result.reason

    def test_rejects_non_string(self):
        assert isinstance(validate_slug(42), Err)


class TestValidatePageInput:
    def test_valid_payload(self):
        result = validate_page_input("Terms", "<p>Long enough body</p>")
        assert result == Ok(LegalPageInput(title="Terms", body="<p>Long enough body</p>"))

    def test_title_too_short(self):
        result = validate_page_input("T", "<p>Long enough body</p>")
        assert isinstance(result, Err)
        assert "title" in result.reason

    def test_body_too_short(self):
        result = validate_page_input("Terms", "<p>x</p>")
        assert isinstance(result, Err)
        assert "body" in result.reason

    def test_title_too_long(self):
        result = validate_page_input("T" * 256, "<p>Long enough body</p>")
        assert isinstance(result, Err)
        assert "at most 255" in result.reason

    def test_maximum_title_length_is_inclusive(self):
        assert isinstance(validate_page_input("T" * 255, "<p>Long enough body</p>"), Ok)

    def test_minimum_lengths_are_inclusive(self):
        assert isinstance(validate_page_input("ab", "0123456789"), Ok)

    def test_non_string_fields(self):
        assert isinstance(validate_page_input(None, "0123456789"), Err)
        assert isinstance(validate_page_input("Terms", 12345678901), Err)


class TestValidatePublished:
    @pytest.mark.parametrize("raw", [True, "true", "YES", "1", "on"])
    def test_truthy(self, raw):
        assert validate_published(raw) == Ok(True)

    @pytest.mark.parametrize("raw", [False, "false", "No", "0", "off"])
    def test_falsy(self, raw):
        assert validate_published(raw) == Ok(False)

    @pytest.mark.parametrize("raw", ["maybe", "", 1, None])
    def test_rejects_other_values(self, raw):
        assert isinstance(validate_published(raw), Err)
