"""Tests for phone number normalization (E.164)."""

import pytest

from tracebook.domain import ValidationError
from tracebook.domain.phone import normalize_phone, require_phone


def test_normalize_with_country_code_returns_e164():
    assert normalize_phone("+39 312 345 6789", default_region=None) == "+393123456789"
    assert normalize_phone("+1 (202) 555-1234", default_region=None) == "+12025551234"


def test_country_code_wins_over_default_region():
    assert normalize_phone("+1 202 555 1234", default_region="IT") == "+12025551234"


def test_normalize_without_country_code_uses_default_region():
    assert normalize_phone("202 555 1234", default_region="US") == "+12025551234"
    assert normalize_phone("312 345 6789", default_region="IT") == "+393123456789"


def test_normalize_without_country_code_or_region_is_invalid():
    assert normalize_phone("202 555 1234", default_region=None) is None


def test_normalize_invalid_returns_none():
    assert normalize_phone("", default_region=None) is None
    assert normalize_phone("   ", default_region=None) is None
    assert normalize_phone("abc", default_region=None) is None
    assert normalize_phone("+1", default_region=None) is None


def test_require_phone_names_the_field():
    assert require_phone("312 345 6789", default_region="IT") == "+393123456789"
    with pytest.raises(ValidationError) as excinfo:
        require_phone("202 555 1234")
    assert excinfo.value.field == "phone_number"
