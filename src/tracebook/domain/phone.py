"""Contact phone numbers, kept in E.164 so one person is stored under one key."""

import phonenumbers

from tracebook.domain.errors import ValidationError

INVALID_PHONE_MESSAGE = "Person phone number must be a valid number with country code."


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """E.164 form of raw, or None if it is not a valid number.

    default_region ("US", "IT", ...) only applies to numbers written without a
    leading +, e.g. "312 345 6789" with "IT" gives "+393123456789".
    """
    text = str(raw or "").strip()
    if not text:
        return None
    try:
        parsed = phonenumbers.parse(text, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def require_phone(raw: str, default_region: str | None = None) -> str:
    """Like normalize_phone, but raises ValidationError for the phone_number field."""
    phone = normalize_phone(raw, default_region)
    if phone is None:
        raise ValidationError("phone_number", INVALID_PHONE_MESSAGE)
    return phone
