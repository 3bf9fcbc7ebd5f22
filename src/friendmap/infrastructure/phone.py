"""Contact phone numbers to E.164, when they can be parsed."""

import phonenumbers


def normalize_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """Return the E.164 form of a phone number, or None if it is blank or invalid.

    default_region applies to numbers written without a leading + (e.g.
    "98765 43210" with default_region "IN"). Numbers carrying a country code
    ignore it.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        parsed = phonenumbers.parse(text, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def display_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """E.164 when the number parses; otherwise the trimmed text as typed."""
    if raw is None:
        return None
    return normalize_phone(raw, default_region) or (str(raw).strip() or None)
