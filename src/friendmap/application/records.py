"""Mapping between raw sheet/form records and Contact fields.

Sheet headers differ between revisions ("Present Address" vs "city",
"Mobile" vs "phone"), so headers are matched through an alias table after
folding case and dropping anything that is not a letter or digit.
"""

import math
import re
from collections.abc import Mapping

from friendmap.domain import Contact, ContactSource, ContactStatus

_NON_ALNUM = re.compile(r"[^0-9a-z]+")

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "origin": ("from", "origin"),
    "address": ("presentaddress", "address", "city"),
    "profession": ("profession",),
    "office_location": ("officelocation", "office"),
    "birth_date": ("birthdate", "dob", "birthday"),
    "phone_number": ("mobile", "phone", "phonenumber"),
    "email": ("email",),
    "status": ("status",),
    "latitude": ("lat", "latitude"),
    "longitude": ("lng", "lon", "longitude"),
}

# Column names used when a contact is written back to the sheet.
SHEET_HEADERS: dict[str, str] = {
    "name": "Name",
    "origin": "From",
    "address": "Present Address",
    "profession": "Profession",
    "office_location": "Office Location",
    "birth_date": "Birth Date",
    "phone_number": "Mobile",
    "email": "Email",
    "status": "Status",
    "latitude": "lat",
    "longitude": "lng",
}


def _fold_header(header: object) -> str:
    return _NON_ALNUM.sub("", str(header).casefold())


def read_field(raw: Mapping[str, object], field_name: str) -> str | None:
    """Return the stripped text value for a Contact field, or None if absent or blank."""
    aliases = FIELD_ALIASES[field_name]
    for key, value in raw.items():
        if key is None or _fold_header(key) not in aliases:
            continue
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def coerce_degree(value: object) -> float:
    """Parse a coordinate part. Blank or non-numeric input becomes NaN."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, int | float):
        return float(value)
    text = str(value).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def parse_status(value: str | None) -> ContactStatus | None:
    if not value:
        return None
    try:
        return ContactStatus(value.strip().lower())
    except ValueError:
        return None


def contact_to_row(contact: Contact) -> dict[str, object]:
    """Render a contact with sheet header names. Absent fields become empty strings."""
    row: dict[str, object] = {}
    for field_name, header in SHEET_HEADERS.items():
        value = getattr(contact, field_name)
        if isinstance(value, ContactStatus):
            value = value.value
        elif isinstance(value, float) and not math.isfinite(value):
            value = ""
        row[header] = "" if value is None else value
    return row


def record_to_contact(
    raw: Mapping[str, object], source: ContactSource = ContactSource.SHEET
) -> Contact:
    """Build a Contact from a raw record. Raises ValueError when the name is missing."""
    return Contact(
        name=read_field(raw, "name") or "",
        origin=read_field(raw, "origin"),
        address=read_field(raw, "address"),
        profession=read_field(raw, "profession"),
        office_location=read_field(raw, "office_location"),
        birth_date=read_field(raw, "birth_date"),
        phone_number=read_field(raw, "phone_number"),
        email=read_field(raw, "email"),
        status=parse_status(read_field(raw, "status")),
        latitude=coerce_degree(read_field(raw, "latitude")),
        longitude=coerce_degree(read_field(raw, "longitude")),
        source=source,
    )
