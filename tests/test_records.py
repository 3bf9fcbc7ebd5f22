"""Tests for raw record mapping: header aliases, coercion, and write-back rows."""

import math

from friendmap.application.records import (
    coerce_degree,
    contact_to_row,
    parse_status,
    read_field,
    record_to_contact,
)
from friendmap.domain import Contact, ContactSource, ContactStatus


def test_sheet_headers_map_to_fields():
    raw = {
        "Name": "Ravi",
        "From": "Pune",
        "Present Address": "Bengaluru",
        "Profession": "Engineer",
        "Office Location": "Whitefield",
        "Birth Date": "1990-04-01",
        "Mobile": "+91 98765 43210",
        "lat": "12.97",
        "lng": "77.59",
    }
    contact = record_to_contact(raw)
    assert contact.name == "Ravi"
    assert contact.origin == "Pune"
    assert contact.address == "Bengaluru"
    assert contact.profession == "Engineer"
    assert contact.office_location == "Whitefield"
    assert contact.birth_date == "1990-04-01"
    assert contact.phone_number == "+91 98765 43210"
    assert contact.latitude == 12.97
    assert contact.longitude == 77.59
    assert contact.source is ContactSource.SHEET


def test_simple_revision_headers_map_to_fields():
    raw = {"name": "Bo", "city": "Delhi", "phone": "123", "status": "Busy", "lon": "77.2"}
    contact = record_to_contact(raw, ContactSource.FORM)
    assert contact.address == "Delhi"
    assert contact.phone_number == "123"
    assert contact.status is ContactStatus.BUSY
    assert contact.longitude == 77.2
    assert math.isnan(contact.latitude)
    assert contact.source is ContactSource.FORM


def test_read_field_skips_blank_and_none_keys():
    raw = {None: ["extra"], "ADDRESS": "  ", "city": " Goa "}
    assert read_field(raw, "address") == "Goa"
    assert read_field(raw, "name") is None


def test_coerce_degree_best_effort():
    assert coerce_degree("10.5") == 10.5
    assert coerce_degree(" -3 ") == -3.0
    assert coerce_degree(7) == 7.0
    assert math.isnan(coerce_degree(""))
    assert math.isnan(coerce_degree(None))
    assert math.isnan(coerce_degree("north"))
    assert math.isnan(coerce_degree(True))


def test_parse_status_unknown_is_none():
    assert parse_status("ONLINE") is ContactStatus.ONLINE
    assert parse_status("sleeping") is None
    assert parse_status(None) is None


def test_contact_to_row_uses_sheet_headers():
    contact = Contact(
        name="Ann",
        address="Paris",
        status=ContactStatus.AWAY,
        latitude=48.85,
        longitude=2.35,
    )
    row = contact_to_row(contact)
    assert row["Name"] == "Ann"
    assert row["Present Address"] == "Paris"
    assert row["Status"] == "away"
    assert row["lat"] == 48.85
    assert row["lng"] == 2.35
    assert row["Profession"] == ""


def test_contact_to_row_blanks_missing_coordinates():
    row = contact_to_row(Contact(name="Ann"))
    assert row["lat"] == ""
    assert row["lng"] == ""
