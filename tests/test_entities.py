"""Tests for domain entities: displayability, identity, and bounds."""

import math

import pytest

from friendmap.domain import SENTINEL, Bounds, Contact, Coordinate, is_displayable


def test_contact_requires_name():
    with pytest.raises(ValueError, match="name"):
        Contact(name="")
    with pytest.raises(ValueError):
        Contact(name="   ")


def test_contact_without_coordinates_is_not_displayable():
    contact = Contact(name="Ann", address="Paris")
    assert math.isnan(contact.latitude)
    assert not is_displayable(contact)


def test_sentinel_pair_is_not_displayable():
    contact = Contact(name="Ann", latitude=SENTINEL.lat, longitude=SENTINEL.lng)
    assert not is_displayable(contact)


def test_single_zero_part_is_displayable():
    assert is_displayable(Contact(name="Quito", latitude=0.0, longitude=-78.5))
    assert is_displayable(Contact(name="Accra", latitude=5.6, longitude=0.0))


def test_out_of_range_or_infinite_is_not_displayable():
    assert not Coordinate(91.0, 10.0).is_usable
    assert not Coordinate(10.0, -181.0).is_usable
    assert not Coordinate(math.inf, 10.0).is_usable
    assert Coordinate(12.34, 56.78).is_usable


def test_identity_ignores_case_and_surrounding_space():
    a = Contact(name="Ann ", address="Paris")
    b = Contact(name="ann", address="  PARIS")
    assert a.identity == b.identity
    assert Contact(name="Ann").identity == ("ann", "")


def test_bounds_contains_and_area():
    b = Bounds(south=10.0, west=2.0, north=20.0, east=4.0)
    assert b.area == pytest.approx(20.0)
    assert b.center == Coordinate(15.0, 3.0)
    assert b.contains(Coordinate(10.0, 3.0))
    assert not b.contains(Coordinate(10.0, 3.0), strict=True)
    assert b.contains(Coordinate(11.0, 3.0), strict=True)


def test_bounds_rejects_inverted_rectangle():
    with pytest.raises(ValueError):
        Bounds(south=20.0, west=0.0, north=10.0, east=1.0)


def test_contacts_with_same_fields_are_equal():
    assert Contact(name="Ann", address="Paris") == Contact(name="Ann", address="Paris")
