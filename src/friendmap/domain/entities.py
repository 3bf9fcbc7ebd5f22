"""Domain entities: Contact, Coordinate, Bounds, and Viewport."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ContactStatus(str, Enum):
    """Presence status captured by the add-contact form."""

    ONLINE = "online"
    BUSY = "busy"
    AWAY = "away"
    OFFLINE = "offline"


class ContactSource(str, Enum):
    """Where a contact came from: the published sheet or a form submission."""

    SHEET = "sheet"
    FORM = "form"


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    @property
    def is_usable(self) -> bool:
        """True when both parts are finite, in range, and not the unresolved sentinel."""
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            return False
        if not (-90.0 <= self.lat <= 90.0 and -180.0 <= self.lng <= 180.0):
            return False
        return (self.lat, self.lng) != (SENTINEL.lat, SENTINEL.lng)


# (0, 0) means "not resolved". A real point at the equator/prime meridian
# intersection is indistinguishable and is treated as unresolved.
SENTINEL = Coordinate(0.0, 0.0)


@dataclass(frozen=True)
class Contact:
    """
    A person shown as a map pin.
    Every field other than name is optional; latitude/longitude are NaN until known.
    """

    name: str = field(default="")
    origin: str | None = None
    address: str | None = None
    profession: str | None = None
    office_location: str | None = None
    birth_date: str | None = None
    phone_number: str | None = None
    email: str | None = None
    status: ContactStatus | None = None
    latitude: float = math.nan
    longitude: float = math.nan
    source: ContactSource = ContactSource.SHEET
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Contact name must be non-empty.")

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def identity(self) -> tuple[str, str]:
        """Session-level identity: (name, address), trimmed and case-folded."""
        return (
            self.name.strip().casefold(),
            (self.address or "").strip().casefold(),
        )


def is_displayable(contact: Contact) -> bool:
    """A contact may be rendered only when its coordinate is usable."""
    return contact.coordinate.is_usable


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned geographic rectangle (south/west/north/east in degrees)."""

    south: float
    west: float
    north: float
    east: float

    def __post_init__(self):
        if self.south > self.north or self.west > self.east:
            raise ValueError("Bounds must satisfy south <= north and west <= east.")

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.south + self.north) / 2, (self.west + self.east) / 2)

    @property
    def area(self) -> float:
        return (self.north - self.south) * (self.east - self.west)

    def contains(self, point: Coordinate, *, strict: bool = False) -> bool:
        if strict:
            return self.south < point.lat < self.north and self.west < point.lng < self.east
        return self.south <= point.lat <= self.north and self.west <= point.lng <= self.east


@dataclass(frozen=True)
class Viewport:
    """
    Map framing handed to the renderer.
    Either bounds to fit (with padding_px applied by the renderer) or, for the
    fallback, a fixed center and zoom.
    """

    center: Coordinate
    zoom: int | None = None
    bounds: Bounds | None = None
    content_bounds: Bounds | None = None
    padding_px: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.bounds is None
