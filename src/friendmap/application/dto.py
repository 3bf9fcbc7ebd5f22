"""Input DTO and result types for the contact map use cases."""

from dataclasses import dataclass, field
from enum import Enum

from friendmap.domain import Contact, ContactStatus, Viewport


@dataclass(frozen=True)
class ContactFormData:
    """Data from the add-contact form. Coordinates come from a map click, if any."""

    name: str
    address: str | None = None
    origin: str | None = None
    profession: str | None = None
    office_location: str | None = None
    birth_date: str | None = None
    phone_number: str | None = None
    email: str | None = None
    status: ContactStatus | None = None
    lat: float | None = None
    lng: float | None = None


@dataclass(frozen=True)
class DroppedRecord:
    """A raw record left out of the displayable collection, and why."""

    index: int
    name: str
    address: str
    reason: str


@dataclass(frozen=True)
class NormalizationResult:
    """Displayable contacts in input order, plus the records that were dropped.
    indices holds the input row index of each contact.
    """

    contacts: list[Contact] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    dropped: list[DroppedRecord] = field(default_factory=list)


@dataclass(frozen=True)
class MapView:
    """What the map renders for one query: matching pins, framing, and counters."""

    contacts: list[Contact]
    viewport: Viewport
    shown: int
    total: int


# --- batch results ---


@dataclass(frozen=True)
class BatchApplied:
    """A normalization batch replaced the sheet-sourced contacts."""

    batch_id: int
    loaded: int
    dropped: list[DroppedRecord]


@dataclass(frozen=True)
class BatchSuperseded:
    """A newer batch started while this one was resolving; its result was discarded."""

    batch_id: int


# --- submit_contact results ---


class WriteBackOutcome(str, Enum):
    """Result of forwarding a new contact to the remote endpoint."""

    DELIVERED = "delivered"
    UNKNOWN = "unknown"  # sent, but the endpoint gave no readable acknowledgment
    FAILED = "failed"


@dataclass(frozen=True)
class ContactAdded:
    """Contact was appended locally. write_back is None when no endpoint is configured."""

    contact: Contact
    write_back: object | None = None  # asyncio.Task[WriteBackOutcome]


@dataclass(frozen=True)
class Duplicate:
    """A contact with the same name and address already exists."""

    name: str
    address: str


@dataclass(frozen=True)
class Invalid:
    """Form submission is invalid (e.g. missing name or no location)."""

    reason: str
