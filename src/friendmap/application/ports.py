"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Mapping
from typing import Protocol

from friendmap.application.dto import WriteBackOutcome
from friendmap.domain import Contact, ContactSource, Coordinate

RawRecord = Mapping[str, object]


class Geocoder(Protocol):
    """Resolves a free-text address to a coordinate."""

    async def resolve(self, address: str) -> Coordinate | None:
        """Return the best match for the address, or None when nothing usable was found."""
        ...


class ContactFeed(Protocol):
    """Source of raw contact rows (the published spreadsheet)."""

    async def fetch_rows(self) -> list[dict[str, str]]:
        """Return every data row keyed by header name."""
        ...


class ContactWriteBack(Protocol):
    """Forwards newly added contacts to a remote endpoint. Best effort."""

    async def forward(self, contact: Contact) -> WriteBackOutcome:
        """Send the contact. Never raises; failures are reported as an outcome."""
        ...


class ContactRepository(Protocol):
    """Holds the current session's contact collection."""

    def add(self, contact: Contact) -> Contact:
        """Append a contact. Returns it as stored (e.g. with a normalized phone number)."""
        ...

    def replace_source(self, source: ContactSource, contacts: list[Contact]) -> None:
        """Replace every contact from the given source with the new list."""
        ...

    def list_all(self) -> list[Contact]:
        """Return all contacts: sheet contacts first, then form additions, each in insertion order."""
        ...

    def find_duplicate(self, contact: Contact) -> Contact | None:
        """Return an existing contact with the same identity, or None."""
        ...
