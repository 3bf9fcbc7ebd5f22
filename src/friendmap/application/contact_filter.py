"""Search over contacts by name or address."""

from collections.abc import Iterable

from friendmap.domain import Contact


def filter_contacts(contacts: Iterable[Contact], query: str | None) -> list[Contact]:
    """Return contacts whose name or address contains the query (case-insensitive, partial).

    An empty or blank query matches everything. Input order is preserved.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(contacts)
    return [
        contact
        for contact in contacts
        if needle in contact.name.lower() or needle in (contact.address or "").lower()
    ]
