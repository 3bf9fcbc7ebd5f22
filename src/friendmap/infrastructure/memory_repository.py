"""In-memory implementation of ContactRepository: the session's contact collection."""

import dataclasses

from friendmap.domain import Contact, ContactSource
from friendmap.infrastructure.phone import display_phone


class InMemoryContactRepository:
    """Stores contacts in memory, per source. Order preserved by insertion.
    Sheet contacts are replaced wholesale on reload; form additions are kept unless the
    new sheet already contains them.
    """

    def __init__(self, *, default_phone_region: str | None = None) -> None:
        self._default_phone_region = default_phone_region
        self._sheet: list[Contact] = []
        self._added: list[Contact] = []

    def _prepared(self, contact: Contact) -> Contact:
        """Return contact with its phone number stored in E.164 when it parses."""
        phone = display_phone(contact.phone_number, self._default_phone_region)
        if phone == contact.phone_number:
            return contact
        return dataclasses.replace(contact, phone_number=phone)

    def add(self, contact: Contact) -> Contact:
        stored = self._prepared(contact)
        self._added.append(stored)
        return stored

    def replace_source(self, source: ContactSource, contacts: list[Contact]) -> None:
        prepared = [self._prepared(c) for c in contacts]
        if source is ContactSource.SHEET:
            self._sheet = prepared
            on_sheet = {c.identity for c in prepared}
            self._added = [c for c in self._added if c.identity not in on_sheet]
        else:
            self._added = prepared

    def list_all(self) -> list[Contact]:
        return [*self._sheet, *self._added]

    def find_duplicate(self, contact: Contact) -> Contact | None:
        for existing in self.list_all():
            if existing.identity == contact.identity:
                return existing
        return None
