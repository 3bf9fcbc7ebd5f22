"""Turns raw sheet rows into displayable contacts, geocoding where needed."""

import asyncio
import dataclasses
import logging
from collections.abc import Sequence

from friendmap.application.dto import DroppedRecord, NormalizationResult
from friendmap.application.ports import Geocoder, RawRecord
from friendmap.application.records import read_field, record_to_contact
from friendmap.domain import SENTINEL, Contact, ContactSource, is_displayable

logger = logging.getLogger(__name__)

REASON_MISSING_NAME = "missing-name"
REASON_NOT_GEOCODED = "not-geocoded"


class ContactNormalizer:
    """Resolves every record of a batch concurrently, then keeps the displayable ones."""

    def __init__(self, geocoder: Geocoder) -> None:
        self._geocoder = geocoder

    async def normalize(
        self,
        records: Sequence[RawRecord],
        *,
        source: ContactSource = ContactSource.SHEET,
    ) -> NormalizationResult:
        """Return contacts in input order. Records that cannot be placed are reported as dropped."""
        resolved = await asyncio.gather(
            *(self._resolve(index, raw, source) for index, raw in enumerate(records))
        )

        contacts: list[Contact] = []
        indices: list[int] = []
        dropped: list[DroppedRecord] = []
        for index, item in enumerate(resolved):
            if isinstance(item, DroppedRecord):
                dropped.append(item)
            elif is_displayable(item):
                contacts.append(item)
                indices.append(index)
            else:
                dropped.append(
                    DroppedRecord(
                        index=index,
                        name=item.name,
                        address=item.address or "",
                        reason=REASON_NOT_GEOCODED,
                    )
                )
        for record in dropped:
            logger.warning(
                "Dropped record %d (%r, %r): %s",
                record.index,
                record.name,
                record.address,
                record.reason,
            )
        return NormalizationResult(contacts=contacts, indices=indices, dropped=dropped)

    async def _resolve(
        self, index: int, raw: RawRecord, source: ContactSource
    ) -> Contact | DroppedRecord:
        try:
            contact = record_to_contact(raw, source)
        except ValueError:
            return DroppedRecord(
                index=index,
                name="",
                address=read_field(raw, "address") or "",
                reason=REASON_MISSING_NAME,
            )

        if contact.coordinate.is_usable:
            return contact

        coordinate = None
        if contact.address:
            try:
                coordinate = await self._geocoder.resolve(contact.address)
            except Exception:
                logger.exception("Geocoder raised for %r", contact.address)
        if coordinate is None or not coordinate.is_usable:
            coordinate = SENTINEL
        return dataclasses.replace(
            contact, latitude=coordinate.lat, longitude=coordinate.lng
        )
