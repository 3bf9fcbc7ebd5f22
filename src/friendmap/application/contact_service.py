"""Contact map use cases: load the sheet, add contacts, and build the map view."""

import asyncio
import logging
from collections.abc import Sequence

from friendmap.application.contact_filter import filter_contacts
from friendmap.application.dto import (
    BatchApplied,
    BatchSuperseded,
    ContactAdded,
    ContactFormData,
    DroppedRecord,
    Duplicate,
    Invalid,
    MapView,
    WriteBackOutcome,
)
from friendmap.application.normalizer import ContactNormalizer
from friendmap.application.ports import (
    ContactFeed,
    ContactRepository,
    ContactWriteBack,
    Geocoder,
    RawRecord,
)
from friendmap.application.viewport import compute_viewport
from friendmap.domain import (
    Contact,
    ContactSource,
    Coordinate,
    is_displayable,
)

logger = logging.getLogger(__name__)

REASON_DUPLICATE = "duplicate"
NO_LOCATION_REASON = "Select a location on the map"


class NoFeedConfigured(RuntimeError):
    """reload() was called without a ContactFeed."""


class ContactMapService:
    """Core flow: sheet rows -> normalized contacts -> filtered view + viewport. Form additions."""

    def __init__(
        self,
        repository: ContactRepository,
        geocoder: Geocoder,
        *,
        feed: ContactFeed | None = None,
        write_back: ContactWriteBack | None = None,
    ) -> None:
        self._repo = repository
        self._geocoder = geocoder
        self._normalizer = ContactNormalizer(geocoder)
        self._feed = feed
        self._write_back = write_back
        self._latest_batch = 0
        self._dropped: list[DroppedRecord] = []
        self._write_back_outcomes: list[tuple[Contact, WriteBackOutcome]] = []
        self._pending: set[asyncio.Task] = set()

    @property
    def has_feed(self) -> bool:
        return self._feed is not None

    async def reload(self) -> BatchApplied | BatchSuperseded:
        """Fetch the sheet and apply it as a new batch."""
        if self._feed is None:
            raise NoFeedConfigured("No contact feed configured.")
        batch_id = self._next_batch()
        rows = await self._feed.fetch_rows()
        logger.info("Fetched %d rows from contact feed", len(rows))
        return await self._apply(batch_id, rows)

    async def apply_records(
        self, records: Sequence[RawRecord]
    ) -> BatchApplied | BatchSuperseded:
        """Normalize a batch and replace sheet contacts with it, unless a newer batch started."""
        return await self._apply(self._next_batch(), records)

    def _next_batch(self) -> int:
        self._latest_batch += 1
        return self._latest_batch

    async def _apply(
        self, batch_id: int, records: Sequence[RawRecord]
    ) -> BatchApplied | BatchSuperseded:
        result = await self._normalizer.normalize(records, source=ContactSource.SHEET)

        if batch_id != self._latest_batch:
            logger.info(
                "Discarding batch %d; batch %d is newer", batch_id, self._latest_batch
            )
            return BatchSuperseded(batch_id=batch_id)

        unique: list[Contact] = []
        seen: set[tuple[str, str]] = set()
        dropped = list(result.dropped)
        for index, contact in zip(result.indices, result.contacts):
            if contact.identity in seen:
                dropped.append(
                    DroppedRecord(
                        index=index,
                        name=contact.name,
                        address=contact.address or "",
                        reason=REASON_DUPLICATE,
                    )
                )
                continue
            seen.add(contact.identity)
            unique.append(contact)

        self._repo.replace_source(ContactSource.SHEET, unique)
        self._dropped = dropped
        logger.info(
            "Applied batch %d: %d contacts, %d dropped", batch_id, len(unique), len(dropped)
        )
        return BatchApplied(batch_id=batch_id, loaded=len(unique), dropped=dropped)

    async def submit_contact(
        self, form: ContactFormData
    ) -> ContactAdded | Duplicate | Invalid:
        """Add a contact from the form. Local add is immediate; forwarding runs in the background."""
        name = (form.name or "").strip()
        if not name:
            return Invalid(reason="Name is required.")
        address = (form.address or "").strip() or None

        coordinate = _form_coordinate(form)
        if coordinate is None and address:
            coordinate = await self._resolve(address)
        if coordinate is None or not coordinate.is_usable:
            return Invalid(reason=NO_LOCATION_REASON)

        try:
            contact = Contact(
                name=name,
                origin=_clean(form.origin),
                address=address,
                profession=_clean(form.profession),
                office_location=_clean(form.office_location),
                birth_date=_clean(form.birth_date),
                phone_number=_clean(form.phone_number),
                email=_clean(form.email),
                status=form.status,
                latitude=coordinate.lat,
                longitude=coordinate.lng,
                source=ContactSource.FORM,
            )
        except ValueError as exc:
            return Invalid(reason=str(exc))

        existing = self._repo.find_duplicate(contact)
        if existing is not None:
            return Duplicate(name=existing.name, address=existing.address or "")

        contact = self._repo.add(contact)
        logger.info("Added contact %r", contact.name)

        task = None
        if self._write_back is not None:
            task = asyncio.create_task(self._forward(contact))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        return ContactAdded(contact=contact, write_back=task)

    async def _forward(self, contact: Contact) -> WriteBackOutcome:
        try:
            outcome = await self._write_back.forward(contact)
        except Exception:
            logger.exception("Write-back raised for %r", contact.name)
            outcome = WriteBackOutcome.FAILED
        self._write_back_outcomes.append((contact, outcome))
        if outcome is WriteBackOutcome.FAILED:
            logger.warning("Write-back failed for %r; kept locally", contact.name)
        return outcome

    def view(self, query: str | None = None) -> MapView:
        """Matching displayable contacts and the viewport that frames them."""
        everything = self._repo.list_all()
        displayable = [c for c in everything if is_displayable(c)]
        matches = filter_contacts(displayable, query)
        return MapView(
            contacts=matches,
            viewport=compute_viewport(matches),
            shown=len(matches),
            total=len(everything),
        )

    async def geocode(self, address: str) -> Coordinate | None:
        """Look up an address for the add-contact form."""
        return await self._resolve((address or "").strip())

    async def _resolve(self, address: str) -> Coordinate | None:
        try:
            return await self._geocoder.resolve(address)
        except Exception:
            logger.exception("Geocoder raised for %r", address)
            return None

    async def drain_write_backs(self) -> None:
        """Wait for every in-flight write-back to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    def dropped_records(self) -> list[DroppedRecord]:
        """Records left out by the last applied batch."""
        return list(self._dropped)

    def write_back_outcomes(self) -> list[tuple[Contact, WriteBackOutcome]]:
        """Completed write-backs, in completion order."""
        return list(self._write_back_outcomes)


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


def _form_coordinate(form: ContactFormData) -> Coordinate | None:
    if form.lat is None or form.lng is None:
        return None
    coordinate = Coordinate(float(form.lat), float(form.lng))
    return coordinate if coordinate.is_usable else None
