"""
Friendmap core: clean-architecture layout.

- domain: entities (Contact, Coordinate, Bounds, Viewport). No outer dependencies.
- application: use cases (ContactMapService), normalization, filter, viewport, ports, DTOs.
- infrastructure: adapters (NominatimGeocoder, CsvSheetFeed, HttpContactWriteBack,
  InMemoryContactRepository, AccessGate, Settings).
"""

from friendmap.application import (
    BatchApplied,
    BatchSuperseded,
    ContactAdded,
    ContactFormData,
    ContactMapService,
    ContactNormalizer,
    DroppedRecord,
    Duplicate,
    Invalid,
    MapView,
    WriteBackOutcome,
    compute_viewport,
    filter_contacts,
)
from friendmap.domain import Contact, ContactSource, ContactStatus, Coordinate, Viewport
from friendmap.infrastructure import (
    AccessGate,
    CachingGeocoder,
    CsvSheetFeed,
    HttpContactWriteBack,
    InMemoryContactRepository,
    NominatimGeocoder,
)

__all__ = [
    "AccessGate",
    "BatchApplied",
    "BatchSuperseded",
    "CachingGeocoder",
    "Contact",
    "ContactAdded",
    "ContactFormData",
    "ContactMapService",
    "ContactNormalizer",
    "ContactSource",
    "ContactStatus",
    "Coordinate",
    "CsvSheetFeed",
    "DroppedRecord",
    "Duplicate",
    "HttpContactWriteBack",
    "InMemoryContactRepository",
    "Invalid",
    "MapView",
    "NominatimGeocoder",
    "Viewport",
    "WriteBackOutcome",
    "compute_viewport",
    "filter_contacts",
]
