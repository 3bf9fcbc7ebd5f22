"""Application layer: use cases, pure transforms, ports, and DTOs. Depends only on domain."""

from friendmap.application.contact_filter import filter_contacts
from friendmap.application.contact_service import ContactMapService, NoFeedConfigured
from friendmap.application.dto import (
    BatchApplied,
    BatchSuperseded,
    ContactAdded,
    ContactFormData,
    DroppedRecord,
    Duplicate,
    Invalid,
    MapView,
    NormalizationResult,
    WriteBackOutcome,
)
from friendmap.application.normalizer import ContactNormalizer
from friendmap.application.ports import (
    ContactFeed,
    ContactRepository,
    ContactWriteBack,
    Geocoder,
)
from friendmap.application.viewport import compute_viewport, fallback_viewport

__all__ = [
    "BatchApplied",
    "BatchSuperseded",
    "ContactAdded",
    "ContactFeed",
    "ContactFormData",
    "ContactMapService",
    "ContactNormalizer",
    "ContactRepository",
    "ContactWriteBack",
    "DroppedRecord",
    "Duplicate",
    "Geocoder",
    "Invalid",
    "MapView",
    "NoFeedConfigured",
    "NormalizationResult",
    "WriteBackOutcome",
    "compute_viewport",
    "fallback_viewport",
    "filter_contacts",
]
