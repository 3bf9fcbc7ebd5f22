"""Infrastructure layer: concrete implementations of application ports."""

from friendmap.infrastructure.access import AccessGate
from friendmap.infrastructure.config import Settings, load_env_file, load_settings
from friendmap.infrastructure.geocoding import (
    CachingGeocoder,
    NominatimGeocoder,
    normalize_address,
)
from friendmap.infrastructure.memory_repository import InMemoryContactRepository
from friendmap.infrastructure.phone import display_phone, normalize_phone
from friendmap.infrastructure.sheet_feed import CsvSheetFeed, parse_csv_rows
from friendmap.infrastructure.write_back import HttpContactWriteBack

__all__ = [
    "AccessGate",
    "CachingGeocoder",
    "CsvSheetFeed",
    "HttpContactWriteBack",
    "InMemoryContactRepository",
    "NominatimGeocoder",
    "Settings",
    "display_phone",
    "load_env_file",
    "load_settings",
    "normalize_address",
    "normalize_phone",
    "parse_csv_rows",
]
