#!/usr/bin/env python3
"""Load the published contact sheet, geocode it, and print what would be shown.

Lists every displayable contact with its coordinate, then every dropped row
with the reason. Run from repo root with .env (FRIENDMAP_SHEET_CSV_URL and,
optionally, FRIENDMAP_GEOCODER_*). Pass a query to preview a search.

Usage: python scripts/preview_sheet.py [query]
"""
import asyncio
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from friendmap.application import BatchSuperseded, ContactMapService  # noqa: E402
from friendmap.infrastructure import (  # noqa: E402
    CachingGeocoder,
    CsvSheetFeed,
    InMemoryContactRepository,
    NominatimGeocoder,
    load_env_file,
    load_settings,
)

load_env_file(REPO_ROOT / ".env")


async def main(query: str) -> int:
    settings = load_settings()
    if not settings.sheet_csv_url:
        print("FRIENDMAP_SHEET_CSV_URL not set in .env", file=sys.stderr)
        return 1

    geocoder = NominatimGeocoder(
        settings.geocoder_url,
        user_agent=settings.geocoder_user_agent,
        timeout=settings.http_timeout,
    )
    feed = CsvSheetFeed(settings.sheet_csv_url, timeout=settings.http_timeout)
    service = ContactMapService(
        InMemoryContactRepository(default_phone_region=settings.default_phone_region),
        CachingGeocoder(geocoder),
        feed=feed,
    )
    try:
        result = await service.reload()
    except Exception as e:
        print(f"Failed to load sheet: {e}", file=sys.stderr)
        return 1
    finally:
        await feed.aclose()
        await geocoder.aclose()
    if isinstance(result, BatchSuperseded):
        print("Batch superseded", file=sys.stderr)
        return 1

    view = service.view(query)
    print(f"{view.shown} / {view.total} contacts shown")
    for c in view.contacts:
        print(f"  {c.name:<30} {c.latitude:>9.4f} {c.longitude:>9.4f}  {c.address or ''}")
    if view.viewport.bounds is not None:
        b = view.viewport.bounds
        print(f"Viewport: S {b.south:.4f} W {b.west:.4f} N {b.north:.4f} E {b.east:.4f}")
    else:
        print(f"Viewport: fallback center {view.viewport.center}, zoom {view.viewport.zoom}")
    for d in result.dropped:
        print(f"Dropped row {d.index}: {d.name or '(no name)'} [{d.address}] {d.reason}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(" ".join(sys.argv[1:]))))
