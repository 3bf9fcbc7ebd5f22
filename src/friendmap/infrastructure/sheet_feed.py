"""Published spreadsheet (CSV) as the contact feed."""

import csv
import io
import logging

import httpx

logger = logging.getLogger(__name__)


def parse_csv_rows(text: str) -> list[dict[str, str]]:
    """Parse CSV text whose first row is the header. Blank lines are skipped.

    Rows are kept best-effort: short rows get empty strings for missing
    columns and surplus cells are discarded.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")), restval="")
    rows: list[dict[str, str]] = []
    for row in reader:
        row.pop(None, None)
        if not any((value or "").strip() for value in row.values()):
            continue
        rows.append({key.strip(): (value or "") for key, value in row.items() if key})
    return rows


class CsvSheetFeed:
    """Downloads the published CSV on every fetch."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout), follow_redirects=True
        )

    async def fetch_rows(self) -> list[dict[str, str]]:
        resp = await self._client.get(self.url)
        resp.raise_for_status()
        rows = parse_csv_rows(resp.text)
        logger.debug("Parsed %d rows from %s", len(rows), self.url)
        return rows

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
