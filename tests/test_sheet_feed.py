"""Tests for CSV parsing and the published-sheet feed."""

import httpx
import pytest

from friendmap.infrastructure import CsvSheetFeed, parse_csv_rows

SHEET = (
    "\ufeffName,From,Present Address,Mobile,lat,lng\r\n"
    "Ann,Lyon,Paris,+33 1 23 45 67 89,,\r\n"
    ",,,,,\r\n"
    "Bo,,12 Main St,,10.0,20.0\r\n"
    "Cy,Goa\r\n"
    '"Dee, Jr.",,"Flat 2, MG Road",,,,surplus\r\n'
)


def test_parse_rows_with_header():
    rows = parse_csv_rows(SHEET)
    assert [r["Name"] for r in rows] == ["Ann", "Bo", "Cy", "Dee, Jr."]
    assert rows[0]["Present Address"] == "Paris"
    assert rows[0]["lat"] == ""
    assert rows[1]["lng"] == "20.0"


def test_short_and_long_rows_are_kept_best_effort():
    rows = parse_csv_rows(SHEET)
    assert rows[2]["From"] == "Goa"
    assert rows[2]["lat"] == ""
    assert rows[3]["Present Address"] == "Flat 2, MG Road"
    assert None not in rows[3]


def test_empty_document():
    assert parse_csv_rows("") == []
    assert parse_csv_rows("Name,lat,lng\n") == []


@pytest.mark.asyncio
async def test_feed_downloads_and_parses():
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://sheet.test/pub?output=csv"
        return httpx.Response(200, text=SHEET)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    feed = CsvSheetFeed("https://sheet.test/pub?output=csv", client=client)
    rows = await feed.fetch_rows()
    assert len(rows) == 4


@pytest.mark.asyncio
async def test_feed_http_error_propagates():
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(404))
    )
    feed = CsvSheetFeed("https://sheet.test/missing", client=client)
    with pytest.raises(httpx.HTTPStatusError):
        await feed.fetch_rows()
