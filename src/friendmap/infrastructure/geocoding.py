"""Free-text address lookup against a Nominatim-compatible search endpoint.

The public Nominatim service asks for at most one request per second, an
identifying User-Agent, and OpenStreetMap attribution. None of that is
enforced here; deployments are expected to respect it.
"""

import asyncio
import logging
import math

import httpx

from friendmap.application.ports import Geocoder
from friendmap.domain import Coordinate

logger = logging.getLogger(__name__)

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org"
DEFAULT_TIMEOUT_SECONDS = 10.0


class NominatimGeocoder:
    """Resolves an address to the first search candidate. Every failure becomes None."""

    def __init__(
        self,
        base_url: str = DEFAULT_GEOCODER_URL,
        *,
        user_agent: str = "friendmap/0.1",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            timeout=httpx.Timeout(timeout),
        )

    async def resolve(self, address: str) -> Coordinate | None:
        query = (address or "").strip()
        if not query:
            return None
        try:
            resp = await self._client.get(
                f"{self.base_url}/search",
                params={"q": query, "format": "json", "limit": 1},
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            logger.warning("Geocoding %r failed: %s", query, exc)
            return None
        except ValueError as exc:
            logger.warning("Geocoding %r returned malformed JSON: %s", query, exc)
            return None
        return _first_candidate(query, data)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _first_candidate(query: str, data: object) -> Coordinate | None:
    if not isinstance(data, list) or not data:
        logger.info("No geocoding match for %r", query)
        return None
    first = data[0]
    try:
        coordinate = Coordinate(float(first["lat"]), float(first["lon"]))
    except (KeyError, TypeError, ValueError):
        logger.warning("Unparseable geocoding candidate for %r: %r", query, first)
        return None
    if not (math.isfinite(coordinate.lat) and math.isfinite(coordinate.lng)):
        return None
    return coordinate


def normalize_address(address: str) -> str:
    """Cache key for an address: trimmed, inner whitespace collapsed, case-folded."""
    return " ".join((address or "").split()).casefold()


class CachingGeocoder:
    """Wraps a geocoder with a per-address cache of successful lookups.

    Concurrent lookups of the same address share one request; different
    addresses never wait on each other.
    """

    def __init__(self, inner: Geocoder) -> None:
        self._inner = inner
        self._results: dict[str, Coordinate] = {}
        self._in_flight: dict[str, asyncio.Task] = {}

    async def resolve(self, address: str) -> Coordinate | None:
        key = normalize_address(address)
        if not key:
            return None
        if key in self._results:
            return self._results[key]
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._lookup(key, address))
            self._in_flight[key] = task
        return await asyncio.shield(task)

    async def _lookup(self, key: str, address: str) -> Coordinate | None:
        try:
            result = await self._inner.resolve(address)
        finally:
            self._in_flight.pop(key, None)
        if result is not None:
            self._results[key] = result
        return result

    def clear(self) -> None:
        self._results.clear()

    async def aclose(self) -> None:
        close = getattr(self._inner, "aclose", None)
        if close is not None:
            await close()
