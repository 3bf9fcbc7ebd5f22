"""Forward new contacts to a remote script endpoint (fire-and-forget)."""

import logging

import httpx

from friendmap.application.dto import WriteBackOutcome
from friendmap.application.records import contact_to_row
from friendmap.domain import Contact

logger = logging.getLogger(__name__)


class HttpContactWriteBack:
    """POSTs the contact as a JSON sheet row.

    Script endpoints commonly answer with a redirect to an opaque result page,
    so 3xx means "sent, acknowledgment unknown" rather than failure.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def forward(self, contact: Contact) -> WriteBackOutcome:
        try:
            resp = await self._client.post(self.url, json=contact_to_row(contact))
        except httpx.HTTPError as exc:
            logger.warning("Write-back of %r failed: %s", contact.name, exc)
            return WriteBackOutcome.FAILED
        if resp.is_success:
            return WriteBackOutcome.DELIVERED
        if resp.is_redirect:
            return WriteBackOutcome.UNKNOWN
        logger.warning(
            "Write-back of %r rejected with HTTP %d", contact.name, resp.status_code
        )
        return WriteBackOutcome.FAILED

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
