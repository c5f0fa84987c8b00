import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import httpx

from ..errors import RemoteFetchError
from .plan_builder import Segment

logger = logging.getLogger(__name__)

# Rendering flags the passage parser depends on: inline [n] verse numbers, no headings or footnotes
PASSAGE_PARAMS: Dict[str, str] = {
    "include-passage-references": "false",
    "include-verse-numbers": "true",
    "include-first-verse-numbers": "true",
    "include-footnotes": "false",
    "include-headings": "false",
    "include-short-copyright": "true",
    "line-length": "0",
}


@dataclass
class EsvPassage:
    passages: List[str] = field(default_factory=list)
    canonical: str = ""


def format_esv_query(book_name: str, segment: Segment) -> str:
    start_ref = f"{segment.start.chapter}:{segment.start.verse}"
    end_ref = f"{segment.end.chapter}:{segment.end.verse}"
    verse_range = start_ref if start_ref == end_ref else f"{start_ref}-{end_ref}"
    return f"{book_name} {verse_range}"


class EsvClient:
    """Fetches ESV passage text, either through the rate-limited proxy or from api.esv.org directly."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url
        self.api_key = api_key
        self._transport = transport
        self._timeout = timeout

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            return {}
        return {"Authorization": f"Token {self.api_key}"}

    async def fetch(self, query: str) -> EsvPassage:
        params = {"q": query, **PASSAGE_PARAMS}
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                r = await client.get(self.base_url, params=params, headers=self._headers())
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"ESV API unreachable: {exc}") from exc

        if not r.is_success:
            raise RemoteFetchError(f"ESV API error ({r.status_code})", status_code=r.status_code)

        try:
            payload = r.json()
        except ValueError as exc:
            raise RemoteFetchError("ESV API returned invalid JSON", status_code=r.status_code) from exc
        if not isinstance(payload, dict):
            raise RemoteFetchError("ESV API returned an unexpected payload", status_code=r.status_code)

        passages = payload.get("passages") or []
        if not isinstance(passages, list):
            passages = []
        logger.debug("Fetched %s passage(s) for %s", len(passages), query)
        return EsvPassage(
            passages=[str(p) for p in passages],
            canonical=payload.get("canonical") or "",
        )
