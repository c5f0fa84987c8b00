import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import httpx

from ..config import get_settings
from ..errors import CorpusLoadError
from .single_flight import SingleFlight

logger = logging.getLogger(__name__)

# "<bookKey><chapter>:<verse>", e.g. "창1:1" or "삼상3:10"
VERSE_KEY_REGEX = re.compile(r"([^0-9]+)([0-9]+):([0-9]+)")


def make_verse_key(book_key: str, chapter: int, verse: int) -> str:
    return f"{book_key}{chapter}:{verse}"


@dataclass
class BookIndexEntry:
    verse_count: int = 0
    chapters: Dict[int, List[int]] = field(default_factory=dict)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)


@dataclass
class CorpusIndex:
    data: Mapping[str, str]
    books: Mapping[str, BookIndexEntry]

    def text_for(self, book_key: str, chapter: int, verse: int) -> str:
        text = self.data.get(make_verse_key(book_key, chapter, verse))
        return text.strip() if text else ""


def build_corpus_index(raw: Mapping[str, str]) -> CorpusIndex:
    """Group a flat ``{verse key: text}`` corpus by book and chapter.

    Keys that do not look like a verse key are skipped.
    """
    books: Dict[str, BookIndexEntry] = {}
    skipped = 0

    for key in raw:
        match = VERSE_KEY_REGEX.fullmatch(key)
        if not match:
            skipped += 1
            continue

        book_key = match.group(1)
        chapter = int(match.group(2))
        verse = int(match.group(3))

        book = books.setdefault(book_key, BookIndexEntry())
        book.verse_count += 1
        book.chapters.setdefault(chapter, []).append(verse)

    for book in books.values():
        for verses in book.chapters.values():
            verses.sort()

    if skipped:
        logger.debug("Skipped %s malformed corpus keys", skipped)
    logger.info("Indexed %s verses across %s books", len(raw) - skipped, len(books))
    return CorpusIndex(data=raw, books=books)


class CorpusLoader:
    """Loads the NKRV corpus once and serves the chapter index built from it."""

    def __init__(
        self,
        corpus_path: Path | None = None,
        corpus_url: str | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.corpus_path = corpus_path or settings.corpus_path
        self.corpus_url = corpus_url if corpus_url is not None else settings.corpus_url
        self._transport = transport
        self._data = SingleFlight(self._fetch_data, name="corpus data load")
        self._index = SingleFlight(self._build_index, name="corpus index build")

    async def load_data(self) -> Dict[str, str]:
        return await self._data.get()

    async def load_index(self) -> CorpusIndex:
        return await self._index.get()

    def reset(self) -> None:
        self._data.reset()
        self._index.reset()

    async def _build_index(self) -> CorpusIndex:
        data = await self.load_data()
        return build_corpus_index(data)

    async def _fetch_data(self) -> Dict[str, str]:
        if self.corpus_url:
            payload = await self._fetch_remote(self.corpus_url)
        else:
            payload = await asyncio.to_thread(self._read_file, self.corpus_path)

        if not isinstance(payload, dict):
            raise CorpusLoadError("Corpus JSON must be an object keyed by verse")
        return payload

    async def _fetch_remote(self, url: str) -> object:
        logger.info("Fetching corpus from %s", url)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=60) as client:
                r = await client.get(url)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPError as exc:
            raise CorpusLoadError(f"Failed to load corpus from {url}: {exc}") from exc
        except ValueError as exc:
            raise CorpusLoadError(f"Corpus at {url} is not valid JSON") from exc

    @staticmethod
    def _read_file(path: Path) -> object:
        logger.info("Reading corpus from %s", path)
        if not path.exists():
            raise CorpusLoadError(f"Corpus JSON not found at {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as exc:
            raise CorpusLoadError(f"Failed to read corpus at {path}: {exc}") from exc
        except ValueError as exc:
            raise CorpusLoadError(f"Corpus at {path} is not valid JSON") from exc
