import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..errors import BookNotIndexedError, InvalidReferenceError, NoVersesFoundError, UnknownBookError
from .book_map import resolve_book_key
from .corpus_loader import BookIndexEntry, CorpusIndex
from .reference_parser import parse_reading_reference

logger = logging.getLogger(__name__)

# Upper bound on verses per ESV request
MAX_SEGMENT_VERSES = 500


@dataclass(frozen=True, order=True)
class VerseRef:
    chapter: int
    verse: int

    def __str__(self) -> str:
        return f"{self.chapter}:{self.verse}"


@dataclass(frozen=True)
class Segment:
    start: VerseRef
    end: VerseRef
    verses: Tuple[VerseRef, ...]

    @property
    def length(self) -> int:
        return len(self.verses)


@dataclass(frozen=True)
class ReadingPlan:
    reference: str
    book_name: str
    book_key: str
    total_verses: int
    max_verses: int
    segments: Tuple[Segment, ...]


def segment_size_for(book: BookIndexEntry) -> int:
    # Single-chapter books are never halved; tiny books fall back to the full limit
    if book.chapter_count == 1:
        half_book_limit = MAX_SEGMENT_VERSES
    else:
        half_book_limit = book.verse_count // 2
    return min(MAX_SEGMENT_VERSES, half_book_limit or MAX_SEGMENT_VERSES)


def collect_verses(book: BookIndexEntry, start_chapter: int, end_chapter: int) -> List[VerseRef]:
    verses: List[VerseRef] = []
    for chapter in range(start_chapter, end_chapter + 1):
        for verse in book.chapters.get(chapter, ()):
            verses.append(VerseRef(chapter=chapter, verse=verse))
    return verses


def chunk_verses(verses: List[VerseRef], size: int) -> Tuple[Segment, ...]:
    segments = []
    for i in range(0, len(verses), size):
        chunk = tuple(verses[i : i + size])
        segments.append(Segment(start=chunk[0], end=chunk[-1], verses=chunk))
    return tuple(segments)


def build_reading_plan(reference: str, index: CorpusIndex) -> ReadingPlan:
    """Split a reading reference into ESV-sized segments of the verses the corpus holds."""
    parsed = parse_reading_reference(reference)
    book_key = resolve_book_key(parsed.book_name)
    if not book_key:
        raise UnknownBookError(f"Unsupported book name: {parsed.book_name}")

    book = index.books.get(book_key)
    if book is None:
        raise BookNotIndexedError(f"Book not found in NKRV data: {parsed.book_name}")
    if not parsed.is_valid:
        raise InvalidReferenceError(f"Invalid reference: {reference}")

    verses = collect_verses(book, parsed.start_chapter, parsed.end_chapter)
    if not verses:
        raise NoVersesFoundError(f"No verses found for: {reference}")

    max_verses = segment_size_for(book)
    segments = chunk_verses(verses, max_verses)
    logger.debug(
        "Planned %s as %s segment(s) of up to %s verses (%s total)",
        reference,
        len(segments),
        max_verses,
        len(verses),
    )
    return ReadingPlan(
        reference=reference,
        book_name=parsed.book_name,
        book_key=book_key,
        total_verses=len(verses),
        max_verses=max_verses,
        segments=segments,
    )
