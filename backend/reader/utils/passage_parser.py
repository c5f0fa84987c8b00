"""Turn ESV passage text into chapter markers and verse items.

The ESV API returns running prose with inline verse numbers such as ``[12]``
or ``[3:12]``. Labels that omit the chapter rely on a rollover heuristic: a
bare ``[1]`` after at least one verse starts the next chapter. Translations
that reuse label 1 mid-chapter will get a spurious chapter marker.
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..schemas import ChapterItem, ParsedItem, VerseItem

NO_PASSAGE_MESSAGE = "No passage returned from the API."

VERSE_TOKEN = re.compile(r"\[(\d+(?::\d+)?)\]")
# Trailing "c", "c:v", "c-c", "c:v-c:v"; group 1 is the first chapter of that range
TRAILING_RANGE = re.compile(r"(\d+)(?::\d+)?(?:\s*[-–]\s*\d+(?::\d+)?)?\s*$")
WHITESPACE = re.compile(r"\s+")


def chapter_label(chapter: int) -> str:
    return f"{chapter}장"


def get_start_chapter(reference: str) -> Optional[int]:
    match = TRAILING_RANGE.search(reference)
    return int(match.group(1)) if match else None


def _collapse(text: str) -> str:
    return WHITESPACE.sub(" ", text).strip()


def split_verse_tokens(raw: str) -> List[Tuple[str, str]]:
    """Pair each verse label with the text that follows it.

    Text before the first label (headings, boilerplate) is discarded, as are
    labels followed by no text.
    """
    verses: List[Tuple[str, str]] = []
    last_label: Optional[str] = None
    last_index = 0

    for match in VERSE_TOKEN.finditer(raw):
        if last_label is not None:
            text = _collapse(raw[last_index : match.start()])
            if text:
                verses.append((last_label, text))
        last_label = match.group(1)
        last_index = match.end()

    if last_label is not None:
        text = _collapse(raw[last_index:])
        if text:
            verses.append((last_label, text))

    return verses


def _split_label(label: str) -> Tuple[Optional[int], Optional[int]]:
    if ":" in label:
        chapter_raw, verse_raw = label.split(":", 1)
        return _to_int(chapter_raw), _to_int(verse_raw)
    return None, _to_int(label)


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def parse_passage_text(raw: str, fallback_reference: str) -> List[ParsedItem]:
    raw = raw.strip()
    start_chapter = get_start_chapter(fallback_reference)

    if not raw:
        return [VerseItem(ref=fallback_reference, esv=NO_PASSAGE_MESSAGE)]

    verses = split_verse_tokens(raw)
    if not verses:
        return [
            VerseItem(
                ref=fallback_reference,
                esv=_collapse(raw),
                chapter=start_chapter,
                verse=None,
            )
        ]

    items: List[ParsedItem] = []
    current_chapter = start_chapter
    verse_count = 0

    if current_chapter:
        items.append(ChapterItem(label=chapter_label(current_chapter)))

    for label, text in verses:
        chapter_number, verse_number = _split_label(label)

        if chapter_number is not None:
            if chapter_number != current_chapter:
                current_chapter = chapter_number
                items.append(ChapterItem(label=chapter_label(current_chapter)))
        elif verse_number == 1 and verse_count > 0 and current_chapter:
            current_chapter += 1
            items.append(ChapterItem(label=chapter_label(current_chapter)))

        items.append(VerseItem(ref=label, esv=text, chapter=current_chapter, verse=verse_number))
        verse_count += 1

    return items


def parse_esv_passages(passages: Sequence[str], fallback_reference: str) -> List[ParsedItem]:
    return parse_passage_text("\n".join(passages or ()), fallback_reference)
