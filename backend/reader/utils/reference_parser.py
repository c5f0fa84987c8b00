import re
from dataclasses import dataclass
from typing import Optional

BOOK_ALIASES = {
    "gen": "Genesis",
    "ge": "Genesis",
    "gn": "Genesis",
    "ex": "Exodus",
    "exo": "Exodus",
    "exod": "Exodus",
    "lev": "Leviticus",
    "le": "Leviticus",
    "num": "Numbers",
    "nu": "Numbers",
    "deut": "Deuteronomy",
    "dt": "Deuteronomy",
    "josh": "Joshua",
    "jos": "Joshua",
    "judg": "Judges",
    "jg": "Judges",
    "rut": "Ruth",
    "ru": "Ruth",
    "1sam": "1 Samuel",
    "2sam": "2 Samuel",
    "1kgs": "1 Kings",
    "2kgs": "2 Kings",
    "1chr": "1 Chronicles",
    "2chr": "2 Chronicles",
    "ezra": "Ezra",
    "neh": "Nehemiah",
    "est": "Esther",
    "job": "Job",
    "ps": "Psalms",
    "psa": "Psalms",
    "psm": "Psalms",
    "pss": "Psalms",
    "pr": "Proverbs",
    "pro": "Proverbs",
    "ecc": "Ecclesiastes",
    "song": "Song of Solomon",
    "sos": "Song of Solomon",
    "songofsolomon": "Song of Solomon",
    "isa": "Isaiah",
    "jer": "Jeremiah",
    "lam": "Lamentations",
    "eze": "Ezekiel",
    "dan": "Daniel",
    "hos": "Hosea",
    "joel": "Joel",
    "amos": "Amos",
    "obad": "Obadiah",
    "jon": "Jonah",
    "mic": "Micah",
    "nah": "Nahum",
    "hab": "Habakkuk",
    "zeph": "Zephaniah",
    "hag": "Haggai",
    "zech": "Zechariah",
    "mal": "Malachi",
    "mt": "Matthew",
    "matt": "Matthew",
    "mk": "Mark",
    "mr": "Mark",
    "lk": "Luke",
    "lu": "Luke",
    "jn": "John",
    "joh": "John",
    "acts": "Acts",
    "ac": "Acts",
    "rom": "Romans",
    "ro": "Romans",
    "1cor": "1 Corinthians",
    "2cor": "2 Corinthians",
    "1co": "1 Corinthians",
    "2co": "2 Corinthians",
    "gal": "Galatians",
    "ga": "Galatians",
    "eph": "Ephesians",
    "php": "Philippians",
    "phil": "Philippians",
    "col": "Colossians",
    "1th": "1 Thessalonians",
    "2th": "2 Thessalonians",
    "1tim": "1 Timothy",
    "2tim": "2 Timothy",
    "tit": "Titus",
    "phm": "Philemon",
    "heb": "Hebrews",
    "jas": "James",
    "1pet": "1 Peter",
    "2pet": "2 Peter",
    "1pe": "1 Peter",
    "2pe": "2 Peter",
    "1jn": "1 John",
    "2jn": "2 John",
    "3jn": "3 John",
    "1jo": "1 John",
    "2jo": "2 John",
    "3jo": "3 John",
    "jud": "Jude",
    "rev": "Revelation",
    "re": "Revelation",
}

# Everything from the first whitespace-separated number onward, e.g. " 1-10" in "Genesis 1-10".
# "1 Samuel 3" keeps its leading ordinal because it is not preceded by whitespace.
RANGE_TAIL = re.compile(r"\s+\d.*$")
CHAPTER_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ParsedReference:
    book_name: str
    start_chapter: Optional[int]
    end_chapter: Optional[int]

    @property
    def is_valid(self) -> bool:
        return self.start_chapter is not None and self.end_chapter is not None


def normalize_book(name: str) -> str:
    key = name.lower().replace(" ", "")
    return BOOK_ALIASES.get(key, name.title())


def _chapter_number(side: str) -> Optional[int]:
    # "3:16" and "3" both name chapter 3; zero is never a chapter
    head = side.split(":")[0].strip()
    if not CHAPTER_DIGITS.fullmatch(head):
        return None
    return int(head) or None


def parse_reading_reference(reference: str) -> ParsedReference:
    """Split a reading reference like "Genesis 1-10" into a book and chapter range.

    A bare book name ("Ruth") reads as chapter 1. ``None`` chapters mean the
    range part could not be parsed and the caller must reject the reference.
    An end chapter before the start chapter is passed through untouched.
    """
    reference = reference.strip()
    book_name = RANGE_TAIL.sub("", reference).strip()
    range_part = reference[len(book_name):].strip()

    if not range_part:
        return ParsedReference(book_name=book_name, start_chapter=1, end_chapter=1)

    parts = [part.strip() for part in range_part.split("-")]
    start_raw = parts[0]
    end_raw = parts[1] if len(parts) > 1 and parts[1] else start_raw

    start_chapter = _chapter_number(start_raw)
    end_chapter = _chapter_number(end_raw) or start_chapter
    return ParsedReference(book_name=book_name, start_chapter=start_chapter, end_chapter=end_chapter)
