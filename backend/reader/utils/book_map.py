from typing import Dict, Optional

from .reference_parser import normalize_book

# English (ESV) book names mapped to the key prefixes used by the NKRV corpus, e.g. "창1:1"
BOOK_MAP: Dict[str, str] = {
    "Genesis": "창",
    "Exodus": "출",
    "Leviticus": "레",
    "Numbers": "민",
    "Deuteronomy": "신",
    "Joshua": "수",
    "Judges": "삿",
    "Ruth": "룻",
    "1 Samuel": "삼상",
    "2 Samuel": "삼하",
    "1 Kings": "왕상",
    "2 Kings": "왕하",
    "1 Chronicles": "대상",
    "2 Chronicles": "대하",
    "Ezra": "스",
    "Nehemiah": "느",
    "Esther": "에",
    "Job": "욥",
    "Psalms": "시",
    "Psalm": "시",
    "Proverbs": "잠",
    "Ecclesiastes": "전",
    "Song of Solomon": "아",
    "Song of Songs": "아",
    "Isaiah": "사",
    "Jeremiah": "렘",
    "Lamentations": "애",
    "Ezekiel": "겔",
    "Daniel": "단",
    "Hosea": "호",
    "Joel": "욜",
    "Amos": "암",
    "Obadiah": "옵",
    "Jonah": "욘",
    "Micah": "미",
    "Nahum": "나",
    "Habakkuk": "합",
    "Zephaniah": "습",
    "Haggai": "학",
    "Zechariah": "슥",
    "Malachi": "말",
    "Matthew": "마",
    "Mark": "막",
    "Luke": "눅",
    "John": "요",
    "Acts": "행",
    "Romans": "롬",
    "1 Corinthians": "고전",
    "2 Corinthians": "고후",
    "Galatians": "갈",
    "Ephesians": "엡",
    "Philippians": "빌",
    "Colossians": "골",
    "1 Thessalonians": "살전",
    "2 Thessalonians": "살후",
    "1 Timothy": "딤전",
    "2 Timothy": "딤후",
    "Titus": "딛",
    "Philemon": "몬",
    "Hebrews": "히",
    "James": "약",
    "1 Peter": "벧전",
    "2 Peter": "벧후",
    "1 John": "요일",
    "2 John": "요이",
    "3 John": "요삼",
    "Jude": "유",
    "Revelation": "계",
}


def resolve_book_key(book_name: str) -> Optional[str]:
    """Look up the corpus key for a book, falling back to common abbreviations."""
    if book_name in BOOK_MAP:
        return BOOK_MAP[book_name]
    return BOOK_MAP.get(normalize_book(book_name))
