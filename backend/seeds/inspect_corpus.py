import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backend.reader.errors import CorpusLoadError, PlanValidationError
from backend.reader.utils.book_map import BOOK_MAP
from backend.reader.utils.corpus_loader import CorpusIndex, CorpusLoader
from backend.reader.utils.plan_builder import build_reading_plan, segment_size_for
from backend.reader.utils.schedule import READING_SCHEDULE

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


def report_books(index: CorpusIndex) -> None:
    key_to_name = {}
    for name, key in BOOK_MAP.items():
        key_to_name.setdefault(key, name)

    for book_key, book in index.books.items():
        name = key_to_name.get(book_key, "?")
        logger.info(
            "%s (%s): %s chapters, %s verses, segment size %s",
            name,
            book_key,
            book.chapter_count,
            book.verse_count,
            segment_size_for(book),
        )

    unmapped = sorted(set(index.books) - set(BOOK_MAP.values()))
    if unmapped:
        logger.warning("Corpus books with no English name: %s", ", ".join(unmapped))
    missing = sorted(name for name, key in BOOK_MAP.items() if key not in index.books)
    if missing:
        logger.warning("Books absent from corpus: %s", ", ".join(missing))


def report_plans(index: CorpusIndex, references: List[str]) -> int:
    failures = 0
    for reference in references:
        try:
            plan = build_reading_plan(reference, index)
        except PlanValidationError as exc:
            failures += 1
            logger.error("%s: %s", reference, exc)
            continue
        spans = ", ".join(f"{s.start}-{s.end} ({s.length})" for s in plan.segments)
        logger.info("%s: %s verses in %s segment(s): %s", reference, plan.total_verses, len(plan.segments), spans)
    return failures


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect the NKRV corpus and check reading plans against it")
    parser.add_argument("--corpus", type=Path, help="Path to the NKRV bible.json (defaults to CORPUS_PATH)")
    parser.add_argument("--url", help="Fetch the corpus from a URL instead of a file")
    parser.add_argument("--reference", action="append", default=[], help="Reference to plan; may be repeated")
    parser.add_argument("--schedule", action="store_true", help="Plan every reading in the 12-week schedule")
    parser.add_argument("--books", action="store_true", help="Print per-book chapter and verse counts")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args()


async def run(corpus: Optional[Path], url: Optional[str], references: List[str], books: bool) -> int:
    loader = CorpusLoader(corpus.resolve() if corpus else None, url)
    index = await loader.load_index()
    if books:
        report_books(index)
    return report_plans(index, references)


def main() -> None:
    args = parse_args()
    configure_logging(args.verbose)

    references = list(args.reference)
    if args.schedule:
        for days in READING_SCHEDULE.values():
            references.extend(days)

    try:
        failures = asyncio.run(run(args.corpus, args.url, references, args.books))
    except CorpusLoadError as exc:
        raise SystemExit(str(exc))

    logger.info("Checked %s reference(s), %s failed.", len(references), failures)
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
