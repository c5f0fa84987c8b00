import logging
from typing import List, Optional

from ..errors import RemoteFetchError, SegmentNotFoundError
from ..schemas import AssembledSegment, ChapterItem, MergedItem, MergedVerseItem, ParsedItem
from .corpus_loader import CorpusIndex
from .esv_client import EsvClient, format_esv_query
from .passage_parser import chapter_label, parse_esv_passages
from .plan_builder import ReadingPlan, Segment

logger = logging.getLogger(__name__)

FALLBACK_ESV_TEXT = "ESV text unavailable (API error)"


class SegmentAssembler:
    """Builds the ESV + NKRV item list for one segment of a reading plan."""

    def __init__(self, client: EsvClient, index: CorpusIndex):
        self.client = client
        self.index = index

    async def assemble(self, plan: ReadingPlan, segment_index: int) -> AssembledSegment:
        if not 0 <= segment_index < len(plan.segments):
            raise SegmentNotFoundError(
                f"Segment {segment_index} out of range for {plan.reference} ({len(plan.segments)} segments)"
            )
        segment = plan.segments[segment_index]
        query = format_esv_query(plan.book_name, segment)

        try:
            data = await self.client.fetch(query)
        except RemoteFetchError as exc:
            logger.warning("ESV fetch failed for %s, using fallback mode: %s", query, exc)
            return AssembledSegment(
                title=plan.reference,
                query=query,
                items=self.fallback_items(plan, segment),
            )

        canonical = data.canonical or query
        parsed = parse_esv_passages(data.passages, canonical)
        return AssembledSegment(
            title=plan.reference,
            query=canonical,
            items=[self._merge(plan, item) for item in parsed],
        )

    def _merge(self, plan: ReadingPlan, item: ParsedItem) -> MergedItem:
        if isinstance(item, ChapterItem):
            return item
        return MergedVerseItem(
            **item.model_dump(),
            nkrv=self._local_text(plan.book_key, item.chapter, item.verse),
        )

    def _local_text(self, book_key: str, chapter: Optional[int], verse: Optional[int]) -> str:
        if not (book_key and chapter and verse):
            return ""
        return self.index.text_for(book_key, chapter, verse)

    def fallback_items(self, plan: ReadingPlan, segment: Segment) -> List[MergedItem]:
        """NKRV-only rendering of a segment, used when the ESV text is unavailable."""
        items: List[MergedItem] = []
        current_chapter: Optional[int] = None

        for ref in segment.verses:
            if ref.chapter != current_chapter:
                current_chapter = ref.chapter
                items.append(ChapterItem(label=chapter_label(current_chapter)))

            items.append(
                MergedVerseItem(
                    ref=str(ref.verse),
                    esv=FALLBACK_ESV_TEXT,
                    chapter=ref.chapter,
                    verse=ref.verse,
                    nkrv=self.index.text_for(plan.book_key, ref.chapter, ref.verse),
                    is_fallback=True,
                )
            )
        return items
