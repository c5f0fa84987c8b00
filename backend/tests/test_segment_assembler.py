from typing import List, Optional

import pytest

from backend.reader.errors import RemoteFetchError, SegmentNotFoundError
from backend.reader.schemas import ChapterItem, MergedVerseItem
from backend.reader.utils.corpus_loader import CorpusIndex
from backend.reader.utils.esv_client import EsvPassage
from backend.reader.utils.plan_builder import build_reading_plan
from backend.reader.utils.segment_assembler import FALLBACK_ESV_TEXT, SegmentAssembler


class StubEsvClient:
    def __init__(self, passage: Optional[EsvPassage] = None, error: Optional[Exception] = None):
        self.passage = passage
        self.error = error
        self.queries: List[str] = []

    async def fetch(self, query: str) -> EsvPassage:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.passage


def verse_items(items) -> List[MergedVerseItem]:
    return [item for item in items if isinstance(item, MergedVerseItem)]


@pytest.mark.anyio
async def test_merges_remote_and_local_text(corpus_index: CorpusIndex) -> None:
    plan = build_reading_plan("Genesis 1-3", corpus_index)
    client = StubEsvClient(
        EsvPassage(
            passages=["[1]One [2]Two [3]Three [4]Four [5]Five [1]Six (ESV)"],
            canonical="Genesis 1:1–2:1",
        )
    )

    result = await SegmentAssembler(client, corpus_index).assemble(plan, 0)

    assert client.queries == ["Genesis 1:1-2:1"]
    assert result.title == "Genesis 1-3"
    assert result.query == "Genesis 1:1–2:1"
    assert [item.label for item in result.items if isinstance(item, ChapterItem)] == ["1장", "2장"]

    verses = verse_items(result.items)
    assert [(v.chapter, v.verse) for v in verses] == [(1, 1), (1, 2), (1, 3), (1, 4), (1, 5), (2, 1)]
    assert verses[0].esv == "One"
    assert verses[0].nkrv == "창세기 1장 1절"
    assert verses[-1].nkrv == "창세기 2장 1절"
    assert not any(v.is_fallback for v in verses)


@pytest.mark.anyio
async def test_missing_local_verse_gets_empty_text(corpus_index: CorpusIndex) -> None:
    plan = build_reading_plan("Genesis 3", corpus_index)
    client = StubEsvClient(EsvPassage(passages=["[1]a [2]b [3]c [4]d"], canonical="Genesis 3"))

    result = await SegmentAssembler(client, corpus_index).assemble(plan, 0)
    verses = verse_items(result.items)

    assert [v.nkrv for v in verses[:3]] == ["창세기 3장 1절", "창세기 3장 2절", "창세기 3장 3절"]
    assert verses[3].verse == 4
    assert verses[3].nkrv == ""


@pytest.mark.anyio
async def test_canonical_falls_back_to_query(corpus_index: CorpusIndex) -> None:
    plan = build_reading_plan("Genesis 2", corpus_index)
    client = StubEsvClient(EsvPassage(passages=["[1]a"], canonical=""))

    result = await SegmentAssembler(client, corpus_index).assemble(plan, 0)

    assert result.query == "Genesis 2:1-2:4"
    assert result.items[0] == ChapterItem(label="2장")


@pytest.mark.anyio
async def test_unnumbered_verse_has_no_local_match(corpus_index: CorpusIndex) -> None:
    plan = build_reading_plan("Genesis 2", corpus_index)
    client = StubEsvClient(EsvPassage(passages=["no verse numbers here"], canonical="Genesis 2"))

    result = await SegmentAssembler(client, corpus_index).assemble(plan, 0)

    assert len(result.items) == 1
    assert result.items[0].verse is None
    assert result.items[0].nkrv == ""


@pytest.mark.anyio
async def test_remote_failure_falls_back_to_local_rendering(corpus_index: CorpusIndex) -> None:
    plan = build_reading_plan("Genesis 1-3", corpus_index)
    client = StubEsvClient(error=RemoteFetchError("ESV API error (429)", status_code=429))

    for index, segment in enumerate(plan.segments):
        result = await SegmentAssembler(client, corpus_index).assemble(plan, index)
        verses = verse_items(result.items)

        assert len(verses) == segment.length
        assert all(v.is_fallback for v in verses)
        assert all(v.esv == FALLBACK_ESV_TEXT for v in verses)
        assert [(v.chapter, v.verse) for v in verses] == [(r.chapter, r.verse) for r in segment.verses]
        assert result.title == "Genesis 1-3"

    first = await SegmentAssembler(client, corpus_index).assemble(plan, 0)
    assert [item.label if isinstance(item, ChapterItem) else item.ref for item in first.items] == [
        "1장", "1", "2", "3", "4", "5", "2장", "1",
    ]
    assert first.query == "Genesis 1:1-2:1"
    assert verse_items(first.items)[0].nkrv == "창세기 1장 1절"


@pytest.mark.anyio
async def test_segment_index_out_of_range(corpus_index: CorpusIndex) -> None:
    plan = build_reading_plan("Genesis 2", corpus_index)
    assembler = SegmentAssembler(StubEsvClient(), corpus_index)

    with pytest.raises(SegmentNotFoundError):
        await assembler.assemble(plan, 1)
    with pytest.raises(SegmentNotFoundError):
        await assembler.assemble(plan, -1)
