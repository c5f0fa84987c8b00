import asyncio
import json
from pathlib import Path
from typing import Dict

import httpx
import pytest

from backend.reader.errors import CorpusLoadError
from backend.reader.utils.corpus_loader import CorpusIndex, CorpusLoader, build_corpus_index, make_verse_key
from backend.reader.utils.plan_builder import build_reading_plan

CORPUS_URL = "https://assets.example.org/bible.json"


def test_index_groups_by_book_and_chapter(corpus_index: CorpusIndex) -> None:
    assert set(corpus_index.books) == {"창", "옵"}
    genesis = corpus_index.books["창"]
    assert genesis.verse_count == 12
    assert genesis.chapter_count == 3
    assert genesis.chapters[1] == [1, 2, 3, 4, 5]
    assert genesis.chapters[3] == [1, 2, 3]
    assert corpus_index.books["옵"].chapter_count == 1


def test_malformed_keys_are_skipped() -> None:
    index = build_corpus_index({"창1:1": "a", "nonsense": "b", "창1-2": "c", "": "d"})
    assert index.books["창"].verse_count == 1


def test_keys_with_trailing_newline_or_non_ascii_digits_are_skipped() -> None:
    raw = {"창1:1": "a", "창1:1\n": "b", "창1:2": "c", "창2:1": "d", "창１:3": "e", "창1:٣": "f"}
    index = build_corpus_index(raw)

    assert index.books["창"].chapters == {1: [1, 2], 2: [1]}
    assert index.books["창"].verse_count == 3

    plan = build_reading_plan("Genesis 1", index)
    assert [str(v) for s in plan.segments for v in s.verses] == ["1:1", "1:2"]


def test_multi_character_book_keys() -> None:
    index = build_corpus_index({"삼상3:10": "a", "삼상3:2": "b", "삼하1:1": "c"})
    assert index.books["삼상"].chapters == {3: [2, 10]}
    assert "삼하" in index.books


def test_text_for_strips_and_defaults_to_empty(corpus_index: CorpusIndex) -> None:
    assert make_verse_key("창", 1, 1) == "창1:1"
    assert corpus_index.text_for("창", 1, 1) == "창세기 1장 1절"
    assert corpus_index.text_for("창", 9, 9) == ""


@pytest.mark.anyio
async def test_load_index_from_file(tmp_path: Path, corpus_data: Dict[str, str]) -> None:
    path = tmp_path / "bible.json"
    path.write_text(json.dumps(corpus_data, ensure_ascii=False), encoding="utf-8")

    loader = CorpusLoader(corpus_path=path, corpus_url="")
    index = await loader.load_index()

    assert index.books["창"].verse_count == 12
    assert await loader.load_index() is index


@pytest.mark.anyio
async def test_missing_file_raises_corpus_load_error(tmp_path: Path) -> None:
    loader = CorpusLoader(corpus_path=tmp_path / "missing.json", corpus_url="")
    with pytest.raises(CorpusLoadError):
        await loader.load_index()


@pytest.mark.anyio
async def test_non_object_payload_raises(tmp_path: Path) -> None:
    path = tmp_path / "bible.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    loader = CorpusLoader(corpus_path=path, corpus_url="")
    with pytest.raises(CorpusLoadError):
        await loader.load_data()


@pytest.mark.anyio
async def test_concurrent_loads_share_one_fetch(corpus_data: Dict[str, str]) -> None:
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        await asyncio.sleep(0.01)
        return httpx.Response(200, json=corpus_data)

    loader = CorpusLoader(corpus_url=CORPUS_URL, transport=httpx.MockTransport(handler))
    results = await asyncio.gather(*(loader.load_index() for _ in range(5)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)


@pytest.mark.anyio
async def test_failed_load_is_retried(corpus_data: Dict[str, str]) -> None:
    responses = [httpx.Response(503), httpx.Response(200, json=corpus_data)]
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        return responses[len(calls) - 1]

    loader = CorpusLoader(corpus_url=CORPUS_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(CorpusLoadError):
        await loader.load_index()
    index = await loader.load_index()

    assert len(calls) == 2
    assert "창" in index.books


@pytest.mark.anyio
async def test_invalid_json_from_url() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
    loader = CorpusLoader(corpus_url=CORPUS_URL, transport=transport)
    with pytest.raises(CorpusLoadError):
        await loader.load_index()
