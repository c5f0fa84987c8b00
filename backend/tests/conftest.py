from typing import Dict

import pytest

from backend.reader.utils.corpus_loader import CorpusIndex, build_corpus_index

GENESIS_CHAPTERS = ((1, 5), (2, 4), (3, 3))
OBADIAH_VERSES = 21


def make_corpus() -> Dict[str, str]:
    data: Dict[str, str] = {}
    for chapter, count in GENESIS_CHAPTERS:
        # inserted newest-first so the index has to sort them
        for verse in range(count, 0, -1):
            data[f"창{chapter}:{verse}"] = f" 창세기 {chapter}장 {verse}절 "
    for verse in range(1, OBADIAH_VERSES + 1):
        data[f"옵1:{verse}"] = f"오바댜 {verse}절"
    data["bad-key"] = "ignored"
    data["창:1"] = "ignored"
    data["1:1"] = "ignored"
    return data


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def corpus_data() -> Dict[str, str]:
    return make_corpus()


@pytest.fixture
def corpus_index(corpus_data: Dict[str, str]) -> CorpusIndex:
    return build_corpus_index(corpus_data)
