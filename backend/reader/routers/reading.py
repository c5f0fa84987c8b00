import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_corpus_index, get_corpus_loader, get_esv_client
from ..errors import BookNotIndexedError, CorpusLoadError, PlanValidationError, SegmentNotFoundError, UnknownBookError
from ..schemas import AssembledSegment, CorpusStatusRead, ReadingPlanRead
from ..utils.corpus_loader import CorpusIndex, CorpusLoader
from ..utils.esv_client import EsvClient
from ..utils.plan_builder import ReadingPlan, build_reading_plan
from ..utils.segment_assembler import SegmentAssembler

router = APIRouter(prefix="/reading", tags=["reading"])
logger = logging.getLogger(__name__)


def plan_or_404(reference: str, index: CorpusIndex) -> ReadingPlan:
    try:
        return build_reading_plan(reference, index)
    except (UnknownBookError, BookNotIndexedError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PlanValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/plan", response_model=ReadingPlanRead)
async def read_plan(
    reference: str = Query(..., description="Reading reference e.g. 'Genesis 1-10'"),
    index: CorpusIndex = Depends(get_corpus_index),
) -> ReadingPlanRead:
    plan = plan_or_404(reference, index)
    return ReadingPlanRead.model_validate(plan)


@router.get("/segment", response_model=AssembledSegment)
async def read_segment(
    reference: str = Query(..., description="Reading reference e.g. 'Genesis 1-10'"),
    segment: int = Query(0, ge=0, description="Zero-based segment index from the reading plan"),
    index: CorpusIndex = Depends(get_corpus_index),
    client: EsvClient = Depends(get_esv_client),
) -> AssembledSegment:
    plan = plan_or_404(reference, index)
    assembler = SegmentAssembler(client, index)
    try:
        return await assembler.assemble(plan, segment)
    except SegmentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/corpus/reload", response_model=CorpusStatusRead)
async def reload_corpus(loader: CorpusLoader = Depends(get_corpus_loader)) -> CorpusStatusRead:
    """Drop the cached NKRV corpus and load it again from its file or URL."""
    loader.reset()
    try:
        index = await loader.load_index()
    except CorpusLoadError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    verses = sum(book.verse_count for book in index.books.values())
    logger.info("Reloaded corpus: %s books, %s verses", len(index.books), verses)
    return CorpusStatusRead(books=len(index.books), verses=verses)
