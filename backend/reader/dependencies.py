from functools import lru_cache
from typing import Iterator, Optional

import httpx
from fastapi import Depends, HTTPException, status
from sqlmodel import Session

from .config import Settings, get_settings
from .database import get_session
from .errors import CorpusLoadError
from .utils.corpus_loader import CorpusIndex, CorpusLoader
from .utils.esv_client import EsvClient
from .utils.rate_limit import RateLimits, SlidingWindowRateLimiter


def get_db() -> Iterator[Session]:
    with get_session() as session:
        yield session


@lru_cache()
def get_corpus_loader() -> CorpusLoader:
    return CorpusLoader()


@lru_cache()
def get_rate_limiter() -> SlidingWindowRateLimiter:
    settings = get_settings()
    return SlidingWindowRateLimiter(
        RateLimits(
            per_minute=settings.rate_limit_per_minute,
            per_hour=settings.rate_limit_per_hour,
            per_day=settings.rate_limit_per_day,
        )
    )


def get_esv_transport() -> Optional[httpx.AsyncBaseTransport]:
    # Overridden in tests with an httpx.MockTransport
    return None


def get_esv_client(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_esv_transport),
) -> EsvClient:
    if settings.esv_proxy_url:
        return EsvClient(settings.esv_proxy_url, transport=transport, timeout=settings.esv_timeout_seconds)
    # No proxy configured: call the ESV API directly with the server's key
    return EsvClient(
        settings.esv_api_url,
        api_key=settings.esv_api_key,
        transport=transport,
        timeout=settings.esv_timeout_seconds,
    )


async def get_corpus_index(loader: CorpusLoader = Depends(get_corpus_loader)) -> CorpusIndex:
    try:
        return await loader.load_index()
    except CorpusLoadError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
