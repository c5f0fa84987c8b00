import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..dependencies import get_esv_transport, get_rate_limiter
from ..utils.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["esv"])

RETRY_AFTER_SECONDS = "60"


@router.get("/esv")
async def proxy_esv(
    request: Request,
    settings: Settings = Depends(get_settings),
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_esv_transport),
) -> JSONResponse:
    """Relay a passage query to api.esv.org with the server-side API key."""
    if not settings.esv_api_key:
        return JSONResponse({"error": "ESV_API_KEY not configured"}, status_code=500)

    check = limiter.check()
    if not check.allowed:
        logger.warning("ESV proxy rate limit exceeded: %s", check.counts())
        return JSONResponse(
            {"error": "Rate limit exceeded", "limits": limiter.limits.as_dict(), "counts": check.counts()},
            status_code=429,
            headers={"Retry-After": RETRY_AFTER_SECONDS},
        )

    try:
        async with httpx.AsyncClient(transport=transport, timeout=settings.esv_timeout_seconds) as client:
            r = await client.get(
                settings.esv_api_url,
                params=list(request.query_params.multi_items()),
                headers={"Authorization": f"Token {settings.esv_api_key}"},
            )
    except httpx.HTTPError as exc:
        logger.error("ESV API error: %s", exc)
        return JSONResponse({"error": "Failed to reach ESV API"}, status_code=502)

    try:
        body = r.json()
    except ValueError:
        logger.error("ESV API returned a non-JSON body (%s)", r.status_code)
        return JSONResponse({"error": "Invalid response from ESV API"}, status_code=502)
    return JSONResponse(body, status_code=r.status_code)
