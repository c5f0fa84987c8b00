import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import init_db
from .routers import esv, progress, reading, schedule

settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Parallel Reader API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    if not settings.esv_api_key:
        logger.warning("ESV_API_KEY is not set; /api/esv will refuse requests and readings fall back to NKRV only")


app.include_router(reading.router)
app.include_router(esv.router)
app.include_router(schedule.router)
app.include_router(progress.router)
