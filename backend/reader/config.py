from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field("sqlite:///backend/reader.db")
    corpus_path: Path = Field(Path("bibles/nkrv/bible.json"))
    corpus_url: Optional[str] = Field(None)
    esv_api_url: str = Field("https://api.esv.org/v3/passage/text/")
    esv_api_key: Optional[str] = Field(None)
    # Where the reading pipeline sends passage queries; empty means api.esv.org with ESV_API_KEY
    esv_proxy_url: Optional[str] = Field("http://localhost:8000/api/esv")
    esv_timeout_seconds: float = Field(30.0)
    rate_limit_per_minute: int = Field(60)
    rate_limit_per_hour: int = Field(1000)
    rate_limit_per_day: int = Field(5000)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
