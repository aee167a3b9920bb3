"""
Runtime configuration.

Values come from the environment (a local .env is loaded on import):

    OPENAI_API_KEY        credential for the generative provider
    SCHEMA_MODEL          chat model used for generation   (gpt-4o-mini)
    SCHEMA_TEMPERATURE    sampling temperature              (0.9)
    GOOGLE_BOOKS_API_KEY  optional key for cover lookups
    SCHEMA_RETAIL_URL     retail search prefix, query is appended
    SCHEMA_API_URL        backend URL used by the Streamlit frontend
    SCHEMA_HOST / _PORT   address the API binds to           (0.0.0.0:8000)
    SCHEMA_LOG_LEVEL      root log level                     (INFO)
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

MAX_RESULTS       = 5
DEFAULT_MODEL     = "gpt-4o-mini"
DEFAULT_TEMP      = 0.9
GOOGLE_BOOKS_URL  = "https://www.googleapis.com/books/v1/volumes"
RETAIL_SEARCH_URL = "https://www.amazon.co.jp/s?k="
DEFAULT_API_URL   = "http://localhost:8000/generate"

SERVER_HOST = os.getenv("SCHEMA_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SCHEMA_PORT", "8000"))
LOG_LEVEL   = os.getenv("SCHEMA_LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMP
    max_results: int = MAX_RESULTS
    books_api_key: str | None = None
    retail_url: str = RETAIL_SEARCH_URL
    openai_api_key: str = field(default="", repr=False)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            model=os.getenv("SCHEMA_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("SCHEMA_TEMPERATURE", DEFAULT_TEMP)),
            books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
            retail_url=os.getenv("SCHEMA_RETAIL_URL", RETAIL_SEARCH_URL),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        )


def api_url() -> str:
    return os.getenv("SCHEMA_API_URL", DEFAULT_API_URL)
