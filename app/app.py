"""
FastAPI application — backend for the SCHEMA frontend.

Run as a script:
    python app/app.py

Or as a module:
    uvicorn app.app:app --reload

Endpoints:
    POST /generate
        body:    {"q": "...", "mode": "narrative" | "visual", "filters": {...}}
                 (mode defaults to narrative, filters are optional)
        returns: {"input_analysis_tags": [...], "results": [...]}
    GET /health
        returns: {"status": "ok"}

A failed generation returns the same empty body as a generation that found
nothing. Logs each query and wall-clock response time to stdout and
logs/app.log (rotating, 5 MB max, 3 backups).
"""

import asyncio
import logging
import logging.handlers
import os
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from curator.config import LOG_LEVEL, SERVER_HOST, SERVER_PORT, Settings
from curator.generator import Curator
from curator.models import Filters, Mode, ResultSet

LOG_DIR  = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

def _setup_logging(level: str = LOG_LEVEL) -> None:
    """Attach stdout + rotating file handlers to the root logger, once."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if any(getattr(h, "baseFilename", None) == os.path.abspath(LOG_FILE) for h in root.handlers):
        return

    LOG_DIR.mkdir(exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(name)s  %(message)s")
    handlers = [
        logging.StreamHandler(sys.stdout),
        # 5 MB x 3 backups
        logging.handlers.RotatingFileHandler(
            LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        ),
    ]
    for handler in handlers:
        handler.setFormatter(fmt)
        root.addHandler(handler)

_setup_logging()
log = logging.getLogger("api")


# ---------------------------------------------------------------------------
# App + lifespan
# ---------------------------------------------------------------------------

_curator: Curator | None = None


@asynccontextmanager
async def lifespan(_: FastAPI):
    global _curator

    settings = Settings.from_env()
    if not settings.openai_api_key:
        log.warning("OPENAI_API_KEY is not set; generations will return no results.")

    http = httpx.AsyncClient(follow_redirects=True)
    # OpenAI client is built on the first generation
    _curator = Curator(None, http, settings)
    log.info("Curator ready (model=%s).", settings.model)

    yield  # server runs here

    await _curator.aclose()
    await http.aclose()
    _curator = None


app = FastAPI(title="SCHEMA", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class GenerateRequest(BaseModel):
    q: str
    mode: Mode = Mode.NARRATIVE
    filters: Filters | None = None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/generate", response_model=ResultSet)
async def generate(req: GenerateRequest) -> ResultSet:
    if not req.q.strip():
        raise HTTPException(status_code=400, detail="Query must not be empty.")
    if _curator is None:
        raise HTTPException(status_code=503, detail="Curator not initialised.")

    t0 = time.perf_counter()
    log.info("Generating: q=%r  mode=%s  filters=%s",
             req.q, req.mode.value, req.filters.active() if req.filters else {})

    result = await _curator.generate(req.mode, req.q.strip(), req.filters)

    elapsed = time.perf_counter() - t0
    log.info("query=%r  mode=%s  hits=%d  %.2fs",
             req.q, req.mode.value, len(result.results), elapsed)
    return result


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _launch_server(host: str = SERVER_HOST, port: int = SERVER_PORT) -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        uvicorn.run(app, host=host, port=port)
        return

    # already inside a loop (notebook, embedding app): schedule instead of blocking
    log.warning("Event loop already running; scheduling server.serve() as a task.")
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port))
    asyncio.create_task(server.serve())


if __name__ == "__main__":
    log.info("=== SCHEMA — launching server on http://%s:%d ===", SERVER_HOST, SERVER_PORT)
    _launch_server()
