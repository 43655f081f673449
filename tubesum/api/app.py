"""
FastAPI application for tubesum.
"""

import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tubesum.config import config
from tubesum.api.routes import router
from tubesum.db.database import init_db
from tubesum.models.schemas import SummaryModel
from tubesum.utils.caching import setup_redis_cache
from tubesum.utils.errors import InvalidInputError, NotFoundError, TubesumError
from tubesum.utils.logger import logging

ERROR_STATUS = {
    InvalidInputError: 400,
    NotFoundError: 404,
}

app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="Transcribe YouTube videos with Whisper and summarize them with GPT, Gemini or Groq models",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create tables and connect the page cache."""
    logging.setLevel(config.LOG_LEVEL)
    init_db()
    logging.info(f"Database ready at {config.DATABASE_URL.split('@')[-1]}")

    if config.REDIS_URL:
        setup_redis_cache(config.REDIS_URL)
    else:
        logging.info("REDIS_URL not set, caching pages in memory")


@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    """Report handler time in ``X-Process-Time``."""
    start_time = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start_time
    response.headers["X-Process-Time"] = f"{elapsed:.4f}"
    logging.debug(f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.2f}s")
    return response


@app.exception_handler(TubesumError)
async def pipeline_exception_handler(request: Request, exc: TubesumError):
    """Map pipeline errors that reach the HTTP boundary to status codes."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        502,
    )
    logging.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logging.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"An unexpected error occurred: {str(exc)}"},
    )


app.include_router(router)


@app.get("/")
async def root():
    """Service info."""
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "models": [model.value for model in SummaryModel],
        "transcription_provider": config.TRANSCRIPTION_PROVIDER,
    }
