"""
FastAPI application entry point.

Run locally:
  python run.py
  # or: uvicorn talkrag.main:app --reload --port 8000

The lifespan handler builds the collaborator handles (embedder, Chroma
index, OpenAI generator) once at startup; requests receive them through
the ``get_services`` dependency.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from talkrag.api.ask import router as ask_router
from talkrag.api.health import router as health_router
from talkrag.core.config import settings
from talkrag.core.errors import MISSING_QUESTION
from talkrag.schemas.response import ErrorResponse
from talkrag.services.container import Services, build_services
from talkrag.utils.logging import get_logger, setup_logging

setup_logging(logging.INFO if settings.environment == "development" else logging.WARNING)
logger = get_logger("talkrag.main")

PROMPT_PATH = "/api/prompt"


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', '')} ({err.get('type', '')})")
    return "; ".join(parts)


async def prompt_validation_handler(request: Request, exc: RequestValidationError):
    """
    Report any unusable /api/prompt body (absent, not JSON, non-string
    question) as the route's own 400; other routes keep FastAPI's 422.
    """
    if request.url.path != PROMPT_PATH:
        return await request_validation_exception_handler(request, exc)

    details = _describe_validation_errors(exc)
    logger.info("[ASK] Rejected malformed body: %s", details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=MISSING_QUESTION, details=details).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise collaborator handles before the first request."""
    logger.info("Starting %s...", settings.app_name)

    if getattr(app.state, "services", None) is None:
        app.state.services = build_services(settings)
        logger.info("[OK] Services ready (embedding=%s)", settings.embedding_provider)

    yield

    logger.info("Shutting down %s.", settings.app_name)


def create_app(services: Services | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Grounded question answering over a talk-transcript corpus",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = services
    app.add_exception_handler(RequestValidationError, prompt_validation_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify your frontend domain
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(ask_router, prefix="/api")  # /api/prompt
    app.include_router(health_router, prefix="/api")  # /api/health, /api/stats

    return app


app = create_app()
