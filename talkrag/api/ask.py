"""
Thin API route for /prompt.

No business logic: validates the request, calls
orchestrator.run_pipeline(), and converts the outcome into either the
answer payload or the uniform error shape.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from talkrag.api.deps import get_services
from talkrag.core.config import Settings, get_settings
from talkrag.core.errors import InvalidQuestionError
from talkrag.pipeline.orchestrator import run_pipeline, pipeline_response_to_ask_response
from talkrag.schemas.response import AskRequest, AskResponse, ErrorResponse
from talkrag.services.container import Services
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.api.ask")

router = APIRouter(tags=["Ask"])


@router.post(
    "/prompt",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask_question(
    request: AskRequest,
    services: Services = Depends(get_services),
    settings: Settings = Depends(get_settings),
):
    """Answer a question about the talk corpus using only retrieved passages."""
    q = (request.question or "").strip()
    logger.info("[ASK] New question: %s%s", q[:80], "..." if len(q) > 80 else "")

    try:
        final = await run_pipeline(request.question, services, settings)
    except InvalidQuestionError as e:
        logger.info("[ASK] Rejected: %s", e)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=str(e)).model_dump(exclude_none=True),
        )
    except Exception as e:
        logger.error("[ASK] Error: %s", e, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal server error", details=str(e)).model_dump(),
        )

    logger.info(
        "[ASK] Pipeline done in %.2fs | intent=%s | talks=%d",
        final.processing_time_seconds,
        final.intent.value,
        len(final.talks),
    )
    return pipeline_response_to_ask_response(final)
