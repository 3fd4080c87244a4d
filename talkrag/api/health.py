"""
Health check and static-configuration endpoints for monitoring.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from talkrag.core.config import Settings, get_settings
from talkrag.schemas.response import StatsResponse

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok", "service": "talkrag"}


@router.get("/stats", response_model=StatsResponse)
async def stats(settings: Settings = Depends(get_settings)):
    """Chunking and retrieval settings in effect (no computation)."""
    return StatsResponse(
        chunk_size=settings.chunk_size,
        overlap_ratio=settings.overlap_ratio,
        top_k=settings.top_k,
    )
