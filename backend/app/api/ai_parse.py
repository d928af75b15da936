"""
ai_parse.py

API endpoint that turns an LLM recommendation text into book/movie candidates
the UI can offer for bulk adding.
"""
from fastapi import APIRouter, HTTPException
from typing import Dict
import asyncio
import logging

from app.core.config import settings
from app.schemas import AIParseData, AIParseResponse, AIResponseParseRequest
from app.services.ai_engine.response_analysis import analyze_response
from app.utils.timezone import utc_now

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/parse", response_model=AIParseResponse)
async def parse_ai_response(request: AIResponseParseRequest) -> AIParseResponse:
    """Extract book and movie candidates from an AI response."""
    try:
        # CPU-bound regex work runs off the event loop, bounded in time
        enhanced = await asyncio.wait_for(
            asyncio.to_thread(analyze_response, request.content, request.config),
            timeout=settings.ai_parse_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning(
            f"AI response parse timed out after {settings.ai_parse_timeout_seconds}s (len={len(request.content)})"
        )
        raise HTTPException(status_code=504, detail="Parsing took too long")
    except Exception as e:
        logger.error(f"AI response parse failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to parse AI response: {str(e)}")

    items_found = len(enhanced.books) + len(enhanced.movies)
    return AIParseResponse(
        success=True,
        message=f"Found {items_found} item(s)" if items_found else "No books or movies found",
        data=AIParseData(
            parsed=enhanced,
            status=enhanced.status,
            content_type=enhanced.content_type,
            quality=enhanced.quality,
            processing_time=enhanced.processing_time,
            items_found=items_found,
            warnings=enhanced.warnings,
        ),
        timestamp=utc_now(),
    )


@router.get("/parse/health")
async def parse_health() -> Dict[str, str]:
    return {"status": "ok", "parser": "online"}
