"""
response_analysis.py (AI Engine)

Enhanced parse of an AI response: runs the extractor, applies a ParsingConfig
(minimum confidence, item cap, genre tagging) and reports status, content type,
quality indicators and processing time alongside the candidates.
"""
import re
import time
from typing import List, Optional, Tuple

from app.core.config import settings
from app.schemas import (
    ConfidenceLevel,
    ContentType,
    EnhancedParsedResponse,
    ParsedMediaItem,
    ParsedResponse,
    ParsingConfig,
    ParsingStatus,
    ResponseQuality,
    UIActionType,
)
from app.utils.logger import logger
from .response_parser import AIResponseParser, parse_response

_LIST_LINE = re.compile(r"^\s*(?:[-*•]|\d+\.)\s*\S")

CONFIDENCE_RANGES = {
    "high": (0.8, 1.0),
    "medium": (0.5, 0.79),
    "low": (0.0, 0.49),
}


def get_confidence_level(score: float) -> ConfidenceLevel:
    if score >= 0.8:
        return "high"
    if score >= 0.5:
        return "medium"
    return "low"


def get_confidence_range(level: ConfidenceLevel) -> Tuple[float, float]:
    return CONFIDENCE_RANGES[level]


def validate_confidence_score(score: float) -> bool:
    # NaN fails both comparisons
    return 0.0 <= score <= 1.0


def validate_ai_content(content: Optional[str], max_chars: Optional[int] = None) -> bool:
    limit = max_chars if max_chars is not None else settings.ai_parse_max_content_chars
    return bool(content) and len(content.strip()) > 0 and len(content) <= limit


def get_ui_action_types(has_books: bool, has_movies: bool) -> List[UIActionType]:
    actions: List[UIActionType] = []
    if has_books:
        actions.append("add_to_readlist")
    if has_movies:
        actions.append("add_to_watchlist")
    return actions


def detect_content_type(content: Optional[str]) -> ContentType:
    """Classify the response layout by its non-empty lines."""
    if not content or not content.strip():
        return "unknown"
    list_lines = 0
    prose_lines = 0
    for line in content.splitlines():
        if not line.strip():
            continue
        if _LIST_LINE.match(line):
            list_lines += 1
        else:
            prose_lines += 1
    if list_lines and prose_lines:
        return "mixed_content"
    if list_lines:
        return "structured_list"
    return "narrative_text"


def _all_items(parsed: ParsedResponse) -> List[ParsedMediaItem]:
    return list(parsed.books) + list(parsed.movies)


def assess_quality(content: str, parsed: ParsedResponse) -> ResponseQuality:
    items = _all_items(parsed)
    has_structured = any(_LIST_LINE.match(line) for line in content.splitlines())
    has_metadata = any(item.author or item.director or item.genre for item in items)
    average = sum(item.confidence for item in items) / len(items) if items else 0.0
    return ResponseQuality(
        has_structured_data=has_structured,
        has_metadata=has_metadata,
        content_length=len(content),
        item_count=len(items),
        average_confidence=round(min(1.0, average), 3),
    )


def determine_status(content: Optional[str], quality: ResponseQuality, dropped: int) -> ParsingStatus:
    if not content or not content.strip():
        return "no_content"
    if quality.item_count == 0:
        return "failed"
    if dropped > 0 or quality.average_confidence < 0.5:
        return "partial"
    return "success"


def apply_config(items: List[ParsedMediaItem], config: ParsingConfig) -> Tuple[List[ParsedMediaItem], int, int]:
    """Filter one sorted candidate list. Returns (kept, dropped_low_confidence, truncated)."""
    kept = [item for item in items if item.confidence >= config.min_confidence]
    dropped = len(items) - len(kept)
    truncated = max(0, len(kept) - config.max_items)
    kept = kept[: config.max_items]
    if not config.extract_genres:
        kept = [item.model_copy(update={"genre": []}) for item in kept]
    return kept, dropped, truncated


def analyze_response(
    content: Optional[str],
    config: Optional[ParsingConfig] = None,
    parser: Optional[AIResponseParser] = None,
) -> EnhancedParsedResponse:
    config = config or ParsingConfig()
    started = time.perf_counter()

    parsed = parser.parse(content) if parser else parse_response(content)

    warnings: List[str] = []
    dropped_total = 0
    filtered = {}
    for label, items in (("books", parsed.books), ("movies", parsed.movies)):
        kept, dropped, truncated = apply_config(items, config)
        filtered[label] = kept
        dropped_total += dropped + truncated
        if dropped:
            warnings.append(f"{dropped} {label} below confidence {config.min_confidence:.2f} were dropped")
        if truncated:
            warnings.append(f"{truncated} {label} over the limit of {config.max_items} were dropped")

    result = ParsedResponse.from_items(filtered["books"], filtered["movies"])
    text = content if isinstance(content, str) else ""
    quality = assess_quality(text, result)
    status = determine_status(text, quality, dropped_total)
    content_type = detect_content_type(text)
    processing_time = (time.perf_counter() - started) * 1000.0

    logger.info(
        f"[ResponseAnalysis] status={status} type={content_type} books={len(result.books)} "
        f"movies={len(result.movies)} avg_conf={quality.average_confidence} in {processing_time:.1f}ms"
    )
    if warnings:
        logger.debug(f"[ResponseAnalysis] warnings: {warnings}")

    return EnhancedParsedResponse(
        books=result.books,
        movies=result.movies,
        has_books=result.has_books,
        has_movies=result.has_movies,
        status=status,
        content_type=content_type,
        quality=quality,
        processing_time=processing_time,
        config=config,
        warnings=warnings,
    )
