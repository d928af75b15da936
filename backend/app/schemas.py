"""
schemas.py

Pydantic schemas for AI response parsing: extracted media candidates, the parse
result, and the enhanced parse envelope returned by the API.
Attributes are snake_case; the wire format uses camelCase aliases.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal
import datetime

from app.core.config import settings

MediaType = Literal["book", "movie"]
ConfidenceLevel = Literal["high", "medium", "low"]
ParsingStatus = Literal["success", "partial", "failed", "no_content"]
ContentType = Literal["structured_list", "narrative_text", "mixed_content", "unknown"]
UIActionType = Literal["add_to_readlist", "add_to_watchlist"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParsedMediaItem(CamelModel):
    type: MediaType
    title: str = Field(..., min_length=1)
    author: Optional[str] = None
    director: Optional[str] = None
    genre: Optional[List[str]] = None
    description: Optional[str] = None
    confidence: float = Field(..., ge=0.0, le=1.0)


class ParsedResponse(CamelModel):
    books: List[ParsedMediaItem] = Field(default_factory=list)
    movies: List[ParsedMediaItem] = Field(default_factory=list)
    has_books: bool = False
    has_movies: bool = False

    @classmethod
    def empty(cls) -> "ParsedResponse":
        return cls(books=[], movies=[], has_books=False, has_movies=False)

    @classmethod
    def from_items(cls, books: List[ParsedMediaItem], movies: List[ParsedMediaItem]) -> "ParsedResponse":
        return cls(books=books, movies=movies, has_books=len(books) > 0, has_movies=len(movies) > 0)


class ParsingConfig(CamelModel):
    min_confidence: float = Field(default_factory=lambda: settings.ai_parse_min_confidence, ge=0.0, le=1.0)
    max_items: int = Field(default_factory=lambda: settings.ai_parse_max_items, ge=1, le=100)
    extract_genres: bool = Field(default_factory=lambda: settings.ai_parse_extract_genres)


class ResponseQuality(CamelModel):
    has_structured_data: bool
    has_metadata: bool
    content_length: int = Field(..., ge=0)
    item_count: int = Field(..., ge=0)
    average_confidence: float = Field(..., ge=0.0, le=1.0)


class EnhancedParsedResponse(ParsedResponse):
    status: ParsingStatus
    content_type: ContentType
    quality: ResponseQuality
    processing_time: float = Field(..., ge=0.0)  # milliseconds
    config: Optional[ParsingConfig] = None
    warnings: List[str] = Field(default_factory=list)


# Payloads
class AIResponseParseRequest(CamelModel):
    content: str = Field(..., min_length=1)
    config: Optional[ParsingConfig] = None

    @field_validator("content")
    @classmethod
    def content_within_limits(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Content is required")
        if len(value) > settings.ai_parse_max_content_chars:
            raise ValueError("Content too large for parsing")
        return value


class AIParseData(CamelModel):
    parsed: ParsedResponse
    status: ParsingStatus
    content_type: ContentType
    quality: ResponseQuality
    processing_time: float
    items_found: int
    warnings: List[str] = Field(default_factory=list)


class AIParseResponse(CamelModel):
    success: bool
    message: str
    data: AIParseData
    timestamp: datetime.datetime
