import os
from pydantic_settings import BaseSettings



class Settings(BaseSettings):
    app_name: str = os.getenv("APP_NAME", "Bookmarked API")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # AI response parsing (POST /api/ai/parse)
    ai_parse_max_content_chars: int = int(os.getenv("AI_PARSE_MAX_CONTENT_CHARS", "50000"))
    # Upper bound on a single parse; guards against pathological regex backtracking
    ai_parse_timeout_seconds: float = float(os.getenv("AI_PARSE_TIMEOUT_SECONDS", "5.0"))

    # Default ParsingConfig applied to enhanced parses
    ai_parse_min_confidence: float = float(os.getenv("AI_PARSE_MIN_CONFIDENCE", "0.3"))
    ai_parse_max_items: int = int(os.getenv("AI_PARSE_MAX_ITEMS", "50"))
    ai_parse_extract_genres: bool = os.getenv("AI_PARSE_EXTRACT_GENRES", "true").lower() == "true"

settings = Settings()
