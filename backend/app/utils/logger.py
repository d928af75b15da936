import logging

from app.core.config import settings

logger = logging.getLogger("bookmarked")
logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

# Guard against duplicate handlers when the module is reloaded (uvicorn --reload, tests)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(levelname)s] %(asctime)s - %(message)s", "%Y-%m-%d %H:%M:%S")
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
