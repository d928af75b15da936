from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.api.ai_parse import router as ai_parse_router
from app.utils.timezone import utc_now


app = FastAPI(title=settings.app_name, version="1.0.0")

# Parse responses for long LLM answers compress well
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ai_parse_router, prefix="/api/ai", tags=["AI Parsing"])


@app.get("/")
def root():
    return {"status": "Bookmarked API Running"}

@app.get("/health")
async def health_check():
    """Simple health check endpoint for load balancers/monitoring"""
    return {"status": "healthy", "timestamp": utc_now().isoformat()}
