"""
FastAPI Backend for the Card Reader Service
Accepts card image uploads and returns extracted records for user review
"""

import asyncio
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import logging

from api.models import HealthResponse
from api.routes import cards
from api.services.extraction import get_extractor
from api.services.rate_limiter import limiter
from cardreader.config import API_HOST, API_PORT, LOG_LEVEL

# Configure logging to show INFO level messages
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(levelname)s:     %(name)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: check the OCR engine on startup."""
    # Probed once here; /health reports the cached result
    app.state.ocr_available = await asyncio.to_thread(get_extractor().ocr.is_available)
    if app.state.ocr_available:
        logger.info("OCR engine ready")
    else:
        logger.warning("OCR engine not available; extraction requests will fail")

    yield  # App runs here

    logger.info("Shutting down Card Reader API")


app = FastAPI(
    title="Card Reader API",
    description="Tabletop baseball player card extraction",
    version="0.1.0",
    lifespan=lifespan
)

# Attach rate limiter to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cards.router, prefix="/api/cards", tags=["cards"])


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "card-reader",
        "ocr_available": getattr(request.app.state, "ocr_available", False),
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=True)
