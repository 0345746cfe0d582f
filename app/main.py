import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.api.routes import router
from app.core.config import settings
from app.core.logging import setup_logging
from app.fetch.fetcher import create_http_client

setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Create the shared HTTP client on startup, close it on shutdown.
    """
    logger.info(f"Initializing {settings.SERVICE_NAME}...")
    app.state.http_client = create_http_client()
    logger.info("HTTP client initialized")

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME}...")
    await app.state.http_client.aclose()

app = FastAPI(
    title=settings.SERVICE_NAME,
    description="Fetches batches of URLs concurrently on behalf of synchronous callers",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": settings.SERVICE_NAME,
        "version": "1.0.0",
        "endpoints": {
            "fanout": "POST /api/fanout",
            "health": "GET /health"
        }
    }

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
