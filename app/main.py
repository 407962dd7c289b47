"""
AI Placement Helper - Main Application

FastAPI backend with:
- Company information resolution (cache -> dataset -> web sources -> fallbacks)
- MongoDB as the company cache
- Interview video search (YouTube Data API)
- Job description analysis via an OpenAI-compatible LLM endpoint

Run: uvicorn app.main:app --reload
"""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.deps import get_container
from app.api.routes import api_router
from app.core.config import get_settings
from app.core.exceptions import ConfigurationError, InputValidationError, JobAnalysisError
from app.services.container import ServiceContainer

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="AI Placement Helper",
    description="""
    Helps job seekers prepare for interviews.

    ## Features
    - **Companies**: Profile lookup with multi-source fallback, search and listing
    - **Jobs**: Job description analysis with company information
    - **Videos**: Ranked interview-preparation videos for a company and role

    ## Storage
    - MongoDB: Resolved company profiles (cache)
    - CSV dataset: Bulk company records, loaded once at startup
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# ============================================================
# ERROR HANDLERS
# ============================================================

def _error_body(message: str) -> dict:
    return {
        "success": False,
        "error": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    return JSONResponse(status_code=400, content=_error_body(str(exc)))


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content=_error_body(str(exc)))


@app.exception_handler(JobAnalysisError)
async def job_analysis_error_handler(request: Request, exc: JobAnalysisError):
    logger.error("Job analysis failed: %s", exc)
    return JSONResponse(status_code=500, content=_error_body(f"Failed to analyze job description: {exc}"))


# ============================================================
# LIFECYCLE
# ============================================================

@app.on_event("startup")
async def startup_event():
    """Build services, create MongoDB indexes and load the dataset."""
    container = ServiceContainer.build(settings)
    app.state.container = container
    await container.startup()
    logger.info("✅ AI Placement Helper started")


@app.on_event("shutdown")
async def shutdown_event():
    container = getattr(app.state, "container", None)
    if container is not None:
        await container.shutdown()


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "AI Placement Helper"}


@app.get("/health", tags=["Health"])
async def health_check(container: ServiceContainer = Depends(get_container)):
    """Detailed health check."""
    dataset_size = len(await container.loader.load())
    mongo_ok = await asyncio.to_thread(container.store.ping)
    return {
        "status": "healthy",
        "mongodb": "connected" if mongo_ok else "disconnected",
        "dataset_companies": dataset_size,
    }
