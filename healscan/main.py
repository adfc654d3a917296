"""
HealScan AI - FastAPI Application

Wound assessment assistant: upload a wound photo and an age, receive
an AI-generated assessment, browse past results and export reports.

IMPORTANT: This is NOT a diagnostic tool.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healscan.config import settings
from healscan.api.routes import router
from healscan.api.middleware import (
    RequestLoggingMiddleware,
    ErrorHandlingMiddleware,
    setup_error_handlers,
    setup_rate_limiting
)
from healscan.services.wound_analyzer import get_wound_service
from healscan.utils.logger import get_logger, configure_logging

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(
        "Starting HealScan AI",
        version=settings.app_version,
        debug=settings.debug
    )

    configure_logging(
        log_level=settings.log_level,
        json_format=not settings.debug
    )

    # History is read once, here
    service = get_wound_service()
    if not service.client.is_configured:
        logger.warning("GEMINI_API_KEY not set; analyses will fail until it is")

    logger.info("Application ready", history_entries=len(service.history))

    yield

    logger.info("Shutting down HealScan AI")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## HealScan AI - Wound Assessment Assistant

Upload a photo of a wound, enter the patient's age, and receive an AI-generated
assessment: wound type, healing stage, severity, precautions and care suggestions.

### ⚠️ Important Disclaimer

**This is NOT a diagnostic tool.** It does not replace professional medical advice.
For emergencies, call your local emergency services.

### API Endpoints

| Endpoint | Method | Description |
|----------|--------|-------------|
| `/analyze` | POST | Analyze a wound photo |
| `/state` | GET | Current application state |
| `/result` | GET | Result currently shown |
| `/history` | GET | Past analyses |
| `/examples` | GET | Illustrative examples |
| `/reports/{index}/pdf` | GET | Download a PDF report |
| `/health` | GET | Health check |
        """,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_error_handlers(app)
    setup_rate_limiting(app)

    app.include_router(router, tags=["API"])

    return app


# Create app instance
app = create_app()


# Run with: uvicorn healscan.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "healscan.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
