"""
API routes for HealScan AI.

Defines the REST endpoints behind the four views: results, history,
examples and reports.
"""

from typing import List, Optional

from fastapi import APIRouter, File, UploadFile, HTTPException, Request, Depends, Form
from fastapi.responses import Response

from healscan.api.middleware import limiter
from healscan.config import settings
from healscan.core.image_processor import load_upload
from healscan.models.schemas import (
    AnalysisResult,
    AppStateResponse,
    ErrorResponse,
    ExampleCase,
    HealthResponse,
    Tab,
)
from healscan.services.examples import list_examples
from healscan.services.report_generator import (
    ReportGenerator,
    get_report_generator,
    report_filename,
)
from healscan.services.wound_analyzer import WoundAnalysisService, get_wound_service
from healscan.utils.file_validators import file_validator
from healscan.utils.logger import get_logger

logger = get_logger("routes")

# Create router
router = APIRouter()


def _history_entry_or_404(service: WoundAnalysisService, index: int) -> AnalysisResult:
    entry = service.get_history_entry(index)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"History entry not found: {index}")
    return entry


# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check endpoint"
)
async def health_check(service: WoundAnalysisService = Depends(get_wound_service)):
    """Check if the service is healthy and whether inference is configured."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        inference_configured=service.client.is_configured
    )


# =============================================================================
# Analysis
# =============================================================================

@router.post(
    "/analyze",
    response_model=AnalysisResult,
    tags=["Analysis"],
    summary="Analyze a wound photo",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid image"},
        409: {"model": ErrorResponse, "description": "Analysis already running"},
        502: {"model": ErrorResponse, "description": "Model call or reply failed"},
        503: {"model": ErrorResponse, "description": "Inference not configured"}
    }
)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def analyze_wound(
    request: Request,
    file: UploadFile = File(..., description="Wound image (any image type)"),
    age: Optional[str] = Form(default=None, description="Patient age"),
    service: WoundAnalysisService = Depends(get_wound_service)
):
    """
    Analyze a wound photo and record the result in the history.

    The age is optional; blank or non-numeric ages are treated as
    unknown and the result is tailored for any age.

    **Important**: This is NOT a diagnostic tool. Always consult a
    healthcare professional.
    """
    content = await file.read()

    is_valid, error = file_validator.validate_image(content, file.filename or "upload")
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)

    image = load_upload(content, file.filename, file.content_type)
    return await service.analyze(image, age)


# =============================================================================
# Application State
# =============================================================================

@router.get(
    "/state",
    response_model=AppStateResponse,
    tags=["State"],
    summary="Current application state"
)
async def get_state(service: WoundAnalysisService = Depends(get_wound_service)):
    return service.snapshot()


@router.post(
    "/tabs/{tab}",
    response_model=AppStateResponse,
    tags=["State"],
    summary="Select the active view"
)
async def select_tab(tab: Tab, service: WoundAnalysisService = Depends(get_wound_service)):
    service.select_tab(tab)
    return service.snapshot()


@router.get(
    "/result",
    response_model=AnalysisResult,
    tags=["Analysis"],
    summary="Result currently shown"
)
async def current_result(service: WoundAnalysisService = Depends(get_wound_service)):
    """Return the current result, or 404 before the first analysis."""
    result = service.state.current_result
    if result is None:
        raise HTTPException(status_code=404, detail="No analysis yet")
    return result


# =============================================================================
# History
# =============================================================================

@router.get(
    "/history",
    response_model=List[AnalysisResult],
    tags=["History"],
    summary="Past analyses, newest first"
)
async def list_history(service: WoundAnalysisService = Depends(get_wound_service)):
    return service.history_entries()


@router.get(
    "/history/{index}",
    response_model=AnalysisResult,
    tags=["History"],
    summary="One past analysis"
)
async def get_history_entry(
    index: int,
    service: WoundAnalysisService = Depends(get_wound_service)
):
    return _history_entry_or_404(service, index)


@router.post(
    "/history/{index}/view",
    response_model=AppStateResponse,
    tags=["History"],
    summary="Show a past analysis as the current result"
)
async def view_history_entry(
    index: int,
    service: WoundAnalysisService = Depends(get_wound_service)
):
    if service.view_history_entry(index) is None:
        raise HTTPException(status_code=404, detail=f"History entry not found: {index}")
    return service.snapshot()


# =============================================================================
# Examples
# =============================================================================

@router.get(
    "/examples",
    response_model=List[ExampleCase],
    tags=["Examples"],
    summary="Illustrative wound examples"
)
async def examples():
    return list_examples()


# =============================================================================
# Reports
# =============================================================================

@router.get(
    "/reports/{index}/pdf",
    tags=["Reports"],
    summary="Download a PDF report for a past analysis"
)
async def download_report(
    index: int,
    service: WoundAnalysisService = Depends(get_wound_service),
    generator: ReportGenerator = Depends(get_report_generator)
):
    """
    Export history entry `index` as a one-page PDF.

    The download is named with the current date.
    """
    entry = _history_entry_or_404(service, index)
    pdf_bytes = generator.generate_pdf(entry)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename()}"'}
    )
