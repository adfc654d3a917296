"""
Wound analysis service for HealScan AI.

Top-level controller: runs the submit action, owns the application
state and the history, and keeps them consistent when an analysis
fails.
"""

import time
from typing import Any, List, Optional

from starlette.concurrency import run_in_threadpool

from healscan.core.age_groups import parse_age, to_age_group
from healscan.core.errors import HealScanError
from healscan.core.gemini_client import GeminiVisionClient
from healscan.core.image_processor import UploadedImage
from healscan.models.schemas import AnalysisResult, AppStateResponse, Tab
from healscan.services.app_state import AppState
from healscan.services.history_store import HistoryStore
from healscan.utils.logger import get_logger

logger = get_logger("wound_analyzer")


def now_ms() -> int:
    return int(time.time() * 1000)


class WoundAnalysisService:
    """
    Main analysis orchestrator for HealScan AI.

    Coordinates:
    - Age parsing and age-group derivation
    - The vision model call
    - Recording results in the history
    - Application state transitions

    A failed analysis leaves the history and the current result as
    they were; nothing partial is ever recorded.
    """

    def __init__(
        self,
        client: Optional[GeminiVisionClient] = None,
        history: Optional[HistoryStore] = None,
        state: Optional[AppState] = None
    ):
        self.client = client or GeminiVisionClient()
        self.history = history if history is not None else HistoryStore()
        self.state = state or AppState()

    async def analyze(self, image: UploadedImage, raw_age: Any = None) -> AnalysisResult:
        """
        Run one analysis and record it.

        Args:
            image: Uploaded wound photo
            raw_age: Age as entered by the user (any type)

        Returns:
            The recorded AnalysisResult
        """
        self.state.start_analysis()
        start_time = time.time()

        age = parse_age(raw_age)
        age_group = to_age_group(age)

        logger.info(
            "Starting analysis",
            mime_type=image.mime_type,
            size=image.size,
            age=age,
            age_group=age_group.value
        )

        try:
            assessment = await run_in_threadpool(
                self.client.analyze, image.content, image.mime_type, age
            )

            entry = AnalysisResult(
                **assessment.model_dump(),
                timestamp=now_ms(),
                image_url=image.to_data_url(),
                age=age,
                age_group=age_group
            )
            self.history.record(entry)

        except HealScanError as e:
            logger.error("Analysis failed", error=e.message, error_code=e.error_code)
            self.state.analysis_failed(e.message)
            raise
        except Exception:
            self.state.analysis_failed("Analysis failed")
            raise

        self.state.analysis_succeeded(entry)

        logger.info(
            "Analysis complete",
            processing_time_ms=int((time.time() - start_time) * 1000),
            type=entry.type,
            stage=entry.stage,
            severity=entry.severity
        )
        return entry

    def history_entries(self) -> List[AnalysisResult]:
        return self.history.entries

    def get_history_entry(self, index: int) -> Optional[AnalysisResult]:
        return self.history.select_by_index(index)

    def view_history_entry(self, index: int) -> Optional[AnalysisResult]:
        """Show a history entry as the current result."""
        entry = self.history.select_by_index(index)
        if entry is not None:
            self.state.view_entry(entry)
        return entry

    def select_tab(self, tab: Tab) -> None:
        self.state.select_tab(tab)

    def snapshot(self) -> AppStateResponse:
        """Current state for the API."""
        return AppStateResponse(
            active_tab=self.state.active_tab,
            busy=self.state.busy,
            status=self.state.status,
            last_error=self.state.last_error,
            current_result=self.state.current_result,
            history_size=len(self.history)
        )


# Lazy-loaded singleton
_service: Optional[WoundAnalysisService] = None


def get_wound_service() -> WoundAnalysisService:
    """Get or create the analysis service (loads history on first call)."""
    global _service
    if _service is None:
        _service = WoundAnalysisService()
    return _service
