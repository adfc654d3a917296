"""
Application state for HealScan AI.

The state the user-facing surface renders: the active view, the result
being shown, and whether an analysis is running. It is only changed
through the transition methods below.
"""

from dataclasses import dataclass
from typing import Optional

from healscan.core.errors import AnalysisInProgress
from healscan.models.schemas import AnalysisResult, Tab

ANALYZING_STATUS = "Thinking… analyzing wound type and stage"


@dataclass
class AppState:
    """Explicit UI state owned by the analysis service."""

    active_tab: Tab = Tab.RESULTS
    current_result: Optional[AnalysisResult] = None
    busy: bool = False
    status: str = ""
    last_error: Optional[str] = None

    def select_tab(self, tab: Tab) -> None:
        self.active_tab = Tab(tab)

    def start_analysis(self) -> None:
        """Mark an analysis as running; only one may run at a time."""
        if self.busy:
            raise AnalysisInProgress("An analysis is already running. Please wait.")
        self.busy = True
        self.status = ANALYZING_STATUS
        self.last_error = None

    def analysis_succeeded(self, result: AnalysisResult) -> None:
        self.current_result = result
        self.active_tab = Tab.RESULTS
        self.busy = False
        self.status = ""

    def analysis_failed(self, message: str) -> None:
        # current_result is left as it was
        self.busy = False
        self.status = ""
        self.last_error = message

    def view_entry(self, result: AnalysisResult) -> None:
        """Show a history entry as the current result."""
        self.current_result = result
        self.active_tab = Tab.RESULTS
