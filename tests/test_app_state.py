"""
Tests for application state transitions.
"""

import pytest

from conftest import make_entry
from healscan.core.errors import AnalysisInProgress
from healscan.models.schemas import Tab
from healscan.services.app_state import AppState


class TestTransitions:

    def test_initial_state(self):
        state = AppState()
        assert state.active_tab == Tab.RESULTS
        assert state.current_result is None
        assert not state.busy

    def test_select_tab(self):
        state = AppState()
        state.select_tab(Tab.REPORTS)
        assert state.active_tab == Tab.REPORTS

    def test_start_analysis_sets_busy(self):
        state = AppState(last_error="old error")
        state.start_analysis()
        assert state.busy
        assert state.status
        assert state.last_error is None

    def test_second_start_rejected(self):
        state = AppState()
        state.start_analysis()
        with pytest.raises(AnalysisInProgress):
            state.start_analysis()

    def test_succeeded_shows_result(self):
        state = AppState(active_tab=Tab.HISTORY)
        state.start_analysis()
        entry = make_entry(1)

        state.analysis_succeeded(entry)

        assert state.current_result == entry
        assert state.active_tab == Tab.RESULTS
        assert not state.busy
        assert state.status == ""

    def test_failed_keeps_previous_result(self):
        previous = make_entry(1)
        state = AppState(current_result=previous)
        state.start_analysis()

        state.analysis_failed("Model returned no JSON")

        assert state.current_result == previous
        assert not state.busy
        assert state.last_error == "Model returned no JSON"

    def test_view_entry(self):
        state = AppState(active_tab=Tab.HISTORY)
        entry = make_entry(5)
        state.view_entry(entry)
        assert state.current_result == entry
        assert state.active_tab == Tab.RESULTS
