"""
Error taxonomy for HealScan AI.

Every failure on the analysis path is a HealScanError carrying a
human-readable message and a machine-readable error code, so the API
layer can surface it as a single message without inspecting types.
"""


class HealScanError(Exception):
    """Base class for expected application failures."""

    error_code = "HEALSCAN_ERROR"
    status_code = 500

    def __init__(self, message: str, error_code: str = None):
        self.message = message
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)


class ConfigurationError(HealScanError):
    """Inference credentials or settings are missing."""

    error_code = "CONFIGURATION_ERROR"
    status_code = 503


class AnalysisFailed(HealScanError):
    """The inference endpoint call failed."""

    error_code = "ANALYSIS_FAILED"
    status_code = 502


class NoJsonFound(HealScanError):
    """The model reply contained no {...} block."""

    error_code = "NO_JSON_FOUND"
    status_code = 502


class MalformedResponse(HealScanError):
    """The {...} block in the model reply is not valid JSON."""

    error_code = "MALFORMED_RESPONSE"
    status_code = 502


class AnalysisInProgress(HealScanError):
    """A second analysis was submitted while one is still running."""

    error_code = "ANALYSIS_IN_PROGRESS"
    status_code = 409


class HistoryWriteError(HealScanError):
    """The history could not be written to durable storage."""

    error_code = "HISTORY_WRITE_ERROR"
    status_code = 500
