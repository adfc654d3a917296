"""
Pydantic schemas for HealScan AI.

Defines the wound assessment record, the persisted history entry,
and request/response models for the API endpoints.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, field_validator

MAX_LIST_ITEMS = 4


# =============================================================================
# Enums
# =============================================================================

class WoundType(str, Enum):
    """Wound classification vocabulary."""
    BURN = "Burn"
    CUT = "Cut"
    DIABETIC_FOOT_ULCER = "Diabetic Foot Ulcer"
    INFECTED_WOUND = "Infected Wound"
    OTHER = "Other"


class HealingStage(str, Enum):
    """Healing phase vocabulary."""
    INFLAMMATORY = "Inflammatory"
    PROLIFERATIVE = "Proliferative"
    MATURATION = "Maturation"
    UNKNOWN = "Unknown"


class AgeGroup(str, Enum):
    """Age buckets used to tailor advice."""
    CHILD = "Child"
    ADULT = "Adult"
    ELDERLY = "Elderly"
    ANY_AGE = "Any Age"


class Tab(str, Enum):
    """Views of the user-facing surface."""
    RESULTS = "results"
    HISTORY = "history"
    EXAMPLES = "examples"
    REPORTS = "reports"


# =============================================================================
# Analysis Results
# =============================================================================

class WoundAssessment(BaseModel):
    """Normalized assessment core returned by the analysis adapter."""

    type: WoundType = Field(
        default=WoundType.OTHER,
        description="Detected wound type"
    )
    stage: HealingStage = Field(
        default=HealingStage.UNKNOWN,
        description="Healing stage"
    )
    severity: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Overall severity considering risk (0-100)"
    )
    precautions: List[str] = Field(
        default_factory=list,
        max_length=MAX_LIST_ITEMS,
        description="Short do/don't precautions"
    )
    meds: List[str] = Field(
        default_factory=list,
        max_length=MAX_LIST_ITEMS,
        description="Care and medicine suggestions"
    )

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("precautions", "meds")
    @classmethod
    def _no_blank_entries(cls, value: List[str]) -> List[str]:
        if any(not item.strip() for item in value):
            raise ValueError("list entries must be non-empty strings")
        return value


class AnalysisResult(WoundAssessment):
    """One wound assessment tied to one user submission."""

    timestamp: int = Field(
        description="Creation instant in milliseconds since epoch"
    )
    image_url: str = Field(
        description="Data URL of the analyzed image (display only)"
    )
    age: Optional[int] = Field(
        default=None,
        ge=0,
        description="Patient age, absent when not supplied or not numeric"
    )
    age_group: Optional[AgeGroup] = Field(
        default=None,
        description="Age group derived when the record was created"
    )

    model_config = ConfigDict(use_enum_values=True, from_attributes=True)

    @property
    def created_at(self) -> datetime:
        """Local creation time."""
        return datetime.fromtimestamp(self.timestamp / 1000)


# =============================================================================
# Application State
# =============================================================================

class AppStateResponse(BaseModel):
    """Snapshot of the application state."""

    active_tab: Tab
    busy: bool
    status: str = ""
    last_error: Optional[str] = None
    current_result: Optional[AnalysisResult] = None
    history_size: int = 0


# =============================================================================
# Examples
# =============================================================================

class ExampleCase(BaseModel):
    """Static illustrative example shown without any analysis."""

    title: str
    image_url: str
    precautions: List[str]
    meds: List[str]


# =============================================================================
# Health & Status
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(description="Application version")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    inference_configured: bool = Field(
        default=False,
        description="Whether an inference API key is configured"
    )


# =============================================================================
# Error Responses
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(description="Error type")
    message: str = Field(description="Human-readable error message")
    error_code: str = Field(description="Machine-readable error code")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
