"""
HealScan - Gemini Vision Client

Sends a wound photo and an instruction prompt to the Gemini multimodal
model and turns the reply into a normalized WoundAssessment.

IMPORTANT: This module does not provide medical diagnoses.
All outputs require review by qualified healthcare professionals.
"""

from typing import Any, Optional

from google import genai
from google.genai import types

from healscan.config import settings
from healscan.core.errors import AnalysisFailed, ConfigurationError
from healscan.core.response_parser import parse_model_response
from healscan.models.schemas import WoundAssessment
from healscan.utils.logger import get_logger

logger = get_logger("gemini_client")

DEFAULT_MIME_TYPE = "image/jpeg"


def build_prompt(age: Optional[int] = None) -> str:
    """Build the instruction prompt for the vision model."""
    age_text = age if age is not None else "unknown"
    return f"""You are HealScan AI, a wound recognition assistant. Analyze the wound in the image and respond ONLY in valid JSON matching this schema:
{{
  "type": "string (one of: Burn, Cut, Diabetic Foot Ulcer, Infected Wound, Other)",
  "stage": "string (Inflammatory | Proliferative | Maturation | Unknown)",
  "severity": "integer 0-100 (overall severity considering risk)",
  "precautions": ["3-4 concise bullet points"],
  "meds": ["3-4 concise, non-repetitive care and medicine suggestions"]
}}
Age of patient: {age_text}. Tailor advice to age group: Child (<=12), Adult (13-59), Elderly (>=60). Avoid duplicates. No prose outside JSON."""


class GeminiVisionClient:
    """
    Single-request adapter over the Gemini multimodal API.

    One attempt per analysis, no retries. The request timeout is
    optional; when unset the call waits until the endpoint answers.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[Any] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: Gemini API key (defaults to settings.gemini_api_key)
            model: Model name (defaults to settings.gemini_model)
            timeout_seconds: Optional request timeout
            client: Pre-built genai client, mainly for tests
        """
        self.api_key = settings.gemini_api_key if api_key is None else api_key
        self.model = model or settings.gemini_model
        self.timeout_seconds = (
            settings.request_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> Any:
        """Create the SDK client on first use."""
        if self._client is not None:
            return self._client

        if not self.api_key:
            raise ConfigurationError(
                "Missing GEMINI_API_KEY. Set it in the environment or .env file."
            )

        http_options = None
        if self.timeout_seconds:
            http_options = types.HttpOptions(timeout=int(self.timeout_seconds * 1000))

        self._client = genai.Client(api_key=self.api_key, http_options=http_options)
        logger.info("Gemini client initialized", model=self.model)
        return self._client

    def analyze(
        self,
        image_bytes: bytes,
        mime_type: Optional[str] = None,
        age: Optional[int] = None
    ) -> WoundAssessment:
        """
        Analyze a wound image.

        Args:
            image_bytes: Raw image bytes
            mime_type: Image MIME type (defaults to image/jpeg)
            age: Patient age, or None when unknown

        Returns:
            Normalized WoundAssessment

        Raises:
            ConfigurationError: no API key configured
            AnalysisFailed: the request to Gemini failed
            NoJsonFound / MalformedResponse: the reply could not be parsed
        """
        client = self._get_client()
        prompt = build_prompt(age)
        mime_type = mime_type or DEFAULT_MIME_TYPE

        logger.info(
            "Sending image for analysis",
            model=self.model,
            mime_type=mime_type,
            size=len(image_bytes),
            age=age
        )

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=[
                    prompt,
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                ]
            )
            text = response.text or ""
        except Exception as e:
            logger.error("Gemini request failed", error=str(e))
            raise AnalysisFailed(f"Analysis failed: {e}") from e

        assessment = parse_model_response(text)

        logger.info(
            "Model reply parsed",
            type=assessment.type,
            stage=assessment.stage,
            severity=assessment.severity
        )
        return assessment


# Module-level singleton
_client_instance: Optional[GeminiVisionClient] = None


def get_vision_client() -> GeminiVisionClient:
    """Get or create singleton client instance."""
    global _client_instance
    if _client_instance is None:
        _client_instance = GeminiVisionClient()
    return _client_instance
