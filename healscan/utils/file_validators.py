"""
File validation utilities for HealScan AI.

Handles validation of uploaded wound photos:
- File size limits
- Image integrity (Pillow can open and verify it)
- MIME type detection
"""

import io
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from healscan.config import settings

FALLBACK_MIME_TYPE = "image/jpeg"


class FileValidationError(Exception):
    """Raised when file validation fails."""

    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class FileValidator:
    """
    Validates uploaded images for the HealScan AI system.

    Any image format Pillow understands is accepted; the wound
    photo is passed to the model as-is.
    """

    def __init__(self, max_file_size: Optional[int] = None):
        self.max_file_size = max_file_size or settings.max_file_size_bytes

    def validate_file_size(self, file_content: bytes, filename: str) -> bool:
        """
        Check if file is non-empty and within size limits.

        Raises:
            FileValidationError: If the file is empty or too large
        """
        if not file_content:
            raise FileValidationError(
                f"File '{filename}' is empty",
                error_code="EMPTY_FILE"
            )
        if len(file_content) > self.max_file_size:
            raise FileValidationError(
                f"File '{filename}' exceeds maximum size of "
                f"{self.max_file_size // (1024 * 1024)}MB",
                error_code="FILE_TOO_LARGE"
            )
        return True

    def detect_mime_type(
        self,
        file_content: bytes,
        declared_type: Optional[str] = None
    ) -> str:
        """
        Detect the MIME type of an image.

        Prefers the format Pillow reports, then the declared content
        type when it is an image type, then image/jpeg.
        """
        try:
            with Image.open(io.BytesIO(file_content)) as img:
                mime = Image.MIME.get(img.format or "")
        except (UnidentifiedImageError, OSError):
            mime = None

        if mime:
            return mime
        if declared_type and declared_type.startswith("image/"):
            return declared_type
        return FALLBACK_MIME_TYPE

    def validate_image(
        self,
        file_content: bytes,
        filename: str
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate a wound image.

        Args:
            file_content: Raw image bytes
            filename: Original filename

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            self.validate_file_size(file_content, filename)

            img = Image.open(io.BytesIO(file_content))
            img.verify()

            return True, None

        except FileValidationError as e:
            return False, e.message
        except Exception as e:
            return False, f"Image validation failed: {str(e)}"


# Singleton instance for easy access
file_validator = FileValidator()
