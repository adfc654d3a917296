"""
Image handling for HealScan AI.

Wraps an uploaded wound photo and converts it to the data URL stored
with each history record. The image is never re-encoded: the bytes
sent to the model are the bytes the user uploaded.
"""

import base64
from dataclasses import dataclass
from typing import Optional

from healscan.utils.file_validators import file_validator
from healscan.utils.logger import get_logger

logger = get_logger("image_processor")


@dataclass
class UploadedImage:
    """An uploaded wound photo."""

    content: bytes
    mime_type: str
    filename: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_url(self) -> str:
        """Encode the image as a data URL."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def load_upload(
    content: bytes,
    filename: Optional[str] = None,
    declared_type: Optional[str] = None
) -> UploadedImage:
    """
    Build an UploadedImage, resolving its MIME type from the content.

    Args:
        content: Raw image bytes
        filename: Original filename for logging
        declared_type: Content type sent by the client
    """
    mime_type = file_validator.detect_mime_type(content, declared_type)

    logger.info(
        "Image received",
        filename=filename,
        mime_type=mime_type,
        size=len(content)
    )

    return UploadedImage(content=content, mime_type=mime_type, filename=filename)
