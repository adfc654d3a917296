"""
Shared fixtures for HealScan AI tests.
"""

import io
from types import SimpleNamespace

import pytest
from PIL import Image

from healscan.models.schemas import AnalysisResult


class FakeModels:
    """Stands in for genai.Client().models."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_content(self, model, contents):
        self.calls.append({"model": model, "contents": contents})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.reply)


class FakeGenaiClient:
    """Minimal genai client returning a canned reply."""

    def __init__(self, reply=None, error=None):
        self.models = FakeModels(reply, error)


class FakeDocument:
    """Stands in for a rendered WeasyPrint document."""

    def __init__(self, pages=1):
        self.pages = [object() for _ in range(pages)]

    def copy(self, pages):
        document = FakeDocument(pages=0)
        document.pages = list(pages)
        return document

    def write_pdf(self):
        return b"%PDF-1.7 " + str(len(self.pages)).encode()


VALID_REPLY = (
    '{"type": "Cut", "stage": "Proliferative", "severity": 35,'
    ' "precautions": ["Keep it clean", "Avoid soaking"],'
    ' "meds": ["Antibiotic ointment", "Sterile bandage"]}'
)


@pytest.fixture
def png_bytes():
    """A small valid PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 64), color=(180, 40, 40)).save(buf, format="PNG")
    return buf.getvalue()


def make_entry(timestamp: int, **overrides) -> AnalysisResult:
    """Build a valid history entry."""
    fields = {
        "timestamp": timestamp,
        "image_url": "data:image/png;base64,AAAA",
        "age": 34,
        "age_group": "Adult",
        "type": "Burn",
        "stage": "Inflammatory",
        "severity": 40,
        "precautions": ["Do not apply ice"],
        "meds": ["Silver sulfadiazine"],
    }
    fields.update(overrides)
    return AnalysisResult(**fields)


@pytest.fixture
def entry_factory():
    return make_entry
