"""
Tests for the PDF report generator.
"""

import base64
from datetime import date

import pytest

from conftest import FakeDocument, make_entry
from healscan.services.report_generator import (
    FIT_SCALES,
    REPORT_DISCLAIMER,
    ReportGenerator,
    fit_to_single_page,
    report_filename,
    scale_css,
)


def weasyprint_available() -> bool:
    # importing weasyprint fails with OSError when Pango is missing
    try:
        import weasyprint  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


class TestReportLayout:
    """HTML layout of the report."""

    def test_contains_all_sections(self):
        entry = make_entry(
            1_700_000_000_000,
            age=67,
            type="Diabetic Foot Ulcer",
            stage="Proliferative",
            severity=72,
            precautions=["Never walk barefoot", "Monitor blood sugar"],
            meds=["Medicated dressings"],
        )
        html = ReportGenerator().render_html(entry)

        assert "HealScan AI - Wound Report" in html
        assert "Diabetic Foot Ulcer" in html
        assert "Proliferative" in html
        assert "72/100" in html
        assert "Never walk barefoot" in html
        assert "Medicated dressings" in html
        assert ">67<" in html
        assert entry.image_url in html
        assert REPORT_DISCLAIMER in html
        assert entry.created_at.strftime("%B %d, %Y") in html

    def test_missing_age_shown_as_dash(self):
        html = ReportGenerator().render_html(make_entry(1, age=None))
        assert ">—<" in html

    def test_model_text_is_escaped(self):
        entry = make_entry(1, precautions=["<script>alert(1)</script>"])
        html = ReportGenerator().render_html(entry)
        assert "<script>" not in html

    def test_page_layout_css(self):
        css = ReportGenerator.REPORT_CSS
        assert "size: A4" in css
        assert "margin: 10mm" in css
        assert "object-fit: contain" in css

    def test_scale_css_shrinks_text_and_photo(self):
        css = scale_css(0.5)
        assert "font-size: 5.50pt" in css
        assert "max-height: 55.0mm" in css


class TestFitToSinglePage:
    """Shrinking the layout until it fits one page."""

    def test_short_report_rendered_once(self):
        scales = []

        def render(scale):
            scales.append(scale)
            return FakeDocument(pages=1)

        document = fit_to_single_page(render)

        assert len(document.pages) == 1
        assert scales == [1.0]

    def test_long_report_shrunk_until_one_page(self):
        scales = []

        def render(scale):
            scales.append(scale)
            return FakeDocument(pages=3 if scale > 0.7 else 1)

        document = fit_to_single_page(render)

        assert len(document.pages) == 1
        assert scales == [1.0, 0.9, 0.8, 0.7]

    def test_overflow_at_smallest_scale_keeps_first_page(self):
        scales = []

        def render(scale):
            scales.append(scale)
            return FakeDocument(pages=2)

        document = fit_to_single_page(render)

        assert len(document.pages) == 1
        assert scales == list(FIT_SCALES)


class TestGeneratePdf:

    def test_returns_bytes_of_fitted_document(self, monkeypatch):
        rendered = []

        def fake_render(self, entry):
            rendered.append(entry.timestamp)
            return FakeDocument(pages=1)

        monkeypatch.setattr(ReportGenerator, "render_document", fake_render)

        pdf = ReportGenerator().generate_pdf(make_entry(1_700_000_000_000))

        assert pdf.startswith(b"%PDF")
        assert rendered == [1_700_000_000_000]

    def test_nothing_written_to_disk(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            ReportGenerator, "render_document", lambda self, entry: FakeDocument(pages=1)
        )
        monkeypatch.chdir(tmp_path)

        ReportGenerator().generate_pdf(make_entry(1))

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.skipif(not weasyprint_available(), reason="WeasyPrint not available")
    def test_long_content_fits_one_page(self, png_bytes):
        long_item = "Keep the dressing dry and change it twice a day. " * 12
        entry = make_entry(
            1_700_000_000_000,
            image_url="data:image/png;base64," + base64.b64encode(png_bytes).decode(),
            precautions=[long_item] * 4,
            meds=[long_item] * 4,
        )
        generator = ReportGenerator()

        document = generator.render_document(entry)

        assert len(document.pages) == 1
        assert generator.generate_pdf(entry).startswith(b"%PDF")


class TestReportFilename:

    def test_named_with_date(self):
        assert report_filename(date(2026, 3, 9)) == "healscan-report-2026-03-09.pdf"

    def test_defaults_to_today(self):
        assert report_filename() == f"healscan-report-{date.today().isoformat()}.pdf"
