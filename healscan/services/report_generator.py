"""
PDF report generator for HealScan AI.

Lays out a single history entry as a one-page A4 wound report.
"""

from datetime import date
from typing import Any, Callable, Optional, Sequence

from jinja2 import Template

from healscan.models.schemas import AnalysisResult
from healscan.utils.logger import get_logger

logger = get_logger("report_generator")

REPORT_TITLE = "HealScan AI - Wound Report"
REPORT_DISCLAIMER = (
    "This summary is generated by HealScan AI for educational purposes. "
    "Always consult a qualified healthcare professional for diagnosis and treatment."
)


def report_filename(on: Optional[date] = None) -> str:
    """Download name for a report exported on the given date."""
    on = on or date.today()
    return f"healscan-report-{on.isoformat()}.pdf"


# Layout scale factors tried in order until the report fits one page
FIT_SCALES = (1.0, 0.9, 0.8, 0.7, 0.6, 0.5)


def scale_css(scale: float) -> str:
    """Stylesheet overriding font sizes and photo height by `scale`."""
    return f"""
    body {{ font-size: {11 * scale:.2f}pt; }}
    h1 {{ font-size: {20 * scale:.2f}pt; }}
    h2 {{ font-size: {13 * scale:.2f}pt; }}
    .disclaimer {{ font-size: {9 * scale:.2f}pt; }}
    .photo img {{ max-height: {110 * scale:.1f}mm; }}
    """


def fit_to_single_page(
    render: Callable[[float], Any],
    scales: Sequence[float] = FIT_SCALES
) -> Any:
    """
    Render at decreasing scales until the document has exactly one page.

    Args:
        render: Called with a scale factor, returns a rendered document
            exposing `pages` and `copy(pages)` (a WeasyPrint Document)
        scales: Scale factors to try, largest first

    Returns:
        A single-page document. If the smallest scale still overflows,
        only its first page is kept.
    """
    document = None
    for scale in scales:
        document = render(scale)
        if len(document.pages) <= 1:
            if scale != scales[0]:
                logger.info("Report shrunk to fit one page", scale=scale)
            return document

    logger.warning(
        "Report overflows at smallest scale, keeping first page",
        pages=len(document.pages)
    )
    return document.copy(document.pages[:1])


class ReportGenerator:
    """
    Generates one-page PDF wound reports.

    Uses an HTML template and WeasyPrint for PDF conversion. The page
    is A4 with a fixed 10mm top margin; the wound photo is scaled to
    fit the page width while keeping its aspect ratio and centered.
    Text and photo are shrunk together when the layout would spill
    onto a second page.
    """

    REPORT_CSS = """
    @page {
        size: A4;
        margin: 10mm 12mm 12mm 12mm;
    }

    body {
        font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
        font-size: 11pt;
        line-height: 1.5;
        color: #333;
    }

    h1 {
        text-align: center;
        color: #0066cc;
        font-size: 20pt;
        margin: 0 0 12px 0;
    }

    .meta {
        display: flex;
        justify-content: space-between;
        background: #f5f5f5;
        padding: 8px 12px;
        border-radius: 5px;
    }

    .meta span {
        color: #666;
        margin-right: 6px;
    }

    .photo {
        text-align: center;
        margin: 14px 0;
    }

    .photo img {
        max-width: 100%;
        max-height: 110mm;
        width: auto;
        height: auto;
        object-fit: contain;
    }

    .kv {
        border-bottom: 1px solid #eee;
        padding: 4px 0;
    }

    .kv span {
        display: inline-block;
        width: 90px;
        color: #666;
    }

    h2 {
        color: #0066cc;
        font-size: 13pt;
        margin: 14px 0 4px 0;
        border-bottom: 1px solid #ddd;
    }

    ul {
        margin: 0;
        padding-left: 20px;
    }

    .disclaimer {
        margin-top: 18px;
        padding: 10px;
        background: #fff3e0;
        border: 1px solid #ffcc80;
        border-radius: 5px;
        font-size: 9pt;
    }
    """

    TEMPLATE_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{{ title }}</title>
</head>
<body>
    <h1>{{ title }}</h1>

    <div class="meta">
        <div><span>Date</span><strong>{{ date }}</strong></div>
        <div><span>Time</span><strong>{{ time }}</strong></div>
        <div><span>Age</span><strong>{{ age }}</strong></div>
    </div>

    <div class="photo">
        <img alt="Wound" src="{{ image_url }}">
    </div>

    <div class="kv"><span>Type</span><strong>{{ type }}</strong></div>
    <div class="kv"><span>Stage</span><strong>{{ stage }}</strong></div>
    <div class="kv"><span>Severity</span><strong>{{ severity }}/100</strong></div>

    <h2>Precautions</h2>
    <ul>
        {% for item in precautions %}
        <li>{{ item }}</li>
        {% endfor %}
    </ul>

    <h2>Care &amp; Medicines</h2>
    <ul>
        {% for item in meds %}
        <li>{{ item }}</li>
        {% endfor %}
    </ul>

    <p class="disclaimer">{{ disclaimer }}</p>
</body>
</html>
"""

    def __init__(self):
        self.template = Template(self.TEMPLATE_HTML, autoescape=True)

    def _prepare_template_data(self, entry: AnalysisResult) -> dict:
        """Prepare data for template rendering."""
        created = entry.created_at
        return {
            "title": REPORT_TITLE,
            "date": created.strftime("%B %d, %Y"),
            "time": created.strftime("%I:%M %p"),
            "age": entry.age if entry.age is not None else "—",
            "image_url": entry.image_url,
            "type": entry.type,
            "stage": entry.stage,
            "severity": entry.severity,
            "precautions": entry.precautions,
            "meds": entry.meds,
            "disclaimer": REPORT_DISCLAIMER,
        }

    def render_html(self, entry: AnalysisResult) -> str:
        """Render the report layout as HTML."""
        return self.template.render(**self._prepare_template_data(entry))

    def render_document(self, entry: AnalysisResult) -> Any:
        """Lay out the report as a WeasyPrint document shrunk to one page."""
        # WeasyPrint needs Pango at import time, so it is loaded on first export
        from weasyprint import CSS, HTML

        html = HTML(string=self.render_html(entry))
        base = CSS(string=self.REPORT_CSS)

        def render(scale: float):
            return html.render(stylesheets=[base, CSS(string=scale_css(scale))])

        return fit_to_single_page(render)

    def generate_pdf(self, entry: AnalysisResult) -> bytes:
        """
        Generate a PDF report for a history entry.

        Nothing is written to disk; the caller streams the bytes.

        Args:
            entry: History entry to export

        Returns:
            PDF file content
        """
        logger.info("Generating PDF report", timestamp=entry.timestamp)

        pdf_bytes = self.render_document(entry).write_pdf()

        logger.info("PDF report generated", timestamp=entry.timestamp, size=len(pdf_bytes))
        return pdf_bytes


# Lazy-loaded singleton
_report_generator: Optional[ReportGenerator] = None


def get_report_generator() -> ReportGenerator:
    """Get or create report generator singleton."""
    global _report_generator
    if _report_generator is None:
        _report_generator = ReportGenerator()
    return _report_generator
