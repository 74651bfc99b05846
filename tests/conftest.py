import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from portfolio_builder.config.settings import Settings

RESUME_LINES = [
    "Jane Doe - Senior Software Engineer",
    "jane.doe@example.com | github.com/janedoe",
    "Experience: Acme Corp, Backend Engineer, 2019 - Present",
    "Built payment services in Python and PostgreSQL",
    "Education: State University, BSc Computer Science, 2015 - 2019",
    "Skills: Python, FastAPI, Docker, Kubernetes, AWS",
]


def _pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _pdf([[]])


@pytest.fixture()
def percent_text_pdf_bytes() -> bytes:
    """Text that contains literal percent sequences."""
    return _pdf([["Coupon SAVE%20NOW and url a%2Fb and 100%AB"]])


@pytest.fixture()
def resume_pdf_bytes() -> bytes:
    """Single-page resume with a few hundred characters of text."""
    return _pdf([RESUME_LINES])


@pytest.fixture()
def eleven_page_pdf_bytes() -> bytes:
    """Resume-looking text spread over eleven pages."""
    return _pdf([RESUME_LINES for _ in range(11)])


@pytest.fixture()
def settings() -> Settings:
    return Settings(recaptcha_secret_key="test-secret", _env_file=None)
