import pytest

from portfolio_builder.pdf.exceptions import PdfExtractionError
from portfolio_builder.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPyMuPdfAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(sample_pdf_bytes)
        assert result.text == "Hello PDF World"
        assert result.page_count == 1

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(multi_page_pdf_bytes)
        assert result.text == "Page one content\nPage two content"
        assert result.page_count == 2

    def test_extract_empty_pdf_returns_empty_text(self, empty_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(empty_pdf_bytes)
        assert result.text == ""

    def test_extract_keeps_literal_percent_text(self, percent_text_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(percent_text_pdf_bytes)
        assert result.text == "Coupon SAVE%20NOW and url a%2Fb and 100%AB"

    def test_extract_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError):
            PyMuPdfAdapter().extract(b"not a pdf")
