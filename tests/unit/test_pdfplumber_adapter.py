import pytest

from portfolio_builder.pdf.exceptions import PdfExtractionError
from portfolio_builder.pdf.models import ExtractedDocument
from portfolio_builder.pdf.pdfplumber_adapter import PdfPlumberAdapter


class TestPdfPlumberAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(sample_pdf_bytes)
        assert isinstance(result, ExtractedDocument)
        assert result.text == "Hello PDF World"
        assert result.page_count == 1

    def test_extract_multi_page_joins_pages_with_newline(self, multi_page_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(multi_page_pdf_bytes)
        assert result.text == "Page one content\nPage two content"
        assert result.page_count == 2

    def test_extract_empty_pdf_returns_empty_text(self, empty_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(empty_pdf_bytes)
        assert result.text == ""
        assert result.page_count == 1

    def test_extract_counts_every_page(self, eleven_page_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(eleven_page_pdf_bytes)
        assert result.page_count == 11

    def test_extract_keeps_literal_percent_text(self, percent_text_pdf_bytes: bytes) -> None:
        result = PdfPlumberAdapter().extract(percent_text_pdf_bytes)
        assert result.text == "Coupon SAVE%20NOW and url a%2Fb and 100%AB"

    def test_extract_raises_on_invalid_bytes(self) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(PdfExtractionError):
            adapter.extract(b"not a pdf")

    def test_extract_result_is_stripped(self, sample_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(sample_pdf_bytes)
        assert result.text == result.text.strip()


class TestJoinPage:
    def test_literal_percent_sequences_are_kept(self) -> None:
        assert PdfPlumberAdapter._join_page(["Jane%20Doe", "C%2B%2B"]) == "Jane%20Doe C%2B%2B"

    def test_empty_fragments_are_skipped(self) -> None:
        assert PdfPlumberAdapter._join_page(["a", "", "b"]) == "a b"
