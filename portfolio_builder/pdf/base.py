from abc import ABC, abstractmethod

from portfolio_builder.pdf.models import ExtractedDocument


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> ExtractedDocument:
        """Extract plain text and page count from PDF bytes.

        Pages are joined with a newline; text fragments within a page are
        joined with a single space. Both engines return the text layer as
        written, so fragments are kept verbatim.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            ExtractedDocument with the joined text and the number of pages.
            Text is empty when the PDF has no text layer.

        Raises:
            PdfExtractionError: if the PDF cannot be read.
        """

    @staticmethod
    def _join_page(fragments: list[str]) -> str:
        return " ".join(fragment for fragment in fragments if fragment)
