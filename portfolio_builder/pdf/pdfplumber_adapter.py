import io

import pdfplumber

from portfolio_builder.pdf.base import BasePdfExtractor
from portfolio_builder.pdf.exceptions import PdfExtractionError
from portfolio_builder.pdf.models import ExtractedDocument


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> ExtractedDocument:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [
                    self._join_page([word["text"] for word in page.extract_words()])
                    for page in pdf.pages
                ]
            return ExtractedDocument(text="\n".join(pages).strip(), page_count=len(pages))
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
