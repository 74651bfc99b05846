import pymupdf

from portfolio_builder.pdf.base import BasePdfExtractor
from portfolio_builder.pdf.exceptions import PdfExtractionError
from portfolio_builder.pdf.models import ExtractedDocument


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    # Index of the word string in tuples returned by page.get_text("words")
    _WORD_INDEX = 4

    def extract(self, pdf_bytes: bytes) -> ExtractedDocument:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [
                    self._join_page([word[self._WORD_INDEX] for word in page.get_text("words")])
                    for page in doc
                ]
            return ExtractedDocument(text="\n".join(pages).strip(), page_count=len(pages))
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
