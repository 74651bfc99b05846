from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedDocument:
    """Plain text pulled out of a PDF, with its page count."""

    text: str
    page_count: int
