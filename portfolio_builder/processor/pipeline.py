from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from uuid import UUID

from portfolio_builder.pdf.models import ExtractedDocument
from portfolio_builder.processor.models import (
    GenerationRequest,
    PortfolioArtifact,
    StructuredResume,
)


@dataclass(slots=True)
class PipelineContext:
    request: GenerationRequest
    document: ExtractedDocument | None = None
    structured_resume: StructuredResume = None
    image_extension: str | None = None
    portfolio_id: UUID | None = None
    created_at: str = ""
    assets: list[str] = field(default_factory=list)
    image_url: str | None = None
    html: str = ""
    html_url: str = ""
    metadata_url: str = ""
    artifact: PortfolioArtifact | None = None
    error_message: str = ""

    @property
    def portfolio_prefix(self) -> str:
        if self.portfolio_id is None:
            raise ValueError("PipelineContext.portfolio_id must be set before building paths")
        return f"portfolios/{self.portfolio_id}"


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
