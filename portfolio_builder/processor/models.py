from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

# Parsed output of the structuring call. Only JSON syntax is guaranteed;
# the expected keys are personalInfo, summary, workExperience, education,
# skills and projects.
StructuredResume = Any


@dataclass(frozen=True)
class GenerationRequest:
    """One upload as received by the HTTP layer."""

    pdf_bytes: bytes | None
    file_name: str
    template_id: str
    captcha_token: str
    client_id: str
    profile_image_bytes: bytes | None = None
    image_file_name: str | None = None
    image_content_type: str | None = None

    @property
    def has_image(self) -> bool:
        return bool(self.profile_image_bytes)


@dataclass(frozen=True)
class PortfolioArtifact:
    """A generated portfolio and where its files live."""

    id: UUID
    html_url: str
    metadata_url: str
    template: str
    created_at: str
    client_id: str
    file_name: str
    image_url: str | None = None
    assets: list[str] = field(default_factory=list)

    @property
    def has_image(self) -> bool:
        return self.image_url is not None


@dataclass(frozen=True)
class HistoryRecord:
    """Entry in a client's portfolio history."""

    id: str
    url: str
    template: str
    created_at: str
    file_name: str
    has_image: bool

    @classmethod
    def from_artifact(cls, artifact: PortfolioArtifact) -> "HistoryRecord":
        return cls(
            id=str(artifact.id),
            url=artifact.html_url,
            template=artifact.template,
            created_at=artifact.created_at,
            file_name=artifact.file_name,
            has_image=artifact.has_image,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "template": self.template,
            "createdAt": self.created_at,
            "fileName": self.file_name,
            "hasImage": self.has_image,
        }
