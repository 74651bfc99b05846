import random
import string
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import PurePath

from portfolio_builder.ai.base import BaseModelProvider
from portfolio_builder.cache.history_store import HistoryStore
from portfolio_builder.cache.rate_limiter import RateLimiter
from portfolio_builder.captcha.verifier import RecaptchaVerifier
from portfolio_builder.logging.logger import Log
from portfolio_builder.pdf.base import BasePdfExtractor
from portfolio_builder.processor.exceptions import (
    CaptchaFailed,
    ExtractionFailed,
    MissingFile,
    NotAResume,
    TooLong,
    TooManyPages,
    TooManyRequests,
    TooShort,
    UnknownTemplate,
)
from portfolio_builder.processor.models import HistoryRecord, PortfolioArtifact
from portfolio_builder.processor.output_parser import (
    extract_html,
    is_resume_verdict,
    parse_structured_resume,
)
from portfolio_builder.processor.pipeline import PipelineContext, PipelineStep
from portfolio_builder.processor.prompt_builder import CREATIVE_VARIATIONS, TEMPLATE_IDS, PromptBuilder
from portfolio_builder.storage.base import BaseStorageProvider

METADATA_VERSION = "1.0.0"
DEFAULT_IMAGE_EXTENSION = "jpg"
_SEED_ALPHABET = string.ascii_lowercase + string.digits


class RateLimitStep(PipelineStep):
    def __init__(self, rate_limiter: RateLimiter) -> None:
        self._rate_limiter = rate_limiter

    def run(self, context: PipelineContext) -> PipelineContext:
        if not self._rate_limiter.allow(context.request.client_id):
            Log.warning(f"Rate limit exceeded for {context.request.client_id}")
            raise TooManyRequests("Too many requests. Please try again later.")
        return context


class CaptchaStep(PipelineStep):
    def __init__(self, verifier: RecaptchaVerifier) -> None:
        self._verifier = verifier

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if not self._verifier.verify(request.captcha_token, remote_ip=request.client_id):
            raise CaptchaFailed("reCAPTCHA verification failed.")
        return context


class RequireFileStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.request.pdf_bytes:
            raise MissingFile("No file uploaded.")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._pdf_extractor.extract(context.request.pdf_bytes or b"")
        if not document.text:
            raise ExtractionFailed("Could not extract text from PDF.")
        context.document = document
        Log.info(
            f"Extracted {len(document.text)} chars from {document.page_count} pages "
            f"of {context.request.file_name}"
        )
        return context


class PreValidateStep(PipelineStep):
    """Cheap checks that reject obvious non-resumes before any model call."""

    def __init__(
        self,
        *,
        min_chars: int,
        max_pages: int,
        char_ceiling: Callable[[str], int],
        template_ids: Sequence[str] = TEMPLATE_IDS,
    ) -> None:
        self._min_chars = min_chars
        self._max_pages = max_pages
        self._char_ceiling = char_ceiling
        self._template_ids = template_ids

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before pre-validation")
        template_id = context.request.template_id
        text_length = len(context.document.text.strip())

        if text_length < self._min_chars:
            raise TooShort(
                "The PDF content is too short to be a resume. "
                "Please upload a complete resume document."
            )
        if context.document.page_count > self._max_pages:
            raise TooManyPages(
                f"The PDF is too long to be a resume (max {self._max_pages} pages). "
                "Resumes should be concise and focused."
            )
        if text_length > self._char_ceiling(template_id):
            raise TooLong(
                "The PDF contains too much text to be a resume. "
                "Please upload a standard 1-5 page resume."
            )
        if template_id not in self._template_ids:
            raise UnknownTemplate(
                f"Unknown template '{template_id}'. Choose from: {list(self._template_ids)}"
            )
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, model: BaseModelProvider, prompts: PromptBuilder) -> None:
        self._model = model
        self._prompts = prompts

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before classification")
        verdict = self._model.generate_text(self._prompts.classification(context.document.text))
        Log.debug(f"Classifier verdict: {verdict!r}")
        if not is_resume_verdict(verdict):
            raise NotAResume(
                "The uploaded PDF doesn't appear to be a resume or CV. "
                "Please upload a valid resume document."
            )
        return context


class StructureStep(PipelineStep):
    def __init__(self, model: BaseModelProvider, prompts: PromptBuilder) -> None:
        self._model = model
        self._prompts = prompts

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before structuring")
        raw = self._model.generate_text(self._prompts.structuring(context.document.text))
        Log.debug(f"Structuring raw response:\n{raw}")
        context.structured_resume = parse_structured_resume(raw)
        return context


class StageImageStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if not request.has_image:
            return context
        suffix = PurePath(request.image_file_name or "").suffix.lstrip(".").lower()
        context.image_extension = suffix if suffix.isalnum() else DEFAULT_IMAGE_EXTENSION
        return context


class AllocatePortfolioStep(PipelineStep):
    def __init__(self, id_factory: Callable[[], uuid.UUID] = uuid.uuid4) -> None:
        self._id_factory = id_factory

    def run(self, context: PipelineContext) -> PipelineContext:
        context.portfolio_id = self._id_factory()
        context.created_at = (
            datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        )
        Log.info(f"Allocated portfolio {context.portfolio_id}")
        return context


class UploadImageStep(PipelineStep):
    """Uploads the profile image ahead of rendering so the prompt can use its final URL."""

    def __init__(self, storage: BaseStorageProvider) -> None:
        self._storage = storage

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if context.image_extension is None or not request.profile_image_bytes:
            return context
        asset_name = f"profile.{context.image_extension}"
        context.image_url = self._storage.upload_file(
            f"{context.portfolio_prefix}/assets/{asset_name}",
            request.profile_image_bytes,
            request.image_content_type or "application/octet-stream",
        )
        context.assets.append(asset_name)
        Log.info(f"Uploaded {asset_name} for portfolio {context.portfolio_id}")
        return context


class RenderStep(PipelineStep):
    def __init__(
        self,
        model: BaseModelProvider,
        prompts: PromptBuilder,
        rng: random.Random | None = None,
        variations: Sequence[str] = CREATIVE_VARIATIONS,
    ) -> None:
        self._model = model
        self._prompts = prompts
        self._rng = rng or random.Random()
        self._variations = variations

    def run(self, context: PipelineContext) -> PipelineContext:
        seed = "".join(self._rng.choices(_SEED_ALPHABET, k=6))
        prompt = self._prompts.rendering(
            resume=context.structured_resume,
            template_id=context.request.template_id,
            variation=self._rng.choice(self._variations),
            seed=seed,
            image_url=context.image_url,
        )
        context.html = extract_html(self._model.generate_text(prompt))
        Log.info(f"Rendered {len(context.html)} chars of HTML (seed {seed})")
        return context


class PersistHtmlStep(PipelineStep):
    def __init__(self, storage: BaseStorageProvider) -> None:
        self._storage = storage

    def run(self, context: PipelineContext) -> PipelineContext:
        context.html_url = self._storage.upload_file(
            f"{context.portfolio_prefix}/index.html",
            context.html,
            "text/html",
        )
        return context


class PersistMetadataStep(PipelineStep):
    def __init__(self, storage: BaseStorageProvider) -> None:
        self._storage = storage

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        metadata = {
            "id": str(context.portfolio_id),
            "createdAt": context.created_at,
            "template": request.template_id,
            "version": METADATA_VERSION,
            "clientId": request.client_id,
            "assets": list(context.assets),
            "hasImage": context.image_url is not None,
            "fileName": request.file_name,
            "storageProviderName": self._storage.name(),
        }
        context.metadata_url = self._storage.upload_json(
            f"{context.portfolio_prefix}/metadata.json", metadata
        )
        Log.info(f"Stored portfolio {context.portfolio_id} at {context.html_url}")
        return context


class RecordHistoryStep(PipelineStep):
    def __init__(self, history_store: HistoryStore) -> None:
        self._history_store = history_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.portfolio_id is None:
            raise ValueError("PipelineContext.portfolio_id must be set before recording history")
        request = context.request
        context.artifact = PortfolioArtifact(
            id=context.portfolio_id,
            html_url=context.html_url,
            metadata_url=context.metadata_url,
            template=request.template_id,
            created_at=context.created_at,
            client_id=request.client_id,
            file_name=request.file_name,
            image_url=context.image_url,
            assets=list(context.assets),
        )
        self._history_store.append(request.client_id, HistoryRecord.from_artifact(context.artifact))
        return context


class LogFailedStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.portfolio_id is not None:
            Log.error(
                f"Generation for {context.request.client_id} failed after allocating "
                f"portfolio {context.portfolio_id}: {context.error_message}"
            )
        else:
            Log.error(f"Generation for {context.request.client_id} failed: {context.error_message}")
        return context
