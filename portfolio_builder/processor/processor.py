import random
from collections.abc import Sequence

from portfolio_builder.ai.base import BaseModelProvider
from portfolio_builder.ai.factory import ModelProviderFactory
from portfolio_builder.cache.base import BaseKeyValueStore
from portfolio_builder.cache.factory import KeyValueStoreFactory
from portfolio_builder.cache.history_store import HistoryStore
from portfolio_builder.cache.rate_limiter import RateLimiter
from portfolio_builder.captcha.verifier import RecaptchaVerifier
from portfolio_builder.config.settings import Settings
from portfolio_builder.logging.logger import Log
from portfolio_builder.pdf.base import BasePdfExtractor
from portfolio_builder.pdf.factory import PdfExtractorFactory
from portfolio_builder.processor.models import GenerationRequest, PortfolioArtifact
from portfolio_builder.processor.pipeline import PipelineContext, PipelineStep
from portfolio_builder.processor.prompt_builder import PromptBuilder
from portfolio_builder.processor.steps import (
    AllocatePortfolioStep,
    CaptchaStep,
    ClassifyStep,
    ExtractTextStep,
    LogFailedStep,
    PersistHtmlStep,
    PersistMetadataStep,
    PreValidateStep,
    RateLimitStep,
    RecordHistoryStep,
    RenderStep,
    RequireFileStep,
    StageImageStep,
    StructureStep,
    UploadImageStep,
)
from portfolio_builder.storage.base import BaseStorageProvider
from portfolio_builder.storage.factory import StorageProviderFactory


class Processor:
    """Runs the generation pipeline for one request.

    Pipeline: admit -> extract -> pre-validate -> classify -> structure ->
    upload image -> render -> persist -> record history. Steps run strictly
    in order; the first failure aborts the run and is re-raised.
    """

    def __init__(
        self,
        steps: Sequence[PipelineStep],
        failed_step: PipelineStep | None = None,
    ) -> None:
        self._steps = list(steps)
        self._failed_step = failed_step

    def process(self, request: GenerationRequest) -> PortfolioArtifact:
        """Run every step and return the stored portfolio."""
        Log.info(
            f"Generating portfolio for {request.client_id} "
            f"(template {request.template_id}, image: {request.has_image})"
        )
        context = PipelineContext(request=request)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            if self._failed_step is not None:
                self._failed_step.run(context)
            raise

        if context.artifact is None:
            raise RuntimeError("Pipeline finished without producing a portfolio")
        return context.artifact


def build_steps(
    *,
    settings: Settings,
    model: BaseModelProvider,
    storage: BaseStorageProvider,
    pdf_extractor: BasePdfExtractor,
    rate_limiter: RateLimiter,
    history_store: HistoryStore,
    captcha_verifier: RecaptchaVerifier,
    prompts: PromptBuilder | None = None,
    rng: random.Random | None = None,
) -> list[PipelineStep]:
    """Assemble the pipeline in execution order."""
    prompts = prompts or PromptBuilder()
    return [
        RateLimitStep(rate_limiter),
        CaptchaStep(captcha_verifier),
        RequireFileStep(),
        ExtractTextStep(pdf_extractor),
        PreValidateStep(
            min_chars=settings.min_resume_chars,
            max_pages=settings.max_resume_pages,
            char_ceiling=settings.resume_char_ceiling,
        ),
        ClassifyStep(model, prompts),
        StructureStep(model, prompts),
        StageImageStep(),
        AllocatePortfolioStep(),
        UploadImageStep(storage),
        RenderStep(model, prompts, rng=rng),
        PersistHtmlStep(storage),
        PersistMetadataStep(storage),
        RecordHistoryStep(history_store),
    ]


def build_history_store(settings: Settings, store: BaseKeyValueStore) -> HistoryStore:
    return HistoryStore(
        store,
        max_entries=settings.history_max_entries,
        ttl_seconds=settings.history_ttl_seconds,
    )


def build_processor(
    settings: Settings,
    kv_store: BaseKeyValueStore | None = None,
    storage: BaseStorageProvider | None = None,
) -> Processor:
    """Build a Processor with all adapters chosen by settings.

    Pass *kv_store* and *storage* to share them with other consumers.

    Raises:
        ValueError: if a selected backend is unknown or misses credentials.
    """
    kv_store = kv_store or KeyValueStoreFactory.create(settings)
    storage = storage or StorageProviderFactory.create(settings)
    model = ModelProviderFactory.create(settings)
    Log.info(f"Using AI provider: {model.name()}")
    Log.info(f"Using storage provider: {storage.name()}")
    steps = build_steps(
        settings=settings,
        model=model,
        storage=storage,
        pdf_extractor=PdfExtractorFactory.create(settings),
        rate_limiter=RateLimiter(
            kv_store,
            limit=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        history_store=build_history_store(settings, kv_store),
        captcha_verifier=RecaptchaVerifier(
            secret_key=settings.recaptcha_secret_key,
            verify_url=settings.recaptcha_verify_url,
            timeout_seconds=settings.recaptcha_timeout_seconds,
        ),
    )
    return Processor(steps=steps, failed_step=LogFailedStep())
