"""Prompt construction for the classify, structure and render model calls."""

import json
from pathlib import Path

from portfolio_builder.processor.models import StructuredResume
from portfolio_builder.processor.prompt_loader import load_prompt_template, load_template_style

TEMPLATE_IDS: tuple[str, ...] = (
    "elegant-serif",
    "neo-brutalism",
    "minimal-cards",
    "dark-modern",
    "fluid-gradient",
    "bento-grid",
)
DEFAULT_TEMPLATE_ID = "elegant-serif"

CLASSIFICATION_EXCERPT_CHARS = 2000

CREATIVE_VARIATIONS: tuple[str, ...] = (
    "Experiment with unique color combinations and unexpected typography choices.",
    "Try an unconventional layout approach that breaks traditional design patterns.",
    "Focus on creating a memorable visual identity through distinctive design elements.",
    "Push creative boundaries with bold design decisions and artistic flair.",
    "Create a unique interpretation that stands out from typical portfolio websites.",
)


class PromptBuilder:
    """Fills the bundled prompt templates. Pure: no randomness, no I/O after init."""

    def __init__(self, prompt_dir: Path | None = None) -> None:
        self._prompt_dir = prompt_dir
        self._classification = load_prompt_template("classification_prompt", prompt_dir)
        self._structuring = load_prompt_template("structuring_prompt", prompt_dir)
        self._rendering = load_prompt_template("rendering_prompt", prompt_dir)
        self._image_provided = load_prompt_template("image_provided", prompt_dir)
        self._image_absent = load_prompt_template("image_absent", prompt_dir)
        self._styles = {
            template_id: load_template_style(template_id, prompt_dir)
            for template_id in TEMPLATE_IDS
        }

    def classification(self, text: str) -> str:
        return self._classification.format(
            document_text=text[:CLASSIFICATION_EXCERPT_CHARS]
        )

    def structuring(self, text: str) -> str:
        return self._structuring.format(resume_text=text)

    def rendering(
        self,
        *,
        resume: StructuredResume,
        template_id: str,
        variation: str,
        seed: str,
        image_url: str | None,
    ) -> str:
        if image_url:
            image_instructions = self._image_provided.format(image_url=image_url)
        else:
            image_instructions = self._image_absent
        return self._rendering.format(
            variation=variation,
            seed=seed,
            template=template_id,
            template_style=self._styles[template_id],
            image_instructions=image_instructions.strip(),
            resume_json=json.dumps(resume, indent=2, ensure_ascii=False),
        )
