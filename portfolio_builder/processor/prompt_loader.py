from pathlib import Path

from portfolio_builder.processor.exceptions import PromptTemplateError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, prompt_dir: Path | None = None) -> str:
    """Load a prompt template by file stem.

    Args:
        name: Template stem, e.g. "classification_prompt".
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled prompts directory.

    Returns:
        The raw template string with placeholders.

    Raises:
        PromptTemplateError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load prompt template: {exc}") from exc


def load_template_style(template_id: str, prompt_dir: Path | None = None) -> str:
    """Load the style guidance block for a portfolio template.

    Raises:
        PromptTemplateError: if the template has no style file.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / "styles" / f"{template_id}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load template style: {exc}") from exc
