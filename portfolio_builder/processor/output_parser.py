import json
import re

from portfolio_builder.processor.exceptions import MalformedModelOutput
from portfolio_builder.processor.models import StructuredResume

VALID_RESUME_TOKEN = "VALID_RESUME"


def strip_code_fence(text: str, label: str) -> str:
    """Return the body of the first ```<label> fenced block, or *text* unchanged."""
    match = re.search(rf"```{re.escape(label)}\n(.*?)\n```", text, re.DOTALL)
    return match.group(1) if match else text


def is_resume_verdict(response: str) -> bool:
    """The classifier accepts on substring match, not equality."""
    return VALID_RESUME_TOKEN in response


def parse_structured_resume(response: str) -> StructuredResume:
    """Unwrap an optional ```json fence and parse the result.

    Raises:
        MalformedModelOutput: if the unwrapped text is not valid JSON.
    """
    cleaned = strip_code_fence(response, "json")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedModelOutput(f"Structured resume is not valid JSON: {exc}") from exc


def extract_html(response: str) -> str:
    return strip_code_fence(response, "html")
