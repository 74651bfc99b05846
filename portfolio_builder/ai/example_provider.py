"""Example model provider.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelProvider and register the provider in ModelProviderFactory.
"""

import itertools
import json
from collections.abc import Sequence
from typing import ClassVar

from portfolio_builder.ai.base import BaseModelProvider


class ExampleModelProvider(BaseModelProvider):
    """Offline provider that replays canned responses in order.

    No network calls. The default script answers one full pipeline run
    (classify, structure, render) and then starts over, which makes it
    usable for local development and for tests.
    """

    DEFAULT_STRUCTURED_RESUME: ClassVar[dict[str, object]] = {
        "personalInfo": {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "",
            "linkedin": "",
            "github": "",
        },
        "summary": "Software engineer.",
        "workExperience": [],
        "education": [],
        "skills": ["Python"],
        "projects": [],
    }

    DEFAULT_HTML: ClassVar[str] = (
        "<!DOCTYPE html>\n<html><head><title>Jane Doe</title></head>"
        "<body><h1>Jane Doe</h1></body></html>"
    )

    def __init__(self, responses: Sequence[str] | None = None) -> None:
        if responses is None:
            responses = [
                "VALID_RESUME",
                "```json\n" + json.dumps(self.DEFAULT_STRUCTURED_RESUME, indent=2) + "\n```",
                "```html\n" + self.DEFAULT_HTML + "\n```",
            ]
        if not responses:
            raise ValueError("ExampleModelProvider needs at least one response")
        self._responses = itertools.cycle(list(responses))
        self.prompts: list[str] = []

    def name(self) -> str:
        return "Example"

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return next(self._responses)
