import json

import pytest

from portfolio_builder.ai.example_provider import ExampleModelProvider
from portfolio_builder.processor.output_parser import (
    extract_html,
    is_resume_verdict,
    parse_structured_resume,
)


class TestExampleModelProvider:
    def test_default_script_answers_one_pipeline_run(self) -> None:
        provider = ExampleModelProvider()
        assert is_resume_verdict(provider.generate_text("classify"))
        resume = parse_structured_resume(provider.generate_text("structure"))
        assert resume["personalInfo"]["name"] == "Jane Doe"
        assert extract_html(provider.generate_text("render")).startswith("<!DOCTYPE html>")

    def test_cycles_responses(self) -> None:
        provider = ExampleModelProvider(responses=["a", "b"])
        assert [provider.generate_text("p") for _ in range(3)] == ["a", "b", "a"]

    def test_records_prompts(self) -> None:
        provider = ExampleModelProvider(responses=["x"])
        provider.generate_text("first")
        provider.generate_text("second")
        assert provider.prompts == ["first", "second"]

    def test_empty_script_rejected(self) -> None:
        with pytest.raises(ValueError):
            ExampleModelProvider(responses=[])

    def test_default_resume_is_json_serializable(self) -> None:
        assert json.loads(json.dumps(ExampleModelProvider.DEFAULT_STRUCTURED_RESUME))

    def test_name(self) -> None:
        assert ExampleModelProvider().name() == "Example"
