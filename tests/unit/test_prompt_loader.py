"""Tests for prompt template and JSON schema loading."""

import json
from pathlib import Path

import pytest

from cardvault.extraction.exceptions import ExtractionError
from cardvault.extraction.prompt_loader import load_json_schema, load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{json_schema}" in template
        assert "{hint_section}" in template

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Read the label {json_schema}{hint_section}")
        result = load_prompt_template(custom)
        assert result == "Read the label {json_schema}{hint_section}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadJsonSchema:
    def test_loads_default_schema(self) -> None:
        schema = json.loads(load_json_schema())
        assert "is_valid_card" in schema["properties"]
        assert "identifier" in schema["properties"]

    def test_loads_custom_schema(self, tmp_path: Path) -> None:
        custom = tmp_path / "schema.json"
        custom.write_text('{"type": "object"}')
        result = load_json_schema(custom)
        assert result == '{"type": "object"}'

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to load JSON schema"):
            load_json_schema(Path("/nonexistent/schema.json"))
