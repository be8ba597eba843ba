#!/usr/bin/env python3
"""
Prompt builder and request tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from llawk.llm_prompts import (
	FORMAT_JSON,
	FORMAT_JSON_SCHEMA,
	FORMAT_TEXT,
	TransformRequest,
	build_system_prompt,
	current_time_text,
)


def test_user_prompt_contains_instruction_and_input_verbatim():
	req = TransformRequest(instruct="Translate it into Japanese", input="Hello,\n  world!\n")
	prompt = req.user_prompt()
	assert "Translate it into Japanese" in prompt
	assert "Hello,\n  world!\n" in prompt
	assert f"Output format: {FORMAT_TEXT}" in prompt


def test_user_prompt_is_deterministic():
	req = TransformRequest(instruct="Echo the input", input="hello")
	assert req.user_prompt() == req.user_prompt()
	same = TransformRequest(instruct="Echo the input", input="hello")
	assert same.user_prompt() == req.user_prompt()


def test_user_prompt_names_input_and_output():
	req = TransformRequest(
		instruct="Summarize",
		input="text",
		input_name="notes.txt",
		output_name="summary.txt",
	)
	prompt = req.user_prompt()
	assert "notes.txt" in prompt
	assert "summary.txt" in prompt


def test_user_prompt_includes_schema_only_for_schema_format():
	schema = '{"type": "object", "properties": {"a": {"type": "string"}}}'
	with_schema = TransformRequest(
		instruct="Extract", input="x", format=FORMAT_JSON_SCHEMA, schema=schema
	)
	assert schema in with_schema.user_prompt()
	json_only = TransformRequest(instruct="Extract", input="x", format=FORMAT_JSON)
	assert "JSON Schema" not in json_only.user_prompt()


def test_system_prompt_contains_rfc3339_time():
	now = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone(timedelta(hours=9)))
	prompt = build_system_prompt(now)
	assert "2024-05-06T07:08:09+09:00" in prompt
	req = TransformRequest(instruct="x")
	assert req.system_prompt(now) == prompt


def test_current_time_text_defaults_to_local_time():
	text = current_time_text()
	parsed = datetime.fromisoformat(text)
	assert parsed.tzinfo is not None


def test_request_rejects_schema_without_schema_format():
	with pytest.raises(ValueError):
		TransformRequest(instruct="x", format=FORMAT_TEXT, schema="{}")
	with pytest.raises(ValueError):
		TransformRequest(instruct="x", format=FORMAT_JSON_SCHEMA)
	with pytest.raises(ValueError):
		TransformRequest(instruct="x", format="yaml")


def test_request_is_immutable():
	req = TransformRequest(instruct="x")
	with pytest.raises(AttributeError):
		req.instruct = "y"
