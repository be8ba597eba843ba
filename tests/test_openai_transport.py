#!/usr/bin/env python3
"""
Tests for the OpenAI Responses transport.
"""

import io
import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from llawk.errors import DialError, InvokeError, SchemaError
from llawk.llm_prompts import FORMAT_JSON, FORMAT_JSON_SCHEMA, TransformRequest
from llawk.transports.openai import OpenAITransport


class FakeStream:
	def __init__(self, events, error: Exception | None = None):
		self.events = events
		self.error = error
		self.closed = False

	def __enter__(self):
		return self

	def __exit__(self, *exc_info):
		self.closed = True

	def __iter__(self):
		yield from self.events
		if self.error:
			raise self.error


class FakeResponses:
	def __init__(self, result):
		self.result = result
		self.calls: list[dict] = []

	def create(self, **kwargs):
		self.calls.append(kwargs)
		if isinstance(self.result, Exception):
			raise self.result
		return self.result


class FakeClient:
	def __init__(self, result):
		self.responses = FakeResponses(result)


def _delta(text):
	return SimpleNamespace(type="response.output_text.delta", delta=text)


def _request(**kwargs):
	return TransformRequest(instruct="Echo the input", input="hello", **kwargs)


def test_streams_text_deltas_in_order():
	stream = FakeStream([
		SimpleNamespace(type="response.created"),
		_delta("hel"),
		_delta("lo"),
		SimpleNamespace(type="response.completed"),
	])
	client = FakeClient(stream)
	transport = OpenAITransport("gpt-4o-mini", client)
	sink = io.StringIO()
	transport.invoke(sink, _request())
	assert sink.getvalue() == "hello"
	assert stream.closed
	call = client.responses.calls[0]
	assert call["stream"] is True
	assert call["model"] == "gpt-4o-mini"
	assert "hello" in call["input"]
	assert call["instructions"].startswith("You are llawk")
	assert call["truncation"] == "auto"
	assert call["temperature"] == 0.0
	assert call["text"] == {"format": {"type": "text"}}


@pytest.mark.parametrize("model", ["o3", "o4-mini"])
def test_temperature_omitted_for_reasoning_models(model):
	transport = OpenAITransport(model, FakeClient(FakeStream([])))
	params = transport.build_params(_request())
	assert "temperature" not in params


def test_json_format_requests_json_object():
	transport = OpenAITransport("gpt-4o", FakeClient(FakeStream([])))
	params = transport.build_params(_request(format=FORMAT_JSON))
	assert params["text"]["format"] == {"type": "json_object"}


def test_schema_format_passes_raw_schema_strictly():
	schema = {
		"type": "object",
		"properties": {"a": {"type": "string"}, "b": {"type": "array", "items": {"type": "integer"}}},
		"required": ["a", "b"],
		"additionalProperties": False,
	}
	transport = OpenAITransport("gpt-4o", FakeClient(FakeStream([])))
	params = transport.build_params(_request(format=FORMAT_JSON_SCHEMA, schema=json.dumps(schema)))
	text_format = params["text"]["format"]
	assert text_format["type"] == "json_schema"
	assert text_format["name"] == "Output"
	assert text_format["strict"] is True
	assert text_format["schema"] == schema
	assert set(text_format["schema"]["properties"]) == {"a", "b"}


def test_invalid_schema_is_rejected():
	client = FakeClient(FakeStream([]))
	transport = OpenAITransport("gpt-4o", client)
	with pytest.raises(SchemaError):
		transport.invoke(io.StringIO(), _request(format=FORMAT_JSON_SCHEMA, schema="{bad"))
	assert client.responses.calls == []


def test_non_streaming_writes_complete_text_once():
	client = FakeClient(SimpleNamespace(output_text="complete answer"))
	transport = OpenAITransport("o1", client, stream=False)
	sink = io.StringIO()
	transport.invoke(sink, _request())
	assert sink.getvalue() == "complete answer"
	assert "stream" not in client.responses.calls[0]


def test_stream_error_event_raises_after_partial_output():
	stream = FakeStream([_delta("part"), SimpleNamespace(type="error", message="overloaded")])
	transport = OpenAITransport("gpt-4o", FakeClient(stream))
	sink = io.StringIO()
	with pytest.raises(InvokeError) as excinfo:
		transport.invoke(sink, _request())
	assert "overloaded" in str(excinfo.value)
	assert sink.getvalue() == "part"


def test_failed_response_event_raises():
	failed = SimpleNamespace(
		type="response.failed",
		response=SimpleNamespace(error=SimpleNamespace(message="server_error")),
	)
	transport = OpenAITransport("gpt-4o", FakeClient(FakeStream([failed])))
	with pytest.raises(InvokeError, match="server_error"):
		transport.invoke(io.StringIO(), _request())


def test_transport_error_is_wrapped():
	error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/responses"))
	transport = OpenAITransport("gpt-4o", FakeClient(error))
	with pytest.raises(InvokeError) as excinfo:
		transport.invoke(io.StringIO(), _request())
	assert excinfo.value.__cause__ is error


def test_dial_without_api_key_fails(monkeypatch):
	monkeypatch.delenv("OPENAI_API_KEY", raising=False)
	with pytest.raises(DialError):
		OpenAITransport.dial("gpt-4o")


def test_dial_with_api_key(monkeypatch):
	monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
	transport = OpenAITransport.dial("o1", stream=False)
	assert transport.model == "o1"
	assert transport.stream is False
	transport.close()
	transport.close()
