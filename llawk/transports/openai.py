#!/usr/bin/env python3
"""
OpenAI Responses API transport.
"""

from __future__ import annotations

# Standard Library
import logging
from typing import TextIO

# PIP3 modules
from openai import OpenAI, OpenAIError

# local repo modules
from ..errors import DialError, InvokeError
from ..llm_prompts import FORMAT_JSON, FORMAT_JSON_SCHEMA, TransformRequest
from ..schema import load_schema_object

#============================================


# The API rejects a temperature setting for these models.
NO_TEMPERATURE_MODELS = frozenset({"o4-mini", "o3"})


#============================================


def build_text_format(request: TransformRequest) -> dict:
	"""
	Map the requested output format to a Responses API text format.
	"""
	if request.format == FORMAT_JSON:
		return {"type": "json_object"}
	if request.format == FORMAT_JSON_SCHEMA:
		return {
			"type": "json_schema",
			"name": "Output",
			"schema": load_schema_object(request.schema or ""),
			"strict": True,
		}
	return {"type": "text"}


#============================================


class OpenAITransport:
	name = "OpenAI"

	def __init__(self, model: str, client: OpenAI, stream: bool = True) -> None:
		self.model = model
		self.stream = stream
		self._client = client

	#============================================
	@classmethod
	def dial(cls, model: str, *, stream: bool = True) -> OpenAITransport:
		"""
		Create a client from OPENAI_API_KEY and OPENAI_ORG_ID.
		"""
		try:
			client = OpenAI()
		except OpenAIError as exc:
			raise DialError(f"Failed to create OpenAI client: {exc}") from exc
		return cls(model, client, stream=stream)

	#============================================
	def build_params(self, request: TransformRequest) -> dict:
		params: dict[str, object] = {
			"model": self.model,
			"instructions": request.system_prompt(),
			"input": request.user_prompt(),
			"truncation": "auto",
			"text": {"format": build_text_format(request)},
		}
		if self.model not in NO_TEMPERATURE_MODELS:
			params["temperature"] = 0.0
		return params

	#============================================
	def invoke(self, sink: TextIO, request: TransformRequest) -> None:
		"""
		Run one response and copy its text to sink.

		Args:
			sink: Destination text stream.
			request: Request to send.
		"""
		params = self.build_params(request)
		logging.info("OpenAI request: model=%s stream=%s", self.model, self.stream)
		try:
			if not self.stream:
				response = self._client.responses.create(**params)
				sink.write(response.output_text)
				return
			stream = self._client.responses.create(stream=True, **params)
			with stream:
				for event in stream:
					self._handle_event(sink, event)
		except OpenAIError as exc:
			raise InvokeError(f"OpenAI request failed: {exc}") from exc

	#============================================
	def _handle_event(self, sink: TextIO, event) -> None:
		if event.type == "response.output_text.delta":
			sink.write(event.delta)
		elif event.type == "error":
			raise InvokeError(f"OpenAI stream error: {event.message}")
		elif event.type == "response.failed":
			error = getattr(event.response, "error", None)
			message = getattr(error, "message", None) or "response failed"
			raise InvokeError(f"OpenAI stream error: {message}")

	#============================================
	def close(self) -> None:
		pass
