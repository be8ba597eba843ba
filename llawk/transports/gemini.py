#!/usr/bin/env python3
"""
Google Gemini transport.
"""

from __future__ import annotations

# Standard Library
import logging
import os
from typing import TextIO

# PIP3 modules
import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

# local repo modules
from ..errors import DialError, InvokeError
from ..llm_prompts import FORMAT_JSON, FORMAT_JSON_SCHEMA, TransformRequest
from ..schema import parse_schema, to_gemini_schema

#============================================


# Lightweight variant that does not get the code execution tool.
NO_CODE_EXECUTION_MODEL = "gemini-2.0-flash-lite"


#============================================


class GeminiTransport:
	name = "Gemini"

	def __init__(self, model: str, client: genai.Client) -> None:
		self.model = model
		self._client = client
		self._closed = False

	#============================================
	@classmethod
	def dial(cls, model: str) -> GeminiTransport:
		"""
		Create a client from GEMINI_API_KEY.
		"""
		try:
			client = genai.Client(api_key=os.environ.get("GEMINI_API_KEY"))
		except ValueError as exc:
			raise DialError(f"Failed to create client: {exc}") from exc
		return cls(model, client)

	#============================================
	def build_config(self, request: TransformRequest) -> types.GenerateContentConfig:
		"""
		Build generation settings for a request.

		Args:
			request: Request to send.

		Returns:
			GenerateContentConfig with prompt, sampling, tools and format.
		"""
		tools = None
		if self.model != NO_CODE_EXECUTION_MODEL:
			tools = [types.Tool(code_execution=types.ToolCodeExecution())]
		response_schema = None
		if request.format == FORMAT_JSON_SCHEMA:
			response_schema = to_gemini_schema(parse_schema(request.schema or ""))
		if request.format in (FORMAT_JSON, FORMAT_JSON_SCHEMA):
			mime_type = "application/json"
		else:
			mime_type = "text/plain"
		return types.GenerateContentConfig(
			system_instruction=request.system_prompt(),
			temperature=0.0,
			tools=tools,
			response_mime_type=mime_type,
			response_schema=response_schema,
		)

	#============================================
	def invoke(self, sink: TextIO, request: TransformRequest) -> None:
		config = self.build_config(request)
		logging.info("Gemini request: model=%s", self.model)
		try:
			chunks = self._client.models.generate_content_stream(
				model=self.model,
				contents=request.user_prompt(),
				config=config,
			)
			for chunk in chunks:
				_write_chunk_text(sink, chunk)
		except (genai_errors.APIError, httpx.HTTPError) as exc:
			raise InvokeError(f"Failed to generate content: {exc}") from exc

	#============================================
	def close(self) -> None:
		if self._closed:
			return
		self._closed = True
		self._client.close()


#============================================


def _write_chunk_text(sink: TextIO, chunk: types.GenerateContentResponse) -> None:
	if not chunk.candidates:
		return
	content = chunk.candidates[0].content
	if content is None or not content.parts:
		return
	for part in content.parts:
		if part.text:
			sink.write(part.text)
