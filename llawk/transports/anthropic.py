#!/usr/bin/env python3
"""
Anthropic Messages API transport.
"""

from __future__ import annotations

# Standard Library
import logging
from typing import TextIO

# PIP3 modules
from anthropic import Anthropic, AnthropicError

# local repo modules
from ..errors import DialError, InvokeError
from ..llm_prompts import TransformRequest

#============================================


DEFAULT_MAX_TOKENS = 8192


class AnthropicTransport:
	"""
	Streams Claude responses. The Messages API has no response format
	setting, so JSON output relies on the prompt alone.
	"""

	name = "Anthropic"

	def __init__(self, model: str, client: Anthropic, max_tokens: int = DEFAULT_MAX_TOKENS) -> None:
		self.model = model
		self.max_tokens = max_tokens
		self._client = client

	#============================================
	@classmethod
	def dial(cls, model: str, *, max_tokens: int = DEFAULT_MAX_TOKENS) -> AnthropicTransport:
		try:
			client = Anthropic()
		except AnthropicError as exc:
			raise DialError(f"Failed to create Anthropic client: {exc}") from exc
		return cls(model, client, max_tokens=max_tokens)

	#============================================
	def invoke(self, sink: TextIO, request: TransformRequest) -> None:
		logging.info("Anthropic request: model=%s max_tokens=%d", self.model, self.max_tokens)
		try:
			with self._client.messages.stream(
				model=self.model,
				max_tokens=self.max_tokens,
				system=request.system_prompt(),
				messages=[{"role": "user", "content": request.user_prompt()}],
				temperature=0.0,
			) as stream:
				for text in stream.text_stream:
					sink.write(text)
		except AnthropicError as exc:
			raise InvokeError(f"Anthropic request failed: {exc}") from exc

	#============================================
	def close(self) -> None:
		pass
