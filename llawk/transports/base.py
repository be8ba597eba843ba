#!/usr/bin/env python3
"""
Transport interface for LLM backends.
"""

from __future__ import annotations

# Standard Library
from typing import Protocol, TextIO

# local repo modules
from ..llm_prompts import TransformRequest


class LLMTransport(Protocol):
	name: str
	model: str

	def invoke(self, sink: TextIO, request: TransformRequest) -> None:
		"""
		Send the request and write response text to sink as it arrives.
		"""

	def close(self) -> None:
		"""
		Release the backend client. Safe to call more than once.
		"""
