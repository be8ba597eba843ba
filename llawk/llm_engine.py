#!/usr/bin/env python3
"""
Runs one request against a dialed backend and normalizes the output.
"""

from __future__ import annotations

# Standard Library
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

# local repo modules
from .llm_prompts import TransformRequest
from .registry import dial_model
from .transports.base import LLMTransport

#============================================


class NewlineTracker:
	"""
	Write-through sink wrapper that remembers whether output ends with a newline.
	"""

	def __init__(self, sink: TextIO) -> None:
		self.sink = sink
		self.has_newline = False

	def write(self, text: str) -> int:
		if text:
			self.has_newline = text.endswith("\n")
		written = self.sink.write(text)
		self.sink.flush()
		return written

	def flush(self) -> None:
		self.sink.flush()


#============================================


def _default_diagnostics() -> TextIO:
	return sys.stderr


@dataclass(slots=True)
class LLMEngine:
	model: str
	transport: LLMTransport
	diagnostics: TextIO = field(default_factory=_default_diagnostics)

	#============================================
	@classmethod
	def open(
		cls,
		model: str,
		dialer: Callable[[str], LLMTransport] | None = None,
	) -> LLMEngine:
		"""
		Resolve a model name and dial its backend.

		Args:
			model: Model name from the catalog.
			dialer: Override for registry dialing.

		Returns:
			LLMEngine owning the dialed transport.
		"""
		dial = dialer or dial_model
		transport = dial(model)
		logging.info("dialed %s for model %s", transport.name, model)
		return cls(model=model, transport=transport)

	#============================================
	def run(self, request: TransformRequest, sink: TextIO) -> None:
		"""
		Stream one response into sink, ending it with a newline.

		Args:
			request: Request to send.
			sink: Destination text stream.
		"""
		if request.verbose:
			self._print_prompts(request)
		tracker = NewlineTracker(sink)
		self.transport.invoke(tracker, request)
		if not tracker.has_newline:
			sink.write("\n")
			sink.flush()

	#============================================
	def close(self) -> None:
		self.transport.close()

	#============================================
	def __enter__(self) -> LLMEngine:
		return self

	def __exit__(self, *exc_info) -> None:
		self.close()

	#============================================
	def _print_prompts(self, request: TransformRequest) -> None:
		out = self.diagnostics
		print("Model:", self.model, file=out)
		print("--- system ---", file=out)
		print(request.system_prompt(), file=out)
		print(f"--- user (input: \"{request.input_name}\") ---", file=out)
		print(request.user_prompt(), file=out)
		if request.output_name == "<stdout>":
			print(f"--- result (output: \"{request.output_name}\") ---", file=out)
		out.flush()
