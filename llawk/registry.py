#!/usr/bin/env python3
"""
Static model catalog and model name resolution.
"""

from __future__ import annotations

# Standard Library
import functools
from dataclasses import dataclass
from typing import Callable

# local repo modules
from .errors import ModelNotFoundError
from .transports.anthropic import AnthropicTransport
from .transports.base import LLMTransport
from .transports.gemini import GeminiTransport
from .transports.ollama import MODEL_PREFIX, OllamaTransport
from .transports.openai import OpenAITransport

#============================================


Dialer = Callable[[str], LLMTransport]


@dataclass(frozen=True, slots=True)
class ModelEntry:
	"""
	Catalog entry.

	Attributes:
		name: Display name, also matched exactly.
		dialer: Builds a transport for a model name.
		matcher: Optional predicate for names that are not listed verbatim.
	"""
	name: str
	dialer: Dialer
	matcher: Callable[[str], bool] | None = None

	#============================================
	def matches(self, model: str) -> bool:
		if self.name == model:
			return True
		return self.matcher is not None and self.matcher(model)


#============================================


def _is_ollama_model(model: str) -> bool:
	return model.startswith(MODEL_PREFIX)


MODELS: tuple[ModelEntry, ...] = (
	ModelEntry("gpt-4o", functools.partial(OpenAITransport.dial, stream=True)),
	ModelEntry("gpt-4o-mini", functools.partial(OpenAITransport.dial, stream=True)),
	ModelEntry("o1", functools.partial(OpenAITransport.dial, stream=False)),
	ModelEntry("gemini-1.5-flash", GeminiTransport.dial),
	ModelEntry("gemini-1.5-pro", GeminiTransport.dial),
	ModelEntry("gemini-2.0-flash-exp", GeminiTransport.dial),
	ModelEntry("claude-sonnet-4-0", AnthropicTransport.dial),
	ModelEntry("claude-3-5-haiku-latest", AnthropicTransport.dial),
	ModelEntry(f"{MODEL_PREFIX}(model name)", OllamaTransport.dial, _is_ollama_model),
)


#============================================


def resolve_model(model: str, models: tuple[ModelEntry, ...] | None = None) -> ModelEntry:
	"""
	Find the first catalog entry that accepts a model name.

	Args:
		model: Requested model name.
		models: Catalog to search.

	Returns:
		Matching ModelEntry.
	"""
	if models is None:
		models = MODELS
	for entry in models:
		if entry.matches(model):
			return entry
	raise ModelNotFoundError(f"Unknown model: {model}\nPlease check -m list")


def dial_model(model: str) -> LLMTransport:
	"""
	Resolve a model name and dial its backend.
	"""
	entry = resolve_model(model)
	return entry.dialer(model)


def list_models(default_model: str, models: tuple[ModelEntry, ...] | None = None) -> list[str]:
	"""
	Render catalog lines for `-m list`.
	"""
	if models is None:
		models = MODELS
	lines = ["Available models:"]
	for entry in models:
		if entry.name == default_model:
			lines.append(f"  {entry.name} (default)")
		else:
			lines.append(f"  {entry.name}")
	return lines
