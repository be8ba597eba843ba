#!/usr/bin/env python3
from __future__ import annotations

from .anthropic import AnthropicTransport
from .base import LLMTransport
from .gemini import GeminiTransport
from .ollama import OllamaTransport
from .openai import OpenAITransport

__all__ = [
	"AnthropicTransport",
	"GeminiTransport",
	"LLMTransport",
	"OllamaTransport",
	"OpenAITransport",
]
