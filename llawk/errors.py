#!/usr/bin/env python3
"""
Exception types shared by the CLI, the registry and the transports.
"""


class LLMError(RuntimeError):
	pass


class ModelNotFoundError(LLMError):
	"""Raised when no catalog entry accepts the requested model name."""


class FormatError(LLMError):
	"""Raised when the output format is not text, json or a JSON Schema."""


class SchemaError(FormatError):
	"""Raised when JSON Schema text cannot be parsed."""


class DialError(LLMError):
	"""Raised when a backend client cannot be constructed."""


class InvokeError(LLMError):
	"""Raised when a backend call or its response stream fails."""


class InputOutputError(LLMError):
	"""Raised when the input cannot be read or the output cannot be created."""
