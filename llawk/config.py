#!/usr/bin/env python3
from __future__ import annotations

# Standard Library
import os
from dataclasses import dataclass

# local repo modules
from .errors import FormatError
from .llm_prompts import FORMAT_JSON, FORMAT_JSON_SCHEMA, FORMAT_TEXT
from .schema import is_json_schema

#============================================


DEFAULT_MODEL = "gpt-4o-mini"
MODEL_ENV_VAR = "LLAWK_MODEL"
STDIO_NAME = "-"


#============================================


def default_model() -> str:
	"""
	Default model from LLAWK_MODEL, falling back to DEFAULT_MODEL.
	"""
	return os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL


#============================================


@dataclass(slots=True)
class AppConfig:
	"""
	Runtime configuration settings.

	Attributes:
		instruct: Instruction for the model.
		input_path: Input file, or "-" for stdin.
		output_path: Output file, or "-" for stdout.
		output_format: "text", "json", or JSON Schema text.
		model: Model name from the catalog.
		verbose: Print prompts and log backend activity.
	"""
	instruct: str = ""
	input_path: str = STDIO_NAME
	output_path: str = STDIO_NAME
	output_format: str = "text"
	model: str = DEFAULT_MODEL
	verbose: bool = False

	#============================================
	def reads_stdin(self) -> bool:
		return self.input_path in (STDIO_NAME, "")

	#============================================
	def writes_stdout(self) -> bool:
		return self.output_path in (STDIO_NAME, "")


#============================================
def parse_output_format(value: str) -> tuple[str, str | None]:
	"""
	Interpret the --format flag.

	Args:
		value: "text", "json", or a JSON Schema document.

	Returns:
		Tuple of (format, schema text or None).
	"""
	if value == "text":
		return FORMAT_TEXT, None
	if value == "json":
		return FORMAT_JSON, None
	if is_json_schema(value):
		return FORMAT_JSON_SCHEMA, value
	raise FormatError(f"Unsupported format: {value}")


#============================================
