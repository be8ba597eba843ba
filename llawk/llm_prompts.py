#!/usr/bin/env python3
"""
Backend-agnostic request type and prompt builders.
"""

from __future__ import annotations

# Standard Library
from dataclasses import dataclass
from datetime import datetime

#============================================


FORMAT_TEXT = "plain text"
FORMAT_JSON = "JSON"
FORMAT_JSON_SCHEMA = "JSON Schema"
OUTPUT_FORMATS = (FORMAT_TEXT, FORMAT_JSON, FORMAT_JSON_SCHEMA)


#============================================


@dataclass(frozen=True, slots=True)
class TransformRequest:
	"""
	One text operation: an instruction applied to an input.

	Attributes:
		instruct: Instruction given on the command line.
		input: Raw input text.
		input_name: Input file name, or "<stdin>".
		format: One of OUTPUT_FORMATS.
		schema: JSON Schema text when format is FORMAT_JSON_SCHEMA.
		output_name: Output file name, or "<stdout>".
		verbose: Print prompts before invoking the model.
	"""
	instruct: str
	input: str = ""
	input_name: str = "<stdin>"
	format: str = FORMAT_TEXT
	schema: str | None = None
	output_name: str = "<stdout>"
	verbose: bool = False

	def __post_init__(self) -> None:
		if self.format not in OUTPUT_FORMATS:
			raise ValueError(f"unknown output format: {self.format}")
		if (self.format == FORMAT_JSON_SCHEMA) != (self.schema is not None):
			raise ValueError("schema must be set exactly when format is JSON Schema")

	#============================================
	def system_prompt(self, now: datetime | None = None) -> str:
		return build_system_prompt(now)

	#============================================
	def user_prompt(self) -> str:
		return build_user_prompt(self)


#============================================


def current_time_text(now: datetime | None = None) -> str:
	"""
	Format a timestamp as RFC 3339 with the local offset.
	"""
	if now is None:
		now = datetime.now().astimezone()
	return now.isoformat(timespec="seconds")


def build_system_prompt(now: datetime | None = None) -> str:
	lines: list[str] = []
	lines.append("You are llawk, a command line tool that processes text as instructed.")
	lines.append("Apply the user's instruction to the input and output only the result.")
	lines.append("Do not add greetings, explanations, or code fences around the result.")
	lines.append("Keep the language of the input unless the instruction says otherwise.")
	lines.append("If the input is empty, follow the instruction as well as possible without it.")
	lines.append(f"Current time: {current_time_text(now)}")
	return "\n".join(lines)


def build_user_prompt(req: TransformRequest) -> str:
	"""
	Render the user turn for a request.

	Args:
		req: Request to render.

	Returns:
		Prompt text containing the instruction and the input verbatim.
	"""
	lines: list[str] = []
	lines.append("<instruction>")
	lines.append(req.instruct)
	lines.append("</instruction>")
	lines.append(f"Output format: {req.format}")
	if req.schema is not None:
		lines.append("Output must follow this JSON Schema:")
		lines.append(req.schema)
	lines.append(f"Output destination: {req.output_name}")
	lines.append(f"<input name=\"{req.input_name}\">")
	lines.append(req.input)
	lines.append("</input>")
	return "\n".join(lines)
