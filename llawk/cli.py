#!/usr/bin/env python3
"""
Command line interface for llawk.
"""

from __future__ import annotations

# Standard Library
import argparse
import contextlib
import io
import logging
import sys
from typing import Iterator, TextIO

# local repo modules
from .config import AppConfig, default_model, parse_output_format
from .errors import InputOutputError, LLMError
from .llm_engine import LLMEngine
from .llm_prompts import TransformRequest
from .registry import list_models

#============================================


DESCRIPTION = "llawk - A CLI text operation tool using Large Language Models"

EPILOG = """\
Environment Variables:
  Common:
    LLAWK_MODEL        Default model to use.
  for OpenAI models:
    OPENAI_API_KEY     API key.
    OPENAI_ORG_ID      Organization ID.
  for Google models:
    GEMINI_API_KEY     API key.
  for Anthropic models:
    ANTHROPIC_API_KEY  API key.
  for Ollama models:
    OLLAMA_HOST        Hostname of the Ollama API.

Examples:
  $ llawk -i en.txt -o ja.txt 'Translate it into Japanese'
  $ cat comments.txt | llawk -f json 'Guess the sentiment for each lines. Output in JSON format including an array named "sentiments".'
"""


class _ArgumentParser(argparse.ArgumentParser):
	"""
	ArgumentParser that writes help to stderr and exits with status 1 on
	usage errors.
	"""

	def print_help(self, file=None) -> None:
		super().print_help(file or sys.stderr)

	def error(self, message: str) -> None:
		self.print_usage(sys.stderr)
		self.exit(1, f"Failed to parse flags: {message}\n")


#============================================


def build_parser() -> argparse.ArgumentParser:
	parser = _ArgumentParser(
		prog="llawk",
		usage="%(prog)s [OPTIONS] INSTRUCT",
		description=DESCRIPTION,
		epilog=EPILOG,
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument(
		"instruct",
		nargs="?",
		help="Instruction for the model.",
	)
	parser.add_argument(
		"-i",
		"--input",
		dest="input_path",
		default="-",
		help="Input file. Use - for stdin.",
	)
	parser.add_argument(
		"-o",
		"--output",
		dest="output_path",
		default="-",
		help="Output file. Use - for stdout.",
	)
	parser.add_argument(
		"-f",
		"--format",
		dest="output_format",
		default="text",
		help='Output format. "text", "json", or JSON Schema string.',
	)
	parser.add_argument(
		"-m",
		"--model",
		dest="model",
		default=default_model(),
		help='Model to use. Use "list" to list available models.',
	)
	parser.add_argument(
		"-v",
		"--verbose",
		dest="verbose",
		action="store_true",
		help="Enable verbose output.",
	)
	return parser


#============================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse CLI arguments.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	if args.model != "list" and args.instruct is None:
		parser.print_help(sys.stderr)
		parser.exit(1)
	return args


#============================================


def build_config(args: argparse.Namespace) -> AppConfig:
	"""
	Build runtime config from args.
	"""
	return AppConfig(
		instruct=args.instruct or "",
		input_path=args.input_path,
		output_path=args.output_path,
		output_format=args.output_format,
		model=args.model,
		verbose=args.verbose,
	)


#============================================


def read_input(config: AppConfig) -> tuple[str, str]:
	"""
	Read the whole input; undecodable bytes become U+FFFD.

	Args:
		config: Application configuration.

	Returns:
		Tuple of (input text, input name).
	"""
	if config.reads_stdin():
		stdin = sys.stdin
		try:
			if isinstance(stdin, io.TextIOWrapper):
				stdin.reconfigure(errors="replace")
			return stdin.read(), "<stdin>"
		except (OSError, UnicodeDecodeError) as exc:
			raise InputOutputError(f"Failed to read input: {exc}") from exc
	try:
		with open(config.input_path, encoding="utf-8", errors="replace") as handle:
			return handle.read(), config.input_path
	except OSError as exc:
		raise InputOutputError(f"Failed to open input file: {exc}") from exc


@contextlib.contextmanager
def open_output(config: AppConfig) -> Iterator[tuple[TextIO, str]]:
	"""
	Yield the output sink and its name; stdout is left open.
	"""
	if config.writes_stdout():
		yield sys.stdout, "<stdout>"
		return
	try:
		handle = open(config.output_path, "w", encoding="utf-8")
	except OSError as exc:
		raise InputOutputError(f"Failed to create output file: {exc}") from exc
	with handle:
		yield handle, config.output_path


#============================================


def run(config: AppConfig) -> None:
	"""
	Validate the format, dial the model, and stream the result.

	Args:
		config: Application configuration.
	"""
	output_format, schema = parse_output_format(config.output_format)
	with LLMEngine.open(config.model) as engine:
		input_text, input_name = read_input(config)
		with open_output(config) as (sink, output_name):
			request = TransformRequest(
				instruct=config.instruct,
				input=input_text,
				input_name=input_name,
				format=output_format,
				schema=schema,
				output_name=output_name,
				verbose=config.verbose,
			)
			engine.run(request, sink)


#============================================


def _color(text: str, code: str) -> str:
	if sys.stderr.isatty():
		return f"\033[{code}m{text}\033[0m"
	return text


#============================================


def main(argv: list[str] | None = None) -> int:
	"""
	Entry point for the CLI.
	"""
	args = parse_args(argv)
	config = build_config(args)
	if config.verbose:
		logging.basicConfig(level=logging.INFO)
	else:
		logging.basicConfig(level=logging.WARNING)
	if config.model == "list":
		for line in list_models(default_model()):
			print(line)
		return 0
	try:
		run(config)
	except (LLMError, OSError) as exc:
		print(f"{_color('[ERROR]', '31')} {exc}", file=sys.stderr)
		return 1
	return 0


#============================================


if __name__ == "__main__":
	sys.exit(main())
