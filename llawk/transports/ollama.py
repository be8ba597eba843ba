#!/usr/bin/env python3
"""
Ollama chat transport.
"""

from __future__ import annotations

# Standard Library
import http.client
import json
import logging
import os
import urllib.error
import urllib.request
from typing import TextIO

# local repo modules
from ..errors import DialError, InvokeError
from ..llm_prompts import FORMAT_JSON, FORMAT_JSON_SCHEMA, TransformRequest
from ..schema import load_schema_object

#============================================


MODEL_PREFIX = "ollama:"
DEFAULT_PORT = "11434"
CHAT_TIMEOUT = 300


#============================================


def resolve_base_url(raw_host: str | None = None) -> str:
	"""
	Resolve the Ollama base URL the way the Ollama CLI reads OLLAMA_HOST.

	Args:
		raw_host: Host value; defaults to the OLLAMA_HOST environment variable.

	Returns:
		Base URL such as "http://127.0.0.1:11434".
	"""
	if raw_host is None:
		raw_host = os.environ.get("OLLAMA_HOST", "")
	value = raw_host.strip()
	scheme = "http"
	default_port = DEFAULT_PORT
	if "://" in value:
		scheme, value = value.split("://", 1)
		if scheme == "http":
			default_port = "80"
		elif scheme == "https":
			default_port = "443"
	hostport, _, path = value.partition("/")
	host, sep, port = hostport.rpartition(":")
	if not sep or not port.isdigit() or host.endswith(":"):
		host, port = hostport, default_port
	if not host:
		host = "127.0.0.1"
	base_url = f"{scheme}://{host}:{port}"
	if path:
		base_url = f"{base_url}/{path.rstrip('/')}"
	return base_url


#============================================


def _ollama_available(base_url: str) -> bool:
	"""
	Check if Ollama service is up.
	"""
	try:
		request = urllib.request.Request(f"{base_url}/api/tags", method="GET")
		with urllib.request.urlopen(request, timeout=2) as response:
			return response.status < 400
	except (OSError, ValueError):
		return False


#============================================


class OllamaTransport:
	name = "Ollama"

	def __init__(self, model: str, base_url: str = "http://127.0.0.1:11434") -> None:
		if model.startswith(MODEL_PREFIX):
			model = model[len(MODEL_PREFIX):]
		self.model = model
		self.base_url = base_url.rstrip("/")

	#============================================
	@classmethod
	def dial(cls, model: str) -> OllamaTransport:
		base_url = resolve_base_url()
		if not _ollama_available(base_url):
			raise DialError(f"Failed to create Ollama client: {base_url} is not reachable")
		return cls(model, base_url=base_url)

	#============================================
	def build_payload(self, request: TransformRequest) -> dict:
		payload: dict[str, object] = {
			"model": self.model,
			"messages": [
				{"role": "system", "content": request.system_prompt()},
				{"role": "user", "content": request.user_prompt()},
			],
			"stream": True,
			"options": {"temperature": 0},
		}
		if request.format == FORMAT_JSON:
			payload["format"] = "json"
		elif request.format == FORMAT_JSON_SCHEMA:
			payload["format"] = load_schema_object(request.schema or "")
		return payload

	#============================================
	def invoke(self, sink: TextIO, request: TransformRequest) -> None:
		"""
		Stream a chat completion into sink.

		Args:
			sink: Destination text stream.
			request: Request to send.
		"""
		payload = self.build_payload(request)
		http_request = urllib.request.Request(
			f"{self.base_url}/api/chat",
			data=json.dumps(payload).encode("utf-8"),
			headers={"Content-Type": "application/json"},
			method="POST",
		)
		logging.info("Ollama request: model=%s url=%s", self.model, self.base_url)
		try:
			with urllib.request.urlopen(http_request, timeout=CHAT_TIMEOUT) as response:
				for raw_line in response:
					line = raw_line.strip()
					if line:
						self._handle_line(sink, line)
		except urllib.error.HTTPError as exc:
			detail = _error_detail(exc)
			raise InvokeError(
				f"Failed to generate content: status {exc.code}: {detail}"
			) from exc
		except (OSError, http.client.HTTPException) as exc:
			raise InvokeError(f"Failed to generate content: {exc}") from exc

	#============================================
	def _handle_line(self, sink: TextIO, line: bytes) -> None:
		try:
			parsed = json.loads(line.decode("utf-8"))
		except ValueError as exc:
			raise InvokeError(f"Failed to decode Ollama stream: {exc}") from exc
		if not isinstance(parsed, dict):
			raise InvokeError(f"Failed to decode Ollama stream: unexpected line {line!r}")
		if parsed.get("error"):
			raise InvokeError(f"Failed to generate content: {parsed['error']}")
		message = parsed.get("message") or {}
		if not isinstance(message, dict):
			raise InvokeError(f"Failed to decode Ollama stream: unexpected message {message!r}")
		content = message.get("content") or ""
		if content:
			sink.write(content)

	#============================================
	def close(self) -> None:
		pass


#============================================


def _error_detail(exc: urllib.error.HTTPError) -> str:
	try:
		body = exc.read().decode("utf-8", errors="replace")
	except OSError:
		return exc.reason
	try:
		return str(json.loads(body).get("error") or body)
	except (ValueError, AttributeError):
		return body or str(exc.reason)
