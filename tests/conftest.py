"""
Pytest config to ensure local package imports work without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path


def _add_repo_root_to_path() -> None:
	"""
	Insert the repo root into sys.path for local imports.
	"""
	repo_root = Path(__file__).resolve().parent.parent
	repo_root_str = str(repo_root)
	if repo_root_str not in sys.path:
		sys.path.insert(0, repo_root_str)


_add_repo_root_to_path()

import pytest  # noqa: E402


class StubTransport:
	"""
	Test-only transport that streams canned chunks.
	"""

	name = "Stub"

	def __init__(self, model: str = "stub", chunks=None, error: Exception | None = None) -> None:
		self.model = model
		self.chunks = list(chunks if chunks is not None else ["ok"])
		self.error = error
		self.requests: list = []
		self.close_calls = 0

	def invoke(self, sink, request) -> None:
		self.requests.append(request)
		for chunk in self.chunks:
			sink.write(chunk)
		if self.error:
			raise self.error

	def close(self) -> None:
		self.close_calls += 1


@pytest.fixture
def stub_transport() -> StubTransport:
	return StubTransport(chunks=["hel", "lo"])
