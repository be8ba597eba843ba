#!/usr/bin/env python3
"""
Repo-root runner for llawk.

Examples:
	python run_llawk.py -i en.txt -o ja.txt 'Translate it into Japanese'
	python run_llawk.py -m list
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
	"""
	Run the CLI entrypoint with repo-root import behavior.
	"""
	repo_root = Path(__file__).resolve().parent
	if str(repo_root) not in sys.path:
		sys.path.insert(0, str(repo_root))

	from llawk.cli import main as cli_main

	return cli_main()


if __name__ == "__main__":
	sys.exit(main())
