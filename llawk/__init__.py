"""
llawk
=====

Command-line text operations driven by Large Language Models.
"""

__version__ = "0.3.0"

__all__ = [
	"cli",
	"config",
	"errors",
	"llm_engine",
	"llm_prompts",
	"registry",
	"schema",
	"transports",
]
