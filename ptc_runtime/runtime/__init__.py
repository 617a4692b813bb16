"""Execution runtime for submitted snippets.

The main entry point is ``CodeExecutor``; ``create_executor`` is a
convenience factory.
"""

from .engine import CodeExecutor, compile_snippet, create_executor, normalize_error

__all__ = [
    "CodeExecutor",
    "compile_snippet",
    "create_executor",
    "normalize_error",
]
