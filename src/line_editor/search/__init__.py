"""Stateless substring search over single lines."""

from .kmp import NOT_FOUND, failure_function, find

__all__ = ["NOT_FOUND", "failure_function", "find"]
