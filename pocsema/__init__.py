"""Semantic analysis for a small statically typed language: syntax tree, types, scopes and diagnostics."""

__version__ = "0.1.0"
__all__ = ["ast", "types", "errors", "scope", "checker", "semantic"]