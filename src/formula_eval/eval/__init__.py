"""Evaluator helper modules for formula expressions."""

__all__ = [
    "chains",
    "expr",
    "helpers",
]
