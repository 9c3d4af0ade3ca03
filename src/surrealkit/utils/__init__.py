"""Utility functions and helpers for surrealkit."""

from surrealkit.utils.decorators import operation_span, traced

__all__ = [
    "operation_span",
    "traced",
]
