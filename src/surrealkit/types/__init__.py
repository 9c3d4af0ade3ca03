"""Shared model types for surrealkit."""

from surrealkit.types.base import SurrealKitModel

__all__ = ["SurrealKitModel"]
