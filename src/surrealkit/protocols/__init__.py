"""Protocol definitions for surrealkit.

These protocols describe the interfaces surrealkit depends on, so
implementations can be swapped and tested in isolation.
"""

from surrealkit.protocols.backend import LiveCallback, SurrealBackend

__all__ = [
    "SurrealBackend",
    "LiveCallback",
]
