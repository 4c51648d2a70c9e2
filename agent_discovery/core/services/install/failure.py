"""
L3 Detection — Install failure classification.

Looks at stderr from a failed installer and decides whether the
failure was a network problem.  Substring matching over tool output is
fragile across locales and tool versions, so the classifier is a
replaceable object: pass your own to ``install(..., classifier=...)``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

# Case-sensitive on purpose: "ETIMEDOUT"/"ENOTFOUND" are npm error codes.
DEFAULT_NETWORK_MARKERS: tuple[str, ...] = (
    "network",
    "connection",
    "resolve",
    "ETIMEDOUT",
    "ENOTFOUND",
)


class FailureClassifier(Protocol):
    """Decides whether installer stderr describes a network failure."""

    def is_network_failure(self, stderr: str) -> bool: ...


class SubstringClassifier:
    """Network failure if any marker occurs in stderr."""

    def __init__(self, markers: Iterable[str] = DEFAULT_NETWORK_MARKERS) -> None:
        self.markers = tuple(m for m in markers if m)

    def with_markers(self, extra: Iterable[str]) -> SubstringClassifier:
        """New classifier with ``extra`` markers appended."""
        return SubstringClassifier((*self.markers, *extra))

    def is_network_failure(self, stderr: str) -> bool:
        if not stderr:
            return False
        return any(marker in stderr for marker in self.markers)

    def __repr__(self) -> str:
        return f"<SubstringClassifier markers={list(self.markers)!r}>"
