from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    """Base class for messages sent to a terminal."""


@dataclass
class Result:
    """Base class for typed results from a terminal operation.

    ``message`` holds the raw response on success, or the translated
    error description on failure. ``description`` is auxiliary text:
    the positive sub-status on success, the raw response on failure.
    """

    success: bool
    message: str
    description: str | None = None
