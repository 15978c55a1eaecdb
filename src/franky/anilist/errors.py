"""Errors raised by the AniList integration."""

from __future__ import annotations

from typing import Optional


class NetworkError(Exception):
    """AniList could not be reached or answered with a non-success status.

    Attributes:
        status: HTTP status code, or ``None`` when no response was received.
        reason: Reason phrase or underlying transport error text.
    """

    def __init__(self, status: Optional[int], reason: str) -> None:
        self.status = status
        self.reason = reason
        if status is None:
            message = f"Unable to reach AniList API: {reason}"
        else:
            message = f"AniList API returned status {status}: {reason}"
        super().__init__(message)
