"""
Mutators applied after the primary injection.
"""

from __future__ import annotations

import threading
import time

from paramfinder.core.models import Request

CONTENT_LENGTH = "Content-Length"
CACHE_BUSTER_PREFIX = "cb"


class CacheBuster:
    """
    Append a throwaway ``cb<ms>=<ms>`` query parameter.

    Timestamps are wall-clock milliseconds, bumped when needed so that
    each value handed out is strictly greater than the previous one.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next_timestamp(self) -> int:
        with self._lock:
            now = time.time_ns() // 1_000_000
            self._last = max(now, self._last + 1)
            return self._last

    def apply(self, request: Request) -> str:
        """Add the cache-buster parameter. Returns the parameter name."""
        timestamp = self.next_timestamp()
        name = f"{CACHE_BUSTER_PREFIX}{timestamp}"
        pair = f"{name}={timestamp}"
        request.query = f"{request.query}&{pair}" if request.query else pair
        return name


def update_content_length(request: Request) -> None:
    """
    Set Content-Length to the UTF-8 byte length of the body.

    An empty body drops the header instead of sending ``0``.
    """
    length = len(request.body.encode("utf-8"))
    if length == 0:
        request.remove_header(CONTENT_LENGTH)
    else:
        request.set_header(CONTENT_LENGTH, [str(length)])
