"""
Request and parameter models for the injection engine.

A Request is treated as a value: every mutation performed by the engine
happens on a clone, never on the instance handed in by the caller.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from urllib.parse import urlsplit


class RequestContext(str, Enum):
    """Why a request is being sent."""

    DISCOVERY = "discovery"
    VERIFICATION = "verification"
    BASELINE = "baseline"


class AttackSurface(str, Enum):
    """Part of the request that receives injected parameters."""

    QUERY = "query"
    HEADERS = "headers"
    BODY = "body"


class BodyFormat(str, Enum):
    """Structural encoding of a request body."""

    JSON = "json"
    URLENCODED = "urlencoded"
    MULTIPART = "multipart"
    XML = "xml"  # Detected, no encoder


def generate_id() -> str:
    """Generate a fresh request identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Parameter:
    """A candidate parameter to inject."""

    name: str
    value: str

    @classmethod
    def parse(cls, spec: str) -> Parameter:
        """Parse ``name=value`` (value may be empty or contain ``=``)."""
        name, _, value = spec.partition("=")
        if not name:
            raise ValueError(f"Invalid parameter '{spec}': name is empty")
        return cls(name=name, value=value)


@dataclass
class Request:
    """An HTTP request as seen by the engine."""

    url: str
    method: str = "GET"
    query: str = ""
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: str = ""
    id: str = field(default_factory=generate_id)
    context: RequestContext | None = None

    def clone(self, context: RequestContext | None = None) -> Request:
        """
        Copy the request with a fresh id and independent header lists.

        Args:
            context: Context tag for the copy. Keeps the current one if None.

        Returns:
            A new Request that shares no mutable state with this one.
        """
        return replace(
            self,
            id=generate_id(),
            headers={name: list(values) for name, values in self.headers.items()},
            context=context if context is not None else self.context,
        )

    def _header_key(self, name: str) -> str | None:
        lowered = name.lower()
        for key in self.headers:
            if key.lower() == lowered:
                return key
        return None

    def get_header(self, name: str) -> str | None:
        """Return the first value of a header, matched case-insensitively."""
        key = self._header_key(name)
        if key is None or not self.headers[key]:
            return None
        return self.headers[key][0]

    def set_header(self, name: str, values: list[str]) -> None:
        """Replace a header (any casing) with the given values."""
        self.remove_header(name)
        self.headers[name] = list(values)

    def remove_header(self, name: str) -> None:
        """Remove every casing variant of a header."""
        lowered = name.lower()
        for key in [k for k in self.headers if k.lower() == lowered]:
            del self.headers[key]

    @property
    def full_url(self) -> str:
        """URL with the query string attached."""
        if not self.query:
            return self.url
        return f"{self.url}?{self.query}"

    @classmethod
    def from_raw(cls, text: str, scheme: str = "https") -> Request:
        """
        Parse a Burp/Caido-style raw HTTP request.

        Accepts origin-form (``POST /path HTTP/1.1`` plus a Host header) and
        absolute-form request lines. The body is kept verbatim, including
        CRLF sequences, so multipart bodies survive the round trip.

        Raises:
            ValueError: If the request line or Host header is missing.
        """
        normalized = text.replace("\r\n", "\n")
        head, _, body = normalized.partition("\n\n")
        if "\r\n\r\n" in text:
            body = text.split("\r\n\r\n", 1)[1]

        lines = [line for line in head.split("\n") if line.strip()]
        if not lines:
            raise ValueError("Empty request")

        parts = lines[0].split()
        if len(parts) < 2:
            raise ValueError(f"Malformed request line: {lines[0]!r}")
        method, target = parts[0].upper(), parts[1]

        headers: dict[str, list[str]] = {}
        for line in lines[1:]:
            if ":" not in line:
                continue
            name, value = line.split(":", 1)
            headers.setdefault(name.strip(), []).append(value.strip())

        if "://" in target:
            split = urlsplit(target)
            base = f"{split.scheme}://{split.netloc}{split.path or '/'}"
            query = split.query
        else:
            host = next(
                (values[0] for name, values in headers.items() if name.lower() == "host"),
                None,
            )
            if not host:
                raise ValueError("Missing Host header for origin-form request")
            path, _, query = target.partition("?")
            base = f"{scheme}://{host}{path or '/'}"

        return cls(url=base, method=method, query=query, headers=headers, body=body)

    def to_raw(self) -> str:
        """Render the request in raw HTTP/1.1 form."""
        split = urlsplit(self.full_url)
        target = split.path or "/"
        if split.query:
            target = f"{target}?{split.query}"

        lines = [f"{self.method} {target} HTTP/1.1"]
        if self.get_header("Host") is None and split.netloc:
            lines.append(f"Host: {split.netloc}")
        for name, values in self.headers.items():
            for value in values:
                lines.append(f"{name}: {value}")
        return "\r\n".join(lines) + "\r\n\r\n" + self.body
