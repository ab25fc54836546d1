"""
Errors raised by the injection engine.

None of these are retried or recovered inside the engine. They surface to
whoever asked for the request, which aborts that single probe.
"""

from __future__ import annotations

from typing import Any


class InjectionError(Exception):
    """Base class for request synthesis failures."""

    error_code = "injection_error"

    def __init__(self, message: str, metadata: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}


class UnsupportedFormatError(InjectionError):
    """Body matches no known format, or the format has no encoder."""

    error_code = "unsupported_format"


class BodyEncodingError(InjectionError):
    """The existing body could not be parsed in its declared format."""

    error_code = "body_encoding_error"


class JSONPathError(BodyEncodingError):
    """The JSON path expression is not valid."""

    error_code = "json_path_error"


class MultipartError(InjectionError):
    """Structural problem with a multipart/form-data request."""

    error_code = "multipart_error"


class MissingContentTypeError(MultipartError):
    error_code = "missing_content_type"


class MissingBoundaryError(MultipartError):
    error_code = "missing_boundary"


class MalformedMultipartBodyError(MultipartError):
    error_code = "malformed_multipart_body"
