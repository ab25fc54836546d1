"""
multipart/form-data body encoder.

New parts are spliced in just before the closing boundary of the original
body. The original Content-Type, boundary included, is kept verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from paramfinder.core.errors import (
    MalformedMultipartBodyError,
    MissingBoundaryError,
    MissingContentTypeError,
)
from paramfinder.core.models import BodyFormat, Parameter
from paramfinder.encoders.base import BodyEncoder, EncodedBody

CRLF = "\r\n"

BOUNDARY_PATTERN = re.compile(r'boundary=(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)


def extract_boundary(content_type: str | None) -> str:
    """
    Pull the boundary token out of a Content-Type header value.

    Raises:
        MissingContentTypeError: If there is no Content-Type.
        MissingBoundaryError: If it carries no boundary directive.
    """
    if not content_type:
        raise MissingContentTypeError("Missing Content-Type header")

    match = BOUNDARY_PATTERN.search(content_type)
    if not match:
        raise MissingBoundaryError(
            "Missing multipart boundary",
            metadata={"content_type": content_type},
        )
    return match.group(1) or match.group(2)


def render_part(boundary: str, param: Parameter) -> str:
    """Render one form-data part, including its trailing CRLF."""
    # Names go in unescaped
    return (
        f"--{boundary}{CRLF}"
        f'Content-Disposition: form-data; name="{param.name}"{CRLF}'
        f"{CRLF}"
        f"{param.value}{CRLF}"
    )


class MultipartBodyEncoder(BodyEncoder):
    """Insert form-data parts before the closing boundary."""

    body_format = BodyFormat.MULTIPART

    def encode(
        self,
        body: str,
        parameters: Sequence[Parameter],
        *,
        content_type: str | None = None,
        json_path: str | None = None,
    ) -> EncodedBody:
        boundary = extract_boundary(content_type)
        closing = f"--{boundary}--"

        index = body.find(closing)
        if index == -1:
            raise MalformedMultipartBodyError(
                "Invalid multipart body: cannot find final boundary",
                metadata={"boundary": boundary},
            )

        prefix = body[:index]
        if not prefix.endswith(CRLF):
            prefix += CRLF

        parts = "".join(render_part(boundary, p) for p in parameters)

        return EncodedBody(
            body=prefix + parts + closing,
            content_type=content_type,
            boundary=boundary,
        )
