"""
Encoder lookup by body format.

XML is recognised by the detector but has no encoder here, so asking for
one raises UnsupportedFormatError.
"""

from __future__ import annotations

from paramfinder.core.errors import UnsupportedFormatError
from paramfinder.core.models import BodyFormat
from paramfinder.encoders.base import BodyEncoder
from paramfinder.encoders.json_body import JSONBodyEncoder
from paramfinder.encoders.multipart import MultipartBodyEncoder
from paramfinder.encoders.urlencoded import URLEncodedBodyEncoder

ENCODERS: dict[BodyFormat, BodyEncoder] = {
    BodyFormat.JSON: JSONBodyEncoder(),
    BodyFormat.URLENCODED: URLEncodedBodyEncoder(),
    BodyFormat.MULTIPART: MultipartBodyEncoder(),
}


def get_encoder(body_format: BodyFormat) -> BodyEncoder:
    """
    Get the encoder for a body format.

    Raises:
        UnsupportedFormatError: If the format has no encoder.
    """
    encoder = ENCODERS.get(body_format)
    if encoder is None:
        raise UnsupportedFormatError(
            "Unsupported body type.",
            metadata={"body_format": body_format.value},
        )
    return encoder
