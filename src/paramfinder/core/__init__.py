"""
paramfinder core package.

Request synthesis engine:
- Models: Request, Parameter and the closed enums around them
- Detector: body format classification
- Injection: query, header and body strategies
- Mutators: cache buster and Content-Length recompute
- Requester: the dispatcher tying them together

Only the leaf modules are re-exported here; import the injection,
mutators and requester modules directly.
"""

from paramfinder.core.errors import (
    BodyEncodingError,
    InjectionError,
    JSONPathError,
    MalformedMultipartBodyError,
    MissingBoundaryError,
    MissingContentTypeError,
    MultipartError,
    UnsupportedFormatError,
)
from paramfinder.core.models import (
    AttackSurface,
    BodyFormat,
    Parameter,
    Request,
    RequestContext,
    generate_id,
)
from paramfinder.core.detector import detect_body_format

__all__ = [
    # Models
    "AttackSurface",
    "BodyFormat",
    "Parameter",
    "Request",
    "RequestContext",
    "generate_id",
    # Errors
    "BodyEncodingError",
    "InjectionError",
    "JSONPathError",
    "MalformedMultipartBodyError",
    "MissingBoundaryError",
    "MissingContentTypeError",
    "MultipartError",
    "UnsupportedFormatError",
    # Detection
    "detect_body_format",
]
