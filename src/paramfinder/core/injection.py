"""
Injection strategies, one per attack surface.

Each strategy mutates the request it is given in place. Callers hand in a
clone (see Request.clone), never the caller-owned original.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Callable

import structlog

from paramfinder.core.detector import detect_body_format
from paramfinder.core.models import AttackSurface, BodyFormat, Parameter, Request
from paramfinder.encoders.registry import get_encoder
from paramfinder.encoders.urlencoded import append_pairs
from paramfinder.utils.once import OnceCell

logger = structlog.get_logger(__name__)

CONTENT_TYPE = "Content-Type"


class InjectionStrategy(ABC):
    """Abstract base class for attack surface strategies."""

    surface: AttackSurface

    @abstractmethod
    def inject(self, request: Request, parameters: Sequence[Parameter]) -> None:
        """Inject parameters into the request."""
        ...


class QueryInjector(InjectionStrategy):
    """Append percent-encoded parameters to the query string."""

    surface = AttackSurface.QUERY

    def inject(self, request: Request, parameters: Sequence[Parameter]) -> None:
        request.query = append_pairs(request.query, parameters)


class HeaderInjector(InjectionStrategy):
    """Set one header per parameter, overwriting same-named headers."""

    surface = AttackSurface.HEADERS

    def inject(self, request: Request, parameters: Sequence[Parameter]) -> None:
        for param in parameters:
            request.set_header(param.name, [param.value])


class BodyInjector(InjectionStrategy):
    """
    Inject parameters into the request body.

    The body format is detected on the first call and then frozen for the
    lifetime of the injector. Later calls never re-run detection, so a body
    that has already been through an encoder cannot flip the classification.
    The multipart boundary is remembered the same way.
    """

    surface = AttackSurface.BODY

    def __init__(
        self,
        json_path: Callable[[], str | None] | None = None,
        on_format_detected: Callable[[BodyFormat], None] | None = None,
    ) -> None:
        """
        Initialize the body injector.

        Args:
            json_path: Returns the current JSON target path (read per call).
            on_format_detected: Notified once, when the format is first determined.
        """
        self._json_path = json_path or (lambda: None)
        self._on_format_detected = on_format_detected
        self._format: OnceCell[BodyFormat] = OnceCell()
        self._boundary: OnceCell[str] = OnceCell()

    @property
    def body_format(self) -> BodyFormat | None:
        """Cached body format, or None before the first body injection."""
        return self._format.get()

    @property
    def multipart_boundary(self) -> str | None:
        """Cached multipart boundary, or None if none has been seen."""
        return self._boundary.get()

    def resolve_format(self, request: Request) -> BodyFormat:
        """Return the cached format, detecting it from ``request`` on first use."""
        if self._format.is_set:
            return self._format.get()  # type: ignore[return-value]

        def detect() -> BodyFormat:
            content_type = request.get_header(CONTENT_TYPE)
            detected = detect_body_format(request.body, content_type)
            logger.info("body_format_determined", body_format=detected.value)
            if self._on_format_detected is not None:
                self._on_format_detected(detected)
            return detected

        return self._format.get_or_init(detect)

    def inject(self, request: Request, parameters: Sequence[Parameter]) -> None:
        body_format = self.resolve_format(request)
        encoder = get_encoder(body_format)

        content_type = request.get_header(CONTENT_TYPE)
        encoded = encoder.encode(
            request.body,
            parameters,
            content_type=content_type,
            json_path=self._json_path(),
        )

        request.body = encoded.body
        request.set_header(CONTENT_TYPE, [encoded.content_type])
        if encoded.boundary is not None:
            self._boundary.set_if_empty(encoded.boundary)
