"""
Base encoder interface.

Every body encoder takes the original body text plus a batch of parameters
and returns the new body together with the Content-Type that must travel
with it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from paramfinder.core.models import BodyFormat, Parameter


@dataclass
class EncodedBody:
    """Result of injecting parameters into a body."""

    body: str
    content_type: str
    applied: bool = True  # False when the parameters were dropped
    boundary: str | None = None  # multipart only


class BodyEncoder(ABC):
    """Abstract base class for format-specific body encoders."""

    body_format: BodyFormat

    @abstractmethod
    def encode(
        self,
        body: str,
        parameters: Sequence[Parameter],
        *,
        content_type: str | None = None,
        json_path: str | None = None,
    ) -> EncodedBody:
        """
        Inject parameters into a body.

        Args:
            body: Original body text.
            parameters: Parameters to inject, in order.
            content_type: Declared Content-Type of the original request.
            json_path: Target path inside a JSON document.

        Returns:
            EncodedBody with the new body and its Content-Type.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(format={self.body_format.value!r})"
