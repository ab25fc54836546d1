"""
JSON body encoder.

Parameters become string-valued keys, either on the root object or on the
object matched by a JSON path.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import structlog

from paramfinder.core.detector import loads_strict
from paramfinder.core.errors import BodyEncodingError
from paramfinder.core.models import BodyFormat, Parameter
from paramfinder.encoders import json_path as jsonpath
from paramfinder.encoders.base import BodyEncoder, EncodedBody

logger = structlog.get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


class JSONBodyEncoder(BodyEncoder):
    """Inject parameters as keys of a JSON object."""

    body_format = BodyFormat.JSON

    def encode(
        self,
        body: str,
        parameters: Sequence[Parameter],
        *,
        content_type: str | None = None,
        json_path: str | None = None,
    ) -> EncodedBody:
        document = self._parse(body)

        if json_path:
            applied = self._merge_at_path(document, json_path, parameters)
        else:
            applied = self._merge_at_root(document, parameters)

        return EncodedBody(
            body=json.dumps(document, separators=(",", ":"), ensure_ascii=False),
            content_type=JSON_CONTENT_TYPE,
            applied=applied,
        )

    @staticmethod
    def _parse(body: str) -> Any:
        if not body:
            return {}
        try:
            return loads_strict(body)
        except ValueError as e:
            raise BodyEncodingError(
                f"Failed to handle JSON body: {e}",
                metadata={"body_length": len(body)},
            ) from e

    def _merge_at_root(self, document: Any, parameters: Sequence[Parameter]) -> bool:
        root = jsonpath.JSONNode.of(document)
        if root.kind is jsonpath.NodeKind.SCALAR:
            raise BodyEncodingError(
                f"Failed to handle JSON body: cannot add keys to a {type(document).__name__} root",
                metadata={"root_type": type(document).__name__},
            )
        return self._merge_into(root, parameters, jsonpath.ROOT)

    def _merge_at_path(
        self,
        document: Any,
        path: str,
        parameters: Sequence[Parameter],
    ) -> bool:
        anchored = jsonpath.normalize_path(path)
        matches = jsonpath.find(document, anchored)
        if len(matches) > 1:
            logger.warning(
                "json_path_ambiguous",
                path=anchored,
                matches=len(matches),
                dropped=len(parameters),
            )
            return False
        return self._merge_into(matches[0] if matches else None, parameters, anchored)

    @staticmethod
    def _merge_into(
        node: jsonpath.JSONNode | None,
        parameters: Sequence[Parameter],
        path: str,
    ) -> bool:
        if node is None or not node.is_container:
            # Parameters are dropped; the request still goes out unchanged
            logger.warning(
                "json_path_target_not_container",
                path=path,
                kind=node.kind.value if node else None,
                dropped=len(parameters),
            )
            return False

        for param in parameters:
            node.value[param.name] = param.value
        return True
