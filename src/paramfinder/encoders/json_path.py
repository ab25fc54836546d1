"""
JSON path lookup for injection targets.

Expressions are compiled by jsonpath-ng (extended grammar, so recursive
descent, wildcards and filters all work). Matches come back as typed nodes:
objects, arrays and scalars are distinct kinds, and only objects can take
parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from jsonpath_ng.jsonpath import JSONPath
from jsonpath_ng.exceptions import JSONPathError as JSONPathSyntaxError
from jsonpath_ng.ext import parse as parse_jsonpath

from paramfinder.core.errors import JSONPathError

ROOT = "$"


class NodeKind(str, Enum):
    """Kinds of JSON values."""

    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"


@dataclass
class JSONNode:
    """A matched location inside a parsed JSON document."""

    kind: NodeKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> JSONNode:
        if isinstance(value, dict):
            return cls(NodeKind.OBJECT, value)
        if isinstance(value, list):
            return cls(NodeKind.ARRAY, value)
        return cls(NodeKind.SCALAR, value)

    @property
    def is_container(self) -> bool:
        """True for objects, the only node kind parameters can be merged into."""
        return self.kind is NodeKind.OBJECT


def normalize_path(path: str) -> str:
    """Anchor a path at the root marker: ``a.b`` -> ``$.a.b``, ``[0]`` -> ``$[0]``."""
    path = path.strip()
    if path.startswith(ROOT):
        return path
    if path.startswith("["):
        return f"{ROOT}{path}"
    return f"{ROOT}.{path}"


@lru_cache(maxsize=128)
def compile_path(path: str) -> JSONPath:
    """
    Compile a (possibly unanchored) JSON path expression.

    Raises:
        JSONPathError: If the expression does not parse.
    """
    expression = normalize_path(path)
    try:
        return parse_jsonpath(expression)
    except (JSONPathSyntaxError, ValueError) as e:
        raise JSONPathError(
            f"Invalid JSON path {expression!r}: {e}",
            metadata={"path": expression},
        ) from e


def find(document: Any, path: str) -> list[JSONNode]:
    """
    Return every node the path matches, in document order.

    The nodes wrap the live values, so merging into an object match
    mutates ``document``.
    """
    return [JSONNode.of(match.value) for match in compile_path(path).find(document)]
