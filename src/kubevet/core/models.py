#!/usr/bin/env python3
"""
KUBEVET CORE MODELS
-------------------
Defines the fundamental data structures used across the KubeVet engine.
A parsed manifest is represented as a closed family of immutable nodes
(Scalar, Mapping, Sequence); validation results are Diagnostics.

Author: KubeVet Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union


class NodeKind(Enum):
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


class TypeTag(Enum):
    """Primitive type inferred (or declared) for a scalar."""
    STR = "str"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"
    OTHER = "other"


class ErrorKind(Enum):
    """Category of a Diagnostic. The first four are schema violations."""
    STRUCTURAL = "structural"
    MISSING = "missing"
    FORMAT = "format"
    UNIQUENESS = "uniqueness"
    PARSE = "parse"
    READ = "read"


@dataclass(frozen=True)
class Scalar:
    """
    A leaf value of the manifest.

    `value` is always the raw source text; `tag` tells how the YAML
    resolver typed it. `quoted` is True for single/double quoted scalars.
    """
    value: str
    tag: TypeTag
    line: int = 0
    quoted: bool = False

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SCALAR


@dataclass(frozen=True)
class Mapping:
    """Ordered key/value pairs exactly as they appear in the document."""
    pairs: Tuple[Tuple[str, "Node"], ...] = ()
    line: int = 0

    @property
    def kind(self) -> NodeKind:
        return NodeKind.MAPPING

    def keys(self) -> Iterator[str]:
        return (key for key, _ in self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


@dataclass(frozen=True)
class Sequence:
    items: Tuple["Node", ...] = ()
    line: int = 0

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SEQUENCE

    def __len__(self) -> int:
        return len(self.items)


Node = Union[Scalar, Mapping, Sequence]


@dataclass(frozen=True)
class Diagnostic:
    """
    One reported violation.

    line is 1-based; 0 means the problem cannot be pinned to a location
    (missing fields, unparseable input).
    """
    line: int
    message: str
    kind: ErrorKind = ErrorKind.FORMAT

    def to_dict(self) -> dict:
        return {"line": self.line, "message": self.message, "kind": self.kind.value}
