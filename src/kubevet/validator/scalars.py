#!/usr/bin/env python3
"""
KUBEVET SCALAR VALIDATORS
-------------------------
Shape and value checks for single nodes. Each check returns the checked
value on success and raises a SchemaViolation carrying the node's line
otherwise. The rule set turns those into Diagnostics.

Author: KubeVet Team
Date: 2026-10-19
"""

import re
from typing import Iterable

from kubevet.core.errors import FormatError, StructuralError
from kubevet.core.models import Mapping, Node, Scalar, Sequence, TypeTag

# Bare numeric tokens a free-form string field still accepts.
_FREE_FORM_TAGS = (TypeTag.STR, TypeTag.INT, TypeTag.FLOAT)
_DECIMAL_INT = re.compile(r"^[-+]?[0-9]+$")


def require_mapping(node: Node, field: str) -> Mapping:
    if not isinstance(node, Mapping):
        raise StructuralError(f"{field} must be object", node.line)
    return node


def require_sequence(node: Node, field: str) -> Sequence:
    if not isinstance(node, Sequence):
        raise StructuralError(f"{field} must be array", node.line)
    return node


def require_string(node: Node, field: str, free_form: bool = False) -> str:
    """
    Accepts scalars typed as strings. With free_form=True an unquoted
    token that the resolver typed as a number (e.g. `name: 123`) is
    accepted as its raw text.
    """
    if isinstance(node, Scalar):
        if node.tag is TypeTag.STR:
            return node.value
        if free_form and node.tag in _FREE_FORM_TAGS:
            return node.value
    raise FormatError(f"{field} must be string", node.line)


def _parse_int(text: str) -> int:
    cleaned = text.replace("_", "")
    try:
        return int(cleaned)
    except ValueError:
        # 0x1F, 0o17, 0b101
        return int(cleaned, 0)


def require_int(node: Node, field: str, coerce_quoted: bool = False) -> int:
    """
    Accepts INT-tagged scalars only. A quoted numeric string is a type
    violation unless coerce_quoted is set.
    """
    if isinstance(node, Scalar):
        if node.tag is TypeTag.INT:
            try:
                return _parse_int(node.value)
            except ValueError:
                pass
        elif coerce_quoted and node.tag is TypeTag.STR and _DECIMAL_INT.match(node.value.strip()):
            return int(node.value.strip())
    raise FormatError(f"{field} must be int", node.line)


def require_range(value: int, lo: int, hi: int, field: str, line: int = 0) -> int:
    """Inclusive on both ends."""
    if value < lo or value > hi:
        raise FormatError(f"{field} value out of range", line)
    return value


def require_pattern(value: str, regex: re.Pattern, field: str, line: int = 0) -> str:
    if not regex.search(value):
        raise FormatError(f"{field} has invalid format '{value}'", line)
    return value


def require_choice(value: str, allowed: Iterable[str], field: str, line: int = 0) -> str:
    if value not in allowed:
        raise FormatError(f"{field} has unsupported value '{value}'", line)
    return value
