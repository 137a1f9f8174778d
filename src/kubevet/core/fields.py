#!/usr/bin/env python3
"""
KUBEVET FIELD ACCESSOR
----------------------
Lookup of named children inside Mapping nodes. Absence is not an error
here; callers that need a field use require_field.

Author: KubeVet Team
Date: 2026-10-19
"""

from typing import Optional

from kubevet.core.errors import MissingFieldError
from kubevet.core.models import Mapping, Node


def child_by_key(mapping: Mapping, key: str) -> Optional[Node]:
    """
    Returns the value node stored under `key`, or None.
    Linear scan in document order; on duplicate keys the first one wins.
    """
    for name, value in mapping.pairs:
        if name == key:
            return value
    return None


def require_field(mapping: Mapping, key: str, field: str) -> Node:
    node = child_by_key(mapping, key)
    if node is None:
        raise MissingFieldError(f"{field} is required")
    return node
