#!/usr/bin/env python3
"""
KUBEVET SCHEMA CONFIGURATION
----------------------------
The constants of the Pod schema (allowed values, name/image/memory
patterns, port bounds) and the two policy switches live in one frozen
SchemaConfig that is handed to the validator. Overrides can be loaded
from a JSON file.

Author: KubeVet Team
Date: 2026-10-19
"""

import json
import logging
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from kubevet.core.errors import SchemaConfigError

logger = logging.getLogger("kubevet.config")

_PATTERN_FIELDS = (
    "container_name_pattern",
    "image_pattern",
    "memory_pattern",
    "http_path_pattern",
)
_TUPLE_FIELDS = ("os_names", "protocols")


@dataclass(frozen=True)
class SchemaConfig:
    api_version: str = "v1"
    kind: str = "Pod"
    os_names: Tuple[str, ...] = ("linux", "windows")
    protocols: Tuple[str, ...] = ("TCP", "UDP")
    container_name_pattern: re.Pattern = re.compile(r"^[a-z][a-z0-9_]*$")
    image_pattern: re.Pattern = re.compile(r"^registry\.bigbrother\.io/[^:]+:.+$")
    memory_pattern: re.Pattern = re.compile(r"^\d+(Gi|Mi|Ki)$")
    http_path_pattern: re.Pattern = re.compile(r"^/")
    port_min: int = 1
    port_max: int = 65535
    # Accept "4" (quoted) where an int is expected.
    coerce_quoted_ints: bool = False
    # Stop at the first diagnostic instead of collecting all of them.
    fail_fast: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaConfig":
        """
        Builds a config from plain values (e.g. decoded JSON).
        Missing keys keep their defaults; pattern values are regex strings.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SchemaConfigError(f"Unknown schema config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in _PATTERN_FIELDS:
                try:
                    values[key] = re.compile(value)
                except (re.error, TypeError) as e:
                    raise SchemaConfigError(f"Invalid regex for '{key}': {e}")
            elif key in _TUPLE_FIELDS:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise SchemaConfigError(f"'{key}' must be a list of strings")
                values[key] = tuple(value)
            elif key in ("port_min", "port_max"):
                if not isinstance(value, int) or isinstance(value, bool):
                    raise SchemaConfigError(f"'{key}' must be an integer")
                values[key] = value
            elif key in ("coerce_quoted_ints", "fail_fast"):
                if not isinstance(value, bool):
                    raise SchemaConfigError(f"'{key}' must be a boolean")
                values[key] = value
            else:
                if not isinstance(value, str):
                    raise SchemaConfigError(f"'{key}' must be a string")
                values[key] = value

        config = replace(cls(), **values)
        if config.port_min > config.port_max:
            raise SchemaConfigError("port_min must not exceed port_max")
        return config


DEFAULT_SCHEMA = SchemaConfig()


def load_schema_config(path: Union[str, Path]) -> SchemaConfig:
    """Loads a JSON override file on top of DEFAULT_SCHEMA."""
    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Unable to load schema config from {config_path}")
        raise SchemaConfigError(f"Failed to load schema config: {str(e)}")

    if not isinstance(data, dict):
        raise SchemaConfigError("Schema config must be a JSON object")

    logger.debug(f"Loaded schema overrides: {sorted(data)}")
    return SchemaConfig.from_dict(data)
