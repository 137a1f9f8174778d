#!/usr/bin/env python3
"""
KUBEVET ERRORS
--------------
Exception hierarchy shared by the validator, the parser adapter and the
configuration loader. Schema violations are raised by the scalar checks
and converted into Diagnostics by the rule set; they never reach callers.

Author: KubeVet Team
Date: 2026-10-19
"""

from kubevet.core.models import Diagnostic, ErrorKind


class KubeVetError(Exception):
    """Base exception for all KubeVet errors."""
    pass


class SchemaViolation(KubeVetError):
    """A single schema rule failed at a given line."""

    kind = ErrorKind.FORMAT

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(line=self.line, message=self.message, kind=self.kind)


class StructuralError(SchemaViolation):
    """Node kind does not match the required shape (scalar/mapping/sequence)."""
    kind = ErrorKind.STRUCTURAL


class MissingFieldError(SchemaViolation):
    """Required key is absent."""
    kind = ErrorKind.MISSING


class FormatError(SchemaViolation):
    """Value fails a type, pattern, range or enumeration constraint."""
    kind = ErrorKind.FORMAT


class UniquenessError(SchemaViolation):
    """Duplicate identifier within one scope."""
    kind = ErrorKind.UNIQUENESS


class ValidationAborted(KubeVetError):
    """Raised by a fail-fast reporter once the first diagnostic is recorded."""
    pass


class DocumentParseError(KubeVetError):
    """The YAML stream could not be composed into nodes."""

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.line = line


class SchemaConfigError(KubeVetError):
    """A schema configuration file is unreadable or invalid."""
    pass
