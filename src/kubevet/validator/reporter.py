#!/usr/bin/env python3
"""
KUBEVET DIAGNOSTIC REPORTER
---------------------------
Collects Diagnostics for one validation call and renders them in the
`<file>:<line> <message>` form used by the CLI.

Two policies:
  * collect-all (default): every detectable violation is recorded.
  * fail-fast: the first recorded diagnostic raises ValidationAborted,
    which the rule set catches to end the call early.

Author: KubeVet Team
Date: 2026-10-19
"""

from typing import Iterable, List

from kubevet.core.errors import ValidationAborted
from kubevet.core.models import Diagnostic


def format_diagnostic(file_name: str, diagnostic: Diagnostic) -> str:
    if diagnostic.line > 0:
        return f"{file_name}:{diagnostic.line} {diagnostic.message}"
    return f"{file_name} {diagnostic.message}"


class DiagnosticReporter:
    """Diagnostic sink. Create one per validation call; it is not shared."""

    def __init__(self, fail_fast: bool = False):
        self.fail_fast = fail_fast
        self._diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic):
        self._diagnostics.append(diagnostic)
        if self.fail_fast:
            raise ValidationAborted(diagnostic.message)

    def extend(self, diagnostics: Iterable[Diagnostic]):
        for diagnostic in diagnostics:
            self.report(diagnostic)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        return bool(self._diagnostics)

    def render(self, file_name: str) -> List[str]:
        return [format_diagnostic(file_name, d) for d in self._diagnostics]
