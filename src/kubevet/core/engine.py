#!/usr/bin/env python3
"""
KUBEVET ENGINE - The Orchestrator
---------------------------------
ValidationEngine ties the composer and the PodValidator together for
text, single files and directory trees. It owns no mutable state between
calls: every validation gets a fresh composer run and a fresh reporter.

Author: KubeVet Team
Date: 2026-10-19
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from kubevet.core.config import DEFAULT_SCHEMA, SchemaConfig
from kubevet.core.errors import DocumentParseError
from kubevet.core.models import Diagnostic, ErrorKind
from kubevet.parsing.composer import NodeComposer
from kubevet.validator.rules import PodValidator

logger = logging.getLogger("kubevet.engine")


class ValidationEngine:
    """
    Principal entry point for validating Pod manifests.
    """

    def __init__(self, config: SchemaConfig = DEFAULT_SCHEMA):
        self.config = config
        self.composer = NodeComposer()
        self.validator = PodValidator(config)

    def validate_text(self, text: str) -> List[Diagnostic]:
        """
        Validates every document of a YAML stream in order and returns
        the concatenated diagnostics.
        """
        try:
            documents = self.composer.compose_documents(text)
        except DocumentParseError:
            # Line of a syntax error is not reported; the message stands alone.
            return [Diagnostic(line=0, message="cannot parse document", kind=ErrorKind.PARSE)]

        if not documents:
            return [Diagnostic(line=0, message="empty document", kind=ErrorKind.PARSE)]

        diagnostics: List[Diagnostic] = []
        for index, root in enumerate(documents):
            found = self.validator.validate(root)
            logger.debug(f"Document #{index}: {len(found)} diagnostic(s)")
            diagnostics.extend(found)
            if found and self.config.fail_fast:
                break
        return diagnostics

    def validate_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Reads and validates a single manifest. Never raises for bad input;
        read failures are reported as diagnostics.
        """
        path = Path(file_path)
        try:
            # BOM-aware read
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.info(f"Unable to read {path}: {e}")
            diagnostic = Diagnostic(line=0, message=f"cannot read file: {e}", kind=ErrorKind.READ)
            return self._report(path, [diagnostic], status="READ_ERROR")

        diagnostics = self.validate_text(text)
        status = "INVALID" if diagnostics else "VALID"
        return self._report(path, diagnostics, status=status)

    def discover(self, root: Union[str, Path], extension: str = ".yaml") -> List[Path]:
        """
        Lists manifest files under `root` (or `root` itself if it is a file).
        Symlinks are skipped to avoid loops.
        """
        root_path = Path(root)
        if root_path.is_file():
            return [root_path]

        patterns = {f"*{extension.lower()}", f"*{extension.upper()}"}
        found = set()
        for pattern in patterns:
            found.update(f for f in root_path.rglob(pattern) if f.is_file() and not f.is_symlink())
        return sorted(found)

    def scan_directory(self, root: Union[str, Path], extension: str = ".yaml",
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """Validates every manifest found under `root`."""
        files = self.discover(root, extension)
        total = len(files)
        reports = []

        for processed, file_path in enumerate(files, 1):
            reports.append(self.validate_file(file_path))
            if progress_callback:
                progress_callback(processed, total)

        logger.info(f"Scanned {total} file(s) under {root}")
        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregated counters for a batch of file reports."""
        if not reports:
            return {
                "total_files": 0, "valid": 0, "invalid": 0,
                "read_errors": 0, "diagnostics": 0, "success_rate": 0,
            }

        total = len(reports)
        valid = sum(1 for r in reports if r.get("success", False))
        read_errors = sum(1 for r in reports if r.get("status") == "READ_ERROR")

        return {
            "total_files": total,
            "valid": valid,
            "invalid": total - valid,
            "read_errors": read_errors,
            "diagnostics": sum(len(r.get("diagnostics", [])) for r in reports),
            "success_rate": valid / total,
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _report(self, path: Path, diagnostics: List[Diagnostic], status: str) -> Dict[str, Any]:
        return {
            "file_path": str(path),
            "status": status,
            "success": not diagnostics,
            "diagnostics": diagnostics,
            "timestamp": time.time(),
        }
