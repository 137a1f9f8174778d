#!/usr/bin/env python3
"""
KUBEVET RULE SET - The Judge
----------------------------
Recursive-descent validation of a Pod manifest node tree.

Each entity (document, metadata, spec, os, container, port, probe,
httpGet, resources, resource spec) has one check method that consumes a
node and reports into the call's DiagnosticReporter. Inside a mapping,
required fields are evaluated first, then optional ones, in a fixed
order, so the diagnostic list is stable across runs.

A shape mismatch (e.g. `spec` is a scalar) is reported once and the
subtree is skipped. A missing field is reported and siblings are still
checked, unless the config asks for fail-fast.

Author: KubeVet Team
Date: 2026-10-19
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from kubevet.core.config import DEFAULT_SCHEMA, SchemaConfig
from kubevet.core.errors import (
    FormatError,
    MissingFieldError,
    SchemaViolation,
    UniquenessError,
    ValidationAborted,
)
from kubevet.core.fields import child_by_key, require_field
from kubevet.core.models import Diagnostic, ErrorKind, Mapping, Node
from kubevet.validator.reporter import DiagnosticReporter
from kubevet.validator.scalars import (
    require_choice,
    require_int,
    require_mapping,
    require_pattern,
    require_range,
    require_sequence,
    require_string,
)

logger = logging.getLogger("kubevet.validator")

# (node, field path, sink) -> checked value
Check = Callable[[Node, str, DiagnosticReporter], Any]


class PodValidator:
    """
    Validates one parsed document at a time against the Pod schema.
    Holds only the immutable SchemaConfig, so a single instance can be
    shared between threads.
    """

    def __init__(self, config: SchemaConfig = DEFAULT_SCHEMA):
        self.config = config

    def validate(self, root: Optional[Node]) -> List[Diagnostic]:
        """
        Returns the diagnostics for `root` in evaluation order.
        An empty list means the document is valid.
        """
        sink = DiagnosticReporter(fail_fast=self.config.fail_fast)
        try:
            self._validate_document(root, sink)
        except ValidationAborted:
            logger.debug("Fail-fast: validation stopped at first diagnostic")

        diagnostics = sink.diagnostics
        logger.debug(f"Document checked: {len(diagnostics)} diagnostic(s)")
        return diagnostics

    def is_valid(self, root: Optional[Node]) -> bool:
        return not self.validate(root)

    # --- Plumbing ---

    def _guard(self, sink: DiagnosticReporter, check: Callable, *args) -> Any:
        """Runs a raising check and turns a violation into a diagnostic."""
        try:
            return check(*args)
        except SchemaViolation as e:
            sink.report(e.to_diagnostic())
            return None

    def _field(self, sink: DiagnosticReporter, mapping: Mapping, key: str, path: str,
               check: Check, required: bool = True) -> Any:
        """
        Looks up `key` and runs `check` on it. Returns the checked value,
        or None when the field is absent or invalid.
        """
        if required:
            node = self._guard(sink, require_field, mapping, key, path)
        else:
            node = child_by_key(mapping, key)
        if node is None:
            return None
        return self._guard(sink, check, node, path, sink)

    def _choice(self, allowed: Tuple[str, ...]) -> Check:
        def check(node: Node, path: str, sink: DiagnosticReporter) -> str:
            value = require_string(node, path)
            return require_choice(value, allowed, path, node.line)
        return check

    def _pattern_string(self, regex: re.Pattern) -> Check:
        def check(node: Node, path: str, sink: DiagnosticReporter) -> str:
            value = require_string(node, path)
            return require_pattern(value, regex, path, node.line)
        return check

    def _check_int(self, node: Node, path: str, sink: DiagnosticReporter) -> int:
        return require_int(node, path, coerce_quoted=self.config.coerce_quoted_ints)

    def _check_port_number(self, node: Node, path: str, sink: DiagnosticReporter) -> int:
        value = self._check_int(node, path, sink)
        return require_range(value, self.config.port_min, self.config.port_max, path, node.line)

    # --- Entities ---

    def _validate_document(self, root: Optional[Node], sink: DiagnosticReporter):
        if root is None:
            sink.report(Diagnostic(line=0, message="empty document", kind=ErrorKind.STRUCTURAL))
            return
        doc = self._guard(sink, require_mapping, root, "root")
        if doc is None:
            return

        self._field(sink, doc, "apiVersion", "apiVersion", self._choice((self.config.api_version,)))
        self._field(sink, doc, "kind", "kind", self._choice((self.config.kind,)))
        self._field(sink, doc, "metadata", "metadata", self._check_metadata)
        self._field(sink, doc, "spec", "spec", self._check_pod_spec)

    def _check_metadata(self, node: Node, path: str, sink: DiagnosticReporter):
        meta = require_mapping(node, path)
        self._field(sink, meta, "name", f"{path}.name", self._check_object_name)
        self._field(sink, meta, "namespace", f"{path}.namespace", self._check_free_string, required=False)
        self._field(sink, meta, "labels", f"{path}.labels", self._check_labels, required=False)

    def _check_object_name(self, node: Node, path: str, sink: DiagnosticReporter) -> str:
        name = require_string(node, path, free_form=True)
        if not name.strip():
            raise FormatError(f"{path} must be non-empty string", node.line)
        return name

    def _check_free_string(self, node: Node, path: str, sink: DiagnosticReporter) -> str:
        return require_string(node, path, free_form=True)

    def _check_labels(self, node: Node, path: str, sink: DiagnosticReporter):
        labels = require_mapping(node, path)
        for _, value in labels.pairs:
            self._guard(sink, require_string, value, f"{path} value")

    def _check_pod_spec(self, node: Node, path: str, sink: DiagnosticReporter):
        spec = require_mapping(node, path)
        self._field(sink, spec, "containers", f"{path}.containers", self._check_containers)
        self._field(sink, spec, "os", f"{path}.os", self._check_pod_os, required=False)

    def _check_pod_os(self, node: Node, path: str, sink: DiagnosticReporter):
        os_node = require_mapping(node, path)
        self._field(sink, os_node, "name", f"{path}.name", self._choice(self.config.os_names))

    def _check_containers(self, node: Node, path: str, sink: DiagnosticReporter):
        containers = require_sequence(node, path)
        if not containers.items:
            raise MissingFieldError(f"{path} is required", containers.line)

        # container name -> line of its first occurrence
        seen: Dict[str, int] = {}
        for index, item in enumerate(containers.items):
            self._guard(sink, self._check_container, item, f"{path}[{index}]", sink, seen)

    def _check_container(self, node: Node, path: str, sink: DiagnosticReporter, seen: Dict[str, int]):
        container = require_mapping(node, path)
        cfg = self.config

        name = self._field(sink, container, "name", f"{path}.name",
                           self._pattern_string(cfg.container_name_pattern))
        if name is not None:
            name_line = child_by_key(container, "name").line
            if name in seen:
                sink.report(UniquenessError(
                    f"{path}.name has duplicate value '{name}' (first defined at line {seen[name]})",
                    name_line,
                ).to_diagnostic())
            else:
                seen[name] = name_line

        self._field(sink, container, "image", f"{path}.image", self._pattern_string(cfg.image_pattern))
        self._field(sink, container, "resources", f"{path}.resources", self._check_resources)
        self._field(sink, container, "ports", f"{path}.ports", self._check_ports, required=False)
        for probe in ("readinessProbe", "livenessProbe"):
            self._field(sink, container, probe, f"{path}.{probe}", self._check_probe, required=False)

    def _check_ports(self, node: Node, path: str, sink: DiagnosticReporter):
        ports = require_sequence(node, path)
        for index, item in enumerate(ports.items):
            self._guard(sink, self._check_container_port, item, f"{path}[{index}]", sink)

    def _check_container_port(self, node: Node, path: str, sink: DiagnosticReporter):
        port = require_mapping(node, path)
        self._field(sink, port, "containerPort", f"{path}.containerPort", self._check_port_number)
        self._field(sink, port, "protocol", f"{path}.protocol",
                    self._choice(self.config.protocols), required=False)

    def _check_probe(self, node: Node, path: str, sink: DiagnosticReporter):
        probe = require_mapping(node, path)
        self._field(sink, probe, "httpGet", f"{path}.httpGet", self._check_http_get)

    def _check_http_get(self, node: Node, path: str, sink: DiagnosticReporter):
        action = require_mapping(node, path)
        self._field(sink, action, "path", f"{path}.path", self._pattern_string(self.config.http_path_pattern))
        self._field(sink, action, "port", f"{path}.port", self._check_port_number)

    def _check_resources(self, node: Node, path: str, sink: DiagnosticReporter):
        resources = require_mapping(node, path)
        for section in ("limits", "requests"):
            self._field(sink, resources, section, f"{path}.{section}",
                        self._check_resource_spec, required=False)

    def _check_resource_spec(self, node: Node, path: str, sink: DiagnosticReporter):
        spec = require_mapping(node, path)
        # Other resource names (e.g. ephemeral-storage) are not checked.
        self._field(sink, spec, "cpu", f"{path}.cpu", self._check_int, required=False)
        self._field(sink, spec, "memory", f"{path}.memory",
                    self._pattern_string(self.config.memory_pattern), required=False)
