#!/usr/bin/env python3
"""
KUBEVET CLI
-----------
Command-line front end for the validation engine.

  kubevet check FILE [FILE ...]   diagnostics to stderr, exit 1 if any
  kubevet scan PATH               table report over a file or directory

Author: KubeVet Team
Date: 2026-10-19
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)

from kubevet.cli.formatter import KubeFormatter, console, err_console
from kubevet.core.config import DEFAULT_SCHEMA, SchemaConfig, load_schema_config
from kubevet.core.engine import ValidationEngine
from kubevet.core.errors import SchemaConfigError

VERSION = "kubevet v1.0.0"


class KubeVetCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="kubevet",
            description="KubeVet - Pod manifest schema validator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = KubeFormatter()
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=VERSION)

        # Flags shared by every subcommand
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument("--fail-fast", action="store_true", help="Stop at the first diagnostic")
        common.add_argument("--coerce-quoted-ints", action="store_true",
                            help="Accept quoted integers such as cpu: \"4\"")
        common.add_argument("--schema", metavar="PATH", help="JSON file overriding schema constants")
        common.add_argument("--verbose", action="store_true", help="Enable info logging")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        check_parser = subparsers.add_parser("check", parents=[common], help="Validate manifest files")
        check_parser.add_argument("files", nargs="+", help="YAML files to validate")

        scan_parser = subparsers.add_parser("scan", parents=[common], help="Validate a directory tree with a report")
        scan_parser.add_argument("path", help="Path to a YAML file or directory")
        scan_parser.add_argument("--ext", default=".yaml", help="File extension filter (default: .yaml)")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]{VERSION}[/bold cyan]\n"
            "══════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _build_config(self, args: argparse.Namespace) -> SchemaConfig:
        config = load_schema_config(args.schema) if args.schema else DEFAULT_SCHEMA
        overrides = {}
        if args.fail_fast:
            overrides["fail_fast"] = True
        if args.coerce_quoted_ints:
            overrides["coerce_quoted_ints"] = True
        return dataclasses.replace(config, **overrides) if overrides else config

    def _run_check(self, args: argparse.Namespace, engine: ValidationEngine) -> int:
        failed = False
        for file_name in args.files:
            report = engine.validate_file(file_name)
            self.formatter.print_diagnostics(file_name, report["diagnostics"])
            if not report["success"]:
                failed = True
                if args.fail_fast:
                    break
        return 1 if failed else 0

    def _run_scan(self, args: argparse.Namespace, engine: ValidationEngine) -> int:
        input_path = Path(args.path)
        if not input_path.exists():
            err_console.print(f"[bold red]Error:[/bold red] Path '{escape(args.path)}' not found.")
            return 1

        self.print_header("Pod Manifest Scan")
        target_files = engine.discover(input_path, args.ext)
        if not target_files:
            console.print("\n[bold yellow]⚠️  No valid YAML files found.[/bold yellow]")
            return 0

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console
        ) as progress:
            task_id = progress.add_task("Validating manifests...", total=len(target_files))

            def advance(done: int, total: int):
                progress.update(task_id, completed=done, description=f"Checked {done}/{total}")

            reports = engine.scan_directory(input_path, args.ext, progress_callback=advance)

        for r in reports:
            self.formatter.print_diagnostics(r["file_path"], r["diagnostics"])
        self.formatter.print_final_table(reports)
        self.formatter.print_summary(engine.generate_summary(reports))
        return 0 if all(r["success"] for r in reports) else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point; returns the process exit code."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("Pod Manifest Validator")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        if args.command is None:
            self.parser.print_help()
            return 0

        logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

        try:
            engine = ValidationEngine(self._build_config(args))
        except SchemaConfigError as e:
            err_console.print(f"[bold red]CRITICAL ERROR:[/bold red] {escape(str(e))}")
            return 1

        if args.command == "check":
            return self._run_check(args, engine)
        return self._run_scan(args, engine)


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeVetCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
