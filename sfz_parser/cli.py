"""
SFZ Parser – command-line interface
===================================

Usage
-----
::

    python -m sfz_parser.cli SOURCE [OPTIONS]

Options
-------
--include-path, -I    Extra directory searched for ``#include`` targets.
--output, -o          Output file path (default: stdout).
--format, -f          Output format: ``json`` (default) or ``text``.
--strict              Fail (exit 1) when the parse produced any warning.
--resolve, -r         Opcode(s) to resolve for every region.
--verbose, -v         Enable DEBUG logging.

Exit codes: 0 on success, 1 on a parse error or a strict-mode failure, 2 when
the source file does not exist.

Examples
--------
::

    python -m sfz_parser.cli piano.sfz
    python -m sfz_parser.cli piano.sfz -f text -r sample -r lokey -r hikey
    python -m sfz_parser.cli piano.sfz -I ./shared --strict -o piano.json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .errors import SfzError, StrictModeError
from .models import ParseResult, ParseWarning, ScopeNode
from .pipeline.sfz_analysis import SfzAnalysis


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sfz_parser",
        description="SFZ Parser – parse an SFZ instrument and print its scope tree",
    )
    p.add_argument("source", help="SFZ file to parse")
    p.add_argument(
        "--include-path", "-I",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory searched for #include targets (repeatable)",
    )
    p.add_argument(
        "--output", "-o",
        default="-",
        metavar="FILE",
        help="Output file (default: stdout)",
    )
    p.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Treat any warning as an error (exit status 1)",
    )
    p.add_argument(
        "--resolve", "-r",
        action="append",
        default=[],
        metavar="OPCODE",
        help="Resolve OPCODE for every region, including inherited and default "
             "values (repeatable)",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def _resolved_regions(result: ParseResult, opcodes: List[str]) -> List[Dict[str, Any]]:
    document = result.document
    rows: List[Dict[str, Any]] = []
    for index, region in enumerate(document.regions):
        values: Dict[str, Any] = {}
        for name in opcodes:
            value = document.resolve(region, name)
            values[name] = value.value if value is not None else None
        rows.append({"index": index, "line": region.line, "opcodes": values})
    return rows


def _format_text(result: ParseResult, resolved: List[Dict[str, Any]]) -> str:
    document = result.document
    lines: List[str] = [
        f"{'═'*60}",
        f"  File: {result.source}",
        f"  Regions: {len(document.regions)}   Warnings: {len(result.warnings)}",
        f"{'═'*60}",
    ]

    def _render(node: ScopeNode, depth: int) -> None:
        indent = "  " * depth
        title = f"<{node.kind.value}>"
        if node.implicit:
            title += " (implicit)"
        if node.label:
            title += f" {node.label}"
        lines.append(f"{indent}{title}")
        for name, value in node.opcodes.items():
            lines.append(f"{indent}    {name:<20} = {value.value}")
        for child in node.children:
            _render(child, depth + 1)

    _render(document.global_scope, 0)

    side = (
        document.controls + document.curves + document.effects
        + document.midis + document.samples
    )
    if side:
        lines.append(f"\n{'─'*60}")
        for node in side:
            _render(node, 0)

    if resolved:
        lines.append(f"\n{'─'*60}\n  RESOLVED OPCODES\n{'─'*60}")
        for row in resolved:
            pairs = ", ".join(f"{k}={v}" for k, v in row["opcodes"].items())
            lines.append(f"  region #{row['index']} (line {row['line']}): {pairs}")

    return "\n".join(lines)


def _report_warnings(warnings: List[ParseWarning]) -> None:
    """Print the warning summary to stderr."""
    if not warnings:
        return
    print(
        f"\nWARNING: {len(warnings)} warning{'' if len(warnings) == 1 else 's'}:",
        file=sys.stderr,
    )
    for w in warnings:
        print(f"  {w}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not Path(args.source).is_file():
        print(f"error: source file not found: {args.source}", file=sys.stderr)
        return 2

    analysis = SfzAnalysis(include_paths=args.include_path, strict=args.strict)

    try:
        result = analysis.parse_file(args.source)
    except StrictModeError as exc:
        _report_warnings(exc.warnings)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except SfzError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _report_warnings(result.warnings)

    resolved = _resolved_regions(result, args.resolve)
    if args.format == "json":
        output_data = result.to_dict()
        if resolved:
            output_data["resolved"] = resolved
        output_text = json.dumps(output_data, indent=2)
    else:
        output_text = _format_text(result, resolved)

    if args.output == "-":
        print(output_text)
    else:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"Output written to {args.output}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
