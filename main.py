#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from src.extraction.config import load_extraction_config
from src.extraction.dependencies import find_cycles
from src.extraction.engine import analyze, extract
from src.parsing.utils import guess_declared_type

OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser(command: str) -> argparse.ArgumentParser:
    descriptions = {
        "extract": "Extract task candidates and dependencies from a document.",
        "analyze": "Extract tasks from a document and synthesize recommendations.",
    }
    parser = argparse.ArgumentParser(description=descriptions[command], prog=f"python -m main {command}")
    parser.add_argument("path", type=Path, help="Document to read. Use '-' for standard input.")
    parser.add_argument(
        "--type",
        dest="declared_type",
        help="Declared content type (MIME type or suffix). Guessed from the file suffix when omitted.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to an extraction configuration file. Defaults to config/extraction.yaml when present.",
    )
    parser.add_argument(
        "--output",
        choices=[OUTPUT_TEXT, OUTPUT_JSON],
        default=OUTPUT_JSON,
        help="Output format: machine-readable JSON or human-readable text.",
    )
    parser.add_argument(
        "--check-cycles",
        action="store_true",
        help="Report dependency cycles on standard error.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity.",
    )
    return parser


def _read_document(path: Path) -> bytes:
    if str(path) == "-":
        return sys.stdin.buffer.read()
    return path.read_bytes()


def _resolve_declared_type(args: argparse.Namespace) -> str:
    if args.declared_type:
        return args.declared_type
    if str(args.path) == "-":
        return "text/markdown"
    return guess_declared_type(args.path)


def _format_text(payload: dict, *, title: str | None) -> str:
    lines: list[str] = []
    if title:
        lines.append(title)
    for task in payload["tasks"]:
        tags = f" [{', '.join(task['tags'])}]" if task["tags"] else ""
        lines.append(
            f"{task['index']:>3}. {task['title']} "
            f"({task['priority']}, {task['estimated_duration_minutes']} min){tags}"
        )
    for source, targets in payload.get("dependencies", {}).items():
        lines.append(f"  {source} depends on {', '.join(str(target) for target in targets)}")
    for item in payload.get("recommendations", []):
        lines.append(f"* [{item['type']}] {item['content']}")
    for insight in payload["insights"]:
        lines.append(f"- {insight}")
    lines.append(f"Estimated effort: {payload['estimated_effort_minutes']} min")
    return "\n".join(lines)


def run_cli(command: str, args: argparse.Namespace) -> int:
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_extraction_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    try:
        content = _read_document(args.path)
    except OSError as exc:
        print(f"Unable to read {args.path}: {exc}", file=sys.stderr)
        return 1

    declared_type = _resolve_declared_type(args)
    if command == "analyze":
        analysis = analyze(content, declared_type, config=config, now=datetime.now().astimezone())
        extraction = analysis.extraction
        payload = analysis.to_dict()
        payload["dependencies"] = extraction.to_dict()["dependencies"]
    else:
        extraction = extract(content, declared_type, config=config)
        payload = extraction.to_dict()

    if args.check_cycles:
        for cycle in find_cycles(extraction.dependencies):
            print(f"Dependency cycle: {' -> '.join(str(index) for index in cycle)}", file=sys.stderr)

    if args.output == OUTPUT_JSON:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(_format_text(payload, title=extraction.title))
    return 1 if extraction.metadata.get("status") == "error" else 0


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else argv

    command = "extract"
    if raw_args and raw_args[0] in {"extract", "analyze"}:
        command = raw_args[0]
        raw_args = raw_args[1:]

    parser = build_parser(command)
    try:
        args = parser.parse_args(raw_args)
    except argparse.ArgumentError as exc:
        parser.error(str(exc))

    return run_cli(command, args)


if __name__ == "__main__":
    raise SystemExit(main())
