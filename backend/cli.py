"""
Gantt Generator CLI

Usage:
    python -m backend.cli generate "Create a 3-year quarterly roadmap" --doc notes.md --out charts/
    python -m backend.cli generate "8-week app launch" --format json
    python -m backend.cli render timeline.json --out charts/
    python -m backend.cli classify "Project from 2020 to 2030"

Exit codes:
    0  success
    1  generation / validation failure
    2  usage or configuration error
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from frontend.state import DisplaySession
from frontend.visualization import render
from ingestion import DocumentLoader

from .config import ProviderSettings, build_provider, configure_logging
from .contracts.errors import ConfigurationError, GenerationError
from .engine import EngineConfig, GanttEngine
from .intervals import classify_inputs
from .validation import parse_timeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _load_documents(paths: List[str]) -> List[str]:
    report = DocumentLoader().load(paths)
    for skipped in report.skipped:
        print(f"[!] Skipped {skipped.path}: {skipped.reason}", file=sys.stderr)
    return list(report.contents)


def _print_error(error: GenerationError) -> None:
    print(f"[!] {error}", file=sys.stderr)


def cmd_generate(args) -> int:
    settings = ProviderSettings.from_env()
    if args.provider:
        settings = dataclasses.replace(settings, provider=args.provider)
    config = EngineConfig.from_env()
    if args.no_reconcile:
        config = dataclasses.replace(config, reconcile=False)

    engine = GanttEngine(build_provider(settings), config, renderer=render)
    try:
        result = engine.generate(args.instructions, _load_documents(args.doc))
    finally:
        engine.provider.close()

    if not result.success:
        _print_error(result.error)
        return EXIT_FAILURE

    if args.format == "json":
        print(json.dumps(result.timeline.to_dict(), indent=2))
        return EXIT_OK

    session = DisplaySession()
    session.show(result.timeline, result.markup)
    path = session.save(args.out)
    print(f"[*] {result.timeline.title}: {path}")
    return EXIT_OK


def cmd_render(args) -> int:
    try:
        raw = json.loads(Path(args.timeline).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"[!] Could not read {args.timeline}: {e}", file=sys.stderr)
        return EXIT_USAGE

    validation = parse_timeline(raw)
    if validation.is_failure:
        _print_error(validation.error)
        return EXIT_FAILURE

    session = DisplaySession()
    session.show(validation.timeline, render(validation.timeline))
    path = session.save(args.out)
    print(f"[*] {validation.timeline.title}: {path}")
    return EXIT_OK


def cmd_classify(args) -> int:
    estimate = classify_inputs(args.instructions, _load_documents(args.doc))
    print(json.dumps(estimate.to_dict(), indent=2))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gantt", description="AI Gantt timeline generator")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ... (default GANTT_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser("generate", help="Generate a chart from instructions")
    generate_parser.add_argument("instructions", help="Free-text project instructions")
    generate_parser.add_argument("--doc", action="append", default=[], help="Reference document (repeatable)")
    generate_parser.add_argument("--out", default=".", help="Output directory for the HTML chart")
    generate_parser.add_argument("--format", choices=("html", "json"), default="html")
    generate_parser.add_argument("--provider", choices=("auto", "gemini", "openai", "mock"), default=None)
    generate_parser.add_argument("--no-reconcile", action="store_true", help="Keep the model's time scale as-is")

    render_parser = subparsers.add_parser("render", help="Render a timeline JSON file")
    render_parser.add_argument("timeline", help="Path to timeline JSON")
    render_parser.add_argument("--out", default=".", help="Output directory for the HTML chart")

    classify_parser = subparsers.add_parser("classify", help="Show the inferred time scale")
    classify_parser.add_argument("instructions")
    classify_parser.add_argument("--doc", action="append", default=[])

    return parser


COMMANDS = {
    "generate": cmd_generate,
    "render": cmd_render,
    "classify": cmd_classify,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return EXIT_USAGE

    try:
        configure_logging(args.log_level)
        return command(args)
    except ConfigurationError as e:
        _print_error(e)
        return EXIT_USAGE
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
