#!/usr/bin/env python3
"""
Voice Tasks: command-line extraction.

Reads a dictated transcript and prints the task drafts found in it, either as
Obsidian checkbox lines (default) or as JSON.

Usage:
    python extract_tasks.py "купить молоко завтра в 18:00. позвонить маме"
    python extract_tasks.py --file transcript.txt --json
    cat transcript.txt | python extract_tasks.py --now 2026-02-19T10:00

Configuration:
    Set environment variables in .env file.
    See .env.example for all options.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional

from voicetasks import extract_tasks, load_config
from voicetasks.markdown import draft_to_dict, render_task_list

logger = logging.getLogger("voicetasks")


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO timestamp: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract task drafts from a dictated transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "buy milk tomorrow. call mom"
  %(prog)s --file memo.txt --json
  echo "gym tomorrow at 18:30" | %(prog)s --now 2026-02-19T10:00
        """
    )

    parser.add_argument(
        "text",
        nargs="*",
        help="Transcript text (default: read --file or stdin)"
    )

    parser.add_argument(
        "-f", "--file",
        type=Path,
        default=None,
        help="Read the transcript from a UTF-8 text file"
    )

    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Reference instant as ISO timestamp (default: current time)"
    )

    parser.add_argument(
        "--languages",
        type=str,
        default=None,
        help="Comma-separated vocabulary languages, e.g. ru,en"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of markdown checkboxes"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every fragment (DEBUG level)"
    )

    return parser


def read_transcript(args: argparse.Namespace) -> str:
    if args.text:
        return " ".join(args.text)
    if args.file:
        return args.file.read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # ── Configuration ───────────────────────────────────────────────
    try:
        config = load_config()
        if args.languages:
            languages = tuple(code.strip().lower() for code in args.languages.split(",") if code.strip())
            config = replace(config, languages=languages)
            config.validate()
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR, format="%(levelname)s | %(message)s")
        logger.error(f"❌ Configuration error: {e}")
        return 1

    # ── Logging ─────────────────────────────────────────────────────
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # ── Input ───────────────────────────────────────────────────────
    try:
        transcript = read_transcript(args)
    except OSError as e:
        logger.error(f"❌ Cannot read {args.file}: {e}")
        return 1

    if not transcript.strip():
        logger.error("❌ No transcript given (pass text, --file or pipe stdin)")
        return 1

    # ── Extract ─────────────────────────────────────────────────────
    drafts = extract_tasks(transcript, now=args.now, config=config)

    if args.json:
        print(json.dumps([draft_to_dict(d) for d in drafts], ensure_ascii=False, indent=2))
    elif drafts:
        print(render_task_list(drafts))
    else:
        print("No tasks found")

    return 0


if __name__ == "__main__":
    sys.exit(main())
