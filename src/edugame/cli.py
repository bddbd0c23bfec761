# Area: Shared
"""
edugame.cli — Command-line interface
====================================

Inspect generated or stored game content without playing it.

Usage:
    python -m edugame inspect game.json                 # Section summary
    python -m edugame normalize game.json               # Normalized GameSpec JSON
    python -m edugame inspect record.json --record      # File holds a game record
    python -m edugame normalize raw.txt --game-type flashcard

Unplayable content exits with status 2 and prints the error block.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ._shared.logging_config import log_engine_error, setup_logging
from ._spec.loader import load_game_record, load_game_spec
from ._spec.models import GameSpec
from .config import load_settings
from .errors import ContentFormatError

EXIT_UNPLAYABLE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="edugame",
        description="Universal Game Engine - inspect and normalize game content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m edugame inspect game.json
  python -m edugame normalize game.json --game-type quiz
  python -m edugame inspect record.json --record
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("inspect", "Print a summary of the game's sections"),
        ("normalize", "Print the normalized GameSpec as JSON"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("file", type=str, help="Path to the content file")
        sub.add_argument(
            "--game-type",
            type=str,
            default=None,
            help="Requested game type used when the content has no config",
        )
        sub.add_argument(
            "--record",
            action="store_true",
            help="File holds a game record with a gameContent field",
        )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (overrides EDUGAME_LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def load_from_file(path: Path, game_type: str, as_record: bool) -> GameSpec:
    text = path.read_text(encoding="utf-8")
    if as_record:
        try:
            record = json.loads(text)
        except json.JSONDecodeError as e:
            raise ContentFormatError("game record is not valid JSON", payload=text) from e
        if not isinstance(record, dict):
            raise ContentFormatError("game record is not a JSON object")
        return load_game_record(record, game_type=game_type)
    return load_game_spec(text, game_type=game_type)


def format_summary(spec: GameSpec) -> str:
    meta = spec.metadata
    lines = [
        f"{meta.title}  [{meta.difficulty} / {meta.complexity}]",
        f"  game type:   {spec.config.game_type}",
        f"  progression: {spec.progression.type} {spec.effective_order()}",
        f"  scoring:     max {spec.scoring.max_score}, "
        f"{spec.scoring.points_per_correct} per correct, "
        f"{len(spec.scoring.ratings)} rating tier(s)",
        "  sections:",
    ]
    for section in spec.content.sections:
        lines.append(f"    - {section.id} ({section.type}) {section.title}: {_count(section)}")
    return "\n".join(lines)


def _count(section) -> str:
    content = section.content
    for attr, label in (
        ("questions", "questions"),
        ("cards", "cards"),
        ("pairs", "pairs"),
        ("scenes", "scenes"),
        ("locations", "locations"),
        ("objectives", "objectives"),
        ("items", "items"),
    ):
        value = getattr(content, attr, None)
        if isinstance(value, list):
            return f"{len(value)} {label}"
    return f"{len(content.content)} blocks"


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    settings = load_settings()
    setup_logging(log_file_path=None, level=args.log_level or settings.log_level)

    path = Path(args.file)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    game_type = args.game_type or settings.default_game_type
    try:
        spec = load_from_file(path, game_type, args.record)
    except ContentFormatError as e:
        log_engine_error(e)
        return EXIT_UNPLAYABLE

    if args.command == "inspect":
        print(format_summary(spec))
    else:
        print(json.dumps(spec.to_document(), indent=2, ensure_ascii=False))
    return 0
