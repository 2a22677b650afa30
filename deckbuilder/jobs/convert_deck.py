"""
Convert a deck list between dialects.

Runs offline: cards are carried over by name, set and collector number as
written, without any lookup.

Usage:
    python -m deckbuilder.jobs.convert_deck deck.txt --to moxfield
    python -m deckbuilder.jobs.convert_deck deck.csv --from moxfield --to arena --sideboard
    cat deck.txt | python -m deckbuilder.jobs.convert_deck - --to mtgo
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from deckbuilder.config import settings
from deckbuilder.formats import AUTO_FORMAT, FORMATS, get_format, parse_deck_text
from deckbuilder.models.deck import FormatType, RenderOptions
from deckbuilder.models.failure import KnownError, UnknownFormatError
from deckbuilder.services.deck_import import build_deck_from_entries

logger = logging.getLogger(__name__)


def convert_deck_text(
    text: str,
    to_format: str,
    from_format: str = AUTO_FORMAT,
    options: RenderOptions | None = None,
    commander: bool = False,
) -> str:
    """
    Re-render deck list text in another dialect.

    A Commander section in the input makes the result a commander deck
    whether or not `commander` is set.

    Raises:
        UnknownFormatError: If either format id is not registered
    """
    target = get_format(to_format)
    if target is None:
        raise UnknownFormatError(to_format, [f.id for f in FORMATS])

    parsed = parse_deck_text(text, from_format)
    deck = build_deck_from_entries(
        parsed.cards,
        format_type=FormatType.COMMANDER if commander else None,
    )

    logger.info(
        "deck_converted",
        extra={
            "from_format": parsed.format_id,
            "to_format": target.id,
            "entries": len(parsed.cards),
            "malformed_lines": len(parsed.malformed_lines),
        },
    )
    return target.render(deck, options)


def build_parser() -> argparse.ArgumentParser:
    format_ids = [f.id for f in FORMATS]
    parser = argparse.ArgumentParser(
        prog="convert_deck",
        description="Convert a deck list between text formats.",
    )
    parser.add_argument("input", help="Deck list file, or - for stdin")
    parser.add_argument("--to", dest="to_format", required=True, choices=format_ids)
    parser.add_argument(
        "--from",
        dest="from_format",
        default=AUTO_FORMAT,
        choices=[AUTO_FORMAT, *format_ids],
        help="Source format (default: detect)",
    )
    parser.add_argument("--sideboard", action="store_true", help="Include the sideboard")
    parser.add_argument("--maybeboard", action="store_true", help="Include the maybeboard")
    parser.add_argument(
        "--commander",
        action="store_true",
        help="Render as a commander deck (implied when the input has a Commander section)",
    )
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    if args.input == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(args.input).read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Cannot read %s: %s", args.input, e)
            return 1

    try:
        output = convert_deck_text(
            text,
            to_format=args.to_format,
            from_format=args.from_format,
            options=RenderOptions(
                include_maybeboard=args.maybeboard,
                include_sideboard=args.sideboard,
            ),
            commander=args.commander,
        )
    except KnownError as e:
        logger.error("Conversion failed: %s", e.message)
        return 1

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
