"""
Resolve a card list against Scryfall.

Reads card references (one per line) from files or stdin and prints the
matching Scryfall cards, or every paper printing with --prints.

Usage:
    python -m scryfetch.jobs.resolve_cards decklist.txt
    echo "4 Lightning Bolt -l=fr" | scryfetch --prints
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from scryfetch.models.card import ParsedCard
from scryfetch.models.scryfall import ScryfallCard
from scryfetch.parsers.card_reference import parse_card_references
from scryfetch.services.scryfall import ScryfallService

logger = logging.getLogger(__name__)


def format_card(card: ScryfallCard, quantity: int = 1) -> str:
    """Render a Scryfall card as "<quantity> <name> [<set>/<number>]"."""
    name = card.get("printed_name") or card.get("name", "?")
    set_code = card.get("set")
    number = card.get("collector_number")

    line = f"{quantity} {name}"
    if set_code and number:
        line += f" [{set_code}/{number}]"
    return line


async def run_resolve(
    cards: list[ParsedCard],
    service: ScryfallService,
    prints: bool = False,
    include_multilingual: bool = False,
    only_paper: bool = True,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """
    Resolve parsed cards and write the results.

    Args:
        cards: Parsed card references
        service: Scryfall client to resolve through
        prints: List every printing instead of the matched card
        include_multilingual: With prints, include non-English printings
        only_paper: With prints, keep only paper printings
        out: Stream for resolved cards (default: stdout)
        err: Stream for unresolved references (default: stderr)

    Returns:
        Number of references that could not be resolved
    """
    stdout = sys.stdout if out is None else out
    stderr = sys.stderr if err is None else err
    logger.info("Resolving %d card references...", len(cards))

    missing: list[ParsedCard] = []

    if prints:

        def report_prints(card: ParsedCard, found: list[ScryfallCard] | None) -> None:
            if found is None:
                missing.append(card)
                return
            stdout.write(f"# {card.name} ({len(found)} printings)\n")
            for printing in found:
                stdout.write(format_card(printing, card.quantity) + "\n")

        await service.get_card_prints_and_do(cards, report_prints, include_multilingual, only_paper)
    else:
        results = await service.get_cards_batch(cards)
        for card, found in zip(cards, results, strict=True):
            if found is None:
                missing.append(card)
            else:
                stdout.write(format_card(found, card.quantity) + "\n")

    for card in missing:
        stderr.write(f"NOT FOUND: {card.name}\n")

    logger.info("Resolved %d of %d card references", len(cards) - len(missing), len(cards))
    return len(missing)


def read_input(paths: Iterable[Path], stdin: TextIO | None = None) -> str:
    """Concatenate the given files, or read stdin when no file is given."""
    paths = list(paths)
    if not paths:
        return (stdin or sys.stdin).read()
    return "\n".join(path.read_text(encoding="utf-8") for path in paths)


async def _resolve_text(text: str, args: argparse.Namespace) -> int:
    delay = None if args.delay_ms is None else args.delay_ms / 1000
    async with ScryfallService(delay=delay) as service:
        return await run_resolve(
            parse_card_references(text),
            service,
            prints=args.prints,
            include_multilingual=args.multilingual,
            only_paper=not args.all_games,
        )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Resolve card references against Scryfall")
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Card list files, one reference per line (default: stdin)",
    )
    parser.add_argument(
        "--prints",
        action="store_true",
        help="List every printing of each card",
    )
    parser.add_argument(
        "--multilingual",
        action="store_true",
        help="With --prints, include non-English printings",
    )
    parser.add_argument(
        "--all-games",
        action="store_true",
        help="With --prints, keep printings that are not available in paper",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=None,
        help="Milliseconds between Scryfall requests (default: SCRYFETCH_API_DELAY_MS or 100)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    missing = asyncio.run(_resolve_text(read_input(args.files), args))
    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
