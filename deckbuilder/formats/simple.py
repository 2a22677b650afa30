"""
Permissive quantity-name dialect (detector fallback).

Accepts anything that looks like a card line:
    4 Lightning Bolt
    4x Lightning Bolt
    Lightning Bolt
    Lightning Bolt (M21) 199

Quantity defaults to 1 when omitted. Without section headers every card
is mainboard; headers are still honored when present. Lines starting with
'#' or '//' are comments.
"""

from deckbuilder.formats.base import (
    DeckFormatHandler,
    SectionTracker,
    log_malformed,
    match_card_line,
    prepare_lines,
)
from deckbuilder.models.deck import Deck, RenderOptions
from deckbuilder.models.parsed import MalformedLine, ParsedDeckText

COMMENT_PREFIXES = ("#", "//")


class SimpleFormat(DeckFormatHandler):
    id = "simple"
    name = "Simple List"
    description = "One card per line: 4 Lightning Bolt (quantity optional)"

    def parse_document(self, text: str) -> ParsedDeckText:
        result = ParsedDeckText(format_id=self.id)
        tracker = SectionTracker()

        for line_number, line in enumerate(prepare_lines(text), start=1):
            if not line:
                continue

            if tracker.feed_header(line):
                continue

            if line.startswith(COMMENT_PREFIXES):
                continue

            card_line = match_card_line(line, quantity_required=False)
            if card_line is None:
                result.malformed_lines.append(MalformedLine(line_number, line))
                continue

            result.cards.append(
                tracker.build_entry(
                    name=card_line.name,
                    quantity=card_line.quantity,
                    set_code=card_line.set_code,
                    collector_number=card_line.collector_number,
                )
            )

        log_malformed(self.id, result.malformed_lines)
        return result

    def render(self, deck: Deck, options: RenderOptions | None = None) -> str:
        options = options or RenderOptions()
        lines: list[str] = []

        commanders = self._commander_section(deck)
        if commanders:
            lines.append("Commander")
            lines.extend(f"1 {c.name}" for c in commanders)
            lines.extend(["", "Deck"])

        lines.extend(f"{c.quantity} {c.card.name}" for c in deck.confirmed_cards())

        sideboard = self._sideboard(deck, options)
        if sideboard:
            lines.extend(["", "Sideboard"])
            lines.extend(f"{c.quantity} {c.card.name}" for c in sideboard)

        maybeboard = self._maybeboard(deck, options)
        if maybeboard:
            lines.extend(["", "Maybeboard"])
            lines.extend(f"{c.quantity} {c.card.name}" for c in maybeboard)

        return "\n".join(lines)
