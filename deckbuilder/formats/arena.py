"""
MTG Arena / Mythic Tools dialect.

Format:
    <quantity>[x] <card name> (<set_code>) <collector_number> [*F*]

Example:
    Commander
    1 Atraxa, Praetors' Voice (2X2) 190

    Deck
    4 Lightning Bolt (M21) 199
    1 Flooded Strand (MH3) 81p *F*

    Sideboard
    2 Pyroblast (EMA) 142

Sections are introduced by headers: Commander, Deck, Sideboard,
Maybeboard / Considering. Lines without set info ("4 Lightning Bolt")
are accepted.
"""

from deckbuilder.formats.base import (
    DeckFormatHandler,
    SectionTracker,
    format_set_code,
    log_malformed,
    match_card_line,
    prepare_lines,
)
from deckbuilder.models.card import CardIdentifier
from deckbuilder.models.deck import Deck, RenderOptions
from deckbuilder.models.parsed import MalformedLine, ParsedDeckText


def _format_card_line(card: CardIdentifier, quantity: int) -> str:
    """Format a single card line in Arena format."""
    if card.set_code and card.collector_number:
        return f"{quantity} {card.name} ({format_set_code(card)}) {card.collector_number}"
    return f"{quantity} {card.name}"


class ArenaFormat(DeckFormatHandler):
    id = "arena"
    name = "MTG Arena / Mythic Tools"
    description = "MTG Arena format: 4 Lightning Bolt (M21) 199 or 1x Card (SET) 123"

    def parse_document(self, text: str) -> ParsedDeckText:
        result = ParsedDeckText(format_id=self.id)
        tracker = SectionTracker()

        for line_number, line in enumerate(prepare_lines(text), start=1):
            if not line:
                continue

            if tracker.feed_header(line):
                continue

            card_line = match_card_line(line)
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
            lines.extend(_format_card_line(c, 1) for c in commanders)
            lines.append("")

        lines.append("Deck")
        lines.extend(_format_card_line(c.card, c.quantity) for c in deck.confirmed_cards())

        sideboard = self._sideboard(deck, options)
        if sideboard:
            lines.extend(["", "Sideboard"])
            lines.extend(_format_card_line(c.card, c.quantity) for c in sideboard)

        maybeboard = self._maybeboard(deck, options)
        if maybeboard:
            lines.extend(["", "Maybeboard"])
            lines.extend(_format_card_line(c.card, c.quantity) for c in maybeboard)

        return "\n".join(lines)
