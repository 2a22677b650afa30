"""
MTGO dialect.

Format:
    4 Lightning Bolt
    20 Mountain

    2 Pyroblast

No set information. The first blank line after mainboard cards starts the
sideboard, as in MTGO .txt exports. An explicit "Sideboard" header also
works. Commander decks put a "Commander" block first; the blank line that
ends it leads back to the mainboard.
"""

from deckbuilder.formats.base import (
    QUANTITY_NAME_PATTERN,
    DeckFormatHandler,
    SectionTracker,
    log_malformed,
    parse_quantity,
    prepare_lines,
)
from deckbuilder.models.deck import Deck, RenderOptions
from deckbuilder.models.parsed import DeckSection, MalformedLine, ParsedDeckText

# Blank-line transitions: a blank line after at least one card of the
# key section moves parsing to the value section
BLANK_LINE_TRANSITIONS: dict[DeckSection, DeckSection] = {
    DeckSection.MAINBOARD: DeckSection.SIDEBOARD,
    DeckSection.COMMANDER: DeckSection.MAINBOARD,
}


class MtgoFormat(DeckFormatHandler):
    id = "mtgo"
    name = "MTGO"
    description = "MTGO format: 4 Lightning Bolt"

    def parse_document(self, text: str) -> ParsedDeckText:
        result = ParsedDeckText(format_id=self.id)
        tracker = SectionTracker()
        saw_blank_line = False

        for line_number, line in enumerate(prepare_lines(text), start=1):
            if not line:
                saw_blank_line = True
                continue

            if tracker.feed_header(line):
                saw_blank_line = False
                continue

            if saw_blank_line and tracker.cards_in_section > 0:
                next_section = BLANK_LINE_TRANSITIONS.get(tracker.section)
                if next_section is not None:
                    tracker.enter(next_section)
            saw_blank_line = False

            match = QUANTITY_NAME_PATTERN.match(line)
            quantity = parse_quantity(match.group(1)) if match else None
            if match is None or quantity is None:
                result.malformed_lines.append(MalformedLine(line_number, line))
                continue

            result.cards.append(tracker.build_entry(name=match.group(2).strip(), quantity=quantity))

        log_malformed(self.id, result.malformed_lines)
        return result

    def render(self, deck: Deck, options: RenderOptions | None = None) -> str:
        options = options or RenderOptions()
        lines: list[str] = []

        commanders = self._commander_section(deck)
        if commanders:
            lines.append("Commander")
            lines.extend(f"1 {c.name}" for c in commanders)
            lines.append("")

        lines.extend(f"{c.quantity} {c.card.name}" for c in deck.confirmed_cards())

        sideboard = self._sideboard(deck, options)
        if sideboard:
            lines.extend(["", "Sideboard"])
            lines.extend(f"{c.quantity} {c.card.name}" for c in sideboard)

        return "\n".join(lines)
