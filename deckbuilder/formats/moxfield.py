"""
Moxfield CSV dialect.

Format (header row required for detection):
    Count,Name,Edition,Collector Number,Foil,Condition,Language,Category
    4,Lightning Bolt,m21,199,,,English,Mainboard
    1,"Sheoldred, the Apocalypse",dmu,107,,,English,Sideboard

Columns are located by header name, so exports with extra or reordered
columns parse. Without a header the first four columns are taken as
count, name, edition, collector number.
"""

import csv
from io import StringIO

from deckbuilder.formats.base import (
    BYTE_ORDER_MARK,
    DeckFormatHandler,
    SectionTracker,
    log_malformed,
    parse_quantity,
)
from deckbuilder.models.card import CardIdentifier
from deckbuilder.models.deck import Deck, RenderOptions
from deckbuilder.models.parsed import DeckSection, MalformedLine, ParsedDeckText

CSV_HEADER = [
    "Count",
    "Name",
    "Edition",
    "Collector Number",
    "Foil",
    "Condition",
    "Language",
    "Category",
]

# Positional layout used when the document has no header row
_DEFAULT_COLUMNS = {"count": 0, "name": 1, "edition": 2, "collector number": 3}

# Header spellings seen in other CSV exports, mapped to the canonical column
_COLUMN_ALIASES = {
    "quantity": "count",
    "qty": "count",
    "card name": "name",
    "card": "name",
    "set": "edition",
    "set code": "edition",
    "collector #": "collector number",
    "board": "category",
}

CATEGORY_SECTIONS: dict[str, DeckSection] = {
    "commander": DeckSection.COMMANDER,
    "sideboard": DeckSection.SIDEBOARD,
    "maybeboard": DeckSection.MAYBEBOARD,
    "considering": DeckSection.MAYBEBOARD,
}


def is_csv_header(line: str) -> bool:
    """True if `line` starts with the Count column header."""
    lower = line.removeprefix(BYTE_ORDER_MARK).strip().lower()
    return lower.startswith("count,") or lower.startswith('"count",')


def _header_columns(row: list[str]) -> dict[str, int] | None:
    """Column index map if `row` is a header row, else None."""
    columns: dict[str, int] = {}
    for index, cell in enumerate(row):
        key = cell.strip().lower()
        key = _COLUMN_ALIASES.get(key, key)
        columns.setdefault(key, index)

    if "name" in columns and "count" in columns:
        return columns
    return None


def _cell(row: list[str], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return row[index].strip()


class MoxfieldFormat(DeckFormatHandler):
    id = "moxfield"
    name = "Moxfield CSV"
    description = "Moxfield CSV format with headers"

    def parse_document(self, text: str) -> ParsedDeckText:
        result = ParsedDeckText(format_id=self.id)
        tracker = SectionTracker()
        columns: dict[str, int] | None = None

        reader = csv.reader(StringIO(text.removeprefix(BYTE_ORDER_MARK)))
        for row in reader:
            line_number = reader.line_num
            if not any(cell.strip() for cell in row):
                continue

            if columns is None:
                header = _header_columns(row)
                if header is not None:
                    columns = header
                    continue
                columns = dict(_DEFAULT_COLUMNS)

            name = _cell(row, columns.get("name"))
            raw_count = _cell(row, columns.get("count"))
            quantity = parse_quantity(raw_count) if raw_count else 1
            if not name or quantity is None:
                result.malformed_lines.append(MalformedLine(line_number, ",".join(row)))
                continue

            category = _cell(row, columns.get("category")).lower()
            tracker.enter(CATEGORY_SECTIONS.get(category, DeckSection.MAINBOARD))

            result.cards.append(
                tracker.build_entry(
                    name=name,
                    quantity=quantity,
                    set_code=_cell(row, columns.get("edition")) or None,
                    collector_number=_cell(row, columns.get("collector number")) or None,
                )
            )

        log_malformed(self.id, result.malformed_lines)
        return result

    def render(self, deck: Deck, options: RenderOptions | None = None) -> str:
        options = options or RenderOptions()
        buffer = StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)

        def write_card(card: CardIdentifier, quantity: int, category: str) -> None:
            writer.writerow(
                [
                    quantity,
                    card.name,
                    card.set_code,
                    card.collector_number,
                    "",
                    "",
                    "English",
                    category,
                ]
            )

        for commander in self._commander_section(deck):
            write_card(commander, 1, "Commander")

        for entry in deck.confirmed_cards():
            write_card(entry.card, entry.quantity, "Mainboard")

        for entry in self._sideboard(deck, options):
            write_card(entry.card, entry.quantity, "Sideboard")

        for entry in self._maybeboard(deck, options):
            write_card(entry.card, entry.quantity, "Maybeboard")

        return buffer.getvalue().rstrip("\n")
