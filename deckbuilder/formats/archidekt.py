"""
Archidekt dialect.

Format:
    <quantity>x <card name> (<set_code>) <collector_number> [*F*] [<Category>,...] ^tag^ ^tag^

Example:
    1x Atraxa, Praetors' Voice (2x2) 190 [Commander]
    1x Sol Ring (c21) 263 [Ramp] ^ramp^ ^Have,#37d67a^
    1x Command Tower (c21) 284 [Lands]

Categories carry the section (Commander, Sideboard, Maybeboard/Considering)
or a deck role (Lands, Ramp, ...). Categories may be comma separated and
may carry {noDeck}-style flags, which are dropped. ^tags^ become role ids.
"""

import re

from deckbuilder.formats.base import (
    DeckFormatHandler,
    SectionTracker,
    format_set_code,
    log_malformed,
    parse_quantity,
    prepare_lines,
)
from deckbuilder.models.card import CardIdentifier
from deckbuilder.models.deck import Deck, DeckCardEntry, RenderOptions
from deckbuilder.models.parsed import DeckSection, MalformedLine, ParsedDeckText

# Groups: (quantity, card_name, set_code, collector_number, categories, rest)
ARCHIDEKT_FULL_PATTERN = re.compile(
    r"^(\d+)x?\s+(.+?)\s+\(([A-Za-z0-9]+)\)\s+([^\s\[]+)"
    r"(?:\s+\*[A-Za-z]+\*)*\s*(?:\[([^\]]*)\])?\s*(.*)$",
    re.IGNORECASE,
)

# "1x Sol Ring [Ramp] ^ramp^" (no set info)
# Groups: (quantity, card_name, categories, rest)
ARCHIDEKT_NAME_PATTERN = re.compile(
    r"^(\d+)x?\s+([^\[\^]+?)\s*\[([^\]]*)\]\s*(.*)$",
    re.IGNORECASE,
)

TAG_PATTERN = re.compile(r"\^([^^]+)\^")

# Used by the detector: a quantity-x token plus a bracketed category
ARCHIDEKT_SIGNATURE = re.compile(r"^\d+x\s.*\[[^\]]+\]", re.IGNORECASE)

CATEGORY_SECTIONS: dict[str, DeckSection] = {
    "commander": DeckSection.COMMANDER,
    "sideboard": DeckSection.SIDEBOARD,
    "maybeboard": DeckSection.MAYBEBOARD,
    "considering": DeckSection.MAYBEBOARD,
}

ROLE_TO_CATEGORY: dict[str, str] = {
    "land": "Lands",
    "ramp": "Ramp",
    "card-draw": "Card Draw",
    "removal": "Removal",
    "board-wipe": "Board Wipes",
    "protection": "Protection",
    "recursion": "Recursion",
    "finisher": "Finishers",
}

CATEGORY_TO_ROLE: dict[str, str] = {
    category.lower(): role for role, category in ROLE_TO_CATEGORY.items()
}
CATEGORY_TO_ROLE["land"] = "land"


def normalize_role_id(tag: str) -> str:
    """Turn an Archidekt tag into a role id ("Card Draw" -> "card-draw")."""
    return re.sub(r"\s+", "-", tag.strip().lower())


def _split_categories(raw: str | None) -> list[str]:
    if not raw:
        return []
    categories = []
    for part in raw.split(","):
        category = re.sub(r"\{[^}]*\}", "", part).strip().lower()
        if category:
            categories.append(category)
    return categories


def _roles_from(categories: list[str], rest: str) -> tuple[str, ...]:
    roles: list[str] = []
    for tag in TAG_PATTERN.findall(rest):
        # "^Have,#37d67a^" carries a display color after the comma
        role = normalize_role_id(tag.split(",")[0])
        if role and role not in roles:
            roles.append(role)
    for category in categories:
        role = CATEGORY_TO_ROLE.get(category)
        if role and role not in roles:
            roles.append(role)
    return tuple(roles)


def _section_for(categories: list[str]) -> DeckSection:
    for category in categories:
        section = CATEGORY_SECTIONS.get(category)
        if section is not None:
            return section
    return DeckSection.MAINBOARD


class ArchidektFormat(DeckFormatHandler):
    id = "archidekt"
    name = "Archidekt"
    description = "Archidekt format: 1x Card Name (SET) 123 [Category] ^tag^"

    def parse_document(self, text: str) -> ParsedDeckText:
        result = ParsedDeckText(format_id=self.id)
        tracker = SectionTracker()

        for line_number, line in enumerate(prepare_lines(text), start=1):
            if not line:
                continue

            set_code: str | None = None
            collector_number: str | None = None

            match = ARCHIDEKT_FULL_PATTERN.match(line)
            if match:
                raw_quantity, name, set_code, collector_number, raw_categories, rest = (
                    match.groups()
                )
            else:
                match = ARCHIDEKT_NAME_PATTERN.match(line)
                if match is None:
                    result.malformed_lines.append(MalformedLine(line_number, line))
                    continue
                raw_quantity, name, raw_categories, rest = match.groups()

            quantity = parse_quantity(raw_quantity)
            if quantity is None:
                result.malformed_lines.append(MalformedLine(line_number, line))
                continue

            categories = _split_categories(raw_categories)
            tracker.enter(_section_for(categories))
            result.cards.append(
                tracker.build_entry(
                    name=name.strip(),
                    quantity=quantity,
                    set_code=set_code,
                    collector_number=collector_number,
                    roles=_roles_from(categories, rest or ""),
                )
            )

        log_malformed(self.id, result.malformed_lines)
        return result

    def render(self, deck: Deck, options: RenderOptions | None = None) -> str:
        options = options or RenderOptions()
        lines: list[str] = []

        for commander in self._commander_section(deck):
            lines.append(_format_line(commander, 1, "Commander"))

        for entry in deck.confirmed_cards():
            lines.append(_format_entry(entry, _primary_category(entry)))

        for entry in self._sideboard(deck, options):
            lines.append(_format_entry(entry, "Sideboard"))

        for entry in self._maybeboard(deck, options):
            lines.append(_format_entry(entry, "Maybeboard"))

        return "\n".join(lines)


def _primary_category(entry: DeckCardEntry) -> str:
    """Category from the first role, 'Other' when unmapped."""
    if entry.roles:
        return ROLE_TO_CATEGORY.get(entry.roles[0], "Other")
    return "Other"


def _format_line(card: CardIdentifier, quantity: int, category: str) -> str:
    if card.set_code and card.collector_number:
        return (
            f"{quantity}x {card.name} ({format_set_code(card)}) "
            f"{card.collector_number} [{category}]"
        )
    return f"{quantity}x {card.name} [{category}]"


def _format_entry(entry: DeckCardEntry, category: str) -> str:
    line = _format_line(entry.card, entry.quantity, category)
    role_tags = " ".join(f"^{role}^" for role in entry.roles)
    if role_tags:
        line += f" {role_tags}"
    return line
