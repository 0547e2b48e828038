import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from recipe_scaler.models import GroceryItem
from recipe_scaler.core.rules import PREP_WORDS
from recipe_scaler.core.units import (
    LENGTH_UNITS,
    MASS_UNITS,
    MeasurementSystem,
    Quantity,
    UnitKind,
    system_of,
)
from recipe_scaler.utils.quantity_parser import parse_parenthesized_quantity, split_leading_quantity
from recipe_scaler.utils.rounding import format_quantity
from recipe_scaler.services.unit_converter import UnitConverter, unit_converter
from recipe_scaler.core.logging_config import get_logger

logger = get_logger(__name__)

MASS = "mass"
VOLUME = "volume"
COUNT = "count"
LENGTH = "length"

GroceryKey = Tuple[str, Optional[MeasurementSystem], str]


def strip_prep_words(name: str) -> str:
    """Drop trailing preparation words ("onion, chopped", "beans, rinsed and drained")."""
    result = name.strip()
    for word in PREP_WORDS:
        escaped = re.escape(word)
        result = re.sub(rf",\s*{escaped}\b", "", result, flags=re.IGNORECASE)
        result = re.sub(rf"\s+and\s+{escaped}\.?$", "", result, flags=re.IGNORECASE)
    return result.strip().rstrip(",").strip()


def normalize_name(name: str) -> str:
    return " ".join(strip_prep_words(name).lower().split())


@dataclass
class _Entry:
    item: GroceryItem
    key: Optional[GroceryKey] = None
    base: Optional[Quantity] = None
    display: str = ""
    parenthesized: bool = False
    merged: bool = False


class GroceryConsolidator:
    def __init__(self, converter: Optional[UnitConverter] = None):
        self.converter = converter or unit_converter

    def measure_class(self, unit: UnitKind, name: str) -> str:
        if unit == UnitKind.NONE:
            return COUNT
        if unit in (UnitKind.CAN, UnitKind.PACKAGE):
            return unit.value
        if unit in LENGTH_UNITS:
            return LENGTH
        if unit in MASS_UNITS:
            return MASS
        if unit == UnitKind.OZ and self.converter.is_mass(name):
            return MASS
        return VOLUME

    def _read_quantity(self, text: str) -> Tuple[Optional[Quantity], str, bool]:
        """Return (quantity, display name, written as "name (qty)")."""
        paren, before = parse_parenthesized_quantity(text)
        leading, _, remainder = split_leading_quantity(before)
        if leading is not None and not leading.is_parsed:
            return None, text, False

        if paren is None:
            return leading, remainder, False
        if paren.unit != UnitKind.NONE:
            if leading is None:
                return paren, before, True
            return None, text, False
        if leading is None:
            return paren, before, True
        # A bare "(2)" multiplies the leading amount.
        return leading.scaled(paren.value), remainder, False

    def _entry(self, item: GroceryItem) -> _Entry:
        text = item.text.strip()
        if not text or text.endswith(":"):
            return _Entry(item=item)

        quantity, display, parenthesized = self._read_quantity(text)
        name = normalize_name(display)
        if quantity is None or not name:
            return _Entry(item=item)

        system = system_of(quantity.unit)
        measure = self.measure_class(quantity.unit, name)
        base = self.converter.to_base_quantity(quantity, name, system or MeasurementSystem.IMPERIAL)
        return _Entry(
            item=item,
            key=(name, system, measure),
            base=base,
            display=display,
            parenthesized=parenthesized
        )

    def _render(self, entry: _Entry) -> str:
        _, system, measure = entry.key
        shown = self.converter.humanize(entry.base, system or MeasurementSystem.IMPERIAL, measure == MASS)
        amount = format_quantity(shown)
        if entry.parenthesized:
            return f"{entry.display} ({amount})"
        return f"{amount} {entry.display}".strip()

    def consolidate(self, items: List[GroceryItem]) -> List[GroceryItem]:
        """Merge grocery items that name the same ingredient in compatible units.

        Args:
            items: Grocery list in display order.

        Returns:
            A new list in first-seen order. Items that were not merged are
            returned untouched; section headers ending in ":" never merge.
        """
        entries: List[_Entry] = []
        by_key: Dict[GroceryKey, _Entry] = {}
        for item in items:
            entry = self._entry(item)
            target = by_key.get(entry.key) if entry.key else None
            if target is None or target.base.unit != entry.base.unit:
                entries.append(entry)
                if entry.key and entry.key not in by_key:
                    by_key[entry.key] = entry
                continue
            logger.debug(f"Merging grocery item {item.text!r} into {target.item.text!r}")
            target.base = Quantity(target.base.value + entry.base.value, target.base.unit)
            target.item = GroceryItem(text=target.item.text, checked=target.item.checked and item.checked)
            target.merged = True

        result = []
        for entry in entries:
            if entry.merged:
                result.append(GroceryItem(text=self._render(entry), checked=entry.item.checked))
            else:
                result.append(entry.item)
        return result

    def consolidate_lines(self, lines: List[str]) -> List[str]:
        items = self.consolidate([GroceryItem(text=line) for line in lines])
        return [item.text for item in items]

    def ingredients_to_grocery_items(self, ingredients: str) -> List[GroceryItem]:
        """Turn an ingredient block into grocery items written as "name (quantity)"."""
        items = []
        for line in ingredients.split("\n"):
            line = line.strip()
            if not line:
                continue
            quantity, quantity_text, remainder = split_leading_quantity(line)
            if quantity is not None and quantity.is_parsed and quantity_text and remainder:
                items.append(GroceryItem(text=f"{remainder} ({quantity_text})"))
            else:
                items.append(GroceryItem(text=line))
        return items

    def share_text(self, items: List[GroceryItem]) -> str:
        return "\n".join(item.text for item in items if item.text.strip())


grocery_consolidator = GroceryConsolidator()
