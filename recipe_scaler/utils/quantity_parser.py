import math
import re
from typing import Optional, Tuple

from recipe_scaler.core.units import (
    FLUID_OUNCE_WORDS,
    FLUID_PREFIXES,
    UNIT_VARIANTS,
    UNPARSEABLE,
    Quantity,
    UnitKind,
)

FRACTION_GLYPHS = {
    "¼": 1.0 / 4.0,
    "½": 1.0 / 2.0,
    "¾": 3.0 / 4.0,
    "⅓": 1.0 / 3.0,
    "⅔": 2.0 / 3.0,
    "⅛": 1.0 / 8.0,
}
ONE_WORDS = {"a", "another"}

VALUE_PARSE = re.compile(r"^(?:[0-9¼½¾⅓⅔⅛./ -]+|(?i:a |another ))")
DECIMAL = re.compile(r"^(?:\d+\.?\d*|\.\d+)$")
TRAILING_PARENS = re.compile(r"\(([^()]*)\)\s*$")


def _finite(value: float) -> float:
    return value if math.isfinite(value) else UNPARSEABLE


def parse_number(raw: str) -> float:
    """Read one quantity token as a float.

    Handles integers, decimals, "N/M", the glyphs ¼ ½ ¾ ⅓ ⅔ ⅛, a glyph glued to
    an integer ("2½") and the words "a"/"another". Anything else gives
    UNPARSEABLE.
    """
    token = raw.strip()
    if token.lower() in ONE_WORDS:
        return 1.0
    if len(token) > 1 and token[-1] in FRACTION_GLYPHS:
        whole = parse_number(token[:-1])
        if whole == UNPARSEABLE:
            return UNPARSEABLE
        return whole + FRACTION_GLYPHS[token[-1]]
    if token in FRACTION_GLYPHS:
        return FRACTION_GLYPHS[token]
    if "/" in token:
        numerator, denominator = token.split("/", 1)
        top = parse_number(numerator)
        bottom = parse_number(denominator)
        if top == UNPARSEABLE or bottom == UNPARSEABLE or bottom == 0:
            return UNPARSEABLE
        return _finite(top / bottom)
    if DECIMAL.match(token):
        return _finite(float(token))
    return UNPARSEABLE


def parse_value_expression(expression: str) -> float:
    """Sum the space- or hyphen-separated tokens of a value ("1 1/2", "2-3")."""
    tokens = [t for t in re.split(r"[ -]", expression.strip()) if t]
    if not tokens:
        return UNPARSEABLE
    total = 0.0
    for token in tokens:
        value = parse_number(token)
        if value == UNPARSEABLE:
            return UNPARSEABLE
        total += value
    return _finite(total)


def match_unit(text: str) -> Tuple[UnitKind, float, int]:
    """Recognize the unit at the start of text.

    Returns the unit, the factor to apply to the value and the number of words
    consumed. Unknown words give (NONE, 1.0, 0).
    """
    words = text.split()
    if not words:
        return UnitKind.NONE, 1.0, 0
    first = words[0]
    second = words[1] if len(words) > 1 else ""
    if first.lower() in FLUID_PREFIXES and second.lower() in FLUID_OUNCE_WORDS:
        return UnitKind.FL_OZ, 1.0, 2
    for variant in UNIT_VARIANTS:
        candidate = first if variant.case_sensitive else first.lower()
        if candidate in variant.words:
            return variant.unit, variant.factor, 1
    return UnitKind.NONE, 1.0, 0


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def split_leading_quantity(text: str) -> Tuple[Optional[Quantity], str, str]:
    """Split text into (quantity, quantity text, remainder)."""
    normalized = _normalize_whitespace(text)
    match = VALUE_PARSE.match(normalized)
    if not match:
        return None, "", text

    value = parse_value_expression(match.group(0))
    rest = normalized[match.end():]
    unit, factor, consumed = match_unit(rest)
    if value == UNPARSEABLE:
        return Quantity(UNPARSEABLE, unit), "", text

    words = rest.split()
    quantity_text = " ".join([match.group(0).strip()] + words[:consumed])
    remainder = " ".join(words[consumed:])
    return Quantity(value * factor, unit), quantity_text, remainder


def parse_leading_quantity(text: str) -> Tuple[Optional[Quantity], str]:
    """Strip the leading quantity off an ingredient or phrase.

    Returns (None, text) when the text does not start with a quantity, and a
    quantity with a negative value alongside the untouched text when it starts
    like one but cannot be read.
    """
    quantity, _, remainder = split_leading_quantity(text)
    return quantity, remainder


def parse_parenthesized_quantity(text: str) -> Tuple[Optional[Quantity], str]:
    """Read a trailing "(3 cups)" off a grocery line.

    Returns the quantity and the line without the parentheses, or (None, text)
    when there is no trailing group or it does not hold a bare quantity.
    """
    match = TRAILING_PARENS.search(text)
    if not match:
        return None, text
    quantity, remainder = parse_leading_quantity(match.group(1))
    if quantity is None or not quantity.is_parsed or remainder:
        return None, text
    return quantity, text[:match.start()].strip()
