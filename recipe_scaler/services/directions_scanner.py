import re
from typing import Iterable, List, Optional, Pattern, Tuple

from recipe_scaler.models import DirectionsPhrase
from recipe_scaler.core.settings import settings
from recipe_scaler.core.logging_config import get_logger

logger = get_logger(__name__)

Span = Tuple[int, int]

# A quantity must start a word; "(2 cups)" counts, "x2 cups" does not.
_WORD_START = r"(?<![^\s(])"
UNIT_WORDS = (
    r"[\s-]?(?:oz\b|ounces?\b|cups?\b|c\.|c\b|T\b|t\b|TBSP\b|tbsp\b|tsp\b"
    r"|[Tt]ablespoons?\b|teaspoons?\b|quarts?\b|qts?\b|inch(?:es)?\b|mls?\b|cm\b|mm\b"
    r"|liters?\b|litres?\b|g\b|grams?\b|kgs?\b|lbs?\b|pounds?\b)"
)
DECIMAL_PHRASE = re.compile(_WORD_START + r"[0-9]+\.[0-9]+" + UNIT_WORDS)
FRACTION_PHRASE = re.compile(
    _WORD_START + r"(?:[0-9]+[\s-]?)?(?:[0-9]+/[0-9]+|[¼½¾⅓⅔⅛])" + UNIT_WORDS
)
INTEGER_PHRASE = re.compile(_WORD_START + r"[0-9]+" + UNIT_WORDS)

CLAUSE_BOUNDARIES = "\n,.;"


def _spans(pattern: Pattern, text: str) -> List[Span]:
    return [(m.start(), m.end()) for m in pattern.finditer(text)]


def find_decimal_phrases(text: str) -> List[Span]:
    """Spans of decimal quantities followed by a unit ("1.5 cups")."""
    return _spans(DECIMAL_PHRASE, text)


def find_fraction_phrases(text: str) -> List[Span]:
    """Spans of fractional or mixed quantities followed by a unit ("1 1/2 tsp", "½ cup")."""
    return _spans(FRACTION_PHRASE, text)


def find_integer_phrases(text: str) -> List[Span]:
    """Spans of whole-number quantities followed by a unit ("9-inch", "2 T")."""
    return _spans(INTEGER_PHRASE, text)


DETECTORS = (find_decimal_phrases, find_fraction_phrases, find_integer_phrases)


def find_quantity_spans(text: str) -> List[Span]:
    """Run the detectors in order and keep the first claim on any stretch of text."""
    claimed: List[Span] = []
    for detector in DETECTORS:
        for start, end in detector(text):
            if any(start < c_end and c_start < end for c_start, c_end in claimed):
                continue
            claimed.append((start, end))
    return sorted(claimed)


def context_snippet(text: str, start: int, end: int, radius: int) -> str:
    """Text around a phrase, cut at the nearest clause break or whole word."""
    left = max(start - radius, 0)
    c_start = left
    for i in range(start - 1, left - 1, -1):
        if text[i] in CLAUSE_BOUNDARIES:
            c_start = i + 1
            break
    else:
        if left > 0 and not text[left - 1].isspace():
            space = text.find(" ", left, start)
            c_start = space + 1 if space >= 0 else start

    right = min(end + radius, len(text))
    c_end = right
    for i in range(end, right):
        if text[i] in CLAUSE_BOUNDARIES:
            c_end = i
            break
    else:
        if right < len(text) and not text[right].isspace():
            space = text.rfind(" ", end, right)
            c_end = space if space >= 0 else end

    return "..." + text[c_start:c_end].strip() + "..."


def is_excluded(phrase_text: str, excluded_phrases: Optional[Iterable[DirectionsPhrase]]) -> bool:
    return any(phrase_text == p.text for p in (excluded_phrases or []))


class DirectionsScanner:
    def __init__(self, context_chars: Optional[int] = None):
        self.context_chars = context_chars or settings.phrase_context_chars

    def get_phrases(self, directions: str) -> List[DirectionsPhrase]:
        """Find every scalable quantity phrase in a directions block.

        Args:
            directions: Directions text as stored on the recipe.

        Returns:
            DirectionsPhrase entries in reading order, each with its offsets
            and a short context snippet for review.
        """
        phrases = []
        for start, end in find_quantity_spans(directions):
            phrases.append(DirectionsPhrase(
                text=directions[start:end],
                context_snippet=context_snippet(directions, start, end, self.context_chars),
                start_offset=start,
                end_offset=end
            ))
        logger.debug(f"Found {len(phrases)} scalable phrases in directions")
        return phrases


directions_scanner = DirectionsScanner()
