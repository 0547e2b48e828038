import re
from typing import Callable, List, Optional, Sequence, Tuple

from recipe_scaler.models import ParsedRecipe
from recipe_scaler.core.rules import (
    COOK_TIME_PREFIXES,
    COOK_TIME_SUFFIXES,
    DIRECTIONS_PREFIXES,
    IMPERIAL_DETECTION_UNITS,
    INGREDIENTS_LINES,
    INGREDIENTS_PREFIXES,
    METRIC_DETECTION_UNITS,
    NOTES_PREFIXES,
    PREP_TIME_PREFIXES,
    SERVINGS_PREFIXES,
    SERVINGS_SUFFIXES,
    TOTAL_TIME_PREFIXES,
)
from recipe_scaler.core.settings import ScalerSettings, settings as default_settings
from recipe_scaler.core.logging_config import get_logger

logger = get_logger(__name__)

SERVINGS = "servings"
PREP_TIME = "prep_time"
COOK_TIME = "cook_time"
TOTAL_TIME = "total_time"

# Characters removed before the first word of an ingredient line is read as a unit.
QUANTITY_CHARS = re.compile(r"[0-9¼½¾⅐⅑⅒⅓⅔⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞/.-]")
NUMBERED_STEP = re.compile(r"^[0-9]+[).] +(?=\S)")
TWO_COLUMNS = re.compile(r" {3,}")
SERVINGS_TOKENS = re.compile(r"[\s.]+")

UNKNOWN_TITLE = "Unknown"


def classify_line(line: str, verbatim: bool = False) -> Optional[str]:
    """Return the metadata kind of a servings / time line, or None for ordinary text."""
    lowered = line.strip().lower()
    if not lowered:
        return None
    if lowered.startswith(SERVINGS_PREFIXES):
        return SERVINGS
    if not verbatim and lowered.endswith(SERVINGS_SUFFIXES):
        return SERVINGS
    if lowered.startswith(PREP_TIME_PREFIXES):
        return PREP_TIME
    if lowered.startswith(COOK_TIME_PREFIXES) or lowered.endswith(COOK_TIME_SUFFIXES):
        return COOK_TIME
    if lowered.startswith(TOTAL_TIME_PREFIXES):
        return TOTAL_TIME
    return None


def title_case(line: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in line.strip().split(" "))


def leading_unit_word(line: str) -> str:
    """First word of an ingredient line once its quantity characters are gone."""
    words = QUANTITY_CHARS.sub("", line.lower()).split()
    return words[0] if words else ""


def is_unit_line(line: str) -> bool:
    word = leading_unit_word(line)
    return word in IMPERIAL_DETECTION_UNITS or word in METRIC_DETECTION_UNITS


def detect_metric(ingredient_lines: Sequence[str]) -> bool:
    """Tally unit words line by line; once metric is ahead the answer stays metric."""
    imperial = metric = 0
    is_metric = False
    for line in ingredient_lines:
        word = leading_unit_word(line)
        if word in IMPERIAL_DETECTION_UNITS:
            imperial += 1
        elif word in METRIC_DETECTION_UNITS:
            metric += 1
        if metric > imperial:
            is_metric = True
    return is_metric


def parse_servings(line: str, default: int) -> int:
    servings = default
    for token in SERVINGS_TOKENS.split(line):
        if token.isdigit():
            servings = int(token)
    return max(servings, 1)


def _is_header(line: str, prefixes: Tuple[str, ...]) -> bool:
    return line.strip().lower().startswith(prefixes)


# --- Section Boundary Detectors ---
# Each takes the lines, the index the search starts from and the metadata
# flags; it returns the located boundary or None so the next one is tried.
Lines = List[str]


def _ingredients_by_keyword(lines: Lines, start: int, special: List[bool]) -> Optional[int]:
    for i in range(start, len(lines)):
        lowered = lines[i].strip().lower()
        if special[i]:
            continue
        if lowered.startswith(INGREDIENTS_PREFIXES) or lowered.startswith(INGREDIENTS_LINES):
            return i + 1
    return None


def _ingredients_by_blank_line(lines: Lines, start: int, special: List[bool]) -> Optional[int]:
    seen_text = False
    for i in range(start, len(lines)):
        if lines[i].strip():
            seen_text = True
        elif seen_text:
            return i + 1
    return None


def _ingredients_by_unit_scan(lines: Lines, start: int, special: List[bool]) -> Optional[int]:
    for i in range(max(start, 1), len(lines)):
        if not special[i] and is_unit_line(lines[i]):
            return i
    return None


def _directions_by_keyword(lines: Lines, start: int, special: List[bool]) -> Optional[Tuple[int, int]]:
    for i in range(start, len(lines)):
        if not special[i] and _is_header(lines[i], DIRECTIONS_PREFIXES):
            return i, i + 1
    return None


def _directions_by_blank_line(lines: Lines, start: int, special: List[bool]) -> Optional[Tuple[int, int]]:
    seen_text = False
    for i in range(start, len(lines)):
        if lines[i].strip():
            seen_text = True
        elif seen_text:
            return i, i + 1
    return None


def _directions_by_unit_scan(lines: Lines, start: int, special: List[bool]) -> Optional[Tuple[int, int]]:
    last = None
    for i in range(start, len(lines)):
        if not special[i] and is_unit_line(lines[i]):
            last = i
    if last is None:
        return None
    return last + 1, last + 1


INGREDIENT_DETECTORS: Tuple[Callable[..., Optional[int]], ...] = (
    _ingredients_by_keyword,
    _ingredients_by_blank_line,
    _ingredients_by_unit_scan,
)
DIRECTION_DETECTORS: Tuple[Callable[..., Optional[Tuple[int, int]]], ...] = (
    _directions_by_keyword,
    _directions_by_blank_line,
    _directions_by_unit_scan,
)


class RecipeTextParser:
    def __init__(self, settings: Optional[ScalerSettings] = None):
        self.settings = settings or default_settings

    def parse(self, text: str, verbatim: bool = False) -> ParsedRecipe:
        """Split free-form recipe text into title, ingredients, directions and metadata.

        Args:
            text: Raw recipe text (typed, pasted or OCR output).
            verbatim: The text came from the plain-text exporter; keep one
                direction per line and never split ingredient columns.

        Returns:
            ParsedRecipe with servings defaulting to the configured value.
        """
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        kinds = [classify_line(line, verbatim) for line in lines]
        special = [kind is not None for kind in kinds]

        metadata = self._extract_metadata(lines, kinds)
        title_index = self._find_title(lines, special)
        title = title_case(lines[title_index]) if title_index is not None else UNKNOWN_TITLE
        body_start = title_index + 1 if title_index is not None else 0

        notes_index = self._find_notes(lines, body_start, special)
        scan_end = notes_index if notes_index is not None else len(lines)
        scan_lines = lines[:scan_end]

        ingredients_start = self._run_detectors(INGREDIENT_DETECTORS, scan_lines, 0, special)
        if ingredients_start is None:
            ingredients_start = body_start

        boundary = self._run_detectors(DIRECTION_DETECTORS, scan_lines, ingredients_start, special)
        if boundary is None:
            ingredients_end, directions_start = scan_end, scan_end
        else:
            ingredients_end, directions_start = boundary

        ingredient_lines = self._extract_ingredients(
            lines[ingredients_start:ingredients_end], special[ingredients_start:ingredients_end], verbatim
        )
        directions = self._extract_directions(
            lines[directions_start:scan_end], special[directions_start:scan_end], verbatim
        )
        notes = ""
        if notes_index is not None:
            notes = self._extract_notes(lines[notes_index + 1:], special[notes_index + 1:])

        servings = self.settings.default_servings
        if metadata.get(SERVINGS):
            servings = parse_servings(metadata[SERVINGS], servings)

        return ParsedRecipe(
            title=title,
            ingredients="\n".join(ingredient_lines),
            directions=directions,
            servings=max(servings, 1),
            is_metric=detect_metric(ingredient_lines),
            notes=notes,
            prep_time=metadata.get(PREP_TIME),
            cook_time=metadata.get(COOK_TIME),
            total_time=metadata.get(TOTAL_TIME)
        )

    def _run_detectors(self, detectors, lines: Lines, start: int, special: List[bool]):
        for detector in detectors:
            found = detector(lines, start, special)
            if found is not None:
                logger.debug(f"Section boundary located by {detector.__name__}: {found}")
                return found
        return None

    def _extract_metadata(self, lines: Lines, kinds: List[Optional[str]]) -> dict:
        # A later declaration replaces an earlier one of the same kind.
        metadata = {}
        for line, kind in zip(lines, kinds):
            if kind is not None:
                metadata[kind] = line.strip()
        return metadata

    def _find_title(self, lines: Lines, special: List[bool]) -> Optional[int]:
        for i, line in enumerate(lines):
            if line.strip() and not special[i]:
                return i
        return None

    def _find_notes(self, lines: Lines, start: int, special: List[bool]) -> Optional[int]:
        for i in range(start, len(lines)):
            if not special[i] and _is_header(lines[i], NOTES_PREFIXES):
                return i
        return None

    def _extract_ingredients(self, lines: Lines, special: List[bool], verbatim: bool) -> List[str]:
        result = []
        for line, is_special in zip(lines, special):
            if is_special or not line.strip():
                continue
            parts = [line] if verbatim else TWO_COLUMNS.split(line.strip())
            result.extend(part.strip() for part in parts if part.strip())
        return result

    def _extract_directions(self, lines: Lines, special: List[bool], verbatim: bool) -> str:
        """Join direction lines into sentences.

        A line ending in "." or ":" closes a step, a trailing hyphen joins the
        next line without a space and anything else continues the sentence.
        """
        text = ""
        for line, is_special in zip(lines, special):
            line = line.strip()
            if is_special or not line:
                continue
            text += NUMBERED_STEP.sub("", line)
            if verbatim or text.endswith((".", ":")):
                text = text.strip() + "\n"
            elif text.endswith("-"):
                text = text[:-1]
            else:
                text += " "
        return text.strip()

    def _extract_notes(self, lines: Lines, special: List[bool]) -> str:
        return "\n".join(line.strip() for line, is_special in zip(lines, special)
                         if line.strip() and not is_special)


recipe_parser = RecipeTextParser()
