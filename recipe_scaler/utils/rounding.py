"""Practical rounding: quantities are rounded to amounts a cook can measure.

Every unit family has its own table. Thresholds are inclusive on the lower
bound and exclusive on the upper bound.
"""
import math
from typing import Callable, Dict, List, Tuple

from recipe_scaler.core.units import LB_TO_OZ, TBSP_TO_TSP, Quantity, UnitKind

# (upper bound, step); values past the last bound use the final step.
StepTable = List[Tuple[float, float]]

ML_STEPS: StepTable = [
    (0.5, 0.1), (1.0, 0.25), (5.0, 0.5), (50.0, 5.0), (100.0, 10.0),
    (500.0, 25.0), (1000.0, 100.0), (math.inf, 250.0),
]
OZ_STEPS: StepTable = [
    (0.5, 0.1), (1.0, 0.25), (10.0, 0.5), (50.0, 5.0), (100.0, 10.0),
    (500.0, 25.0), (1000.0, 100.0), (math.inf, 250.0),
]
CM_STEPS: StepTable = [
    (5.0, 0.5), (50.0, 5.0), (100.0, 10.0), (500.0, 25.0), (1000.0, 100.0),
    (math.inf, 250.0),
]

# Upper bound of each sixteenth-of-an-inch bucket below one inch.
INCH_FRACTIONS: List[Tuple[float, str]] = [
    (0.09375, "1/16"), (0.15625, "1/8"), (0.21875, "3/16"), (0.28125, "1/4"),
    (0.34375, "5/16"), (0.4375, "3/8"), (0.5625, "1/2"), (0.6875, "5/8"),
    (0.8125, "3/4"), (0.9375, "7/8"),
]
GENERIC_FRACTIONS: List[Tuple[float, str]] = [
    (0.19, "1/8"), (0.29, "1/4"), (0.42, "1/3"), (0.58, "1/2"), (0.71, "2/3"),
    (0.875, "3/4"),
]
TSP_FRACTIONS: List[Tuple[float, str]] = [
    (0.047, "a smidgeon"), (0.094, "a pinch"), (0.19, "1/8 tsp"), (0.38, "1/4 tsp"),
    (0.75, "1/2 tsp"), (1.0, "1 tsp"),
]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _whole(value: float) -> str:
    return str(int(value))


def _decimal(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def _to_step(value: float, step: float) -> float:
    if step < 1:
        per_unit = round(1 / step)
        return round_half_up(value * per_unit) / per_unit
    return round_half_up(value / step) * step


def round_stepped(value: float, table: StepTable) -> float:
    for limit, step in table:
        if value < limit:
            return _to_step(value, step)
    return _to_step(value, table[-1][1])


def _lookup(value: float, table: List[Tuple[float, str]]):
    for limit, label in table:
        if value < limit:
            return label
    return None


def _halves(value: float, suffix: str = "") -> str:
    """Whole number, plus " 1/2" when the fraction sits in the middle band."""
    whole = int(value)
    frac = value - whole
    if frac < 0.75:
        return _whole(math.floor(value)) + (" 1/2" if frac > 0.25 else "") + suffix
    return _whole(round_half_up(value)) + suffix


def round_ml(ml: float) -> str:
    return _decimal(round_stepped(ml, ML_STEPS))


def round_oz(oz: float) -> str:
    return _decimal(round_stepped(oz, OZ_STEPS))


def round_mm(mm: float) -> str:
    if mm > 15:
        return round_cm(mm / 10.0)
    return _whole(round_half_up(mm)) + "mm"


def round_cm(cm: float) -> str:
    if cm < 1.5:
        return round_mm(cm * 10.0)
    return _decimal(round_stepped(cm, CM_STEPS)) + "cm"


def round_tsp(tsp: float) -> str:
    label = _lookup(tsp, TSP_FRACTIONS)
    if label is not None:
        return label
    if tsp < 4:
        return _halves(tsp, " tsp")
    return _whole(round_half_up(tsp)) + " tsp"


def round_tbsp(tbsp: float) -> str:
    whole = int(tbsp)
    frac = tbsp - whole
    if frac < 0.75 and whole < 2:
        return round_tsp(tbsp * TBSP_TO_TSP)
    if 0.25 < frac < 0.75:
        return _whole(math.floor(tbsp)) + " 1/2 tbsp"
    return _whole(round_half_up(tbsp)) + " tbsp"


def round_inches(value: float) -> str:
    label = _lookup(value, INCH_FRACTIONS)
    if label is not None:
        return label
    if value < 1.375:
        return "1"
    if value < 3:
        whole = int(value)
        frac = value - whole
        if frac < INCH_FRACTIONS[0][0] / 2:
            return _whole(whole)
        if frac < 0.875:
            return _whole(whole) + " " + round_inches(frac)
        return _whole(round_half_up(value))
    if value < 6:
        return _halves(value)
    return _whole(round_half_up(value))


def round_generic(value: float) -> str:
    if value < 0.06:
        return ""
    label = _lookup(value, GENERIC_FRACTIONS)
    if label is not None:
        return label
    if value < 1.29:
        return "1"
    if value < 3:
        whole = int(value)
        frac = value - whole
        if frac < 0.875:
            return (_whole(whole) + " " + round_generic(frac)).strip()
        return _whole(round_half_up(value))
    if value < 6:
        return _halves(value)
    return _whole(round_half_up(value))


def round_pint(pint: float) -> str:
    if pint < 4:
        whole = int(pint)
        frac = pint - whole
        if whole == 0 and frac < 0.75:
            return ("1/2" if frac > 0.25 else "1/4") + " pint"
        if frac < 0.75:
            return _halves(pint, " pint" if whole == 1 and frac <= 0.25 else " pints")
        rounded = round_half_up(pint)
        return _whole(rounded) + (" pint" if rounded == 1 else " pints")
    return _whole(round_half_up(pint)) + " pints"


def round_lb(lb: float) -> str:
    if lb < 15.0 / 16.0:
        return _whole(round_half_up(lb * LB_TO_OZ)) + " oz"
    if lb < 4:
        return _halves(lb, " lb")
    return _whole(round_half_up(lb)) + " lb"


def _plural(word: str, plural: str) -> Callable[[float], str]:
    return lambda value: plural if value > 1 else word


def _counted(word: str, plural: str) -> Callable[[float, bool], str]:
    name = _plural(word, plural)
    return lambda value, rounded: (
        (round_generic(value) if rounded else f"{value:.4f}") + " " + name(value)
    ).strip()


def _suffixed(rounder: Callable[[float], str], suffix: str) -> Callable[[float, bool], str]:
    return lambda value, rounded: (
        (rounder(value).strip() if rounded else f"{value:.4f}") + " " + suffix
    ).strip()


def _self_labelled(rounder: Callable[[float], str], suffix: str) -> Callable[[float, bool], str]:
    return lambda value, rounded: rounder(value) if rounded else f"{value:.4f} {suffix}"


def _inches(value: float, rounded: bool) -> str:
    number = round_inches(value) if rounded else f"{value:.4f}"
    return number + (" inches" if value > 1 else " inch")


_FORMATTERS: Dict[UnitKind, Callable[[float, bool], str]] = {
    UnitKind.NONE: lambda value, rounded: round_generic(value) if rounded else f"{value:.4f}",
    UnitKind.SMIDGEN: _counted("smidgen", "smidgens"),
    UnitKind.PINCH: _counted("pinch", "pinches"),
    UnitKind.DASH: _counted("dash", "dashes"),
    UnitKind.TSP: _self_labelled(round_tsp, "tsp"),
    UnitKind.TBSP: _self_labelled(round_tbsp, "tbsp"),
    UnitKind.FL_OZ: _suffixed(round_oz, "fl oz"),
    UnitKind.CUP: _suffixed(round_generic, "c"),
    UnitKind.PINT: _self_labelled(round_pint, "pt"),
    UnitKind.QUART: _suffixed(round_generic, "qt"),
    UnitKind.OZ: _suffixed(round_oz, "oz"),
    UnitKind.LB: _self_labelled(round_lb, "lb"),
    UnitKind.GRAM: _suffixed(round_ml, "g"),
    UnitKind.KG: _suffixed(round_generic, "kg"),
    UnitKind.ML: _suffixed(round_ml, "ml"),
    UnitKind.MM: _self_labelled(round_mm, "mm"),
    UnitKind.CM: _self_labelled(round_cm, "cm"),
    UnitKind.INCH: _inches,
    UnitKind.CAN: _counted("can", "cans"),
    UnitKind.PACKAGE: _counted("pkg", "pkgs"),
}


def format_quantity(quantity: Quantity, rounded: bool = True) -> str:
    """Render a quantity with its unit, practically rounded or to 4 places."""
    return _FORMATTERS[quantity.unit](quantity.value, rounded)
