from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet, List, NamedTuple, Tuple

# Returned by the number grammar when a token is not a quantity.
UNPARSEABLE = -1.0


class MeasurementSystem(str, Enum):
    IMPERIAL = "imperial"
    METRIC = "metric"

    @classmethod
    def from_flag(cls, is_metric: bool) -> "MeasurementSystem":
        return cls.METRIC if is_metric else cls.IMPERIAL


class UnitKind(str, Enum):
    NONE = "none"
    SMIDGEN = "smidgen"
    PINCH = "pinch"
    DASH = "dash"
    TSP = "tsp"
    TBSP = "tbsp"
    FL_OZ = "fl-oz"
    CUP = "cup"
    PINT = "pint"
    QUART = "quart"
    OZ = "oz"
    LB = "lb"
    GRAM = "gram"
    KG = "kg"
    ML = "ml"
    MM = "mm"
    CM = "cm"
    INCH = "inch"
    CAN = "can"
    PACKAGE = "package"


@dataclass(frozen=True)
class Quantity:
    """An amount and the unit it is measured in.

    A negative value means the text could not be read as a quantity; such a
    quantity is never rendered.
    """

    value: float
    unit: UnitKind = UnitKind.NONE

    @property
    def is_parsed(self) -> bool:
        return self.value >= 0

    def scaled(self, factor: float) -> "Quantity":
        return replace(self, value=self.value * factor)

    def to(self, unit: UnitKind, factor: float = 1.0) -> "Quantity":
        return Quantity(self.value * factor, unit)


# --- Conversion Factors ---
TBSP_TO_TSP = 3.0
OZ_TO_ML = 29.57
OZ_TO_G = 28.35
LB_TO_OZ = 16.0
OZ_TO_TSP = 6.0
OZ_TO_TBSP = 2.0
OZ_TO_CUPS = 1.0 / 8.0
INCH_TO_MM = 25.4
KG_TO_G = 1000.0
CM_TO_MM = 10.0

# Ounces per unit for every volume measure that shares the ounce base.
VOLUME_TO_OZ: Dict[UnitKind, float] = {
    UnitKind.SMIDGEN: 1.0 / 192.0,
    UnitKind.PINCH: 1.0 / 96.0,
    UnitKind.DASH: 1.0 / 48.0,
    UnitKind.TSP: 1.0 / OZ_TO_TSP,
    UnitKind.TBSP: 1.0 / OZ_TO_TBSP,
    UnitKind.FL_OZ: 1.0,
    UnitKind.CUP: 1.0 / OZ_TO_CUPS,
    UnitKind.PINT: 16.0,
    UnitKind.QUART: 32.0,
}

# --- Unit Families ---
LENGTH_UNITS: FrozenSet[UnitKind] = frozenset({UnitKind.INCH, UnitKind.CM, UnitKind.MM})
METRIC_UNITS: FrozenSet[UnitKind] = frozenset(
    {UnitKind.ML, UnitKind.GRAM, UnitKind.KG, UnitKind.CM, UnitKind.MM}
)
IMPERIAL_UNITS: FrozenSet[UnitKind] = frozenset(
    set(VOLUME_TO_OZ) | {UnitKind.OZ, UnitKind.LB, UnitKind.INCH}
)
MASS_UNITS: FrozenSet[UnitKind] = frozenset({UnitKind.LB, UnitKind.GRAM, UnitKind.KG})


def system_of(unit: UnitKind):
    """Return the measurement system a unit belongs to, or None for counts."""
    if unit in METRIC_UNITS:
        return MeasurementSystem.METRIC
    if unit in IMPERIAL_UNITS:
        return MeasurementSystem.IMPERIAL
    return None


# --- Unit Lexicon ---
class UnitVariant(NamedTuple):
    unit: UnitKind
    words: Tuple[str, ...]
    case_sensitive: bool = False
    # Applied to the value at parse time (mm is held as cm, liters as ml).
    factor: float = 1.0


# Order matters: the case-sensitive "T"/"t" forms must be tried before the
# case-insensitive tables so that tablespoon and teaspoon stay distinct.
UNIT_VARIANTS: List[UnitVariant] = [
    UnitVariant(UnitKind.TBSP, ("T.", "T"), case_sensitive=True),
    UnitVariant(UnitKind.TBSP, ("tbsp.", "tbsp", "tbs", "tbs.", "tablespoon", "tablespoons")),
    UnitVariant(UnitKind.TSP, ("t.", "t"), case_sensitive=True),
    UnitVariant(UnitKind.TSP, ("tsp", "tsp.", "teaspoon", "teaspoons")),
    UnitVariant(UnitKind.CUP, ("c.", "c", "cup", "cups")),
    UnitVariant(UnitKind.SMIDGEN, ("smidgen", "smidgens", "smidgeon")),
    UnitVariant(UnitKind.DASH, ("dash", "dashes")),
    UnitVariant(UnitKind.PINCH, ("pinch", "pinches")),
    UnitVariant(UnitKind.GRAM, ("g", "g.", "gram", "grams")),
    UnitVariant(UnitKind.KG, ("kg", "kg.", "kgs", "kilogram", "kilograms")),
    UnitVariant(UnitKind.OZ, ("oz", "oz.", "ounce", "ounces")),
    UnitVariant(UnitKind.QUART, ("quart", "quarts", "qt", "qt.", "qts")),
    UnitVariant(UnitKind.PINT, ("pint", "pints", "pt", "pt.")),
    UnitVariant(UnitKind.LB, ("pound", "pounds", "lb.", "lb", "lbs", "lbs.")),
    UnitVariant(UnitKind.INCH, ("inch", "inches", "in.")),
    UnitVariant(UnitKind.ML, ("ml", "ml.", "mls", "milliliter", "milliliters", "millilitre", "millilitres")),
    UnitVariant(UnitKind.ML, ("l", "l.", "liter", "liters", "litre", "litres"), factor=1000.0),
    UnitVariant(UnitKind.CM, ("cm", "cm.")),
    UnitVariant(UnitKind.CM, ("mm", "mm."), factor=0.1),
    UnitVariant(UnitKind.CAN, ("can", "cans")),
    UnitVariant(UnitKind.PACKAGE, ("pkg.", "pkg", "pkgs", "package", "packages")),
]

FLUID_PREFIXES: Tuple[str, ...] = ("fl", "fl.")
FLUID_OUNCE_WORDS: Tuple[str, ...] = ("oz", "oz.")
