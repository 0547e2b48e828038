import math
import re
from typing import Iterable, Optional

from recipe_scaler.models import DirectionsPhrase
from recipe_scaler.core.rules import DRY_INGREDIENTS, WET_INGREDIENTS
from recipe_scaler.core.units import (
    CM_TO_MM,
    INCH_TO_MM,
    KG_TO_G,
    LB_TO_OZ,
    LENGTH_UNITS,
    OZ_TO_CUPS,
    OZ_TO_G,
    OZ_TO_ML,
    OZ_TO_TBSP,
    OZ_TO_TSP,
    VOLUME_TO_OZ,
    MeasurementSystem,
    Quantity,
    UnitKind,
)
from recipe_scaler.utils.quantity_parser import parse_leading_quantity
from recipe_scaler.utils.rounding import format_quantity, round_half_up
from recipe_scaler.services.directions_scanner import find_quantity_spans, is_excluded
from recipe_scaler.core.settings import ScalerSettings, settings as default_settings
from recipe_scaler.core.logging_config import get_logger

logger = get_logger(__name__)

METRIC = MeasurementSystem.METRIC
IMPERIAL = MeasurementSystem.IMPERIAL

# Best-guess imperial thresholds, in ounces.
CUP_CEILING_OZ = 10 / OZ_TO_CUPS
CUP_FLOOR_OZ = 7.0 / 32.0 / OZ_TO_CUPS
TBSP_FLOOR_OZ = 0.83 / OZ_TO_TBSP

# Metric grams that read better as kilograms.
KG_BAND = (490.0, 510.0)
KG_FLOOR_G = 800.0

FAHRENHEIT = re.compile(
    r"\b([0-9]{3})(?: ?°? ?(?:F|Fahrenheit)\b| degrees?(?: ?(?:F|Fahrenheit)\b)?|°)"
)
CELSIUS = re.compile(
    r"\b([0-9]{3})(?: ?°? ?(?:C|Celsius)\b| degrees?(?: ?(?:C|Celsius)\b)?|°)"
)


def fahrenheit_to_celsius(degrees: float) -> int:
    """Convert an oven temperature, rounded to the nearest 10°C."""
    celsius = (degrees - 32.0) * 5.0 / 9.0
    return round_half_up(celsius / 10.0) * 10


def celsius_to_fahrenheit(degrees: float) -> int:
    """Convert an oven temperature, rounded to the nearest 25°F."""
    fahrenheit = degrees * 9.0 / 5.0 + 32.0
    return round_half_up(fahrenheit / 25.0) * 25


class UnitConverter:
    def __init__(self, settings: Optional[ScalerSettings] = None):
        self.settings = settings or default_settings

    def is_mass(self, ingredient: str) -> bool:
        """Guess whether an ounce of this ingredient is weighed rather than poured.

        A dry keyword marks it as mass unless a wet keyword also appears
        ("tomato sauce" is poured).
        """
        name = ingredient.lower()
        if not any(dry in name for dry in DRY_INGREDIENTS):
            return False
        return not any(wet in name for wet in WET_INGREDIENTS)

    def best_guess_imperial(self, ounces: float) -> Quantity:
        """Pick cups, tablespoons or teaspoons for a volume given in ounces."""
        if ounces > CUP_CEILING_OZ:
            return Quantity(ounces, UnitKind.OZ)
        if ounces > CUP_FLOOR_OZ:
            return Quantity(ounces * OZ_TO_CUPS, UnitKind.CUP)
        if ounces >= TBSP_FLOOR_OZ:
            return Quantity(ounces * OZ_TO_TBSP, UnitKind.TBSP)
        return Quantity(ounces * OZ_TO_TSP, UnitKind.TSP)

    def convert_quantity(
        self,
        quantity: Quantity,
        ingredient: str,
        from_servings: int,
        to_servings: int,
        from_system: MeasurementSystem,
        to_system: MeasurementSystem,
        base_units_only: bool = False
    ) -> Quantity:
        """Scale a quantity by the serving ratio and express it in the target system.

        Args:
            quantity: Parsed quantity (mm already held as cm, liters as ml).
            ingredient: Text following the quantity; drives the mass/volume guess.
            from_servings: Servings the quantity was written for.
            to_servings: Servings wanted.
            from_system: System the recipe was written in.
            to_system: System wanted.
            base_units_only: Stop at oz / g / ml / mm instead of picking a
                display unit, so that results can be added together.

        Returns:
            A new Quantity; the input is never modified.
        """
        if (from_system == to_system and from_servings == to_servings
                and not base_units_only):
            return quantity

        ratio = to_servings / max(from_servings, 1)
        unit = quantity.unit

        if unit == UnitKind.NONE:
            return quantity.scaled(ratio)

        if unit in LENGTH_UNITS:
            return self._convert_length(quantity, to_system, base_units_only)

        scaled = quantity.scaled(ratio)

        if unit in (UnitKind.CAN, UnitKind.PACKAGE):
            return scaled
        if unit == UnitKind.OZ and self.is_mass(ingredient):
            return self._convert_mass(scaled.value, to_system, base_units_only)
        if unit == UnitKind.LB:
            return self._convert_mass(scaled.value * LB_TO_OZ, to_system, base_units_only)
        if unit in (UnitKind.GRAM, UnitKind.KG):
            return self._convert_metric_mass(scaled, to_system, base_units_only)
        return self._convert_volume(scaled, to_system, base_units_only)

    def _convert_length(self, quantity: Quantity, to_system: MeasurementSystem, base_units_only: bool) -> Quantity:
        unit = quantity.unit
        if unit == UnitKind.INCH and to_system == METRIC:
            return quantity.to(UnitKind.MM, INCH_TO_MM)
        if unit == UnitKind.MM and to_system == IMPERIAL:
            return quantity.to(UnitKind.INCH, 1.0 / INCH_TO_MM)
        if unit == UnitKind.CM and to_system == IMPERIAL:
            return quantity.to(UnitKind.INCH, CM_TO_MM / INCH_TO_MM)
        if unit == UnitKind.CM and base_units_only:
            return quantity.to(UnitKind.MM, CM_TO_MM)
        return quantity

    def _convert_mass(self, ounces: float, to_system: MeasurementSystem, base_units_only: bool) -> Quantity:
        if to_system == IMPERIAL:
            if ounces >= LB_TO_OZ and not base_units_only:
                return Quantity(ounces / LB_TO_OZ, UnitKind.LB)
            return Quantity(ounces, UnitKind.OZ)
        grams = ounces * OZ_TO_G
        if base_units_only:
            return Quantity(grams, UnitKind.GRAM)
        if KG_BAND[0] < grams < KG_BAND[1] or grams > KG_FLOOR_G:
            return Quantity(grams / KG_TO_G, UnitKind.KG)
        return Quantity(grams, UnitKind.GRAM)

    def _convert_metric_mass(self, quantity: Quantity, to_system: MeasurementSystem, base_units_only: bool) -> Quantity:
        if quantity.unit == UnitKind.KG and to_system == METRIC and not base_units_only:
            return quantity
        grams = quantity.value * (KG_TO_G if quantity.unit == UnitKind.KG else 1.0)
        if to_system == METRIC:
            return Quantity(grams, UnitKind.GRAM)
        ounces = grams / OZ_TO_G
        if base_units_only:
            return Quantity(ounces, UnitKind.OZ)
        return Quantity(ounces / LB_TO_OZ, UnitKind.LB)

    def _convert_volume(self, quantity: Quantity, to_system: MeasurementSystem, base_units_only: bool) -> Quantity:
        if quantity.unit in VOLUME_TO_OZ:
            quantity = quantity.to(UnitKind.OZ, VOLUME_TO_OZ[quantity.unit])
        if quantity.unit == UnitKind.OZ and to_system == METRIC:
            return quantity.to(UnitKind.ML, OZ_TO_ML)
        if to_system == IMPERIAL:
            if quantity.unit == UnitKind.ML:
                quantity = quantity.to(UnitKind.OZ, 1.0 / OZ_TO_ML)
            if quantity.unit == UnitKind.OZ and not base_units_only:
                return self.best_guess_imperial(quantity.value)
        return quantity

    def to_base_quantity(self, quantity: Quantity, ingredient: str, system: MeasurementSystem) -> Quantity:
        """Express a quantity in the base unit of its family so it can be summed."""
        return self.convert_quantity(quantity, ingredient, 1, 1, system, system, base_units_only=True)

    def humanize(self, quantity: Quantity, system: MeasurementSystem, mass: bool) -> Quantity:
        """Pick a display unit for a base-unit quantity (the inverse of to_base_quantity)."""
        unit = quantity.unit
        if unit == UnitKind.OZ and mass:
            return self._convert_mass(quantity.value, system, False)
        if unit == UnitKind.GRAM:
            return self._convert_mass(quantity.value / OZ_TO_G, system, False)
        if unit in (UnitKind.OZ, UnitKind.ML):
            return self._convert_volume(quantity, system, False)
        return quantity

    def convert(
        self,
        ingredient: str,
        from_servings: int,
        to_servings: int,
        from_system: MeasurementSystem,
        to_system: MeasurementSystem,
        round_result: Optional[bool] = None,
        base_units_only: bool = False
    ) -> str:
        """Convert one ingredient line for a serving count and measurement system.

        Lines without a readable leading quantity come back unchanged. Rounding
        follows the configured round_results unless round_result is given.
        """
        quantity, remainder = parse_leading_quantity(ingredient)
        if quantity is None:
            return ingredient
        if not quantity.is_parsed:
            logger.debug(f"Leaving unparseable quantity as written: {ingredient!r}")
            return ingredient
        converted = self.convert_quantity(
            quantity, remainder, from_servings, to_servings, from_system, to_system, base_units_only
        )
        if not math.isfinite(converted.value):
            return ingredient
        if round_result is None:
            round_result = self.settings.round_results
        return (format_quantity(converted, round_result) + " " + remainder.strip()).strip()

    def convert_temperatures(self, text: str, from_system: MeasurementSystem, to_system: MeasurementSystem) -> str:
        """Rewrite three-digit oven temperatures when the system changes."""
        if from_system == IMPERIAL and to_system == METRIC:
            return FAHRENHEIT.sub(lambda m: f"{fahrenheit_to_celsius(float(m.group(1)))}°C", text)
        if from_system == METRIC and to_system == IMPERIAL:
            return CELSIUS.sub(lambda m: f"{celsius_to_fahrenheit(float(m.group(1)))}°F", text)
        return text

    def convert_directions(
        self,
        directions: str,
        from_servings: int,
        to_servings: int,
        from_system: MeasurementSystem,
        to_system: MeasurementSystem,
        excluded_phrases: Optional[Iterable[DirectionsPhrase]] = None
    ) -> str:
        """Convert the quantities embedded in a directions block.

        Excluded phrases keep their amount (only the system changes). Phrases
        whose quantity does not change are left exactly as written.
        """
        excluded = list(excluded_phrases or [])
        text = self.convert_temperatures(directions, from_system, to_system)
        pieces = []
        last = 0
        for start, end in find_quantity_spans(text):
            phrase = text[start:end]
            quantity, remainder = parse_leading_quantity(phrase)
            if quantity is None or not quantity.is_parsed:
                continue
            target_servings = from_servings if is_excluded(phrase, excluded) else to_servings
            converted = self.convert_quantity(
                quantity, remainder, from_servings, target_servings, from_system, to_system
            )
            if converted == quantity or not math.isfinite(converted.value):
                continue
            pieces.append(text[last:start])
            pieces.append((format_quantity(converted) + " " + remainder).strip())
            last = end
        pieces.append(text[last:])
        return "".join(pieces)


unit_converter = UnitConverter()
