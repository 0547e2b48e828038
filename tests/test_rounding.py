from recipe_scaler.core.units import Quantity, UnitKind
from recipe_scaler.utils.rounding import (
    format_quantity,
    round_cm,
    round_generic,
    round_inches,
    round_lb,
    round_ml,
    round_mm,
    round_pint,
    round_tbsp,
    round_tsp,
)


class TestMetricRounding:

    def test_milliliter_steps(self):
        assert round_ml(0.33) == "0.3"
        assert round_ml(7) == "5"
        assert round_ml(237) == "225"
        assert round_ml(473.12) == "475"
        assert round_ml(1200) == "1250"

    def test_centimeters_and_millimeters(self):
        assert round_cm(3.2) == "3cm"
        assert round_cm(1.0) == "10mm"
        assert round_mm(22.86) == "2.5cm"


class TestSpoonRounding:

    def test_tiny_amounts_get_names(self):
        assert round_tsp(0.03) == "a smidgeon"
        assert round_tsp(0.08) == "a pinch"

    def test_teaspoon_fractions(self):
        assert round_tsp(0.3) == "1/4 tsp"
        assert round_tsp(0.5) == "1/2 tsp"
        assert round_tsp(0.9) == "1 tsp"
        assert round_tsp(1.5) == "1 1/2 tsp"
        assert round_tsp(5.2) == "5 tsp"

    def test_small_tablespoons_fall_back_to_teaspoons(self):
        assert round_tbsp(0.5) == "1 1/2 tsp"
        assert round_tbsp(2.0) == "2 tbsp"
        assert round_tbsp(2.5) == "2 1/2 tbsp"


class TestImperialRounding:

    def test_inches(self):
        assert round_inches(0.5) == "1/2"
        assert round_inches(2.0) == "2"
        assert round_inches(2.5) == "2 1/2"
        assert round_inches(9) == "9"

    def test_generic_fractions(self):
        assert round_generic(0.5) == "1/2"
        assert round_generic(1.5) == "1 1/2"
        assert round_generic(3) == "3"
        assert round_generic(0.03) == ""

    def test_pints(self):
        assert round_pint(0.5) == "1/2 pint"
        assert round_pint(1.0) == "1 pint"
        assert round_pint(2.5) == "2 1/2 pints"

    def test_pounds_below_one_become_ounces(self):
        assert round_lb(0.5) == "8 oz"
        assert round_lb(1.5) == "1 1/2 lb"
        assert round_lb(5.4) == "5 lb"


def test_format_quantity_labels():
    assert format_quantity(Quantity(3, UnitKind.CUP)) == "3 c"
    assert format_quantity(Quantity(2, UnitKind.NONE)) == "2"
    assert format_quantity(Quantity(2, UnitKind.INCH)) == "2 inches"
    assert format_quantity(Quantity(1, UnitKind.PINCH)) == "1 pinch"
    assert format_quantity(Quantity(2, UnitKind.PINCH)) == "2 pinches"
    assert format_quantity(Quantity(250, UnitKind.GRAM)) == "250 g"
    assert format_quantity(Quantity(8, UnitKind.OZ)) == "8 oz"


def test_format_quantity_unrounded():
    assert format_quantity(Quantity(1.5, UnitKind.CUP), rounded=False) == "1.5000 c"
