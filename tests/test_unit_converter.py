import pytest
from recipe_scaler.core.settings import ScalerSettings
from recipe_scaler.core.units import OZ_TO_G, OZ_TO_ML, MeasurementSystem, Quantity, UnitKind
from recipe_scaler.models import DirectionsPhrase
from recipe_scaler.services.unit_converter import UnitConverter, celsius_to_fahrenheit, fahrenheit_to_celsius
from recipe_scaler.utils.quantity_parser import parse_leading_quantity

IMPERIAL = MeasurementSystem.IMPERIAL
METRIC = MeasurementSystem.METRIC


class TestConvertQuantity:

    def test_same_system_and_servings_is_identity(self, converter):
        quantity = Quantity(1.5, UnitKind.CUP)
        result = converter.convert_quantity(quantity, "flour", 4, 4, IMPERIAL, IMPERIAL)
        assert result is quantity

    def test_lengths_are_never_scaled(self, converter):
        result = converter.convert_quantity(Quantity(9, UnitKind.INCH), "pan", 4, 8, IMPERIAL, IMPERIAL)
        assert result == Quantity(9, UnitKind.INCH)

    def test_inches_to_millimeters(self, converter):
        result = converter.convert_quantity(Quantity(9, UnitKind.INCH), "pan", 4, 8, IMPERIAL, METRIC)
        assert result.unit == UnitKind.MM
        assert result.value == pytest.approx(228.6)

    def test_kilograms_stay_kilograms_in_metric(self, converter):
        result = converter.convert_quantity(Quantity(1.5, UnitKind.KG), "flour", 4, 8, METRIC, METRIC)
        assert result.unit == UnitKind.KG
        assert result.value == pytest.approx(3.0)

    def test_base_units_for_summing(self, converter):
        assert converter.to_base_quantity(Quantity(2, UnitKind.CUP), "flour", IMPERIAL) == Quantity(16, UnitKind.OZ)
        result = converter.to_base_quantity(Quantity(1, UnitKind.LB), "beef", IMPERIAL)
        assert result == Quantity(16, UnitKind.OZ)

    def test_humanize_depends_on_measure(self, converter):
        assert converter.humanize(Quantity(24, UnitKind.OZ), IMPERIAL, False) == Quantity(3, UnitKind.CUP)
        assert converter.humanize(Quantity(24, UnitKind.OZ), IMPERIAL, True) == Quantity(1.5, UnitKind.LB)


class TestMassHeuristic:

    def test_dry_keyword_means_mass(self, converter):
        assert converter.is_mass("shredded cheese")
        assert converter.is_mass("chicken")

    def test_wet_keyword_wins(self, converter):
        assert not converter.is_mass("chicken broth")
        assert not converter.is_mass("tomatoes sauce")

    def test_unknown_ingredient_is_volume(self, converter):
        assert not converter.is_mass("sugar")


class TestBestGuessImperial:

    def test_thresholds(self, converter):
        assert converter.best_guess_imperial(24) == Quantity(3, UnitKind.CUP)
        assert converter.best_guess_imperial(1.0) == Quantity(2, UnitKind.TBSP)
        assert converter.best_guess_imperial(0.2).unit == UnitKind.TSP
        assert converter.best_guess_imperial(100) == Quantity(100, UnitKind.OZ)


class TestConvertLine:

    def test_scaling_doubles_cups(self, converter):
        assert converter.convert("1 cup sugar", 4, 8, IMPERIAL, IMPERIAL) == "2 c sugar"

    def test_bare_count_scales(self, converter):
        assert converter.convert("4 eggs", 4, 2, IMPERIAL, IMPERIAL) == "2 eggs"

    def test_cup_to_milliliters(self, converter):
        assert converter.convert("1 cup milk", 4, 4, IMPERIAL, METRIC) == "225 ml milk"

    def test_fluid_ounces_are_volume(self, converter):
        assert converter.convert("4 fl oz cream", 4, 4, IMPERIAL, METRIC) == "125 ml cream"

    def test_dry_ounces_to_grams(self, converter):
        assert converter.convert("8 oz cheese", 4, 4, IMPERIAL, METRIC) == "225 g cheese"

    def test_pounds_promote_to_kilograms(self, converter):
        assert converter.convert("2 lb beef", 4, 4, IMPERIAL, METRIC) == "1 kg beef"

    def test_grams_to_pounds(self, converter):
        assert converter.convert("454 g flour", 4, 4, METRIC, IMPERIAL) == "1 lb flour"

    def test_milliliters_to_cups(self, converter):
        assert converter.convert("500 ml water", 4, 4, METRIC, IMPERIAL) == "2 1/8 c water"

    def test_unrounded_output(self, converter):
        assert converter.convert("1 cup sugar", 4, 8, IMPERIAL, IMPERIAL, round_result=False) == "2.0000 c sugar"

    def test_unreadable_lines_are_unchanged(self, converter):
        assert converter.convert("salt to taste", 4, 8, IMPERIAL, METRIC) == "salt to taste"
        assert converter.convert("1/0 cup milk", 4, 8, IMPERIAL, METRIC) == "1/0 cup milk"


class TestTemperatures:

    def test_rounding_of_each_direction(self):
        assert fahrenheit_to_celsius(350) == 180
        assert celsius_to_fahrenheit(180) == 350

    def test_fahrenheit_forms_in_text(self, converter):
        assert converter.convert_temperatures("Bake at 350°F for 20 minutes.", IMPERIAL, METRIC) == \
            "Bake at 180°C for 20 minutes."
        assert converter.convert_temperatures("Heat oven to 350 degrees F.", IMPERIAL, METRIC) == \
            "Heat oven to 180°C."

    def test_celsius_to_fahrenheit_in_text(self, converter):
        assert converter.convert_temperatures("Bake at 180°C.", METRIC, IMPERIAL) == "Bake at 350°F."

    def test_same_system_leaves_text(self, converter):
        assert converter.convert_temperatures("Bake at 350°F.", IMPERIAL, IMPERIAL) == "Bake at 350°F."


class TestConvertDirections:

    def test_excluded_phrase_keeps_its_amount(self, converter):
        directions = "Use a 9-inch pan and add 1 cup sugar."
        excluded = [DirectionsPhrase(text="9-inch")]
        result = converter.convert_directions(directions, 4, 8, IMPERIAL, IMPERIAL, excluded)
        assert result == "Use a 9-inch pan and add 2 c sugar."

    def test_excluded_phrase_still_changes_system(self, converter):
        directions = "Use a 9-inch pan."
        excluded = [DirectionsPhrase(text="9-inch")]
        result = converter.convert_directions(directions, 4, 8, IMPERIAL, METRIC, excluded)
        assert result == "Use a 25cm pan."

    def test_temperature_and_quantities_together(self, converter):
        directions = "Stir in 2 T butter. Bake at 350°F."
        result = converter.convert_directions(directions, 4, 4, IMPERIAL, METRIC)
        assert "180°C" in result
        assert "2 T" not in result


class TestMetricRoundTrip:

    # Imperial line, what it should come back as, and one metric rounding
    # step expressed in the imperial base unit (oz, or inches for lengths).
    @pytest.mark.parametrize("line,expected,step", [
        ("1 tsp vanilla", "1 tsp vanilla", 0.5 / OZ_TO_ML),
        ("1 tbsp oil", "3 tsp oil", 5 / OZ_TO_ML),
        ("1 cup milk", "1 c milk", 25 / OZ_TO_ML),
        ("1 quart water", "4 c water", 100 / OZ_TO_ML),
        ("8 oz cheese", "8 oz cheese", 25 / OZ_TO_G),
        ("2 lb beef", "2 lb beef", 8.0),
        ("9-inch pan", "10 inches pan", 5 / 2.54),
    ])
    def test_imperial_to_metric_and_back(self, converter, line, expected, step):
        metric = converter.convert(line, 4, 4, IMPERIAL, METRIC)
        back = converter.convert(metric, 4, 4, METRIC, IMPERIAL)
        assert back == expected

        original, name = parse_leading_quantity(line)
        returned, _ = parse_leading_quantity(back)
        before = converter.to_base_quantity(original, name, IMPERIAL)
        after = converter.to_base_quantity(returned, name, IMPERIAL)
        assert before.unit == after.unit
        assert abs(after.value - before.value) <= step


class TestRegressions:

    def test_grams_use_the_milliliter_steps(self, converter):
        assert converter.convert("0.25 oz cheese", 4, 4, IMPERIAL, METRIC) == "5 g cheese"

    def test_round_results_setting_is_the_default(self):
        converter = UnitConverter(ScalerSettings(round_results=False))
        assert converter.convert("1 cup sugar", 4, 6, IMPERIAL, IMPERIAL) == "1.5000 c sugar"
        assert converter.convert("1 cup sugar", 4, 6, IMPERIAL, IMPERIAL, round_result=True) == "1 1/2 c sugar"

    def test_overflowing_number_is_left_as_written(self, converter):
        line = "1" * 400 + " eggs"
        assert converter.convert(line, 4, 8, IMPERIAL, IMPERIAL) == line
