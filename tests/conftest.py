import pytest
from recipe_scaler.core.settings import ScalerSettings
from recipe_scaler.services.parser_service import RecipeTextParser
from recipe_scaler.services.unit_converter import UnitConverter
from recipe_scaler.services.directions_scanner import DirectionsScanner
from recipe_scaler.services.grocery_service import GroceryConsolidator
from recipe_scaler.services.recipe_service import RecipeService

@pytest.fixture
def parser_service():
    """Fixture for RecipeTextParser with default settings."""
    return RecipeTextParser(ScalerSettings())

@pytest.fixture
def converter():
    """Fixture for UnitConverter instance."""
    return UnitConverter(ScalerSettings())

@pytest.fixture
def scanner():
    """Fixture for DirectionsScanner with a 20 character context radius."""
    return DirectionsScanner(context_chars=20)

@pytest.fixture
def consolidator(converter):
    """Fixture for GroceryConsolidator instance."""
    return GroceryConsolidator(converter)

@pytest.fixture
def recipe_book_service(parser_service, converter):
    """Fixture for RecipeService wired to fresh parser and converter."""
    return RecipeService(parser_service, converter)

@pytest.fixture
def pancake_text():
    return (
        "Fluffy pancakes\n"
        "Serves 4\n"
        "Prep time: 10 minutes\n"
        "\n"
        "Ingredients\n"
        "1 1/2 cups flour\n"
        "2 T sugar\n"
        "1 tsp salt\n"
        "2 eggs\n"
        "\n"
        "Directions\n"
        "1. Whisk the flour, sugar and salt in a bowl.\n"
        "2. Beat in the eggs and 1 cup milk until smooth-\n"
        "ish and thick.\n"
        "Cook on a hot griddle.\n"
        "\n"
        "Notes\n"
        "Keeps for two days.\n"
    )
