from typing import List, Optional, Tuple

from recipe_scaler.models import Recipe
from recipe_scaler.core.rules import RECIPE_BREAK, RECIPE_BREAK_DETECT
from recipe_scaler.core.units import MeasurementSystem
from recipe_scaler.services.parser_service import RecipeTextParser, recipe_parser
from recipe_scaler.services.unit_converter import UnitConverter, unit_converter
from recipe_scaler.core.logging_config import get_logger

logger = get_logger(__name__)


class RecipeImportError(Exception):
    def __init__(self, errors: List[str]):
        super().__init__("Failed to import any recipe from the recipe book")
        self.errors = errors


def to_plain_text(recipe: Recipe, include_notes: bool = False) -> str:
    """Render a recipe in the plain-text form the importer reads back verbatim."""
    lines = [recipe.title, "Ingredients"]
    lines.extend(recipe.ingredient_lines())
    lines.append("Directions")
    lines.extend(recipe.direction_lines())
    lines.append(f"Serves {recipe.servings}")
    if include_notes and recipe.notes.strip():
        lines.append("Notes")
        lines.extend(line for line in recipe.notes.split("\n") if line.strip())
    return "\n".join(lines) + "\n"


def book_to_plain_text(recipes: List[Recipe], include_notes: bool = False) -> str:
    separator = RECIPE_BREAK + "\n"
    return separator.join(to_plain_text(recipe, include_notes) for recipe in recipes)


def split_recipe_book(text: str) -> List[str]:
    blocks: List[List[str]] = [[]]
    for line in text.replace("\r\n", "\n").split("\n"):
        if line.startswith(RECIPE_BREAK_DETECT):
            blocks.append([])
        else:
            blocks[-1].append(line)
    return ["\n".join(block) for block in blocks]


class RecipeService:
    def __init__(self, parser: Optional[RecipeTextParser] = None, converter: Optional[UnitConverter] = None):
        self.parser = parser or recipe_parser
        self.converter = converter or unit_converter

    def import_recipe_book(self, text: str) -> Tuple[List[Recipe], int]:
        """
        Parses every recipe of an exported plain-text book.
        Returns the recipes and the number of blocks that could not be read.
        """
        recipes = []
        errors = []
        for index, block in enumerate(split_recipe_book(text)):
            if not block.strip():
                continue
            try:
                parsed = self.parser.parse(block, verbatim=True)
                recipes.append(Recipe(**parsed.model_dump()))
            except Exception as e:
                logger.error(f"Skipping recipe block {index}: {e}")
                errors.append(f"block {index}: {e}")

        if not recipes and errors:
            raise RecipeImportError(errors)

        logger.info(f"Imported {len(recipes)} recipes ({len(errors)} skipped)")
        return recipes, len(errors)

    def scale_recipe(self, recipe: Recipe, servings: int, is_metric: bool, round_result: Optional[bool] = None) -> Recipe:
        """Convert every ingredient and the directions to a serving count and system.

        Args:
            recipe: Recipe as parsed, with any excluded directions phrases.
            servings: Servings wanted.
            is_metric: Target measurement system.
            round_result: Render practical kitchen amounts instead of decimals;
                None uses the configured round_results.

        Returns:
            A new Recipe; the input recipe is unchanged.
        """
        if servings == recipe.servings and is_metric == recipe.is_metric:
            return recipe.model_copy()

        from_system = recipe.measurement_system
        to_system = MeasurementSystem.from_flag(is_metric)
        ingredients = "\n".join(
            self.converter.convert(line, recipe.servings, servings, from_system, to_system, round_result)
            if line.strip() else line
            for line in recipe.ingredients.split("\n")
        )
        directions = self.converter.convert_directions(
            recipe.directions, recipe.servings, servings, from_system, to_system, recipe.excluded_phrases
        )
        logger.info(f"Scaled '{recipe.title}' from {recipe.servings} to {servings} servings ({to_system.value})")
        return recipe.model_copy(update={
            "ingredients": ingredients,
            "directions": directions,
            "servings": servings,
            "is_metric": is_metric
        })


recipe_service = RecipeService()
