from typing import List, Optional
from pydantic import BaseModel, Field, constr

from recipe_scaler.core.units import MeasurementSystem


class DirectionsPhrase(BaseModel):
    text: str = Field(..., description="Scalable quantity phrase exactly as it appears in the directions")
    context_snippet: str = ""
    start_offset: int = 0
    end_offset: int = 0


class ParsedRecipe(BaseModel):
    title: str
    ingredients: str = ""
    directions: str = ""
    servings: int = Field(default=4, ge=1)
    is_metric: bool = False
    notes: str = ""
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    total_time: Optional[str] = None

    @property
    def measurement_system(self) -> MeasurementSystem:
        return MeasurementSystem.from_flag(self.is_metric)

    def ingredient_lines(self) -> List[str]:
        return [line for line in self.ingredients.split("\n") if line.strip()]

    def direction_lines(self) -> List[str]:
        return [line for line in self.directions.split("\n") if line.strip()]


class Recipe(ParsedRecipe):
    excluded_phrases: List[DirectionsPhrase] = Field(
        default_factory=list,
        description="Directions phrases converted between systems but never scaled"
    )


class GroceryItem(BaseModel):
    text: str
    checked: bool = False


class ParseRecipeRequest(BaseModel):
    text: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="Free-form recipe text (typed, pasted or OCR output)"
    )
    verbatim: bool = Field(
        default=False,
        description="Text was produced by the plain-text exporter; disable reflow heuristics"
    )


class ConvertIngredientRequest(BaseModel):
    line: str
    from_servings: int = Field(default=4, ge=1)
    to_servings: int = Field(default=4, ge=1)
    from_system: MeasurementSystem = MeasurementSystem.IMPERIAL
    to_system: MeasurementSystem = MeasurementSystem.IMPERIAL
    round: Optional[bool] = Field(default=None, description="Round to practical kitchen amounts; defaults to the configured round_results")


class ConvertIngredientResponse(BaseModel):
    original: str
    converted: str


class ScaleRecipeRequest(BaseModel):
    recipe: Recipe
    servings: int = Field(..., ge=1)
    is_metric: bool = False
    round: Optional[bool] = Field(default=None, description="Round to practical kitchen amounts; defaults to the configured round_results")


class PhrasesRequest(BaseModel):
    directions: str


class PhrasesResponse(BaseModel):
    phrases: List[DirectionsPhrase] = Field(default_factory=list)


class GroceryListRequest(BaseModel):
    items: List[GroceryItem] = Field(default_factory=list)


class IngredientsToGroceryRequest(BaseModel):
    ingredients: str


class GroceryListResponse(BaseModel):
    items: List[GroceryItem] = Field(default_factory=list)
    share_text: str = ""


class RecipeBookImportRequest(BaseModel):
    text: str


class RecipeBookImportResponse(BaseModel):
    recipes: List[Recipe] = Field(default_factory=list)
    skipped: int = 0


class RecipeBookExportRequest(BaseModel):
    recipes: List[Recipe] = Field(default_factory=list)
    include_notes: bool = False


class RecipeBookExportResponse(BaseModel):
    text: str
