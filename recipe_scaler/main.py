from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time
import uuid
from recipe_scaler.models import (
    ConvertIngredientRequest,
    ConvertIngredientResponse,
    GroceryListRequest,
    GroceryListResponse,
    IngredientsToGroceryRequest,
    ParsedRecipe,
    ParseRecipeRequest,
    PhrasesRequest,
    PhrasesResponse,
    Recipe,
    RecipeBookExportRequest,
    RecipeBookExportResponse,
    RecipeBookImportRequest,
    RecipeBookImportResponse,
    ScaleRecipeRequest,
)
from recipe_scaler.services.parser_service import recipe_parser
from recipe_scaler.services.unit_converter import unit_converter
from recipe_scaler.services.directions_scanner import directions_scanner
from recipe_scaler.services.grocery_service import grocery_consolidator
from recipe_scaler.services.recipe_service import RecipeImportError, book_to_plain_text, recipe_service
from recipe_scaler.core.settings import settings
from recipe_scaler.core.logging_config import get_logger, level_from_name, setup_logging

setup_logging(level_from_name(settings.log_level))

app = FastAPI(title="Recipe Scaler API", version="0.1.0")
logger = get_logger(__name__)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000.0
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    response.headers["X-Request-ID"] = request_id
    return response

@app.exception_handler(RecipeImportError)
async def recipe_import_error_handler(request: Request, exc: RecipeImportError):
    logger.error(f"Recipe book import failure: {exc.errors}")
    return JSONResponse(
        status_code=422,
        content={
            "error_code": "RECIPE_IMPORT_FAILURE",
            "message": "No recipe could be read from the recipe book.",
            "errors": exc.errors
        }
    )

@app.get("/")
def read_root():
    return {"message": "Welcome to the Recipe Scaler API. Visit /docs for documentation."}


@app.post("/api/recipes/parse", response_model=ParsedRecipe)
async def parse_recipe(request: ParseRecipeRequest):
    """
    Split free-form recipe text into title, ingredients, directions and servings.
    """
    return recipe_parser.parse(request.text, verbatim=request.verbatim)


@app.post("/api/ingredients/convert", response_model=ConvertIngredientResponse)
async def convert_ingredient(request: ConvertIngredientRequest):
    converted = unit_converter.convert(
        request.line,
        request.from_servings,
        request.to_servings,
        request.from_system,
        request.to_system,
        round_result=request.round
    )
    return ConvertIngredientResponse(original=request.line, converted=converted)


@app.post("/api/recipes/scale", response_model=Recipe)
async def scale_recipe(request: ScaleRecipeRequest):
    """
    Rescale a recipe to a serving count and measurement system.
    Excluded directions phrases keep their amount.
    """
    return recipe_service.scale_recipe(
        request.recipe, request.servings, request.is_metric, round_result=request.round
    )


@app.post("/api/directions/phrases", response_model=PhrasesResponse)
async def directions_phrases(request: PhrasesRequest):
    return PhrasesResponse(phrases=directions_scanner.get_phrases(request.directions))


@app.post("/api/grocery-list/consolidate", response_model=GroceryListResponse)
async def consolidate_grocery_list(request: GroceryListRequest):
    items = grocery_consolidator.consolidate(request.items)
    return GroceryListResponse(items=items, share_text=grocery_consolidator.share_text(items))


@app.post("/api/grocery-list/from-ingredients", response_model=GroceryListResponse)
async def grocery_list_from_ingredients(request: IngredientsToGroceryRequest):
    items = grocery_consolidator.ingredients_to_grocery_items(request.ingredients)
    return GroceryListResponse(items=items, share_text=grocery_consolidator.share_text(items))


@app.post("/api/recipe-book/import", response_model=RecipeBookImportResponse)
async def import_recipe_book(request: RecipeBookImportRequest):
    """
    Read a plain-text recipe book produced by the exporter.
    """
    recipes, skipped = recipe_service.import_recipe_book(request.text)
    return RecipeBookImportResponse(recipes=recipes, skipped=skipped)


@app.post("/api/recipe-book/export", response_model=RecipeBookExportResponse)
async def export_recipe_book(request: RecipeBookExportRequest):
    return RecipeBookExportResponse(text=book_to_plain_text(request.recipes, request.include_notes))
