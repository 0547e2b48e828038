import json
import sys
from recipe_scaler.services.recipe_service import recipe_service


def main():
    if len(sys.argv) < 2:
        raise RuntimeError("Usage: python -m scripts.import_recipe_book <recipe-book.txt>")

    input_path = sys.argv[1]
    with open(input_path, "r", encoding="utf-8") as handle:
        text = handle.read()

    recipes, skipped = recipe_service.import_recipe_book(text)
    print(json.dumps([recipe.model_dump() for recipe in recipes], indent=2, ensure_ascii=False))
    print(f"Imported {len(recipes)} recipes, skipped {skipped}.", file=sys.stderr)


if __name__ == "__main__":
    main()
