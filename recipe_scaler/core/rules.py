from typing import List, Tuple

# --- Mass / Volume Keywords ---
# An ounce of one of these is weighed, not poured.
DRY_INGREDIENTS: List[str] = [
    "noodles", "ginger root", "chocolate chips", "asparagus", "thyme", "tomatoes",
    "almonds", "cheese", "prosciutto", "arugula", "macaroni", "meat", "potatoes",
    "barramundi", "greens", "beef", "nuts", "beans", "mushrooms", "sausage", "chicken"
]

# Wet keywords win over dry ones ("tomato sauce", "chicken broth").
WET_INGREDIENTS: List[str] = [
    "sauce", "paste", "soup", "bouillon", "juice", "liqueur", "extract", "puree",
    "purée", "stock", "salsa", "mayo", "mayonnaise", "dressing", "milk", "broth"
]

# --- Grocery Normalization ---
# Trailing preparation words dropped before grocery lines are compared.
PREP_WORDS: List[str] = [
    "chopped", "diced", "quartered", "mashed", "shredded", "minced", "cubed", "cooked",
    "uncooked", "drained", "undrained", "chilled", "cold", "halved", "seeded", "peeled",
    "divided", "beaten", "rinsed", "blanched", "juiced", "dry", "flaked", "melted",
    "softened", "room temperature"
]

# --- Measurement System Detection ---
# Checked against the first word of an ingredient line once digits and
# fraction glyphs are stripped. Imperial is consulted first.
IMPERIAL_DETECTION_UNITS: List[str] = [
    "tbsp", "tablespoons", "tablespoon", "tsp", "teaspoons", "teaspoon", "oz", "cup",
    "cups", "c", "lb", "pound", "lbs", "pounds", "can", "package", "pkg"
]
METRIC_DETECTION_UNITS: List[str] = [
    "ml", "g", "kg", "gram", "grams", "l", "liter", "liters", "litre", "litres",
    "can", "package", "pkg"
]

# --- Section Keywords ---
INGREDIENTS_PREFIXES: Tuple[str, ...] = ("ingredients",)
INGREDIENTS_LINES: Tuple[str, ...] = ("you will need",)
DIRECTIONS_PREFIXES: Tuple[str, ...] = ("directions", "instructions", "preparation")
NOTES_PREFIXES: Tuple[str, ...] = ("notes",)

# --- Metadata Lines ---
SERVINGS_PREFIXES: Tuple[str, ...] = ("serves", "servings")
SERVINGS_SUFFIXES: Tuple[str, ...] = ("servings", "servings.")
PREP_TIME_PREFIXES: Tuple[str, ...] = ("prep time", "preparation time")
COOK_TIME_PREFIXES: Tuple[str, ...] = ("cook time", "bake time")
COOK_TIME_SUFFIXES: Tuple[str, ...] = ("baking time", "cooking time")
TOTAL_TIME_PREFIXES: Tuple[str, ...] = ("total time",)

# --- Plain-Text Recipe Book ---
RECIPE_BREAK = "-----------------"
RECIPE_BREAK_DETECT = "------"
