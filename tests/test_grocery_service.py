from recipe_scaler.models import GroceryItem
from recipe_scaler.services.grocery_service import normalize_name, strip_prep_words


class TestConsolidate:

    def test_cups_of_flour_merge(self, consolidator):
        assert consolidator.consolidate_lines(["2 cups flour", "1 cup flour"]) == ["3 c flour"]

    def test_parenthesized_quantities_merge(self, consolidator):
        assert consolidator.consolidate_lines(["flour (2 cups)", "Flour (1 cup)"]) == ["flour (3 c)"]

    def test_section_headers_pass_through(self, consolidator):
        lines = ["Baking:", "2 cups flour", "Produce:", "1 cup flour"]
        assert consolidator.consolidate_lines(lines) == ["Baking:", "3 c flour", "Produce:"]

    def test_prep_words_do_not_block_a_match(self, consolidator):
        assert consolidator.consolidate_lines(["1 onion, chopped", "2 onion, diced"]) == ["3 onion, chopped"]

    def test_different_systems_do_not_merge(self, consolidator):
        lines = ["1 cup milk", "250 ml milk"]
        assert consolidator.consolidate_lines(lines) == lines

    def test_mass_and_volume_do_not_merge(self, consolidator):
        lines = ["8 oz cheese", "1 cup cheese"]
        assert consolidator.consolidate_lines(lines) == lines

    def test_ounces_of_cheese_merge_by_weight(self, consolidator):
        assert consolidator.consolidate_lines(["8 oz cheese", "8 oz cheese"]) == ["1 lb cheese"]

    def test_grams_promote_to_kilograms(self, consolidator):
        assert consolidator.consolidate_lines(["200 g sugar", "300 g sugar"]) == ["1/2 kg sugar"]

    def test_bare_parenthesized_count_multiplies(self, consolidator):
        assert consolidator.consolidate_lines(["2 cups flour (2)", "1 cup flour"]) == ["5 c flour"]

    def test_parenthesized_counts_add_up(self, consolidator):
        assert consolidator.consolidate_lines(["eggs (2)", "eggs (3)"]) == ["eggs (5)"]

    def test_unmerged_items_are_untouched(self, consolidator):
        items = [GroceryItem(text="1 cup sugar"), GroceryItem(text="salt", checked=True)]
        result = consolidator.consolidate(items)
        assert result == items

    def test_first_seen_order_is_kept(self, consolidator):
        lines = ["1 cup sugar", "2 cups flour", "salt", "1 cup flour"]
        assert consolidator.consolidate_lines(lines) == ["1 cup sugar", "3 c flour", "salt"]

    def test_checked_only_when_all_checked(self, consolidator):
        both = consolidator.consolidate([
            GroceryItem(text="2 cups flour", checked=True),
            GroceryItem(text="1 cup flour", checked=True),
        ])
        one = consolidator.consolidate([
            GroceryItem(text="2 cups flour", checked=True),
            GroceryItem(text="1 cup flour"),
        ])
        assert both[0].checked is True
        assert one[0].checked is False


class TestGroceryHelpers:

    def test_strip_prep_words(self):
        assert strip_prep_words("beans, rinsed and drained") == "beans"
        assert strip_prep_words("carrots, peeled and diced.") == "carrots"
        assert strip_prep_words("butter, softened") == "butter"
        assert strip_prep_words("dried apricots") == "dried apricots"

    def test_normalize_name(self):
        assert normalize_name("  Red   Onion, chopped ") == "red onion"

    def test_ingredients_to_grocery_items(self, consolidator):
        items = consolidator.ingredients_to_grocery_items("2 cups flour\n\nsalt to taste\n3 eggs")
        assert [item.text for item in items] == ["flour (2 cups)", "salt to taste", "eggs (3)"]

    def test_ingredient_items_consolidate(self, consolidator):
        items = consolidator.ingredients_to_grocery_items("2 cups flour\n1 cup flour")
        assert [item.text for item in consolidator.consolidate(items)] == ["flour (3 c)"]

    def test_share_text(self, consolidator):
        items = [GroceryItem(text="3 c flour"), GroceryItem(text=" "), GroceryItem(text="salt")]
        assert consolidator.share_text(items) == "3 c flour\nsalt"
