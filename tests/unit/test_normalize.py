"""Unit tests for normalize utilities."""

import pytest

from catalog_tag_normalizer.core.aliases import DEFAULT_ALIASES, AliasDictionary
from catalog_tag_normalizer.core.normalize import normalize, sanitize


class TestNormalize:
    def test_basic_tags(self) -> None:
        assert normalize("Turkey") == "turkey"
        assert normalize("  Turkey  ") == "turkey"
        assert normalize("TURKEY") == "turkey"

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
    def test_empty_input(self, raw: object) -> None:
        assert normalize(raw) == ""

    def test_non_string_input(self) -> None:
        assert normalize(123) == ""
        assert normalize(["Turkey"]) == ""

    def test_case_and_trim_insensitive(self) -> None:
        assert normalize("Turkey") == normalize("  TURKEY  ")

    def test_origin_variations(self) -> None:
        assert normalize("Turk") == "turkey"
        assert normalize("Turkish") == "turkey"
        assert normalize("Turkiye") == "turkey"

    def test_food_category_variations(self) -> None:
        assert normalize("Spices") == "spices"
        assert normalize("spice") == "spices"
        assert normalize("Seasoning") == "spices"
        assert normalize("Seasonings") == "spices"
        assert normalize("Herbs") == "herbs"
        assert normalize("Veggies") == "vegetables"
        assert normalize("Fruits") == "fruit"
        assert normalize("Meats") == "meat"
        assert normalize("Poultry") == "meat"

    def test_brand_variations(self) -> None:
        assert normalize("Mr Chef") == "mr chef"
        assert normalize("MrChef") == "mr chef"
        assert normalize("Mr-Chef") == "mr chef"
        assert normalize("MR  CHEF") == "mr chef"

    def test_size_variations(self) -> None:
        assert normalize("Extra Large") == "large"
        assert normalize("XL") == "large"
        assert normalize("XS") == "small"

    def test_remove_special_characters(self) -> None:
        assert normalize("Turkey!") == "turkey"
        assert normalize("Turkey@#$") == "turkey"
        assert normalize("!!!") == ""

    def test_keep_parentheses_and_ampersand(self) -> None:
        assert normalize("Turkey (Fresh)") == "turkey (fresh)"
        assert normalize("Hot & Spicy") == "hot & spicy"

    def test_numbers_and_hyphens(self) -> None:
        assert normalize("Product123") == "product123"
        assert normalize("Item-456") == "item-456"

    def test_unicode_letters(self) -> None:
        assert normalize("Café") == "café"
        assert normalize("Naïve") == "naïve"

    def test_long_tag(self) -> None:
        assert normalize("A" * 100) == "a" * 100

    def test_unknown_tag_is_identity(self) -> None:
        assert normalize("Organic") == "organic"

    def test_compound_tag_not_collapsed_by_default(self) -> None:
        """先頭トークンが辞書語でも、既定では複合語のまま残ること."""
        assert normalize("Turkey-Product") == "turkey-product"
        assert normalize("turkey fresh") == "turkey fresh"

    def test_compound_tag_with_prefix_rule(self) -> None:
        """prefix_keys で許可した正規キーだけが先頭トークンで寄ること."""
        aliases = DEFAULT_ALIASES.with_prefix_keys(["turkey"])

        assert normalize("Turkey-Product", aliases) == "turkey"
        assert normalize("Turkish Delight", aliases) == "turkey"
        assert normalize("Spice Mix", aliases) == "spice mix"

    def test_injected_dictionary(self) -> None:
        aliases = AliasDictionary({"origin": {"greece": ["greek", "hellas"]}})

        assert normalize("Greek", aliases) == "greece"
        # 既定辞書は使われない
        assert normalize("Turkish", aliases) == "turkish"


class TestSanitize:
    def test_no_alias_resolution(self) -> None:
        assert sanitize("Turkish") == "turkish"

    def test_collapse_whitespace(self) -> None:
        assert sanitize("extra   large") == "extra large"
        assert sanitize("Turkey !") == "turkey"

    def test_underscore_removed(self) -> None:
        assert sanitize("spiked_collar") == "spikedcollar"

    def test_fullwidth_folded(self) -> None:
        assert sanitize("ＴＵＲＫＥＹ（Ｆｒｅｓｈ）") == "turkey(fresh)"
