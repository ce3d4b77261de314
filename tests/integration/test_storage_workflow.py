"""Integration tests for the catalog tag write/read path.

This module tests the complete workflow including:
- Input parsing (comma string, JSON string, nested JSON string, array)
- Storage cleaning (double-encoding repair)
- Normalization and deduplication
- Statistics for operator review
- Display formatting
"""

import pytest

from catalog_tag_normalizer import (
    clean_tags_for_storage,
    find_similar_tags,
    format_tags_for_display,
    get_tag_statistics,
    normalize,
    normalize_tags,
    parse_tags_from_input,
    prepare_tags_for_storage,
)


@pytest.mark.integration
class TestStorageWorkflow:
    """保存・表示ワークフロー統合テスト."""

    def test_json_string_to_display(self) -> None:
        """'["Turkey"]' が表示時に "Turkey" になること."""
        parsed = parse_tags_from_input('["Turkey"]')
        assert parsed == ["Turkey"]

        cleaned = clean_tags_for_storage(parsed)
        assert cleaned == ["Turkey"]

        assert format_tags_for_display(cleaned) == "Turkey"

    def test_legacy_double_encoded_data(self) -> None:
        """既存の二重エンコードデータを読み出して修復・正規化できること."""
        stored = ['["[\\"turkey\\"]"]', '["Turkish","Seasoning"]', "Spices"]

        cleaned = clean_tags_for_storage(stored)
        assert cleaned == ["turkey", "Turkish", "Seasoning", "Spices"]

        assert normalize_tags(cleaned) == ["Seasoning", "Turkish"]
        assert format_tags_for_display(normalize_tags(cleaned)) == "Seasoning, Turkish"

    def test_alias_variants_merge(self) -> None:
        tags = ["Turkey", "Turk", "Turkish", "Turkiye", "Spices", "Seasoning"]

        assert normalize_tags(tags) == ["Spices", "Turkey"]
        assert normalize("Turk") == normalize("Turkish") == normalize("Turkiye") == normalize("Turkey") == "turkey"

    def test_write_path_is_stable(self) -> None:
        """保存済みの値を再度書き込んでも変わらないこと."""
        first = prepare_tags_for_storage("turkey, TURK, Mr-Chef, MR CHEF, veggies, Veggies")
        second = prepare_tags_for_storage(first)

        assert first == ["Mr-Chef", "turkey", "Veggies"]
        assert second == first

    def test_operator_review(self) -> None:
        tags = parse_tags_from_input("Turkey, turkey, Turk, Spices, spice, unique, Turkey")

        stats = get_tag_statistics(tags)
        similar = find_similar_tags(tags)

        assert stats.total == 7
        assert stats.unique == stats.normalized == 3
        assert [g.normalized for g in stats.similar] == [g.normalized for g in similar]
        assert {g.suggestion for g in similar} == {"Turkey", "Spices"}
