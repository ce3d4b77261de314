"""catalog_tag_normalizer: カタログタグの正規化と保存前クリーニング."""

from catalog_tag_normalizer.core import (
    DEFAULT_ALIASES,
    AliasConfigError,
    AliasDictionary,
    TagGroup,
    TagStatistics,
    clean_tags_for_storage,
    find_similar_tags,
    format_tags_for_display,
    get_tag_statistics,
    load_alias_dictionary,
    normalize,
    normalize_tags,
    parse_tags_from_input,
    prepare_tags_for_storage,
    select_best_representative,
)

__version__ = "0.1.0"

__all__ = [
    "AliasConfigError",
    "AliasDictionary",
    "DEFAULT_ALIASES",
    "load_alias_dictionary",
    "normalize",
    "normalize_tags",
    "select_best_representative",
    "find_similar_tags",
    "get_tag_statistics",
    "parse_tags_from_input",
    "clean_tags_for_storage",
    "format_tags_for_display",
    "prepare_tags_for_storage",
    "TagGroup",
    "TagStatistics",
]
