"""タグ正規化エンジンのコア処理群.

- 正規化（生タグ → 正規キー）
- グルーピングと代表表記の選択（重複除去・表記揺れ抽出）
- 統計レポート
- 入力解析と保存前クリーニング（二重エンコード修復）
"""

from .aliases import DEFAULT_ALIASES, AliasDictionary, load_alias_dictionary
from .cluster import (
    TagGroup,
    batch_normalize_tags,
    cluster,
    find_similar_tags,
    normalize_tags,
    select_best_representative,
)
from .exceptions import AliasConfigError
from .formatter import (
    clean_tags_for_storage,
    format_tags_for_display,
    parse_tags_from_input,
    prepare_tags_for_storage,
)
from .maintenance import TagMaintenanceReport, format_report, normalize_catalog_tags
from .normalize import normalize
from .statistics import DuplicateTag, TagStatistics, export_tag_statistics_reports, get_tag_statistics
from .text import sanitize

__all__ = [
    "AliasConfigError",
    "AliasDictionary",
    "DEFAULT_ALIASES",
    "load_alias_dictionary",
    "normalize",
    "sanitize",
    "TagGroup",
    "cluster",
    "select_best_representative",
    "find_similar_tags",
    "normalize_tags",
    "batch_normalize_tags",
    "DuplicateTag",
    "TagStatistics",
    "get_tag_statistics",
    "export_tag_statistics_reports",
    "parse_tags_from_input",
    "clean_tags_for_storage",
    "format_tags_for_display",
    "prepare_tags_for_storage",
    "TagMaintenanceReport",
    "normalize_catalog_tags",
    "format_report",
]
