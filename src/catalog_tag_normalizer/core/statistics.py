"""タグ統計（オペレーター向けの診断レポート）.

件数・重複・表記揺れグループを集計します。読み取り専用で、データの書き換えは行いません。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from .aliases import AliasDictionary
from .cluster import TagGroup, cluster, filter_similar_groups


@dataclass(frozen=True)
class DuplicateTag:
    """2回以上出現した正規キーと、その出現回数."""

    tag: str
    count: int

    def as_dict(self) -> dict[str, object]:
        return {"tag": self.tag, "count": self.count}


@dataclass(frozen=True)
class TagStatistics:
    """タグ統計.

    Attributes:
        total: 処理した生タグ数（重複・空も含む）
        unique: 空でない正規キーの種類数
        normalized: 正規化後のタグ数（= unique）
        duplicates: 出現回数が2以上の正規キー（出現回数の多い順、同数は正規キーの昇順）
        similar: 表記揺れグループ（find_similar_tags と同じ）
    """

    total: int
    unique: int
    normalized: int
    duplicates: tuple[DuplicateTag, ...]
    similar: tuple[TagGroup, ...]

    def as_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "unique": self.unique,
            "normalized": self.normalized,
            "duplicates": [d.as_dict() for d in self.duplicates],
            "similar": [g.as_dict() for g in self.similar],
        }


def get_tag_statistics(raws: Iterable[object] | None, aliases: AliasDictionary | None = None) -> TagStatistics:
    """タグ一覧の統計を計算する.

    Args:
        raws: 生タグの列
        aliases: エイリアス辞書（省略時は DEFAULT_ALIASES）

    Returns:
        TagStatistics

    Examples:
        >>> stats = get_tag_statistics(["Turkey", "turkey", "Turk", "unique", "Turkey"])
        >>> stats.total, stats.unique
        (5, 2)
        >>> stats.duplicates[0]
        DuplicateTag(tag='turkey', count=4)
    """
    if raws is None or isinstance(raws, (str, bytes)):
        raws = []
    raws = list(raws)

    groups = cluster(raws, aliases)

    duplicates = sorted(
        (DuplicateTag(tag=g.normalized, count=g.count) for g in groups if g.count > 1),
        key=lambda d: (-d.count, d.tag),
    )
    similar = filter_similar_groups(groups)

    return TagStatistics(
        total=len(raws),
        unique=len(groups),
        normalized=len(groups),
        duplicates=tuple(duplicates),
        similar=tuple(similar),
    )


def export_tag_statistics_reports(
    stats: TagStatistics,
    output_dir: Path | str,
) -> dict[str, Path | None]:
    """統計レポートをCSVファイルとして出力する.

    Args:
        stats: get_tag_statistics() の戻り値
        output_dir: 出力ディレクトリ

    Returns:
        出力したCSVのパス（該当なしなら None）
        - "duplicates": tag_duplicates.csv
        - "similar": tag_similar_groups.csv
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    result_paths: dict[str, Path | None] = {}

    # 重複レポート
    duplicates_path = output_dir / "tag_duplicates.csv"
    if stats.duplicates:
        pl.DataFrame(
            {
                "tag": [d.tag for d in stats.duplicates],
                "count": [d.count for d in stats.duplicates],
            },
            schema={"tag": pl.String, "count": pl.Int64},
        ).write_csv(duplicates_path)
        result_paths["duplicates"] = duplicates_path
    else:
        result_paths["duplicates"] = None

    # 表記揺れレポート（originals は CSV 向けに " | " 区切りで1セルへ）
    similar_path = output_dir / "tag_similar_groups.csv"
    if stats.similar:
        pl.DataFrame(
            {
                "normalized": [g.normalized for g in stats.similar],
                "suggestion": [g.suggestion for g in stats.similar],
                "spellings": [len(g.originals) for g in stats.similar],
                "occurrences": [g.count for g in stats.similar],
                "originals": [" | ".join(g.originals) for g in stats.similar],
            },
            schema={
                "normalized": pl.String,
                "suggestion": pl.String,
                "spellings": pl.Int64,
                "occurrences": pl.Int64,
                "originals": pl.String,
            },
        ).write_csv(similar_path)
        result_paths["similar"] = similar_path
    else:
        result_paths["similar"] = None

    return result_paths
