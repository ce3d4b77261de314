"""カタログ全体のタグ整理（メンテナンス用）.

エクスポートされたカタログレコード（tags 列を持つ dict）に対して、
二重エンコードの修復と表記揺れの統合をまとめて適用し、レポートを作ります。

- dry_run=True（既定）ではレコードを変更せず、レポートだけを返す
- 1レコードの失敗で全体を止めない（errors に記録して続行）
- 入力レコードは変更しない（更新後のレコードは新しい dict）
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from loguru import logger

from .aliases import AliasDictionary
from .cluster import TagGroup, find_similar_tags, normalize_tags
from .formatter import clean_tags_for_storage, has_encoding_artifact, parse_tags_from_input


@dataclass
class TagMaintenanceReport:
    """タグ整理レポート."""

    total_records: int = 0
    records_updated: int = 0
    artifacts_fixed: int = 0
    tags_before: int = 0
    tags_after: int = 0
    similar_groups: list[TagGroup] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    dry_run: bool = True

    def as_dict(self) -> dict[str, object]:
        return {
            "total_records": self.total_records,
            "records_updated": self.records_updated,
            "artifacts_fixed": self.artifacts_fixed,
            "tags_before": self.tags_before,
            "tags_after": self.tags_after,
            "similar_groups": [{**g.as_dict(), "count": len(g.originals)} for g in self.similar_groups],
            "errors": list(self.errors),
            "dry_run": self.dry_run,
        }


def _record_label(record: Mapping[str, object], index: int) -> str:
    for key in ("sku", "_id", "id"):
        value = record.get(key)
        if value not in (None, ""):
            return str(value)
    return f"#{index}"


def normalize_catalog_tags(
    records: Iterable[object],
    *,
    tags_field: str = "tags",
    dry_run: bool = True,
    aliases: AliasDictionary | None = None,
) -> tuple[list[object], TagMaintenanceReport]:
    """カタログレコードのタグを修復・正規化する.

    Args:
        records: カタログレコード（dict）の列
        tags_field: タグを持つキー名
        dry_run: True の場合はレコードを変更しない
        aliases: エイリアス辞書（省略時は DEFAULT_ALIASES）

    Returns:
        (更新後のレコード一覧, レポート)。dry_run では入力と同じレコードを返す
    """
    records = list(records)
    report = TagMaintenanceReport(total_records=len(records), dry_run=dry_run)
    logger.info(f"Starting tag normalization for {len(records)} records (dry run: {dry_run})")

    all_tags: list[str] = []
    planned: dict[int, list[str]] = {}

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            msg = f"Record #{index}: expected a mapping, got {type(record).__name__}"
            logger.warning(msg)
            report.errors.append(msg)
            continue

        raw = record.get(tags_field)
        if raw is None:
            continue

        original = parse_tags_from_input(raw)
        all_tags.extend(original)

        cleaned = clean_tags_for_storage(original)
        # タグ欄そのものが JSON 文字列として保存されている場合も痕跡として数える
        if (isinstance(raw, str) and has_encoding_artifact(raw)) or any(
            has_encoding_artifact(tag) for tag in original
        ):
            report.artifacts_fixed += 1

        normalized = normalize_tags(cleaned, aliases)
        if isinstance(raw, list) and sorted(raw, key=str) == sorted(normalized):
            continue

        planned[index] = normalized
        logger.info(
            f"Record {_record_label(record, index)}: [{', '.join(original)}] -> [{', '.join(normalized)}]"
        )

    report.tags_before = len(set(all_tags))
    report.similar_groups = find_similar_tags(clean_tags_for_storage(all_tags), aliases)
    for group in report.similar_groups:
        logger.info(f"Similar tags: [{', '.join(group.originals)}] -> \"{group.suggestion}\"")

    report.records_updated = len(planned)

    updated: list[object] = []
    after_tags: set[str] = set()
    for index, record in enumerate(records):
        if index in planned:
            record = {**record, tags_field: planned[index]}
        if isinstance(record, Mapping):
            after_tags.update(parse_tags_from_input(record.get(tags_field)))
        updated.append(record)
    report.tags_after = len(after_tags)

    if dry_run:
        logger.info(f"DRY RUN - {report.records_updated} records would be updated, no changes made")
        return records, report

    logger.info(f"Tag normalization completed. Updated {report.records_updated} records.")
    logger.info(f"Tags reduced from {report.tags_before} to {report.tags_after} unique tags.")
    return updated, report


def format_report(report: TagMaintenanceReport) -> str:
    """レポートを人が読む形式の文字列にする."""
    lines = [
        "=== TAG NORMALIZATION REPORT ===",
        f"Mode: {'dry run' if report.dry_run else 'execute'}",
        f"Total records processed: {report.total_records}",
        f"Records updated: {report.records_updated}",
        f"Records with encoding artifacts: {report.artifacts_fixed}",
        f"Tags before: {report.tags_before}",
        f"Tags after: {report.tags_after}",
        f"Tags reduced by: {report.tags_before - report.tags_after}",
        f"Similar tag groups found: {len(report.similar_groups)}",
    ]

    if report.similar_groups:
        lines.append("")
        lines.append("Similar tag groups:")
        for group in report.similar_groups:
            lines.append(f"  [{', '.join(group.originals)}] -> \"{group.suggestion}\"")

    if report.errors:
        lines.append("")
        lines.append("Errors:")
        for error in report.errors:
            lines.append(f"  - {error}")

    lines.append("================================")
    return "\n".join(lines)
