"""カタログのエクスポート（JSON）に対してタグ整理を実行するCLI.

既定は dry run（レポートのみ）。`--execute` と `--output` を指定した場合だけ書き換え後のJSONを出力する。
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from loguru import logger

from catalog_tag_normalizer.core.aliases import AliasDictionary, load_alias_dictionary
from catalog_tag_normalizer.core.formatter import clean_tags_for_storage, parse_tags_from_input
from catalog_tag_normalizer.core.maintenance import (
    TagMaintenanceReport,
    format_report,
    normalize_catalog_tags,
)
from catalog_tag_normalizer.core.statistics import export_tag_statistics_reports, get_tag_statistics


def _read_records(input_path: Path) -> list[object]:
    if not input_path.exists():
        raise FileNotFoundError(f"Catalog export not found: {input_path}")

    try:
        with open(input_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to read JSON: {input_path}") from e

    if not isinstance(data, list):
        data = [data]
    return data


def run(
    input_path: Path,
    *,
    output_path: Path | None = None,
    report_dir: Path | None = None,
    aliases_path: Path | None = None,
    tags_field: str = "tags",
    execute: bool = False,
) -> TagMaintenanceReport:
    """カタログJSONを読み込み、タグ整理とレポート出力を行う.

    Args:
        input_path: カタログレコード（配列）のJSON
        output_path: 書き換え後のJSONの出力先（execute=True のときのみ書き込む）
        report_dir: 統計CSVの出力先
        aliases_path: エイリアス辞書ファイル（省略時は既定辞書）
        tags_field: タグを持つキー名
        execute: False の場合は dry run

    Returns:
        タグ整理レポート

    Raises:
        FileNotFoundError: 入力や辞書ファイルが存在しない場合
        ValueError: 入力JSONが不正、または execute なのに output_path が無い場合
    """
    if execute and output_path is None:
        raise ValueError("--execute requires --output")

    aliases: AliasDictionary | None = load_alias_dictionary(aliases_path) if aliases_path else None
    records = _read_records(Path(input_path))

    updated, report = normalize_catalog_tags(records, tags_field=tags_field, dry_run=not execute, aliases=aliases)

    if report_dir is not None:
        all_tags: list[str] = []
        for record in records:
            if isinstance(record, dict):
                all_tags.extend(clean_tags_for_storage(parse_tags_from_input(record.get(tags_field))))
        paths = export_tag_statistics_reports(get_tag_statistics(all_tags, aliases), report_dir)
        for name, path in paths.items():
            logger.info(f"Report {name}: {path if path else '(no rows)'}")

    if execute and output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(updated, f, ensure_ascii=False, indent=2)
        logger.info(f"Wrote {len(updated)} records to {output_path}")

    return report


def main() -> None:
    """CLI エントリポイント."""
    parser = argparse.ArgumentParser(description="Normalize and repair catalog tags in a JSON export")
    parser.add_argument("--input", type=Path, required=True, help="Catalog export JSON (array of records)")
    parser.add_argument("--output", type=Path, default=None, help="Output JSON path (used with --execute)")
    parser.add_argument("--report-dir", type=Path, default=None, help="Directory for CSV statistics reports")
    parser.add_argument(
        "--aliases",
        type=Path,
        default=None,
        help="Alias dictionary file (.json/.yaml/.yml). Default: built-in dictionary",
    )
    parser.add_argument("--tags-field", type=str, default="tags", help="Record key holding the tags")
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Write normalized records (default: dry run, report only)",
    )
    args = parser.parse_args()

    if not args.execute:
        logger.info("Running in DRY RUN mode. Use --execute to write changes.")

    report = run(
        args.input,
        output_path=args.output,
        report_dir=args.report_dir,
        aliases_path=args.aliases,
        tags_field=args.tags_field,
        execute=args.execute,
    )
    print(format_report(report))


if __name__ == "__main__":
    main()
