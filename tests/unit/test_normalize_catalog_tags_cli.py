"""Unit tests for the catalog tag normalization CLI."""

import json
import sys
from pathlib import Path

import pytest

from catalog_tag_normalizer.tools.normalize_catalog_tags import main, run


def _write_catalog(path: Path) -> Path:
    records = [
        {"sku": "A1", "tags": ["Turkey", "turk", "Spices"]},
        {"sku": "A2", "tags": ['["Turkey"]']},
        {"sku": "A3", "tags": ["Apple"]},
    ]
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


class TestRun:
    def test_dry_run_writes_nothing(self, tmp_path: Path) -> None:
        input_path = _write_catalog(tmp_path / "catalog.json")
        output_path = tmp_path / "out.json"

        report = run(input_path, output_path=output_path)

        assert report.records_updated == 2
        assert not output_path.exists()

    def test_execute_writes_output(self, tmp_path: Path) -> None:
        input_path = _write_catalog(tmp_path / "catalog.json")
        output_path = tmp_path / "out" / "catalog.json"

        run(input_path, output_path=output_path, execute=True)

        written = json.loads(output_path.read_text(encoding="utf-8"))
        assert written[0]["tags"] == ["Spices", "Turkey"]
        assert written[1]["tags"] == ["Turkey"]
        assert written[2]["tags"] == ["Apple"]

    def test_execute_requires_output(self, tmp_path: Path) -> None:
        input_path = _write_catalog(tmp_path / "catalog.json")

        with pytest.raises(ValueError, match="--execute requires --output"):
            run(input_path, execute=True)

    def test_report_dir(self, tmp_path: Path) -> None:
        input_path = _write_catalog(tmp_path / "catalog.json")
        report_dir = tmp_path / "reports"

        run(input_path, report_dir=report_dir)

        assert (report_dir / "tag_duplicates.csv").exists()
        assert (report_dir / "tag_similar_groups.csv").exists()

    def test_aliases_file(self, tmp_path: Path) -> None:
        input_path = tmp_path / "catalog.json"
        input_path.write_text(json.dumps([{"tags": ["Greek", "Greece"]}]), encoding="utf-8")
        aliases_path = tmp_path / "aliases.yml"
        aliases_path.write_text("groups:\n  origin:\n    greece: [greek]\n", encoding="utf-8")
        output_path = tmp_path / "out.json"

        run(input_path, output_path=output_path, aliases_path=aliases_path, execute=True)

        assert json.loads(output_path.read_text(encoding="utf-8")) == [{"tags": ["Greek"]}]

    def test_missing_input(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Catalog export not found"):
            run(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        input_path = tmp_path / "catalog.json"
        input_path.write_text("{invalid", encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to read JSON"):
            run(input_path)


class TestMain:
    def test_main_prints_report(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        input_path = _write_catalog(tmp_path / "catalog.json")
        monkeypatch.setattr(sys, "argv", ["catalog-tag-normalize", "--input", str(input_path)])

        main()

        out = capsys.readouterr().out
        assert "=== TAG NORMALIZATION REPORT ===" in out
        assert "Records updated: 2" in out
