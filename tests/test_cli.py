from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import BUILD_START, REPORT_HTML, BuildLayout
from neoload_report import cli
from neoload_report.report.patcher import COMMENT_APPLIED_STYLE

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: logging.getLogger("neoload_report"))


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "project" / "configs" / "settings.yaml"
    path.parent.mkdir(parents=True)
    path.write_text("paths:\n  logs_root: ./logs\n  inventory_root: ./inventory\n", encoding="utf-8")
    return path


def _build_file(layout: BuildLayout) -> Path:
    lines = [
        "number: 7",
        "project_name: checkout-load",
        f"timestamp: {BUILD_START.isoformat()}",
        f"workspace: {layout.workspace}",
        f"artifacts_dir: {layout.archive}",
        "artifacts:",
    ]
    lines.extend(f"  - relative_path: {artifact.relative_path}" for artifact in layout.artifacts)
    path = layout.root / "build.yaml"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_show_config(config_file: Path) -> None:
    result = runner.invoke(cli.app, ["show-config", "--config-file", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "url_name: neoload-report" in result.output
    assert "strict: false" in result.output


def test_locate_found(report_layout: BuildLayout, config_file: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["locate", "--build-file", str(_build_file(report_layout)), "--config-file", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    assert "resolution: found" in result.output
    assert "display_name: Performance Result" in result.output
    assert "icon_file_name: /plugin/neoload-hudson-plugin/images/neoload-cropped.png" in result.output
    assert "url_name: neoload-report" in result.output
    assert "report_href: reports/report.html" in result.output
    report = report_layout.archive / "reports" / "report.html"
    assert report.read_text(encoding="utf-8").endswith(COMMENT_APPLIED_STYLE)


def test_locate_stale(layout: BuildLayout, config_file: Path) -> None:
    layout.add("reports/report.html", REPORT_HTML, workspace_time=BUILD_START - timedelta(hours=3))
    result = runner.invoke(
        cli.app,
        ["locate", "--build-file", str(_build_file(layout)), "--config-file", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    assert "resolution: not_found" in result.output
    assert "display_name: none" in result.output
    assert "url_name: none" in result.output


def test_locate_rejects_bad_build_file(tmp_path: Path, config_file: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("number: 1\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["locate", "--build-file", str(bad), "--config-file", str(config_file)])
    assert result.exit_code != 0


def test_inventory_writes_csv(report_layout: BuildLayout, config_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "inventory.csv"
    result = runner.invoke(
        cli.app,
        [
            "inventory",
            "--build-file",
            str(_build_file(report_layout)),
            "--output",
            str(target),
            "--config-file",
            str(config_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "artifacts_total: 1" in result.output
    assert "selected: 1" in result.output
    assert f"inventory_path: {target}" in result.output
    assert target.exists()


def test_inventory_default_location(report_layout: BuildLayout, config_file: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["inventory", "--build-file", str(_build_file(report_layout)), "--write", "--config-file", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    expected = config_file.parent.parent / "inventory" / "build_7_inventory.parquet"
    assert expected.resolve().exists()


def test_detect(tmp_path: Path) -> None:
    report = tmp_path / "report.html"
    report.write_text(REPORT_HTML, encoding="utf-8")
    other = tmp_path / "other.html"
    other.write_text("<html></html>", encoding="utf-8")

    found = runner.invoke(cli.app, ["detect", str(report)])
    missing = runner.invoke(cli.app, ["detect", str(other)])

    assert found.exit_code == 0
    assert "neoload-report" in found.output
    assert missing.exit_code == 1
    assert "not-a-report" in missing.output
