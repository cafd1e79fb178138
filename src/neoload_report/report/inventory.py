"""Tabulate how every artifact of a build fares against the report checks."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal
from uuid import uuid4

import polars as pl

from neoload_report.builds import Artifact, BuildRecord
from neoload_report.report.detector import is_html_file_name, is_neoload_html_report
from neoload_report.report.freshness import is_newer_than, workspace_file_path
from neoload_report.utils.paths import file_mtime_utc, read_text

LOGGER = logging.getLogger(__name__)

ScanDecision = Literal[
    "not_html",
    "read_failed",
    "not_report",
    "freshness_failed",
    "stale",
    "selected",
    "eligible",
]
SCAN_DECISION_VALUES: tuple[ScanDecision, ...] = (
    "not_html",
    "read_failed",
    "not_report",
    "freshness_failed",
    "stale",
    "selected",
    "eligible",
)


def _inventory_schema() -> dict[str, pl.DataType]:
    """Stable schema for scan inventories."""

    return {
        "file_name": pl.String,
        "relative_path": pl.String,
        "href": pl.String,
        "is_html": pl.Boolean,
        "is_neoload_report": pl.Boolean,
        "workspace_mtime": pl.Datetime(time_zone="UTC"),
        "is_fresh": pl.Boolean,
        "decision": pl.String,
        "error": pl.String,
    }


def empty_inventory() -> pl.DataFrame:
    return pl.DataFrame(schema=_inventory_schema())


def _evaluate(build: BuildRecord, artifact: Artifact, encoding: str) -> dict[str, object]:
    row: dict[str, object] = {
        "file_name": artifact.file_name,
        "relative_path": artifact.relative_path,
        "href": artifact.href,
        "is_html": is_html_file_name(artifact.file_name),
        "is_neoload_report": None,
        "workspace_mtime": None,
        "is_fresh": None,
        "decision": "not_html",
        "error": None,
    }
    if not row["is_html"]:
        return row

    try:
        content = read_text(artifact.file_path, encoding=encoding)
    except OSError as exc:
        row.update(decision="read_failed", error=str(exc))
        return row

    row["is_neoload_report"] = is_neoload_html_report(content)
    if not row["is_neoload_report"]:
        row["decision"] = "not_report"
        return row

    try:
        modified = file_mtime_utc(workspace_file_path(build.workspace, artifact.relative_path))
    except OSError as exc:
        row.update(decision="freshness_failed", error=str(exc))
        return row

    fresh = is_newer_than(build.timestamp, modified)
    row.update(workspace_mtime=modified, is_fresh=fresh, decision="eligible" if fresh else "stale")
    return row


def build_scan_inventory(
    build: BuildRecord,
    encoding: str = "utf-8",
    strict: bool = False,
    logger: logging.Logger | None = None,
) -> pl.DataFrame:
    """Evaluate every artifact; the first qualifying one is marked ``selected``.

    Nothing is patched. With ``strict`` a read or timestamp failure raises
    ``OSError`` instead of being recorded in the ``error`` column.
    """

    effective_logger = logger or LOGGER
    rows: list[dict[str, object]] = []
    selected = False
    for artifact in build.artifacts:
        row = _evaluate(build, artifact, encoding)
        if row["error"] is not None:
            effective_logger.debug(
                "inventory.check_failed file=%s decision=%s error=%s",
                artifact.file_path,
                row["decision"],
                row["error"],
            )
            if strict:
                raise OSError(f"{row['decision']} for {artifact.file_path}: {row['error']}")
        if row["decision"] == "eligible" and not selected:
            row["decision"] = "selected"
            selected = True
        rows.append(row)

    if not rows:
        return empty_inventory()
    return pl.DataFrame(rows, schema=_inventory_schema())


def decision_counts(inventory: pl.DataFrame) -> dict[str, int]:
    """Count rows per decision, always listing every known decision."""

    counts = {decision: 0 for decision in SCAN_DECISION_VALUES}
    if inventory.height == 0:
        return counts
    grouped = inventory.group_by("decision").agg(pl.len().alias("count"))
    for decision, count in grouped.iter_rows():
        counts[str(decision)] = int(count)
    return counts


def _atomic_temp_path(target_path: Path) -> Path:
    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def write_scan_inventory(inventory: pl.DataFrame, output_path: Path) -> Path:
    """Write the inventory atomically as parquet, or CSV for a ``.csv`` target."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = _atomic_temp_path(output_path)
    try:
        if output_path.suffix.lower() == ".csv":
            inventory.write_csv(temp_path)
        else:
            inventory.write_parquet(temp_path)
        os.replace(temp_path, output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return output_path
