"""Reject report artifacts that were produced by an earlier build."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path, PurePosixPath

from neoload_report.builds import Artifact, BuildRecord
from neoload_report.utils.paths import file_mtime_utc
from neoload_report.utils.time_utils import ensure_utc, format_log_timestamp

LOGGER = logging.getLogger(__name__)


def workspace_file_path(workspace: Path, relative_path: str) -> Path:
    """Location of an artifact's source file inside the build workspace."""

    return workspace.joinpath(*PurePosixPath(relative_path).parts)


def is_newer_than(build_start: datetime, file_time: datetime) -> bool:
    """Strict comparison: a file stamped exactly at build start is not newer."""

    return ensure_utc(build_start) < ensure_utc(file_time)


def is_from_current_build(
    build: BuildRecord,
    artifact: Artifact,
    logger: logging.Logger | None = None,
) -> bool:
    """Return True if the artifact's workspace copy was modified after the build started.

    The archived copy cannot be used: it is written when the job finishes, so its
    timestamp is always recent. The workspace copy keeps the time the report was
    generated. Raises ``OSError`` when the workspace file is missing or cannot be
    inspected.
    """

    effective_logger = logger or LOGGER
    source = workspace_file_path(build.workspace, artifact.relative_path)
    modified = file_mtime_utc(source)
    effective_logger.debug(
        "freshness.compare build=%s build_start=%s file_time=%s workspace_file=%s artifact_file=%s",
        build.number,
        format_log_timestamp(build.timestamp),
        format_log_timestamp(modified),
        source,
        artifact.file_path,
    )
    return is_newer_than(build.timestamp, modified)
