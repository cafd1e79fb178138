"""Build records: the artifact list, start time and workspace of a finished build."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import quote

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from neoload_report.errors import BuildRecordError
from neoload_report.utils.time_utils import ensure_utc

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Artifact:
    """A file the CI system archived for a build."""

    file_name: str
    file_path: Path
    relative_path: str
    href: str


class BuildRecord(BaseModel):
    """One completed build as seen by the sidebar."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    number: int = Field(ge=0)
    project_name: str = ""
    timestamp: datetime
    workspace: Path
    artifacts: list[Artifact] = Field(default_factory=list)
    actions: list[Any] = Field(default_factory=list, exclude=True)

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


def artifact_href(relative_path: str) -> str:
    """URL fragment of an artifact, relative to the build's artifact root."""

    return quote(PurePosixPath(relative_path).as_posix())


def _artifact_payload(entry: Any, artifacts_dir: Path, position: int) -> dict[str, Any]:
    if not isinstance(entry, dict):
        raise BuildRecordError(f"artifacts[{position}] must be a mapping, got {type(entry).__name__}")
    relative_path = entry.get("relative_path")
    if not relative_path:
        raise BuildRecordError(f"artifacts[{position}] is missing relative_path")
    relative_path = PurePosixPath(str(relative_path).replace("\\", "/")).as_posix()

    file_path = Path(entry.get("file_path") or artifacts_dir / relative_path)
    if not file_path.is_absolute():
        file_path = (artifacts_dir / file_path).resolve()
    return {
        "file_name": entry.get("file_name") or PurePosixPath(relative_path).name,
        "file_path": file_path,
        "relative_path": relative_path,
        "href": entry.get("href") or artifact_href(relative_path),
    }


def _read_payload(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BuildRecordError(f"Could not parse build record {path}: {exc}") from exc


def load_build_record(path: Path) -> BuildRecord:
    """Load a build record from YAML or JSON.

    Relative ``workspace`` and ``artifacts_dir`` values resolve against the
    record file's directory. Artifacts without ``file_path`` live under
    ``artifacts_dir`` (default: ``<record dir>/archive``) at their relative path.
    """

    payload = _read_payload(path)
    if not isinstance(payload, dict):
        raise BuildRecordError(f"Build record {path} must be a mapping at the top level")

    base_dir = path.parent.resolve()
    workspace = payload.get("workspace")
    if workspace is None:
        raise BuildRecordError(f"Build record {path} is missing workspace")
    workspace_path = Path(workspace)
    if not workspace_path.is_absolute():
        workspace_path = (base_dir / workspace_path).resolve()

    artifacts_dir = Path(payload.get("artifacts_dir") or "archive")
    if not artifacts_dir.is_absolute():
        artifacts_dir = (base_dir / artifacts_dir).resolve()

    raw_artifacts = payload.get("artifacts") or []
    if not isinstance(raw_artifacts, list):
        raise BuildRecordError(f"Build record {path}: artifacts must be a list")

    try:
        record = BuildRecord(
            number=payload.get("number"),
            project_name=payload.get("project_name") or "",
            timestamp=payload.get("timestamp"),
            workspace=workspace_path,
            artifacts=[
                _artifact_payload(entry, artifacts_dir, position) for position, entry in enumerate(raw_artifacts)
            ],
        )
    except ValidationError as exc:
        raise BuildRecordError(f"Invalid build record {path}: {exc}") from exc

    LOGGER.debug(
        "builds.loaded path=%s number=%s artifacts=%s workspace=%s",
        path,
        record.number,
        len(record.artifacts),
        record.workspace,
    )
    return record
