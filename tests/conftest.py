from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from neoload_report.builds import Artifact, BuildRecord

BUILD_START = datetime(2024, 3, 5, 12, 0, 0, tzinfo=timezone.utc)

REPORT_HTML = "\n".join(
    [
        "<html>",
        "<head>",
        "<title>Performance Testing Report</title>",
        '<link rel="stylesheet" type="text/css" href="style.css">',
        "</head>",
        "<!-- #HTML Report Generated by NeoLoad# -->",
        '<frameset cols="20%,80%">',
        '<frame id="menu" src="menu.html" name="menu">',
        '<frame id="content" src="summary.html" name="content">',
        "</frameset>",
        "</html>",
        "",
    ]
)

MENU_HTML = "\n".join(
    [
        "<html>",
        "<head>",
        "<style>",
        "body {",
        "color: #333;",
        "}",
        "</style>",
        "</head>",
        "<body><a href='summary.html' target='content'>Summary</a></body>",
        "</html>",
        "",
    ]
)

STYLE_CSS = "body {\n  margin: 0;\n}\n\ntable {\n  width: 100%;\n}\n"


def set_mtime(path: Path, moment: datetime) -> None:
    stamp = moment.timestamp()
    os.utime(path, (stamp, stamp))


@dataclass
class BuildLayout:
    """A build with an archive directory (artifact store) and a workspace."""

    root: Path
    workspace: Path
    archive: Path
    artifacts: list[Artifact]

    def build(self, timestamp: datetime = BUILD_START) -> BuildRecord:
        return BuildRecord(
            number=7,
            project_name="checkout-load",
            timestamp=timestamp,
            workspace=self.workspace,
            artifacts=list(self.artifacts),
        )

    def add(
        self,
        relative_path: str,
        content: str,
        workspace_time: datetime | None = BUILD_START + timedelta(minutes=5),
        archive: bool = True,
    ) -> Artifact:
        """Place ``content`` in the archive and workspace and register the artifact."""

        archive_path = self.archive / relative_path
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        if archive:
            archive_path.write_text(content, encoding="utf-8")
        if workspace_time is not None:
            workspace_path = self.workspace / relative_path
            workspace_path.parent.mkdir(parents=True, exist_ok=True)
            workspace_path.write_text(content, encoding="utf-8")
            set_mtime(workspace_path, workspace_time)
        artifact = Artifact(
            file_name=Path(relative_path).name,
            file_path=archive_path,
            relative_path=relative_path,
            href=relative_path,
        )
        self.artifacts.append(artifact)
        return artifact

    def add_support_file(self, relative_path: str, content: str) -> Path:
        """Archive-only file such as the menu frame or stylesheet."""

        path = self.archive / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def layout(tmp_path: Path) -> BuildLayout:
    workspace = tmp_path / "workspace"
    archive = tmp_path / "archive"
    workspace.mkdir()
    archive.mkdir()
    return BuildLayout(root=tmp_path, workspace=workspace, archive=archive, artifacts=[])


@pytest.fixture
def report_layout(layout: BuildLayout) -> BuildLayout:
    """A fresh NeoLoad report with its menu frame and stylesheet."""

    layout.add("reports/report.html", REPORT_HTML)
    layout.add_support_file("reports/menu.html", MENU_HTML)
    layout.add_support_file("reports/style.css", STYLE_CSS)
    return layout
