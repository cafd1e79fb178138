"""Typer CLI entrypoint for neoload_report."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from neoload_report.builds import BuildRecord, load_build_record
from neoload_report.config import AppSettings, load_settings
from neoload_report.errors import BuildRecordError
from neoload_report.logging_utils import configure_logging
from neoload_report.report.detector import is_neoload_html_report
from neoload_report.report.inventory import build_scan_inventory, decision_counts, write_scan_inventory
from neoload_report.sidebar import add_action_if_not_exists
from neoload_report.utils.paths import read_text

app = typer.Typer(
    add_completion=False,
    help="Locate and style NeoLoad HTML reports among build artifacts.",
    no_args_is_help=True,
)

CONFIG_FILE_OPTION_HELP = "Optional settings YAML path."


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    log_level: str = "INFO",
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        try:
            logger = configure_logging(settings.paths.logs_root / "neoload_report.log", level=log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    else:
        logger = logging.getLogger("neoload_report")
    return settings, logger


def _load_build(build_file: Path, logger: logging.Logger) -> BuildRecord:
    try:
        return load_build_record(build_file)
    except (BuildRecordError, OSError) as exc:
        logger.exception("cli.build_record_failed build_file=%s", build_file)
        raise typer.BadParameter(f"Could not load build record {build_file}: {exc}") from exc


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help=CONFIG_FILE_OPTION_HELP,
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("locate")
def locate(
    build_file: Path = typer.Option(
        ...,
        "--build-file",
        help="Build record (YAML or JSON) listing artifacts, start time and workspace.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Raise on artifact read failures instead of skipping them. Defaults to scan.strict.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level name."),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help=CONFIG_FILE_OPTION_HELP,
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Resolve the sidebar link for a build, styling the report on first use."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, log_level=log_level)
    build = _load_build(build_file, logger)
    effective_strict = settings.scan.strict if strict is None else strict

    action = add_action_if_not_exists(
        build,
        strict=effective_strict,
        encoding=settings.scan.encoding,
        sidebar=settings.sidebar,
        logger=logger,
    )
    try:
        href = action.html_report_file_path()
    except OSError as exc:
        logger.exception("locate.failed build=%s build_file=%s", build.number, build_file)
        raise RuntimeError(f"locate failed for build {build.number}: {exc}") from exc

    logger.info(
        "locate.summary build=%s artifacts=%s resolution=%s href=%s",
        build.number,
        len(build.artifacts),
        action.resolution.value,
        href,
    )
    typer.echo(f"build: {build.number}")
    typer.echo(f"resolution: {action.resolution.value}")
    typer.echo(f"display_name: {action.display_name() or 'none'}")
    typer.echo(f"icon_file_name: {action.icon_file_name() or 'none'}")
    typer.echo(f"url_name: {action.url_name() or 'none'}")
    typer.echo(f"report_href: {href or 'none'}")


@app.command("inventory")
def inventory(
    build_file: Path = typer.Option(
        ...,
        "--build-file",
        help="Build record (YAML or JSON) listing artifacts, start time and workspace.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        help="Write the inventory here (.parquet or .csv). Defaults to paths.inventory_root.",
    ),
    write: bool = typer.Option(False, "--write", help="Write the inventory to the default location."),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help=CONFIG_FILE_OPTION_HELP,
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Show how each artifact fares against the report checks, without patching."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    build = _load_build(build_file, logger)
    frame = build_scan_inventory(build, encoding=settings.scan.encoding, strict=settings.scan.strict, logger=logger)

    typer.echo(f"build: {build.number}")
    typer.echo(f"artifacts_total: {frame.height}")
    for decision, count in decision_counts(frame).items():
        typer.echo(f"{decision}: {count}")

    target = output
    if target is None and write:
        target = settings.paths.inventory_root / f"build_{build.number}_inventory.parquet"
    if target is not None:
        written = write_scan_inventory(frame, target)
        typer.echo(f"inventory_path: {written}")


@app.command("detect")
def detect(
    file: Path = typer.Argument(..., exists=True, file_okay=True, dir_okay=False, readable=True),
) -> None:
    """Report whether FILE is the main page of a NeoLoad HTML report."""

    detected = is_neoload_html_report(read_text(file))
    typer.echo(f"{file}: {'neoload-report' if detected else 'not-a-report'}")
    if not detected:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
