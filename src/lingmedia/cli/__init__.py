"""CLI module for lingmedia."""

import logging
from pathlib import Path

import click

from lingmedia.config import load_logging_config

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="lingmedia")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ./lingmedia.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """lingmedia - Resolve audio/video media for interlinear-text metadata."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    from lingmedia.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(
        load_logging_config(config_path),
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )


# Defer import to avoid circular dependency
def _register_commands():
    from lingmedia.cli.resolve import resolve_command, verify_command

    main.add_command(resolve_command)
    main.add_command(verify_command)


_register_commands()
