"""Commands that resolve and verify media for the metadata index."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from lingmedia.batch import ResolutionSession
from lingmedia.config import get_config
from lingmedia.index import IndexLoadError, MetadataIndex
from lingmedia.media.verifier import MediaVerifier

logger = logging.getLogger(__name__)

_MISSING_MEDIA_CHOICES = click.Choice(["ignore", "link"], case_sensitive=True)


@click.command("resolve")
@click.option(
    "--index",
    "index_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Metadata index JSON file (default: data/index.json).",
)
@click.option(
    "--media-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Local media directory (default: data/media_files).",
)
@click.option(
    "--missing-media",
    type=_MISSING_MEDIA_CHOICES,
    default=None,
    help="Remote fallback mode; overrides MISSING_MEDIA.",
)
@click.option(
    "--remote-media-path",
    default=None,
    help="Remote media base URL; overrides REMOTE_MEDIA_PATH.",
)
@click.option(
    "--story",
    "story_ids",
    multiple=True,
    help="Only check these story IDs (repeatable).",
)
@click.option(
    "--write",
    is_flag=True,
    default=False,
    help="Write the updated records back to the index file.",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the updated index to this file instead.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print the missing-media report as JSON.",
)
@click.pass_context
def resolve_command(
    ctx: click.Context,
    index_path: Path | None,
    media_dir: Path | None,
    missing_media: str | None,
    remote_media_path: str | None,
    story_ids: tuple[str, ...],
    write: bool,
    output: Path | None,
    json_output: bool,
) -> None:
    """Re-check media for every timed document in the index.

    Existing media values are kept when they still resolve; missing ones
    are looked up locally and, if MISSING_MEDIA is set, in remote storage.
    Documents left without any media are marked untimed.

    Examples:

    \b
        lingmedia resolve
        lingmedia resolve --story abc123 --json
        MISSING_MEDIA=link REMOTE_MEDIA_PATH=https://cdn.example.org/media \\
            lingmedia resolve --write
    """
    config = get_config(
        config_path=ctx.obj.get("config_path") if ctx.obj else None,
        media_dir=media_dir,
        index_path=index_path,
        missing_media=missing_media,
        remote_media_path=remote_media_path,
    )

    try:
        index = MetadataIndex.load(config.media.index_path)
    except IndexLoadError as e:
        raise click.ClickException(e.message) from e

    unknown = [story_id for story_id in story_ids if story_id not in index]
    if unknown:
        raise click.ClickException(f"Unknown story ID(s): {', '.join(unknown)}")

    with ResolutionSession(config, index) as session:
        if story_ids:
            for story_id in story_ids:
                session.recheck(story_id)
        else:
            session.recheck_all()

    result = session.result
    if json_output:
        click.echo(
            json.dumps(
                {
                    "documents": result.documents,
                    "timed": result.timed,
                    "demoted": result.demoted,
                    "report": session.report.to_list(),
                },
                indent=2,
            )
        )
    else:
        click.echo(
            f"Checked {result.documents} document(s): {result.timed} timed, "
            f"{len(result.demoted)} demoted to untimed."
        )
        if len(session.report):
            click.echo("Missing media files:")
            for line in session.report.lines():
                click.echo(f"  {line}")
        else:
            click.echo("No missing media.")

    destination = output or (config.media.index_path if write else None)
    if destination is not None:
        index.dump(destination)
        logger.info("Wrote %d records to %s", len(index), destination)


@click.command("verify")
@click.argument("filenames", nargs=-1, required=True)
@click.option(
    "--media-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Local media directory (default: data/media_files).",
)
@click.pass_context
def verify_command(
    ctx: click.Context, filenames: tuple[str, ...], media_dir: Path | None
) -> None:
    """Check whether media values are usable as-is.

    Exits non-zero if any value is neither a local media file nor a URL.
    """
    config = get_config(
        config_path=ctx.obj.get("config_path") if ctx.obj else None,
        media_dir=media_dir,
    )
    verifier = MediaVerifier(config.media.media_dir)
    all_ok = True
    for filename in filenames:
        ok = verifier.verify(filename)
        all_ok = all_ok and ok
        click.echo(f"{'ok' if ok else 'missing'}\t{filename}")
    if not all_ok:
        raise SystemExit(1)
