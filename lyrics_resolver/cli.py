"""
Command-line interface for lyrics-resolver.

This module implements the CLI using Click; rich-click is used for the
help formatting and colors.

Commands:
    lyrics-resolver get --title <t> --artist <a>     Best lyrics (fallback chain)
    lyrics-resolver all --title <t> --artist <a>     Every distinct result
    lyrics-resolver convert <file.ttml>              TTML to LRC with word timing
    lyrics-resolver sentences <file.lrc>             Timestamp -> line map

Global Options:
    --config <path>        Configuration file (default: ./lyrics_resolver.yaml)
    --verbose              Show provider attempts and matching decisions
    --log-dir <dir>        Also write log files and the lyrics failure report

Usage:
    # Best lyrics, with duration for precise matching
    lyrics-resolver get --title "Song (Official Video)" --artist "Artist" --duration 214

    # Only LRCLIB, saved to a file
    lyrics-resolver get --title "Song" --artist "Artist" --source lrclib -o song.lrc

    # Include SimpMusic by passing the video id
    lyrics-resolver all --title "Song" --artist "Artist" --video-id dQw4w9WgXcQ

Exit Codes:
    0   Success
    1   Lyrics unavailable, unreadable input, or invalid configuration
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100

from lyrics_resolver import __version__
from lyrics_resolver.core import (
    Config,
    ConfigError,
    LyricsResolverError,
    LyricsUnavailableError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from lyrics_resolver.lyrics.lrc import parse_sentences, parse_sentences_fixed, to_lrc
from lyrics_resolver.lyrics.models import DURATION_UNKNOWN, LyricsSource
from lyrics_resolver.lyrics.ttml import parse_ttml
from lyrics_resolver.resolver import LyricsResolver

logger = get_logger(__name__)


SOURCE_CHOICES = [source.value for source in LyricsSource]


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _load_configuration(ctx: click.Context) -> Config:
    """Load the configuration named by --config, exiting with 1 if invalid."""
    try:
        return load_config(ctx.obj["config_path"])
    except ConfigError as e:
        _fail(f"Configuration error: {e.message}")


def _track_options(func):
    """Options shared by the commands that query providers."""
    options = [
        click.option("--title", "-t", required=True, help="Track title"),
        click.option("--artist", "-a", required=True, help="Artist name"),
        click.option(
            "--duration", "-d",
            type=int,
            default=DURATION_UNKNOWN,
            show_default=True,
            help="Track length in seconds (-1 = unknown, match by name)"
        ),
        click.option("--album", default=None, help="Album name"),
        click.option("--video-id", default=None, help="Video id (enables SimpMusic)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./lyrics_resolver.yaml)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show DEBUG messages"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Write log files and the lyrics failure report here"
)
@click.version_option(__version__, prog_name="lyrics-resolver")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    verbose: bool,
    log_dir: Optional[Path]
) -> None:
    """
    lyrics-resolver: find synced lyrics across several providers.

    Queries BetterLyrics (word-synced), SimpMusic (by video id) and LRCLIB,
    picks the best match and prints it as LRC.

    \b
    EXAMPLES:
        lyrics-resolver get -t "Song" -a "Artist" -d 214
        lyrics-resolver all -t "Song" -a "Artist" --video-id dQw4w9WgXcQ
        lyrics-resolver convert lyrics.ttml
        lyrics-resolver sentences lyrics.lrc --fixed
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    setup_logging(log_dir, verbose=verbose)
    ctx.call_on_close(shutdown_logging)


@cli.command()
@_track_options
@click.option(
    "--source", "-s",
    type=click.Choice(SOURCE_CHOICES),
    default=LyricsSource.ALL.value,
    show_default=True,
    help="Provider to use"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<file.lrc>",
    help="Write lyrics to a file instead of stdout"
)
@click.pass_context
def get(
    ctx: click.Context,
    title: str,
    artist: str,
    duration: int,
    album: Optional[str],
    video_id: Optional[str],
    source: str,
    output: Optional[Path]
) -> None:
    """Print the best lyrics for a track."""
    config = _load_configuration(ctx)

    async def run():
        async with LyricsResolver(config) as resolver:
            if source == LyricsSource.ALL.value:
                result = await resolver.get_lyrics_with_source(
                    title, artist, duration, album, video_id
                )
                if not result.matched:
                    raise LyricsUnavailableError(result.error or "Lyrics unavailable")
                return result.source, result.lyrics

            lyrics = await resolver.get_lyrics(
                title, artist, duration, album, video_id, source=LyricsSource(source)
            )
            return source, lyrics

    try:
        found_source, lyrics = asyncio.run(run())
    except ValueError as e:
        raise click.UsageError(str(e))
    except LyricsResolverError as e:
        _fail(e.message)

    logger.info(f"Source: {found_source}")

    if output is not None:
        output.write_text(lyrics.text, encoding="utf-8")
        logger.info(f"Lyrics saved to {output}")
    else:
        click.echo(lyrics.text.rstrip("\n"))


@cli.command(name="all")
@_track_options
@click.pass_context
def all_lyrics(
    ctx: click.Context,
    title: str,
    artist: str,
    duration: int,
    album: Optional[str],
    video_id: Optional[str]
) -> None:
    """Print every distinct lyrics text found, with its provider."""
    config = _load_configuration(ctx)

    async def run():
        async with LyricsResolver(config) as resolver:
            return await resolver.get_all_lyrics(title, artist, duration, album, video_id)

    results = asyncio.run(run())
    if not results:
        _fail("Lyrics unavailable from all sources")

    for index, item in enumerate(results, start=1):
        kind = "synced" if item.is_synced else "plain"
        click.secho(f"=== [{index}] {item.source} ({kind}) ===", fg="cyan", bold=True)
        click.echo(item.text.rstrip("\n"))
        click.echo()


@cli.command()
@click.argument("ttml_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--no-words", is_flag=True, help="Omit word-timing lines")
def convert(ttml_file: Path, no_words: bool) -> None:
    """Convert a TTML file to LRC (with word-timing lines)."""
    lines = parse_ttml(ttml_file.read_text(encoding="utf-8"))
    if not lines:
        _fail(f"No lyrics lines found in {ttml_file}")

    click.echo(to_lrc(lines, include_words=not no_words).rstrip("\n"))


@cli.command()
@click.argument("lrc_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--fixed", is_flag=True, help="Use the fixed-column parser")
def sentences(lrc_file: Path, fixed: bool) -> None:
    """Print the timestamp (ms) to line map of an LRC file."""
    text = lrc_file.read_text(encoding="utf-8")
    sentence_map = parse_sentences_fixed(text) if fixed else parse_sentences(text)
    if sentence_map is None:
        _fail(f"No timed lines found in {lrc_file}")

    for time_ms, line in sentence_map.items():
        click.echo(f"{time_ms:>9}  {line}")


def main() -> None:
    """Entry point for the `lyrics-resolver` console script."""
    cli()


if __name__ == "__main__":
    main()
