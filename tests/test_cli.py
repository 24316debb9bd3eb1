# tests/test_cli.py
"""Test the lyrics-resolver command line"""

import pytest
from click.testing import CliRunner
from unittest.mock import AsyncMock, patch

from lyrics_resolver import __version__
from lyrics_resolver.cli import cli
from lyrics_resolver.lyrics.models import (
    CollectedLyrics,
    LyricsSource,
    MatchResult,
    StructuredLyrics,
)
from lyrics_resolver.resolver import LyricsResolver


LYRICS = StructuredLyrics.from_lrc("[00:01.00]First line\n[00:02.00]Second line\n")


@pytest.fixture
def runner():
    return CliRunner()


class TestGetCommand:
    """Test `lyrics-resolver get`"""

    def test_prints_best_lyrics(self, runner):
        resolve = AsyncMock(return_value=MatchResult.success("lrclib", LYRICS))

        with runner.isolated_filesystem():
            with patch.object(LyricsResolver, "get_lyrics_with_source", new=resolve):
                result = runner.invoke(cli, ["get", "-t", "Song", "-a", "Artist", "-d", "214"])

        assert result.exit_code == 0
        assert "[00:01.00]First line" in result.output
        assert "Source: lrclib" in result.output
        assert resolve.call_args.args == ("Song", "Artist", 214, None, None)

    def test_single_source(self, runner):
        get_lyrics = AsyncMock(return_value=LYRICS)

        with runner.isolated_filesystem():
            with patch.object(LyricsResolver, "get_lyrics", new=get_lyrics):
                result = runner.invoke(
                    cli, ["get", "-t", "Song", "-a", "Artist", "--source", "lrclib"]
                )

        assert result.exit_code == 0
        assert get_lyrics.call_args.kwargs["source"] is LyricsSource.LRCLIB

    def test_unavailable(self, runner):
        resolve = AsyncMock(
            return_value=MatchResult.failure("lrclib", "Lyrics unavailable from all sources")
        )

        with runner.isolated_filesystem():
            with patch.object(LyricsResolver, "get_lyrics_with_source", new=resolve):
                result = runner.invoke(cli, ["get", "-t", "Song", "-a", "Artist"])

        assert result.exit_code == 1
        assert "Lyrics unavailable from all sources" in result.output

    def test_video_id_source_without_id_is_usage_error(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli, ["get", "-t", "Song", "-a", "Artist", "--source", "simpmusic"]
            )

        assert result.exit_code == 2
        assert "video id" in result.output

    def test_writes_output_file(self, runner):
        resolve = AsyncMock(return_value=MatchResult.success("better_lyrics", LYRICS))

        with runner.isolated_filesystem():
            with patch.object(LyricsResolver, "get_lyrics_with_source", new=resolve):
                result = runner.invoke(
                    cli, ["get", "-t", "Song", "-a", "Artist", "-o", "song.lrc"]
                )

            with open("song.lrc", encoding="utf-8") as f:
                written = f.read()

        assert result.exit_code == 0
        assert written == LYRICS.text

    def test_missing_required_option(self, runner):
        result = runner.invoke(cli, ["get", "-t", "Song"])
        assert result.exit_code == 2

    def test_invalid_config(self, runner):
        with runner.isolated_filesystem():
            with open("bad.yaml", "w", encoding="utf-8") as f:
                f.write("providers:\n  order: [genius]\n")

            result = runner.invoke(
                cli, ["--config", "bad.yaml", "get", "-t", "Song", "-a", "Artist"]
            )

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestAllCommand:
    """Test `lyrics-resolver all`"""

    def test_prints_every_result(self, runner):
        collect = AsyncMock(return_value=[
            CollectedLyrics("better_lyrics", "[00:01.00]word synced", True),
            CollectedLyrics("lrclib", "plain words", False),
        ])

        with runner.isolated_filesystem():
            with patch.object(LyricsResolver, "get_all_lyrics", new=collect):
                result = runner.invoke(
                    cli, ["all", "-t", "Song", "-a", "Artist", "--video-id", "vid123"]
                )

        assert result.exit_code == 0
        assert "=== [1] better_lyrics (synced) ===" in result.output
        assert "=== [2] lrclib (plain) ===" in result.output
        assert "plain words" in result.output
        assert collect.call_args.args[4] == "vid123"

    def test_nothing_found(self, runner):
        with runner.isolated_filesystem():
            with patch.object(LyricsResolver, "get_all_lyrics", new=AsyncMock(return_value=[])):
                result = runner.invoke(cli, ["all", "-t", "Song", "-a", "Artist"])

        assert result.exit_code == 1


class TestFileCommands:
    """Test `convert` and `sentences`"""

    def test_convert(self, runner, temp_dir, sample_ttml):
        path = temp_dir / "song.ttml"
        path.write_text(sample_ttml, encoding="utf-8")

        result = runner.invoke(cli, ["convert", str(path)])

        assert result.exit_code == 0
        assert "[00:12.30]Hello world" in result.output
        assert "<Hello:12.3:13.0|world:13.1:13.6>" in result.output

    def test_convert_without_words(self, runner, temp_dir, sample_ttml):
        path = temp_dir / "song.ttml"
        path.write_text(sample_ttml, encoding="utf-8")

        result = runner.invoke(cli, ["convert", str(path), "--no-words"])

        assert result.exit_code == 0
        assert "[00:16.00]Second line" in result.output
        assert "<" not in result.output

    def test_convert_unreadable(self, runner, temp_dir):
        path = temp_dir / "broken.ttml"
        path.write_text("<tt><p begin='1'>", encoding="utf-8")

        result = runner.invoke(cli, ["convert", str(path)])

        assert result.exit_code == 1

    @pytest.mark.parametrize("extra_args", [[], ["--fixed"]])
    def test_sentences(self, runner, temp_dir, sample_lrc, extra_args):
        path = temp_dir / "song.lrc"
        path.write_text(sample_lrc, encoding="utf-8")

        result = runner.invoke(cli, ["sentences", str(path)] + extra_args)

        assert result.exit_code == 0
        assert "    12340  Test line" in result.output
        assert "    15800  Another line" in result.output

    def test_sentences_nothing_timed(self, runner, temp_dir):
        path = temp_dir / "plain.lrc"
        path.write_text("no timing here\n", encoding="utf-8")

        result = runner.invoke(cli, ["sentences", str(path)])

        assert result.exit_code == 1


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
