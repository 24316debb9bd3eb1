"""
Line-synced (LRC) lyrics codec.

LRC text tags each line with the time it starts:

    [00:12.34]First line
    [00:15.80]Second line

Two read policies coexist:

    - Tolerant (parse_lrc, parse_sentences): a regular expression accepts
      two- or three-digit fractions and ignores anything it cannot read.
    - Fixed-column (parse_sentences_fixed): the timestamp must occupy
      exactly the first ten characters. Callers relying on its exact
      edge cases (mandatory 0 ms sentinel, "only the sentinel" = None)
      must keep getting them.

The word-timing extension written by the word-synced codec is also read
back here: a line of the form <word:start:end|word:start:end> directly
below a timed line restores that line's words.

Neither policy raises on malformed input; unreadable lines are skipped.
"""

import re

from lyrics_resolver.lyrics.models import Line, StructuredLyrics, Word


# [mm:ss.cc] or [mm:ss.ccc] followed by the line text
LINE_PATTERN = re.compile(r"\[(\d{2}):(\d{2})\.(\d{2,3})\](.*)")

# Any line starting with a timestamp marks the text as synced
SYNCED_MARKER = re.compile(r"^\[\d{2}:\d{2}\.\d{2,3}\]")

# Lines shorter than "[mm:ss.cc]" cannot carry a timestamp
MIN_LINE_LENGTH = 10


def _split_lines(text: str) -> list[str]:
    return [line.rstrip("\r") for line in text.strip().split("\n")]


def _is_word_timing_line(line: str) -> bool:
    return len(line) > 2 and line.startswith("<") and line.endswith(">")


def parse_word_timings(line: str) -> tuple[Word, ...]:
    """
    Read an auxiliary word-timing line.

    Format: <text:start:end|text:start:end|...>, times in seconds.
    Triples that do not split into three parts or whose times are not
    numbers are skipped. The text part may itself contain colons.

    Example:
        parse_word_timings("<Hel:1.0:1.2|lo:1.2:1.5>")
        # (Word("Hel", 1.0, 1.2), Word("lo", 1.2, 1.5))
    """
    body = line.strip()
    if body.startswith("<"):
        body = body[1:]
    if body.endswith(">"):
        body = body[:-1]

    words = []
    for triple in body.split("|"):
        parts = triple.rsplit(":", 2)
        if len(parts) != 3 or not parts[0]:
            continue
        try:
            start_time = float(parts[1])
            end_time = float(parts[2])
        except ValueError:
            continue
        words.append(Word(text=parts[0], start_time=start_time, end_time=end_time))
    return tuple(words)


def parse_lrc(text: str) -> StructuredLyrics:
    """
    Parse LRC text into StructuredLyrics (tolerant policy).

    Args:
        text: Raw LRC text. Plain unsynced text is accepted too and
              produces no lines.

    Returns:
        StructuredLyrics with the original text, one Line per readable
        timestamped line (in input order), and is_synced set when any line
        starts with a timestamp.

    Behavior:
        - Lines shorter than ten characters are skipped
        - Start time = minutes * 60 + seconds + fraction / 10^digits
        - A word-timing line directly below a timed line sets its words

    Example:
        lyrics = parse_lrc("[00:12.34]Hello\\n[01:02.500]World")
        [line.start_time for line in lyrics.lines]  # [12.34, 62.5]
    """
    raw_lines = _split_lines(text)
    is_synced = any(SYNCED_MARKER.match(line) for line in raw_lines)

    entries: list[tuple[str, float]] = []
    words_by_entry: dict[int, tuple[Word, ...]] = {}
    previous_was_timed = False

    for line in raw_lines:
        if previous_was_timed and _is_word_timing_line(line):
            words_by_entry[len(entries) - 1] = parse_word_timings(line)
            previous_was_timed = False
            continue

        previous_was_timed = False

        if len(line) < MIN_LINE_LENGTH:
            continue

        match = LINE_PATTERN.match(line)
        if match is None:
            continue

        minutes, seconds, fraction, line_text = match.groups()
        start_time = (
            int(minutes) * 60
            + int(seconds)
            + int(fraction) / 10 ** len(fraction)
        )
        entries.append((line_text, start_time))
        previous_was_timed = True

    lines = tuple(
        Line(text=line_text, start_time=start_time, words=words_by_entry.get(index, ()))
        for index, (line_text, start_time) in enumerate(entries)
    )
    return StructuredLyrics(text=text, lines=lines, is_synced=is_synced)


def parse_sentences(text: str) -> dict[int, str] | None:
    """
    Build a SentenceMap (milliseconds to text) with the tolerant policy.

    The map always starts with the {0: ""} sentinel. Two-digit fractions
    are centiseconds, three-digit fractions are milliseconds.

    Returns:
        The map, or None if nothing beyond the sentinel was read.
    """
    result = {0: ""}

    for line in _split_lines(text):
        if len(line) < MIN_LINE_LENGTH:
            continue

        match = LINE_PATTERN.match(line)
        if match is None:
            continue

        minutes, seconds, fraction, line_text = match.groups()
        milliseconds = int(fraction) * 10 if len(fraction) == 2 else int(fraction)
        result[int(minutes) * 60000 + int(seconds) * 1000 + milliseconds] = line_text

    return result if len(result) > 1 else None


def parse_sentences_fixed(text: str) -> dict[int, str] | None:
    """
    Build a SentenceMap with the fixed-column policy.

    Each line must read "[mm:ss.cc]" in columns 0-9, with '[', ':', '.'
    and ']' at positions 0, 3, 6 and 9 and a decimal digit at 1, 2, 4, 5,
    7 and 8. The text is everything from column 10 on.

    Returns:
        The map seeded with {0: ""}, or None when only the sentinel remains.

    Example:
        parse_sentences_fixed("[00:00.00]\\n[00:12.34]Test line")
        # {0: "", 12340: "Test line"}
    """
    result = {0: ""}

    for line in _split_lines(text):
        if len(line) < MIN_LINE_LENGTH:
            continue

        if line[0] != "[" or line[3] != ":" or line[6] != "." or line[9] != "]":
            continue

        digits = (line[1], line[2], line[4], line[5], line[7], line[8])
        # isdecimal() also accepts non-ASCII digits
        if not all(char in "0123456789" for char in digits):
            continue

        minute_tens, minutes, second_tens, seconds, hundreds, tens = (int(d) for d in digits)
        time_ms = (
            tens * 10
            + hundreds * 100
            + seconds * 1000
            + second_tens * 10000
            + minutes * 60 * 1000
            + minute_tens * 600 * 1000
        )
        result[time_ms] = line[10:]

    return result if len(result) > 1 else None


def format_timestamp(start_time: float) -> str:
    """
    Format seconds as an LRC "[mm:ss.cc]" tag.

    Seconds are truncated to whole milliseconds first, then to centiseconds.
    """
    time_ms = int(start_time * 1000)
    minutes = time_ms // 60000
    seconds = (time_ms % 60000) // 1000
    centiseconds = (time_ms % 1000) // 10
    return f"[{minutes:02d}:{seconds:02d}.{centiseconds:02d}]"


def format_word_timings(words: tuple[Word, ...] | list[Word]) -> str:
    """Format words as an auxiliary "<text:start:end|...>" line."""
    return "<" + "|".join(
        f"{word.text}:{word.start_time}:{word.end_time}" for word in words
    ) + ">"


def to_lrc(lines: tuple[Line, ...] | list[Line], include_words: bool = False) -> str:
    """
    Serialize lines to LRC text, one "[mm:ss.cc]text" line each.

    Args:
        lines: Lines in the order they should be written.
        include_words: Also write a word-timing line below every line
                       that has words.

    Returns:
        The LRC text, each line terminated by a newline.
    """
    output = []
    for line in lines:
        output.append(f"{format_timestamp(line.start_time)}{line.text}\n")
        if include_words and line.words:
            output.append(f"{format_word_timings(line.words)}\n")
    return "".join(output)
