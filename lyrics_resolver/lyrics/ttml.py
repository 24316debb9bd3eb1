"""
Word-synced (TTML) lyrics codec.

Word-synced providers answer with TTML, where each paragraph is a line
and each span inside it a timed fragment:

    <p begin="12.3" end="15.0">
      <span begin="12.3" end="12.6">Hel</span><span begin="12.6" end="13.0">lo</span>
      <span begin="13.1" end="13.6">world</span>
    </p>

Spans separated by whitespace are separate words; adjacent spans with
nothing between them are syllables of one word ("Hel" + "lo" above).
The result uses the same Line/Word model as the LRC codec, and can be
written out as LRC with the word-timing extension lines.
"""

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from lyrics_resolver.core.logger import get_logger
from lyrics_resolver.lyrics.lrc import to_lrc
from lyrics_resolver.lyrics.models import Line, Word


logger = get_logger(__name__)

WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class _Span:
    text: str
    start_time: float
    end_time: float
    has_trailing_space: bool


def _local_name(tag: object) -> str:
    """Tag name without its '{namespace}' prefix, lowercased."""
    if not isinstance(tag, str):
        # Comments and processing instructions
        return ""
    return tag.rsplit("}", 1)[-1].lower()


def parse_time(value: str) -> float:
    """
    Parse a TTML time expression to seconds.

    Accepted forms: "12.5", "12.5s", "1:02.5" (mm:ss) and "1:01:02.5"
    (hh:mm:ss); every component may be fractional. Anything else,
    including non-finite numbers, yields 0.0.
    """
    text = value.strip()
    if text.endswith("s"):
        text = text[:-1]

    parts = text.split(":")
    try:
        if len(parts) == 1:
            seconds = float(parts[0])
        elif len(parts) == 2:
            seconds = float(parts[0]) * 60 + float(parts[1])
        elif len(parts) == 3:
            seconds = float(parts[0]) * 3600 + float(parts[1]) * 60 + float(parts[2])
        else:
            return 0.0
    except ValueError:
        return 0.0

    return seconds if math.isfinite(seconds) else 0.0


def _collect_spans(paragraph: ET.Element) -> list[_Span]:
    spans = []
    for child in paragraph:
        if _local_name(child.tag) != "span":
            continue

        begin = child.get("begin")
        end = child.get("end")
        text = "".join(child.itertext())
        if not text or not begin or not end:
            continue

        spans.append(_Span(
            text=text,
            start_time=parse_time(begin),
            end_time=parse_time(end),
            has_trailing_space=bool(WHITESPACE.search(child.tail or "")),
        ))
    return spans


def _merge_spans(spans: list[_Span]) -> list[Word]:
    """
    Merge syllable spans into words.

    A span whose predecessor had trailing whitespace starts a new word;
    otherwise it is appended to the current word and extends its end time.
    """
    words = []
    current_text = ""
    current_start = 0.0
    current_end = 0.0

    for index, span in enumerate(spans):
        if index > 0 and not spans[index - 1].has_trailing_space:
            current_text += span.text
            current_end = span.end_time
            continue

        if current_text:
            words.append(Word(current_text.strip(), current_start, current_end))
        current_text = span.text
        current_start = span.start_time
        current_end = span.end_time

    if current_text:
        words.append(Word(current_text.strip(), current_start, current_end))

    return words


def parse_ttml(markup: str) -> list[Line]:
    """
    Parse TTML markup into lines with word timing.

    Args:
        markup: The TTML document.

    Returns:
        One Line per paragraph that has a begin time and non-empty text,
        in document order. An empty list if the document is not
        well-formed XML; no partial result is returned in that case.

    Behavior:
        1. Visit every <p> element (any namespace); skip those without begin
        2. Collect direct <span> children having begin, end and text
        3. Merge spans into words (see _merge_spans)
        4. Line text = words joined by single spaces, or the paragraph's
           full trimmed text when it has no timed spans
    """
    try:
        root = ET.fromstring(markup)
    except (ET.ParseError, ValueError) as e:
        logger.debug(f"Unreadable TTML markup: {e}")
        return []

    lines = []
    for paragraph in root.iter():
        if _local_name(paragraph.tag) != "p":
            continue

        begin = paragraph.get("begin")
        if not begin:
            continue

        words = _merge_spans(_collect_spans(paragraph))
        text = " ".join(word.text for word in words)
        if not text:
            text = "".join(paragraph.itertext()).strip()

        if text:
            lines.append(Line(text=text, start_time=parse_time(begin), words=tuple(words)))

    return lines


def ttml_to_lrc(lines: list[Line]) -> str:
    """Render parsed TTML lines as LRC with word-timing lines."""
    return to_lrc(lines, include_words=True)
