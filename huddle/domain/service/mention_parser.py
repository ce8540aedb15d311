"""@mention parsing.

A mention is ``@`` followed by one or more letters, digits, ``_``, ``.`` or
``-``; it ends at the first other character. The scan is greedy and
non-overlapping. No attempt is made to tell e-mail addresses apart:
``user@example`` yields a mention of ``example``.
"""

import re
from dataclasses import dataclass
from typing import Iterator

from huddle.domain.value.types import USERNAME_CHARS, USERNAME_PATTERN

MENTION_PATTERN = re.compile(rf"@({USERNAME_CHARS}+)")

MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 30


@dataclass(frozen=True)
class Mention:
    """A single ``@username`` occurrence.

    ``end_index`` is exclusive, so ``text[start_index:end_index]`` equals
    ``matched_text``.
    """

    username: str
    start_index: int
    end_index: int
    matched_text: str


@dataclass(frozen=True)
class TextSegment:
    """Piece of text that is either plain or a mention."""

    text: str
    is_mention: bool
    username: str | None = None


def parse_mentions(text: str | None) -> Iterator[Mention]:
    """Yield every mention in ``text`` in order of appearance."""
    if not text:
        return
    for match in MENTION_PATTERN.finditer(text):
        yield Mention(
            username=match.group(1),
            start_index=match.start(),
            end_index=match.end(),
            matched_text=match.group(0),
        )


def extract_mentioned_usernames(text: str | None) -> list[str]:
    """Distinct mentioned usernames, case-sensitive, in first-seen order."""
    return list(dict.fromkeys(m.username for m in parse_mentions(text)))


def is_valid_mention_format(username: str) -> bool:
    """Whether ``username`` could be produced as a mention target."""
    return (
        bool(USERNAME_PATTERN.match(username))
        and MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH
    )


def highlight_mentions(text: str | None) -> list[TextSegment]:
    """Split text into plain and mention segments for display.

    Concatenating the ``text`` of all segments gives back the input.
    """
    if not text:
        return [TextSegment(text="", is_mention=False)]

    segments: list[TextSegment] = []
    last_index = 0
    for mention in parse_mentions(text):
        if mention.start_index > last_index:
            segments.append(
                TextSegment(text=text[last_index : mention.start_index], is_mention=False)
            )
        segments.append(
            TextSegment(
                text=mention.matched_text,
                is_mention=True,
                username=mention.username,
            )
        )
        last_index = mention.end_index

    if last_index < len(text):
        segments.append(TextSegment(text=text[last_index:], is_mention=False))

    return segments
