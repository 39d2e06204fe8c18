"""Tokenizer — kind-specific regex scans for mentions, hashtags and URLs.

Patterns use the third-party ``regex`` module for Unicode property
classes (``\\p{L}``), which stdlib ``re`` does not support.  Every match
includes one leading anchor character (whitespace / punctuation) unless it
sits at the start of the scanned range.
"""

from __future__ import annotations
import functools
import logging
from collections.abc import Mapping

import regex

from .types import ActionType, RawMatch, TextRange

logger = logging.getLogger(__name__)


URL_PATTERN = (
    r"(^|[\s.:;?\-\]<\(])"
    r"((https?://|www\.|pic\.)[-\w;/?:@&=+$\|_.!~*\|'()\[\]%#,☺]+[\w/#](\(\))?)"
    r"(?=$|[\s',\|\(\).:;?\-\[\]>\)])"
)

HASHTAG_PATTERN = r"(?:^|\s|$)#[\p{L}0-9_]*"

MENTION_PATTERN = r"(?:^|\s|$|[.])@[\p{L}0-9_]*"

DEFAULT_PATTERNS: dict[ActionType, str] = {
    ActionType.URL: URL_PATTERN,
    ActionType.HASHTAG: HASHTAG_PATTERN,
    ActionType.MENTION: MENTION_PATTERN,
}


@functools.lru_cache(maxsize=64)
def _compile(source: str) -> regex.Pattern | None:
    try:
        return regex.compile(source, regex.IGNORECASE)
    except regex.error as e:
        logger.warning("Unusable pattern %r: %s", source, e)
        return None


def get_pattern(
    kind: ActionType,
    patterns: Mapping[ActionType, str] | None = None,
) -> regex.Pattern | None:
    """Compiled pattern for a kind, or None (NONE kind / bad pattern)."""
    if kind is ActionType.NONE:
        return None
    source = (patterns or {}).get(kind) or DEFAULT_PATTERNS.get(kind)
    if source is None:
        return None
    return _compile(source)


def scan(
    kind: ActionType,
    text: str,
    search_range: TextRange | None = None,
    *,
    patterns: Mapping[ActionType, str] | None = None,
) -> list[RawMatch]:
    """Find raw candidate spans of one kind.

    Args:
        kind: Which pattern to run.  ``ActionType.NONE`` yields nothing.
        text: Full text buffer.
        search_range: Portion of text to scan (None = all of it).  ``^``
            and ``$`` match at its edges and lookaheads stop there.
        patterns: Optional per-kind pattern overrides.

    Returns matches in ascending location order, in whole-text coordinates.
    """
    pattern = get_pattern(kind, patterns)
    if pattern is None:
        return []

    offset = 0
    window = text
    if search_range is not None:
        offset = max(0, search_range.location)
        window = text[offset:search_range.end]

    return [
        RawMatch(
            kind=kind,
            location=offset + m.start(),
            length=m.end() - m.start(),
            text=m.group(),
        )
        for m in pattern.finditer(window)
    ]
