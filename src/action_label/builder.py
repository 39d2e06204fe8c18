"""Extractor — turns raw tokenizer matches into typed, cleaned tokens."""

from __future__ import annotations
from collections.abc import Mapping
from typing import Callable

from .patterns import scan
from .types import ActionElement, ActionToken, ActionType, Hashtag, Mention, TextRange, Url

FilterPredicate = Callable[[str], bool]

# Matches this short are a bare anchor + sigil (or less).
_MIN_MATCH_LENGTH = 3


def extract(
    kind: ActionType,
    text: str,
    search_range: TextRange | None = None,
    filter_predicate: FilterPredicate | None = None,
    *,
    patterns: Mapping[ActionType, str] | None = None,
) -> list[ActionToken]:
    """Extract typed tokens of one kind.

    The stored range drops the single leading anchor character of each
    match.  Mentions and hashtags lose their sigil and are subject to
    ``filter_predicate``; URLs keep the full whitespace-trimmed match and
    are never filtered.
    """
    tokens: list[ActionToken] = []
    for match in scan(kind, text, search_range, patterns=patterns):
        if match.length < _MIN_MATCH_LENGTH:
            continue

        inner = TextRange(match.location + 1, match.length - 1)
        word = inner.slice(text)
        if word.startswith(("@", "#")):
            word = word[1:]

        element: ActionElement | None = None
        if kind is ActionType.HASHTAG:
            if filter_predicate is None or filter_predicate(word):
                element = Hashtag(word)
        elif kind is ActionType.MENTION:
            if filter_predicate is None or filter_predicate(word):
                element = Mention(word)
        elif kind is ActionType.URL:
            element = Url(match.range.slice(text).strip())

        if element is not None:
            tokens.append(ActionToken(range=inner, element=element))
    return tokens
