"""Annotator — full re-scan of a text into an immutable snapshot.

Usage:
    from action_label import Annotator, AnnotatorConfig

    annotator = Annotator(AnnotatorConfig(mention_filter=lambda h: h != "bot"))
    snapshot = annotator.annotate("Ping @alice about #release")
    [t.text for t in snapshot.mentions]   # ["alice"]
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace

from .builder import FilterPredicate, extract
from .types import EMPTY_ANNOTATIONS, ActionType, Annotations, TextRange

logger = logging.getLogger(__name__)

# Scan order; also the iteration order of Annotations.
SCAN_ORDER = (ActionType.URL, ActionType.HASHTAG, ActionType.MENTION)


def _all_types() -> set[ActionType]:
    return set(SCAN_ORDER)


@dataclass
class AnnotatorConfig:
    """Configuration for the Annotator."""
    mention_filter: FilterPredicate | None = None
    hashtag_filter: FilterPredicate | None = None
    # Kinds that are scanned at all; the rest stay empty
    enabled_types: set[ActionType] = field(default_factory=_all_types)
    # Per-kind pattern overrides (source strings)
    patterns: dict[ActionType, str] = field(default_factory=dict)

    def filter_for(self, kind: ActionType) -> FilterPredicate | None:
        if kind is ActionType.MENTION:
            return self.mention_filter
        if kind is ActionType.HASHTAG:
            return self.hashtag_filter
        return None


class Annotator:
    """Runs the tokenizer and extractor for every enabled kind."""

    def __init__(self, config: AnnotatorConfig | None = None) -> None:
        # Own copy, so filter changes never leak between labels sharing a config
        config = config or AnnotatorConfig()
        self.config = replace(
            config,
            enabled_types=set(config.enabled_types),
            patterns=dict(config.patterns),
        )

    def annotate(self, text: str | None) -> Annotations:
        """Scan text and return a fresh snapshot.

        Empty or missing text gives the empty snapshot without scanning.
        """
        if not text:
            return EMPTY_ANNOTATIONS

        whole = TextRange(0, len(text))
        found = {}
        for kind in SCAN_ORDER:
            if kind not in self.config.enabled_types:
                found[kind] = ()
                continue
            found[kind] = tuple(extract(
                kind,
                text,
                whole,
                self.config.filter_for(kind),
                patterns=self.config.patterns,
            ))

        snapshot = Annotations(
            urls=found[ActionType.URL],
            hashtags=found[ActionType.HASHTAG],
            mentions=found[ActionType.MENTION],
        )
        logger.debug(
            "Annotated %d chars: %d urls, %d hashtags, %d mentions",
            len(text), len(snapshot.urls), len(snapshot.hashtags), len(snapshot.mentions),
        )
        return snapshot
