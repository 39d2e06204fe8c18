"""YAML/dict config loader for action-label.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    action_label:
      enabled_types:
        - url
        - hashtag
        - mention
      unstyle_delay: 0.25
      inclusive_hit_test: true
      mentions:
        exclude:
          - support
      hashtags:
        exclude:
          - ad
      patterns:
        hashtag: '(?:^|\\s|$)#[a-z]+'
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .annotator import SCAN_ORDER, AnnotatorConfig
from .builder import FilterPredicate
from .label import ActionLabel
from .resolver import DEFAULT_UNSTYLE_DELAY
from .types import ActionType


def _parse_kind(name: str) -> ActionType:
    try:
        kind = ActionType(str(name).lower())
    except ValueError:
        raise ValueError(f"unknown action type: {name!r}") from None
    if kind is ActionType.NONE:
        raise ValueError("'none' is not a scannable action type")
    return kind


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    # Support nested under "action_label" key or flat
    if "action_label" in data:
        data = data["action_label"] or {}

    delay = float(data.get("unstyle_delay", DEFAULT_UNSTYLE_DELAY))
    if delay < 0:
        raise ValueError(f"unstyle_delay must be >= 0, got {delay}")

    enabled = data.get("enabled_types")
    return {
        "enabled_types": (
            set(SCAN_ORDER) if enabled is None else {_parse_kind(k) for k in enabled}
        ),
        "unstyle_delay": delay,
        "inclusive_hit_test": bool(data.get("inclusive_hit_test", True)),
        "mention_exclude": {h.lower() for h in (data.get("mentions") or {}).get("exclude") or []},
        "hashtag_exclude": {t.lower() for t in (data.get("hashtags") or {}).get("exclude") or []},
        "patterns": {_parse_kind(k): v for k, v in (data.get("patterns") or {}).items()},
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml  # optional dependency
    with open(path) as f:
        return load_config(yaml.safe_load(f) or {})


def _exclude_filter(excluded: set[str]) -> FilterPredicate | None:
    if not excluded:
        return None
    return lambda word: word.lower() not in excluded


def create_label(
    config: dict[str, Any],
    text: str | None = None,
    **kwargs: Any,
) -> ActionLabel:
    """Create a configured ActionLabel from a config dict.

    Extra keyword arguments (presenter, scheduler, delegate) are passed
    through to ActionLabel.
    """
    cfg = config if "mention_exclude" in config else load_config(config)

    annotator_config = AnnotatorConfig(
        mention_filter=_exclude_filter(cfg["mention_exclude"]),
        hashtag_filter=_exclude_filter(cfg["hashtag_exclude"]),
        enabled_types=set(cfg["enabled_types"]),
        patterns=dict(cfg["patterns"]),
    )
    return ActionLabel(
        text,
        config=annotator_config,
        unstyle_delay=cfg["unstyle_delay"],
        inclusive_hit_test=cfg["inclusive_hit_test"],
        **kwargs,
    )
