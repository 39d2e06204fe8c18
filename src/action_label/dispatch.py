"""Callback dispatch — per-kind handlers first, generic delegate second."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol
from urllib.parse import SplitResult, urlsplit

import regex

from .types import ActionElement, ActionType, Url

logger = logging.getLogger(__name__)

# RFC 3986 reserved + unreserved characters, plus "%" for escapes
_URL_CHARS = regex.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")
_BAD_ESCAPE = regex.compile(r"%(?![0-9A-Fa-f]{2})")


class ActionLabelDelegate(Protocol):
    def did_select_text(self, text: str, kind: ActionType) -> None: ...


def parse_url(raw: str) -> SplitResult | None:
    """Strictly parse a URL string.  Returns None when it is not well-formed."""
    if not raw or not _URL_CHARS.fullmatch(raw) or _BAD_ESCAPE.search(raw):
        return None
    try:
        parts = urlsplit(raw)
        parts.port  # raises on a non-numeric / out-of-range port
    except ValueError:
        return None
    return parts


@dataclass
class Dispatcher:
    """Routes a tapped element to its handler or to the delegate."""

    handlers: dict[ActionType, Callable[[Any], None]] = field(default_factory=dict)
    delegate: ActionLabelDelegate | None = None

    def register(self, kind: ActionType, handler: Callable[[Any], None]) -> None:
        if kind is ActionType.NONE:
            raise ValueError("cannot register a handler for ActionType.NONE")
        self.handlers[kind] = handler

    def dispatch(self, element: ActionElement) -> bool:
        """Fire exactly one callback for element.  Returns False if nobody listened."""
        handler = self.handlers.get(element.kind)

        if isinstance(element, Url):
            url = parse_url(element.raw)
            if handler is not None and url is not None:
                handler(url)
                return True
        elif handler is not None:
            handler(element.text)
            return True

        if self.delegate is None:
            return False
        logger.debug("Delegate fallback for %s %r", element.kind.value, element.text)
        self.delegate.did_select_text(element.text, element.kind)
        return True
