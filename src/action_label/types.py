"""Core types."""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterator


class ActionType(enum.Enum):
    """Kind of actionable text element."""
    MENTION = "mention"
    HASHTAG = "hashtag"
    URL = "url"
    NONE = "none"      # sentinel: nothing requested / matched


@dataclass(frozen=True, slots=True)
class TextRange:
    """A (location, length) span in str index space."""
    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length

    def contains(self, index: int, *, inclusive: bool = True) -> bool:
        """Hit test.  Inclusive mode also accepts the index one past the end."""
        if inclusive:
            return self.location <= index <= self.end
        return self.location <= index < self.end

    def slice(self, text: str) -> str:
        return text[self.location:self.end]


# ── Elements (tagged union) ──────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Mention:
    handle: str            # without "@"
    kind: ClassVar[ActionType] = ActionType.MENTION

    @property
    def text(self) -> str:
        return self.handle


@dataclass(frozen=True, slots=True)
class Hashtag:
    tag: str               # without "#"
    kind: ClassVar[ActionType] = ActionType.HASHTAG

    @property
    def text(self) -> str:
        return self.tag


@dataclass(frozen=True, slots=True)
class Url:
    raw: str               # whitespace-trimmed match, not validated
    kind: ClassVar[ActionType] = ActionType.URL

    @property
    def text(self) -> str:
        return self.raw


ActionElement = Mention | Hashtag | Url


@dataclass(frozen=True, slots=True)
class RawMatch:
    """A single tokenizer hit, before cleaning."""
    kind: ActionType
    location: int
    length: int
    text: str

    @property
    def range(self) -> TextRange:
        return TextRange(self.location, self.length)


@dataclass(frozen=True, slots=True)
class ActionToken:
    """An extracted element together with the span it occupies."""
    range: TextRange
    element: ActionElement

    @property
    def kind(self) -> ActionType:
        return self.element.kind

    @property
    def text(self) -> str:
        return self.element.text


# ── Snapshot ─────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Annotations:
    """Immutable kind → tokens snapshot, replaced wholesale on every re-scan.

    Iteration order across kinds is URL, Hashtag, Mention; within a kind
    tokens are in ascending location order.
    """
    urls: tuple[ActionToken, ...] = field(default_factory=tuple)
    hashtags: tuple[ActionToken, ...] = field(default_factory=tuple)
    mentions: tuple[ActionToken, ...] = field(default_factory=tuple)

    def __getitem__(self, kind: ActionType) -> tuple[ActionToken, ...]:
        if kind is ActionType.URL:
            return self.urls
        if kind is ActionType.HASHTAG:
            return self.hashtags
        if kind is ActionType.MENTION:
            return self.mentions
        return ()

    def __iter__(self) -> Iterator[ActionToken]:
        return self.all()

    def __len__(self) -> int:
        return len(self.urls) + len(self.hashtags) + len(self.mentions)

    def all(self) -> Iterator[ActionToken]:
        yield from self.urls
        yield from self.hashtags
        yield from self.mentions

    def token_at(self, index: int, *, inclusive: bool = True) -> ActionToken | None:
        """Return the first token whose range contains index, if any."""
        for token in self.all():
            if token.range.contains(index, inclusive=inclusive):
                return token
        return None

    def as_dict(self) -> dict[str, list[dict]]:
        """Plain-data view (for debugging / logging)."""
        return {
            kind.value: [
                {"location": t.range.location, "length": t.range.length, "text": t.text}
                for t in self[kind]
            ]
            for kind in (ActionType.URL, ActionType.HASHTAG, ActionType.MENTION)
        }


EMPTY_ANNOTATIONS = Annotations()


# ── Index conversion ─────────────────────────────────────────────────
# Layout engines built on UTF-16 strings report glyph offsets in code
# units; everything in this package uses str indices.

def index_to_utf16(text: str, index: int) -> int:
    """Convert a str index into a UTF-16 code unit offset."""
    return len(text[:index].encode("utf-16-le", errors="surrogatepass")) // 2


def utf16_to_index(text: str, offset: int) -> int:
    """Convert a UTF-16 code unit offset into a str index.

    An offset that falls inside a surrogate pair rounds up to the next
    character.
    """
    units = 0
    for i, ch in enumerate(text):
        if units >= offset:
            return i
        units += 2 if ord(ch) > 0xFFFF else 1
    return len(text)
