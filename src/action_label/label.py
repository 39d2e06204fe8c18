"""ActionLabel — the engine behind a tappable text label, minus the widget.

Bind it to any toolkit's label:

    label = ActionLabel(presenter=my_view)

    @label.on_mention
    def open_profile(handle):
        ...

    label.text = "Thanks @alice for #python tips, see https://python.org"

    # From the widget's pointer plumbing
    if label.handle_pointer(PointerPhase.DOWN, glyph_index):
        return  # consumed

Text changes and filter changes trigger a full re-scan; presentation
changes only need ``restyle()``.
"""

from __future__ import annotations
import contextlib
from typing import Any, Callable, Iterator

from .annotator import Annotator, AnnotatorConfig
from .builder import FilterPredicate
from .dispatch import ActionLabelDelegate, Dispatcher
from .resolver import (
    DEFAULT_UNSTYLE_DELAY,
    InteractionResolver,
    PointerPhase,
    Presenter,
    Scheduler,
)
from .types import EMPTY_ANNOTATIONS, ActionToken, ActionType, Annotations


class ActionLabel:
    """Owns the text, its annotation snapshot, handlers and selection."""

    def __init__(
        self,
        text: str | None = None,
        *,
        config: AnnotatorConfig | None = None,
        presenter: Presenter | None = None,
        scheduler: Scheduler | None = None,
        delegate: ActionLabelDelegate | None = None,
        unstyle_delay: float = DEFAULT_UNSTYLE_DELAY,
        inclusive_hit_test: bool = True,
    ) -> None:
        self.annotator = Annotator(config)
        self._dispatcher = Dispatcher(delegate=delegate)
        self._resolver = InteractionResolver(
            EMPTY_ANNOTATIONS,
            self._dispatcher,
            presenter=presenter,
            scheduler=scheduler,
            unstyle_delay=unstyle_delay,
            inclusive_hit_test=inclusive_hit_test,
        )
        self._text = text
        self._annotations = EMPTY_ANNOTATIONS
        self._customizing = False
        self.update()

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def text(self) -> str | None:
        return self._text

    @text.setter
    def text(self, value: str | None) -> None:
        self._text = value
        self.update()

    @property
    def annotations(self) -> Annotations:
        """Current snapshot; replaced (never mutated) on every re-scan."""
        return self._annotations

    @property
    def selected(self) -> ActionToken | None:
        return self._resolver.selected

    @property
    def presenter(self) -> Presenter | None:
        return self._resolver.presenter

    @presenter.setter
    def presenter(self, value: Presenter | None) -> None:
        self._resolver.presenter = value

    @property
    def config(self) -> AnnotatorConfig:
        return self.annotator.config

    # ------------------------------------------------------------------
    # Handlers and filters
    # ------------------------------------------------------------------

    @property
    def delegate(self) -> ActionLabelDelegate | None:
        return self._dispatcher.delegate

    @delegate.setter
    def delegate(self, value: ActionLabelDelegate | None) -> None:
        self._dispatcher.delegate = value

    def on_mention(self, handler: Callable[[str], Any]) -> Callable[[str], Any]:
        self._dispatcher.register(ActionType.MENTION, handler)
        return handler

    def on_hashtag(self, handler: Callable[[str], Any]) -> Callable[[str], Any]:
        self._dispatcher.register(ActionType.HASHTAG, handler)
        return handler

    def on_url(self, handler: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Handler receives a ``urllib.parse.SplitResult``."""
        self._dispatcher.register(ActionType.URL, handler)
        return handler

    def filter_mention(self, predicate: FilterPredicate | None) -> None:
        self.config.mention_filter = predicate
        self.update()

    def filter_hashtag(self, predicate: FilterPredicate | None) -> None:
        self.config.hashtag_filter = predicate
        self.update()

    # ------------------------------------------------------------------
    # Updating
    # ------------------------------------------------------------------

    def update(self, parse_text: bool = True) -> None:
        """Re-scan (if parse_text) and push the snapshot to the presenter."""
        if self._customizing:
            return

        if not self._text:
            self._annotations = EMPTY_ANNOTATIONS
            self._resolver.reset(EMPTY_ANNOTATIONS)
        elif parse_text:
            self._annotations = self.annotator.annotate(self._text)
            self._resolver.reset(self._annotations)

        if self.presenter is not None:
            self.presenter.apply(self._annotations)

    def restyle(self) -> None:
        """Presentation-only refresh; keeps tokens and selection."""
        self.update(parse_text=False)

    def reparse(self) -> None:
        self.update()

    @contextlib.contextmanager
    def customize(self) -> Iterator[ActionLabel]:
        """Batch several changes into a single update on exit.

        with label.customize() as batch:
            batch.text = "..."
            batch.filter_mention(...)
        """
        self._customizing = True
        try:
            yield self
        finally:
            self._customizing = False
        self.update()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def handle_pointer(self, phase: PointerPhase, index: int | None = None) -> bool:
        """Feed one pointer event.  True means the host should not handle it."""
        return self._resolver.handle(phase, index)

    def poll(self) -> None:
        """Let a due post-tap unhighlight run; call from the host's idle loop.

        Only needed without an asyncio loop or explicit scheduler.
        """
        self._resolver.poll()
