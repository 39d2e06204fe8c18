"""Interaction resolver — maps a pointer event stream to one tapped token.

The host toolkit translates each pointer position into a glyph index
(or None when the pointer is outside the text) and feeds it here:

    resolver = InteractionResolver(snapshot, dispatcher, presenter=view)
    for phase, index in pointer_events:
        if not resolver.handle(phase, index):
            host_default_handling()

States are Idle (``selected is None``) and Hovering(token).  A completed
tap fires exactly one callback, then the selection stays highlighted for
``unstyle_delay`` seconds before a deferred clear.

Everything, the deferred clear included, runs on the thread that calls
``handle``/``poll``.  Without an explicit scheduler the resolver uses the
running asyncio loop, or else a PollingScheduler whose due callbacks run
on the next ``handle`` or ``poll`` call.
"""

from __future__ import annotations
import asyncio
import enum
import logging
import time
from typing import Callable, Protocol

from .dispatch import Dispatcher
from .types import EMPTY_ANNOTATIONS, ActionToken, Annotations

logger = logging.getLogger(__name__)

DEFAULT_UNSTYLE_DELAY = 0.25  # seconds


class PointerPhase(enum.Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


class Presenter(Protocol):
    """Presentation side of the host widget."""

    def apply(self, annotations: Annotations) -> None:
        """Restyle every token (per-kind colouring)."""

    def highlight(self, token: ActionToken, selected: bool) -> None:
        """Switch one token between its normal and selected styling."""


class Cancelable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_later`` — an asyncio loop qualifies."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancelable: ...


class _PollingHandle:
    __slots__ = ("deadline", "callback", "cancelled")

    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class PollingScheduler:
    """Thread-free scheduler: callbacks run from ``run_due`` once their delay passed."""

    __slots__ = ("_clock", "_handles")

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._handles: list[_PollingHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _PollingHandle:
        handle = _PollingHandle(self._clock() + delay, callback)
        self._handles.append(handle)
        return handle

    def run_due(self) -> int:
        """Run every callback whose deadline has passed.  Returns how many ran."""
        now = self._clock()
        due = [h for h in self._handles if h.deadline <= now and not h.cancelled]
        self._handles = [h for h in self._handles if h.deadline > now and not h.cancelled]
        for handle in due:
            handle.callback()
        return len(due)

    @property
    def pending(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled)


def default_scheduler() -> Scheduler:
    """The running asyncio loop if there is one, else a PollingScheduler."""
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return PollingScheduler()


class InteractionResolver:
    """Selection state machine driven by pointer phases."""

    __slots__ = (
        "_annotations", "_dispatcher", "_presenter", "_scheduler",
        "_unstyle_delay", "_inclusive", "_selected", "_pending",
    )

    def __init__(
        self,
        annotations: Annotations = EMPTY_ANNOTATIONS,
        dispatcher: Dispatcher | None = None,
        *,
        presenter: Presenter | None = None,
        scheduler: Scheduler | None = None,
        unstyle_delay: float = DEFAULT_UNSTYLE_DELAY,
        inclusive_hit_test: bool = True,
    ) -> None:
        self._annotations = annotations
        self._dispatcher = dispatcher or Dispatcher()
        self._presenter = presenter
        self._scheduler = scheduler or default_scheduler()
        self._unstyle_delay = unstyle_delay
        self._inclusive = inclusive_hit_test
        self._selected: ActionToken | None = None
        # (token, timer handle) for the deferred clear after a tap
        self._pending: tuple[ActionToken, Cancelable] | None = None

    @property
    def selected(self) -> ActionToken | None:
        return self._selected

    @property
    def annotations(self) -> Annotations:
        return self._annotations

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def presenter(self) -> Presenter | None:
        return self._presenter

    @presenter.setter
    def presenter(self, value: Presenter | None) -> None:
        self._presenter = value

    def token_at(self, index: int | None) -> ActionToken | None:
        if index is None:
            return None
        return self._annotations.token_at(index, inclusive=self._inclusive)

    def handle(self, phase: PointerPhase, index: int | None = None) -> bool:
        """Process one pointer event.  Returns True if the event was consumed."""
        self.poll()
        if phase in (PointerPhase.DOWN, PointerPhase.MOVE):
            return self._hover(index)
        if phase is PointerPhase.UP:
            return self._release()
        if phase is PointerPhase.CANCEL:
            return self._cancel()
        return False

    def poll(self) -> None:
        """Run a due deferred clear when using a PollingScheduler."""
        if isinstance(self._scheduler, PollingScheduler):
            self._scheduler.run_due()

    def reset(self, annotations: Annotations | None = None) -> None:
        """Drop the selection (and optionally swap in a new snapshot)."""
        self._cancel_pending()
        self._selected = None
        if annotations is not None:
            self._annotations = annotations

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _hover(self, index: int | None) -> bool:
        self._cancel_pending()
        token = self.token_at(index)
        if token is None:
            had_selection = self._selected is not None
            self._select(None)
            return had_selection

        if self._selected is None or self._selected.range != token.range:
            self._select(token)
        return True

    def _release(self) -> bool:
        token = self._selected
        if token is None:
            return False
        try:
            self._dispatcher.dispatch(token.element)
        finally:
            # A raising handler still gets its highlight cleared
            self._schedule_clear(token)
        return True

    def _cancel(self) -> bool:
        self._cancel_pending()
        had_selection = self._selected is not None
        self._select(None)
        return had_selection

    def _select(self, token: ActionToken | None) -> None:
        if self._selected is not None and self._presenter is not None:
            self._presenter.highlight(self._selected, False)
        self._selected = token
        if token is not None and self._presenter is not None:
            self._presenter.highlight(token, True)

    # ------------------------------------------------------------------
    # Deferred clear
    # ------------------------------------------------------------------

    def _schedule_clear(self, token: ActionToken) -> None:
        self._cancel_pending()
        handle = self._scheduler.call_later(
            self._unstyle_delay, lambda: self._deferred_clear(token),
        )
        self._pending = (token, handle)

    def _deferred_clear(self, token: ActionToken) -> None:
        # Superseded by a newer interaction or re-scan
        if self._pending is None or self._pending[0] is not token:
            return
        self._pending = None
        if self._selected is token:
            logger.debug("Clearing tapped %s at %s", token.kind.value, token.range)
            self._select(None)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending[1].cancel()
            self._pending = None
