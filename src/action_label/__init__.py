"""Action Label — mention, hashtag and URL detection for tappable text."""

from .types import (
    ActionType, TextRange, Mention, Hashtag, Url, ActionElement,
    RawMatch, ActionToken, Annotations, EMPTY_ANNOTATIONS,
    index_to_utf16, utf16_to_index,
)
from .patterns import scan
from .builder import extract
from .annotator import Annotator, AnnotatorConfig
from .dispatch import ActionLabelDelegate, Dispatcher, parse_url
from .resolver import (
    InteractionResolver, PointerPhase, PollingScheduler, Presenter, Scheduler, default_scheduler,
)
from .label import ActionLabel
from .config import create_label, load_config, load_from_yaml

__all__ = [
    "ActionType", "TextRange", "Mention", "Hashtag", "Url", "ActionElement",
    "RawMatch", "ActionToken", "Annotations", "EMPTY_ANNOTATIONS",
    "index_to_utf16", "utf16_to_index",
    "scan", "extract",
    "Annotator", "AnnotatorConfig",
    "ActionLabelDelegate", "Dispatcher", "parse_url",
    "InteractionResolver", "PointerPhase", "PollingScheduler", "Presenter", "Scheduler",
    "default_scheduler",
    "ActionLabel",
    "create_label", "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
