import time
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, DefaultDict, Dict, List

from core.logger import parser_logger


class EventType(Enum):
    # Parser pipeline
    COMMAND_PARSED = auto()   # payload: command (ParsedCommand), raw
    PARSE_FAILED = auto()     # payload: error (ParseError), raw
    PRONOUN_BOUND = auto()    # payload: bindings

    # Text for the player; actions never return strings
    MESSAGE = auto()          # payload: text, crawl
    WARNING = auto()          # payload: text
    ERROR = auto()            # payload: text
    SYSTEM_LOG = auto()       # payload: text

    # World changes made by actions
    MOVEMENT = auto()         # payload: direction, from, to, destination, description
    ITEM_PICKUP = auto()      # payload: item, id
    ITEM_DROP = auto()        # payload: item, id
    OBJECT_MOVED = auto()     # payload: item, preposition, target
    CONTAINER_CHANGED = auto()  # payload: id, open, text


Handler = Callable[["GameEvent"], None]


@dataclass
class GameEvent:
    type: EventType
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


class EventBus:
    """Per-session publish/subscribe hub.

    Each ParserSession owns one bus so concurrent sessions (the web server
    keeps many) never hear each other. ``event_bus`` below is the default
    bus for the terminal game.
    """

    def __init__(self):
        self._subscribers: DefaultDict[EventType, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, callback: Handler):
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: EventType, callback: Handler):
        handlers = self._subscribers.get(event_type, [])
        if callback in handlers:
            handlers.remove(callback)

    def emit(self, event: GameEvent):
        """Deliver ``event`` to its subscribers in subscription order.

        A failing handler is logged and skipped; the rest still run.
        """
        # Copy so a handler may unsubscribe itself mid-dispatch
        for callback in list(self._subscribers.get(event.type, [])):
            try:
                callback(event)
            except Exception as e:
                parser_logger.error(f"Handler {callback!r} failed on {event.type.name}: {e}")

    def subscriber_count(self, event_type: EventType) -> int:
        return len(self._subscribers.get(event_type, []))

    def clear(self):
        self._subscribers.clear()


event_bus = EventBus()
