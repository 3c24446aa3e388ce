"""
Message Reporter System
Subscribes to a session's event bus and displays messages through CRT output.
Systems emit events instead of returning strings; parse failures arrive as
structured ParseErrors and are turned into player-facing prose here.
"""

from core.event_system import event_bus as default_bus, EventType, GameEvent
from core.grammar import ParseError, ParseErrorKind
from ui.command_parser import suggest_correction


# Reason code -> message. ``{word}`` is the offending word as typed.
ERROR_MESSAGES = {
    "empty-input": "I beg your pardon?",
    "articles-only": "There was no verb in that sentence!",
    "not-a-verb": "There was no verb in that sentence!",
    "unknown-verb": 'I don\'t know the word "{word}".',
    "unknown-word": 'I don\'t know the word "{word}".',
    "not-reachable": "You can't see any {word} here!",
    "nothing-reachable": "There is nothing here.",
    "no-antecedent": 'I\'m not sure what "{word}" refers to.',
    "words-after-direction": "I only understood you as far as wanting to go somewhere.",
    "bare-preposition": "{word} what?",
    "article-only-phrase": "That sentence ended too soon.",
    "extra-preposition": "That sentence has too many prepositions.",
    "pronoun-in-phrase": 'You can\'t use "{word}" that way.',
    "plural-indirect-object": "You can't use multiple indirect objects.",
    "no-word-to-replace": "There was no word to replace!",
    "no-replacement": "Oops what?",
    "repeat-mistake": "That would just repeat a mistake.",
    "nothing-to-repeat": "There is nothing to repeat.",
}

FALLBACK_MESSAGES = {
    ParseErrorKind.NO_VERB: "There was no verb in that sentence!",
    ParseErrorKind.UNKNOWN_WORD: "I don't know one of those words.",
    ParseErrorKind.OBJECT_NOT_FOUND: "You can't see that here.",
    ParseErrorKind.AMBIGUOUS: "Which one do you mean?",
    ParseErrorKind.INVALID_SYNTAX: "That sentence isn't one I recognize.",
}


def _join_choices(names):
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " or " + names[-1]


def describe_error(error: ParseError, vocabulary=None) -> str:
    """Player-facing text for a ParseError.

    With a vocabulary, unknown words get a "did you mean" hint.
    """
    word = error.word or ""
    if error.kind is ParseErrorKind.AMBIGUOUS and error.candidates:
        choices = _join_choices([f"the {c.display_name}" for c in error.candidates])
        return f"Which {word.lower()} do you mean, {choices}?"

    template = ERROR_MESSAGES.get(error.detail, FALLBACK_MESSAGES[error.kind])
    text = template.format(word=word.lower() if error.kind is ParseErrorKind.OBJECT_NOT_FOUND else word)
    if text and text[0].islower():
        text = text[0].upper() + text[1:]

    if vocabulary is not None and word and not vocabulary.has_word(word):
        suggestion = suggest_correction(word, vocabulary)
        if suggestion:
            text += f' Did you mean "{suggestion.lower()}"?'
    return text


class MessageReporter:
    """
    Central message display handler.
    Subscribes to MESSAGE/WARNING/PARSE_FAILED etc. events and routes
    them through the CRT output system.
    """

    def __init__(self, crt_output, bus=None, vocabulary=None, suggest_corrections=True, show_parse=False):
        """
        Args:
            crt_output: CRTOutput instance from ui.crt_effects
            bus: EventBus to listen on (defaults to the global bus)
            vocabulary: VocabularyTable used for spelling suggestions
        """
        self.crt = crt_output
        self.bus = bus if bus is not None else default_bus
        self.vocabulary = vocabulary
        self.suggest_corrections = suggest_corrections
        self.show_parse = show_parse
        self._handlers = {
            EventType.MESSAGE: self._handle_message,
            EventType.WARNING: self._handle_warning,
            EventType.ERROR: self._handle_error,
            EventType.SYSTEM_LOG: self._handle_system,
            EventType.MOVEMENT: self._handle_movement,
            EventType.ITEM_PICKUP: self._handle_item_pickup,
            EventType.ITEM_DROP: self._handle_item_drop,
            EventType.OBJECT_MOVED: self._handle_object_moved,
            EventType.CONTAINER_CHANGED: self._handle_container,
            EventType.PARSE_FAILED: self._handle_parse_failed,
            EventType.COMMAND_PARSED: self._handle_command_parsed,
        }
        self._subscribe_all()

    def _subscribe_all(self):
        """Subscribe to all reporting event types."""
        for event_type, handler in self._handlers.items():
            self.bus.subscribe(event_type, handler)

    def cleanup(self):
        """Unsubscribe from all reporting event types."""
        for event_type, handler in self._handlers.items():
            self.bus.unsubscribe(event_type, handler)

    def _handle_message(self, event: GameEvent):
        """Handle general messages."""
        text = event.payload.get('text', '')
        crawl = event.payload.get('crawl', False)
        self.crt.output(text, crawl=crawl)

    def _handle_warning(self, event: GameEvent):
        """Handle warning messages with high visibility."""
        self.crt.warning(event.payload.get('text', ''))

    def _handle_error(self, event: GameEvent):
        self.crt.error(event.payload.get('text', ''))

    def _handle_system(self, event: GameEvent):
        self.crt.output(f"[SYS] {event.payload.get('text', '')}")

    def _handle_movement(self, event: GameEvent):
        destination = event.payload.get('destination', '')
        self.crt.output(destination.upper())
        description = event.payload.get('description')
        if description:
            self.crt.output(description)

    def _handle_item_pickup(self, event: GameEvent):
        item = event.payload.get('item', 'something')
        self.crt.output(f"Taken: {item}.")

    def _handle_item_drop(self, event: GameEvent):
        item = event.payload.get('item', 'something')
        self.crt.output(f"Dropped: {item}.")

    def _handle_object_moved(self, event: GameEvent):
        item = event.payload.get('item', 'something')
        preposition = event.payload.get('preposition', 'in')
        target = event.payload.get('target', 'something')
        self.crt.output(f"You put the {item} {preposition} the {target}.")

    def _handle_container(self, event: GameEvent):
        self.crt.output(event.payload.get('text', 'Done.'))

    def _handle_parse_failed(self, event: GameEvent):
        error = event.payload.get('error')
        if error is None:
            return
        vocabulary = self.vocabulary if self.suggest_corrections else None
        self.crt.output(describe_error(error, vocabulary))

    def _handle_command_parsed(self, event: GameEvent):
        if not self.show_parse:
            return
        command = event.payload.get('command')
        if command is None:
            return
        parts = [f"verb={command.verb}"]
        if command.direct_objects:
            parts.append(f"direct={','.join(command.direct_objects)}")
        if command.preposition:
            parts.append(f"prep={command.preposition}")
        if command.indirect_object:
            parts.append(f"indirect={command.indirect_object}")
        if command.direction:
            parts.append(f"dir={command.direction}")
        if command.literal:
            parts.append(f"literal={command.literal!r}")
        self.crt.output(f"[PARSE] {' '.join(parts)}")


# Utility function to emit messages easily
def emit_message(text, crawl=False, bus=None):
    """Emit a general message event."""
    (bus or default_bus).emit(GameEvent(EventType.MESSAGE, {'text': text, 'crawl': crawl}))


def emit_warning(text, bus=None):
    """Emit a warning event."""
    (bus or default_bus).emit(GameEvent(EventType.WARNING, {'text': text}))
