from collections import deque
from typing import Optional
import sys
import uuid

from core.event_system import EventBus, EventType, GameEvent
from core.grammar import ParseError, ParseResult, is_error
from core.logger import parser_logger
from entities.world_map import WorldModel
from systems.actions import CommandDispatcher, GameContext
from systems.content_loader import load_world
from systems.feedback import AGAIN_WORDS, OOPS_WORDS, ParserFeedback
from systems.pronouns import PronounContext
from systems.resolver import Resolver
from systems.vocabulary import VocabularyTable
from ui.command_parser import CommandTokenizer, TokenizedLine

# Verbs the session handles itself instead of dispatching
QUIT_VERBS = {"QUIT"}
DEFAULT_HISTORY_LENGTH = 100


class ParserSession:
    """One player's parser state: world, pronouns, feedback and event bus.

    Sessions never share mutable state, so the web server can keep many of
    them side by side. ``parse`` only resolves; ``submit`` is a full turn
    (OOPS / AGAIN handling, resolution and execution).
    """

    def __init__(self, world: WorldModel, vocabulary: VocabularyTable, bus: Optional[EventBus] = None,
                 session_id: Optional[str] = None, history_length: int = DEFAULT_HISTORY_LENGTH):
        self.session_id = session_id or uuid.uuid4().hex
        self.world = world
        self.vocabulary = vocabulary
        self.bus = bus if bus is not None else EventBus()
        self.pronouns = PronounContext()
        self.feedback = ParserFeedback()
        self.tokenizer = CommandTokenizer(vocabulary)
        self.resolver = Resolver(vocabulary)
        self.dispatcher = CommandDispatcher()
        self.context = GameContext(world, self.bus)
        self.history = deque(maxlen=history_length)
        self.turn = 0
        self.finished = False

    @classmethod
    def from_file(cls, path=None, bus=None, **kwargs) -> "ParserSession":
        world, vocabulary = load_world(path)
        return cls(world, vocabulary, bus=bus, **kwargs)

    # --- parsing ------------------------------------------------------

    def parse(self, raw_input: str) -> ParseResult:
        """Resolve one line against the current world without executing it."""
        return self._parse_line(self.tokenizer.tokenize(raw_input))

    def _parse_line(self, line: TokenizedLine) -> ParseResult:
        tokens = self.vocabulary.classify_words(line.words)
        before = self.pronouns.to_dict()
        result = self.resolver.resolve(
            tokens,
            self.world.reachable_objects(),
            self.pronouns,
            literal=line.literal,
            raw_input=line.raw,
        )

        if is_error(result):
            self.bus.emit(GameEvent(EventType.PARSE_FAILED, {"error": result, "raw": line.raw}))
            return result

        self.bus.emit(GameEvent(EventType.COMMAND_PARSED, {"command": result, "raw": line.raw}))
        after = self.pronouns.to_dict()
        if after != before:
            self.bus.emit(GameEvent(EventType.PRONOUN_BOUND, {"bindings": after}))
        return result

    # --- turns --------------------------------------------------------

    def submit(self, raw_input: str) -> ParseResult:
        """Play one turn: handle OOPS / AGAIN, parse, then execute on success."""
        line = self.tokenizer.tokenize(raw_input)
        if line:
            meta = self.vocabulary.expand(line.words[0])
            if meta in AGAIN_WORDS:
                line = self._replay(self.feedback.again())
            elif meta in OOPS_WORDS:
                line = self._replay(self.feedback.oops(line.words[1:]))
            if isinstance(line, ParseError):
                self.bus.emit(GameEvent(EventType.PARSE_FAILED, {"error": line, "raw": raw_input}))
                return line

        self.history.append(line.raw)
        result = self._parse_line(line)
        if is_error(result):
            self.feedback.record_failure(line.raw, line.words, result)
            return result

        self.feedback.record_success(line.raw, line.words)
        if result.verb in QUIT_VERBS:
            self.finished = True
            self.bus.emit(GameEvent(EventType.MESSAGE, {"text": "Goodbye."}))
            return result

        self.dispatcher.dispatch(self.context, result)
        self.turn += 1
        parser_logger.info(f"[{self.session_id}] turn {self.turn}: {line.raw!r}")
        return result

    def _replay(self, outcome):
        if isinstance(outcome, ParseError):
            return outcome
        return self.tokenizer.tokenize(outcome)

    def to_dict(self):
        return {
            "session_id": self.session_id,
            "turn": self.turn,
            "finished": self.finished,
            "room": self.world.current_room_id,
            "pronouns": self.pronouns.to_dict(),
            "feedback": self.feedback.to_dict(),
            "world": self.world.to_dict(),
        }


def main(argv=None):
    """Run the terminal game and return its exit status (1 when the world cannot be loaded)."""
    from game_loop import main as run_game_loop
    return run_game_loop(argv)


if __name__ == "__main__":
    sys.exit(main())
