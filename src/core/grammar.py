"""Grammar value types shared by the tokenizer, vocabulary and resolver."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union, Any


class WordCategory(Enum):
    VERB = "VERB"
    NOUN = "NOUN"
    ADJECTIVE = "ADJECTIVE"
    PREPOSITION = "PREPOSITION"
    DIRECTION = "DIRECTION"
    ARTICLE = "ARTICLE"
    PRONOUN = "PRONOUN"
    UNKNOWN = "UNKNOWN"


class ParseErrorKind(Enum):
    NO_VERB = "NO_VERB"
    UNKNOWN_WORD = "UNKNOWN_WORD"
    OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"
    AMBIGUOUS = "AMBIGUOUS"
    INVALID_SYNTAX = "INVALID_SYNTAX"


@dataclass(frozen=True)
class Token:
    """A classified word. Built once by the vocabulary, never re-tagged."""
    text: str
    category: WordCategory
    canonical: str = ""
    position: int = 0

    def __post_init__(self):
        if not isinstance(self.category, WordCategory):
            raise TypeError(f"Token category must be a WordCategory, got {self.category!r}")
        if not self.canonical:
            object.__setattr__(self, "canonical", self.text.upper())

    @property
    def is_article(self) -> bool:
        return self.category is WordCategory.ARTICLE


@dataclass(frozen=True)
class ParsedCommand:
    """A successfully resolved command, ready for an action executor.

    Object references are stored as object ids. The phrase text fields keep
    what the player actually typed so downstream messages can echo it.
    """
    verb: str
    direct_objects: Tuple[str, ...] = ()
    direct_object_text: Optional[str] = None
    preposition: Optional[str] = None
    indirect_object: Optional[str] = None
    indirect_object_text: Optional[str] = None
    direction: Optional[str] = None
    literal: Optional[str] = None
    is_all: bool = False
    raw_input: str = ""

    @property
    def direct_object(self) -> Optional[str]:
        """The single direct object id, or None for zero or several."""
        if len(self.direct_objects) == 1:
            return self.direct_objects[0]
        return None

    def to_dict(self) -> dict:
        return {
            "verb": self.verb,
            "direct_object": self.direct_object,
            "direct_objects": list(self.direct_objects),
            "direct_object_text": self.direct_object_text,
            "preposition": self.preposition,
            "indirect_object": self.indirect_object,
            "indirect_object_text": self.indirect_object_text,
            "direction": self.direction,
            "literal": self.literal,
            "is_all": self.is_all,
            "raw_input": self.raw_input,
        }


@dataclass(frozen=True)
class ParseError:
    """A structured, terminal parse failure.

    ``detail`` is a stable reason code (e.g. ``"bare-preposition"``), not
    player-facing prose. ``candidates`` is only populated for AMBIGUOUS.
    """
    kind: ParseErrorKind
    detail: str = ""
    word: Optional[str] = None
    position: Optional[int] = None
    candidates: Tuple[Any, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "error": self.kind.value,
            "detail": self.detail,
            "word": self.word,
            "position": self.position,
            "candidates": [
                {"id": c.id, "name": c.display_name, "adjectives": sorted(c.adjectives)}
                for c in self.candidates
            ],
        }


ParseResult = Union[ParsedCommand, ParseError]


def is_error(result: ParseResult) -> bool:
    return isinstance(result, ParseError)
