"""
Parser Feedback
Remembers enough about recent input to support OOPS and AGAIN.
"""

from typing import Optional, Sequence, Tuple, Union

from core.grammar import ParseError, ParseErrorKind
from core.logger import parser_logger

OOPS_WORDS = {"OOPS"}
AGAIN_WORDS = {"AGAIN"}


class ParserFeedback:
    """Per-session record of the last input line.

    ``oops`` and ``again`` return the line that should be parsed next, or a
    ParseError (INVALID_SYNTAX) explaining why there is nothing to do.
    """

    def __init__(self):
        self.last_words: Tuple[str, ...] = ()
        self.last_success: Optional[str] = None
        self.last_failed = False
        self.unknown_word: Optional[str] = None
        self.unknown_position: Optional[int] = None

    def record_success(self, raw_input: str, words: Sequence[str] = ()):
        self.last_words = tuple(words)
        self.last_success = raw_input
        self.last_failed = False
        self.unknown_word = None
        self.unknown_position = None

    def record_failure(self, raw_input: str, words: Sequence[str], error: ParseError):
        self.last_words = tuple(words)
        self.last_failed = True
        if error.kind is ParseErrorKind.UNKNOWN_WORD:
            self.unknown_word = error.word
            self.unknown_position = error.position
        else:
            self.unknown_word = None
            self.unknown_position = None

    def oops(self, replacement: Sequence[str]) -> Union[str, ParseError]:
        """Splice ``replacement`` in place of the last unknown word."""
        if self.unknown_position is None or not self.last_words:
            return ParseError(ParseErrorKind.INVALID_SYNTAX, "no-word-to-replace")
        if not replacement:
            return ParseError(ParseErrorKind.INVALID_SYNTAX, "no-replacement", "OOPS")

        pos = self.unknown_position
        words = list(self.last_words[:pos]) + list(replacement) + list(self.last_words[pos + 1:])
        corrected = " ".join(words)
        parser_logger.info(f"OOPS: replaced {self.unknown_word!r} -> {' '.join(replacement)!r}")
        return corrected

    def again(self) -> Union[str, ParseError]:
        if self.last_failed:
            return ParseError(ParseErrorKind.INVALID_SYNTAX, "repeat-mistake", "AGAIN")
        if self.last_success is None:
            return ParseError(ParseErrorKind.INVALID_SYNTAX, "nothing-to-repeat", "AGAIN")
        return self.last_success

    def to_dict(self):
        return {
            "last_success": self.last_success,
            "last_failed": self.last_failed,
            "unknown_word": self.unknown_word,
        }
