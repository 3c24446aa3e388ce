"""
Command Resolver
Turns a classified token stream into a ParsedCommand or a ParseError.

The procedure runs in a fixed order so error reporting is deterministic:

1. find the verb (leading articles skipped, a bare direction means GO);
2. split at the first preposition into direct and indirect phrases;
3. syntax-shape checks;
4. unknown-word scan over the whole command;
5. noun-phrase matching against the reachable objects;
6. commit pronoun bindings, only once everything above succeeded.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from core.command_registry import MOVEMENT_VERBS
from core.grammar import (
    Token, WordCategory, ParsedCommand, ParseError, ParseErrorKind, ParseResult,
)
from core.logger import parser_logger
from systems.pronouns import PronounContext, PronounKind, PRONOUN_KINDS, ALL_WORDS

IMPLICIT_MOVE_VERB = "GO"


@dataclass(frozen=True)
class NounPhrase:
    """Phrase tokens with leading articles already stripped."""
    tokens: Tuple[Token, ...]

    @property
    def text(self) -> str:
        return " ".join(t.text for t in self.tokens)

    @property
    def pronoun(self) -> Optional[Token]:
        if len(self.tokens) == 1 and self.tokens[0].category is WordCategory.PRONOUN:
            return self.tokens[0]
        return None


@dataclass(frozen=True)
class PhraseResolution:
    object_ids: Tuple[str, ...]
    text: str
    pronoun_kind: PronounKind
    is_all: bool = False


def strip_articles(tokens: Sequence[Token]) -> Tuple[Token, ...]:
    index = 0
    while index < len(tokens) and tokens[index].is_article:
        index += 1
    return tuple(tokens[index:])


def object_matches(obj, tokens: Sequence[Token]) -> bool:
    """True when some suffix of the phrase names ``obj`` and every word
    before that suffix is one of its adjectives.

    Both the typed spelling and the canonical form of each word are tried,
    so vocabulary synonyms and object synonyms both work. Multi-word names
    ("TROPHY CASE") match as a suffix.
    """
    names = obj.names()
    typed = [t.text.upper() for t in tokens]
    canonical = [t.canonical for t in tokens]
    for split in range(len(tokens)):
        tail_typed = " ".join(typed[split:])
        tail_canonical = " ".join(canonical[split:])
        if tail_typed not in names and tail_canonical not in names:
            continue
        if all(typed[i] in obj.adjectives or canonical[i] in obj.adjectives for i in range(split)):
            return True
    return False


class Resolver:
    """Stateless resolver; all state is passed in per call."""

    def __init__(self, vocabulary):
        self.vocabulary = vocabulary

    def resolve(self, tokens: Iterable[Token], reachable, pronouns: PronounContext,
                literal: Optional[str] = None, raw_input: str = "") -> ParseResult:
        tokens = tuple(tokens)
        reachable = list(reachable)

        if not tokens:
            return self._fail(ParseErrorKind.INVALID_SYNTAX, "empty-input")

        # --- verb -----------------------------------------------------
        head_tokens = strip_articles(tokens)
        if not head_tokens:
            last = tokens[-1]
            return self._fail(ParseErrorKind.NO_VERB, "articles-only", last.text, last.position)

        head, rest = head_tokens[0], head_tokens[1:]
        if head.category is WordCategory.VERB:
            verb = head.canonical
        elif head.category is WordCategory.DIRECTION:
            if rest:
                return self._fail(ParseErrorKind.INVALID_SYNTAX, "words-after-direction",
                                  rest[0].text, rest[0].position)
            return self._succeed(ParsedCommand(verb=IMPLICIT_MOVE_VERB, direction=head.canonical,
                                               raw_input=raw_input))
        else:
            detail = "unknown-verb" if head.category is WordCategory.UNKNOWN else "not-a-verb"
            return self._fail(ParseErrorKind.NO_VERB, detail, head.text, head.position)

        if verb in self.vocabulary.verbatim_verbs:
            if literal is None and rest:
                literal = " ".join(t.text for t in rest)
            return self._succeed(ParsedCommand(verb=verb, literal=literal, raw_input=raw_input))

        if verb in MOVEMENT_VERBS:
            target = strip_articles(rest)
            if len(target) == 1 and target[0].category is WordCategory.DIRECTION:
                return self._succeed(ParsedCommand(verb=verb, direction=target[0].canonical,
                                                   raw_input=raw_input))

        # --- split ----------------------------------------------------
        direct_tokens, preposition, indirect_tokens = self._split(rest)
        parser_logger.debug(
            f"Split {verb}: direct={[t.text for t in direct_tokens]} "
            f"prep={preposition.canonical if preposition else None} indirect={[t.text for t in indirect_tokens]}"
        )

        # --- syntax shape ---------------------------------------------
        shape_error = self._check_shape(direct_tokens, preposition, indirect_tokens)
        if shape_error:
            return shape_error

        # --- classification -------------------------------------------
        unknown = next((t for t in rest if t.category is WordCategory.UNKNOWN), None)
        if unknown is not None:
            return self._fail(ParseErrorKind.UNKNOWN_WORD, "unknown-word", unknown.text, unknown.position)

        # --- object resolution ----------------------------------------
        direct = None
        indirect = None
        if direct_tokens:
            direct = self._resolve_phrase(NounPhrase(strip_articles(direct_tokens)), reachable, pronouns)
            if isinstance(direct, ParseError):
                return self._fail_with(direct)
        if indirect_tokens:
            indirect = self._resolve_phrase(NounPhrase(strip_articles(indirect_tokens)), reachable, pronouns)
            if isinstance(indirect, ParseError):
                return self._fail_with(indirect)
            if len(indirect.object_ids) > 1:
                return self._fail(ParseErrorKind.INVALID_SYNTAX, "plural-indirect-object",
                                  indirect.text, indirect_tokens[0].position)

        # --- commit ---------------------------------------------------
        # Indirect first so the direct object ends up owning IT
        for resolution in (indirect, direct):
            if resolution is not None:
                pronouns.bind(resolution.pronoun_kind, resolution.object_ids)
                parser_logger.debug(f"Bound {resolution.pronoun_kind.value} -> {list(resolution.object_ids)}")

        command = ParsedCommand(
            verb=verb,
            direct_objects=direct.object_ids if direct else (),
            direct_object_text=direct.text if direct else None,
            preposition=preposition.canonical if preposition else None,
            indirect_object=indirect.object_ids[0] if indirect else None,
            indirect_object_text=indirect.text if indirect else None,
            is_all=direct.is_all if direct else False,
            raw_input=raw_input,
        )
        return self._succeed(command)

    # --- steps ----------------------------------------------------------

    @staticmethod
    def _split(rest: Tuple[Token, ...]):
        for index, token in enumerate(rest):
            if token.category is WordCategory.PREPOSITION:
                return rest[:index], token, rest[index + 1:]
        return rest, None, ()

    def _check_shape(self, direct_tokens, preposition, indirect_tokens) -> Optional[ParseError]:
        if preposition is not None and not indirect_tokens:
            return self._fail(ParseErrorKind.INVALID_SYNTAX, "bare-preposition",
                              preposition.text, preposition.position)

        for phrase_tokens in (direct_tokens, indirect_tokens):
            if phrase_tokens and not strip_articles(phrase_tokens):
                return self._fail(ParseErrorKind.INVALID_SYNTAX, "article-only-phrase",
                                  phrase_tokens[-1].text, phrase_tokens[-1].position)

        extra = next((t for t in indirect_tokens if t.category is WordCategory.PREPOSITION), None)
        if extra is not None:
            return self._fail(ParseErrorKind.INVALID_SYNTAX, "extra-preposition", extra.text, extra.position)

        for phrase_tokens in (direct_tokens, indirect_tokens):
            words = strip_articles(phrase_tokens)
            if len(words) > 1:
                pronoun = next((t for t in words if t.category is WordCategory.PRONOUN), None)
                if pronoun is not None:
                    return self._fail(ParseErrorKind.INVALID_SYNTAX, "pronoun-in-phrase",
                                      pronoun.text, pronoun.position)

        indirect_words = strip_articles(indirect_tokens)
        if len(indirect_words) == 1 and indirect_words[0].canonical in ALL_WORDS:
            return self._fail(ParseErrorKind.INVALID_SYNTAX, "plural-indirect-object",
                              indirect_words[0].text, indirect_words[0].position)
        return None

    def _resolve_phrase(self, phrase: NounPhrase, reachable: List, pronouns: PronounContext):
        """Resolve one phrase without touching any state."""
        position = phrase.tokens[0].position
        pronoun = phrase.pronoun
        if pronoun is not None:
            return self._resolve_pronoun(pronoun, phrase, reachable, pronouns)

        # Evaluate every reachable object before deciding
        candidates = [obj for obj in reachable if object_matches(obj, phrase.tokens)]
        parser_logger.debug(f"Phrase '{phrase.text}': {len(candidates)} candidate(s)")

        if not candidates:
            return ParseError(ParseErrorKind.OBJECT_NOT_FOUND, "not-reachable", phrase.text, position)
        if len(candidates) > 1:
            return ParseError(ParseErrorKind.AMBIGUOUS, "ambiguous", phrase.text, position,
                              candidates=tuple(candidates))
        return PhraseResolution((candidates[0].id,), phrase.text, PronounKind.SINGULAR)

    def _resolve_pronoun(self, pronoun: Token, phrase: NounPhrase, reachable, pronouns):
        position = pronoun.position
        if pronoun.canonical in ALL_WORDS:
            everything = tuple(obj.id for obj in reachable if not obj.is_scenery())
            if not everything:
                return ParseError(ParseErrorKind.OBJECT_NOT_FOUND, "nothing-reachable", phrase.text, position)
            return PhraseResolution(everything, phrase.text, PronounKind.PLURAL, is_all=True)

        kind = PRONOUN_KINDS.get(pronoun.canonical)
        bound = pronouns.resolve(kind) if kind else None
        if not bound:
            return ParseError(ParseErrorKind.OBJECT_NOT_FOUND, "no-antecedent", phrase.text, position)

        reachable_ids = {obj.id for obj in reachable}
        present = tuple(object_id for object_id in bound if object_id in reachable_ids)
        if not present:
            return ParseError(ParseErrorKind.OBJECT_NOT_FOUND, "not-reachable", phrase.text, position)
        return PhraseResolution(present, phrase.text, kind)

    # --- results --------------------------------------------------------

    @staticmethod
    def _fail(kind, detail, word=None, position=None) -> ParseError:
        error = ParseError(kind, detail, word, position)
        parser_logger.info(f"Parse failed: {kind.value} ({detail}) word={word!r}")
        return error

    @staticmethod
    def _fail_with(error: ParseError) -> ParseError:
        parser_logger.info(
            f"Parse failed: {error.kind.value} ({error.detail}) word={error.word!r} "
            f"candidates={[c.id for c in error.candidates]}"
        )
        return error

    @staticmethod
    def _succeed(command: ParsedCommand) -> ParsedCommand:
        parser_logger.info(
            f"Parsed: {command.verb} direct={list(command.direct_objects)} "
            f"prep={command.preposition} indirect={command.indirect_object} direction={command.direction}"
        )
        return command
