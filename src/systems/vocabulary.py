"""
Vocabulary Table
Maps each known spelling to exactly one grammatical category and a
canonical (synonym-resolved) form.

The table is an immutable value built once at startup and passed by
reference into every parse. Extending it (e.g. with the nouns of a loaded
world) returns a new table.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from core.command_registry import COMMAND_REGISTRY
from core.grammar import Token, WordCategory


# Direction keywords: canonical -> spellings
DIRECTIONS = {
    "NORTH": ["N"],
    "SOUTH": ["S"],
    "EAST": ["E"],
    "WEST": ["W"],
    "NORTHEAST": ["NE"],
    "NORTHWEST": ["NW"],
    "SOUTHEAST": ["SE"],
    "SOUTHWEST": ["SW"],
    "UP": ["U", "UPWARD", "UPSTAIRS"],
    "DOWN": ["D", "DOWNWARD", "DOWNSTAIRS"],
    "OUT": ["OUTSIDE", "LEAVE"],
}

PREPOSITIONS = {
    "WITH": ["USING"],
    "IN": ["INSIDE", "INTO"],
    "ON": ["ONTO", "UPON"],
    "UNDER": ["UNDERNEATH", "BENEATH", "BELOW"],
    "THROUGH": ["THRU"],
    "AT": [],
    "TO": [],
    "FROM": [],
    "FOR": [],
    "ABOUT": [],
    "OFF": [],
    "OVER": [],
    "BEHIND": [],
    "ACROSS": [],
    "AROUND": [],
    "AGAINST": [],
    "BETWEEN": [],
}

ARTICLES = ["THE", "A", "AN", "SOME"]

PRONOUNS = {
    "IT": [],
    "THEM": ["THOSE"],
    "ALL": ["EVERYTHING"],
}

# Category registration order. The first registration of a spelling wins.
CATEGORY_PRIORITY = (
    WordCategory.VERB,
    WordCategory.DIRECTION,
    WordCategory.PREPOSITION,
    WordCategory.ARTICLE,
    WordCategory.PRONOUN,
    WordCategory.NOUN,
    WordCategory.ADJECTIVE,
)


@dataclass(frozen=True)
class VocabularyEntry:
    word: str
    category: WordCategory
    canonical: str


def _normalize(word: str) -> str:
    return word.strip().upper()


class VocabularyTable:
    """Immutable word table.

    Use :meth:`default` for the built-in vocabulary and :meth:`extended` to
    derive a table that also knows a world's nouns and adjectives.
    """

    def __init__(self, entries: Mapping[str, VocabularyEntry], verbatim_verbs: Iterable[str] = ()):
        self._entries = MappingProxyType(dict(entries))
        self._verbatim = frozenset(_normalize(v) for v in verbatim_verbs)

    # --- construction -------------------------------------------------

    @classmethod
    def build(cls, groups: Mapping[WordCategory, Mapping[str, Iterable[str]]],
              verbatim_verbs: Iterable[str] = ()) -> "VocabularyTable":
        """Build a table from ``{category: {canonical: [synonyms]}}`` groups."""
        entries: Dict[str, VocabularyEntry] = {}
        for category in CATEGORY_PRIORITY:
            for canonical, synonyms in groups.get(category, {}).items():
                _register_group(entries, category, canonical, synonyms)
        return cls(entries, verbatim_verbs)

    @classmethod
    def default(cls) -> "VocabularyTable":
        """The built-in vocabulary: registry verbs, directions and function words."""
        verbs = {cmd.name: list(cmd.aliases) for cmd in COMMAND_REGISTRY}
        verbatim = [cmd.name for cmd in COMMAND_REGISTRY if cmd.verbatim]
        return cls.build({
            WordCategory.VERB: verbs,
            WordCategory.DIRECTION: DIRECTIONS,
            WordCategory.PREPOSITION: PREPOSITIONS,
            WordCategory.ARTICLE: {a: [] for a in ARTICLES},
            WordCategory.PRONOUN: PRONOUNS,
        }, verbatim_verbs=verbatim)

    def extended(self, nouns: Optional[Mapping[str, Iterable[str]]] = None,
                 adjectives: Optional[Iterable[str]] = None,
                 verbs: Optional[Mapping[str, Iterable[str]]] = None,
                 verbatim_verbs: Iterable[str] = ()) -> "VocabularyTable":
        """Return a new table with extra words; existing spellings keep their entry."""
        entries = dict(self._entries)
        for canonical, synonyms in (verbs or {}).items():
            _register_group(entries, WordCategory.VERB, canonical, synonyms)
        for canonical, synonyms in (nouns or {}).items():
            _register_group(entries, WordCategory.NOUN, canonical, synonyms)
        for adjective in adjectives or ():
            _register_group(entries, WordCategory.ADJECTIVE, adjective, ())
        return VocabularyTable(entries, set(self._verbatim) | {_normalize(v) for v in verbatim_verbs})

    # --- queries ------------------------------------------------------

    def classify(self, word: str) -> WordCategory:
        entry = self._entries.get(_normalize(word))
        return entry.category if entry else WordCategory.UNKNOWN

    def expand(self, word: str) -> str:
        """Canonical form of ``word``; unknown words come back upper-cased."""
        key = _normalize(word)
        entry = self._entries.get(key)
        return entry.canonical if entry else key

    def has_word(self, word: str) -> bool:
        return _normalize(word) in self._entries

    def is_verbatim_verb(self, word: str) -> bool:
        key = _normalize(word)
        entry = self._entries.get(key)
        if not entry or entry.category is not WordCategory.VERB:
            return False
        return entry.canonical in self._verbatim

    def token(self, word: str, position: int = 0) -> Token:
        """Classify one word into an immutable Token."""
        entry = self._entries.get(_normalize(word))
        if entry is None:
            return Token(word, WordCategory.UNKNOWN, _normalize(word), position)
        return Token(word, entry.category, entry.canonical, position)

    def classify_words(self, words: Iterable[str]) -> Tuple[Token, ...]:
        return tuple(self.token(word, i) for i, word in enumerate(words))

    def words(self, category: Optional[WordCategory] = None):
        """Known spellings, optionally limited to one category."""
        if category is None:
            return sorted(self._entries)
        return sorted(w for w, e in self._entries.items() if e.category is category)

    @property
    def verbatim_verbs(self) -> frozenset:
        return self._verbatim

    def __len__(self):
        return len(self._entries)

    def __contains__(self, word):
        return self.has_word(word)


def _register_group(entries: Dict[str, VocabularyEntry], category: WordCategory,
                    canonical: str, synonyms: Iterable[str]) -> None:
    """Register a canonical word and its synonyms, collapsing canonical chains."""
    canonical = _normalize(canonical)
    if not canonical:
        return
    existing = entries.get(canonical)
    if existing is None:
        entries[canonical] = VocabularyEntry(canonical, category, canonical)
        target = canonical
    elif existing.category is category:
        target = existing.canonical
    else:
        # Spelling owned by another category; synonyms stand on their own
        target = None
    for synonym in synonyms:
        key = _normalize(synonym)
        if key and key not in entries:
            entries[key] = VocabularyEntry(key, category, target or key)
