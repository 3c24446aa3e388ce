"""
Command Tokenizer
Splits raw player text into words, with a literal escape for verbatim verbs
(SAY, ECHO...). Also offers fuzzy "did you mean" suggestions for the
renderer.
"""

import re
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Iterable, Optional, Tuple


# Letters/digits, allowing inner apostrophes and hyphens ("don't", "trap-door")
WORD_PATTERN = re.compile(r"[A-Za-z0-9]+(?:['\-][A-Za-z0-9]+)*")


@dataclass(frozen=True)
class TokenizedLine:
    """Raw words of one command line.

    ``literal`` is only set when the first word is a verbatim verb; it holds
    everything after that word exactly as typed.
    """
    words: Tuple[str, ...]
    literal: Optional[str] = None
    raw: str = ""

    def __bool__(self):
        return bool(self.words)


class CommandTokenizer:
    """
    Turns an input line into ordered words.

    The tokenizer knows nothing about categories; it only asks the
    vocabulary whether the first word is a verbatim verb.
    """

    def __init__(self, vocabulary):
        self.vocabulary = vocabulary

    def tokenize(self, raw_input: str) -> TokenizedLine:
        raw = (raw_input or "").strip()
        if not raw:
            return TokenizedLine(words=(), raw=raw)

        first = WORD_PATTERN.search(raw)
        if first and self.vocabulary.is_verbatim_verb(first.group(0)):
            rest = raw[first.end():].strip()
            return TokenizedLine(words=(first.group(0),), literal=rest or None, raw=raw)

        return TokenizedLine(words=tuple(WORD_PATTERN.findall(raw)), raw=raw)


def fuzzy_match(word: str, candidates: Iterable[str], threshold: float = 0.8) -> Optional[str]:
    """
    Find the closest known spelling for ``word``.
    Returns the best candidate above ``threshold`` or None.
    """
    word_upper = word.upper()
    best_match = None
    best_ratio = 0.0

    for candidate in candidates:
        ratio = SequenceMatcher(None, word_upper, candidate.upper()).ratio()
        # Short words need a near-exact match
        if len(word_upper) <= 3 and ratio < 0.9:
            continue
        if ratio > best_ratio:
            best_ratio = ratio
            best_match = candidate

    if best_ratio >= threshold:
        return best_match
    return None


def suggest_correction(word: str, vocabulary) -> Optional[str]:
    """Suggest a known word for an unknown one, e.g. 'lamb' -> 'LAMP'."""
    if not word:
        return None
    return fuzzy_match(word, vocabulary.words(), threshold=0.75)
