"""Per-session pronoun bindings (IT / THEM)."""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class PronounKind(Enum):
    SINGULAR = "singular"
    PLURAL = "plural"


# Canonical pronoun word -> kind it refers back to
PRONOUN_KINDS = {
    "IT": PronounKind.SINGULAR,
    "THEM": PronounKind.PLURAL,
}

# Canonical words meaning "every reachable object"
ALL_WORDS = {"ALL"}


class PronounContext:
    """Most recent object ids bound to each pronoun kind.

    Owned by one session. Bindings are overwritten by the next successful
    reference and never expire on their own.
    """

    def __init__(self):
        self._bindings: Dict[PronounKind, Tuple[str, ...]] = {}

    def bind(self, kind: PronounKind, object_ids: Iterable[str]) -> None:
        ids = tuple(object_ids)
        if not ids:
            raise ValueError("Cannot bind a pronoun to nothing.")
        self._bindings[kind] = ids

    def resolve(self, kind: PronounKind) -> Optional[Tuple[str, ...]]:
        return self._bindings.get(kind)

    def to_dict(self):
        return {kind.value: list(ids) for kind, ids in self._bindings.items()}

    def __repr__(self):
        return f"PronounContext({self.to_dict()})"
