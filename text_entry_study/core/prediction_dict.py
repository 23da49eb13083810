# prediction_dict.py
# Prefix dictionary for predictive typing.
# Built fresh per block from that block's sampled phrases only, so suggestions
# never leak words from the rest of the corpus.

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

Word = str
Candidates = Tuple[Word, ...]

_NON_LETTER = re.compile(r"[^a-z]")
_WHITESPACE = re.compile(r"\s+")


def clean_word(token: str) -> str:
    """Lowercase a token and drop every character outside a-z."""
    return _NON_LETTER.sub("", token.lower())


class PredictionDictionary(Mapping[str, Candidates]):
    """
    Read-only mapping prefix -> candidate words.
    Candidates keep first-occurrence order: across phrases first, then across
    words within a phrase. Every candidate under a key starts with that key.
    """

    __slots__ = ("_table", "_words")

    def __init__(self, table: Dict[str, Candidates], words: Candidates = ()) -> None:
        self._table = table
        self._words = words

    # Mapping protocol -----------------------------------------------------
    def __getitem__(self, prefix: str) -> Candidates:
        return self._table[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"PredictionDictionary({len(self._table)} prefixes)"

    # lookup ---------------------------------------------------------------
    def lookup(self, prefix: str, limit: int = 9) -> List[Word]:
        """
        Case-insensitive lookup. Unknown or empty prefixes give [].
        The prefix is only lowercased, so "dog," finds nothing.
        """
        if not prefix or limit <= 0:
            return []
        return list(self._table.get(prefix.lower(), ())[:limit])

    def vocabulary(self) -> List[Word]:
        """Distinct words in first-occurrence order."""
        return list(self._words)


def build_prediction_dict(phrases: Iterable[str]) -> PredictionDictionary:
    """
    Register every cleaned word under each of its prefixes (length 1..L).
    Pure and deterministic: the same phrase sequence gives an identical mapping,
    candidate order included.
    """
    # dict keys double as an insertion-ordered set
    table: Dict[str, Dict[Word, None]] = {}
    words: Dict[Word, None] = {}
    for phrase in phrases:
        for token in _WHITESPACE.split(phrase):
            word = clean_word(token)
            if not word:
                continue
            words[word] = None
            for i in range(1, len(word) + 1):
                table.setdefault(word[:i], {})[word] = None

    return PredictionDictionary(
        {k: tuple(v) for k, v in table.items()}, tuple(words)
    )
