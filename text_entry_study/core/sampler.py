# sampler.py
# Draws a fixed size, duplicate free random subset of phrases from a corpus.

from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

from .errors import InsufficientCorpus

T = TypeVar("T")


def sample_phrases(
    corpus: Sequence[T], n: int, rng: Optional[random.Random] = None
) -> List[T]:
    """
    Return `n` distinct corpus positions drawn uniformly without replacement.

    Runs the first `n` steps of a Fisher-Yates shuffle over a copy of the corpus,
    so every ordered n-subset is equally likely. The corpus itself is not touched.
    Raises InsufficientCorpus when n exceeds the corpus size.
    """
    if n < 0:
        raise ValueError(f"sample size must be non-negative, got {n}")
    size = len(corpus)
    if n > size:
        raise InsufficientCorpus(required=n, available=size)

    rng = rng or random.Random()
    pool = list(corpus)
    for i in range(n):
        # j in [i, size - 1]
        j = rng.randint(i, size - 1)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:n]
