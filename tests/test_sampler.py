# tests/test_sampler.py
import random
from collections import Counter

import pytest

from text_entry_study.core.errors import InsufficientCorpus
from text_entry_study.core.sampler import sample_phrases


def test_sample_is_distinct_subset(corpus, rng):
    out = sample_phrases(corpus, 20, rng)
    assert len(out) == 20
    assert len(set(out)) == 20
    assert all(p in corpus for p in out)


def test_sample_leaves_corpus_untouched(corpus, rng):
    before = list(corpus)
    sample_phrases(corpus, 20, rng)
    assert corpus == before


def test_whole_corpus_is_a_permutation(corpus, rng):
    out = sample_phrases(corpus, len(corpus), rng)
    assert sorted(out) == sorted(corpus)


def test_zero_sample():
    assert sample_phrases(["a", "b"], 0) == []


def test_too_few_phrases_raises():
    with pytest.raises(InsufficientCorpus) as err:
        sample_phrases(["only", "three", "phrases"], 20)
    assert err.value.required == 20
    assert err.value.available == 3


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        sample_phrases(["a"], -1)


def test_same_seed_same_sample(corpus):
    assert sample_phrases(corpus, 20, random.Random(7)) == sample_phrases(corpus, 20, random.Random(7))


def test_selection_frequency_is_uniform():
    # 40 items, pick 20: each item expected in half of the draws
    pool = list(range(40))
    rng = random.Random(99)
    draws = 4000
    counts = Counter()
    for _ in range(draws):
        counts.update(sample_phrases(pool, 20, rng))
    expected = draws * 20 / 40
    for item in pool:
        # binomial sd here is ~32, allow ~6 sd
        assert abs(counts[item] - expected) < 200, (item, counts[item])


def test_first_position_is_uniform():
    pool = list(range(5))
    rng = random.Random(3)
    firsts = Counter(sample_phrases(pool, 2, rng)[0] for _ in range(5000))
    for item in pool:
        assert 850 < firsts[item] < 1150
