# tests/test_corpus.py
from text_entry_study.corpus import DEFAULT_PHRASES, load_phrases, parse_phrases


def test_bundled_phrases_fill_two_blocks():
    phrases = load_phrases()
    assert DEFAULT_PHRASES.exists()
    assert len(phrases) >= 40
    assert len(set(phrases)) == len(phrases)
    assert all(p and not p.startswith("#") for p in phrases)


def test_parse_skips_comments_blanks_and_duplicates():
    text = "# header\nthe cat sat\n\n  the   cat sat \nrain rain go away\n"
    assert parse_phrases(text) == ["the cat sat", "rain rain go away"]


def test_load_from_custom_file(tmp_path):
    path = tmp_path / "mine.txt"
    path.write_text("one two\nthree four\n", encoding="utf-8")
    assert load_phrases(path) == ["one two", "three four"]
    assert load_phrases(str(path)) == ["one two", "three four"]
