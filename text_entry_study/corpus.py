# text_entry_study/corpus.py
# Phrase corpus loading. One phrase per line, blank lines and '#' comments skipped.

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

DEFAULT_PHRASES = Path(__file__).parent / "data" / "phrases.txt"


def parse_phrases(text: str) -> List[str]:
    """Unique phrases in file order, whitespace collapsed."""
    seen = {}
    for line in text.splitlines():
        line = " ".join(line.split())
        if not line or line.startswith("#"):
            continue
        seen.setdefault(line, None)
    return list(seen)


def load_phrases(path: Optional[Union[str, Path]] = None) -> List[str]:
    path = Path(path) if path else DEFAULT_PHRASES
    return parse_phrases(path.read_text(encoding="utf-8"))
