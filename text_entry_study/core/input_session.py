# input_session.py
# Tracks the word being typed, serves suggestions and applies selections.
# Writes prediction/submission events to the log; never judges what was typed.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .event_log import EventLog, Prediction, Submission
from .sequencer import Clock, Mode, TrialSequencer, epoch_ms
from text_entry_study.utils.logger_utils import Log, log as default_log

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Selection:
    """Result of applying a suggestion: the new buffer and where the cursor goes."""

    text: str
    cursor: int
    word: str


def word_before_cursor(text: str, cursor: int) -> str:
    """Maximal whitespace-delimited token ending at the cursor ("" right after a space)."""
    return _WHITESPACE.split(text[:cursor])[-1]


class InputSession:
    """
    Per-trial text buffer state.
    Public API:
      edit(text, cursor)
      suggestions(word=None)
      select(digit) -> Optional[Selection]
      submit(text=None) -> Optional[Submission]
      reset()
    """

    def __init__(
        self,
        sequencer: TrialSequencer,
        event_log: EventLog,
        *,
        max_suggestions: int = 9,
        clock: Optional[Clock] = None,
        logger: Optional[Log] = None,
    ) -> None:
        self.sequencer = sequencer
        self.event_log = event_log
        self.max_suggestions = max_suggestions
        self.clock = clock or epoch_ms
        self.log = logger or default_log

        self.text = ""
        self.cursor = 0
        self.current_word = ""
        self.trial_started_at = self.clock()

    def reset(self) -> None:
        """Clear the buffer and restart the trial timer."""
        self.text = ""
        self.cursor = 0
        self.current_word = ""
        self.trial_started_at = self.clock()

    # editing -----------------------------------------------------------------
    def edit(self, text: str, cursor: Optional[int] = None) -> str:
        """Record the latest buffer contents; cursor defaults to end of text."""
        if cursor is None:
            cursor = len(text)
        self.text = text
        self.cursor = max(0, min(cursor, len(text)))
        self.current_word = word_before_cursor(self.text, self.cursor)
        return self.current_word

    def suggestions(self, word: Optional[str] = None) -> List[str]:
        """Up to max_suggestions candidates for the word; empty outside predictive trials."""
        seq = self.sequencer
        if not seq.in_trial or seq.active_mode is not Mode.PREDICTIVE:
            return []
        word = self.current_word if word is None else word
        return seq.dictionary.lookup(word, self.max_suggestions)

    # selection ---------------------------------------------------------------
    def select(self, digit: int) -> Optional[Selection]:
        """
        Digit 1-9 picks suggestion d-1. Without a candidate there this is a no-op
        and nothing is logged.
        """
        try:
            index = int(digit) - 1
        except (TypeError, ValueError):
            return None
        if not 0 <= index < self.max_suggestions:
            return None

        options = self.suggestions()
        if index >= len(options):
            return None
        chosen = options[index]
        typed = self.current_word

        start = self.cursor - len(typed)
        self.text = self.text[:start] + chosen + " " + self.text[self.cursor:]
        self.cursor = start + len(chosen) + 1
        self.current_word = ""

        seq = self.sequencer
        self.event_log.append(
            Prediction(
                method=seq.active_mode.value,
                input=typed,
                selected=chosen,
                phrase=seq.current_phrase,
                trial=seq.trial_number,
                timestamp=self.clock(),
            )
        )
        self.log.debug(f"[Input] trial {seq.trial_number}: '{typed}' -> '{chosen}'")
        return Selection(text=self.text, cursor=self.cursor, word=chosen)

    # submission --------------------------------------------------------------
    def submit(self, text: Optional[str] = None) -> Optional[Submission]:
        """
        Commit the buffer for the running trial (whether or not a word is
        mid-composition) and advance the sequencer. Ignored outside a trial.
        """
        seq = self.sequencer
        if not seq.in_trial:
            self.log.warning(f"[Input] submit ignored (phase={seq.phase.value})")
            return None
        if text is not None:
            self.edit(text)

        event = Submission(
            method=seq.active_mode.value,
            entered=self.text.strip(),
            target=seq.current_phrase,
            trial=seq.trial_number,
            time_taken_ms=self.clock() - self.trial_started_at,
        )
        self.event_log.append(event)
        self.log.debug(f"[Input] trial {seq.trial_number} submitted in {event.time_taken_ms}ms")
        seq.advance()
        return event
