# sequencer.py
# Trial Sequencer: the state machine driving blocks and trials.
# AWAITING_CONSENT -> BLOCK_INTRO -> TRIAL -> BLOCK_COMPLETE -> (BLOCK_INTRO | FINISHED)
# No transition goes backwards and there is no pause/resume.

from __future__ import annotations

import random
import time
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from .errors import StudyStateError
from .event_log import BlockComplete, EventLog
from .prediction_dict import PredictionDictionary, build_prediction_dict
from .sampler import sample_phrases
from text_entry_study.utils.logger_utils import Log, log as default_log

Scheduler = Callable[[float, Callable[[], None]], Any]
Clock = Callable[[], int]


class Mode(str, Enum):
    QWERTY = "qwerty"
    PREDICTIVE = "predictive"

    def other(self) -> "Mode":
        return Mode.PREDICTIVE if self is Mode.QWERTY else Mode.QWERTY


class Phase(str, Enum):
    AWAITING_CONSENT = "awaiting_consent"
    BLOCK_INTRO = "block_intro"
    TRIAL = "trial"
    BLOCK_COMPLETE = "block_complete"
    FINISHED = "finished"


def run_immediately(delay: float, callback: Callable[[], None]) -> None:
    """Default scheduler: pacing delays are cosmetic, so just continue."""
    callback()


def epoch_ms() -> int:
    return int(time.time() * 1000)


def block_order(first: Union[Mode, str]) -> Tuple[Mode, Mode]:
    """Counter-balanced order: the chosen mode, then the other one."""
    first = Mode(first)
    return (first, first.other())


class TrialSequencer:
    """
    Owns block order, block/trial indices, the active block's phrases and
    prediction dictionary, and moves between phases.

    Host callbacks:
     - on_message(text): transition/phrase text for display
     - on_trial_start(index, phrase): a new trial is ready for input
     - on_finished(): fired once after the last block completes
    """

    def __init__(
        self,
        corpus: Sequence[str],
        event_log: EventLog,
        *,
        phrases_per_block: int = 20,
        practice_trials: int = 5,
        intro_delay: float = 1.0,
        transition_delay: float = 2.0,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        on_message: Optional[Callable[[str], None]] = None,
        on_trial_start: Optional[Callable[[int, str], None]] = None,
        on_finished: Optional[Callable[[], None]] = None,
        logger: Optional[Log] = None,
    ) -> None:
        self.corpus = list(corpus)
        self.event_log = event_log
        self.phrases_per_block = phrases_per_block
        self.practice_trials = practice_trials
        self.intro_delay = intro_delay
        self.transition_delay = transition_delay
        self.schedule = scheduler or run_immediately
        self.rng = rng or random.Random()
        self.clock = clock or epoch_ms
        self.on_message = on_message
        self.on_trial_start = on_trial_start
        self.on_finished = on_finished
        self.log = logger or default_log

        self.phase = Phase.AWAITING_CONSENT
        self.order: Tuple[Mode, ...] = ()
        self.block_index = 0
        self.trial_index = 0
        self.phrases: List[str] = []
        self.dictionary = PredictionDictionary({})
        self.message = ""

    # state queries -----------------------------------------------------------
    @property
    def active_mode(self) -> Optional[Mode]:
        if not self.order or self.block_index >= len(self.order):
            return None
        return self.order[self.block_index]

    @property
    def in_trial(self) -> bool:
        return self.phase is Phase.TRIAL

    @property
    def finished(self) -> bool:
        return self.phase is Phase.FINISHED

    @property
    def current_phrase(self) -> Optional[str]:
        if not self.in_trial:
            return None
        return self.phrases[self.trial_index]

    @property
    def trial_number(self) -> int:
        """1-based trial number used in log events."""
        return self.trial_index + 1

    def trial_label(self, index: Optional[int] = None) -> str:
        index = self.trial_index if index is None else index
        return "Practice" if index < self.practice_trials else "Test"

    # transitions -------------------------------------------------------------
    def start(self, first: Union[Mode, str]) -> None:
        """Fix the block order and open the first block."""
        if self.phase is not Phase.AWAITING_CONSENT:
            raise StudyStateError(f"study already started (phase={self.phase.value})")
        self.order = block_order(first)
        self.log.info(f"[Sequencer] block order: {', '.join(m.value for m in self.order)}")
        self._start_block()

    def advance(self) -> None:
        """Called after a submission: move on to the next trial or close the block."""
        if not self.in_trial:
            raise StudyStateError(f"no trial running (phase={self.phase.value})")
        self.trial_index += 1
        self._next_trial()

    def _start_block(self) -> None:
        mode = self.active_mode
        self.phase = Phase.BLOCK_INTRO
        with self.log.time_block(f"[Sequencer] prepare {mode.value} block"):
            self.phrases = sample_phrases(self.corpus, self.phrases_per_block, self.rng)
            self.dictionary = build_prediction_dict(self.phrases)
        self.log.info(
            f"[Sequencer] {mode.value} block: {len(self.phrases)} phrases, "
            f"{len(self.dictionary.vocabulary())} distinct words"
        )
        self.trial_index = 0
        self._announce(f"Starting {mode.value.upper()} block...")
        self.schedule(self.intro_delay, self._next_trial)

    def _next_trial(self) -> None:
        if self.trial_index >= len(self.phrases):
            self._complete_block()
            return

        self.phase = Phase.TRIAL
        phrase = self.phrases[self.trial_index]
        self._announce(
            f"[{self.trial_label()} {self.trial_number}/{len(self.phrases)}] → {phrase}"
        )
        if self.on_trial_start:
            self.on_trial_start(self.trial_index, phrase)

    def _complete_block(self) -> None:
        mode = self.active_mode
        self.phase = Phase.BLOCK_COMPLETE
        self.event_log.append(BlockComplete(block=mode.value, timestamp=self.clock()))
        self.log.info(f"[Sequencer] block {self.block_index + 1} ({mode.value}) complete")

        self.block_index += 1
        if self.block_index >= len(self.order):
            self.phase = Phase.FINISHED
            self._announce("All blocks complete. Thank you!")
            if self.on_finished:
                self.on_finished()
            return

        self._announce(f"Now begin the second block: {self.active_mode.value.upper()}")
        self.schedule(self.transition_delay, self._start_block)

    def _announce(self, text: str) -> None:
        self.message = text
        if self.on_message:
            self.on_message(text)
