# study.py
"""
StudySession - the explicit context for one participant's run.

Owns everything that changes during a study (participant, consent record,
event log, sequencer, input session) so several sessions can live side by
side, e.g. in tests. Front ends talk to this class only:
    try_start(name, first_mode), start(first_mode)
    edit(text, cursor), press_digit(d), commit(text=None)
    display, suggestions, input_enabled, finished
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Union

from .errors import ConsentRequired, InsufficientCorpus, StudyStateError
from .event_log import EventLog, Submission
from .input_session import InputSession, Selection
from .sequencer import Clock, Mode, Phase, Scheduler, TrialSequencer
from text_entry_study.export import ConsentRecord, DirectorySink, Exporter, Sink
from text_entry_study.utils.config_manager import Config
from text_entry_study.utils.logger_utils import Log, log as default_log


class StudySession:
    def __init__(
        self,
        corpus: Sequence[str],
        config: Optional[Config] = None,
        *,
        consent_sink: Optional[Sink] = None,
        log_sink: Optional[Sink] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        now: Optional[Callable[[], datetime]] = None,
        on_message: Optional[Callable[[str], None]] = None,
        logger: Optional[Log] = None,
    ) -> None:
        self.cfg = config or Config()
        self.log = logger or default_log
        self.corpus = list(corpus)
        self.now = now or (lambda: datetime.now(timezone.utc))
        self.on_message = on_message

        consent_sink = consent_sink or DirectorySink(self.cfg["export_dir"])
        self.exporter = Exporter(
            consent_sink,
            log_sink or consent_sink,
            legacy_schema=self.cfg["legacy_csv_schema"],
            logger=self.log,
        )

        self.participant = ""
        self.consent: Optional[ConsentRecord] = None
        self.event_log = EventLog()
        self.exported_as: Optional[str] = None

        self.sequencer = TrialSequencer(
            self.corpus,
            self.event_log,
            phrases_per_block=self.cfg["phrases_per_block"],
            practice_trials=self.cfg["practice_trials"],
            intro_delay=self.cfg["intro_delay"],
            transition_delay=self.cfg["transition_delay"],
            scheduler=scheduler,
            rng=rng,
            clock=clock,
            on_message=self._relay_message,
            on_trial_start=self._on_trial_start,
            on_finished=self._on_finished,
            logger=self.log,
        )
        self.input = InputSession(
            self.sequencer,
            self.event_log,
            max_suggestions=self.cfg["max_suggestions"],
            clock=clock,
            logger=self.log,
        )

    # entry points ----------------------------------------------------------------
    def try_start(self, name: str, first: Union[Mode, str]) -> None:
        """
        Sign consent and start. A blank name raises ConsentRequired and a corpus
        too small for one block raises InsufficientCorpus; neither touches state.
        """
        name = (name or "").strip()
        if not name:
            raise ConsentRequired()
        if self.started:
            raise StudyStateError("study already started")
        first = Mode(first)
        needed = self.cfg["phrases_per_block"]
        if len(self.corpus) < needed:
            raise InsufficientCorpus(required=needed, available=len(self.corpus))

        record = ConsentRecord.sign(name, self.now())
        self.exporter.export_consent(record)
        self.participant = name
        self.consent = record
        self.log.info(f"[Study] consent signed by '{name}' at {record.timestamp}")
        self.start(first)

    def start(self, first: Union[Mode, str]) -> None:
        self.sequencer.start(first)

    # input boundary --------------------------------------------------------------
    def edit(self, text: str, cursor: Optional[int] = None) -> List[str]:
        """Buffer changed: returns the suggestions to show."""
        if not self.input_enabled:
            return []
        self.input.edit(text, cursor)
        return self.input.suggestions()

    def press_digit(self, digit: int) -> Optional[Selection]:
        if not self.input_enabled:
            return None
        return self.input.select(digit)

    def commit(self, text: Optional[str] = None) -> Optional[Submission]:
        if not self.input_enabled:
            return None
        return self.input.submit(text)

    # state -----------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self.sequencer.phase

    @property
    def started(self) -> bool:
        return self.sequencer.phase is not Phase.AWAITING_CONSENT

    @property
    def finished(self) -> bool:
        return self.sequencer.finished

    @property
    def input_enabled(self) -> bool:
        return self.started and not self.finished

    @property
    def display(self) -> str:
        return self.sequencer.message

    @property
    def suggestions(self) -> List[str]:
        return self.input.suggestions()

    @property
    def active_mode(self) -> Optional[Mode]:
        return self.sequencer.active_mode

    # sequencer hooks -------------------------------------------------------------
    def _relay_message(self, text: str) -> None:
        if self.on_message:
            self.on_message(text)

    def _on_trial_start(self, index: int, phrase: str) -> None:
        self.input.reset()

    def _on_finished(self) -> None:
        if self.exported_as is not None:
            return
        # at most one export, even when delivery fails
        self.exported_as = ""
        self.exported_as = self.exporter.export_log(self.participant, self.event_log.rows())
        self.log.info(f"[Study] finished: {self.event_log.stats()}")
