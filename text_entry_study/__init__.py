# text_entry_study - within-subject text entry study: QWERTY-only vs predictive typing

from text_entry_study.core.study import StudySession
from text_entry_study.core.sequencer import Mode

__all__ = ["StudySession", "Mode"]

__version__ = "0.1.0"
