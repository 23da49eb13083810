"""
text_entry_study.core

The study engine, independent of any front end.
Contains:
 - phrase sampling and per-block prediction dictionaries
 - the trial sequencer (block/trial state machine)
 - the input session (current word, suggestions, selections, submissions)
 - the append-only event log
 - StudySession (core.study), which ties them together for one participant
"""

from .errors import (
    StudyError,
    ConsentRequired,
    InsufficientCorpus,
    StudyStateError,
    ExportError,
)
from .sampler import sample_phrases
from .prediction_dict import PredictionDictionary, build_prediction_dict
from .event_log import EventLog, BlockComplete, Prediction, Submission
from .sequencer import Mode, Phase, TrialSequencer
from .input_session import InputSession, Selection

__all__ = [
    "StudyError",
    "ConsentRequired",
    "InsufficientCorpus",
    "StudyStateError",
    "ExportError",
    "sample_phrases",
    "PredictionDictionary",
    "build_prediction_dict",
    "EventLog",
    "BlockComplete",
    "Prediction",
    "Submission",
    "Mode",
    "Phase",
    "TrialSequencer",
    "InputSession",
    "Selection",
]
