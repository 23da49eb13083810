# errors.py - exceptions raised by the study core


class StudyError(Exception):
    """Base class for all study failures."""


class ConsentRequired(StudyError):
    """Raised when the participant has not signed the consent form with a name."""

    def __init__(self, message: str = "Please sign the consent form with your name before continuing."):
        super().__init__(message)


class InsufficientCorpus(StudyError):
    """Raised when a block needs more phrases than the corpus holds."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"need {required} distinct phrases per block but the corpus only has {available}"
        )


class StudyStateError(StudyError):
    """Raised on an illegal state transition, e.g. starting a study twice."""


class ExportError(StudyError):
    """Raised when a delivery sink fails to accept a payload."""
