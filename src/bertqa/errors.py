"""
Error types for question answering. Every error raised by the package derives from QAError.
"""
from typing import Optional


class QAError(Exception):
    """Base class for question answering failures."""


class EmptyInputError(QAError):
    """Question or context is empty."""

    def __init__(self, message: str = "Question and context cannot be empty"):
        super().__init__(message)


class EncodingError(QAError):
    """Sequence length cannot hold the structural tokens ([CLS], [SEP], [SEP])."""


class InferenceError(QAError):
    """Failure on the model path. stage is one of "encode", "predict", "decode"."""

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage


class NoAnswerFoundError(QAError):
    """The decoder found no valid span inside the context."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "No answer found in context")
