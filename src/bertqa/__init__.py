"""
Extractive question answering over a short passage, with a keyword/regex fallback
when no fine-tuned QA model is available.
"""
from .errors import EmptyInputError, EncodingError, InferenceError, NoAnswerFoundError, QAError
from .heuristics import HeuristicExtractor, QuestionType, classify_question
from .service import AnswerResult, QAService
from .vocabulary import EncodedSequence, Vocabulary

__version__ = "0.1.0"

__all__ = [
    "AnswerResult",
    "EmptyInputError",
    "EncodedSequence",
    "EncodingError",
    "HeuristicExtractor",
    "InferenceError",
    "NoAnswerFoundError",
    "QAError",
    "QAService",
    "QuestionType",
    "Vocabulary",
    "classify_question",
]
