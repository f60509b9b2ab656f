"""
Question answering service: runs the QA model when one is loaded, otherwise the
keyword extractor (demo mode). Work runs on a thread pool; every call returns a
Future that resolves to an AnswerResult and never raises.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from .decoder import decode_span
from .errors import EmptyInputError, InferenceError, NoAnswerFoundError, QAError
from .heuristics import HeuristicExtractor
from .settings import Settings
from .vocabulary import DEFAULT_MAX_LENGTH, END_LOGITS_FIELD, START_LOGITS_FIELD, Vocabulary

logger = logging.getLogger(__name__)

MODEL_MODE = "model"
DEMO_MODE = "demo"


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of one answer call: either answer or error is set."""
    question: str
    context: str
    answer: Optional[str] = None
    error: Optional[QAError] = None
    mode: str = DEMO_MODE
    score: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the answer or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.answer


def load_vocabulary(settings: Settings) -> Vocabulary:
    """vocab_path, else <model_path>/vocab.txt, else the built-in demo vocabulary."""
    vocab_path = settings.resolved_vocab_path()
    if vocab_path:
        return Vocabulary.from_file(vocab_path)
    if settings.model_path:
        logger.warning(
            "No vocab.txt in %s and QA_VOCAB_PATH is unset: encoding with the demo vocabulary, "
            "model token ids will not match",
            settings.model_path,
        )
    return Vocabulary.default()


class QAService:
    """Answers questions about a context with a QA model, or heuristics when no model is loaded."""

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        model=None,
        extractor: Optional[HeuristicExtractor] = None,
        max_seq_length: int = DEFAULT_MAX_LENGTH,
        max_answer_length: Optional[int] = 30,
        workers: int = 2,
    ):
        """
        vocabulary: used to encode inputs for the model. Defaults to the built-in demo vocabulary.
        model: QAModel callable, or None for demo mode.
        Raises EncodingError if max_seq_length cannot hold [CLS] [SEP] [SEP].
        """
        self.vocabulary = vocabulary or Vocabulary.default()
        self.model = model
        self.extractor = extractor or HeuristicExtractor()
        self.max_seq_length = max_seq_length
        self.max_answer_length = max_answer_length or None
        # Fail at startup rather than on every call.
        self.vocabulary.encode_pair("", "", max_length=max_seq_length)

        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="qa-worker")
        self._lock = threading.Lock()
        self._in_flight = 0
        self._last_error: Optional[QAError] = None

        if self.model is None:
            logger.info("No QA model loaded, running in demo mode (keyword extraction)")
        else:
            logger.info("QA model active (max_seq_length=%d)", max_seq_length)

    @classmethod
    def from_settings(cls, settings: Settings) -> "QAService":
        """Build vocabulary and model from settings. Missing model path means demo mode."""
        vocabulary = load_vocabulary(settings)
        model = None
        if settings.model_path:
            from .model import load_model
            model = load_model(settings.model_path, device=settings.device)
        return cls(
            vocabulary=vocabulary,
            model=model,
            max_seq_length=settings.max_seq_length,
            max_answer_length=settings.max_answer_length,
            workers=settings.workers,
        )

    @property
    def mode(self) -> str:
        return DEMO_MODE if self.model is None else MODEL_MODE

    @property
    def status(self) -> str:
        if self.model is None:
            return "Demo Mode (Smart Extraction)"
        return "QA Model Active"

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    @property
    def last_error(self) -> Optional[QAError]:
        with self._lock:
            return self._last_error

    def answer(
        self,
        question: str,
        context: str,
        on_complete: Optional[Callable[[AnswerResult], None]] = None,
    ) -> "Future[AnswerResult]":
        """
        Answer question from context in the background.
        Empty input resolves immediately with EmptyInputError without touching the worker pool.
        on_complete, if given, is called with the result on the worker thread.
        """
        if not question or not question.strip() or not context or not context.strip():
            result = AnswerResult(question, context, error=EmptyInputError(), mode=self.mode)
            with self._lock:
                self._last_error = result.error
            future: Future = Future()
            future.set_result(result)
            if on_complete is not None:
                on_complete(result)
            return future

        with self._lock:
            self._in_flight += 1
            self._last_error = None
        return self._executor.submit(self._run, question, context, on_complete)

    def answer_sync(self, question: str, context: str) -> AnswerResult:
        return self.answer(question, context).result()

    def _run(
        self,
        question: str,
        context: str,
        on_complete: Optional[Callable[[AnswerResult], None]],
    ) -> AnswerResult:
        try:
            if self.model is None:
                result = AnswerResult(
                    question, context, answer=self.extractor.extract(question, context), mode=DEMO_MODE,
                )
            else:
                text, score = self._predict(question, context)
                result = AnswerResult(question, context, answer=text, mode=MODEL_MODE, score=score)
        except NoAnswerFoundError as exc:
            result = AnswerResult(question, context, error=exc, mode=self.mode)
        except QAError as exc:
            logger.exception("Answering failed")
            result = AnswerResult(question, context, error=exc, mode=self.mode)
        except Exception as exc:
            logger.exception("Extraction failed")
            error = InferenceError("extract", str(exc))
            error.__cause__ = exc
            result = AnswerResult(question, context, error=error, mode=self.mode)

        # is_processing and last_error change in one critical section
        with self._lock:
            self._in_flight -= 1
            if result.error is not None:
                self._last_error = result.error
        if on_complete is not None:
            on_complete(result)
        return result

    def _predict(self, question: str, context: str):
        try:
            encoded = self.vocabulary.encode_pair(question, context, max_length=self.max_seq_length)
        except Exception as exc:
            raise InferenceError("encode", str(exc)) from exc

        try:
            outputs = self.model(encoded.to_model_inputs())
            start_logits = outputs[START_LOGITS_FIELD]
            end_logits = outputs[END_LOGITS_FIELD]
        except Exception as exc:
            raise InferenceError("predict", str(exc)) from exc

        try:
            span = decode_span(
                start_logits, end_logits, encoded, context, max_answer_length=self.max_answer_length,
            )
        except NoAnswerFoundError:
            raise
        except Exception as exc:
            raise InferenceError("decode", str(exc)) from exc
        return span.text, span.score

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "QAService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
