"""
Map start/end logits from a QA model back to an answer span in the context.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .errors import NoAnswerFoundError
from .vocabulary import EncodedSequence


@dataclass(frozen=True)
class AnswerSpan:
    """Best (start, end) token span, its score and the matching context text."""
    start: int
    end: int
    score: float
    start_char: int
    end_char: int
    text: str


def _as_vector(logits, length: int, name: str) -> np.ndarray:
    arr = np.asarray(logits, dtype=np.float64)
    # Accept (1, L) model output.
    if arr.ndim == 2 and arr.shape[0] == 1:
        arr = arr[0]
    if arr.ndim != 1 or arr.shape[0] != length:
        raise ValueError(f"{name} must have {length} positions, got shape {arr.shape}")
    return arr


def decode_span(
    start_logits: Sequence[float],
    end_logits: Sequence[float],
    encoded: EncodedSequence,
    context: str,
    max_answer_length: Optional[int] = None,
) -> AnswerSpan:
    """
    Pick start <= end maximising start_logits[start] + end_logits[end] over context positions
    (segment 1, attention 1, with a character offset), then cut the answer out of context.
    max_answer_length limits end - start + 1 when set.
    Raises NoAnswerFoundError when no valid position exists.
    """
    length = len(encoded)
    start_scores = _as_vector(start_logits, length, "start_logits")
    end_scores = _as_vector(end_logits, length, "end_logits")

    positions = np.asarray(encoded.context_positions(), dtype=np.int64)
    if positions.size == 0:
        raise NoAnswerFoundError()

    # scores[i, j]: span from positions[i] to positions[j]
    scores = start_scores[positions][:, None] + end_scores[positions][None, :]
    span_len = positions[None, :] - positions[:, None] + 1
    valid = span_len >= 1
    if max_answer_length:
        valid &= span_len <= max_answer_length
    scores = np.where(valid & np.isfinite(scores), scores, -np.inf)
    if not np.isfinite(scores).any():
        raise NoAnswerFoundError()

    i, j = np.unravel_index(np.argmax(scores), scores.shape)
    start, end = int(positions[i]), int(positions[j])
    start_char = encoded.offsets[start][0]
    end_char = encoded.offsets[end][1]
    return AnswerSpan(
        start=start,
        end=end,
        score=float(scores[i, j]),
        start_char=start_char,
        end_char=end_char,
        text=context[start_char:end_char].strip(),
    )
