"""
Rule-based answer extraction used when no QA model is loaded (demo mode).

The question is classified by its leading words, then a type-specific strategy
scans the context sentence by sentence. Nothing here raises: when a strategy finds
nothing it falls back to the first sentence, or to a fixed "not found" message
when the context has no sentences at all.
"""
import enum
import logging
import re
from typing import Callable, Dict, List, Optional

from .tokenizer import is_punctuation

logger = logging.getLogger(__name__)

MAX_PHRASE_WORDS = 15
MAX_LOCATION_WORDS = 5
DATE_WINDOW = 3

STOP_WORDS = frozenset([
    "what", "when", "where", "who", "which", "how", "is", "are", "was", "were",
    "the", "a", "an", "in", "on", "at", "to", "for", "of", "with", "by",
])

LOCATION_KEYWORDS = ["in ", "at ", "from ", "headquartered", "located", "based"]

_MONTHS = "January|February|March|April|May|June|July|August|September|October|November|December"
DATE_PATTERN = re.compile(
    r"\b\d{4}\b"
    r"|\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"
    r"|\b(?:" + _MONTHS + r")\s+\d{1,2},?\s+\d{4}\b"
)
NAME_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")
NUMBER_PATTERN = re.compile(
    r"\b\d+(?:,\d{3})*(?:\.\d+)?(?:\s*(?:million|billion|thousand|hundred))?\b"
)
_LOCATION_PATTERNS = [re.compile(re.escape(k), re.IGNORECASE) for k in LOCATION_KEYWORDS]
_SENTENCE_SPLIT = re.compile(r"[.!?]")
_LOCATION_CUT = re.compile(r"[.,;:]")
_APOSTROPHE = re.compile(r"['’]")


class QuestionType(enum.Enum):
    WHAT = "what"
    WHEN = "when"
    WHERE = "where"
    WHO = "who"
    HOW_MANY = "how-many"
    WHICH = "which"
    GENERIC = "generic"


NOT_FOUND = {
    QuestionType.WHAT: "Answer not found in context",
    QuestionType.WHEN: "Date not found in context",
    QuestionType.WHERE: "Location not found in context",
    QuestionType.WHO: "Person not found in context",
    QuestionType.HOW_MANY: "Number not found in context",
    QuestionType.WHICH: "Answer not found in context",
    QuestionType.GENERIC: "Answer not found in context",
}

_LEADING_WORDS = {
    "what": QuestionType.WHAT,
    "when": QuestionType.WHEN,
    "where": QuestionType.WHERE,
    "who": QuestionType.WHO,
    "which": QuestionType.WHICH,
}


def classify_question(question: str) -> QuestionType:
    """
    Map a question to its type by its leading words.
    "how many"/"how much" are checked first, then the first word against what/when/where/who/which.
    """
    q = question.strip().lower()
    if q.startswith("how many") or q.startswith("how much"):
        return QuestionType.HOW_MANY
    words = q.split()
    if not words:
        return QuestionType.GENERIC
    # "what's" -> "what"
    first = _APOSTROPHE.split(_strip_punctuation(words[0]), maxsplit=1)[0]
    return _LEADING_WORDS.get(first, QuestionType.GENERIC)


def split_sentences(context: str) -> List[str]:
    """Split at . ! ? and keep trimmed, non-empty pieces in order."""
    pieces = (piece.strip() for piece in _SENTENCE_SPLIT.split(context))
    return [piece for piece in pieces if piece]


def _strip_punctuation(word: str) -> str:
    start, end = 0, len(word)
    while start < end and is_punctuation(word[start]):
        start += 1
    while end > start and is_punctuation(word[end - 1]):
        end -= 1
    return word[start:end]


def extract_keywords(question: str) -> List[str]:
    """Lower-cased question words without surrounding punctuation, stop words or words of <= 2 chars."""
    keywords = []
    for word in question.split():
        word = _strip_punctuation(word).lower()
        if len(word) > 2 and word not in STOP_WORDS:
            keywords.append(word)
    return keywords


def short_phrase(text: str, max_words: int = MAX_PHRASE_WORDS) -> str:
    return " ".join(text.split()[:max_words])


def _first_sentence_phrase(sentences: List[str], qtype: QuestionType) -> str:
    if not sentences:
        return NOT_FOUND[qtype]
    return short_phrase(sentences[0])


def _best_keyword_sentence(question: str, sentences: List[str]) -> Optional[str]:
    keywords = extract_keywords(question)
    best, best_score = None, 0
    for sentence in sentences:
        lowered = sentence.lower()
        score = sum(1 for keyword in keywords if keyword in lowered)
        if score > best_score:
            best, best_score = sentence, score
    return best


def _extract_what(question: str, sentences: List[str]) -> Optional[str]:
    best = _best_keyword_sentence(question, sentences)
    return short_phrase(best) if best is not None else None


def _extract_when(question: str, sentences: List[str]) -> Optional[str]:
    for sentence in sentences:
        match = DATE_PATTERN.search(sentence)
        if match is None:
            continue
        date = match.group(0).lower()
        words = sentence.split()
        for i, word in enumerate(words):
            if date in word.lower():
                start = max(0, i - DATE_WINDOW)
                return " ".join(words[start:i + DATE_WINDOW + 1])
        return match.group(0)
    return None


def _extract_where(question: str, sentences: List[str]) -> Optional[str]:
    for sentence in sentences:
        for pattern in _LOCATION_PATTERNS:
            match = pattern.search(sentence)
            if match is None:
                continue
            words = sentence[match.end():].split()
            location = " ".join(words[:MAX_LOCATION_WORDS])
            return _LOCATION_CUT.split(location, maxsplit=1)[0]
    return None


def _extract_who(question: str, sentences: List[str]) -> Optional[str]:
    for sentence in sentences:
        match = NAME_PATTERN.search(sentence)
        if match:
            return match.group(0)
    return None


def _extract_how_many(question: str, sentences: List[str]) -> Optional[str]:
    for sentence in sentences:
        match = NUMBER_PATTERN.search(sentence)
        if match:
            return match.group(0)
    return None


def _extract_which(question: str, sentences: List[str]) -> Optional[str]:
    # No dedicated rule for "which": always the first sentence.
    return None


Strategy = Callable[[str, List[str]], Optional[str]]

STRATEGIES: Dict[QuestionType, Strategy] = {
    QuestionType.WHAT: _extract_what,
    QuestionType.WHEN: _extract_when,
    QuestionType.WHERE: _extract_where,
    QuestionType.WHO: _extract_who,
    QuestionType.HOW_MANY: _extract_how_many,
    QuestionType.WHICH: _extract_which,
    QuestionType.GENERIC: _extract_what,
}


class HeuristicExtractor:
    """Keyword/regex answer extraction. Stateless, safe to share between threads."""

    def __init__(self, strategies: Optional[Dict[QuestionType, Strategy]] = None):
        self.strategies = dict(STRATEGIES)
        if strategies:
            self.strategies.update(strategies)

    def extract(self, question: str, context: str) -> str:
        """Best-effort answer for question from context. Never raises, never returns an empty string."""
        qtype = classify_question(question)
        sentences = split_sentences(context)
        logger.debug("Question type %s, %d sentences", qtype.value, len(sentences))
        try:
            answer = self.strategies[qtype](question.lower(), sentences)
        except Exception:
            logger.exception("Strategy for %s questions failed, using first sentence", qtype.value)
            answer = None
        if answer and answer.strip():
            return answer.strip()
        return _first_sentence_phrase(sentences, qtype)
