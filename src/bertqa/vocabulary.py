"""
Token <-> id vocabulary and sequence-pair encoding for BERT-style QA models.
Layout: [CLS] question [SEP] context [SEP] [PAD] ...
"""
import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import EncodingError
from .tokenizer import tokenize, tokenize_with_offsets

logger = logging.getLogger(__name__)

PAD_TOKEN = "[PAD]"
UNK_TOKEN = "[UNK]"
CLS_TOKEN = "[CLS]"
SEP_TOKEN = "[SEP]"
MASK_TOKEN = "[MASK]"
SPECIAL_TOKENS = (PAD_TOKEN, UNK_TOKEN, CLS_TOKEN, SEP_TOKEN, MASK_TOKEN)

# Model input/output field names. Fixed by the exported model, do not rename.
INPUT_IDS_FIELD = "wordIDs"
TOKEN_TYPES_FIELD = "wordTypes"
ATTENTION_MASK_FIELD = "wordMask"
START_LOGITS_FIELD = "startLogits"
END_LOGITS_FIELD = "endLogits"

DEFAULT_MAX_LENGTH = 384
# [CLS] + [SEP] + [SEP]
STRUCTURAL_TOKENS = 3

_COMMON_WORDS = [
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "should", "could", "may", "might", "can", "what", "when",
    "where", "who", "which", "how", "why", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "them", "their", "his",
    "her", "its", "our", "your", "my", "me", "him", "us", "not", "no",
    "yes", "all", "some", "any", "many", "much", "more", "most", "few",
    "little", "one", "two", "first", "last", "only", "other", "same",
    "new", "old", "good", "bad", "great", "small", "large", "long", "short",
]
_PUNCTUATION = [".", ",", "?", "!", ";", ":", "'", "\"", "(", ")", "-", "/"]


@dataclass(frozen=True)
class EncodedSequence:
    """
    Fixed-length model input for one (question, context) pair.
    input_ids, token_type_ids and attention_mask always have the same length.
    offsets[i] is the (start, end) character span in the context for context positions, None elsewhere.
    """
    input_ids: List[int]
    token_type_ids: List[int]
    attention_mask: List[int]
    tokens: List[str]
    offsets: List[Optional[Tuple[int, int]]]

    def __len__(self) -> int:
        return len(self.input_ids)

    @property
    def num_real_tokens(self) -> int:
        return sum(self.attention_mask)

    def context_positions(self) -> List[int]:
        """Positions holding context tokens (segment 1, unmasked, with a character span)."""
        return [
            i for i, offset in enumerate(self.offsets)
            if offset is not None and self.token_type_ids[i] == 1 and self.attention_mask[i] == 1
        ]

    def to_model_inputs(self) -> Dict[str, np.ndarray]:
        """int32 arrays of shape (1, L) under the model's input field names."""
        return {
            INPUT_IDS_FIELD: np.asarray([self.input_ids], dtype=np.int32),
            TOKEN_TYPES_FIELD: np.asarray([self.token_type_ids], dtype=np.int32),
            ATTENTION_MASK_FIELD: np.asarray([self.attention_mask], dtype=np.int32),
        }


class Vocabulary:
    """Immutable bidirectional token/id mapping with BERT special tokens."""

    def __init__(self, tokens: Sequence[str], source: str = "custom"):
        """
        tokens: token list in id order. Must contain every special token and no duplicates.
        Use from_tokens to build one from plain words.
        """
        token_to_id: Dict[str, int] = {}
        for idx, token in enumerate(tokens):
            if token in token_to_id:
                raise ValueError(f"Duplicate token in vocabulary: {token!r}")
            token_to_id[token] = idx
        missing = [t for t in SPECIAL_TOKENS if t not in token_to_id]
        if missing:
            raise ValueError(f"Vocabulary is missing special tokens: {', '.join(missing)}")
        self._id_to_token = tuple(tokens)
        self._token_to_id = token_to_id
        self.source = source
        logger.info("Loaded vocabulary with %d tokens (%s)", len(self._id_to_token), source)

    @classmethod
    def from_tokens(cls, tokens: Iterable[str], source: str = "custom") -> "Vocabulary":
        """Prepend missing special tokens ([PAD]=0, [UNK]=1, [CLS]=2, [SEP]=3, [MASK]=4) to tokens."""
        tokens = list(tokens)
        specials = [t for t in SPECIAL_TOKENS if t not in tokens]
        return cls(specials + tokens, source=source)

    @classmethod
    def from_file(cls, path: str) -> "Vocabulary":
        """Load a BERT vocab.txt (one token per line, line number = id)."""
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Vocabulary file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            tokens = [line.rstrip("\r\n") for line in f]
        while tokens and not tokens[-1]:
            tokens.pop()
        return cls(tokens, source=path)

    @classmethod
    def default(cls) -> "Vocabulary":
        """Small demo vocabulary: special tokens, common words, punctuation, numbers 0-100."""
        words = _COMMON_WORDS + _PUNCTUATION + [str(i) for i in range(101)]
        return cls.from_tokens(words, source="built-in demo vocabulary")

    def __len__(self) -> int:
        return len(self._id_to_token)

    def __contains__(self, token: str) -> bool:
        return token in self._token_to_id

    def __iter__(self):
        return iter(self._id_to_token)

    @property
    def pad_id(self) -> int:
        return self._token_to_id[PAD_TOKEN]

    @property
    def unk_id(self) -> int:
        return self._token_to_id[UNK_TOKEN]

    @property
    def cls_id(self) -> int:
        return self._token_to_id[CLS_TOKEN]

    @property
    def sep_id(self) -> int:
        return self._token_to_id[SEP_TOKEN]

    @property
    def mask_id(self) -> int:
        return self._token_to_id[MASK_TOKEN]

    def tokenize(self, text: str) -> List[str]:
        return tokenize(text)

    def tokens_to_ids(self, tokens: Iterable[str]) -> List[int]:
        unk = self.unk_id
        return [self._token_to_id.get(token, unk) for token in tokens]

    def ids_to_tokens(self, ids: Iterable[int]) -> List[str]:
        size = len(self._id_to_token)
        return [self._id_to_token[i] if 0 <= i < size else UNK_TOKEN for i in ids]

    def encode_pair(
        self,
        question: str,
        context: str,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> EncodedSequence:
        """
        Build [CLS] question [SEP] context [SEP], truncate and right-pad to max_length.
        Context tokens are truncated first. The question is cut only when it alone does not fit.
        Segment ids: 0 up to and including the first [SEP], 1 for the context and final [SEP], 0 for padding.
        """
        if max_length < STRUCTURAL_TOKENS:
            raise EncodingError(
                f"max_length={max_length} cannot hold the {STRUCTURAL_TOKENS} structural tokens"
            )
        question_tokens = tokenize(question)
        context_spans = tokenize_with_offsets(context)

        max_question = max_length - STRUCTURAL_TOKENS
        if len(question_tokens) > max_question:
            logger.warning(
                "Question has %d tokens, truncating to %d to fit max_length=%d",
                len(question_tokens), max_question, max_length,
            )
            question_tokens = question_tokens[:max_question]
        remaining = max_length - (len(question_tokens) + 2) - 1
        context_spans = context_spans[:remaining]

        tokens = [CLS_TOKEN] + question_tokens + [SEP_TOKEN]
        offsets: List[Optional[Tuple[int, int]]] = [None] * len(tokens)
        question_length = len(tokens)
        for token, start, end in context_spans:
            tokens.append(token)
            offsets.append((start, end))
        tokens.append(SEP_TOKEN)
        offsets.append(None)

        input_ids = self.tokens_to_ids(tokens)
        token_type_ids = [0 if i < question_length else 1 for i in range(len(tokens))]
        attention_mask = [1] * len(tokens)

        pad = max_length - len(tokens)
        input_ids += [self.pad_id] * pad
        token_type_ids += [0] * pad
        attention_mask += [0] * pad
        tokens += [PAD_TOKEN] * pad
        offsets += [None] * pad

        return EncodedSequence(
            input_ids=input_ids,
            token_type_ids=token_type_ids,
            attention_mask=attention_mask,
            tokens=tokens,
            offsets=offsets,
        )
