"""
Basic whitespace/punctuation tokenizer used to prepare question + context pairs.
Not WordPiece: words are never split into subwords.
"""
import unicodedata
from typing import List, Tuple


def is_punctuation(char: str) -> bool:
    """True for any Unicode punctuation character (categories Pc, Pd, Ps, Pe, Pi, Pf, Po)."""
    return unicodedata.category(char).startswith("P")


def tokenize_with_offsets(text: str) -> List[Tuple[str, int, int]]:
    """
    Lower-case and split text into (token, start, end) triples.
    start/end are character offsets into the original text, end exclusive.
    Whitespace is dropped, each punctuation character is its own token.
    """
    tokens = []
    word: List[str] = []
    word_start = 0
    for i, char in enumerate(text):
        if char.isspace() or is_punctuation(char):
            if word:
                tokens.append(("".join(word), word_start, i))
                word = []
            if not char.isspace():
                tokens.append((char.lower(), i, i + 1))
            continue
        if not word:
            word_start = i
        word.append(char.lower())
    if word:
        tokens.append(("".join(word), word_start, len(text)))
    return tokens


def tokenize(text: str) -> List[str]:
    """Lower-cased word and punctuation tokens of text."""
    return [token for token, _, _ in tokenize_with_offsets(text)]
