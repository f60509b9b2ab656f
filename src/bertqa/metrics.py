"""
SQuAD answer metrics: exact match and token-level F1.
"""
import re
import string
from collections import Counter
from typing import Dict, List

import numpy as np

_ARTICLES = re.compile(r"\b(a|an|the)\b", flags=re.IGNORECASE)


def normalize_answer(s: str) -> str:
    """Lower text and remove punctuation, articles and extra whitespace."""
    text = s.lower()
    text = "".join(c for c in text if c not in string.punctuation)
    text = _ARTICLES.sub(" ", text)
    return " ".join(text.split())


def exact_match_score(prediction: str, ground_truth: str) -> float:
    """1.0 if normalized prediction equals normalized ground truth else 0."""
    return float(normalize_answer(prediction) == normalize_answer(ground_truth))


def f1_score(prediction: str, ground_truth: str) -> float:
    """Token-level F1 over the bag of normalized tokens."""
    pred_tokens = normalize_answer(prediction).split()
    gold_tokens = normalize_answer(ground_truth).split()
    if not pred_tokens or not gold_tokens:
        return float(pred_tokens == gold_tokens)
    common = sum((Counter(pred_tokens) & Counter(gold_tokens)).values())
    if common == 0:
        return 0.0
    precision = common / len(pred_tokens)
    recall = common / len(gold_tokens)
    return 2 * precision * recall / (precision + recall)


def best_over_ground_truths(metric, prediction: str, ground_truths: List[str]) -> float:
    if not ground_truths:
        return metric(prediction, "")
    return max(metric(prediction, gt) for gt in ground_truths)


def squad_metrics(predictions: List[str], references: List[List[str]]) -> Dict[str, float]:
    """Mean exact match and F1; each prediction is scored against its best reference."""
    if not predictions:
        return {"exact_match": 0.0, "f1": 0.0}
    em = np.mean([best_over_ground_truths(exact_match_score, p, r) for p, r in zip(predictions, references)])
    f1 = np.mean([best_over_ground_truths(f1_score, p, r) for p, r in zip(predictions, references)])
    return {"exact_match": float(em), "f1": float(f1)}
