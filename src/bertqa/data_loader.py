"""
SQuAD v1.1 reader for the evaluation tool.
"""
import json
import os
from typing import Any, Dict, Iterator, List

import pandas as pd

FRAME_COLUMNS = ["id", "title", "question", "gold_answers"]


def _iter_questions(dataset: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    for article in dataset["data"]:
        for paragraph in article["paragraphs"]:
            for qa in paragraph["qas"]:
                yield {
                    "id": qa["id"],
                    "title": article.get("title", ""),
                    "context": paragraph["context"],
                    "question": qa["question"],
                    "answers": qa.get("answers", []),
                }


def load_squad_from_json(path: str) -> List[Dict[str, Any]]:
    """
    One dict per question: {id, title, context, question, answers: [{text, answer_start}]}.
    Raises FileNotFoundError for a missing file.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"SQuAD file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return list(_iter_questions(json.load(f)))


def examples_to_frame(examples: List[Dict[str, Any]]) -> pd.DataFrame:
    """Examples as a DataFrame indexed like the input; gold_answers holds every answer text."""
    frame = pd.DataFrame(examples, columns=["id", "title", "question", "answers"])
    frame["gold_answers"] = frame["answers"].map(lambda answers: [a["text"] for a in answers or []])
    return frame[FRAME_COLUMNS]
