"""
Evaluate the QA service (model or demo mode) on a SQuAD v1.1 file with Exact Match and F1.
"""
import argparse
import dataclasses
import json
import logging
import os
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from .data_loader import examples_to_frame, load_squad_from_json
from .logging_config import configure_logging
from .metrics import best_over_ground_truths, exact_match_score, f1_score, squad_metrics
from .service import QAService
from .settings import settings as default_settings

logger = logging.getLogger(__name__)


def evaluate_examples(
    service: QAService,
    examples: List[Dict[str, Any]],
    show_progress: bool = True,
    predictions_file: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Answer every example and score it. Failed calls count as empty predictions.
    Returns overall exact_match/f1, per-title scores under "by_title", and the
    example and error counts. predictions_file, if set, gets one CSV row per example.
    """
    frame = examples_to_frame(examples)
    predictions = []
    errors = []
    for ex in tqdm(examples, desc="Eval", disable=not show_progress):
        result = service.answer_sync(ex["question"], ex["context"])
        predictions.append(result.answer if result.ok else "")
        errors.append(None if result.ok else str(result.error))

    frame["prediction"] = predictions
    frame["error"] = errors
    frame["exact_match"] = [
        best_over_ground_truths(exact_match_score, p, g) for p, g in zip(predictions, frame["gold_answers"])
    ]
    frame["f1"] = [best_over_ground_truths(f1_score, p, g) for p, g in zip(predictions, frame["gold_answers"])]
    frame = frame.astype({"exact_match": float, "f1": float})

    metrics: Dict[str, Any] = squad_metrics(predictions, list(frame["gold_answers"]))
    by_title = frame.groupby("title")[["exact_match", "f1"]].mean()
    metrics["by_title"] = {
        str(title): {"exact_match": float(row["exact_match"]), "f1": float(row["f1"])}
        for title, row in by_title.iterrows()
    }
    metrics["examples"] = len(frame)
    metrics["errors"] = int(frame["error"].notna().sum())

    if predictions_file:
        _ensure_parent_dir(predictions_file)
        frame.to_csv(predictions_file, index=False)
        logger.info("Wrote %d predictions to %s", len(frame), predictions_file)
    return metrics


def _ensure_parent_dir(path: str) -> None:
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)


def main(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    parser = argparse.ArgumentParser(description=__doc__.strip())
    parser.add_argument("--data_file", type=str, required=True, help="SQuAD v1.1 JSON file")
    parser.add_argument("--max_samples", type=int, default=None)
    parser.add_argument("--output_file", type=str, default=None)
    parser.add_argument("--predictions_file", type=str, default=None, help="Per-example CSV")
    parser.add_argument("--model_path", type=str, default=None, help="Overrides QA_MODEL_PATH")
    parser.add_argument("--no_progress", action="store_true")
    args = parser.parse_args(argv)

    settings = default_settings
    if args.model_path:
        settings = dataclasses.replace(settings, model_path=args.model_path)
    configure_logging(settings.log_level)

    examples = load_squad_from_json(args.data_file)
    if args.max_samples:
        examples = examples[: args.max_samples]

    with QAService.from_settings(settings) as service:
        logger.info("Evaluating %d examples in %s mode", len(examples), service.mode)
        metrics = evaluate_examples(
            service, examples, show_progress=not args.no_progress, predictions_file=args.predictions_file,
        )

    print("Evaluation:", metrics)
    if args.output_file:
        _ensure_parent_dir(args.output_file)
        with open(args.output_file, "w", encoding="utf-8") as f:
            json.dump(metrics, f, indent=2)
    return metrics


if __name__ == "__main__":
    main()
