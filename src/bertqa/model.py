"""
QA model boundary: fixed input/output field names and a Hugging Face backed implementation.
"""
import logging
import os
from typing import Dict, Optional, Protocol

import numpy as np
import torch
from transformers import AutoModelForQuestionAnswering

from .vocabulary import (
    ATTENTION_MASK_FIELD,
    END_LOGITS_FIELD,
    INPUT_IDS_FIELD,
    START_LOGITS_FIELD,
    TOKEN_TYPES_FIELD,
)

logger = logging.getLogger(__name__)

__all__ = [
    "INPUT_IDS_FIELD",
    "TOKEN_TYPES_FIELD",
    "ATTENTION_MASK_FIELD",
    "START_LOGITS_FIELD",
    "END_LOGITS_FIELD",
    "QAModel",
    "TransformersQAModel",
    "load_model",
]


class QAModel(Protocol):
    """
    Anything callable with {wordIDs, wordTypes, wordMask} int arrays of shape (1, L)
    and returning {startLogits, endLogits} float arrays over the same L positions.
    """

    def __call__(self, inputs: Dict[str, np.ndarray]) -> Dict[str, np.ndarray]:
        ...


class TransformersQAModel:
    """Fine-tuned AutoModelForQuestionAnswering checkpoint behind the QAModel field names."""

    def __init__(self, model_path: str, device: Optional[str] = None):
        """
        Load model from model_path (dir with config.json and weights).
        Inputs must be encoded with the checkpoint's own vocab.txt for the ids to mean anything.
        """
        self.model = AutoModelForQuestionAnswering.from_pretrained(model_path)
        self.device = device or ("cuda" if torch.cuda.is_available() else "cpu")
        self.model.to(self.device)
        self.model.eval()
        self.model_path = model_path
        logger.info("Loaded QA model from %s on %s", model_path, self.device)

    def __call__(self, inputs: Dict[str, np.ndarray]) -> Dict[str, np.ndarray]:
        batch = {
            "input_ids": torch.as_tensor(np.asarray(inputs[INPUT_IDS_FIELD]), dtype=torch.long),
            "token_type_ids": torch.as_tensor(np.asarray(inputs[TOKEN_TYPES_FIELD]), dtype=torch.long),
            "attention_mask": torch.as_tensor(np.asarray(inputs[ATTENTION_MASK_FIELD]), dtype=torch.long),
        }
        # DistilBERT-style models have no segment embeddings.
        if getattr(self.model.config, "type_vocab_size", 2) < 2:
            batch.pop("token_type_ids")
        batch = {k: v.to(self.device) for k, v in batch.items()}

        with torch.no_grad():
            outputs = self.model(**batch)

        return {
            START_LOGITS_FIELD: outputs.start_logits[0].cpu().numpy(),
            END_LOGITS_FIELD: outputs.end_logits[0].cpu().numpy(),
        }


def load_model(model_path: Optional[str], device: Optional[str] = None) -> Optional[TransformersQAModel]:
    """Model from model_path if it is a directory, else None (demo mode)."""
    if not model_path:
        return None
    if not os.path.isdir(model_path):
        logger.warning("Model path %s not found, running in demo mode", model_path)
        return None
    return TransformersQAModel(model_path, device=device)
