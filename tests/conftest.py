"""Shared pytest fixtures and test environment defaults."""
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for path in (PROJECT_ROOT, PROJECT_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

os.environ.pop("QA_MODEL_PATH", None)
os.environ.pop("QA_VOCAB_PATH", None)
os.environ.setdefault("QA_LOG_LEVEL", "WARNING")

from bertqa.heuristics import HeuristicExtractor  # noqa: E402
from bertqa.service import QAService  # noqa: E402
from bertqa.vocabulary import Vocabulary  # noqa: E402


@pytest.fixture
def vocab() -> Vocabulary:
    return Vocabulary.default()


@pytest.fixture
def extractor() -> HeuristicExtractor:
    return HeuristicExtractor()


@pytest.fixture
def service():
    svc = QAService()
    yield svc
    svc.close()
