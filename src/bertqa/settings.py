"""Environment-driven configuration (reads a .env file when present)."""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    model_path: Optional[str] = None
    vocab_path: Optional[str] = None
    max_seq_length: int = 384
    max_answer_length: int = 30
    device: Optional[str] = None
    workers: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            model_path=os.getenv("QA_MODEL_PATH") or None,
            vocab_path=os.getenv("QA_VOCAB_PATH") or None,
            max_seq_length=_int_env("QA_MAX_SEQ_LENGTH", 384),
            max_answer_length=_int_env("QA_MAX_ANSWER_LENGTH", 30),
            device=os.getenv("QA_DEVICE") or None,
            workers=max(1, _int_env("QA_WORKERS", 2)),
            log_level=os.getenv("QA_LOG_LEVEL", "INFO"),
        )

    def resolved_vocab_path(self) -> Optional[str]:
        """QA_VOCAB_PATH, else vocab.txt next to the model, else None (built-in vocabulary)."""
        if self.vocab_path:
            return self.vocab_path
        if self.model_path:
            candidate = os.path.join(self.model_path, "vocab.txt")
            if os.path.isfile(candidate):
                return candidate
        return None


settings = Settings.from_env()
