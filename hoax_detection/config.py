"""Runtime settings for the hoax detection pipeline.

Values come from environment variables so the same code runs locally, in
CI and inside a container. Command line flags override them.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigurationError

DATA_DIR = Path(os.environ.get("HOAX_DATA_DIR", "data"))
MODEL_DIR = Path(os.environ.get("MODEL_DIR", "models"))

DEFAULT_RAW_PATH = DATA_DIR / "600_news_with_valid_hoax_label.csv"
DEFAULT_CLEANED_PATH = DATA_DIR / "600_news_with_valid_hoax_label_clean.csv"
DEFAULT_MODEL_PATH = MODEL_DIR / "hoax_detection_model.joblib"

DEFAULT_TEST_FRACTION = 0.2
DEFAULT_SEED = 1


@dataclass(frozen=True)
class Settings:
    raw_path: Path = DEFAULT_RAW_PATH
    cleaned_path: Path = DEFAULT_CLEANED_PATH
    model_path: Path = DEFAULT_MODEL_PATH
    test_fraction: float = DEFAULT_TEST_FRACTION
    seed: int = DEFAULT_SEED
    stopwords_language: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0.0 < self.test_fraction < 1.0:
            raise ConfigurationError(
                f"Test fraction must lie strictly between 0 and 1, got {self.test_fraction}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``HOAX_*`` environment variables."""
        env = os.environ if environ is None else environ
        try:
            test_fraction = float(env.get("HOAX_TEST_FRACTION", DEFAULT_TEST_FRACTION))
        except ValueError as exc:
            raise ConfigurationError(
                f"HOAX_TEST_FRACTION is not a number: {env.get('HOAX_TEST_FRACTION')!r}"
            ) from exc
        try:
            seed = int(env.get("HOAX_SEED", DEFAULT_SEED))
        except ValueError as exc:
            raise ConfigurationError(
                f"HOAX_SEED is not an integer: {env.get('HOAX_SEED')!r}"
            ) from exc

        return cls(
            raw_path=Path(env.get("HOAX_RAW_DATA", DEFAULT_RAW_PATH)),
            cleaned_path=Path(env.get("HOAX_CLEANED_DATA", DEFAULT_CLEANED_PATH)),
            model_path=Path(env.get("HOAX_MODEL_PATH", DEFAULT_MODEL_PATH)),
            test_fraction=test_fraction,
            seed=seed,
            stopwords_language=env.get("HOAX_STOPWORDS") or None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with every non-``None`` change applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
