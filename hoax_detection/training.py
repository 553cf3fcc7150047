"""Fit the featurizer + classifier pipeline on the train subset."""
from __future__ import annotations

import logging
import pickle
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

import joblib
import numpy as np
from sklearn.pipeline import Pipeline

from .cleaning import CleanRecord
from .config import DEFAULT_SEED, DEFAULT_TEST_FRACTION
from .errors import InsufficientClassDiversityError, ModelArtifactError
from .features import BinaryClassifier, TextFeaturizer, build_classifier, build_featurizer
from .splitting import split_dataset

LOGGER = logging.getLogger(__name__)

# Keeps log-odds finite when a classifier reports a hard 0 or 1.
_PROBA_CLIP = 1e-12


@dataclass(frozen=True)
class ClassBalance:
    valid: int
    hoax: int

    @property
    def total(self) -> int:
        return self.valid + self.hoax


def count_labels(dataset: Sequence[CleanRecord]) -> ClassBalance:
    valid = sum(1 for record in dataset if record.label)
    return ClassBalance(valid=valid, hoax=len(dataset) - valid)


def ensure_class_diversity(dataset: Sequence[CleanRecord], *, subset: str = "dataset") -> ClassBalance:
    """Return the label counts, failing when either class is missing."""
    balance = count_labels(dataset)
    if balance.valid == 0 or balance.hoax == 0:
        raise InsufficientClassDiversityError(balance.valid, balance.hoax, subset=subset)
    return balance


@dataclass(frozen=True)
class HoaxModel:
    """Trained featurizer and classifier plus the split they were fitted on."""

    pipeline: Pipeline
    test_fraction: float
    seed: int
    class_balance: ClassBalance
    train_size: int
    trained_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def classifier(self):
        return self.pipeline.named_steps["classifier"]

    @property
    def version(self) -> str:
        return f"{type(self.classifier).__name__}:{self.trained_at}"

    def _positive_index(self) -> int:
        return list(self.classifier.classes_).index(True)

    def scores(self, texts: Sequence[str]) -> np.ndarray:
        """Raw classifier output for the ``valid`` class."""
        texts = list(texts)
        if hasattr(self.pipeline, "decision_function"):
            return np.asarray(self.pipeline.decision_function(texts), dtype=float)
        proba = np.clip(self.pipeline.predict_proba(texts)[:, self._positive_index()], _PROBA_CLIP, 1 - _PROBA_CLIP)
        return np.log(proba / (1 - proba))

    def probabilities(self, texts: Sequence[str]) -> np.ndarray:
        """Probability that each narrative is ``valid``."""
        texts = list(texts)
        if hasattr(self.pipeline, "predict_proba"):
            return np.asarray(self.pipeline.predict_proba(texts)[:, self._positive_index()], dtype=float)
        return 1.0 / (1.0 + np.exp(-self.scores(texts)))

    def predicted_labels(self, texts: Sequence[str]) -> np.ndarray:
        return np.asarray(self.pipeline.predict(list(texts)), dtype=bool)


def build_pipeline(
    featurizer: Optional[TextFeaturizer] = None,
    classifier: Optional[BinaryClassifier] = None,
    *,
    seed: int = DEFAULT_SEED,
    stopwords_language: Optional[str] = None,
) -> Pipeline:
    return Pipeline(
        steps=[
            ("features", featurizer if featurizer is not None else build_featurizer(stopwords_language=stopwords_language)),
            ("classifier", classifier if classifier is not None else build_classifier(seed=seed)),
        ]
    )


def train_model(
    dataset: Sequence[CleanRecord],
    *,
    test_fraction: float = DEFAULT_TEST_FRACTION,
    seed: int = DEFAULT_SEED,
    featurizer: Optional[TextFeaturizer] = None,
    classifier: Optional[BinaryClassifier] = None,
    stopwords_language: Optional[str] = None,
) -> HoaxModel:
    """Fit a model on the train subset of *dataset*; the test subset is never seen."""
    balance = ensure_class_diversity(dataset)
    LOGGER.info("Label counts: valid=%d hoax=%d", balance.valid, balance.hoax)

    split = split_dataset(dataset, test_fraction, seed)
    ensure_class_diversity(split.train, subset="train subset")

    pipeline = build_pipeline(featurizer, classifier, seed=seed, stopwords_language=stopwords_language)
    texts = [record.narrative for record in split.train]
    labels = np.array([record.label for record in split.train], dtype=bool)

    LOGGER.info("Training on %d records (%d held out)", len(split.train), len(split.test))
    pipeline.fit(texts, labels)

    return HoaxModel(
        pipeline=pipeline,
        test_fraction=test_fraction,
        seed=seed,
        class_balance=balance,
        train_size=len(split.train),
    )


def save_model(model: HoaxModel, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, path)
    LOGGER.info("Saved model artifact to %s", path.resolve())
    return path


def load_model(path: str | Path) -> HoaxModel:
    path = Path(path)
    if not path.is_file():
        raise ModelArtifactError(
            f"Model artifact not found at {path.resolve()}",
            hint="Run the train step before predicting.",
        )
    try:
        model = joblib.load(path)
    except (OSError, EOFError, ValueError, pickle.UnpicklingError) as exc:
        raise ModelArtifactError(f"Unable to load model artifact {path}: {exc}") from exc
    if not isinstance(model, HoaxModel):
        raise ModelArtifactError(f"{path} does not hold a hoax detection model (found {type(model).__name__})")
    return model
