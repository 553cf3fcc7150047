"""Single-narrative inference against a trained model."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .training import HoaxModel


@dataclass(frozen=True)
class Prediction:
    predicted_label: bool
    probability: float
    score: float

    @property
    def verdict(self) -> str:
        return "VALID" if self.predicted_label else "HOAX"


def predict_many(model: HoaxModel, narratives: Iterable[str]) -> List[Prediction]:
    texts = [str(narrative).strip() for narrative in narratives]
    if any(not text for text in texts):
        raise ValueError("Narratives must be non-empty text")
    if not texts:
        return []

    labels = model.predicted_labels(texts)
    probabilities = model.probabilities(texts)
    scores = model.scores(texts)
    return [
        Prediction(predicted_label=bool(label), probability=float(probability), score=float(score))
        for label, probability, score in zip(labels, probabilities, scores)
    ]


def predict(model: HoaxModel, narrative: str) -> Prediction:
    """Classify one narrative as valid (``True``) or hoax (``False``)."""
    return predict_many(model, [narrative])[0]
