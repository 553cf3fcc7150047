"""Featurizer and classifier seams of the training pipeline.

Both collaborators follow the scikit-learn estimator protocol, so any
transformer or binary classifier can replace the defaults built here.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence

from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import FeatureUnion

from .text import TextNormalizer


class TextFeaturizer(Protocol):
    """Maps narratives to fixed-width numeric rows."""

    def fit(self, texts: Iterable[str], y: Any = None) -> "TextFeaturizer": ...

    def transform(self, texts: Iterable[str]) -> Any: ...


class BinaryClassifier(Protocol):
    """Fits on ``(features, labels)`` and scores feature rows afterwards.

    Implementations expose ``predict_proba`` and/or ``decision_function`` in
    addition to the two methods below.
    """

    classes_: Sequence[Any]

    def fit(self, features: Any, labels: Sequence[bool]) -> "BinaryClassifier": ...

    def predict(self, features: Any) -> Any: ...


def build_featurizer(
    *,
    stopwords_language: Optional[str] = None,
    max_features: int = 20000,
) -> FeatureUnion:
    """Word uni/bi-grams and character tri-grams, each TF-IDF weighted."""
    normalizer = TextNormalizer.build(stopwords_language)
    return FeatureUnion(
        [
            (
                "words",
                TfidfVectorizer(
                    preprocessor=normalizer,
                    ngram_range=(1, 2),
                    max_features=max_features,
                    sublinear_tf=True,
                ),
            ),
            (
                "chars",
                TfidfVectorizer(
                    preprocessor=normalizer,
                    analyzer="char_wb",
                    ngram_range=(3, 3),
                    max_features=max_features,
                    sublinear_tf=True,
                ),
            ),
        ]
    )


def build_classifier(*, seed: int, max_iter: int = 1000) -> LogisticRegression:
    return LogisticRegression(max_iter=max_iter, random_state=seed)
