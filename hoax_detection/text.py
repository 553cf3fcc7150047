"""Text normalisation applied to every narrative before vectorisation."""
from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import nltk
from nltk.corpus import stopwords

LOGGER = logging.getLogger(__name__)

NLTK_RESOURCES = {
    "stopwords": "corpora/stopwords",
}

# Pre-compute translation table to strip punctuation quickly.
_PUNCT_TABLE = str.maketrans({char: " " for char in string.punctuation})


def ensure_nltk() -> None:
    """Download required NLTK corpora if not already available."""
    for resource, path in NLTK_RESOURCES.items():
        try:
            nltk.data.find(path)
        except LookupError:
            LOGGER.info("Downloading NLTK resource: %s", resource)
            nltk.download(resource, quiet=True)


def load_stopwords(language: str) -> FrozenSet[str]:
    ensure_nltk()
    return frozenset(stopwords.words(language))


@dataclass(frozen=True)
class TextNormalizer:
    """Callable that lower-cases, strips punctuation and drops stopwords.

    Instances are picklable so they can travel inside a saved model as a
    vectorizer ``preprocessor``.
    """

    stop_words: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(cls, language: Optional[str] = None) -> "TextNormalizer":
        if not language:
            return cls()
        return cls(stop_words=load_stopwords(language))

    def __call__(self, text: str) -> str:
        if not isinstance(text, str):
            return ""
        lowered = text.lower().translate(_PUNCT_TABLE)
        tokens = [token for token in lowered.split() if token not in self.stop_words]
        return re.sub(r"\s+", " ", " ".join(tokens)).strip()
