"""Score the held-out test subset and compute the metrics report.

Positive class is ``valid`` (label ``True``). The F1 figures use an additive
epsilon in the denominator, and the micro/macro figures collapse onto the
positive class: ``micro_f1 == f1``, ``macro_precision == precision_positive``,
``macro_recall == recall_positive`` and ``macro_f1 == micro_f1``.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Dict, List, Optional, Sequence

import numpy as np
from sklearn.metrics import auc, roc_curve

from .cleaning import CleanRecord
from .splitting import split_dataset
from .training import HoaxModel

LOGGER = logging.getLogger(__name__)

F1_EPSILON = 1e-6


@dataclass(frozen=True)
class ConfusionCounts:
    tp: int
    fp: int
    tn: int
    fn: int

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    @property
    def accuracy(self) -> float:
        return safe_ratio(self.tp + self.tn, self.total)


@dataclass(frozen=True)
class MetricsReport:
    accuracy: float
    auc: float
    f1: float
    precision_positive: float
    recall_positive: float
    precision_negative: float
    recall_negative: float
    micro_f1: float
    macro_precision: float
    macro_recall: float
    macro_f1: float
    confusion: ConfusionCounts
    test_size: int

    def as_dict(self) -> Dict[str, float]:
        """The float metrics keyed by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("confusion", "test_size")
        }


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def f1_score(precision: float, recall: float) -> float:
    return 2 * precision * recall / (precision + recall + F1_EPSILON)


def confusion_counts(labels: Sequence[bool], predicted: Sequence[bool]) -> ConfusionCounts:
    truth = np.asarray(labels, dtype=bool)
    pred = np.asarray(predicted, dtype=bool)
    if truth.shape != pred.shape:
        raise ValueError(f"Got {truth.size} labels but {pred.size} predictions")
    return ConfusionCounts(
        tp=int(np.sum(truth & pred)),
        fp=int(np.sum(~truth & pred)),
        tn=int(np.sum(~truth & ~pred)),
        fn=int(np.sum(truth & ~pred)),
    )


def area_under_roc(labels: Sequence[bool], scores: Sequence[float]) -> float:
    """Trapezoidal ROC area over every distinct score threshold.

    Returns ``0.5`` when *labels* hold a single class. The curve is undefined
    there, and 0.5 is the score of an uninformative ranking, whereas 0.0
    would read as a perfectly inverted one.
    """
    truth = np.asarray(labels, dtype=bool)
    if truth.all() or not truth.any():
        LOGGER.warning("ROC AUC is undefined for a single-class test subset; reporting 0.5")
        return 0.5
    fpr, tpr, _ = roc_curve(truth, np.asarray(scores, dtype=float), pos_label=True, drop_intermediate=False)
    return float(auc(fpr, tpr))


def compute_metrics(
    labels: Sequence[bool],
    predicted: Sequence[bool],
    scores: Sequence[float],
) -> MetricsReport:
    counts = confusion_counts(labels, predicted)
    if counts.total == 0:
        raise ValueError("Cannot compute metrics without any test records")

    precision_positive = safe_ratio(counts.tp, counts.tp + counts.fp)
    recall_positive = safe_ratio(counts.tp, counts.tp + counts.fn)
    precision_negative = safe_ratio(counts.tn, counts.tn + counts.fn)
    recall_negative = safe_ratio(counts.tn, counts.tn + counts.fp)
    f1 = f1_score(precision_positive, recall_positive)
    micro_f1 = f1

    return MetricsReport(
        accuracy=counts.accuracy,
        auc=area_under_roc(labels, scores),
        f1=f1,
        precision_positive=precision_positive,
        recall_positive=recall_positive,
        precision_negative=precision_negative,
        recall_negative=recall_negative,
        micro_f1=micro_f1,
        macro_precision=precision_positive,
        macro_recall=recall_positive,
        macro_f1=micro_f1,
        confusion=counts,
        test_size=counts.total,
    )


def evaluate_model(
    model: HoaxModel,
    dataset: Sequence[CleanRecord],
    *,
    test_fraction: Optional[float] = None,
    seed: Optional[int] = None,
) -> MetricsReport:
    """Re-derive the training split and evaluate on its test subset only."""
    split = split_dataset(
        dataset,
        model.test_fraction if test_fraction is None else test_fraction,
        model.seed if seed is None else seed,
    )
    texts = [record.narrative for record in split.test]
    labels = [record.label for record in split.test]

    LOGGER.info("Evaluating on %d held-out records", len(texts))
    report = compute_metrics(labels, model.predicted_labels(texts), model.scores(texts))
    LOGGER.info("Confusion counts: %s", asdict(report.confusion))
    return report


_REPORT_LINES = (
    ("Accuracy", "accuracy"),
    ("AUC", "auc"),
    ("F1 Score", "f1"),
    ("Precision (Positive)", "precision_positive"),
    ("Recall (Positive)", "recall_positive"),
    ("Precision (Negative)", "precision_negative"),
    ("Recall (Negative)", "recall_negative"),
    ("Micro F1", "micro_f1"),
    ("Macro Precision", "macro_precision"),
    ("Macro Recall", "macro_recall"),
    ("Macro F1", "macro_f1"),
)


def format_metrics(report: MetricsReport) -> List[str]:
    """Render every metric as a percentage line between two banners."""
    width = max(len(title) for title, _ in _REPORT_LINES)
    banner = "=" * 16 + " EVALUATION RESULTS " + "=" * 16
    lines = [banner]
    lines.extend(f"{title:<{width}} : {getattr(report, name):.2%}" for title, name in _REPORT_LINES)
    lines.append("=" * len(banner))
    return lines
