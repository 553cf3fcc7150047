from __future__ import annotations

import pytest

from hoax_detection.evaluation import (
    F1_EPSILON,
    ConfusionCounts,
    area_under_roc,
    compute_metrics,
    confusion_counts,
    evaluate_model,
    format_metrics,
    safe_ratio,
)
from hoax_detection.splitting import split_dataset


def test_confusion_counts():
    labels = [True, True, False, False, True]
    predicted = [True, False, True, False, True]

    assert confusion_counts(labels, predicted) == ConfusionCounts(tp=2, fp=1, tn=1, fn=1)


def test_confusion_counts_length_mismatch():
    with pytest.raises(ValueError):
        confusion_counts([True, False], [True])


def test_safe_ratio_guards_empty_denominator():
    assert safe_ratio(3, 0) == 0.0
    assert safe_ratio(1, 4) == 0.25


def test_metric_formulas():
    labels = [True, True, True, False, False, False, False, True]
    predicted = [True, True, False, False, False, True, False, True]
    scores = [2.0, 1.5, -0.2, -1.0, -2.0, 0.3, -0.5, 0.9]

    report = compute_metrics(labels, predicted, scores)

    # tp=3, fn=1, tn=3, fp=1
    assert report.confusion == ConfusionCounts(tp=3, fp=1, tn=3, fn=1)
    assert report.accuracy == pytest.approx(6 / 8)
    assert report.precision_positive == pytest.approx(3 / 4)
    assert report.recall_positive == pytest.approx(3 / 4)
    assert report.precision_negative == pytest.approx(3 / 4)
    assert report.recall_negative == pytest.approx(3 / 4)
    expected_f1 = 2 * 0.75 * 0.75 / (1.5 + F1_EPSILON)
    assert report.f1 == pytest.approx(expected_f1)
    assert report.micro_f1 == report.f1
    assert report.macro_precision == report.precision_positive
    assert report.macro_recall == report.recall_positive
    assert report.macro_f1 == report.micro_f1
    assert report.test_size == 8


def test_accuracy_matches_confusion_counts():
    labels = [True, False, True, False, False]
    predicted = [False, False, True, True, False]

    report = compute_metrics(labels, predicted, [0.1, 0.2, 0.3, 0.4, 0.5])
    counts = report.confusion

    assert report.accuracy == (counts.tp + counts.tn) / (counts.tp + counts.tn + counts.fp + counts.fn)


def test_no_positive_predictions_gives_zero_not_error():
    report = compute_metrics([True, False, False], [False, False, False], [-1.0, -2.0, -3.0])

    assert report.precision_positive == 0.0
    assert report.recall_positive == 0.0
    assert report.f1 == 0.0
    assert report.precision_negative == pytest.approx(2 / 3)
    assert report.recall_negative == 1.0


def test_auc_perfect_and_reversed():
    labels = [False, False, True, True]

    assert area_under_roc(labels, [0.1, 0.2, 0.8, 0.9]) == pytest.approx(1.0)
    assert area_under_roc(labels, [0.9, 0.8, 0.2, 0.1]) == pytest.approx(0.0)


def test_auc_counts_tied_scores_as_half():
    assert area_under_roc([False, True], [0.5, 0.5]) == pytest.approx(0.5)


def test_auc_single_class_reports_chance_level():
    assert area_under_roc([True, True], [0.3, 0.7]) == 0.5
    assert area_under_roc([False, False, False], [0.1, 0.2, 0.9]) == 0.5


def test_compute_metrics_requires_records():
    with pytest.raises(ValueError):
        compute_metrics([], [], [])


def test_evaluate_model_uses_test_subset(trained_model, small_dataset):
    split = split_dataset(small_dataset, trained_model.test_fraction, trained_model.seed)

    report = evaluate_model(trained_model, small_dataset)

    assert report.test_size == len(split.test)
    for value in report.as_dict().values():
        assert 0.0 <= value <= 1.0


def test_format_metrics_lists_every_metric(trained_model, small_dataset):
    report = evaluate_model(trained_model, small_dataset)

    lines = format_metrics(report)
    text = "\n".join(lines)

    for title in (
        "Accuracy",
        "AUC",
        "F1 Score",
        "Precision (Positive)",
        "Recall (Positive)",
        "Precision (Negative)",
        "Recall (Negative)",
        "Micro F1",
        "Macro Precision",
        "Macro Recall",
        "Macro F1",
    ):
        assert title in text
    assert f"{report.accuracy:.2%}" in text
    assert all(line.rstrip().endswith("%") for line in lines[1:-1])
