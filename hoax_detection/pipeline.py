"""End-to-end orchestration: clean, train, evaluate, then predict one sample.

Stages run strictly in sequence. Progress is reported through a
:class:`PipelineReporter` so the metric code never writes to the console.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import structlog

from .cleaning import CleanRecord, clean_dataset, load_clean_dataset
from .config import Settings
from .evaluation import MetricsReport, evaluate_model
from .inference import Prediction, predict
from .training import ClassBalance, HoaxModel, save_model, train_model

SAMPLE_NARRATIVE = "Pemerintah akan menutup seluruh akses internet di Indonesia besok pagi."


class PipelineReporter:
    """Receives pipeline checkpoints and forwards them to a structlog logger."""

    def __init__(self, logger=None) -> None:
        self._log = logger if logger is not None else structlog.get_logger("hoax_detection.pipeline")

    def stage(self, name: str, **details) -> None:
        self._log.info("stage", stage=name, **details)

    def class_balance(self, balance: ClassBalance) -> None:
        self._log.info("class_balance", valid=balance.valid, hoax=balance.hoax)

    def metrics(self, report: MetricsReport) -> None:
        self._log.info(
            "evaluation",
            test_size=report.test_size,
            **{name: round(value, 4) for name, value in report.as_dict().items()},
        )

    def prediction(self, narrative: str, prediction: Prediction) -> None:
        self._log.info(
            "prediction",
            narrative=narrative,
            verdict=prediction.verdict,
            probability=round(prediction.probability, 4),
            score=round(prediction.score, 4),
        )


@dataclass(frozen=True)
class PipelineResult:
    dataset: Tuple[CleanRecord, ...]
    model: HoaxModel
    metrics: MetricsReport
    sample_prediction: Prediction


def run_pipeline(
    settings: Settings,
    *,
    reporter: Optional[PipelineReporter] = None,
    sample_narrative: str = SAMPLE_NARRATIVE,
    save_model_artifact: bool = True,
) -> PipelineResult:
    reporter = reporter or PipelineReporter()

    reporter.stage("cleaning", raw_path=str(settings.raw_path))
    clean_dataset(settings.raw_path, settings.cleaned_path)
    reporter.stage("cleaned", cleaned_path=str(settings.cleaned_path))

    reporter.stage("loading", cleaned_path=str(settings.cleaned_path))
    dataset = tuple(load_clean_dataset(settings.cleaned_path))

    reporter.stage("training", records=len(dataset), test_fraction=settings.test_fraction, seed=settings.seed)
    model = train_model(
        dataset,
        test_fraction=settings.test_fraction,
        seed=settings.seed,
        stopwords_language=settings.stopwords_language,
    )
    reporter.class_balance(model.class_balance)
    reporter.stage("trained", train_size=model.train_size)

    if save_model_artifact:
        save_model(model, settings.model_path)
        reporter.stage("saved", model_path=str(settings.model_path))

    reporter.stage("evaluating")
    metrics = evaluate_model(model, dataset)
    reporter.metrics(metrics)

    reporter.stage("predicting")
    sample_prediction = predict(model, sample_narrative)
    reporter.prediction(sample_narrative, sample_prediction)

    return PipelineResult(
        dataset=dataset,
        model=model,
        metrics=metrics,
        sample_prediction=sample_prediction,
    )
