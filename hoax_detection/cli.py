"""Command line entry point for the hoax detection pipeline.

Examples::

    # full run: clean, train, save, evaluate and predict the sample narrative
    python -m hoax_detection run --raw data/600_news_with_valid_hoax_label.csv

    # individual stages
    python -m hoax_detection clean --raw data/raw.csv --cleaned data/clean.csv
    python -m hoax_detection train --cleaned data/clean.csv --model models/hoax.joblib
    python -m hoax_detection evaluate --cleaned data/clean.csv --model models/hoax.joblib
    python -m hoax_detection predict --model models/hoax.joblib "Teks berita ..."

Paths default to the ``HOAX_*`` environment variables (see
:mod:`hoax_detection.config`).
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from observability.logging_setup import setup_logging

from .cleaning import clean_dataset, load_clean_dataset
from .config import Settings
from .errors import HoaxDetectionError
from .evaluation import evaluate_model, format_metrics
from .inference import Prediction, predict
from .pipeline import SAMPLE_NARRATIVE, run_pipeline
from .training import load_model, save_model, train_model

LOGGER = logging.getLogger(__name__)


def _print_prediction(narrative: str, prediction: Prediction) -> None:
    print(f"\nText: {narrative}")
    print(f"Prediction: {prediction.verdict} (Confidence: {prediction.probability:.2%}, Score: {prediction.score:.4f})")


def _cmd_run(args: argparse.Namespace, settings: Settings) -> int:
    result = run_pipeline(settings, sample_narrative=args.text or SAMPLE_NARRATIVE, save_model_artifact=not args.no_save)
    print("\n".join(format_metrics(result.metrics)))
    _print_prediction(args.text or SAMPLE_NARRATIVE, result.sample_prediction)
    return 0


def _cmd_clean(args: argparse.Namespace, settings: Settings) -> int:
    cleaned = clean_dataset(settings.raw_path, settings.cleaned_path)
    print(f"Cleaned {len(cleaned)} records, saved to {settings.cleaned_path}")
    return 0


def _cmd_train(args: argparse.Namespace, settings: Settings) -> int:
    dataset = load_clean_dataset(settings.cleaned_path)
    model = train_model(
        dataset,
        test_fraction=settings.test_fraction,
        seed=settings.seed,
        stopwords_language=settings.stopwords_language,
    )
    save_model(model, settings.model_path)
    print(f"Trained on {model.train_size} records (valid={model.class_balance.valid}, hoax={model.class_balance.hoax})")
    print(f"Saved model to {settings.model_path}")
    return 0


def _cmd_evaluate(args: argparse.Namespace, settings: Settings) -> int:
    model = load_model(settings.model_path)
    dataset = load_clean_dataset(settings.cleaned_path)
    print("\n".join(format_metrics(evaluate_model(model, dataset))))
    return 0


def _cmd_predict(args: argparse.Namespace, settings: Settings) -> int:
    model = load_model(settings.model_path)
    for narrative in args.texts:
        _print_prediction(narrative, predict(model, narrative))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hoax-detection", description="Train and apply a valid/hoax news classifier")
    parser.add_argument("--log-level", default=None, help="Logging level (default LOG_LEVEL or INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    parser.add_argument("--seed", type=int, default=None, help="Split/fit seed (default 1)")
    parser.add_argument("--test-fraction", type=float, default=None, help="Held-out fraction (default 0.2)")
    parser.add_argument("--stopwords", default=None, help="NLTK stopword language, e.g. indonesian")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Clean, train, evaluate and predict the sample narrative")
    run.add_argument("--raw", type=Path, default=None, help="Raw ;-separated dataset")
    run.add_argument("--cleaned", type=Path, default=None, help="Where to write the cleaned dataset")
    run.add_argument("--model", type=Path, default=None, help="Where to save the model artifact")
    run.add_argument("--text", default=None, help="Narrative to predict after training")
    run.add_argument("--no-save", action="store_true", help="Do not persist the model artifact")
    run.set_defaults(handler=_cmd_run)

    clean = sub.add_parser("clean", help="Clean the raw dataset")
    clean.add_argument("--raw", type=Path, default=None)
    clean.add_argument("--cleaned", type=Path, default=None)
    clean.set_defaults(handler=_cmd_clean)

    train = sub.add_parser("train", help="Train on a cleaned dataset and save the model")
    train.add_argument("--cleaned", type=Path, default=None)
    train.add_argument("--model", type=Path, default=None)
    train.set_defaults(handler=_cmd_train)

    evaluate = sub.add_parser("evaluate", help="Evaluate a saved model on the held-out split")
    evaluate.add_argument("--cleaned", type=Path, default=None)
    evaluate.add_argument("--model", type=Path, default=None)
    evaluate.set_defaults(handler=_cmd_evaluate)

    predict_cmd = sub.add_parser("predict", help="Classify one or more narratives with a saved model")
    predict_cmd.add_argument("--model", type=Path, default=None)
    predict_cmd.add_argument("texts", nargs="+", help="Narratives to classify")
    predict_cmd.set_defaults(handler=_cmd_predict)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env().override(
            raw_path=getattr(args, "raw", None),
            cleaned_path=getattr(args, "cleaned", None),
            model_path=getattr(args, "model", None),
            test_fraction=args.test_fraction,
            seed=args.seed,
            stopwords_language=args.stopwords,
            log_level=args.log_level.upper() if args.log_level else None,
        )
        setup_logging(settings.log_level, json_logs=args.json_logs)
        return args.handler(args, settings)
    except HoaxDetectionError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        LOGGER.debug("Invalid input", exc_info=True)
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
