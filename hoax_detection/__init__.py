"""Valid/hoax classifier for short Indonesian news narratives."""

from .cleaning import CleanRecord, RawRecord, clean_dataset, clean_records, load_clean_dataset
from .config import Settings
from .errors import (
    ConfigurationError,
    DataSourceError,
    HoaxDetectionError,
    InsufficientClassDiversityError,
    ModelArtifactError,
)
from .evaluation import MetricsReport, evaluate_model, format_metrics
from .inference import Prediction, predict, predict_many
from .pipeline import PipelineReporter, run_pipeline
from .splitting import Split, split_dataset
from .training import HoaxModel, load_model, save_model, train_model

__all__ = [
    "CleanRecord",
    "RawRecord",
    "clean_dataset",
    "clean_records",
    "load_clean_dataset",
    "Settings",
    "ConfigurationError",
    "DataSourceError",
    "HoaxDetectionError",
    "InsufficientClassDiversityError",
    "ModelArtifactError",
    "MetricsReport",
    "evaluate_model",
    "format_metrics",
    "Prediction",
    "predict",
    "predict_many",
    "PipelineReporter",
    "run_pipeline",
    "Split",
    "split_dataset",
    "HoaxModel",
    "load_model",
    "save_model",
    "train_model",
]
