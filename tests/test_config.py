from __future__ import annotations

from pathlib import Path

import pytest

from hoax_detection.config import DEFAULT_SEED, DEFAULT_TEST_FRACTION, Settings
from hoax_detection.errors import ConfigurationError


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.test_fraction == DEFAULT_TEST_FRACTION == 0.2
    assert settings.seed == DEFAULT_SEED == 1
    assert settings.stopwords_language is None
    assert settings.log_level == "INFO"


def test_environment_overrides():
    settings = Settings.from_env(
        {
            "HOAX_RAW_DATA": "in/raw.csv",
            "HOAX_CLEANED_DATA": "in/clean.csv",
            "HOAX_MODEL_PATH": "out/model.joblib",
            "HOAX_TEST_FRACTION": "0.3",
            "HOAX_SEED": "42",
            "HOAX_STOPWORDS": "indonesian",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.raw_path == Path("in/raw.csv")
    assert settings.cleaned_path == Path("in/clean.csv")
    assert settings.model_path == Path("out/model.joblib")
    assert settings.test_fraction == 0.3
    assert settings.seed == 42
    assert settings.stopwords_language == "indonesian"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "environ",
    [{"HOAX_SEED": "abc"}, {"HOAX_TEST_FRACTION": "half"}, {"HOAX_TEST_FRACTION": "0"}],
)
def test_invalid_environment(environ):
    with pytest.raises(ConfigurationError):
        Settings.from_env(environ)


def test_override_ignores_none():
    settings = Settings().override(seed=None, model_path=Path("m.joblib"))

    assert settings.seed == DEFAULT_SEED
    assert settings.model_path == Path("m.joblib")
