"""Load the raw news dataset, drop unusable rows and write the cleaned copy.

The raw file is ``;``-separated with a header row whose first two columns
hold the narrative (``narasi``) and the raw label (``hoax``). The cleaned file
keeps the narrative quoted and renders the label as ``true``/``false``.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .errors import DataSourceError

LOGGER = logging.getLogger(__name__)

SEPARATOR = ";"
CLEAN_HEADER = ("narasi", "Label")

_READ_ERRORS = (
    OSError,
    UnicodeDecodeError,
    pd.errors.EmptyDataError,
    pd.errors.ParserError,
)


@dataclass(frozen=True)
class RawRecord:
    narrative: Optional[str]
    raw_label: Optional[str]


@dataclass(frozen=True)
class CleanRecord:
    narrative: str
    label: bool


def _text_or_none(value) -> Optional[str]:
    return value if isinstance(value, str) else None


def _first_two_fields(fields: List[str]) -> List[str]:
    # Unquoted separators inside a narrative produce extra fields.
    return fields[:2]


def _read_fields(path: Path, **options) -> pd.DataFrame:
    return pd.read_csv(
        path,
        sep=SEPARATOR,
        dtype=str,
        keep_default_na=False,
        engine="python",
        index_col=False,
        encoding="utf-8",
        **options,
    )


def read_raw_records(path: str | Path) -> List[RawRecord]:
    """Read the raw dataset, keeping absent fields as ``None``.

    A well-formed file is read with quote handling, so a quoted narrative may
    contain ``;``. If any row is malformed (a stray quote, or extra unquoted
    separators) the whole file is re-read without quote handling: quotes stay
    literal and each row keeps its first two fields, so no row goes missing.
    """
    path = Path(path)
    if not path.exists():
        raise DataSourceError(
            f"Dataset not found at {path.resolve()}",
            hint="Set HOAX_RAW_DATA or pass --raw to point at the raw CSV.",
        )
    try:
        try:
            df = _read_fields(path, on_bad_lines="error")
        except pd.errors.ParserError as exc:
            LOGGER.warning("Malformed row in %s (%s); re-reading without quote handling", path, exc)
            df = _read_fields(path, quoting=csv.QUOTE_NONE, on_bad_lines=_first_two_fields)
    except _READ_ERRORS as exc:
        raise DataSourceError(f"Unable to read dataset {path}: {exc}") from exc

    if df.shape[1] < 2:
        raise DataSourceError(
            f"Dataset {path} must have a narrative and a label column, found {list(df.columns)}"
        )

    return [
        RawRecord(narrative=_text_or_none(narrative), raw_label=_text_or_none(raw_label))
        for narrative, raw_label in zip(df.iloc[:, 0], df.iloc[:, 1])
    ]


def normalize_label(raw_label: str) -> bool:
    """Map a raw label to a boolean; anything but ``valid`` counts as hoax."""
    return raw_label.strip().lower() == "valid"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def clean_records(raw_records: Iterable[RawRecord]) -> List[CleanRecord]:
    """Drop rows with a blank narrative or label and normalise the rest."""
    return [
        CleanRecord(narrative=record.narrative.strip(), label=normalize_label(record.raw_label))
        for record in raw_records
        if not _is_blank(record.narrative) and not _is_blank(record.raw_label)
    ]


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def write_clean_dataset(records: Sequence[CleanRecord], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(SEPARATOR.join(CLEAN_HEADER) + "\n")
        for record in records:
            label = "true" if record.label else "false"
            f.write(f"{_quote(record.narrative)}{SEPARATOR}{label}\n")


def clean_dataset(raw_path: str | Path, cleaned_path: str | Path) -> List[CleanRecord]:
    """Clean the raw dataset at *raw_path* and persist it to *cleaned_path*."""
    raw_records = read_raw_records(raw_path)
    cleaned = clean_records(raw_records)
    write_clean_dataset(cleaned, cleaned_path)
    LOGGER.info(
        "Cleaned %d of %d rows (%d dropped), saved to %s",
        len(cleaned),
        len(raw_records),
        len(raw_records) - len(cleaned),
        cleaned_path,
    )
    return cleaned


def load_clean_dataset(path: str | Path) -> List[CleanRecord]:
    """Read a cleaned dataset written by :func:`write_clean_dataset`."""
    path = Path(path)
    if not path.exists():
        raise DataSourceError(
            f"Cleaned dataset not found at {path.resolve()}",
            hint="Run the clean step first.",
        )
    try:
        df = pd.read_csv(path, sep=SEPARATOR, dtype=str, keep_default_na=False, encoding="utf-8")
    except _READ_ERRORS as exc:
        raise DataSourceError(f"Unable to read cleaned dataset {path}: {exc}") from exc

    missing = set(CLEAN_HEADER) - set(df.columns)
    if missing:
        raise DataSourceError(f"Cleaned dataset {path} missing required columns: {sorted(missing)}")

    records = [
        CleanRecord(narrative=narrative.strip(), label=str(label).strip().lower() == "true")
        for narrative, label in zip(df["narasi"], df["Label"])
        if isinstance(narrative, str) and narrative.strip()
    ]
    LOGGER.info("Loaded %d cleaned records from %s", len(records), path)
    return records
