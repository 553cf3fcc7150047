"""Shared fixtures: synthetic Indonesian news datasets."""
from __future__ import annotations

import random
from pathlib import Path
from typing import List, Tuple

import pytest

from hoax_detection.cleaning import CleanRecord

_VALID_SUBJECTS = ["Kementerian Kesehatan", "Badan Pusat Statistik", "Bank Indonesia", "Pemerintah provinsi", "Kepolisian daerah"]
_VALID_ACTIONS = [
    "merilis data resmi tentang",
    "mengumumkan jadwal",
    "menyampaikan laporan tahunan mengenai",
    "meresmikan program",
    "menggelar konferensi pers terkait",
]
_VALID_TOPICS = ["inflasi bulanan", "vaksinasi anak", "pembangunan jalan tol", "anggaran pendidikan", "harga beras"]

_HOAX_OPENERS = ["VIRAL!", "Segera bagikan:", "Awas,", "Heboh!", "Jangan sampai terlambat,"]
_HOAX_CLAIMS = [
    "air rebusan daun ajaib menyembuhkan semua penyakit",
    "chip rahasia ditanam lewat suntikan",
    "uang gratis dibagikan lewat pesan berantai",
    "gempa besar pasti terjadi malam ini",
    "jaringan internet dimatikan selamanya",
]
_HOAX_CLOSERS = ["sebarkan ke semua grup!", "sebelum dihapus!", "pesan dari orang dalam", "jangan percaya media", "100% nyata"]


def make_narrative(rng: random.Random, valid: bool) -> str:
    if valid:
        return f"{rng.choice(_VALID_SUBJECTS)} {rng.choice(_VALID_ACTIONS)} {rng.choice(_VALID_TOPICS)} pada hari {rng.randint(1, 28)}."
    return f"{rng.choice(_HOAX_OPENERS)} {rng.choice(_HOAX_CLAIMS)}, {rng.choice(_HOAX_CLOSERS)}"


def make_dataset(size: int, *, seed: int = 7, valid_share: float = 0.5) -> List[CleanRecord]:
    rng = random.Random(seed)
    records = []
    for _ in range(size):
        valid = rng.random() < valid_share
        records.append(CleanRecord(narrative=make_narrative(rng, valid), label=valid))
    return records


def write_raw_csv(path: Path, rows: List[Tuple[str, str]]) -> Path:
    lines = ["narasi;hoax"]
    for narrative, label in rows:
        quoted = '"' + narrative.replace('"', '""') + '"'
        lines.append(f"{quoted};{label}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def small_dataset() -> List[CleanRecord]:
    return make_dataset(60)


@pytest.fixture
def news_dataset() -> List[CleanRecord]:
    return make_dataset(600)


@pytest.fixture
def raw_csv(tmp_path: Path) -> Path:
    """A 600-row raw file with casing and whitespace noise in the labels."""
    rng = random.Random(11)
    rows = []
    for record in make_dataset(600, seed=3):
        label = "valid" if record.label else "hoax"
        label = rng.choice([label, label.upper(), f"  {label.capitalize()} "])
        rows.append((record.narrative, label))
    return write_raw_csv(tmp_path / "raw.csv", rows)


@pytest.fixture
def trained_model(small_dataset):
    from hoax_detection.training import train_model

    return train_model(small_dataset)
