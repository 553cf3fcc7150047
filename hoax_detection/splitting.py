"""Seeded train/test partitioning of a cleaned dataset."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from sklearn.model_selection import train_test_split

from .cleaning import CleanRecord


@dataclass(frozen=True)
class Split:
    train: Tuple[CleanRecord, ...]
    test: Tuple[CleanRecord, ...]
    train_indices: Tuple[int, ...]
    test_indices: Tuple[int, ...]


def split_dataset(dataset: Sequence[CleanRecord], test_fraction: float, seed: int) -> Split:
    """Partition *dataset* into disjoint train and test subsets.

    The assignment is a shuffle of record indices driven by *seed*, so the
    same dataset, fraction and seed always give the same membership. The test
    subset holds ``ceil(test_fraction * len(dataset))`` records and both
    subsets keep the dataset order.
    """
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must lie strictly between 0 and 1, got {test_fraction}")

    indices = np.arange(len(dataset))
    train_idx, test_idx = train_test_split(
        indices, test_size=test_fraction, random_state=seed, shuffle=True
    )
    train_indices = tuple(int(i) for i in sorted(train_idx))
    test_indices = tuple(int(i) for i in sorted(test_idx))
    return Split(
        train=tuple(dataset[i] for i in train_indices),
        test=tuple(dataset[i] for i in test_indices),
        train_indices=train_indices,
        test_indices=test_indices,
    )
