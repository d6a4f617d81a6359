import math
from typing import Iterable, Sequence

import pandas as pd


def assert_required_columns(df: pd.DataFrame, required: Iterable[str]) -> None:
    present = set(df.columns)
    absent = [c for c in required if c not in present]
    if absent:
        raise ValueError(f"Missing required columns: {absent}; table has {sorted(map(str, present))}")


def assert_numeric_predictors(df: pd.DataFrame, predictors: Iterable[str]) -> None:
    predictors = list(predictors)
    if not predictors:
        raise ValueError("No predictor columns found: the table holds only the label column.")

    non_numeric = [c for c in predictors if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise ValueError(f"Predictor columns must be numeric; non-numeric columns: {non_numeric}")

    # Neighbor distances are undefined for NaN, so missing values are rejected rather than imputed.
    with_missing = [c for c in predictors if df[c].isna().any()]
    if with_missing:
        raise ValueError(f"Predictor columns contain missing values: {with_missing}")


def assert_stratifiable(y: pd.Series, n_splits: int) -> None:
    if y.isna().any():
        raise ValueError(f"Label column {y.name!r} contains missing values.")

    counts = y.value_counts()
    counts = counts[counts > 0]
    if len(counts) < 2:
        raise ValueError(f"Need at least two classes to classify; observed: {counts.index.tolist()}")

    too_small = {str(k): int(v) for k, v in counts.items() if v < n_splits}
    if too_small:
        raise ValueError(
            f"Every class needs at least {n_splits} rows for stratified {n_splits}-fold CV; "
            f"undersized classes: {too_small}"
        )


def assert_holdout_feasible(y: pd.Series, test_size: float) -> None:
    # Stratified holdout needs at least one row per class on each side of the split.
    n = int(len(y))
    n_test = int(math.ceil(test_size * n))
    n_train = n - n_test
    n_classes = int((y.value_counts() > 0).sum())
    if n_test < n_classes or n_train < n_classes:
        raise ValueError(
            f"{n} rows give {n_train} train / {n_test} test rows, "
            f"fewer than the {n_classes} classes on at least one side."
        )


def assert_grid_feasible(k_grid: Sequence[int], n_train: int, n_splits: int) -> None:
    if len(k_grid) == 0:
        raise ValueError("Neighbor grid is empty.")
    if min(k_grid) < 1:
        raise ValueError(f"Neighbor counts must be >= 1; got {sorted(k_grid)}")

    # Smallest analysis set across the folds: n_train minus the largest assessment fold.
    largest_fold = -(-n_train // n_splits)
    smallest_analysis = n_train - largest_fold
    if max(k_grid) > smallest_analysis:
        raise ValueError(
            f"Largest neighbor count {max(k_grid)} exceeds the smallest CV analysis set "
            f"({smallest_analysis} rows)."
        )
