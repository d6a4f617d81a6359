from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.model_selection import GridSearchCV
from sklearn.pipeline import Pipeline

from wine_knn.config import CV_FOLDS, K_GRID, KNN_WEIGHTS, PRIMARY_METRIC, SEED
from wine_knn.data.splits import make_cv_folds
from wine_knn.models.knn import build_knn_pipeline


def tune_neighbors(
    X: pd.DataFrame,
    y: pd.Series,
    k_grid: Sequence[int] = K_GRID,
    folds=None,
    weights: str = KNN_WEIGHTS,
    estimator: Pipeline | None = None,
) -> GridSearchCV:
    """Cross-validated accuracy for every neighbor count in ``k_grid``.

    The search never refits; the caller refits the finalized pipeline on the
    full training set.
    """

    estimator = estimator if estimator is not None else build_knn_pipeline(weights=weights)
    folds = folds if folds is not None else make_cv_folds(n_splits=CV_FOLDS, seed=SEED)
    search = GridSearchCV(
        estimator=estimator,
        param_grid={"model__n_neighbors": [int(k) for k in k_grid]},
        scoring=PRIMARY_METRIC,
        cv=folds,
        refit=False,
        error_score="raise",
    )
    search.fit(X, y)
    return search


def collect_accuracy(search: GridSearchCV) -> pd.DataFrame:
    results = search.cv_results_
    n_folds = int(search.n_splits_)
    split_cols = [f"split{i}" for i in range(n_folds)]

    per_fold = np.column_stack([np.asarray(results[f"split{i}_test_score"], dtype=float) for i in range(n_folds)])
    # Sample standard deviation over folds, as a standard error of the mean.
    if n_folds > 1:
        std_err = per_fold.std(axis=1, ddof=1) / np.sqrt(n_folds)
    else:
        std_err = np.full(per_fold.shape[0], np.nan)

    out = pd.DataFrame(
        {
            "neighbors": [int(p["model__n_neighbors"]) for p in results["params"]],
            "metric": PRIMARY_METRIC,
            "mean": per_fold.mean(axis=1),
            "n": n_folds,
            "std_err": std_err,
        }
    )
    out = pd.concat([out, pd.DataFrame(per_fold, columns=split_cols)], axis=1)
    return out.sort_values("neighbors", kind="mergesort").reset_index(drop=True)


def select_best_k(accuracies: pd.DataFrame) -> int:
    if accuracies.empty:
        raise ValueError("No cross-validation results to select from.")
    # Stable sort keeps the smallest neighbor count first among ties.
    ranked = accuracies.sort_values("neighbors", kind="mergesort").sort_values(
        "mean", ascending=False, kind="mergesort"
    )
    return int(ranked.iloc[0]["neighbors"])
