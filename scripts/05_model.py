"""Performs KNN modeling on the wine dataset and summarizes the results into figures and tables.

Usage:
  python scripts/05_model.py --input_dir=<input_dir> --output_dir=<output_dir>

--input_dir is the path (including filename) to the raw wine CSV; --output_dir
is the directory where the figure and tables are written.
"""

from __future__ import annotations

import argparse
import os
import random
import sys
import tempfile
from pathlib import Path

import numpy as np
import pandas as pd

# Matplotlib must be configured before importing pyplot.
_mpl_cache_dir = Path(tempfile.gettempdir()) / "matplotlib"
_mpl_cache_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", str(_mpl_cache_dir))

import joblib


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wine_knn.config import (  # noqa: E402
    ACCURACY_PLOT_FILE,
    ACCURACY_SCORE_FILE,
    CLASS_METRICS_FILE,
    CONFUSION_TABLE_FILE,
    CV_ACCURACY_FILE,
    CV_FOLDS,
    K_MAX,
    K_MIN,
    KNN_WEIGHT_CHOICES,
    KNN_WEIGHTS,
    MODEL_FILE,
    PRIMARY_METRIC,
    RUN_METADATA_FILE,
    SEED,
    TARGET_COL,
    TEST_SIZE,
)
from wine_knn.data.ingest import load_wine_csv  # noqa: E402
from wine_knn.data.splits import fold_assignments, make_cv_folds, make_holdout_split  # noqa: E402
from wine_knn.data.validate import (  # noqa: E402
    assert_grid_feasible,
    assert_holdout_feasible,
    assert_numeric_predictors,
    assert_required_columns,
    assert_stratifiable,
)
from wine_knn.evaluation.metrics import accuracy, confusion_table, per_class_metrics  # noqa: E402
from wine_knn.models.knn import build_knn_pipeline, finalize_knn  # noqa: E402
from wine_knn.models.tuning import collect_accuracy, select_best_k, tune_neighbors  # noqa: E402
from wine_knn.reporting.figures import plot_accuracy_by_k, save_figure  # noqa: E402
from wine_knn.utils.logging import run_metadata, write_json  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="KNN modeling on the wine dataset: CV-tuned neighbor count, test accuracy, confusion table."
    )
    parser.add_argument("--input_dir", type=Path, required=True, help="Path (including filename) to raw data.")
    parser.add_argument("--output_dir", type=Path, required=True, help="Directory where the results are saved.")
    parser.add_argument("--seed", type=int, default=SEED, help=f"Random seed for split and CV folds (default: {SEED}).")
    parser.add_argument("--folds", type=int, default=CV_FOLDS, help=f"Number of CV folds (default: {CV_FOLDS}).")
    parser.add_argument(
        "--max-k", type=int, default=K_MAX, help=f"Largest neighbor count in the grid {K_MIN}..max (default: {K_MAX})."
    )
    parser.add_argument(
        "--weights",
        choices=KNN_WEIGHT_CHOICES,
        default=KNN_WEIGHTS,
        help="Neighbor vote weighting; 'uniform' is the rectangular kernel.",
    )
    parser.add_argument("--save-model", action="store_true", help=f"Also write the fitted pipeline to {MODEL_FILE}.")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    if args.folds < 2:
        raise SystemExit("--folds must be an integer >= 2.")
    if args.max_k < K_MIN:
        raise SystemExit(f"--max-k must be an integer >= {K_MIN}.")
    if not args.input_dir.is_file():
        raise SystemExit(f"Input CSV not found: {args.input_dir}")

    random.seed(args.seed)
    np.random.seed(args.seed)

    outdir = args.output_dir
    outdir.mkdir(parents=True, exist_ok=True)

    # 1. Load
    print(f"Loading {args.input_dir}")
    df = load_wine_csv(args.input_dir)
    try:
        assert_required_columns(df, [TARGET_COL])
        predictors = [c for c in df.columns if c != TARGET_COL]
        assert_numeric_predictors(df, predictors)
        assert_stratifiable(df[TARGET_COL], n_splits=2)
    except ValueError as exc:
        raise SystemExit(f"Invalid wine table: {exc}")

    X = df[predictors]
    y = df[TARGET_COL]
    labels = list(y.cat.categories)

    # 2. Stratified holdout split
    try:
        assert_holdout_feasible(y, test_size=TEST_SIZE)
        train_pos, test_pos = make_holdout_split(X, y, test_size=TEST_SIZE, seed=args.seed)
    except ValueError as exc:
        raise SystemExit(f"Cannot split the wine table into train and test sets: {exc}")
    X_train, y_train = X.iloc[train_pos], y.iloc[train_pos]
    X_test, y_test = X.iloc[test_pos], y.iloc[test_pos]
    print(f"Split {len(df)} rows: {len(train_pos)} train / {len(test_pos)} test")

    # 3. Stratified k-fold grid search over neighbor counts
    k_grid = list(range(K_MIN, args.max_k + 1))
    try:
        assert_stratifiable(y_train, n_splits=args.folds)
        assert_grid_feasible(k_grid, n_train=len(train_pos), n_splits=args.folds)
    except ValueError as exc:
        raise SystemExit(f"Cannot run {args.folds}-fold CV on the training set: {exc}")

    print(f"Tuning k over {k_grid[0]}..{k_grid[-1]} with {args.folds}-fold CV ({args.weights} weights)")
    folds = make_cv_folds(n_splits=args.folds, seed=args.seed)
    fold_id = fold_assignments(X_train, y_train, folds)
    base = build_knn_pipeline(weights=args.weights)
    search = tune_neighbors(X_train, y_train, k_grid=k_grid, folds=folds, estimator=base)

    accuracies = collect_accuracy(search)
    accuracies.to_csv(outdir / CV_ACCURACY_FILE, index=False)

    fig = plot_accuracy_by_k(accuracies)
    save_figure(fig, outdir / ACCURACY_PLOT_FILE)

    # 4. Best k
    best_k = select_best_k(accuracies)
    best_row = accuracies.loc[accuracies["neighbors"] == best_k].iloc[0]
    print(f"Best k = {best_k} (mean CV {PRIMARY_METRIC} {best_row['mean']:.4f})")

    # 5. Refit on the full training set
    print(f"Refitting k={best_k} on {len(train_pos)} training rows")
    final_model = finalize_knn(base, best_k)
    final_model.fit(X_train, y_train)

    # 6. Predict the test set
    print(f"Predicting {len(test_pos)} test rows")
    y_pred = final_model.predict(X_test)

    # 7. Tables
    test_accuracy = accuracy(y_test, y_pred)
    pd.DataFrame({"accuracy": [test_accuracy]}).to_csv(outdir / ACCURACY_SCORE_FILE, index=False)
    confusion_table(y_test, y_pred, labels=labels).to_csv(outdir / CONFUSION_TABLE_FILE, index=False)
    per_class_metrics(y_test, y_pred, labels=labels).to_csv(outdir / CLASS_METRICS_FILE, index=False)
    print(f"Test {PRIMARY_METRIC} = {test_accuracy:.4f}")

    artifacts = {
        "accuracy_plot": str(outdir / ACCURACY_PLOT_FILE),
        "accuracy_score": str(outdir / ACCURACY_SCORE_FILE),
        "confusion_table": str(outdir / CONFUSION_TABLE_FILE),
        "cv_accuracy": str(outdir / CV_ACCURACY_FILE),
        "class_metrics": str(outdir / CLASS_METRICS_FILE),
        "model_joblib": None,
    }
    if args.save_model:
        joblib.dump(final_model, outdir / MODEL_FILE)
        artifacts["model_joblib"] = str(outdir / MODEL_FILE)

    meta = run_metadata(
        input_path=args.input_dir,
        output_dir=outdir,
        protocol={
            "target": TARGET_COL,
            "predictors": predictors,
            "classes": [str(c) for c in labels],
            "seed": args.seed,
            "test_size": TEST_SIZE,
            "cv_folds": args.folds,
            "k_grid": k_grid,
            "weights": args.weights,
            "metric": PRIMARY_METRIC,
        },
        results={
            "n_rows": int(len(df)),
            "n_train": int(len(train_pos)),
            "n_test": int(len(test_pos)),
            "fold_sizes": np.bincount(fold_id, minlength=args.folds).tolist(),
            "best_k": best_k,
            "best_cv_mean": float(best_row["mean"]),
            "test_accuracy": test_accuracy,
        },
        artifacts=artifacts,
        project_root=PROJECT_ROOT,
    )
    write_json(outdir / RUN_METADATA_FILE, meta)

    print(f"Wrote KNN modeling artifacts to {outdir}/")


if __name__ == "__main__":
    main()
