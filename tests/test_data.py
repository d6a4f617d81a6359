from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from wine_knn.data.ingest import load_wine_csv
from wine_knn.data.splits import fold_assignments, make_cv_folds, make_holdout_split
from wine_knn.data.validate import (
    assert_grid_feasible,
    assert_holdout_feasible,
    assert_numeric_predictors,
    assert_required_columns,
    assert_stratifiable,
)


def test_load_wine_csv_marks_label_categorical(wine_csv: Path):
    df = load_wine_csv(wine_csv)
    assert isinstance(df["cultivar"].dtype, pd.CategoricalDtype)
    assert list(df["cultivar"].cat.categories) == [1, 2, 3]
    assert df.shape == (178, 14)


def test_load_wine_csv_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_wine_csv(tmp_path / "missing.csv")


def test_assert_required_columns(toy_frame):
    assert_required_columns(toy_frame, ["cultivar", "x1"])
    with pytest.raises(ValueError, match="proline"):
        assert_required_columns(toy_frame, ["cultivar", "proline"])


def test_assert_numeric_predictors(toy_frame):
    assert_numeric_predictors(toy_frame, ["x1", "x2"])

    with pytest.raises(ValueError, match="cultivar"):
        assert_numeric_predictors(toy_frame, ["x1", "cultivar"])

    with_nan = toy_frame.copy()
    with_nan.loc[3, "x2"] = np.nan
    with pytest.raises(ValueError, match="missing values"):
        assert_numeric_predictors(with_nan, ["x1", "x2"])

    with pytest.raises(ValueError, match="No predictor"):
        assert_numeric_predictors(toy_frame, [])


def test_assert_stratifiable():
    assert_stratifiable(pd.Series(["a"] * 5 + ["b"] * 5, name="cultivar"), n_splits=5)

    with pytest.raises(ValueError, match="two classes"):
        assert_stratifiable(pd.Series(["a"] * 10, name="cultivar"), n_splits=5)

    with pytest.raises(ValueError, match="undersized"):
        assert_stratifiable(pd.Series(["a"] * 10 + ["b"] * 4, name="cultivar"), n_splits=5)


def test_assert_grid_feasible():
    # 10 rows in 5 folds: each analysis set holds 8 rows.
    assert_grid_feasible(list(range(1, 9)), n_train=10, n_splits=5)
    with pytest.raises(ValueError, match="exceeds"):
        assert_grid_feasible(list(range(1, 10)), n_train=10, n_splits=5)
    with pytest.raises(ValueError, match="empty"):
        assert_grid_feasible([], n_train=10, n_splits=5)
    with pytest.raises(ValueError, match=">= 1"):
        assert_grid_feasible([0, 1, 2], n_train=10, n_splits=5)


def test_make_holdout_split_is_stratified():
    y = pd.Series(["a"] * 40 + ["b"] * 20)
    X = np.zeros((len(y), 1))
    train_idx, test_idx = make_holdout_split(X, y, test_size=0.25, seed=123)

    assert len(test_idx) == 15
    assert set(train_idx).isdisjoint(test_idx)
    assert sorted(np.concatenate([train_idx, test_idx]).tolist()) == list(range(60))
    assert y.iloc[test_idx].value_counts().to_dict() == {"a": 10, "b": 5}

    again, _ = make_holdout_split(X, y, test_size=0.25, seed=123)
    assert np.array_equal(train_idx, again)


def test_fold_assignments_cover_every_row():
    y = pd.Series(["a"] * 30 + ["b"] * 30)
    X = np.zeros((len(y), 1))
    fold_id = fold_assignments(X, y, make_cv_folds(n_splits=5, seed=123))

    assert set(fold_id.tolist()) == {0, 1, 2, 3, 4}
    assert np.bincount(fold_id).tolist() == [12] * 5
    for f in range(5):
        assert (y[fold_id == f] == "a").sum() == 6


def test_assert_holdout_feasible():
    assert_holdout_feasible(pd.Series(["a"] * 8 + ["b"] * 8), test_size=0.25)

    # 20 rows over 10 classes: the 5-row test set cannot hold every class.
    many = pd.Series([c for c in range(10) for _ in range(2)])
    with pytest.raises(ValueError, match="fewer than the 10 classes"):
        assert_holdout_feasible(many, test_size=0.25)


def test_assert_required_columns_lists_present_columns(toy_frame):
    with pytest.raises(ValueError, match=r"table has \['cultivar', 'x1', 'x2'\]"):
        assert_required_columns(toy_frame, ["proline"])
