from typing import Tuple
import numpy as np
from sklearn.model_selection import StratifiedKFold, StratifiedShuffleSplit

from wine_knn.config import SEED, TEST_SIZE


def make_holdout_split(X, y, test_size: float = TEST_SIZE, seed: int = SEED) -> Tuple[np.ndarray, np.ndarray]:
    """Positional (train, test) indices, stratified on the cultivar label."""
    holdout = StratifiedShuffleSplit(n_splits=1, test_size=test_size, random_state=seed)
    return next(holdout.split(X, y))


def make_cv_folds(n_splits: int, seed: int) -> StratifiedKFold:
    return StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=seed)


def fold_assignments(X, y, folds: StratifiedKFold) -> np.ndarray:
    """Fold id of each training row (the fold in which it is held out)."""
    fold_id = np.full(len(y), fill_value=-1, dtype=int)
    for f, (_, va) in enumerate(folds.split(X, y)):
        fold_id[va] = f
    if (fold_id < 0).any():
        raise RuntimeError("Failed to assign all training rows to CV folds.")
    return fold_id
