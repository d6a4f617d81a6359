from typing import Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, precision_recall_fscore_support


def _resolve_labels(y_true, y_pred, labels: Optional[Sequence]) -> list:
    if labels is not None:
        return list(labels)
    observed = pd.unique(np.concatenate([np.asarray(y_true), np.asarray(y_pred)]))
    return sorted(observed.tolist())


def accuracy(y_true, y_pred) -> float:
    return float(accuracy_score(y_true, y_pred))


def confusion_table(y_true, y_pred, labels: Optional[Sequence] = None) -> pd.DataFrame:
    """Long-form confusion matrix with one row per (Prediction, Truth) pair.

    Every pair of levels appears, including zero counts. Prediction varies
    fastest, then Truth.
    """

    labels = _resolve_labels(y_true, y_pred, labels)
    # sklearn puts truth on rows and predictions on columns.
    cm = confusion_matrix(np.asarray(y_true), np.asarray(y_pred), labels=labels)

    rows = []
    for t_i, truth in enumerate(labels):
        for p_i, pred in enumerate(labels):
            rows.append({"Prediction": pred, "Truth": truth, "n": int(cm[t_i, p_i])})
    return pd.DataFrame(rows, columns=["Prediction", "Truth", "n"])


def per_class_metrics(y_true, y_pred, labels: Optional[Sequence] = None) -> pd.DataFrame:
    labels = _resolve_labels(y_true, y_pred, labels)
    precision, recall, f1, support = precision_recall_fscore_support(
        np.asarray(y_true),
        np.asarray(y_pred),
        labels=labels,
        zero_division=0,
    )
    return pd.DataFrame(
        {
            "class": labels,
            "precision": precision.astype(float),
            "recall": recall.astype(float),
            "f1": f1.astype(float),
            "support": support.astype(int),
        }
    )
