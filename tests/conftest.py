from pathlib import Path

import pandas as pd
import pytest
from sklearn.datasets import load_wine


@pytest.fixture
def wine_csv(tmp_path: Path) -> Path:
    """UCI wine data (bundled with scikit-learn) in the raw-table layout."""
    frame = load_wine(as_frame=True).frame
    df = frame.drop(columns=["target"])
    df.insert(0, "cultivar", frame["target"].astype(int) + 1)
    path = tmp_path / "wine.csv"
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def toy_frame() -> pd.DataFrame:
    # Two well-separated clusters per class so any small k classifies perfectly.
    rows = []
    for label, center in [("a", 0.0), ("b", 10.0), ("c", 20.0)]:
        for i in range(20):
            rows.append({"cultivar": label, "x1": center + (i % 5) * 0.1, "x2": center - (i % 4) * 0.1})
    return pd.DataFrame(rows)
