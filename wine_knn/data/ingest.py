from pathlib import Path

import pandas as pd

from wine_knn.config import TARGET_COL


def load_wine_csv(path: Path, target: str = TARGET_COL) -> pd.DataFrame:
    """Read the raw wine table and mark the label column as categorical.

    Category levels are sorted so confusion tables and class metrics have a
    stable order regardless of row order in the file.
    """

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Wine CSV not found at: {path}")

    df = pd.read_csv(path)
    if target in df.columns:
        levels = sorted(df[target].dropna().unique().tolist())
        df[target] = pd.Categorical(df[target], categories=levels)
    return df
