from pathlib import Path
from typing import Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from wine_knn.config import ACCURACY_PLOT_SIZE, FIGURE_DPI


def plot_accuracy_by_k(accuracies: pd.DataFrame, figsize: Tuple[float, float] = ACCURACY_PLOT_SIZE):
    data = accuracies.sort_values("neighbors")
    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(data["neighbors"], data["mean"], color="black", linewidth=1)
    ax.scatter(data["neighbors"], data["mean"], color="black", s=12, zorder=3)
    ax.set_title("Accuracy by Number of Neighbors")
    ax.set_xlabel("Number of Neighbors")
    ax.set_ylabel("Accuracy")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def save_figure(fig, path: Path, dpi: int = FIGURE_DPI) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
