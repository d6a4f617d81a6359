from sklearn.base import clone
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from wine_knn.config import KNN_WEIGHTS


def build_knn_pipeline(n_neighbors: int = 5, weights: str = KNN_WEIGHTS) -> Pipeline:
    return Pipeline(
        steps=[
            ("scaler", StandardScaler(with_mean=True, with_std=True)),
            ("model", KNeighborsClassifier(n_neighbors=n_neighbors, weights=weights, metric="euclidean")),
        ]
    )


def finalize_knn(pipeline: Pipeline, best_k: int) -> Pipeline:
    """Unfitted copy of ``pipeline`` with the tuned neighbor count."""
    final = clone(pipeline)
    final.set_params(model__n_neighbors=int(best_k))
    return final
