import logging

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.metrics import silhouette_score
from tqdm import tqdm

from models import CentroidClusters

logger = logging.getLogger(__name__)


class KMeansWrapper:
    """
    K-means on the spectral embedding. Produces centroids, so every row has
    to be hard-assigned afterwards.

    n_clusters=None uses the width of the embedding. Passing k_range sweeps
    the cluster count instead and keeps the best silhouette.
    """

    def __init__(
        self,
        n_clusters: int = None,
        k_range=None,
        patience: int = 10,
        n_init: int = 10,
        random_state: int = 42
    ):
        self.n_clusters = n_clusters
        self.k_range = k_range
        self.patience = patience
        self.n_init = n_init
        self.random_state = random_state

    def run(self, rows: np.ndarray) -> CentroidClusters:
        if self.k_range is not None:
            return self._sweep(rows)

        k = self.n_clusters or rows.shape[1]
        model = self._fit(rows, k)
        return CentroidClusters(model.cluster_centers_)

    def _fit(self, rows, k):
        model = KMeans(
            n_clusters=k,
            n_init=self.n_init,
            random_state=self.random_state
        )
        return model.fit(rows)

    def _sweep(self, rows):
        best_k = None
        best_silhouette = -1.0
        best_centroids = None
        history = []

        no_improve_count = 0

        # sweep k from large to small
        for k in tqdm(
            sorted(self.k_range, reverse=True),
            desc="KMeans k sweep",
            disable=not logger.isEnabledFor(logging.INFO)
        ):
            if k < 2 or k >= len(rows):
                continue

            model = self._fit(rows, k)
            labels = model.labels_

            # skip degenerate cases
            if len(np.unique(labels)) < 2:
                continue

            sil = silhouette_score(rows, labels)
            history.append({"k": k, "Silhouette": sil})

            if sil > best_silhouette:
                best_silhouette = sil
                best_k = k
                best_centroids = model.cluster_centers_
                no_improve_count = 0
            else:
                no_improve_count += 1

            if no_improve_count >= self.patience:
                logger.debug(f"Early stopping at k={k}")
                break

        if best_centroids is None:
            raise ValueError(
                f"KMeans sweep found no valid cluster count in {list(self.k_range)} "
                f"for {len(rows)} rows"
            )

        logger.debug("KMeans sweep:\n" + pd.DataFrame(history).to_string(index=False))
        logger.info(f"KMeans best k={best_k}, silhouette={best_silhouette:.4f}")

        return CentroidClusters(best_centroids)
