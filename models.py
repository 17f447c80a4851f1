from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.metrics import pairwise_distances_argmin


@dataclass
class EigenPair:
    """An eigenvalue with its eigenvector"""
    value: float
    vector: np.ndarray


@dataclass
class IndexClusters:
    """Clusterer output that already knows the cluster of every training row"""
    labels: np.ndarray


@dataclass
class CentroidClusters:
    """Clusterer output that has to be queried to place each row"""
    centroids: np.ndarray

    def hard_assign(self, rows: np.ndarray) -> np.ndarray:
        # argmin returns the first centroid on ties
        return pairwise_distances_argmin(rows, self.centroids)


@dataclass
class ClusterResult:
    """Holds the outcome of one spectral clustering run"""
    labels: np.ndarray
    eigenvalues: np.ndarray
    embedding: np.ndarray
    laplacian: str = None

    @property
    def n_clusters(self) -> int:
        return len(set(self.labels.tolist()))

    def clusters(self) -> list:
        """Member indices of every cluster, ordered by cluster id"""
        return [np.flatnonzero(self.labels == label) for label in range(self.n_clusters)]

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(
            self.embedding,
            columns=[f"eig_{i}" for i in range(self.embedding.shape[1])]
        )
        df.insert(0, "label", self.labels)
        df.index.name = "item"
        return df
