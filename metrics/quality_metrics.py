import numpy as np
from sklearn.metrics import (
    calinski_harabasz_score,
    davies_bouldin_score,
    silhouette_score,
)


class QualityMetrics:

    def quality_metrics(self, embedding: np.ndarray, labels: np.ndarray) -> dict:
        """Compute clustering quality metrics on the spectral embedding

        The scores are only defined for 2 <= n_clusters <= n_samples - 1,
        outside that range an empty dict is returned.
        """
        n_clusters = len(np.unique(labels))
        if n_clusters < 2 or n_clusters >= len(labels):
            return {}

        return {
            "Silhouette Score": self.silhouette_score_wrapper(embedding, labels),
            "Calinski-Harabasz": self.calinski_harabasz_score_wrapper(embedding, labels),
            "Davies-Bouldin": self.davies_bouldin_score_wrapper(embedding, labels),
        }

    def silhouette_score_wrapper(self, embedding: np.ndarray, labels: np.ndarray) -> float:
        """Compute Silhouette Score"""
        return float(silhouette_score(embedding, labels))

    def calinski_harabasz_score_wrapper(self, embedding: np.ndarray, labels: np.ndarray) -> float:
        """Compute Calinski-Harabasz Score"""
        return float(calinski_harabasz_score(embedding, labels))

    def davies_bouldin_score_wrapper(self, embedding: np.ndarray, labels: np.ndarray) -> float:
        """Compute Davies-Bouldin Score"""
        return float(davies_bouldin_score(embedding, labels))
