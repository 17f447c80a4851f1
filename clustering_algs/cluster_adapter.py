import logging

import numpy as np

from errors import InvalidConfigurationError
from models import CentroidClusters, IndexClusters

logger = logging.getLogger(__name__)


def assign(rows: np.ndarray, clusterer) -> np.ndarray:
    """Run the clusterer on the embedding and reduce its output to one label per row"""
    n, k = rows.shape
    try:
        clusters = clusterer.run(rows)
    except ValueError as e:
        raise InvalidConfigurationError(
            f"Clusterer rejected the embedding: {e}",
            clusterer=type(clusterer).__name__, n=n, k=k,
        ) from e

    if isinstance(clusters, IndexClusters):
        labels = np.asarray(clusters.labels)
    elif isinstance(clusters, CentroidClusters):
        labels = clusters.hard_assign(rows)
    else:
        raise InvalidConfigurationError(
            "Clusterer must return IndexClusters or CentroidClusters",
            clusterer=type(clusterer).__name__, returned=type(clusters).__name__,
        )

    if labels.shape != (n,):
        raise InvalidConfigurationError(
            "Clusterer returned the wrong number of labels",
            clusterer=type(clusterer).__name__, n=n, returned=labels.shape,
        )

    return relabel(labels)


def relabel(labels: np.ndarray) -> np.ndarray:
    """Renumber ids to 0..c-1 in order of first appearance"""
    _, first_seen, inverse = np.unique(labels, return_index=True, return_inverse=True)
    rank = np.empty(len(first_seen), dtype=int)
    rank[np.argsort(first_seen)] = np.arange(len(first_seen))
    return rank[inverse.ravel()]
