import logging

import numpy as np

from clustering_algs.cluster_adapter import assign
from configs import SpectralClusteringConfig
from eigensolver import EigenSolver
from embedding import embed
from errors import InvalidInputError, SpectralClusteringError
from models import ClusterResult
from tools.similarity_matrix import as_similarity_matrix, is_symmetric

logger = logging.getLogger(__name__)


class SpectralClusterer:
    """
    Clusters items from their pairwise similarities.

    The Laplacian of the similarity graph is built, its extreme eigenvectors
    give each item a point in a small space, and those points are handed to
    a spatial clusterer. Only the frozen config is shared between calls, so
    one instance can serve several threads.
    """

    def __init__(self, config: SpectralClusteringConfig = None):
        self.config = config or SpectralClusteringConfig()
        self.solver = EigenSolver(self.config.solver)

    def cluster(self, similarity) -> ClusterResult:
        variant = self.config.laplacian
        n = None
        try:
            similarity = as_similarity_matrix(similarity)
            n = similarity.shape[0]

            if variant.requires_symmetric and not is_symmetric(similarity):
                raise InvalidInputError("Laplacian variant requires a symmetric similarity matrix")

            laplacian = variant.laplacian(similarity)
            eigenvalues, rows = embed(laplacian, variant, self.config.eigen_chooser, self.solver)
            labels = assign(rows, self.config.clusterer)
        except SpectralClusteringError as e:
            context = dict(variant=variant.name, eigen_chooser=repr(self.config.eigen_chooser))
            if n is not None:
                context["n"] = n
            e.add_context(**context)
            raise

        result = ClusterResult(labels, eigenvalues, rows, variant.name)
        logger.debug(
            f"Spectral clustering ({variant.name}) found {result.n_clusters} clusters "
            f"for {n} items using {len(eigenvalues)} eigenvectors"
        )
        return result

    def cluster_labels(self, similarity) -> np.ndarray:
        return self.cluster(similarity).labels
