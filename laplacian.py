"""
Graph Laplacians built from a similarity matrix W.

Every variant phrased as D - W or I - ... carries its clustering structure in
the SMALLEST eigenvalues. The complement form D^-1/2 W D^-1/2 is the only
variant read from the LARGEST eigenvalues; its spectrum is 1 - lambda of the
symmetric Laplacian.
"""
from enum import Enum
import logging

import numpy as np
from scipy import sparse

from errors import DegenerateGraphError, InvalidConfigurationError

logger = logging.getLogger(__name__)


class Direction(Enum):
    SMALLEST = "smallest"
    LARGEST = "largest"

    def order(self, values: np.ndarray) -> np.ndarray:
        """Stable ordering of eigenvalue positions, ties keep solver order"""
        values = np.asarray(values, dtype=float)
        if self is Direction.SMALLEST:
            return np.argsort(values, kind="stable")
        return np.argsort(-values, kind="stable")


class GraphLaplacian:
    name = None
    direction = Direction.SMALLEST
    requires_symmetric = True
    symmetric_output = True

    def __init__(self, isolated: str = "raise"):
        if isolated not in ("raise", "zero"):
            raise InvalidConfigurationError(
                "isolated must be 'raise' or 'zero'", isolated=isolated
            )
        self.isolated = isolated

    def laplacian(self, similarity: sparse.spmatrix) -> sparse.csr_matrix:
        raise NotImplementedError

    def _degrees(self, similarity: sparse.spmatrix) -> np.ndarray:
        return np.asarray(similarity.sum(axis=1)).ravel()

    def _inverse_degrees(self, degrees: np.ndarray, power: float) -> np.ndarray:
        isolated = np.flatnonzero(degrees <= 0)
        if len(isolated) and self.isolated == "raise":
            raise DegenerateGraphError(
                "Isolated node has undefined normalisation",
                variant=self.name,
                nodes=isolated.tolist()[:10],
                n=len(degrees),
            )
        if len(isolated):
            logger.debug(f"{self.name}: {len(isolated)} isolated nodes normalised to 0")

        inverse = np.zeros_like(degrees, dtype=float)
        connected = degrees > 0
        inverse[connected] = degrees[connected] ** -power
        return inverse

    def __repr__(self):
        return f"{type(self).__name__}(isolated={self.isolated!r})"


class UnnormalizedLaplacian(GraphLaplacian):
    """L = D - W"""
    name = "unnormalized"

    def laplacian(self, similarity):
        D = sparse.diags(self._degrees(similarity), format="csr")
        return (D - similarity).tocsr()


class SymmetricLaplacian(GraphLaplacian):
    """L = I - D^-1/2 W D^-1/2"""
    name = "symmetric"

    def laplacian(self, similarity):
        n = similarity.shape[0]
        D_inv_sqrt = sparse.diags(self._inverse_degrees(self._degrees(similarity), 0.5), format="csr")
        I = sparse.identity(n, format="csr", dtype=np.float64)
        return (I - D_inv_sqrt @ similarity @ D_inv_sqrt).tocsr()


class RandomWalkLaplacian(GraphLaplacian):
    """L = I - D^-1 W, not symmetric so it goes through the general solver"""
    name = "random_walk"
    requires_symmetric = False
    symmetric_output = False

    def laplacian(self, similarity):
        n = similarity.shape[0]
        D_inv = sparse.diags(self._inverse_degrees(self._degrees(similarity), 1.0), format="csr")
        I = sparse.identity(n, format="csr", dtype=np.float64)
        return (I - D_inv @ similarity).tocsr()


class NormalizedSimilarity(GraphLaplacian):
    """D^-1/2 W D^-1/2, the complement of the symmetric Laplacian"""
    name = "normalized_similarity"
    direction = Direction.LARGEST

    def laplacian(self, similarity):
        D_inv_sqrt = sparse.diags(self._inverse_degrees(self._degrees(similarity), 0.5), format="csr")
        return (D_inv_sqrt @ similarity @ D_inv_sqrt).tocsr()


LAPLACIANS = {
    cls.name: cls
    for cls in (UnnormalizedLaplacian, SymmetricLaplacian, RandomWalkLaplacian, NormalizedSimilarity)
}


def get_laplacian(name: str, isolated: str = "raise") -> GraphLaplacian:
    try:
        return LAPLACIANS[name](isolated=isolated)
    except KeyError:
        raise InvalidConfigurationError(
            "Unknown Laplacian variant", variant=name, known=sorted(LAPLACIANS)
        ) from None
