import logging

import numpy as np
from kneed import KneeLocator

from errors import InvalidConfigurationError
from models import EigenPair

logger = logging.getLogger(__name__)


class EigenChooser:
    """Decides how many eigenvectors to keep and hands them out in order"""

    def n_requested(self, total_dimension: int) -> int:
        """How many eigenpairs the solver should be asked for"""
        return total_dimension

    def choose_count(self, values, total_dimension: int, direction) -> int:
        raise NotImplementedError

    def iterate(self, decomposition, direction):
        """Yield eigenpairs sorted along direction, fetching vectors lazily"""
        values = decomposition.values
        for i in direction.order(values):
            yield EigenPair(float(values[i]), decomposition.vector(i))


class FixedEigenChooser(EigenChooser):

    def __init__(self, k: int):
        if k < 1:
            raise InvalidConfigurationError("Eigenvector count must be at least 1", k=k)
        self.k = k

    def n_requested(self, total_dimension):
        return min(self.k, total_dimension)

    def choose_count(self, values, total_dimension, direction):
        if self.k > total_dimension:
            raise InvalidConfigurationError(
                "Requested more eigenvectors than the matrix has dimensions",
                k=self.k, n=total_dimension,
            )
        return self.k

    def __repr__(self):
        return f"FixedEigenChooser(k={self.k})"


class EigengapChooser(EigenChooser):
    """Keeps the eigenvectors before the largest gap in the sorted spectrum"""

    def __init__(self, min_k: int = 1, max_k: int = 10):
        if min_k < 1 or max_k < min_k:
            raise InvalidConfigurationError(
                "Eigengap bounds must satisfy 1 <= min_k <= max_k", min_k=min_k, max_k=max_k
            )
        self.min_k = min_k
        self.max_k = max_k

    def n_requested(self, total_dimension):
        # one past max_k so the gap after the last candidate can be seen
        return min(self.max_k + 1, total_dimension)

    def _bounds(self, total_dimension):
        max_k = min(self.max_k, total_dimension)
        return min(self.min_k, max_k), max_k

    def _sorted(self, values, direction, max_k):
        values = np.asarray(values, dtype=float)
        return values[direction.order(values)][:max_k + 1]

    def choose_count(self, values, total_dimension, direction):
        min_k, max_k = self._bounds(total_dimension)
        ordered = self._sorted(values, direction, max_k)
        k = self._largest_gap(ordered, min_k, max_k)
        logger.debug(f"Eigengap selected k={k} from {len(ordered)} eigenvalues")
        return k

    def _largest_gap(self, ordered, min_k, max_k):
        # a flat spectrum has no gap to choose
        if len(ordered) == 0 or ordered.max() - ordered.min() <= 0:
            return min_k

        gaps = np.abs(np.diff(ordered))[min_k - 1:max_k]
        if len(gaps) == 0:
            return min_k
        return min_k + int(np.argmax(gaps))

    def __repr__(self):
        return f"{type(self).__name__}(min_k={self.min_k}, max_k={self.max_k})"


class KneeEigenChooser(EigengapChooser):
    """Keeps the eigenvectors up to the elbow of the sorted spectrum"""

    def __init__(self, min_k: int = 1, max_k: int = 10, sensitivity: float = 1.0):
        super().__init__(min_k, max_k)
        self.sensitivity = sensitivity

    def choose_count(self, values, total_dimension, direction):
        min_k, max_k = self._bounds(total_dimension)
        ordered = self._sorted(values, direction, max_k)

        knee = None
        if len(ordered) >= 3 and ordered.max() > ordered.min():
            increasing = ordered[-1] >= ordered[0]
            kneedle = KneeLocator(
                range(len(ordered)),
                ordered,
                S=self.sensitivity,
                curve="convex" if increasing else "concave",
                direction="increasing" if increasing else "decreasing",
            )
            knee = kneedle.elbow

        if knee is None:
            logger.debug("No knee in eigenvalue spectrum, falling back to eigengap")
            return self._largest_gap(ordered, min_k, max_k)

        k = int(np.clip(knee + 1, min_k, max_k))
        logger.debug(f"Knee selected k={k} from {len(ordered)} eigenvalues")
        return k
