import logging

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import ArpackError, ArpackNoConvergence, eigs, eigsh

from configs import EigenSolverConfig
from errors import NumericalFailureError
from laplacian import Direction

logger = logging.getLogger(__name__)


class EigenDecomposition:
    """
    Eigenpairs of one solver run, in the order the solver produced them.

    Eigenvalues are held eagerly so that a policy can look at the whole
    spectrum; eigenvectors are only sliced out when asked for.
    """

    def __init__(self, values: np.ndarray, vectors: np.ndarray):
        self.values = np.asarray(values, dtype=float)
        self._vectors = vectors

    def __len__(self):
        return len(self.values)

    @property
    def dimension(self) -> int:
        return self._vectors.shape[0]

    def vector(self, i: int) -> np.ndarray:
        return self._vectors[:, i]

    def pairs(self):
        for i in range(len(self)):
            yield self.values[i], self.vector(i)


class EigenSolver:

    def __init__(self, config: EigenSolverConfig = None):
        self.config = config or EigenSolverConfig()

    def solve(
        self,
        matrix: sparse.spmatrix,
        direction: Direction,
        n_eigenpairs: int,
        symmetric: bool = True,
    ) -> EigenDecomposition:
        n = matrix.shape[0]
        m = max(1, min(n_eigenpairs, n))

        try:
            if n <= self.config.dense_threshold or m >= n - 1:
                logger.debug(f"Dense eigensolve: n={n}, pairs={m}, direction={direction.value}")
                values, vectors = self._dense(matrix, direction, m, symmetric)
            else:
                logger.debug(f"ARPACK eigensolve: n={n}, pairs={m}, direction={direction.value}")
                values, vectors = self._arpack(matrix, direction, m, symmetric)
        except ArpackNoConvergence as e:
            raise NumericalFailureError(
                "Eigensolver failed to converge",
                n=n, requested=m, converged=len(e.eigenvalues), direction=direction.value,
            ) from e
        except (ArpackError, np.linalg.LinAlgError) as e:
            raise NumericalFailureError(
                f"Eigensolver failed: {e}", n=n, requested=m, direction=direction.value
            ) from e

        return EigenDecomposition(self._real(values), self._real(vectors))

    def _dense(self, matrix, direction, m, symmetric):
        A = matrix.toarray() if sparse.issparse(matrix) else np.asarray(matrix)
        if symmetric:
            values, vectors = np.linalg.eigh(A)
        else:
            values, vectors = np.linalg.eig(A)

        # keep the m extreme pairs but hand them back in LAPACK order
        keep = np.sort(direction.order(values.real)[:m])
        return values[keep], vectors[:, keep]

    def _arpack(self, matrix, direction, m, symmetric):
        kwargs = dict(k=m, tol=self.config.tol, maxiter=self.config.maxiter)
        if symmetric:
            which = "SA" if direction is Direction.SMALLEST else "LA"
            return eigsh(matrix, which=which, **kwargs)
        which = "SR" if direction is Direction.SMALLEST else "LR"
        return eigs(matrix, which=which, **kwargs)

    def _real(self, arr: np.ndarray) -> np.ndarray:
        if np.iscomplexobj(arr):
            residue = np.abs(arr.imag).max(initial=0.0)
            if residue > self.config.imag_tolerance:
                logger.warning(f"Discarding imaginary residue of {residue:.3e} from eigensolver output")
            arr = arr.real
        return np.ascontiguousarray(arr, dtype=float)
