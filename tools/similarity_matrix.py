"""
Helpers for turning caller data into a validated sparse similarity matrix.
"""
import numbers

import numpy as np
from scipy import sparse

from errors import InvalidInputError


def from_triples(rows, cols, values, n: int) -> sparse.csr_matrix:
    """Build an n x n matrix from (row, column, value) triples. Duplicates are summed."""
    rows = np.asarray(rows, dtype=int)
    cols = np.asarray(cols, dtype=int)
    values = np.asarray(values, dtype=float)

    if not (len(rows) == len(cols) == len(values)):
        raise InvalidInputError(
            "Triples must have equal lengths",
            rows=len(rows), cols=len(cols), values=len(values),
        )
    if len(rows) and (min(rows.min(), cols.min()) < 0 or max(rows.max(), cols.max()) >= n):
        raise InvalidInputError("Triple index outside matrix", n=n)

    return sparse.coo_matrix((values, (rows, cols)), shape=(n, n)).tocsr()


def from_distance_matrix(distance_matrix: np.ndarray, normalizer: float = None) -> sparse.csr_matrix:
    """Gaussian kernel exp(-d / normalizer), zero distances on the diagonal dropped"""
    distance_matrix = np.asarray(distance_matrix, dtype=float)

    if normalizer is None:
        normalizer = 2 * (np.std(distance_matrix) ** 2)
    if normalizer == 0:
        normalizer = 1.0

    similarity = np.exp(-distance_matrix / normalizer)
    np.fill_diagonal(similarity, 0)
    return sparse.csr_matrix(similarity)


def as_similarity_matrix(data) -> sparse.csr_matrix:
    """Coerce data to float64 CSR and check it is a usable similarity matrix"""
    # (rows, cols, values, n); a 4-row matrix given as a tuple has no integer n
    if isinstance(data, tuple) and len(data) == 4 and isinstance(data[3], numbers.Integral):
        matrix = from_triples(*data)
    elif sparse.issparse(data):
        matrix = sparse.csr_matrix(data, dtype=np.float64)
    else:
        arr = np.asarray(data, dtype=np.float64)
        if arr.ndim != 2:
            raise InvalidInputError("Similarity matrix must be 2-dimensional", ndim=arr.ndim)
        matrix = sparse.csr_matrix(arr)

    _validate_matrix(matrix)
    return matrix


def _validate_matrix(matrix: sparse.csr_matrix):
    n_rows, n_cols = matrix.shape
    if n_rows != n_cols:
        raise InvalidInputError("Similarity matrix is not square", shape=matrix.shape)
    if n_rows == 0:
        raise InvalidInputError("Similarity matrix is empty", n=0)
    if not np.all(np.isfinite(matrix.data)):
        raise InvalidInputError("Similarity matrix has non-finite values", n=n_rows)
    if np.any(matrix.data < 0):
        raise InvalidInputError("Similarity matrix has negative weights", n=n_rows)


def is_symmetric(matrix: sparse.spmatrix, tol: float = 1e-10) -> bool:
    diff = abs(matrix - matrix.T)
    return diff.nnz == 0 or diff.max() <= tol
