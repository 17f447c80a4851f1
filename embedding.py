import logging

import numpy as np

from errors import NumericalFailureError

logger = logging.getLogger(__name__)


def embed(laplacian_matrix, variant, eigen_chooser, solver):
    """
    Embed every item as a row built from the retained eigenvectors.

    The solver runs once; the chooser picks k from the whole spectrum and
    then hands out eigenpairs in its order, of which only the first k are
    consumed. Each row is scaled to unit length. Rows that receive no signal
    from any retained eigenvector stay all-zero.

    Returns:
        (eigenvalues, rows): the k retained eigenvalues and the n x k embedding
    """
    n = laplacian_matrix.shape[0]
    direction = variant.direction

    decomposition = solver.solve(
        laplacian_matrix,
        direction,
        eigen_chooser.n_requested(n),
        symmetric=variant.symmetric_output,
    )

    k = eigen_chooser.choose_count(decomposition.values, n, direction)
    logger.debug(f"Selected dimensions: {k}")
    if len(decomposition) < k:
        raise NumericalFailureError(
            "Eigensolver returned fewer eigenpairs than requested",
            k=k, returned=len(decomposition), n=n, variant=variant.name,
        )

    rows = np.zeros((n, k))
    row_norm_sq = np.zeros(n)
    eigenvalues = np.zeros(k)

    col = 0
    for pair in eigen_chooser.iterate(decomposition, direction):
        eigenvalues[col] = pair.value
        rows[:, col] = pair.vector
        row_norm_sq += pair.vector ** 2
        col += 1
        if col == k:
            break

    return eigenvalues, normalise_rows(rows, row_norm_sq)


def normalise_rows(rows: np.ndarray, row_norm_sq: np.ndarray) -> np.ndarray:
    norms = np.sqrt(row_norm_sq)
    empty = norms == 0
    if empty.any():
        logger.warning(f"{int(empty.sum())} rows have no signal in the embedding, left as zero")

    norms[empty] = 1.0
    return rows / norms[:, None]
