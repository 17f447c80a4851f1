import numpy as np
import pytest
from scipy import sparse

from conftest import StubSolver
from eigen_choosers import FixedEigenChooser
from eigensolver import EigenSolver
from embedding import embed, normalise_rows
from errors import NumericalFailureError
from laplacian import Direction, NormalizedSimilarity, SymmetricLaplacian, UnnormalizedLaplacian


def test_retains_smallest_in_order():
    values = np.array([2.0, 0.5, 1.0])
    vectors = np.array([
        [1.0, 3.0, 0.0],
        [1.0, 0.0, 4.0],
        [1.0, 3.0, 4.0],
    ])
    solver = StubSolver(values, vectors)

    eigenvalues, rows = embed(sparse.identity(3), UnnormalizedLaplacian(), FixedEigenChooser(2), solver)

    assert eigenvalues.tolist() == [0.5, 1.0]
    assert np.allclose(rows, [[1.0, 0.0], [0.0, 1.0], [0.6, 0.8]])
    assert solver.calls == [((3, 3), Direction.SMALLEST, 2, True)]


def test_retains_largest_for_complement():
    values = np.array([0.2, 1.0, 0.7])
    solver = StubSolver(values, np.eye(3))

    eigenvalues, _ = embed(sparse.identity(3), NormalizedSimilarity(), FixedEigenChooser(2), solver)

    assert eigenvalues.tolist() == [1.0, 0.7]
    assert solver.calls[0][1] is Direction.LARGEST


def test_stops_after_k_vectors():
    solver = StubSolver(np.arange(5.0), np.eye(5))

    embed(sparse.identity(5), UnnormalizedLaplacian(), FixedEigenChooser(2), solver)

    assert solver.decomposition.fetched == [0, 1]


def test_zero_row_left_as_zero():
    vectors = np.array([
        [0.0, 0.0],
        [1.0, 1.0],
        [2.0, 0.0],
    ])
    solver = StubSolver(np.array([0.0, 1.0]), vectors)

    _, rows = embed(sparse.identity(3), UnnormalizedLaplacian(), FixedEigenChooser(2), solver)

    assert np.all(np.isfinite(rows))
    assert np.all(rows[0] == 0)
    assert np.allclose(np.linalg.norm(rows[1:], axis=1), 1.0)


def test_too_few_eigenpairs():
    solver = StubSolver(np.array([0.0]), np.ones((3, 1)))

    with pytest.raises(NumericalFailureError) as excinfo:
        embed(sparse.identity(3), UnnormalizedLaplacian(), FixedEigenChooser(2), solver)

    assert excinfo.value.context["k"] == 2
    assert excinfo.value.context["returned"] == 1
    assert excinfo.value.context["variant"] == "unnormalized"


def test_rows_have_unit_norm(random_similarity):
    variant = SymmetricLaplacian()
    L = variant.laplacian(sparse.csr_matrix(random_similarity))

    eigenvalues, rows = embed(L, variant, FixedEigenChooser(3), EigenSolver())

    assert rows.shape == (8, 3)
    assert np.all(np.diff(eigenvalues) >= 0)
    assert np.allclose(np.linalg.norm(rows, axis=1), 1.0)


def test_normalise_rows():
    rows = np.array([[3.0, 4.0], [0.0, 0.0]])

    result = normalise_rows(rows, (rows ** 2).sum(axis=1))

    assert np.allclose(result, [[0.6, 0.8], [0.0, 0.0]])
