import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from eigensolver import EigenDecomposition


def block_similarity(sizes, weight=1.0, bridge=0.0):
    """Fully connected blocks, consecutive blocks joined by one bridge edge"""
    n = sum(sizes)
    W = np.zeros((n, n))
    start = 0
    for size in sizes:
        W[start:start + size, start:start + size] = weight
        if bridge and start + size < n:
            W[start + size - 1, start + size] = bridge
            W[start + size, start + size - 1] = bridge
        start += size
    np.fill_diagonal(W, 0)
    return W


def partition(labels):
    """Label-permutation-free view of an assignment"""
    groups = {}
    for item, label in enumerate(labels):
        groups.setdefault(label, set()).add(item)
    return {frozenset(g) for g in groups.values()}


class StubSolver:
    """Returns a fixed decomposition and records how it was called"""

    def __init__(self, values, vectors):
        self.decomposition = CountingDecomposition(values, vectors)
        self.calls = []

    def solve(self, matrix, direction, n_eigenpairs, symmetric=True):
        self.calls.append((matrix.shape, direction, n_eigenpairs, symmetric))
        return self.decomposition


class CountingDecomposition(EigenDecomposition):

    def __init__(self, values, vectors):
        super().__init__(values, np.asarray(vectors, dtype=float))
        self.fetched = []

    def vector(self, i):
        self.fetched.append(i)
        return super().vector(i)


@pytest.fixture
def two_groups():
    return block_similarity([3, 3])


@pytest.fixture
def bridged_groups():
    return block_similarity([3, 4], bridge=0.05)


@pytest.fixture
def random_similarity():
    rng = np.random.default_rng(7)
    W = rng.uniform(0.1, 1.0, size=(8, 8))
    W = (W + W.T) / 2
    np.fill_diagonal(W, 0)
    return W
