import numpy as np
import pytest

from clustering_algs.AgglomerativeWrapper import AgglomerativeWrapper
from clustering_algs.KmeansWrapper import KMeansWrapper
from clustering_algs.cluster_adapter import assign, relabel
from errors import InvalidConfigurationError
from models import CentroidClusters, IndexClusters


class FixedClusterer:

    def __init__(self, output):
        self.output = output

    def run(self, rows):
        return self.output


class RejectingClusterer:

    def run(self, rows):
        raise ValueError("too many clusters")


def _three_groups():
    rng = np.random.default_rng(0)
    centres = np.array([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])
    return np.vstack([c + rng.normal(scale=0.1, size=(3, 2)) for c in centres])


def test_index_clusters_are_relabelled():
    rows = np.zeros((5, 2))
    labels = assign(rows, FixedClusterer(IndexClusters(np.array([5, 5, 2, 2, -1]))))

    assert labels.tolist() == [0, 0, 1, 1, 2]


def test_centroid_clusters_are_hard_assigned():
    rows = np.array([[9.0, 9.0], [0.1, 0.0], [10.0, 11.0], [-1.0, 0.0]])
    centroids = np.array([[0.0, 0.0], [10.0, 10.0]])

    labels = assign(rows, FixedClusterer(CentroidClusters(centroids)))

    assert labels.tolist() == [0, 1, 0, 1]


def test_hard_assign_ties_go_to_first_centroid():
    model = CentroidClusters(np.array([[1.0, 0.0], [-1.0, 0.0]]))

    assert model.hard_assign(np.array([[0.0, 0.0]])).tolist() == [0]


def test_unknown_output_rejected():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        assign(np.zeros((3, 2)), FixedClusterer(np.zeros(3)))

    assert excinfo.value.context["returned"] == "ndarray"


def test_wrong_label_count_rejected():
    with pytest.raises(InvalidConfigurationError):
        assign(np.zeros((3, 2)), FixedClusterer(IndexClusters(np.zeros(2, dtype=int))))


def test_clusterer_value_error_becomes_configuration_error():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        assign(np.zeros((4, 2)), RejectingClusterer())

    assert excinfo.value.context == {"clusterer": "RejectingClusterer", "n": 4, "k": 2}


def test_kmeans_more_clusters_than_rows():
    with pytest.raises(InvalidConfigurationError):
        assign(np.random.default_rng(1).normal(size=(6, 2)), KMeansWrapper(n_clusters=8))


def test_kmeans_defaults_to_embedding_width():
    result = KMeansWrapper().run(_three_groups()[:, :2])

    assert isinstance(result, CentroidClusters)
    assert result.centroids.shape == (2, 2)


def test_kmeans_sweep_picks_best_silhouette():
    rows = _three_groups()

    result = KMeansWrapper(k_range=range(2, 6)).run(rows)

    assert result.centroids.shape == (3, 2)
    labels = assign(rows, KMeansWrapper(k_range=range(2, 6)))
    assert labels.tolist() == [0, 0, 0, 1, 1, 1, 2, 2, 2]


def test_kmeans_sweep_without_valid_k():
    with pytest.raises(InvalidConfigurationError):
        assign(np.zeros((3, 2)), KMeansWrapper(k_range=[5, 6]))


def test_agglomerative_produces_indices():
    rows = _three_groups()

    result = AgglomerativeWrapper(n_clusters=3).run(rows)

    assert isinstance(result, IndexClusters)
    assert relabel(result.labels).tolist() == [0, 0, 0, 1, 1, 1, 2, 2, 2]


def test_relabel_first_appearance():
    assert relabel(np.array([7, 3, 7, 1])).tolist() == [0, 1, 0, 2]
