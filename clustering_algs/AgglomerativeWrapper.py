from sklearn.cluster import AgglomerativeClustering

from models import IndexClusters


class AgglomerativeWrapper:
    """Agglomerative clustering labels its training rows directly"""

    def __init__(self, n_clusters=None, linkage='ward'):
        self.n_clusters = n_clusters
        self.linkage = linkage

    def run(self, rows):
        model = AgglomerativeClustering(
            n_clusters=self.n_clusters or rows.shape[1],
            linkage=self.linkage
        )
        return IndexClusters(model.fit_predict(rows))
