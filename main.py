import numpy as np

from configs import PathConfig, SpectralClusteringConfig
from eigen_choosers import EigengapChooser
from graph import Grapher
from metrics.quality_metrics import QualityMetrics
from spectral_clustering import SpectralClusterer

if __name__ == '__main__':

    # two triangles joined by one weak edge
    similarity = np.zeros((6, 6))
    similarity[:3, :3] = 1.0
    similarity[3:, 3:] = 1.0
    np.fill_diagonal(similarity, 0)
    similarity[2, 3] = similarity[3, 2] = 0.05

    config = SpectralClusteringConfig(
        laplacian="symmetric",
        eigen_chooser=EigengapChooser(min_k=1, max_k=4),
    )
    path_config = PathConfig()

    result = SpectralClusterer(config).cluster(similarity)

    print(f"Spectral Clustering found {result.n_clusters} clusters")
    print(f"Eigenvalues: {np.round(result.eigenvalues, 4)}")
    print(f"Labels: {result.labels}")
    print(QualityMetrics().quality_metrics(result.embedding, result.labels))

    grapher = Grapher()
    grapher.plot_embedding(result, path_config.embedding_plot)
    grapher.plot_eigenvalues(result, path_config.eigenvalue_plot)

    # save the result table next to the plots
    path_config.output_dataframe.mkdir(parents=True, exist_ok=True)
    result_save_path = path_config.output_dataframe / f"clusters_{result.laplacian}_k{len(result.eigenvalues)}.pkl"
    result.to_dataframe().to_pickle(result_save_path)
    print(f"Saved results to {result_save_path}")
