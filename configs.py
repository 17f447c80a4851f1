from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from clustering_algs.KmeansWrapper import KMeansWrapper
from eigen_choosers import EigenChooser, FixedEigenChooser
from errors import InvalidConfigurationError
from laplacian import GraphLaplacian, SymmetricLaplacian, get_laplacian


@dataclass(frozen=True)
class EigenSolverConfig:
    # below this size the dense LAPACK routines are used instead of ARPACK
    dense_threshold: int = 200
    tol: float = 0.0
    maxiter: Optional[int] = None
    imag_tolerance: float = 1e-8


@dataclass(frozen=True)
class SpectralClusteringConfig:
    """Strategies for one spectral clustering setup. Built once, shared freely."""
    laplacian: Any = field(default_factory=SymmetricLaplacian)
    eigen_chooser: EigenChooser = field(default_factory=lambda: FixedEigenChooser(2))
    clusterer: Any = field(default_factory=KMeansWrapper)
    solver: EigenSolverConfig = field(default_factory=EigenSolverConfig)

    def __post_init__(self):
        if isinstance(self.laplacian, str):
            object.__setattr__(self, "laplacian", get_laplacian(self.laplacian))
        if not isinstance(self.laplacian, GraphLaplacian):
            raise InvalidConfigurationError(
                "laplacian must be a GraphLaplacian or a variant name",
                laplacian=type(self.laplacian).__name__,
            )
        if not isinstance(self.eigen_chooser, EigenChooser):
            raise InvalidConfigurationError(
                "eigen_chooser must be an EigenChooser",
                eigen_chooser=type(self.eigen_chooser).__name__,
            )
        if not callable(getattr(self.clusterer, "run", None)):
            raise InvalidConfigurationError(
                "clusterer must provide run(rows)",
                clusterer=type(self.clusterer).__name__,
            )


@dataclass
class PathConfig:
    embedding_plot: Path = Path('data/embedding.html')
    eigenvalue_plot: Path = Path('data/eigenvalues.png')
    output_dataframe: Path = Path('data/clustering_results')
