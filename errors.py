class SpectralClusteringError(Exception):
    """Base error, carries the context the failure was detected in"""

    def __init__(self, message: str, **context):
        self.message = message
        self.context = context
        super().__init__(self._render())

    def add_context(self, **context):
        """Fill in context known only further up, keeping what the raiser set"""
        for key, value in context.items():
            self.context.setdefault(key, value)
        self.args = (self._render(),)
        return self

    def _render(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class InvalidInputError(SpectralClusteringError, ValueError):
    """Malformed similarity matrix: non-square, empty, non-finite or negative"""


class InvalidConfigurationError(SpectralClusteringError, ValueError):
    """Requested eigenvector count or cluster count cannot be honoured"""


class DegenerateGraphError(SpectralClusteringError, ValueError):
    """Isolated node breaks a normalisation that needs a nonzero degree"""


class NumericalFailureError(SpectralClusteringError, RuntimeError):
    """Eigensolver did not converge or returned too few eigenpairs"""
