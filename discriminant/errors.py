from typing import Optional

class DiscriminantError(Exception):
    """
    Base class for every error raised by the discriminant analysis core.

    Attributes
    ----------
    reason : str
        Human-readable description of what went wrong
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

class FitError(DiscriminantError, ValueError):
    """Raised when a discriminant model cannot be estimated from the training data."""

class ValidationError(FitError):
    """
    Training data or labels are malformed.

    Covers dimension mismatches between the matrix and the labels, empty or
    non-contiguous label sets, fewer than two classes and sample counts that
    do not exceed the class count.
    """

class SingularityError(FitError):
    """
    The within-class scatter matrix is near-singular.

    Attributes
    ----------
    features : list of int
        Indices of the features whose within-class variance fell below tolerance
    """

    def __init__(self, reason: str, features: Optional[list]=None):
        super().__init__(reason)
        self.features = list(features) if features is not None else []

class DecompositionError(FitError):
    """Inversion or eigendecomposition failed inside the linear algebra backend."""

class PredictError(DiscriminantError, ValueError):
    """Raised when an observation cannot be classified."""

class DimensionError(PredictError):
    """
    Input vector length does not match the trained feature count.

    Attributes
    ----------
    expected : int
        Number of features the model was trained with
    got : int
        Number of entries in the offending input
    """

    def __init__(self, expected: int, got: int):
        super().__init__(f'Invalid input vector size: expected {expected} features, got {got}')
        self.expected = expected
        self.got = got
