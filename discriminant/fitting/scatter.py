import numpy as np
from typing import Tuple

def class_statistics(X: np.ndarray, y: np.ndarray, n_classes: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-class sample counts and mean vectors.

    Parameters
    ----------
    X : np.ndarray
        Training data of shape (n_samples, n_features)
    y : np.ndarray
        Integer labels in [0, n_classes)
    n_classes : int
        Number of classes

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Counts of shape (n_classes,) and class means of shape (n_classes, n_features)
    """
    counts = np.bincount(y, minlength=n_classes)
    sums = np.zeros((n_classes, X.shape[1]))
    np.add.at(sums, y, X)
    return (counts, sums / counts[:, np.newaxis])

def within_class_scatter(X: np.ndarray, y: np.ndarray, class_means: np.ndarray) -> np.ndarray:
    """
    Pooled within-class scatter normalized by the degrees of freedom (n - k).

    Each observation contributes the outer product of its residual from its
    own class mean.
    """
    (n_samples, n_classes) = (X.shape[0], class_means.shape[0])
    residuals = X - class_means[y]
    Sw = residuals.T @ residuals
    # BLAS may leave the two triangles differing in the last bit
    Sw = 0.5 * (Sw + Sw.T)
    return Sw / (n_samples - n_classes)

def between_class_scatter(class_means: np.ndarray, counts: np.ndarray, overall_mean: np.ndarray) -> np.ndarray:
    """Count-weighted scatter of the class means around the overall mean."""
    diff = class_means - overall_mean
    return (diff.T * counts) @ diff

def low_variance_features(Sw: np.ndarray, variance_floor: float) -> np.ndarray:
    """Indices of features whose within-class variance is below ``variance_floor``."""
    return np.flatnonzero(np.diag(Sw) < variance_floor)
