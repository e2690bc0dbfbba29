from general.structures.discriminant_config import DiscriminantConfig, DEFAULT_CONFIG
from general.structures.discriminant_model import DiscriminantModel
from general.structures.feature_set import FeatureSet, unpack_features
from discriminant.errors import ValidationError, SingularityError, DecompositionError
from discriminant.fitting.labels import summarize_labels
from discriminant.fitting.scatter import class_statistics, within_class_scatter, between_class_scatter, low_variance_features
from typing import Optional, Union, Tuple
from scipy.linalg import eig, inv, LinAlgError
import numpy as np
import logging
import warnings

logger = logging.getLogger(__name__)

def fit(X: Union[FeatureSet, np.ndarray], y: Optional[np.ndarray]=None, config: Optional[DiscriminantConfig]=None) -> DiscriminantModel:
    """
    Fit a linear discriminant model.

    Computes class means, log priors and the within-class (Sw) and
    between-class (Sb) scatter matrices, then solves the eigenproblem of
    inv(Sw) @ Sb with a general (non-symmetric) eigensolver.

    Parameters
    ----------
    X : FeatureSet or np.ndarray
        Training data of shape (n_samples, n_features). A FeatureSet may
        carry its labels in ``metadata['labels']``.
    y : np.ndarray, optional
        Integer class labels in [0, k) of shape (n_samples,). Required
        unless X is a labeled FeatureSet.
    config : DiscriminantConfig, optional
        Numerical settings; defaults to ``DEFAULT_CONFIG``

    Returns
    -------
    DiscriminantModel
        The fitted, read-only model

    Raises
    ------
    ValidationError
        If the data or labels are malformed
    SingularityError
        If some feature has (near) zero within-class variance
    DecompositionError
        If inversion or eigendecomposition fails
    """
    config = config or DEFAULT_CONFIG
    if y is None and isinstance(X, FeatureSet):
        y = X.labels
    if y is None:
        raise ValidationError('Labels (y) must be provided for supervised fitting')
    X = _as_training_matrix(X)
    (n_samples, n_features) = X.shape
    (classes, counts) = summarize_labels(y, n_samples=n_samples)
    y = np.asarray(y).astype(np.int64)
    n_classes = classes.size
    logger.debug(f'Fitting discriminant model: n={n_samples}, p={n_features}, k={n_classes}, counts={counts.tolist()}')
    overall_mean = X.mean(axis=0)
    (counts, class_means) = class_statistics(X, y, n_classes)
    log_priors = np.log(counts / n_samples)
    Sw = within_class_scatter(X, y, class_means)
    weak = low_variance_features(Sw, config.variance_floor)
    if weak.size:
        raise SingularityError(f'Near-singular covariance: within-class variance of feature(s) {weak.tolist()} is below tolerance {config.tolerance}', features=weak.tolist())
    Sb = between_class_scatter(class_means, counts, overall_mean)
    (eigenvalues, eigenvectors) = solve_discriminant_eigenproblem(Sw, Sb)
    if config.sort_eigenpairs:
        (eigenvalues, eigenvectors) = sort_eigenpairs(eigenvalues, eigenvectors)
    _check_spectrum(eigenvalues, config)
    return DiscriminantModel(n=n_samples, p=n_features, k=n_classes, class_means=class_means, log_priors=log_priors, eigenvectors=eigenvectors, eigenvalues=eigenvalues, eigenvalue_rtol=config.eigenvalue_rtol)

def solve_discriminant_eigenproblem(Sw: np.ndarray, Sb: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Eigendecomposition of inv(Sw) @ Sb.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Complex eigenvalues of shape (p,) and complex right eigenvectors of
        shape (p, p), in solver order

    Raises
    ------
    DecompositionError
        If Sw cannot be inverted or the eigensolver does not converge
    """
    try:
        Sw_inv = inv(Sw)
        (eigenvalues, eigenvectors) = eig(Sw_inv @ Sb, left=False, right=True)
    except (LinAlgError, ValueError) as exc:
        raise DecompositionError(f'Eigendecomposition of the discriminant matrix failed: {exc}') from exc
    eigenvalues = np.asarray(eigenvalues, dtype=complex)
    eigenvectors = np.asarray(eigenvectors, dtype=complex)
    if not (np.all(np.isfinite(eigenvalues)) and np.all(np.isfinite(eigenvectors))):
        raise DecompositionError('Eigendecomposition of the discriminant matrix produced non-finite values')
    return (eigenvalues, eigenvectors)

def sort_eigenpairs(eigenvalues: np.ndarray, eigenvectors: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Reorder eigenpairs by descending eigenvalue magnitude; ties keep solver order."""
    order = np.argsort(-np.abs(eigenvalues), kind='stable')
    return (eigenvalues[order], eigenvectors[:, order])

def _as_training_matrix(X: Union[FeatureSet, np.ndarray]) -> np.ndarray:
    try:
        X = unpack_features(X)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f'Training data must be numeric: {exc}') from exc
    if X.ndim != 2:
        raise ValidationError(f'Training data must be a 2D array, got {X.ndim} dimensions')
    if X.shape[1] == 0:
        raise ValidationError('Training data must have at least one feature')
    if not np.all(np.isfinite(X)):
        raise ValidationError('Training data contains NaN or infinite values')
    return X

def _check_spectrum(eigenvalues: np.ndarray, config: DiscriminantConfig) -> None:
    magnitudes = np.abs(eigenvalues)
    largest = magnitudes.max()
    logger.debug(f'Discriminant eigenvalue magnitudes: {magnitudes.tolist()}')
    if largest == 0:
        warnings.warn('Between-class scatter is zero: all class means coincide, predictions will follow the priors', UserWarning)
        return
    significant = magnitudes > config.eigenvalue_rtol * largest
    if np.any(np.abs(eigenvalues.imag[significant]) > config.eigenvalue_rtol * largest):
        warnings.warn('Discriminant matrix has complex eigenvalues with non-negligible imaginary parts; only real parts of the eigenvectors are used', UserWarning)
