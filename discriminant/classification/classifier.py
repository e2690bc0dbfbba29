from general.structures.discriminant_config import DiscriminantConfig
from general.structures.discriminant_model import DiscriminantModel
from general.structures.feature_set import FeatureSet, unpack_features
from discriminant.errors import PredictError, DimensionError
from typing import Optional, Union
import numpy as np

def inverse_eigenvalue_weights(model: DiscriminantModel, config: Optional[DiscriminantConfig]=None) -> np.ndarray:
    """
    Per-axis weights 1/|lambda_j| used by the discriminant score.

    Axes whose eigenvalue magnitude is at most ``eigenvalue_rtol`` times the
    largest magnitude get weight 0. The cut-off stored on the model is used
    unless a config is passed explicitly. Every class mean has the same
    coordinate along those axes, so dropping them leaves the ranking of the
    classes unchanged while keeping rounding noise from being amplified.
    """
    rtol = config.eigenvalue_rtol if config is not None else model.eigenvalue_rtol
    magnitudes = model.eigenvalue_magnitudes
    largest = magnitudes.max()
    weights = np.zeros_like(magnitudes)
    if largest == 0:
        return weights
    usable = magnitudes > rtol * largest
    weights[usable] = 1.0 / magnitudes[usable]
    return weights

def decision_scores(model: DiscriminantModel, x: np.ndarray, config: Optional[DiscriminantConfig]=None) -> np.ndarray:
    """
    Discriminant score of one observation against every class.

    The score of class i is ``log_prior_i - 0.5 * sum_j u_j**2 / |lambda_j|``
    where ``u = Re(V).T @ (x - mean_i)``.

    Parameters
    ----------
    model : DiscriminantModel
        Fitted model
    x : np.ndarray
        Observation of shape (p,)
    config : DiscriminantConfig, optional
        Overrides the eigenvalue cut-off stored on the model

    Returns
    -------
    np.ndarray
        Scores of shape (k,)

    Raises
    ------
    DimensionError
        If x does not have exactly p entries
    PredictError
        If x contains NaN or infinite values
    """
    x = _as_observation(model, x)
    U = (x - model.class_means) @ model.real_eigenvectors
    weights = inverse_eigenvalue_weights(model, config)
    return model.log_priors - 0.5 * (U * U) @ weights

def predict(model: DiscriminantModel, x: np.ndarray, config: Optional[DiscriminantConfig]=None) -> int:
    """
    Classify a single observation.

    Returns the index of the class with the greatest discriminant score.
    On ties the lowest class index wins.
    """
    scores = decision_scores(model, x, config)
    return int(np.argmax(scores))

def predict_many(model: DiscriminantModel, X: Union[FeatureSet, np.ndarray], config: Optional[DiscriminantConfig]=None) -> np.ndarray:
    """
    Classify every row of X.

    Parameters
    ----------
    model : DiscriminantModel
        Fitted model
    X : FeatureSet or np.ndarray
        Observations of shape (m, p); a 1D array is treated as a single row

    Returns
    -------
    np.ndarray
        Integer class indices of shape (m,)
    """
    X = unpack_features(X)
    if X.ndim == 1:
        X = X.reshape(1, -1)
    if X.ndim != 2:
        raise PredictError(f'Observations must be a 1D or 2D array, got shape {X.shape}')
    if X.shape[1] != model.p:
        raise DimensionError(model.p, X.shape[1])
    return np.array([predict(model, row, config) for row in X], dtype=np.int64)

def _as_observation(model: DiscriminantModel, x) -> np.ndarray:
    try:
        x = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as exc:
        raise PredictError(f'Observation must be numeric: {exc}') from exc
    if x.ndim != 1:
        raise DimensionError(model.p, x.size)
    if x.shape[0] != model.p:
        raise DimensionError(model.p, x.shape[0])
    if not np.all(np.isfinite(x)):
        raise PredictError('Observation contains NaN or infinite values')
    return x
