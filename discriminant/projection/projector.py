from general.structures.discriminant_model import DiscriminantModel
from general.structures.feature_set import FeatureSet, unpack_features
from typing import Union
import numpy as np

def projection_matrix(model: DiscriminantModel, target_dims: int) -> np.ndarray:
    """
    Real parts of the first ``target_dims`` eigenvector columns.

    Parameters
    ----------
    model : DiscriminantModel
        Fitted model
    target_dims : int
        Number of discriminant axes to keep, 1 <= target_dims <= p

    Returns
    -------
    np.ndarray
        Projection matrix W of shape (p, target_dims)
    """
    if isinstance(target_dims, bool) or not isinstance(target_dims, (int, np.integer)):
        raise TypeError(f'target_dims must be an integer, got {type(target_dims).__name__}')
    if not 1 <= target_dims <= model.p:
        raise ValueError(f'target_dims must satisfy 1 <= target_dims <= {model.p}, got {target_dims}')
    return model.eigenvectors[:, :target_dims].real.copy()

def transform(model: DiscriminantModel, X: Union[FeatureSet, np.ndarray], target_dims: int) -> np.ndarray:
    """
    Project observations onto the leading discriminant axes.

    Parameters
    ----------
    model : DiscriminantModel
        Fitted model
    X : FeatureSet or np.ndarray
        Observations of shape (m, p); a 1D array is treated as a single row
    target_dims : int
        Number of discriminant axes to keep

    Returns
    -------
    np.ndarray
        Projected data of shape (m, target_dims)

    Raises
    ------
    ValueError
        If target_dims is out of range or X does not have p columns
    """
    W = projection_matrix(model, target_dims)
    X = unpack_features(X)
    if X.ndim == 1:
        X = X.reshape(1, -1)
    if X.ndim != 2:
        raise ValueError(f'X must be a 2D array, got {X.ndim} dimensions')
    if X.shape[1] != model.p:
        raise ValueError(f'X has {X.shape[1]} features, but the model was fitted with {model.p} features')
    return X @ W
