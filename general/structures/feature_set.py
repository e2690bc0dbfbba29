from dataclasses import dataclass
from typing import Optional, List, Dict, Any, Union
import numpy as np

@dataclass
class FeatureSet:
    """
    Standardized structure for a feature matrix and associated metadata.

    Attributes
    ----------
    features : np.ndarray
        2D array of shape (n_samples, n_features) containing feature values
    feature_names : Optional[List[str]]
        Names of the features in column order
    sample_ids : Optional[List[str]]
        Identifiers for samples/rows
    metadata : Optional[Dict[str, Any]]
        Additional information; class labels for supervised fitting are
        read from ``metadata['labels']``
    """
    features: np.ndarray
    feature_names: Optional[List[str]] = None
    sample_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}
        if not isinstance(self.features, np.ndarray):
            raise TypeError('Features must be a numpy array')
        if self.features.ndim != 2:
            raise ValueError('Features must be a 2D array')
        (n_samples, n_features) = self.features.shape
        if self.feature_names is not None:
            if not isinstance(self.feature_names, list):
                raise TypeError('feature_names must be a list')
            if len(self.feature_names) != n_features:
                raise ValueError(f'Number of feature names ({len(self.feature_names)}) must match number of feature columns ({n_features})')
        if self.sample_ids is not None:
            if not isinstance(self.sample_ids, list):
                raise TypeError('sample_ids must be a list')
            if len(self.sample_ids) != n_samples:
                raise ValueError(f'Number of sample IDs ({len(self.sample_ids)}) must match number of samples ({n_samples})')

    @property
    def labels(self) -> Optional[np.ndarray]:
        """Class labels stored in the metadata, or None when unlabeled."""
        labels = self.metadata.get('labels')
        return None if labels is None else np.asarray(labels)

def unpack_features(data: Union[FeatureSet, np.ndarray, list]) -> np.ndarray:
    """Return the raw feature array of a FeatureSet or array-like as floats."""
    if isinstance(data, FeatureSet):
        return np.asarray(data.features, dtype=float)
    return np.asarray(data, dtype=float)
