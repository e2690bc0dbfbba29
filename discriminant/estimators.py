from general.base_classes.model_base import BaseModel
from general.base_classes.transformer_base import BaseTransformer
from general.structures.discriminant_config import DiscriminantConfig
from general.structures.discriminant_model import DiscriminantModel
from general.structures.feature_set import FeatureSet, unpack_features
from discriminant.fitting.fitter import fit
from discriminant.projection.projector import transform
from discriminant.classification.classifier import decision_scores, predict_many
from typing import Optional, Union, List
import numpy as np

class LinearDiscriminantTransformer(BaseTransformer):
    """
    Linear Discriminant Analysis transformer for supervised dimensionality reduction.

    Projects data onto the leading eigenvectors of inv(Sw) @ Sb. Eigenpairs
    are ordered by descending eigenvalue magnitude unless the configuration
    says otherwise, so the first output column is the most discriminative
    axis.

    Attributes
    ----------
    n_components : int, optional
        Number of axes to keep. If None, defaults to min(n_classes - 1, n_features).
    config : DiscriminantConfig, optional
        Numerical settings passed to the fitter
    model_ : DiscriminantModel
        The fitted model, available after ``fit``
    """

    def __init__(self, n_components: Optional[int]=None, config: Optional[DiscriminantConfig]=None, name: Optional[str]=None):
        super().__init__(name=name)
        if n_components is not None and n_components <= 0:
            raise ValueError('n_components must be positive')
        self.n_components = n_components
        self.config = config
        self.model_: Optional[DiscriminantModel] = None
        self.n_components_: Optional[int] = None

    def fit(self, data: Union[FeatureSet, np.ndarray], y: Optional[np.ndarray]=None, **kwargs) -> 'LinearDiscriminantTransformer':
        """
        Fit the discriminant model.

        Parameters
        ----------
        data : FeatureSet or np.ndarray
            Training data of shape (n_samples, n_features)
        y : np.ndarray, optional
            Labels in [0, k); read from ``data.metadata['labels']`` when omitted

        Returns
        -------
        LinearDiscriminantTransformer
            Fitted transformer instance
        """
        model = fit(data, y, config=self.config)
        if self.n_components is None:
            n_components = min(model.k - 1, model.p)
        elif self.n_components > model.p:
            raise ValueError(f'n_components cannot be larger than n_features = {model.p}')
        else:
            n_components = self.n_components
        self.model_ = model
        self.n_components_ = n_components
        self.is_fitted = True
        return self

    def transform(self, data: Union[FeatureSet, np.ndarray], **kwargs) -> Union[FeatureSet, np.ndarray]:
        """
        Project data onto the fitted discriminant axes.

        Returns a FeatureSet with ``LD1..LDn`` feature names when given a
        FeatureSet, and a plain array otherwise.
        """
        self._check_is_fitted()
        projected = transform(self.model_, data, self.n_components_)
        if isinstance(data, FeatureSet):
            return FeatureSet(features=projected, feature_names=self.get_feature_names(), sample_ids=data.sample_ids, metadata=dict(data.metadata))
        return projected

    def get_feature_names(self) -> Optional[List[str]]:
        """Names of the discriminant axes, or None before fitting."""
        if not self.is_fitted:
            return None
        return [f'LD{i + 1}' for i in range(self.n_components_)]

    def get_discriminability_ratio(self) -> np.ndarray:
        """Share of total eigenvalue magnitude carried by each kept axis."""
        self._check_is_fitted()
        return self.model_.discriminability_ratio[:self.n_components_]

class LinearDiscriminantClassifier(BaseModel):
    """
    Linear Discriminant Analysis classifier.

    Scores an observation against every class in the eigenbasis of
    inv(Sw) @ Sb and assigns it to the class with the highest score, the
    lowest class index winning ties.

    Attributes
    ----------
    config : DiscriminantConfig, optional
        Numerical settings used for fitting and scoring
    model_ : DiscriminantModel
        The fitted model, available after ``fit``
    """

    def __init__(self, config: Optional[DiscriminantConfig]=None, name: Optional[str]=None):
        super().__init__(name=name)
        self.config = config
        self.model_: Optional[DiscriminantModel] = None

    def fit(self, X: Union[FeatureSet, np.ndarray], y: Optional[np.ndarray]=None, **kwargs) -> 'LinearDiscriminantClassifier':
        """
        Fit the classifier.

        Raises
        ------
        FitError
            If the model cannot be estimated; the classifier keeps its
            previous state in that case
        """
        self.model_ = fit(X, y, config=self.config)
        self.is_fitted = True
        return self

    @property
    def classes_(self) -> np.ndarray:
        self._check_is_fitted()
        return np.arange(self.model_.k)

    def predict(self, X: Union[FeatureSet, np.ndarray], **kwargs) -> np.ndarray:
        """
        Predict class indices.

        Parameters
        ----------
        X : FeatureSet or np.ndarray
            Observations of shape (n_samples, n_features)

        Returns
        -------
        np.ndarray
            Predicted class index of each row
        """
        self._check_is_fitted()
        return predict_many(self.model_, X, self.config)

    def decision_function(self, X: Union[FeatureSet, np.ndarray]) -> np.ndarray:
        """Discriminant scores of shape (n_samples, n_classes)."""
        self._check_is_fitted()
        X = unpack_features(X)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        return np.vstack([decision_scores(self.model_, row, self.config) for row in X]) if len(X) else np.empty((0, self.model_.k))
