from abc import ABC, abstractmethod
from typing import Any, Optional
import numpy as np

class BaseModel(ABC):
    """
    Abstract base class for supervised classification models.

    Subclasses implement ``fit``, ``predict`` and ``score``; ``fit`` must
    return the instance so calls can be chained.
    """

    def __init__(self, name: Optional[str]=None):
        self.name = name or self.__class__.__name__
        self.is_fitted = False

    @abstractmethod
    def fit(self, X: Any, y: Optional[Any]=None, **kwargs) -> 'BaseModel':
        """
        Train the model on the provided data.

        Parameters
        ----------
        X : Any
            Training features
        y : Any, optional
            Target values

        Returns
        -------
        BaseModel
            Self instance for method chaining
        """
        pass

    @abstractmethod
    def predict(self, X: Any, **kwargs) -> Any:
        """
        Make predictions on new data.

        Parameters
        ----------
        X : Any
            Input features for prediction

        Returns
        -------
        Any
            Model predictions
        """
        pass

    def score(self, X: Any, y: Any, **kwargs) -> float:
        """
        Mean accuracy of ``predict(X)`` against the true labels ``y``.

        Returns
        -------
        float
            Fraction of correctly classified samples
        """
        y_true = np.asarray(y)
        y_pred = np.asarray(self.predict(X, **kwargs))
        if y_true.shape != y_pred.shape:
            raise ValueError(f'y has shape {y_true.shape} but predictions have shape {y_pred.shape}')
        if y_true.size == 0:
            raise ValueError('Cannot score an empty sample')
        return float(np.mean(y_true == y_pred))

    def fit_predict(self, X: Any, y: Optional[Any]=None, **kwargs) -> Any:
        """Convenience method to fit and predict in one step."""
        return self.fit(X, y, **kwargs).predict(X)

    def _check_is_fitted(self) -> None:
        if not self.is_fitted:
            raise RuntimeError(f"{self.name} has not been fitted yet. Call 'fit' first.")
