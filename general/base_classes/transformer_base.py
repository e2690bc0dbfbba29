from abc import ABC, abstractmethod
from typing import Any, List, Optional

class BaseTransformer(ABC):
    """
    Abstract base class for supervised dimensionality reduction components.

    A transformer learns a projection in ``fit`` and applies it to new data
    in ``transform``.
    """

    def __init__(self, name: Optional[str]=None):
        self.name = name or self.__class__.__name__
        self.is_fitted = False

    @abstractmethod
    def fit(self, data: Any, y: Optional[Any]=None, **kwargs) -> 'BaseTransformer':
        """
        Fit the transformer to the input data.

        Parameters
        ----------
        data : Any
            Input data to fit the transformer on
        y : Any, optional
            Target values for supervised transformers

        Returns
        -------
        BaseTransformer
            Self instance for method chaining
        """
        pass

    @abstractmethod
    def transform(self, data: Any, **kwargs) -> Any:
        """
        Apply the transformation to input data.

        Parameters
        ----------
        data : Any
            Input data to transform

        Returns
        -------
        Any
            Transformed data
        """
        pass

    def fit_transform(self, data: Any, y: Optional[Any]=None, **kwargs) -> Any:
        """Convenience method to fit and transform in one step."""
        return self.fit(data, y, **kwargs).transform(data)

    def get_feature_names(self) -> Optional[List[str]]:
        """Names of the output features, if the transformer defines them."""
        return None

    def _check_is_fitted(self) -> None:
        if not self.is_fitted:
            raise RuntimeError("Transformer has not been fitted yet. Call 'fit' first.")
