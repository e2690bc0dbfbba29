from dataclasses import dataclass, field
from typing import Dict, Any
from datetime import datetime
import numpy as np

def _frozen_array(values, dtype) -> np.ndarray:
    """Return a private read-only copy of ``values``."""
    array = np.array(values, dtype=dtype, copy=True)
    array.setflags(write=False)
    return array

@dataclass(frozen=True, eq=False)
class DiscriminantModel:
    """
    Fitted linear discriminant model.

    Produced once by ``discriminant.fitting.fitter.fit`` and read-only
    afterwards: every array is a private copy with its write flag cleared,
    so the model can be shared between threads without locking.

    Attributes
    ----------
    n : int
        Number of training observations
    p : int
        Number of features
    k : int
        Number of classes
    class_means : np.ndarray
        Array of shape (k, p); row i is the mean of class i
    log_priors : np.ndarray
        Array of shape (k,); natural log of each class's empirical prior
    eigenvectors : np.ndarray
        Complex array of shape (p, p); columns are right eigenvectors of
        inv(Sw) @ Sb
    eigenvalues : np.ndarray
        Complex array of shape (p,), paired column-for-column with eigenvectors
    eigenvalue_rtol : float
        Relative cut-off below which eigenvalues count as zero when scoring,
        taken from the configuration used for fitting
    created_at : datetime
        When the model was fitted
    """
    n: int
    p: int
    k: int
    class_means: np.ndarray
    log_priors: np.ndarray
    eigenvectors: np.ndarray
    eigenvalues: np.ndarray
    eigenvalue_rtol: float = 1e-10
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        object.__setattr__(self, 'class_means', _frozen_array(self.class_means, float))
        object.__setattr__(self, 'log_priors', _frozen_array(self.log_priors, float))
        object.__setattr__(self, 'eigenvectors', _frozen_array(self.eigenvectors, complex))
        object.__setattr__(self, 'eigenvalues', _frozen_array(self.eigenvalues, complex))
        if self.k < 2:
            raise ValueError(f'A discriminant model needs at least 2 classes, got {self.k}')
        if self.n <= self.k:
            raise ValueError(f'Sample size {self.n} must exceed the number of classes {self.k}')
        if self.class_means.shape != (self.k, self.p):
            raise ValueError(f'class_means must have shape ({self.k}, {self.p}), got {self.class_means.shape}')
        if self.log_priors.shape != (self.k,):
            raise ValueError(f'log_priors must have shape ({self.k},), got {self.log_priors.shape}')
        if self.eigenvectors.shape != (self.p, self.p):
            raise ValueError(f'eigenvectors must have shape ({self.p}, {self.p}), got {self.eigenvectors.shape}')
        if self.eigenvalues.shape != (self.p,):
            raise ValueError(f'eigenvalues must have shape ({self.p},), got {self.eigenvalues.shape}')
        if not 0 <= self.eigenvalue_rtol < 1:
            raise ValueError(f'eigenvalue_rtol must lie in [0, 1), got {self.eigenvalue_rtol!r}')

    @property
    def priors(self) -> np.ndarray:
        """Empirical prior probability of each class."""
        return np.exp(self.log_priors)

    @property
    def real_eigenvectors(self) -> np.ndarray:
        """Eigenvectors with their imaginary parts discarded."""
        return np.ascontiguousarray(self.eigenvectors.real)

    @property
    def eigenvalue_magnitudes(self) -> np.ndarray:
        """Complex magnitude of each eigenvalue."""
        return np.abs(self.eigenvalues)

    @property
    def discriminability_ratio(self) -> np.ndarray:
        """
        Share of the total eigenvalue magnitude carried by each axis.

        Returns
        -------
        np.ndarray
            Array of shape (p,) summing to 1, or all zeros when every
            eigenvalue vanishes
        """
        magnitudes = self.eigenvalue_magnitudes
        total = magnitudes.sum()
        if total == 0:
            return np.zeros_like(magnitudes)
        return magnitudes / total

    def summary(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary describing the model (arrays excluded).

        Returns
        -------
        Dict[str, Any]
            Sizes, priors and eigenvalue magnitudes of the fitted model
        """
        return {'n_samples': self.n, 'n_features': self.p, 'n_classes': self.k, 'priors': self.priors.tolist(), 'eigenvalue_magnitudes': self.eigenvalue_magnitudes.tolist(), 'eigenvalue_rtol': self.eigenvalue_rtol, 'created_at': self.created_at.isoformat()}
