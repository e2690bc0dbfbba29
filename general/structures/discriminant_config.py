from dataclasses import dataclass, asdict
from typing import Dict, Any
import json

@dataclass(frozen=True)
class DiscriminantConfig:
    """
    Numerical settings for fitting and applying a discriminant model.

    Attributes
    ----------
    tolerance : float
        Minimum within-class standard deviation a feature may have. The
        squared value is compared against the diagonal of the normalized
        within-class scatter matrix.
    sort_eigenpairs : bool
        Whether eigenpairs are reordered by descending eigenvalue magnitude
        after decomposition. When False the solver order is kept.
    eigenvalue_rtol : float
        Eigenvalues whose magnitude is at most ``eigenvalue_rtol`` times the
        largest magnitude are treated as zero when scoring observations.
    """
    tolerance: float = 0.0001
    sort_eigenpairs: bool = True
    eigenvalue_rtol: float = 1e-10

    def __post_init__(self):
        if not isinstance(self.tolerance, (int, float)) or self.tolerance < 0:
            raise ValueError(f'Invalid tol: tolerance must be a non-negative number, got {self.tolerance!r}')
        if not isinstance(self.eigenvalue_rtol, (int, float)) or not 0 <= self.eigenvalue_rtol < 1:
            raise ValueError(f'eigenvalue_rtol must lie in [0, 1), got {self.eigenvalue_rtol!r}')
        if not isinstance(self.sort_eigenpairs, bool):
            raise TypeError('sort_eigenpairs must be a bool')

    @property
    def variance_floor(self) -> float:
        """Squared tolerance, the smallest admissible within-class variance."""
        return self.tolerance * self.tolerance

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary representation.

        Returns
        -------
        Dict[str, Any]
            Dictionary representation of the configuration
        """
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DiscriminantConfig':
        """
        Create a DiscriminantConfig from its dictionary representation.

        Unknown keys are rejected so that misspelled settings surface early.

        Parameters
        ----------
        data : Dict[str, Any]
            Dictionary representation

        Returns
        -------
        DiscriminantConfig
            New configuration instance
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f'Unknown configuration keys: {unknown}')
        return cls(**data)

DEFAULT_CONFIG = DiscriminantConfig()
