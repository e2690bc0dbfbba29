from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging
import warnings

logger = logging.getLogger(__name__)

class BaseValidator(ABC):
    """
    Abstract base class for input validation components.

    A validator inspects one input, records every problem it finds and
    reports whether the input is usable. Validators hold per-call state,
    so a fresh instance should be used for each input that is checked
    concurrently.
    """

    def __init__(self, name: Optional[str]=None):
        self.name = name or self.__class__.__name__
        self.validation_errors: List[str] = []
        self.validation_warnings: List[str] = []

    @abstractmethod
    def validate(self, data: Any, **kwargs) -> bool:
        """
        Perform validation checks on the input data.

        Parameters
        ----------
        data : Any
            Data to validate
        **kwargs : dict
            Additional validation parameters

        Returns
        -------
        bool
            True if validation passes, False otherwise
        """
        pass

    @property
    def passed(self) -> bool:
        """Whether the last validation recorded no errors."""
        return len(self.validation_errors) == 0

    @property
    def first_error(self) -> Optional[str]:
        """The first recorded error message, if any."""
        return self.validation_errors[0] if self.validation_errors else None

    def get_validation_report(self) -> Dict[str, Any]:
        """
        Generate a validation report.

        Returns
        -------
        Dict[str, Any]
            Dictionary containing validation results, errors, and warnings
        """
        return {'name': self.name, 'passed': self.passed, 'errors': self.validation_errors.copy(), 'warnings': self.validation_warnings.copy(), 'error_count': len(self.validation_errors), 'warning_count': len(self.validation_warnings)}

    def reset_validation_state(self) -> None:
        """Clear previous validation results."""
        self.validation_errors.clear()
        self.validation_warnings.clear()

    def add_error(self, message: str) -> None:
        """Add a validation error message."""
        logger.debug(f'{self.name}: {message}')
        self.validation_errors.append(message)

    def add_warning(self, message: str) -> None:
        """Add a validation warning message."""
        warnings.warn(f'{self.name}: {message}', UserWarning)
        self.validation_warnings.append(message)
