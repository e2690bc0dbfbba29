from general.base_classes.validator_base import BaseValidator
from discriminant.errors import ValidationError
from typing import Any, Optional, Tuple
import numpy as np

class ClassLabelValidator(BaseValidator):
    """
    Checks that a label vector describes the classes 0..k-1.

    Labels must be integers, start at 0 and form a contiguous run without
    gaps. At least two classes are required and the number of samples must
    exceed the number of classes. When ``n_samples`` is passed to
    ``validate`` the label count must match it as well.

    After a successful ``validate`` call, ``classes_`` holds the sorted
    distinct labels and ``counts_`` the number of samples per class. A
    class with a single sample is accepted with a warning.
    """

    def __init__(self, name: Optional[str]=None):
        super().__init__(name=name)
        self.classes_: Optional[np.ndarray] = None
        self.counts_: Optional[np.ndarray] = None

    def validate(self, data: Any, n_samples: Optional[int]=None, **kwargs) -> bool:
        """
        Validate a label vector.

        Parameters
        ----------
        data : array-like
            Class label of each sample
        n_samples : int, optional
            Number of rows in the matching feature matrix

        Returns
        -------
        bool
            True if the labels can be used for fitting
        """
        self.reset_validation_state()
        self.classes_ = None
        self.counts_ = None
        y = np.asarray(data)
        if y.ndim != 1:
            self.add_error(f'Labels must be a 1D array, got {y.ndim} dimensions')
            return False
        if n_samples is not None and y.shape[0] != n_samples:
            self.add_error(f"The sizes of X and y don't match: {n_samples} rows but {y.shape[0]} labels")
            return False
        if y.size == 0:
            self.add_error('No data to analyze')
            return False
        if not self._is_integral(y):
            self.add_error(f'Labels must be integers, got dtype {y.dtype}')
            return False
        y = y.astype(np.int64)
        (classes, counts) = np.unique(y, return_counts=True)
        if classes[0] < 0:
            self.add_error(f'Negative class label: {int(classes[0])}')
            return False
        if classes[0] != 0:
            self.add_error(f'Label does not start from zero: smallest label is {int(classes[0])}')
            return False
        gaps = np.flatnonzero(np.diff(classes) > 1)
        if gaps.size:
            missing = int(classes[gaps[0]]) + 1
            self.add_error(f'Missing class: label {missing} does not occur')
            return False
        k = classes.size
        if k < 2:
            self.add_error('Only one class')
            return False
        if y.shape[0] <= k:
            self.add_error(f'Sample size is too small: {y.shape[0]} samples for {k} classes')
            return False
        singletons = classes[counts == 1]
        if singletons.size:
            self.add_warning(f'Class(es) {singletons.tolist()} have a single sample and add nothing to the within-class scatter')
        self.classes_ = classes
        self.counts_ = counts
        return True

    @staticmethod
    def _is_integral(y: np.ndarray) -> bool:
        if np.issubdtype(y.dtype, np.integer):
            return True
        if np.issubdtype(y.dtype, np.floating):
            return bool(np.all(np.isfinite(y)) and np.all(y == np.round(y)))
        return False

def summarize_labels(y: Any, n_samples: Optional[int]=None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate labels and return the distinct classes with their counts.

    Raises
    ------
    ValidationError
        If the labels do not describe the contiguous classes 0..k-1
    """
    validator = ClassLabelValidator()
    if not validator.validate(y, n_samples=n_samples):
        raise ValidationError(validator.first_error)
    return (validator.classes_, validator.counts_)
