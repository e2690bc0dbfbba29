import dataclasses
import json
import unittest
import warnings
from unittest import mock
import numpy as np
from scipy.linalg import LinAlgError
from sklearn.datasets import load_iris
from sklearn.discriminant_analysis import LinearDiscriminantAnalysis
from general.structures.discriminant_config import DiscriminantConfig
from general.structures.feature_set import FeatureSet
from discriminant.errors import FitError, ValidationError, SingularityError, DecompositionError
from discriminant.fitting.fitter import fit, sort_eigenpairs
from discriminant.fitting.labels import ClassLabelValidator

class TestDiscriminantFitter(unittest.TestCase):
    """Test cases for fitting a discriminant model."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        np.random.seed(42)
        iris = load_iris()
        self.X_iris = iris.data
        self.y_iris = iris.target

    def test_iris_model_shapes(self):
        """Fit on Iris yields k class means of length p and matching eigenpairs."""
        model = fit(self.X_iris, self.y_iris)
        self.assertEqual((model.n, model.p, model.k), (150, 4, 3))
        self.assertEqual(model.class_means.shape, (3, 4))
        self.assertEqual(model.log_priors.shape, (3,))
        self.assertEqual(model.eigenvectors.shape, (4, 4))
        self.assertEqual(model.eigenvalues.shape, (4,))
        np.testing.assert_allclose(model.priors, [1 / 3, 1 / 3, 1 / 3])
        np.testing.assert_allclose(model.class_means[0], self.X_iris[:50].mean(axis=0))

    def test_iris_eigenpairs_sorted_by_magnitude(self):
        """Eigenpairs are ordered by descending magnitude and only k-1 are non-trivial."""
        model = fit(self.X_iris, self.y_iris)
        magnitudes = model.eigenvalue_magnitudes
        self.assertTrue(np.all(np.diff(magnitudes) <= 0))
        self.assertLess(magnitudes[2], 1e-08 * magnitudes[0])
        self.assertGreater(model.discriminability_ratio[0], 0.98)

    def test_eigenpairs_satisfy_eigen_equation(self):
        """Each stored pair satisfies inv(Sw) @ Sb @ v = lambda * v."""
        model = fit(self.X_iris, self.y_iris)
        residuals = self.X_iris - model.class_means[self.y_iris]
        Sw = residuals.T @ residuals / (model.n - model.k)
        diff = model.class_means - self.X_iris.mean(axis=0)
        Sb = (diff.T * 50) @ diff
        M = np.linalg.inv(Sw) @ Sb
        for j in range(2):
            v = model.eigenvectors[:, j]
            np.testing.assert_allclose(M @ v, model.eigenvalues[j] * v, atol=1e-06 * abs(model.eigenvalues[0]))

    def test_directions_agree_with_scikit_learn(self):
        """Leading discriminant directions match scikit-learn's eigen solver up to scale."""
        model = fit(self.X_iris, self.y_iris)
        reference = LinearDiscriminantAnalysis(solver='eigen').fit(self.X_iris, self.y_iris)
        for j in range(2):
            ours = model.real_eigenvectors[:, j]
            theirs = reference.scalings_[:, j]
            cosine = abs(ours @ theirs) / (np.linalg.norm(ours) * np.linalg.norm(theirs))
            self.assertAlmostEqual(cosine, 1.0, places=6)
        np.testing.assert_allclose(model.discriminability_ratio[:2], reference.explained_variance_ratio_[:2], atol=1e-06)

    def test_solver_order_kept_when_sorting_disabled(self):
        """With sorting disabled the eigenpairs are a permutation of the sorted ones."""
        unsorted = fit(self.X_iris, self.y_iris, config=DiscriminantConfig(sort_eigenpairs=False))
        ordered = fit(self.X_iris, self.y_iris)
        np.testing.assert_allclose(np.sort(unsorted.eigenvalue_magnitudes)[::-1][:2], ordered.eigenvalue_magnitudes[:2])

    def test_sort_eigenpairs_keeps_pairs_together(self):
        """Sorting permutes eigenvalues and eigenvector columns identically."""
        values = np.array([1.0, -3.0, 2.0j])
        vectors = np.eye(3, dtype=complex)
        (sorted_values, sorted_vectors) = sort_eigenpairs(values, vectors)
        np.testing.assert_array_equal(sorted_values, [-3.0, 2.0j, 1.0])
        np.testing.assert_array_equal(sorted_vectors[:, 0], [0, 1, 0])
        np.testing.assert_array_equal(sorted_vectors[:, 1], [0, 0, 1])

    def test_minimum_sample_size(self):
        """n == k + 1 is the smallest accepted sample size."""
        with self.assertWarns(UserWarning):
            model = fit(np.array([[0.0], [1.0], [5.0]]), np.array([0, 0, 1]))
        self.assertEqual(model.k, 2)
        np.testing.assert_allclose(model.class_means, [[0.5], [5.0]])
        self.assertAlmostEqual(model.eigenvalues[0].real, 27.0)
        self.assertAlmostEqual(model.eigenvalues[0].imag, 0.0)

    def test_sample_size_equal_to_class_count_rejected(self):
        """n == k is rejected."""
        with self.assertRaises(ValidationError):
            fit(np.array([[0.0], [1.0]]), np.array([0, 1]))

    def test_labels_not_starting_at_zero(self):
        """Labels must start at 0."""
        y = self.y_iris + 1
        with self.assertRaises(ValidationError) as ctx:
            fit(self.X_iris, y)
        self.assertIn('zero', ctx.exception.reason)

    def test_labels_with_gap(self):
        """Labels must be contiguous."""
        y = np.where(self.y_iris == 2, 3, self.y_iris)
        with self.assertRaises(ValidationError) as ctx:
            fit(self.X_iris, y)
        self.assertIn('Missing class', ctx.exception.reason)

    def test_negative_labels(self):
        """Negative labels are rejected."""
        with self.assertRaises(ValidationError):
            fit(self.X_iris, self.y_iris - 1)

    def test_single_class(self):
        """A single class cannot be discriminated."""
        with self.assertRaises(ValidationError) as ctx:
            fit(self.X_iris, np.zeros(150, dtype=int))
        self.assertEqual(ctx.exception.reason, 'Only one class')

    def test_size_mismatch(self):
        """Label count must match the number of rows."""
        with self.assertRaises(ValidationError):
            fit(self.X_iris, self.y_iris[:-1])

    def test_empty_labels(self):
        """Empty training data is rejected."""
        with self.assertRaises(ValidationError):
            fit(np.empty((0, 3)), np.array([], dtype=int))

    def test_missing_labels(self):
        """Plain arrays without labels are rejected."""
        with self.assertRaises(ValidationError):
            fit(self.X_iris)

    def test_non_finite_training_data(self):
        """NaN in the training data is reported, not propagated."""
        X = self.X_iris.copy()
        X[3, 1] = np.nan
        with self.assertRaises(ValidationError):
            fit(X, self.y_iris)

    def test_integral_float_labels_accepted(self):
        """Float labels holding whole numbers are accepted."""
        model = fit(self.X_iris, self.y_iris.astype(float))
        self.assertEqual(model.k, 3)
        with self.assertRaises(ValidationError):
            fit(self.X_iris, self.y_iris + 0.5)

    def test_constant_feature_is_singular(self):
        """A constant column has zero within-class variance."""
        X = np.hstack([self.X_iris, np.full((150, 1), 7.0)])
        with self.assertRaises(SingularityError) as ctx:
            fit(X, self.y_iris)
        self.assertEqual(ctx.exception.features, [4])
        self.assertIsInstance(ctx.exception, FitError)

    def test_tolerance_is_configurable(self):
        """A larger tolerance flags features with small within-class spread."""
        with self.assertRaises(SingularityError):
            fit(self.X_iris, self.y_iris, config=DiscriminantConfig(tolerance=1.0))

    def test_decomposition_failure_propagates(self):
        """Eigensolver failures surface as DecompositionError."""
        with mock.patch('discriminant.fitting.fitter.eig', side_effect=LinAlgError('did not converge')):
            with self.assertRaises(DecompositionError) as ctx:
                fit(self.X_iris, self.y_iris)
        self.assertIn('did not converge', ctx.exception.reason)

    def test_feature_set_input(self):
        """Labels may come from a FeatureSet's metadata."""
        data = FeatureSet(features=self.X_iris, metadata={'labels': self.y_iris})
        model = fit(data)
        self.assertEqual(model.class_means.shape, (3, 4))

    def test_model_is_read_only(self):
        """The fitted model cannot be modified and does not alias caller data."""
        X = self.X_iris.copy()
        model = fit(X, self.y_iris)
        with self.assertRaises(ValueError):
            model.class_means[0, 0] = 0.0
        with self.assertRaises(ValueError):
            model.eigenvectors[0, 0] = 0.0
        with self.assertRaises(dataclasses.FrozenInstanceError):
            model.k = 5
        means_before = model.class_means.copy()
        X[:] = 0.0
        np.testing.assert_array_equal(model.class_means, means_before)

    def test_coinciding_class_means_warns(self):
        """Zero between-class scatter raises a UserWarning but still fits."""
        X = np.array([[1.0], [-1.0], [1.0], [-1.0]])
        y = np.array([0, 0, 1, 1])
        with self.assertWarns(UserWarning) as ctx:
            model = fit(X, y)
        self.assertIn('class means coincide', str(ctx.warning))
        self.assertEqual(model.eigenvalue_magnitudes[0], 0.0)

    def test_complex_eigenvalues_warn(self):
        """A complex conjugate pair from the eigensolver raises a UserWarning."""
        eigenvalues = np.array([1.0 + 1.0j, 1.0 - 1.0j])
        eigenvectors = np.array([[1.0, 1.0], [1.0j, -1.0j]]) / np.sqrt(2)
        with mock.patch('discriminant.fitting.fitter.eig', return_value=(eigenvalues, eigenvectors)):
            with self.assertWarns(UserWarning) as ctx:
                model = fit(self.X_iris[:, :2], self.y_iris)
        self.assertIn('complex eigenvalues', str(ctx.warning))
        np.testing.assert_array_equal(model.eigenvalues, eigenvalues)
        np.testing.assert_allclose(model.real_eigenvectors, [[1 / np.sqrt(2), 1 / np.sqrt(2)], [0.0, 0.0]])

    def test_real_spectrum_does_not_warn(self):
        """A regular fit emits no warnings."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            fit(self.X_iris, self.y_iris)
        self.assertEqual([w for w in caught if issubclass(w.category, UserWarning)], [])

    def test_eigenvalue_rtol_stored_on_model(self):
        """The scoring cut-off used for fitting travels with the model."""
        self.assertEqual(fit(self.X_iris, self.y_iris).eigenvalue_rtol, 1e-10)
        model = fit(self.X_iris, self.y_iris, config=DiscriminantConfig(eigenvalue_rtol=0.001))
        self.assertEqual(model.eigenvalue_rtol, 0.001)
        self.assertEqual(model.summary()['eigenvalue_rtol'], 0.001)

    def test_model_equality_is_identity(self):
        """Models compare by identity and can be hashed despite holding arrays."""
        model = fit(self.X_iris, self.y_iris)
        other = fit(self.X_iris, self.y_iris)
        self.assertEqual(model, model)
        self.assertNotEqual(model, other)
        self.assertIsInstance(hash(model), int)
        self.assertEqual(len({model, model, other}), 2)

class TestClassLabelValidator(unittest.TestCase):
    """Test cases for the label validator."""

    def test_valid_labels(self):
        validator = ClassLabelValidator()
        self.assertTrue(validator.validate([0, 1, 1, 2, 2, 0], n_samples=6))
        np.testing.assert_array_equal(validator.classes_, [0, 1, 2])
        np.testing.assert_array_equal(validator.counts_, [2, 2, 2])
        report = validator.get_validation_report()
        self.assertTrue(report['passed'])
        self.assertEqual(report['warning_count'], 0)

    def test_single_sample_class_warns(self):
        """A class with one sample is accepted but reported."""
        validator = ClassLabelValidator()
        with self.assertWarns(UserWarning) as ctx:
            self.assertTrue(validator.validate([0, 1, 1, 2, 0], n_samples=5))
        self.assertIn('single sample', str(ctx.warning))
        np.testing.assert_array_equal(validator.counts_, [2, 2, 1])
        report = validator.get_validation_report()
        self.assertTrue(report['passed'])
        self.assertEqual(report['warning_count'], 1)
        self.assertIn('[2]', validator.validation_warnings[0])

    def test_report_records_first_error(self):
        validator = ClassLabelValidator()
        self.assertFalse(validator.validate([1, 2, 2]))
        report = validator.get_validation_report()
        self.assertFalse(report['passed'])
        self.assertEqual(report['error_count'], 1)
        self.assertIsNone(validator.classes_)

    def test_state_reset_between_calls(self):
        validator = ClassLabelValidator()
        validator.validate([0, 0])
        self.assertTrue(validator.validate([0, 0, 1, 1]))
        self.assertEqual(validator.validation_errors, [])

    def test_rejects_two_dimensional_labels(self):
        validator = ClassLabelValidator()
        self.assertFalse(validator.validate(np.zeros((3, 2), dtype=int)))

class TestDiscriminantConfig(unittest.TestCase):
    """Test cases for the configuration object."""

    def test_defaults(self):
        config = DiscriminantConfig()
        self.assertEqual(config.tolerance, 0.0001)
        self.assertAlmostEqual(config.variance_floor, 1e-08)
        self.assertTrue(config.sort_eigenpairs)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            DiscriminantConfig(tolerance=-1e-06)
        with self.assertRaises(ValueError):
            DiscriminantConfig(eigenvalue_rtol=1.5)
        with self.assertRaises(TypeError):
            DiscriminantConfig(sort_eigenpairs='yes')

    def test_from_dict(self):
        config = DiscriminantConfig.from_dict({'tolerance': 0.01, 'sort_eigenpairs': False})
        self.assertEqual(config.tolerance, 0.01)
        self.assertFalse(config.sort_eigenpairs)
        self.assertEqual(DiscriminantConfig.from_dict(config.to_dict()), config)
        with self.assertRaises(ValueError):
            DiscriminantConfig.from_dict({'tol': 0.01})

    def test_to_json(self):
        config = DiscriminantConfig(tolerance=0.001, eigenvalue_rtol=1e-06)
        payload = json.loads(config.to_json())
        self.assertEqual(payload, config.to_dict())
        self.assertEqual(DiscriminantConfig.from_dict(payload), config)

if __name__ == '__main__':
    unittest.main(verbosity=2)
