import unittest

import numpy as np

from ExactMS.mass_detection.peak_models.gaussian_peak import GaussianPeak
from ExactMS.mass_detection.peak_models.lorentzian_peak import LorentzianPeak
from ExactMS.mass_detection.peak_models.peak_model import MzRange
from ExactMS.mass_detection.peak_models.peak_model_registry import PeakModelRegistry


class PeakModelTestMixin:
    model_cls = None

    def setUp(self):
        self.model = self.model_cls()
        self.model.configure(center_mz=400.0, height=1000.0, resolution=20000)
        self.fwhm = 400.0 / 20000

    def test_height_at_center(self):
        self.assertAlmostEqual(self.model.intensity_at(400.0), 1000.0)

    def test_half_height_at_half_fwhm(self):
        self.assertAlmostEqual(self.model.intensity_at(400.0 - self.fwhm / 2), 500.0)
        self.assertAlmostEqual(self.model.intensity_at(400.0 + self.fwhm / 2), 500.0)

    def test_width_at_half_height_is_fwhm(self):
        mz_range = self.model.width_at(500.0)

        self.assertAlmostEqual(mz_range.size, self.fwhm)
        self.assertAlmostEqual((mz_range.min + mz_range.max) / 2, 400.0)

    def test_width_matches_intensity(self):
        mz_range = self.model.width_at(10.0)

        self.assertAlmostEqual(self.model.intensity_at(mz_range.min), 10.0)
        self.assertAlmostEqual(self.model.intensity_at(mz_range.max), 10.0)

    def test_width_edge_cases(self):
        self.assertEqual(self.model.width_at(0.0), MzRange(-np.inf, np.inf))
        self.assertEqual(self.model.width_at(1000.0), MzRange(400.0, 400.0))
        self.assertEqual(self.model.width_at(2000.0), MzRange(400.0, 400.0))

    def test_array_input(self):
        mz = np.array([399.99, 400.0, 400.01])

        intensity = self.model.intensity_at(mz)

        self.assertEqual(intensity.shape, (3,))
        self.assertAlmostEqual(intensity[0], intensity[2])
        self.assertTrue(np.all(intensity <= 1000.0))

    def test_configure_resets_shape(self):
        self.model.configure(center_mz=800.0, height=10.0, resolution=20000)

        self.assertAlmostEqual(self.model.intensity_at(800.0), 10.0)
        self.assertAlmostEqual(self.model.width_at(5.0).size, 800.0 / 20000)

    def test_invalid_resolution(self):
        with self.assertRaises(ValueError):
            self.model.configure(center_mz=400.0, height=1000.0, resolution=0)


class TestGaussianPeak(PeakModelTestMixin, unittest.TestCase):
    model_cls = GaussianPeak


class TestLorentzianPeak(PeakModelTestMixin, unittest.TestCase):
    model_cls = LorentzianPeak


class TestPeakModelRegistry(unittest.TestCase):
    def test_registered_models(self):
        self.assertIn("Gaussian", PeakModelRegistry.names())
        self.assertIn("Lorentzian", PeakModelRegistry.names())

    def test_resolve_returns_fresh_instances(self):
        factory = PeakModelRegistry.resolve("Lorentzian")

        first, second = factory(), factory()

        self.assertIsInstance(first, LorentzianPeak)
        self.assertIsNot(first, second)

    def test_unknown_model(self):
        with self.assertLogs(
            "ExactMS.mass_detection.peak_models.peak_model_registry", level="WARNING"
        ):
            self.assertIsNone(PeakModelRegistry.resolve("Voigt"))

    def test_duplicate_registration(self):
        with self.assertRaises(ValueError):
            PeakModelRegistry.register(GaussianPeak)


class TestMzRange(unittest.TestCase):
    def test_contains_is_inclusive(self):
        mz_range = MzRange(1.0, 2.0)

        np.testing.assert_array_equal(
            mz_range.contains(np.array([0.5, 1.0, 1.5, 2.0, 2.5])),
            [False, True, True, True, False],
        )

    def test_invalid_range(self):
        with self.assertRaises(ValueError):
            MzRange(2.0, 1.0)


if __name__ == "__main__":
    unittest.main()
