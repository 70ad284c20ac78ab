import unittest

import numpy as np

from ExactMS.mass_detection.local_maxima import LocalMaximaScanner


class TestLocalMaximaScanner(unittest.TestCase):
    def setUp(self):
        self.scanner = LocalMaximaScanner(noise_level=1.0)

    def test_two_separated_peaks(self):
        mz = np.array([100.0, 100.1, 100.2, 100.3, 100.4, 105.0, 105.1])
        intensity = np.array([0.0, 5.0, 50.0, 5.0, 0.0, 20.0, 0.0])

        peaks = self.scanner.find_peaks(mz, intensity)

        self.assertEqual(len(peaks), 2)
        self.assertEqual(peaks[0].mz, 100.2)
        self.assertEqual(peaks[0].intensity, 50.0)
        # the apex itself is not part of the support
        np.testing.assert_array_equal(peaks[0].support_mz, [100.1, 100.3])
        np.testing.assert_array_equal(peaks[0].support_intensity, [5.0, 5.0])

        # apex directly followed by a zero closes the peak on the apex
        self.assertEqual(peaks[1].mz, 105.0)
        self.assertEqual(peaks[1].intensity, 20.0)
        self.assertEqual(len(peaks[1]), 0)

    def test_valley_splits_peaks(self):
        mz = np.arange(7, dtype=float) * 0.01 + 200.0
        intensity = np.array([0.0, 10.0, 30.0, 20.0, 25.0, 5.0, 0.0])

        peaks = self.scanner.find_peaks(mz, intensity)

        self.assertEqual([peak.intensity for peak in peaks], [30.0, 25.0])
        # the valley sample closes the first peak
        np.testing.assert_array_equal(peaks[0].support_intensity, [10.0, 20.0])
        np.testing.assert_array_equal(peaks[1].support_intensity, [5.0])

    def test_noise_level_is_exclusive(self):
        scanner = LocalMaximaScanner(noise_level=50.0)
        mz = np.array([100.0, 100.1, 100.2, 100.3, 100.4])
        intensity = np.array([0.0, 5.0, 50.0, 5.0, 0.0])

        self.assertEqual(scanner.find_peaks(mz, intensity), [])

    def test_empty_and_single_sample_scan(self):
        self.assertEqual(self.scanner.find_peaks(np.array([]), np.array([])), [])
        self.assertEqual(
            self.scanner.find_peaks(np.array([100.0]), np.array([10.0])), []
        )

    def test_monotonic_scan_yields_no_peaks(self):
        mz = np.linspace(100.0, 101.0, 6)
        intensity = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        self.assertEqual(self.scanner.find_peaks(mz, intensity), [])

    def test_open_region_at_end_of_scan_is_not_reported(self):
        mz = np.array([100.0, 100.1, 100.2, 100.3])
        intensity = np.array([0.0, 5.0, 10.0, 7.0])

        self.assertEqual(self.scanner.find_peaks(mz, intensity), [])

    def test_scan_returns_pool_with_all_candidates(self):
        mz = np.array([100.0, 100.1, 100.2, 100.3, 100.4, 105.0, 105.1])
        intensity = np.array([0.0, 5.0, 50.0, 5.0, 0.0, 20.0, 0.0])

        pool = self.scanner.scan(mz, intensity)

        self.assertEqual(len(pool), 2)
        self.assertEqual(pool.pop_max().intensity, 50.0)


if __name__ == "__main__":
    unittest.main()
