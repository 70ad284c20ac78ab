import numba as nb
import numpy as np

from ExactMS.mass_detection.detection_stats import DetectionStats
from ExactMS.scans.scan import Scan


class ScanValidator:
    def __init__(self, min_samples: int = 2):
        self.min_samples = min_samples

    def validate(self, scan: Scan, stats: DetectionStats) -> bool:
        valid = _check_enough_samples(scan.mz, self.min_samples) and _check_ascending(
            scan.mz
        )
        if not valid:
            stats.add_invalid(scan.identifier)
        return valid


@nb.njit(cache=True)
def _check_enough_samples(scan_mz: np.ndarray, min_samples: int) -> bool:
    """
    Check whether a scan has enough samples.

    Parameters
    ----------
    scan_mz : np.ndarray
        M/z values of the scan whose quality is checked.
    min_samples : int
        Minimum number of samples the scan has to contain.

    Returns
    -------
    bool
        True if the scan has enough samples, False otherwise.
    """
    return len(scan_mz) >= min_samples


@nb.njit(cache=True)
def _check_ascending(scan_mz: np.ndarray) -> bool:
    """
    Check whether the m/z values of a scan are in ascending order.

    Parameters
    ----------
    scan_mz : np.ndarray
        M/z values of the scan.

    Returns
    -------
    bool
        True if every m/z value is at least as big as its predecessor, False otherwise.
    """
    for i in range(len(scan_mz) - 1):
        if scan_mz[i + 1] < scan_mz[i]:
            return False
    return True
