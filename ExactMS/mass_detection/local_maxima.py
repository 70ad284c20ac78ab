from typing import List, Tuple

import numba as nb
import numpy as np
import numpy.typing as npt

from ExactMS.mass_detection.candidate_pool import CandidatePool
from ExactMS.mass_detection.mz_peak import MzPeak


class LocalMaximaScanner:
    """
    Splits the samples of a scan into candidate peaks using a local maximum
    criterion. Candidates whose apex is not above the noise level are dropped.
    """

    def __init__(self, noise_level: float):
        self.noise_level = noise_level

    def find_peaks(
        self, mz: npt.NDArray[np.float64], intensity: npt.NDArray[np.float64]
    ) -> List[MzPeak]:
        mz = np.ascontiguousarray(mz, dtype=np.float64)
        intensity = np.ascontiguousarray(intensity, dtype=np.float64)

        apexes, starts, ends = _find_local_maxima(intensity, self.noise_level)
        peaks = []
        for apex, start, end in zip(apexes, starts, ends):
            support_mz = np.concatenate((mz[start:apex], mz[apex + 1 : end + 1]))
            support_intensity = np.concatenate(
                (intensity[start:apex], intensity[apex + 1 : end + 1])
            )
            peaks.append(
                MzPeak(
                    mz=float(mz[apex]),
                    intensity=float(intensity[apex]),
                    support_mz=support_mz,
                    support_intensity=support_intensity,
                )
            )
        return peaks

    def scan(
        self, mz: npt.NDArray[np.float64], intensity: npt.NDArray[np.float64]
    ) -> CandidatePool:
        return CandidatePool(self.find_peaks(mz, intensity))


@nb.njit(cache=True)
def _find_local_maxima(
    intensity: np.ndarray, noise_level: float
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Walk the samples from left to right and collect closed peak regions.

    A region starts at the first non-zero sample after a reset, rises up to the
    first sample whose successor is not bigger (the apex) and then falls until
    the next sample is zero or bigger again. Zero intensity samples are gaps and
    never belong to a region. A region that is still open at the end of the
    scan is not reported.

    Parameters
    ----------
    intensity : np.ndarray
        Sample intensities in ascending m/z order.
    noise_level : float
        Regions whose apex intensity is not strictly above this level are discarded.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        Apex index, first index and last index (inclusive) of every reported region.
    """
    n = len(intensity)
    apexes = np.empty(n, dtype=np.int64)
    starts = np.empty(n, dtype=np.int64)
    ends = np.empty(n, dtype=np.int64)
    count = 0

    ascending = True
    region_start = -1
    apex = -1
    for i in range(n - 1):
        current = intensity[i]
        if current == 0:
            continue

        next_is_bigger = intensity[i + 1] > current
        next_is_zero = intensity[i + 1] == 0

        if region_start < 0:
            region_start = i

        # local maximum
        if ascending and not next_is_bigger:
            apex = i
            ascending = False
            if not next_is_zero:
                continue

        # end of the peak
        if not ascending and (next_is_bigger or next_is_zero):
            if intensity[apex] > noise_level:
                apexes[count] = apex
                starts[count] = region_start
                ends[count] = i
                count += 1
            ascending = True
            region_start = -1

    return apexes[:count], starts[:count], ends[:count]
