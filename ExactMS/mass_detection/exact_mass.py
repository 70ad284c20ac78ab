from enum import Enum
from typing import Tuple

import numba as nb
import numpy as np

from ExactMS.mass_detection.mz_peak import MzPeak

_REFINED = 0
_NO_CROSSING = 1
_DEGENERATE = 2


class RefinementStatus(Enum):
    REFINED = _REFINED
    NO_CROSSING = _NO_CROSSING
    DEGENERATE = _DEGENERATE


class ExactMassRefiner:
    """
    Calculates the exact mass of a peak as the center of its full width at
    half maximum (FWHM).

    On the left side of the apex we look for two neighbouring support samples
    whose intensities enclose half of the apex intensity (the first one below,
    the second one above) and intersect the line through them with the half
    intensity level. The same is done on the right side. The exact mass is the
    midpoint between both intersections. If either side has no such pair, or a
    pair does not define a usable line, the apex m/z is kept.
    """

    def refine(self, peak: MzPeak) -> float:
        exact_mz, _ = self.refine_with_status(peak)
        return exact_mz

    def refine_with_status(self, peak: MzPeak) -> Tuple[float, RefinementStatus]:
        exact_mz, status = _fwhm_center(
            np.ascontiguousarray(peak.support_mz, dtype=np.float64),
            np.ascontiguousarray(peak.support_intensity, dtype=np.float64),
            float(peak.mz),
            float(peak.intensity),
        )
        return exact_mz, RefinementStatus(status)


@nb.njit(cache=True)
def _half_intensity_crossing(
    mz_1: float, intensity_1: float, mz_2: float, intensity_2: float, half: float
) -> float:
    # slope m = (y1 - y2) / (x1 - x2), then x = x1 + (y - y1) / m
    if mz_1 == mz_2 or intensity_1 == intensity_2:
        return np.nan
    slope = (intensity_1 - intensity_2) / (mz_1 - mz_2)
    return mz_1 + (half - intensity_1) / slope


@nb.njit(cache=True)
def _fwhm_center(
    support_mz: np.ndarray,
    support_intensity: np.ndarray,
    apex_mz: float,
    apex_intensity: float,
) -> Tuple[float, int]:
    """
    Parameters
    ----------
    support_mz : np.ndarray
        M/z values of the samples around the apex, ascending.
    support_intensity : np.ndarray
        Intensities of the samples around the apex.
    apex_mz : float
        Current m/z of the peak.
    apex_intensity : float
        Intensity of the peak apex.

    Returns
    -------
    Tuple[float, int]
        The exact mass (or apex_mz when it can not be calculated) and the refinement status.
    """
    half = apex_intensity / 2
    x_left = np.nan
    x_right = np.nan
    found_left = False
    left_degenerate = False
    found_right = False

    for i in range(len(support_mz) - 1):
        mz_1 = support_mz[i]
        intensity_1 = support_intensity[i]
        mz_2 = support_mz[i + 1]
        intensity_2 = support_intensity[i + 1]

        # left side, the last matching pair is used
        if intensity_1 <= half and mz_1 < apex_mz and intensity_2 >= half:
            x_left = _half_intensity_crossing(
                mz_1, intensity_1, mz_2, intensity_2, half
            )
            left_degenerate = np.isnan(x_left)
            found_left = not left_degenerate
            continue

        # right side, the first matching pair is used
        if intensity_1 >= half and mz_1 > apex_mz and intensity_2 <= half:
            x_right = _half_intensity_crossing(
                mz_1, intensity_1, mz_2, intensity_2, half
            )
            if np.isnan(x_right):
                return apex_mz, _DEGENERATE
            found_right = True
            break

    if left_degenerate:
        return apex_mz, _DEGENERATE
    if not found_left or not found_right:
        return apex_mz, _NO_CROSSING

    fwhm = x_right - x_left
    exact_mz = x_left + fwhm / 2
    if not np.isfinite(exact_mz):
        return apex_mz, _DEGENERATE
    return exact_mz, _REFINED
