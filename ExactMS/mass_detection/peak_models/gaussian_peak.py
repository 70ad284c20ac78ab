import numpy as np

from ExactMS.mass_detection.peak_models.peak_model import PeakModel, MzValues

# FWHM = 2 * sqrt(2 * ln(2)) * sigma
FWHM_TO_SIGMA = 2.354820045


class GaussianPeak(PeakModel):
    """
    Gaussian peak shape: height * exp(-(mz - center)^2 / (2 * sigma^2)).
    """

    name = "Gaussian"

    def __init__(self):
        super().__init__()
        self.sigma: float = 0.0

    def _update_shape(self) -> None:
        self.sigma = self.fwhm / FWHM_TO_SIGMA

    def intensity_at(self, mz: MzValues) -> MzValues:
        delta = np.asarray(mz, dtype=np.float64) - self.center_mz
        intensity = self.height * np.exp(-(delta**2) / (2.0 * self.sigma**2))
        if np.ndim(intensity) == 0:
            return float(intensity)
        return intensity

    def _half_width_at(self, min_intensity: float) -> float:
        return self.sigma * np.sqrt(-2.0 * np.log(min_intensity / self.height))
