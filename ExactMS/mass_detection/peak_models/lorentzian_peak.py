import numpy as np

from ExactMS.mass_detection.peak_models.peak_model import PeakModel, MzValues


class LorentzianPeak(PeakModel):
    """
    Lorentzian (Cauchy) peak shape: height * gamma^2 / ((mz - center)^2 + gamma^2),
    with gamma the half width at half maximum. Its tails decay much slower than
    a Gaussian of the same FWHM, which suits FTMS shoulder artifacts.
    """

    name = "Lorentzian"

    def __init__(self):
        super().__init__()
        self.gamma: float = 0.0

    def _update_shape(self) -> None:
        self.gamma = self.fwhm / 2.0

    def intensity_at(self, mz: MzValues) -> MzValues:
        delta = np.asarray(mz, dtype=np.float64) - self.center_mz
        gamma_squared = self.gamma**2
        intensity = self.height * gamma_squared / (delta**2 + gamma_squared)
        if np.ndim(intensity) == 0:
            return float(intensity)
        return intensity

    def _half_width_at(self, min_intensity: float) -> float:
        return self.gamma * np.sqrt(self.height / min_intensity - 1.0)
