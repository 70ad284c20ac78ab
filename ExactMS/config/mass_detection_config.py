import numbers


class MassDetectionConfig:
    def __init__(
        self,
        noise_level: float = 0.0,
        resolution: int = 60000,
        peak_model: str = "Gaussian",
    ):
        """
        Configuration for mass detection parameters.

        Parameters:
        ----------
        noise_level : float
            Intensity a local maximum must exceed to be reported as a peak. Also the intensity at which
            the width of a peak model is measured when searching for shoulder peaks (default: 0.0).

        resolution : int
            Instrument resolution (m/z divided by the FWHM of a peak), used to build the peak model
            (default: 60000).

        peak_model : str
            Name of the peak model used to recognize shoulder peaks, e.g. 'Gaussian' or 'Lorentzian'
            (default: 'Gaussian').
        """
        self.validate_noise_level(noise_level)
        self.validate_resolution(resolution)
        self.noise_level = noise_level
        self.resolution = resolution
        self.peak_model = peak_model

    @staticmethod
    def validate_noise_level(noise_level: float) -> None:
        if not isinstance(noise_level, numbers.Real) or noise_level < 0:
            raise ValueError(f"noise_level: {noise_level} is not a positive number (0 or greater).")

    @staticmethod
    def validate_resolution(resolution: int) -> None:
        if (
            isinstance(resolution, bool)
            or not isinstance(resolution, numbers.Integral)
            or resolution <= 0
        ):
            raise ValueError(f"resolution: {resolution} is not a positive integer (greater than 0).")
