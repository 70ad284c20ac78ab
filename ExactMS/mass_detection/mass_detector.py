from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

import numpy as np
import numpy.typing as npt

from ExactMS.config.logger_config import get_logger
from ExactMS.config.mass_detection_config import MassDetectionConfig
from ExactMS.mass_detection.detection_stats import DetectionStats
from ExactMS.mass_detection.exact_mass import ExactMassRefiner
from ExactMS.mass_detection.local_maxima import LocalMaximaScanner
from ExactMS.mass_detection.mz_peak import MzPeak
from ExactMS.mass_detection.peak_models.peak_model_registry import PeakModelRegistry
from ExactMS.mass_detection.shoulder_suppressor import ShoulderSuppressor
from ExactMS.scans.scan import Scan

logger = get_logger(__name__)


class MassDetector(ABC):
    """
    Abstract base class for mass detectors: turn the samples of one scan into
    a list of peaks sorted by m/z.
    """

    def __init__(self, stats: Optional[DetectionStats] = None):
        self.stats: DetectionStats = stats if stats is not None else DetectionStats()

    def get_mass_values(self, scan: Scan) -> List[MzPeak]:
        peaks = self.detect(scan.mz, scan.intensity)
        logger.debug(f"Scan '{scan.identifier}': {len(peaks)} peaks detected.")
        return peaks

    @abstractmethod
    def detect(
        self, mz: npt.NDArray[np.float64], intensity: npt.NDArray[np.float64]
    ) -> List[MzPeak]:
        pass


class ExactMassDetector(MassDetector):
    """
    Mass detector for profile data.

    Candidates are the local maxima above the noise level. Starting with the
    most intense candidate, the exact mass of each candidate is calculated
    with the FWHM method and all weaker candidates explained as lateral peaks
    of it by the peak model are discarded.
    """

    def __init__(
        self,
        noise_level: float,
        resolution: int,
        peak_model_name: str,
        stats: Optional[DetectionStats] = None,
    ):
        super().__init__(stats)
        MassDetectionConfig.validate_noise_level(noise_level)
        MassDetectionConfig.validate_resolution(resolution)
        self.noise_level = noise_level
        self.resolution = resolution
        self.peak_model_name = peak_model_name

        self.scanner = LocalMaximaScanner(noise_level=noise_level)
        self.refiner = ExactMassRefiner()
        # resolved once, a missing model disables shoulder removal
        self.suppressor = ShoulderSuppressor(
            noise_level=noise_level,
            resolution=resolution,
            model_factory=PeakModelRegistry.resolve(peak_model_name),
        )

    def detect(
        self, mz: npt.NDArray[np.float64], intensity: npt.NDArray[np.float64]
    ) -> List[MzPeak]:
        candidates = self.scanner.scan(mz, intensity)
        num_candidates = len(candidates)

        mz_peaks = []
        suppressed = 0
        while len(candidates) > 0:
            # always take the biggest remaining peak
            current = candidates.pop_max()

            exact_mz, status = self.refiner.refine_with_status(current)
            current.mz = exact_mz
            self.stats.add_refinement(status)
            mz_peaks.append(current)

            suppressed += self.suppressor.suppress(candidates, current)

        mz_peaks.sort(key=lambda peak: peak.mz)
        self.stats.add_scan(num_candidates, len(mz_peaks), suppressed)
        return mz_peaks


class CentroidMassDetector(MassDetector):
    """
    Mass detector for centroided data: every sample above the noise level is a peak.
    """

    def __init__(self, noise_level: float, stats: Optional[DetectionStats] = None):
        super().__init__(stats)
        MassDetectionConfig.validate_noise_level(noise_level)
        self.noise_level = noise_level

    def detect(
        self, mz: npt.NDArray[np.float64], intensity: npt.NDArray[np.float64]
    ) -> List[MzPeak]:
        mz = np.asarray(mz, dtype=np.float64)
        intensity = np.asarray(intensity, dtype=np.float64)
        above_noise = np.flatnonzero(intensity > self.noise_level)
        empty = np.empty(0, dtype=np.float64)
        mz_peaks = [
            MzPeak(float(mz[i]), float(intensity[i]), empty, empty)
            for i in above_noise
        ]
        mz_peaks.sort(key=lambda peak: peak.mz)
        self.stats.add_scan(len(mz_peaks), len(mz_peaks), 0)
        return mz_peaks


class MassDetectorType(Enum):
    EXACT = "exact"
    CENTROID = "centroid"


class MassDetectorFactory:
    """
    Factory for creating mass detectors.
    """

    @staticmethod
    def create_detector(
        detector_type: MassDetectorType,
        config: MassDetectionConfig,
        stats: Optional[DetectionStats] = None,
    ) -> MassDetector:
        """
        Create a mass detector of the given type.

        Parameters
        ----------
        detector_type : MassDetectorType
            The kind of detector (e.g., 'MassDetectorType.EXACT').
        config : MassDetectionConfig
            Detector parameters.
        stats : Optional[DetectionStats]
            Statistics collected by the detector, a new object if None.

        Returns
        -------
        MassDetector
            A concrete instance of a MassDetector.

        Raises
        ------
        ValueError
            If the detector type is not supported.
        """
        match detector_type:
            case MassDetectorType.EXACT:
                return ExactMassDetector(
                    noise_level=config.noise_level,
                    resolution=config.resolution,
                    peak_model_name=config.peak_model,
                    stats=stats,
                )
            case MassDetectorType.CENTROID:
                return CentroidMassDetector(noise_level=config.noise_level, stats=stats)
            case _:
                raise ValueError(f"Unsupported mass detector: {detector_type}")
