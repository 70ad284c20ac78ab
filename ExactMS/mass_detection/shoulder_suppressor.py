from typing import Optional

from ExactMS.config.logger_config import get_logger
from ExactMS.mass_detection.candidate_pool import CandidatePool
from ExactMS.mass_detection.mz_peak import MzPeak
from ExactMS.mass_detection.peak_models.peak_model_registry import PeakModelFactory

logger = get_logger(__name__)


class ShoulderSuppressor:
    """
    Removes lateral peaks (e.g. FTMS shoulder peaks) of an accepted peak.

    A peak model with the position, height and resolution of the accepted peak
    is built. Its width at the noise level bounds the search, and every
    remaining candidate inside that window whose intensity lies under the
    modelled curve is removed from the pool.
    """

    def __init__(
        self,
        noise_level: float,
        resolution: int,
        model_factory: Optional[PeakModelFactory],
    ):
        self.noise_level = noise_level
        self.resolution = resolution
        self.model_factory = model_factory

    def suppress(self, pool: CandidatePool, accepted: MzPeak) -> int:
        """
        :param pool: CandidatePool, the remaining candidates (without the accepted peak).
        :param accepted: MzPeak, the peak whose shoulders are removed.
        :return: int, the number of candidates removed from the pool.
        """
        if self.model_factory is None:
            logger.debug(f"No peak model available, keeping lateral peaks of {accepted}.")
            return 0

        indices = pool.alive_indices()
        if len(indices) == 0:
            return 0

        # one fresh model per accepted peak
        peak_model = self.model_factory()
        peak_model.configure(accepted.mz, accepted.intensity, self.resolution)
        mz_range = peak_model.width_at(self.noise_level)

        mz = pool.mz[indices]
        intensity = pool.intensity[indices]
        in_range = mz_range.contains(mz)
        under_curve = intensity < peak_model.intensity_at(mz)

        return pool.remove_indices(indices[in_range & under_curve])
