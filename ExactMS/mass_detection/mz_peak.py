import numpy as np
import numpy.typing as npt


class MzPeak:
    """
    A peak detected in a single scan.

    The m/z starts out as the m/z of the local maximum and is overwritten by the
    refined exact mass once the peak is accepted; apex_mz keeps the local
    maximum. The intensity is the apex intensity and never changes. The support
    holds the raw samples around the apex (excluding the apex itself) in
    ascending m/z order.
    """

    def __init__(
        self,
        mz: float,
        intensity: float,
        support_mz: npt.NDArray[np.float64],
        support_intensity: npt.NDArray[np.float64],
    ):
        self.mz = mz
        self.apex_mz = mz
        self.intensity = intensity
        self.support_mz = support_mz
        self.support_intensity = support_intensity

    def __len__(self) -> int:
        return len(self.support_mz)

    def __repr__(self) -> str:
        return f"MzPeak(mz={self.mz:.6f}, intensity={self.intensity:.2f}, support={len(self)})"
