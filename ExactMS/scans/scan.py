from typing import Dict, Optional

import numpy as np
import numpy.typing as npt


class Scan:
    """
    One spectrum: (m/z, intensity) samples in acquisition order, ascending by m/z.
    """

    def __init__(
        self,
        identifier: str,
        mz: npt.ArrayLike,
        intensity: npt.ArrayLike,
        scan_number: Optional[int] = None,
        retention_time: float = np.nan,
        ms_level: Optional[int] = None,
    ):
        self.identifier = identifier
        self.scan_number = scan_number
        self.retention_time = retention_time
        self.ms_level = ms_level
        self._mz: npt.NDArray[np.float64] = np.array(mz, dtype=np.float64)
        self._intensity: npt.NDArray[np.float64] = np.array(
            intensity, dtype=np.float64
        )
        if self._mz.shape != self._intensity.shape:
            raise ValueError(
                f"Scan '{identifier}': m/z and intensity arrays differ in length "
                f"({len(self._mz)} != {len(self._intensity)})."
            )

    @property
    def mz(self) -> npt.NDArray[np.float64]:
        return self._mz

    @property
    def intensity(self) -> npt.NDArray[np.float64]:
        return self._intensity

    def __len__(self) -> int:
        return len(self._mz)

    def to_dict(self) -> Dict:
        return {
            "identifier": self.identifier,
            "scan_number": self.scan_number,
            "retention_time": self.retention_time,
            "ms_level": self.ms_level,
            "num_samples": len(self),
        }
