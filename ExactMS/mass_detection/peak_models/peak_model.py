from abc import ABC, abstractmethod
from typing import Union

import numpy as np
import numpy.typing as npt

MzValues = Union[float, npt.NDArray[np.float64]]


class MzRange:
    """
    Closed m/z interval [min, max].
    """

    def __init__(self, mz_min: float, mz_max: float):
        if mz_min > mz_max:
            raise ValueError(f"Invalid m/z range: {mz_min} > {mz_max}")
        self.min = mz_min
        self.max = mz_max

    def contains(self, mz: MzValues) -> Union[bool, npt.NDArray[np.bool_]]:
        return (mz >= self.min) & (mz <= self.max)

    @property
    def size(self) -> float:
        return self.max - self.min

    def __eq__(self, other) -> bool:
        if not isinstance(other, MzRange):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __repr__(self) -> str:
        return f"MzRange({self.min}, {self.max})"


class PeakModel(ABC):
    """
    Abstract base class for analytic peak shapes.

    A model is configured with the position (m/z), height (intensity) and
    instrument resolution of a detected peak, and then answers two questions:
    the intensity the modelled curve predicts at a given m/z, and the m/z
    interval in which the curve stays at or above a given intensity.

    The full width at half maximum of every model is center_mz / resolution.
    """

    name: str = None

    def __init__(self):
        self.center_mz: float = 0.0
        self.height: float = 0.0
        self.resolution: int = 0
        self.fwhm: float = 0.0

    def configure(self, center_mz: float, height: float, resolution: int) -> None:
        if resolution <= 0:
            raise ValueError(f"Resolution must be positive, got {resolution}.")
        self.center_mz = center_mz
        self.height = height
        self.resolution = resolution
        self.fwhm = center_mz / resolution
        self._update_shape()

    def width_at(self, min_intensity: float) -> MzRange:
        """
        Return the m/z interval, centered on the model position, within which
        the modelled intensity is >= min_intensity.
        """
        if min_intensity <= 0:
            return MzRange(-np.inf, np.inf)
        if min_intensity >= self.height:
            return MzRange(self.center_mz, self.center_mz)
        half_width = self._half_width_at(min_intensity)
        return MzRange(self.center_mz - half_width, self.center_mz + half_width)

    @abstractmethod
    def intensity_at(self, mz: MzValues) -> MzValues:
        """
        Predicted intensity of the modelled peak at the given m/z value(s).
        """
        pass

    @abstractmethod
    def _update_shape(self) -> None:
        """Derive the shape parameters from center_mz, height and fwhm."""
        pass

    @abstractmethod
    def _half_width_at(self, min_intensity: float) -> float:
        pass
