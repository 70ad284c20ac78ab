import heapq
from typing import List, Optional

import numpy as np
import numpy.typing as npt

from ExactMS.mass_detection.mz_peak import MzPeak


class CandidatePool:
    """
    Candidate peaks of a single scan, retrievable by decreasing intensity.

    Peaks are stored once and referred to by their index. A max-heap keyed by
    (intensity, m/z, index) yields the next candidate, ties going to the lowest
    m/z. Removed candidates are only flagged in the alive mask and skipped
    lazily when they reach the top of the heap.
    """

    def __init__(self, peaks: List[MzPeak]):
        self._peaks: List[MzPeak] = peaks
        self.mz: npt.NDArray[np.float64] = np.array(
            [peak.mz for peak in peaks], dtype=np.float64
        )
        self.intensity: npt.NDArray[np.float64] = np.array(
            [peak.intensity for peak in peaks], dtype=np.float64
        )
        self._alive: npt.NDArray[np.bool_] = np.ones(len(peaks), dtype=bool)
        self._size: int = len(peaks)

        self._heap = [(-peak.intensity, peak.mz, i) for i, peak in enumerate(peaks)]
        heapq.heapify(self._heap)

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> MzPeak:
        return self._peaks[index]

    def is_alive(self, index: int) -> bool:
        return bool(self._alive[index])

    def alive_indices(self) -> npt.NDArray[np.int64]:
        return np.flatnonzero(self._alive)

    def peek_max(self) -> Optional[int]:
        """
        Index of the remaining candidate with the highest intensity, None if the pool is empty.
        """
        while self._heap and not self._alive[self._heap[0][2]]:
            heapq.heappop(self._heap)
        if not self._heap:
            return None
        return self._heap[0][2]

    def pop_max(self) -> Optional[MzPeak]:
        index = self.peek_max()
        if index is None:
            return None
        self.remove(index)
        return self._peaks[index]

    def remove(self, index: int) -> None:
        if self._alive[index]:
            self._alive[index] = False
            self._size -= 1

    def remove_indices(self, indices: npt.NDArray[np.int64]) -> int:
        """
        Remove the given candidates and return how many were still in the pool.
        """
        indices = np.asarray(indices, dtype=np.int64)
        removed = int(np.count_nonzero(self._alive[indices]))
        self._alive[indices] = False
        self._size -= removed
        return removed
