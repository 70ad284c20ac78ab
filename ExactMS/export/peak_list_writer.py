from typing import List

import pandas as pd

from ExactMS.detection.detection_task import ScanPeaks

PEAK_LIST_COLUMNS = ["scan_number", "identifier", "retention_time", "mz", "intensity"]


class PeakListWriter:
    """
    Writes the peaks detected in one file as a table with one row per peak.
    """

    def __init__(self, sep: str = ","):
        self.sep = sep

    @staticmethod
    def to_dataframe(scan_peaks: List[ScanPeaks]) -> pd.DataFrame:
        rows = [
            {
                "scan_number": result.scan_number,
                "identifier": result.identifier,
                "retention_time": result.retention_time,
                "mz": peak.mz,
                "intensity": peak.intensity,
            }
            for result in scan_peaks
            for peak in result.peaks
        ]
        df = pd.DataFrame(rows, columns=PEAK_LIST_COLUMNS)
        return df.astype({"scan_number": "Int64"})

    def write(self, scan_peaks: List[ScanPeaks], path: str) -> int:
        """
        :param scan_peaks: List[ScanPeaks], the detected peaks of every scan of a file.
        :param path: str, the output file.
        :return: int, the number of peaks written.
        """
        df = self.to_dataframe(scan_peaks)
        df.to_csv(path, sep=self.sep, index=False, float_format="%.6f")
        return len(df)
