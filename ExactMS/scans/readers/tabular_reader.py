import os
from typing import Iterable, List

import numpy as np
import pandas as pd

from ExactMS.scans.readers.scan_file_reader import ScanFileReader
from ExactMS.scans.scan import Scan
from ExactMS.scans.scan_file import ScanFile

REQUIRED_COLUMNS = ["scan", "mz", "intensity"]


class TabularReader(ScanFileReader):
    """
    Reads scans from a table with one row per sample.
    Required columns: 'scan', 'mz', 'intensity'. Optional: 'retention_time', 'ms_level'.
    """

    VALID_EXTENSIONS: List[str] = [".csv", ".tsv"]

    def read(self, scan_file: ScanFile) -> Iterable[Scan]:
        if not os.path.isfile(scan_file.file_path):
            raise FileNotFoundError(f"The file '{scan_file.file_path}' does not exist.")

        match scan_file.extension:
            case ".csv":
                delimiter = ","
            case ".tsv":
                delimiter = "\t"
            case _:
                raise ValueError(
                    f"Unsupported file extension: {scan_file.extension}. Only '.csv' and '.tsv' are supported."
                )

        df = pd.read_csv(scan_file.file_path, sep=delimiter)
        missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
        if missing:
            raise ValueError(
                f"'{scan_file.file_path}' must contain {', '.join(REQUIRED_COLUMNS)} columns "
                f"(missing: {', '.join(missing)})."
            )

        for scan_number, samples in df.groupby("scan", sort=False):
            retention_time = (
                float(samples["retention_time"].iloc[0])
                if "retention_time" in samples.columns
                else np.nan
            )
            ms_level = (
                int(samples["ms_level"].iloc[0]) if "ms_level" in samples.columns else None
            )
            yield Scan(
                identifier=f"scan={scan_number}",
                mz=samples["mz"].to_numpy(dtype=np.float64),
                intensity=samples["intensity"].to_numpy(dtype=np.float64),
                scan_number=int(scan_number),
                retention_time=retention_time,
                ms_level=ms_level,
            )
