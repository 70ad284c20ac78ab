import os
import re
import zlib
from typing import Dict, Iterable, List, Optional

import numpy as np
from pyteomics import mzml
from pyteomics.auxiliary import PyteomicsError

from ExactMS.config.logger_config import get_logger
from ExactMS.scans.readers.scan_file_reader import ScanFileReader
from ExactMS.scans.scan import Scan
from ExactMS.scans.scan_file import ScanFile

logger = get_logger(__name__)

# errors raised for malformed XML or undecodable binary arrays
MALFORMED_MZML_ERRORS = (SyntaxError, PyteomicsError, zlib.error)


def parse_scan_number(spectrum_id: str) -> Optional[int]:
    match = re.search(r"\bscan=(\d+)\b", spectrum_id)
    if match:
        return int(match.group(1))
    return None


def parse_retention_time(spectrum_dict: Dict) -> float:
    """
    Scan start time of the first scan in seconds, NaN if the spectrum has none.
    """
    try:
        scan_start_time = spectrum_dict["scanList"]["scan"][0]["scan start time"]
    except (KeyError, IndexError):
        return np.nan
    retention_time = float(scan_start_time)
    if getattr(scan_start_time, "unit_info", None) != "second":
        retention_time *= 60.0
    return retention_time


class MzMLReader(ScanFileReader):
    """
    Streams the spectra of an mzML file. Binary arrays are decoded by pyteomics.
    """

    VALID_EXTENSIONS: List[str] = [".mzml"]

    def read(self, scan_file: ScanFile) -> Iterable[Scan]:
        if not os.path.isfile(scan_file.file_path):
            raise FileNotFoundError(f"The file '{scan_file.file_path}' does not exist.")

        try:
            with mzml.MzML(scan_file.file_path, use_index=False) as f_in:
                for spectrum_dict in f_in:
                    scan = self._parse_spectrum(spectrum_dict)
                    if scan is not None:
                        yield scan
        except MALFORMED_MZML_ERRORS as e:
            raise ValueError(f"'{scan_file.file_path}' is not a valid mzML file: {e}") from e

    @staticmethod
    def _parse_spectrum(spectrum_dict: Dict) -> Optional[Scan]:
        spectrum_id = spectrum_dict.get("id", "")
        if "m/z array" not in spectrum_dict or "intensity array" not in spectrum_dict:
            logger.warning(f"Skipping spectrum '{spectrum_id}' due to missing binary data.")
            return None

        ms_level = spectrum_dict.get("ms level")
        return Scan(
            identifier=spectrum_id,
            mz=spectrum_dict["m/z array"],
            intensity=spectrum_dict["intensity array"],
            scan_number=parse_scan_number(spectrum_id),
            retention_time=parse_retention_time(spectrum_dict),
            ms_level=int(ms_level) if ms_level is not None else None,
        )
