from typing import List

from ExactMS.scans.readers.mzml_reader import MzMLReader
from ExactMS.scans.readers.scan_file_reader import ScanFileReader
from ExactMS.scans.readers.tabular_reader import TabularReader
from ExactMS.scans.scan_file import ScanFile


class ReaderFactory:
    VALID_EXTENSIONS: List[str] = MzMLReader.VALID_EXTENSIONS + TabularReader.VALID_EXTENSIONS

    @staticmethod
    def get_reader(scan_file: ScanFile) -> ScanFileReader:
        match scan_file.extension:
            case ".mzml":
                return MzMLReader()
            case ".csv" | ".tsv":
                return TabularReader()
            case _:
                raise ValueError(
                    f"Unsupported file type: {scan_file.extension}. "
                    f"Supported types: {', '.join(ReaderFactory.VALID_EXTENSIONS)}"
                )
