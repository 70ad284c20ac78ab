from abc import ABC, abstractmethod
from typing import Iterable, List

from ExactMS.scans.scan import Scan
from ExactMS.scans.scan_file import ScanFile


class ScanFileReader(ABC):
    """Abstract base class for reading scan files."""

    VALID_EXTENSIONS: List[str] = []

    @abstractmethod
    def read(self, scan_file: ScanFile) -> Iterable[Scan]:
        """
        Read the scans of a file one by one.

        :param scan_file: ScanFile, the file to read.
        :return: Iterable[Scan], the scans in file order.
        :raises:
        FileNotFoundError: the file does not exist.
        ValueError: the file content can not be interpreted.
        """
        raise NotImplementedError("Subclasses must implement this method.")
