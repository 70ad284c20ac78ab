import threading
from enum import Enum
from typing import Iterable, List, Optional

from ExactMS.config.logger_config import get_logger
from ExactMS.config.mass_detection_config import MassDetectionConfig
from ExactMS.mass_detection.detection_stats import DetectionStats
from ExactMS.mass_detection.mass_detector import MassDetectorFactory, MassDetectorType
from ExactMS.mass_detection.mz_peak import MzPeak
from ExactMS.scans.readers.reader_factory import ReaderFactory
from ExactMS.scans.scan import Scan
from ExactMS.scans.scan_file import ScanFile
from ExactMS.scans.scan_validator import ScanValidator

logger = get_logger(__name__)


class TaskStatus(Enum):
    WAITING = "waiting"
    PROCESSING = "processing"
    FINISHED = "finished"
    CANCELED = "canceled"
    ERROR = "error"


class ScanPeaks:
    """Peaks detected in one scan, together with the scan metadata needed downstream."""

    def __init__(self, scan: Scan, peaks: List[MzPeak]):
        self.identifier = scan.identifier
        self.scan_number = scan.scan_number
        self.retention_time = scan.retention_time
        self.peaks = peaks


class MassDetectionTask:
    """
    Runs mass detection on every scan of one file.

    The cancel event is checked between scans: a scan that is being processed
    always completes, but no further scans are started once it is set.
    """

    def __init__(
        self,
        scan_file: ScanFile,
        detector_type: MassDetectorType,
        config: MassDetectionConfig,
        cancel_event: Optional[threading.Event] = None,
        ms_level: Optional[int] = None,
        scans: Optional[Iterable[Scan]] = None,
    ):
        self.scan_file = scan_file
        self.detector_type = detector_type
        self.config = config
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self.ms_level = ms_level
        self._scans = scans

        self.status = TaskStatus.WAITING
        self.error_message: Optional[str] = None
        self.stats = DetectionStats()
        self.results: List[ScanPeaks] = []
        self._processed_scans = 0
        self._total_scans: Optional[int] = None

    def get_task_description(self) -> str:
        return f"Detecting masses in {self.scan_file.file_path}"

    @property
    def finished_percentage(self) -> float:
        if self.status == TaskStatus.FINISHED:
            return 1.0
        if not self._total_scans:
            return 0.0
        return self._processed_scans / self._total_scans

    def cancel(self) -> None:
        self.cancel_event.set()

    def run(self) -> TaskStatus:
        self.status = TaskStatus.PROCESSING
        try:
            # each task owns its detector, models are never shared between threads
            detector = MassDetectorFactory.create_detector(
                self.detector_type, self.config, self.stats
            )
            validator = ScanValidator()
            scans = list(self._read_scans())
            self._total_scans = len(scans)

            for scan in scans:
                if self.cancel_event.is_set():
                    self.status = TaskStatus.CANCELED
                    logger.info(
                        f"Mass detection of '{self.scan_file.file_path}' canceled after "
                        f"{self._processed_scans}/{self._total_scans} scans."
                    )
                    return self.status

                if validator.validate(scan, self.stats):
                    peaks = detector.get_mass_values(scan)
                else:
                    peaks = []
                self.results.append(ScanPeaks(scan, peaks))
                self._processed_scans += 1

        except (OSError, ValueError) as e:
            self.status = TaskStatus.ERROR
            self.error_message = str(e)
            logger.error(f"Error while processing '{self.scan_file.file_path}': {e}")
            return self.status

        self.scan_file.mark_processed(self.stats)
        self.status = TaskStatus.FINISHED
        return self.status

    def _read_scans(self) -> Iterable[Scan]:
        if self._scans is not None:
            scans = self._scans
        else:
            scans = ReaderFactory.get_reader(self.scan_file).read(self.scan_file)
        for scan in scans:
            if self.ms_level is not None and scan.ms_level != self.ms_level:
                continue
            yield scan

    def peak_count(self) -> int:
        return sum(len(result.peaks) for result in self.results)
