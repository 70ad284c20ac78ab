import os
from typing import Dict, Any, Optional

from ExactMS.mass_detection.detection_stats import DetectionStats


class ScanFile:
    def __init__(self, file_path: str):
        self.file_path = file_path
        self._id = None

        self.detection_stats: Optional[DetectionStats] = None
        self.peak_list_path: Optional[str] = None

    def set_id(self, file_id: int):
        self._id = file_id

    def get_id(self):
        return self._id

    @property
    def name(self) -> str:
        return os.path.splitext(os.path.basename(self.file_path))[0]

    @property
    def extension(self) -> str:
        return os.path.splitext(self.file_path)[1].lower()

    def mark_processed(self, detection_stats: DetectionStats):
        self.detection_stats = detection_stats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "file_path": self.file_path,
            "peak_list": self.peak_list_path,
            "detection": (
                self.detection_stats.to_dict() if self.detection_stats else None
            ),
        }
