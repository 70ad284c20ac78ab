from typing import Dict, List

from ExactMS.mass_detection.exact_mass import RefinementStatus


class DetectionStats:
    def __init__(self):
        self.scans = 0
        self.empty_scans = 0
        self.invalid_scan_ids = []

        self.candidates = 0
        self.detected_peaks = 0
        self.suppressed_shoulders = 0

        self.refined = 0
        self.no_crossing = 0
        self.degenerate = 0

    def add_scan(self, candidates: int, detected_peaks: int, suppressed: int):
        self.scans += 1
        self.candidates += candidates
        self.detected_peaks += detected_peaks
        self.suppressed_shoulders += suppressed
        if detected_peaks == 0:
            self.empty_scans += 1

    def add_invalid(self, scan_id):
        self.invalid_scan_ids.append(scan_id)

    def add_refinement(self, status: RefinementStatus):
        if status == RefinementStatus.REFINED:
            self.refined += 1
        elif status == RefinementStatus.NO_CROSSING:
            self.no_crossing += 1
        else:
            self.degenerate += 1

    @property
    def invalid_count(self):
        return len(self.invalid_scan_ids)

    def merge(self, other: "DetectionStats"):
        self.scans += other.scans
        self.empty_scans += other.empty_scans
        self.invalid_scan_ids.extend(other.invalid_scan_ids)
        self.candidates += other.candidates
        self.detected_peaks += other.detected_peaks
        self.suppressed_shoulders += other.suppressed_shoulders
        self.refined += other.refined
        self.no_crossing += other.no_crossing
        self.degenerate += other.degenerate

    def to_dict(self) -> Dict:
        return {
            "scans": self.scans,
            "empty_scans": self.empty_scans,
            "invalid_scans": {
                "count": self.invalid_count,
                "ids": self.invalid_scan_ids,
            },
            "candidates": self.candidates,
            "detected_peaks": self.detected_peaks,
            "suppressed_shoulders": self.suppressed_shoulders,
            "refinement": {
                "refined": self.refined,
                "no_crossing": self.no_crossing,
                "degenerate": self.degenerate,
            },
        }

    @classmethod
    def from_stats_list(cls, stats_list: List["DetectionStats"]) -> "DetectionStats":
        total = cls()
        for stats in stats_list:
            total.merge(stats)
        return total
