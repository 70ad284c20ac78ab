import json
import os
from collections import Counter
from typing import Dict, List

from ExactMS.config.logger_config import get_logger, log_section_title
from ExactMS.export.peak_list_writer import PeakListWriter
from ExactMS.scans.scan_file import ScanFile
from ExactMS.states.context import Context
from ExactMS.states.state import State
from ExactMS.states.state_type import StateType

logger = get_logger(__name__)

SUMMARY_FILE = "summary.json"
PEAK_LIST_SUFFIX = "_peaks.csv"


def peak_list_names(scan_files: List[ScanFile]) -> Dict[int, str]:
    """
    Peak list file name per file id. Inputs sharing a base name (from different
    directories) are prefixed with their file id.
    """
    name_counts = Counter(scan_file.name for scan_file in scan_files)
    names = {}
    for scan_file in scan_files:
        name = scan_file.name
        if name_counts[name] > 1:
            name = f"{scan_file.get_id()}_{name}"
        names[scan_file.get_id()] = f"{name}{PEAK_LIST_SUFFIX}"
    return names


class ExportState(State):
    STATE_TYPE = StateType.EXPORT_STATE

    def __init__(self, context: Context):
        super().__init__(context)
        self.overwrite: bool = context.config.overwrite
        self.writer = PeakListWriter()

    def run(self):
        log_section_title(logger=logger, title="[ Writing Peak Lists ]")

        names = peak_list_names(self.context.scan_files)
        for scan_file in self.context.scan_files:
            scan_peaks = self.context.detected_peaks.get(scan_file.get_id())
            if scan_peaks is None:
                continue
            path = os.path.join(self.context.results_dir, names[scan_file.get_id()])
            if os.path.exists(path) and not self.overwrite:
                logger.warning(
                    f"'{path}' already exists, skipping (use --overwrite to replace it)."
                )
                continue
            num_peaks = self.writer.write(scan_peaks, path)
            scan_file.peak_list_path = path
            logger.info(f"Wrote {num_peaks} peaks to '{path}'.")

        summary_path = os.path.join(self.context.results_dir, SUMMARY_FILE)
        with open(summary_path, "w") as f:
            json.dump(
                {"files": [scan_file.to_dict() for scan_file in self.context.scan_files]},
                f,
                indent=4,
            )
        logger.info(f"Summary written to '{summary_path}'.")

        self.context.pop_state()
