import os
import threading
from typing import TYPE_CHECKING, Dict, List, Optional

from ExactMS.config.config import Config
from ExactMS.scans.scan_file import ScanFile
from ExactMS.states.state import State

if TYPE_CHECKING:
    from ExactMS.detection.detection_task import ScanPeaks

RESULTS_DIR_NAME = "results"


class Context:
    """
    Shared data of a run (config, scan files, detected peaks, the cancel flag)
    and the stack of pending states. The state on top of the stack runs next.
    """

    def __init__(self, config: Config) -> None:
        self.states = []

        # shared data across states
        self.config = config
        self.scan_files: List[ScanFile] = [
            ScanFile(file_path) for file_path in config.input
        ]
        for file_id, scan_file in enumerate(self.scan_files):
            scan_file.set_id(file_id)
        # detected peaks per file id, in scan order
        self.detected_peaks: Dict[int, List["ScanPeaks"]] = {}
        self.cancel_event = threading.Event()

        self.results_dir = os.path.join(self.config.work_dir, RESULTS_DIR_NAME)

        # Ensure directories exist
        os.makedirs(self.results_dir, exist_ok=True)

    def next(self):
        if self.states:
            self.states[-1].run()
        return

    def pop_state(self) -> Optional[State]:
        if self.states:
            return self.states.pop()
        return None

    def push_state(self, state: State):
        self.states.append(state)

    def replace_state(self, state: State):
        if self.states:
            self.states[-1] = state
