from typing import List

from joblib import Parallel, delayed
from tqdm import tqdm

from ExactMS.config.env_variables import get_num_cpus
from ExactMS.config.logger_config import get_logger, log_section_title
from ExactMS.config.mass_detection_config import MassDetectionConfig
from ExactMS.detection.detection_task import MassDetectionTask, TaskStatus
from ExactMS.export.export_state import ExportState
from ExactMS.mass_detection.detection_stats import DetectionStats
from ExactMS.mass_detection.mass_detector import MassDetectorType
from ExactMS.states.context import Context
from ExactMS.states.state import State
from ExactMS.states.state_type import StateType

logger = get_logger(__name__)


def _run_task(task: MassDetectionTask) -> MassDetectionTask:
    task.run()
    return task


class MassDetectionState(State):
    STATE_TYPE = StateType.MASS_DETECTION_STATE

    def __init__(self, context: Context):
        super().__init__(context)

        self.detector_type = MassDetectorType(context.config.mass_detector)
        self.mass_detection_config: MassDetectionConfig = (
            context.config.mass_detection_config()
        )
        self.ms_level = context.config.ms_level

    def run(self):
        log_section_title(logger=logger, title="[ Detecting Masses ]")

        tasks = [
            MassDetectionTask(
                scan_file=scan_file,
                detector_type=self.detector_type,
                config=self.mass_detection_config,
                cancel_event=self.context.cancel_event,
                ms_level=self.ms_level,
            )
            for scan_file in self.context.scan_files
        ]
        tasks = self._run_tasks(tasks)

        for task in tasks:
            match task.status:
                case TaskStatus.FINISHED:
                    self.context.detected_peaks[task.scan_file.get_id()] = task.results
                    logger.info(
                        f"'{task.scan_file.file_path}': {task.peak_count()} peaks in "
                        f"{task.stats.scans} scans ({task.stats.suppressed_shoulders} shoulder peaks removed, "
                        f"{task.stats.invalid_count} invalid scans)."
                    )
                case TaskStatus.CANCELED:
                    logger.warning(f"'{task.scan_file.file_path}': mass detection canceled.")
                case TaskStatus.ERROR:
                    logger.error(f"'{task.scan_file.file_path}': {task.error_message}")

        total = DetectionStats.from_stats_list([task.stats for task in tasks])
        logger.info(
            f"Detected {total.detected_peaks} peaks from {total.candidates} candidates "
            f"in {total.scans} scans."
        )
        logger.debug(
            f"Exact mass refinement: {total.refined} refined, {total.no_crossing} without half maximum "
            f"crossing, {total.degenerate} degenerate."
        )

        self._transition()

    def _run_tasks(self, tasks: List[MassDetectionTask]) -> List[MassDetectionTask]:
        n_jobs = min(get_num_cpus(), max(len(tasks), 1))
        logger.debug(f"Processing {len(tasks)} files using {n_jobs} threads.")
        # threads share the cancel event of the context
        results = Parallel(n_jobs=n_jobs, prefer="threads", return_as="generator")(
            delayed(_run_task)(task) for task in tasks
        )
        return list(tqdm(results, total=len(tasks), desc="Files", unit="file"))

    def _transition(self):
        if self.context.cancel_event.is_set():
            logger.warning("Canceled, no peak lists are written.")
            self.context.pop_state()
            return
        self.context.replace_state(state=ExportState(self.context))
