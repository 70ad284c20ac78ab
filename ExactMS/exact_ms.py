import time

from ExactMS.config.config import Config
from ExactMS.config.logger_config import get_logger, format_execution_time
from ExactMS.detection.mass_detection_state import MassDetectionState
from ExactMS.states.context import Context

logger = get_logger(__name__)

LOOP_LIMIT = 999


class ExactMS:
    def __init__(self, config: Config):
        self.context = Context(config=config)

    def cancel(self):
        self.context.cancel_event.set()

    def run(self) -> int:
        start_time = time.time()  # record start time
        self.context.push_state(state=MassDetectionState(context=self.context))
        loop_nr = 0
        while self.context.states:
            if loop_nr > LOOP_LIMIT:
                logger.error("Program exited with pending tasks.")
                break
            self.context.next()
            loop_nr += 1
        execution_time = time.time() - start_time  # calculate execution time
        formatted_time = format_execution_time(execution_time)
        logger.info(f"ExactMS finished in {formatted_time}")
        return sum(
            len(result.peaks)
            for scan_peaks in self.context.detected_peaks.values()
            for result in scan_peaks
        )
