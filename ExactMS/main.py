import signal
import sys
from typing import Union, List

from dotenv import load_dotenv

from ExactMS.config.config import Config
from ExactMS.config.env_variables import log_environment_variables
from ExactMS.config.logger_config import setup_logging, get_logger
from ExactMS.exact_ms import ExactMS


def main(args: Union[str, List[str]] = None) -> int:
    load_dotenv()  # Load environment variables from a .env file
    # setup up config
    config = Config()
    config.parse(args)  # Parse arguments from config file or command-line

    # setup logging
    setup_logging(work_dir=config.work_dir, console_level=config.log_level)

    # log config parameters
    config.log_parameters()

    logger = get_logger(__name__)
    # log environment variables
    log_environment_variables()

    app = ExactMS(config)

    # first Ctrl+C stops scheduling new scans, scans in progress still finish
    def _cancel(signum, frame):
        logger.warning("Interrupted, finishing scans in progress.")
        app.cancel()

    signal.signal(signal.SIGINT, _cancel)

    num_peaks = app.run()
    logger.debug(f"{num_peaks} peaks detected in total.")

    return 1 if app.context.cancel_event.is_set() else 0


if __name__ == "__main__":
    sys.exit(main())
