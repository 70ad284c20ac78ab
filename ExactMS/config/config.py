import os
from typing import Any, List, Optional, Union

import configargparse

from ExactMS.config.logger_config import get_logger, log_parameter, log_section_title
from ExactMS.config.mass_detection_config import MassDetectionConfig
from ExactMS.mass_detection.mass_detector import MassDetectorType
from ExactMS.mass_detection.peak_models.peak_model_registry import PeakModelRegistry
from ExactMS.scans.readers.reader_factory import ReaderFactory

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Config:
    """
    Options of an ExactMS run, read from the command line and optionally from
    a config file (-c/--config). Command line values win over the file.

    After parse(), options are available as attributes (config.noise_level)
    or items (config["noise_level"]).
    """

    def __init__(self):
        self._parser = configargparse.ArgParser(
            description="ExactMS: exact mass detection and shoulder peak removal for profile mass spectra.",
            args_for_setting_config_path=["-c", "--config"],
            formatter_class=configargparse.ArgumentDefaultsHelpFormatter,
        )
        self._add_io_arguments()
        self._add_detection_arguments()
        self._namespace = None

    def parse(self, args: Optional[Union[str, List[str]]] = None) -> None:
        """
        :param args: Optional[Union[str, List[str]]], arguments as a list or a whitespace separated string. sys.argv is used when None.
        :raises FileNotFoundError: an input file does not exist.
        :raises NotADirectoryError: the work dir can not be created.
        :raises ValueError: an option has an invalid value.
        """
        if self._namespace is not None:
            return

        if isinstance(args, str):
            args = args.split()
        self._namespace = vars(self._parser.parse_args(args))
        self._validate()

    def get(self, option: str, default: Optional[Any] = None) -> Optional[Any]:
        if self._namespace is None:
            raise RuntimeError("Config.parse() must be called before options can be read.")
        return self._namespace.get(option, default)

    def mass_detection_config(self) -> MassDetectionConfig:
        return MassDetectionConfig(
            noise_level=self.get("noise_level"),
            resolution=self.get("resolution"),
            peak_model=self.get("peak_model"),
        )

    def log_parameters(self) -> None:
        log_section_title(logger=logger, title="[ CONFIGURATION ]")
        for option, value in self._namespace.items():
            log_parameter(logger=logger, parameter_name=option, parameter_value=value)

    def _add_io_arguments(self) -> None:
        group = self._parser.add_argument_group("Input/output")
        group.add_argument(
            "--input",
            required=True,
            nargs="+",
            type=str,
            metavar="<path>",
            dest="input",
            help=(
                f"Scan files ({', '.join(ReaderFactory.VALID_EXTENSIONS)}). "
                "Tables need 'scan', 'mz' and 'intensity' columns."
            ),
        )
        group.add_argument(
            "--work_dir",
            required=True,
            type=str,
            metavar="<path>",
            dest="work_dir",
            help="Directory for peak lists, the run summary and logs.",
        )
        group.add_argument(
            "--overwrite",
            action="store_true",
            dest="overwrite",
            help="Replace peak lists written by an earlier run.",
        )
        group.add_argument(
            "--log_level",
            default="INFO",
            type=str,
            choices=LOG_LEVELS,
            dest="log_level",
            help="Console log level. The log file always gets every level.",
        )

    def _add_detection_arguments(self) -> None:
        group = self._parser.add_argument_group("Mass detection")
        group.add_argument(
            "--mass_detector",
            default=MassDetectorType.EXACT.value,
            type=str,
            choices=[detector_type.value for detector_type in MassDetectorType],
            dest="mass_detector",
            help="'exact' for profile scans, 'centroid' for centroided scans.",
        )
        group.add_argument(
            "--ms_level",
            default=None,
            type=int,
            dest="ms_level",
            help="Only process scans of this MS level (all scans when omitted).",
        )
        group.add_argument(
            "--noise_level",
            default=0.0,
            type=float,
            dest="noise_level",
            help="Peaks must be more intense than this level.",
        )
        group.add_argument(
            "--resolution",
            default=60000,
            type=int,
            dest="resolution",
            help="Instrument resolution (m/z over FWHM) used by the peak model.",
        )
        group.add_argument(
            "--peak_model",
            default="Gaussian",
            type=str,
            choices=PeakModelRegistry.names(),
            dest="peak_model",
            help="Peak shape used to recognize shoulder peaks.",
        )

    def _validate(self) -> None:
        for path in self.get("input"):
            self._check_input_file(path)
        self._ensure_work_dir()

        self._check_number("noise_level", allow_zero=True)
        self._check_number("resolution", allow_zero=False)
        if self.get("ms_level") is not None:
            self._check_number("ms_level", allow_zero=False)

    @staticmethod
    def _check_input_file(path: str) -> None:
        if not os.path.isfile(path):
            raise FileNotFoundError(f"--input: '{path}' is not a file.")
        extension = os.path.splitext(path)[1].lower()
        if extension not in ReaderFactory.VALID_EXTENSIONS:
            raise ValueError(
                f"--input: '{path}' has an unsupported extension, "
                f"expected one of {', '.join(ReaderFactory.VALID_EXTENSIONS)}."
            )

    def _ensure_work_dir(self) -> None:
        work_dir = self.get("work_dir")
        if os.path.isdir(work_dir):
            return
        parent = os.path.dirname(os.path.abspath(work_dir))
        if not os.path.isdir(parent):
            raise NotADirectoryError(
                f"--work_dir: can not create '{work_dir}', '{parent}' does not exist."
            )
        os.makedirs(work_dir)

    def _check_number(self, option: str, allow_zero: bool) -> None:
        value = self.get(option)
        if value < 0 or (value == 0 and not allow_zero):
            bound = "0 or greater" if allow_zero else "greater than 0"
            raise ValueError(f"--{option}: {value} must be {bound}.")

    def __getattr__(self, option):
        if option.startswith("_"):
            raise AttributeError(option)
        if self._namespace is None:
            raise RuntimeError("Config.parse() must be called before options can be read.")
        if option not in self._namespace:
            raise KeyError(f"Unknown configuration option '{option}'.")
        return self._namespace[option]

    def __getitem__(self, option):
        return self.__getattr__(option)
