"""
Environment variables that influence an ExactMS run.
"""

import os

from ExactMS.config.logger_config import get_logger, log_parameter, log_section_title

logger = get_logger(__name__)

# ExactMS
EXACTMS_NUM_CPUS = "EXACTMS_NUM_CPUS"

# Numba
NUMBA_NUM_THREADS = "NUMBA_NUM_THREADS"
NUMBA_CACHE_DIR = "NUMBA_CACHE_DIR"

# Numpy, Pandas, ...
OMP_NUM_THREADS = "OMP_NUM_THREADS"
MKL_NUM_THREADS = "MKL_NUM_THREADS"
OPENBLAS_NUM_THREADS = "OPENBLAS_NUM_THREADS"

# logged at startup
env_vars = [
    EXACTMS_NUM_CPUS,
    NUMBA_NUM_THREADS,
    NUMBA_CACHE_DIR,
    OMP_NUM_THREADS,
    MKL_NUM_THREADS,
    OPENBLAS_NUM_THREADS,
]


def get_num_cpus() -> int:
    """
    Number of worker threads used to process input files concurrently.
    Falls back to the number of available CPUs when EXACTMS_NUM_CPUS is not set.
    """
    value = os.environ.get(EXACTMS_NUM_CPUS)
    if value is None:
        return os.cpu_count() or 1
    num_cpus = int(value)
    if num_cpus <= 0:
        raise ValueError(f"{EXACTMS_NUM_CPUS}: {value} is not a positive integer.")
    return num_cpus


def log_environment_variables():
    log_section_title(logger=logger, title="[ ENVIRONMENT VARIABLES ]")
    for var in env_vars:
        log_parameter(logger=logger, parameter_name=var, parameter_value=os.environ.get(var, "not set"))
