"""
Logging configuration and path utilities for feeder coordination studies.

This module provides path resolution for saving study results and
logging utilities for tracing script execution.

Functions:
    getpath: Resolve output path for study results
    configure_logging: Configure the root logger for a study run
    log_arguments: Decorator to log function calls with arguments
    timer: Decorator to log function run time
"""

import functools
import logging
import time
from pathlib import Path
from typing import Optional, Union

from study_config import LOG_FILENAME, RESULTS_SUBDIR


def getpath(subdir: str = RESULTS_SUBDIR) -> Path:
    """
    Return a path for study results output.

    Args:
        subdir: Subdirectory name to create under the user's home
            directory. Defaults to "FeederCoordinationResults".

    Returns:
        Path object pointing to the output directory. The directory
        is created if it does not exist.

    Example:
        >>> output_path = getpath()
        >>> print(output_path)
        /home/dan.park/FeederCoordinationResults
    """
    clientpath = Path.home() / subdir
    clientpath.mkdir(parents=True, exist_ok=True)

    return clientpath


def configure_logging(
    level: int = logging.INFO,
    filename: Optional[Union[str, Path]] = None
) -> Path:
    """
    Configure the root logger to write to a log file.

    Args:
        level: Logging level. Defaults to INFO.
        filename: Log file path. Defaults to the log file in the results
            directory.

    Returns:
        Path of the log file.
    """
    log_file = Path(filename) if filename else getpath() / LOG_FILENAME

    logging.basicConfig(
        filename=log_file,
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    return log_file


def log_arguments(func):
    """
    Decorator to log function calls with their arguments.

    Wraps a function to log its name and arguments at INFO level
    each time it is called.

    Example:
        >>> @log_arguments
        ... def simulate(devices, fault_type):
        ...     ...
        >>>
        >>> simulate(devices, "Three-Phase")
        # Logs: "Function simulate called with arguments: ..."
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Build argument string for logging
        arg_repr = [repr(a) for a in args]
        kwarg_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
        arg_str = ', '.join(arg_repr + kwarg_repr)

        logging.info(
            f"Function {func.__name__} called with arguments: {arg_str}"
        )
        return func(*args, **kwargs)

    return wrapper


def timer(func):
    """Log the runtime of the decorated function"""

    @functools.wraps(func)
    def wrapper_timer(*args, **kwargs):
        start_time = time.perf_counter()
        value = func(*args, **kwargs)
        end_time = time.perf_counter()
        run_time = end_time - start_time
        logging.info(f"Finished {func.__name__!r} in {run_time:.4f} secs")
        return value

    return wrapper_timer
