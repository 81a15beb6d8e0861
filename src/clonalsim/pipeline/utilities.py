"""
Function decorators shared by the simulation pipeline stages.
"""
import functools
import time
from typing import Callable

from clonalsim.mixins import logger


def log_runtime(wrapped: Callable):
    """Function decorator that logs the start, end and runtime of a function.

    Args:
        wrapped: The wrapped original function. Since this is a function
            decorator, this argument is passed implicitly by Python internals.
    """

    @functools.wraps(wrapped)
    def wrapper(*args, **kwargs):
        t0 = time.time()
        logger.info(f"Starting {wrapped.__name__}...")
        try:
            return wrapped(*args, **kwargs)
        finally:
            logger.info(
                f"Finished {wrapped.__name__} in {time.time() - t0:.2f} s."
            )

    return wrapper


def log_kwargs(wrapped: Callable):
    """Function decorator that logs the keyword arguments of a function.

    Only keyword arguments are logged, since positional arguments are
    usually trees or frequency tables.

    Args:
        wrapped: The wrapped original function. Since this is a function
            decorator, this argument is passed implicitly by Python internals.
    """

    @functools.wraps(wrapped)
    def wrapper(*args, **kwargs):
        logger.debug(f"Keyword arguments: {kwargs}")
        return wrapped(*args, **kwargs)

    return wrapper
