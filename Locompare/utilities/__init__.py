"""
Generic utilities used across the package.
"""

from . import log_utils
from .log_utils import create_null_logger, create_default_logger, check_logger


def overlap(first_interval, second_interval, positive=False):
    """
    Calculate the overlap between two closed intervals, as the number of shared bases.
    If the intervals do not overlap, the result is the (negative) distance between them,
    unless "positive" is set, in which case it is 0.

    :param first_interval: (start, end) tuple
    :param second_interval: (start, end) tuple
    :param positive: flag. If set, negative overlaps are reported as 0.
    :rtype: int
    """

    first_start, first_end = sorted(first_interval[:2])
    second_start, second_end = sorted(second_interval[:2])
    value = min(first_end, second_end) - max(first_start, second_start) + 1
    if positive is True:
        return max(value, 0)
    return value


__all__ = ["log_utils", "overlap", "create_null_logger", "create_default_logger", "check_logger"]
