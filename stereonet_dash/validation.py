# validation.py
import logging
from numbers import Real

logger = logging.getLogger(__name__)

DIP_ANGLE_RANGE = (0.0, 90.0)
DIP_DIRECTION_RANGE = (0.0, 360.0)


def _in_range(value, bounds):
    lo, hi = bounds
    # NaN fails both comparisons
    return isinstance(value, Real) and not isinstance(value, bool) and lo <= value <= hi


def validate(dip_angle, dip_direction):
    """
    Check a measurement against its domain, bounds inclusive.

    Returns False (after logging a warning) instead of raising, so batch
    loading keeps going past a few bad rows.
    """
    if not _in_range(dip_angle, DIP_ANGLE_RANGE):
        logger.warning(
            "Dip angle must be between 0 and 90 degrees (%s provided). Skipping.", dip_angle
        )
        return False
    if not _in_range(dip_direction, DIP_DIRECTION_RANGE):
        logger.warning(
            "Dip direction must be between 0 and 360 degrees (%s provided). Skipping.",
            dip_direction,
        )
        return False
    return True
