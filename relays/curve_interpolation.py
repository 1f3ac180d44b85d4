"""
Device operating time from time-current characteristic curves.

Operating times are interpolated linearly between the defined points of
the device's library curve. Curves are never extrapolated: a current
below the first point or above the last point has no operating time,
which callers treat as "device does not operate".

Functions:
    operating_time: Operating time of a device at a fault current
    interpolate_curve: Linear interpolation on a point sequence
    curve_data: TCC plot series for a device
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

from domain.device import Device
from domain.enums import DeviceClass
from reference_data.curves import get_curve

logger = logging.getLogger(__name__)


def interpolate_curve(
    points: Sequence[Tuple[float, float]],
    current: float
) -> Optional[float]:
    """
    Interpolate a piecewise-linear time-current curve.

    Scans the points in ascending order for the first pair bracketing the
    current (c_k <= current <= c_k+1) and interpolates between them:
        t = t_k + (t_k+1 - t_k) * (current - c_k) / (c_k+1 - c_k)

    Args:
        points: ((current A, time s), ...) with strictly increasing current.
        current: Fault current (A).

    Returns:
        Operating time (s), or None if the current is outside the curve.

    Example:
        >>> interpolate_curve([(200, 0.05), (500, 0.1)], 350)
        0.075
        >>> interpolate_curve([(200, 0.05), (500, 0.1)], 50) is None
        True
    """
    k = 0
    while k < len(points) - 1:
        lower_current, lower_time = points[k]
        upper_current, upper_time = points[k + 1]
        if lower_current <= current <= upper_current:
            return lower_time + (upper_time - lower_time) * (
                (current - lower_current) / (upper_current - lower_current))
        k += 1
    return None


def operating_time(device: Device, current: float) -> Optional[float]:
    """
    Operating time of a device at a fault current.

    The base time is interpolated from the device's library curve. For the
    recloser class the base time is multiplied by the time dial when one
    is set; fuse and TripSaver curves are fixed.

    Args:
        device: Device dataclass.
        current: Fault current through the device (A).

    Returns:
        Operating time (s), or None if the curve is unknown or the current
        lies outside the curve.

    Example:
        >>> recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5,
        ...                   time_dial=2.0)
        >>> operating_time(recloser, 200)
        0.1
    """
    curve = get_curve(device.curve_name)
    if curve is None:
        logger.debug(f"{device.name}: no curve {device.curve_name!r} in library")
        return None

    op_time = interpolate_curve(curve.points, current)
    if op_time is None:
        return None

    if device.time_dial and device.device_class == DeviceClass.RECLOSER:
        op_time *= device.time_dial
    return op_time


def curve_data(device: Device) -> Optional[Dict]:
    """
    TCC plot series for a device.

    Returns:
        Dictionary with 'name', 'x' (currents, A) and 'y' (times, s, time
        dial applied for reclosers), or None if the curve is unknown.
    """
    curve = get_curve(device.curve_name)
    if curve is None:
        return None

    times = curve.times
    if device.time_dial and device.device_class == DeviceClass.RECLOSER:
        times = [time * device.time_dial for time in times]

    return {
        'name': device.name,
        'x': curve.currents,
        'y': times,
    }
