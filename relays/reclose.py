"""
Auto-reclose operation sequences.

This module builds the chronological operation sequence a device runs
for a persistent fault: the trip/reclose/lockout sequence of reclosers
and TripSavers, and the single opening of a fuse.

Functions:
    get_device_trips: Total trips in a device's sequence
    recloser_operations: Trip/reclose/lockout sequence
    fuse_operations: Fuse opening
    device_operations: Sequence for any device class
"""

from typing import List, Optional

from domain.device import Device
from domain.enums import DeviceClass, OperationType
from domain.fault_data import Operation
from study_config import (
    DEFAULT_RECLOSE_DELAY,
    FUSE_OPEN_DELAY,
    FUSE_OPEN_DURATION,
    LOCKOUT_DURATION,
    NEVER_OPERATES,
    RECLOSE_DURATION,
    TRIP_DURATION,
)


def get_device_trips(device: Device) -> int:
    """
    Get the total number of trips in a device's operation sequence.

    Reclosers and TripSavers trip once plus once per reclose attempt.
    Fuses, and devices of an unrecognised class, operate once.

    Example:
        >>> get_device_trips(recloser)  # reclose_count == 2
        3
    """
    if device.device_class is not None and device.device_class.recloses:
        return 1 + max(device.reclose_count, 0)
    return 1


def _reclose_delay(device: Device, attempt: int) -> float:
    """Open interval before a reclose attempt (0-indexed)."""
    if attempt < len(device.reclose_delays) and device.reclose_delays[attempt]:
        return device.reclose_delays[attempt]
    return DEFAULT_RECLOSE_DELAY


def recloser_operations(
    device: Device,
    trip_time: float,
    current: float
) -> List[Operation]:
    """
    Trip/reclose/lockout sequence for a persistent fault.

    Sequence:
        1. Trip at trip_time (0.05 s).
        2. For each reclose attempt: wait the attempt's delay, Reclose
           (0.02 s), then Trip again (0.05 s).
        3. Lockout (0.1 s) after the final trip, when lockout_after is set
           and at least one reclose was attempted.

    Attempts without a configured delay use 0.1 s.

    Args:
        device: Recloser or TripSaver.
        trip_time: Curve operating time (s).
        current: Fault current through the device (A).

    Returns:
        Operations in chronological order.

    Example:
        >>> ops = recloser_operations(recloser, 0.5, 1200)
        >>> [op.kind.value for op in ops]
        ['Trip', 'Reclose', 'Trip', 'Reclose', 'Trip', 'Lockout']
    """
    operations = [Operation(OperationType.TRIP, trip_time, TRIP_DURATION, current)]
    current_time = trip_time + TRIP_DURATION

    attempts = max(device.reclose_count, 0)
    for attempt in range(attempts):
        current_time += _reclose_delay(device, attempt)
        operations.append(
            Operation(OperationType.RECLOSE, current_time, RECLOSE_DURATION, current))
        current_time += RECLOSE_DURATION

        # Fault persists, device trips again
        operations.append(
            Operation(OperationType.TRIP, current_time, TRIP_DURATION, current))
        current_time += TRIP_DURATION

    if device.lockout_after and attempts > 0:
        operations.append(
            Operation(OperationType.LOCKOUT, current_time, LOCKOUT_DURATION, current))

    return operations


def fuse_operations(trip_time: float, current: float) -> List[Operation]:
    """Single fuse opening, 0.05 s after the melt time, lasting 0.1 s."""
    return [
        Operation(OperationType.FUSE_OPEN, trip_time + FUSE_OPEN_DELAY,
                  FUSE_OPEN_DURATION, current)
    ]


def device_operations(
    device: Device,
    trip_time: Optional[float],
    current: float
) -> List[Operation]:
    """
    Operation sequence of a device for a persistent fault.

    Args:
        device: Device dataclass.
        trip_time: Curve operating time (s), or None.
        current: Fault current through the device (A).

    Returns:
        Chronological operations. Empty when the device has no trip time
        or its trip time is at or above the never-operates ceiling.
        Devices of an unrecognised class get a single Trip.
    """
    if trip_time is None or trip_time >= NEVER_OPERATES:
        return []

    if device.device_class == DeviceClass.FUSE:
        return fuse_operations(trip_time, current)
    if device.device_class is not None and device.device_class.recloses:
        return recloser_operations(device, trip_time, current)
    return [Operation(OperationType.TRIP, trip_time, TRIP_DURATION, current)]
