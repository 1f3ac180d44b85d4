"""
Protection device domain model for feeder protection studies.

A device represents a protective element (fuse, recloser or TripSaver)
placed on the feeder, together with the conductor segment that feeds it
from the previous device.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from domain.enums import DeviceClass
from study_config import DEFAULT_RECLOSE_DELAYS


@dataclass
class Device:
    """
    Represents a protective device and the segment upstream of it.

    Identification:
        name: Display name.
        device_class: Fuse, recloser or TripSaver. None if the study
            document used an unrecognised tag.
        curve_name: Key into the curve library.
        id: Identifier assigned by the caller (informational).

    Settings:
        pickup_amps: Minimum operating current (informational, not used
            in the time calculation).
        time_dial: Curve time multiplier, applied to recloser curves only.

    Segment:
        distance: Miles from the previous device, not from the source.
        conductor: Conductor of the segment feeding this device. None
            means the substation default conductor.

    Reclosing (recloser and TripSaver classes):
        reclose_count: Number of reclose attempts.
        reclose_delays: Open interval before each attempt (s), index
            aligned with the attempt number. Only the first reclose_count
            entries are active. An unset entry (None) uses the
            default 0.1 s delay.
        lockout_after: Lock out after the final reclose.
        manual_reset: Requires manual reset after lockout (informational).

    Example:
        >>> fuse = Device("F1", DeviceClass.FUSE, "S&C K-50", distance=1.0,
        ...               conductor="ACSR 1/0")
        >>> fuse.device_class.recloses
        False
    """
    name: str
    device_class: Optional[DeviceClass]
    curve_name: str
    distance: float
    pickup_amps: Optional[float] = None
    time_dial: Optional[float] = None
    conductor: Optional[str] = None
    reclose_count: int = 0
    reclose_delays: List[Optional[float]] = field(
        default_factory=lambda: list(DEFAULT_RECLOSE_DELAYS))
    lockout_after: bool = False
    manual_reset: bool = False
    id: Optional[Any] = None

    @property
    def type_label(self) -> str:
        """Device class tag used in messages."""
        if self.device_class is None:
            return "device"
        return self.device_class.value

    def to_dict(self) -> Dict[str, Any]:
        """Return the device in study document form."""
        return {
            'id': self.id,
            'deviceType': self.type_label if self.device_class else None,
            'name': self.name,
            'curveType': self.curve_name,
            'pickupAmps': self.pickup_amps,
            'timeDial': self.time_dial,
            'distance': self.distance,
            'conductorType': self.conductor,
            'recloseCount': self.reclose_count,
            'recloseDelays': list(self.reclose_delays),
            'lockoutAfter': self.lockout_after,
            'manualReset': self.manual_reset,
        }


def initialise_dev_dataclass(record: Mapping[str, Any]) -> Optional[Device]:
    """
    Initialize a Device dataclass from a study document device record.

    The record uses the field names of the saved study document
    (deviceType, curveType, pickupAmps, timeDial, distance, conductorType,
    recloseCount, recloseDelays, lockoutAfter, manualReset). Missing
    optional fields take their defaults; a missing reclose delay list
    takes the standard (0.1, 0.3) s sequence.

    Args:
        record: Device mapping from a study document.

    Returns:
        Initialized Device dataclass, or None if record is None.

    Example:
        >>> device = initialise_dev_dataclass({
        ...     'deviceType': 'recloser', 'name': 'R1',
        ...     'curveType': 'IEEE C', 'distance': 0.5, 'timeDial': 1.2,
        ... })
        >>> device.time_dial
        1.2
    """
    if record is None:
        return None

    delays = record.get('recloseDelays')
    if delays is None:
        delays = list(DEFAULT_RECLOSE_DELAYS)

    return Device(
        name=record.get('name', ''),
        device_class=DeviceClass.lookup(record.get('deviceType')),
        curve_name=record.get('curveType', ''),
        distance=float(record.get('distance') or 0),
        pickup_amps=_optional_float(record.get('pickupAmps')),
        time_dial=_optional_float(record.get('timeDial')),
        conductor=record.get('conductorType') or None,
        reclose_count=int(record.get('recloseCount') or 0),
        reclose_delays=[_optional_float(delay) for delay in delays],
        lockout_after=bool(record.get('lockoutAfter', False)),
        manual_reset=bool(record.get('manualReset', False)),
        id=record.get('id'),
    )


def _optional_float(value: Any) -> Optional[float]:
    """Convert to float, treating None and empty strings as unset."""
    if value is None or value == '':
        return None
    return float(value)
