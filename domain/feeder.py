"""
Feeder chain domain model.

A feeder section is one position in the ordered device chain: the
device, its index from the source and its cumulative distance.

Classes:
    FeederSection: Immutable ordered chain entry
"""

from dataclasses import dataclass

from domain.device import Device


@dataclass(frozen=True)
class FeederSection:
    """
    One device in the ordered feeder chain.

    Chains are derived from the device list on every calculation and are
    never stored, so a section is immutable.

    Attributes:
        index: Position in the chain (0 is nearest the source).
        device: The protective device at the end of the section.
        cumulative_distance: Miles from the source to the device.

    Example:
        >>> section = FeederSection(0, device, 1.5)
        >>> section.segment_length == device.distance
        True
    """
    index: int
    device: Device
    cumulative_distance: float

    @property
    def segment_length(self) -> float:
        """Length of the segment feeding this device (miles)."""
        return self.device.distance

    @property
    def start_distance(self) -> float:
        """Miles from the source to the start of the segment."""
        return self.cumulative_distance - self.device.distance
