"""
Feeder topology resolution.

Orders an unordered device set into a single radial chain running away
from the source and annotates each device with its cumulative distance.

Position Approximation:
    Devices are ordered by their own segment distance (miles from the
    previous device). The segment distance therefore doubles as the
    ordering key and as a proxy for position along the feeder. A device
    entered with a short segment far down the feeder sorts ahead of a
    device with a longer segment nearer the source. This is a known
    limitation of the study model; ordering by an explicit cumulative
    position would need a device record that carries one.

Functions:
    order_devices: Build the ordered feeder chain
    total_feeder_length: Length of the chain from the source (miles)
    nearest_section: Chain entry closest to a distance from the source
"""

import logging
from typing import Iterable, List, Optional

from domain.device import Device
from domain.feeder import FeederSection

logger = logging.getLogger(__name__)


def order_devices(devices: Iterable[Device]) -> List[FeederSection]:
    """
    Order devices into the feeder chain with cumulative distances.

    Devices are sorted ascending by segment distance (stable, so equal
    distances keep their input order). The cumulative distance of each
    entry is the running sum of segment distances in that order:
    cumulative[0] = distance[0], cumulative[i] = cumulative[i-1] + distance[i].

    Args:
        devices: Device dataclasses in any order.

    Returns:
        New list of FeederSection entries, index 0 nearest the source.
        An empty input returns an empty list.

    Example:
        >>> chain = order_devices([fuse_at_2, recloser_at_1])
        >>> [s.cumulative_distance for s in chain]
        [1.0, 3.0]
    """
    sorted_devices = sorted(devices, key=lambda device: device.distance)

    chain = []
    cumulative_distance = 0.0
    for index, device in enumerate(sorted_devices):
        cumulative_distance += device.distance
        chain.append(FeederSection(index, device, cumulative_distance))

    logger.debug(f"Ordered {len(chain)} devices into feeder chain")
    return chain


def total_feeder_length(chain: List[FeederSection]) -> float:
    """Largest cumulative distance in the chain, 0.0 when it is empty."""
    if not chain:
        return 0.0
    return max(section.cumulative_distance for section in chain)


def nearest_section(
    chain: List[FeederSection],
    distance: float
) -> Optional[FeederSection]:
    """
    Find the chain entry whose cumulative distance is closest to distance.

    Ties are broken in favour of the first entry in ascending order.

    Args:
        chain: Ordered feeder chain.
        distance: Miles from the source.

    Returns:
        The nearest FeederSection, or None for an empty chain.
    """
    nearest = None
    min_difference = float('inf')
    for section in chain:
        difference = abs(section.cumulative_distance - distance)
        if difference < min_difference:
            min_difference = difference
            nearest = section
    return nearest
