"""
Utility functions for domain model operations.

This module contains functions that operate on domain models but don't
belong to a specific model class.

Functions:
    coerce_devices: Accept Device records or study document mappings
    coerce_substation: Accept a Substation or a study document mapping
    to_plain: Convert results to JSON-safe nested data
    format_distance: Display string for a distance in miles
    format_current: Display string for a current in A or kA
"""

import dataclasses
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Union

from domain.device import Device, initialise_dev_dataclass
from domain.substation import Substation, initialise_substation_dataclass


def coerce_devices(
    devices: Optional[Iterable[Union[Device, Mapping[str, Any]]]]
) -> List[Device]:
    """
    Return a list of Device dataclasses.

    Every public engine operation calls this first, so callers can pass
    either Device instances or the device list of a saved study document
    without transformation. The input sequence is not modified.

    Args:
        devices: Device instances, study document device mappings, a mix
            of both, or None.

    Returns:
        New list of Device dataclasses in input order.
    """
    if not devices:
        return []
    return [
        device if isinstance(device, Device) else initialise_dev_dataclass(device)
        for device in devices
    ]


def coerce_substation(
    substation: Optional[Union[Substation, Mapping[str, Any]]]
) -> Substation:
    """Return a Substation from a dataclass, a study mapping, or None."""
    if isinstance(substation, Substation):
        return substation
    return initialise_substation_dataclass(substation)


def to_plain(value: Any) -> Any:
    """
    Convert a result structure to JSON-safe nested data.

    Dataclasses become dicts of their fields, followed by any derived
    properties the class names in plain_properties. Enums become their
    values, complex numbers become {'real': ..., 'imaginary': ...} and
    tuples become lists.

    Example:
        >>> to_plain(complex(1.5, 0.5))
        {'real': 1.5, 'imaginary': 0.5}
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        plain = {
            f.name: to_plain(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
        for name in getattr(value, 'plain_properties', ()):
            plain[name] = to_plain(getattr(value, name))
        return plain
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, complex):
        return {'real': value.real, 'imaginary': value.imag}
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def format_distance(distance: float) -> str:
    return f"{distance:.1f} miles"


def format_current(current: float) -> str:
    """
    Display string for a current.

    Example:
        >>> format_current(2500)
        '2.5 kA'
        >>> format_current(640)
        '640 A'
    """
    if current >= 1000:
        return f"{current / 1000:.1f} kA"
    return f"{current:.0f} A"
