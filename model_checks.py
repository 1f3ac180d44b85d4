import logging
from typing import Dict, Iterable, List, Mapping, Optional, Union

from domain.device import Device
from domain.enums import DeviceClass
from domain.substation import Substation
from domain.utils import coerce_devices, coerce_substation
from reference_data.conductors import get_conductor
from reference_data.curves import get_curve

logger = logging.getLogger(__name__)

SUBSTATION_KEY = 'substation'


def device_checks(
    devices: Iterable[Union[Device, Mapping]],
    substation: Optional[Union[Substation, Mapping]] = None
) -> Dict[str, List[str]]:
    """ Devices and the source must be configured with usable information.

    The checks are advisory: the study runs regardless, but a device with
    an issue may not be evaluated the way the user expects.
    :param devices: Device dataclasses or study document device mappings
    :param substation: Substation dataclass, mapping or None
    :return: Dictionary of device name (or 'substation') to issue strings
    """

    issues_detected = {}
    substation_check(coerce_substation(substation), issues_detected)
    for device in coerce_devices(devices):
        if device is None:
            continue
        device_class_check(device, issues_detected)
        curve_check(device, issues_detected)
        conductor_check(device, issues_detected)
        distance_check(device, issues_detected)
        reclose_check(device, issues_detected)
    if issues_detected:
        logger.warning(f"Warnings: {issues_detected}")
    return issues_detected


def substation_check(substation: Substation, issues_detected: Dict) -> Dict:
    """
    The source must have a positive voltage and fault current.
    :param substation:
    :param issues_detected:
    :return:
    """

    if substation.nominal_voltage <= 0:
        _add_issue(issues_detected, SUBSTATION_KEY,
                   f"Nominal voltage {substation.nominal_voltage} kV is not positive")
    if substation.available_fault_current <= 0:
        _add_issue(issues_detected, SUBSTATION_KEY,
                   f"Available fault current {substation.available_fault_current} A is not positive")
    if substation.default_conductor and get_conductor(substation.default_conductor) is None:
        _add_issue(issues_detected, SUBSTATION_KEY,
                   f"Default conductor {substation.default_conductor!r} has no impedance data")
    return issues_detected


def device_class_check(device: Device, issues_detected: Dict) -> Dict:
    """The device must be a fuse, recloser or TripSaver"""

    if device.device_class is None:
        _add_issue(issues_detected, device.name, "Unrecognised device type")
    return issues_detected


def curve_check(device: Device, issues_detected: Dict) -> Dict:
    """
    The device curve must be in the curve library and belong to the
    device's class. Only reclosers apply a time dial.
    """
    curve = get_curve(device.curve_name)
    if curve is None:
        _add_issue(issues_detected, device.name,
                   f"Curve {device.curve_name!r} is not in the curve library")
    elif device.device_class is not None and curve.device_class != device.device_class:
        _add_issue(issues_detected, device.name,
                   f"Curve {device.curve_name!r} is a {curve.device_class.value} curve, "
                   f"device is a {device.device_class.value}")

    if device.time_dial and device.device_class != DeviceClass.RECLOSER:
        _add_issue(issues_detected, device.name,
                   f"Time dial {device.time_dial} is ignored for a {device.type_label}")
    return issues_detected


def conductor_check(device: Device, issues_detected: Dict) -> Dict:
    """A conductor without impedance data is modelled at a flat 0.5 ohm/mile"""

    if device.conductor and get_conductor(device.conductor) is None:
        _add_issue(issues_detected, device.name,
                   f"Conductor {device.conductor!r} has no impedance data")
    return issues_detected


def distance_check(device: Device, issues_detected: Dict) -> Dict:

    if device.distance < 0:
        _add_issue(issues_detected, device.name,
                   f"Distance {device.distance} miles is negative")
    return issues_detected


def reclose_check(device: Device, issues_detected: Dict) -> Dict:
    """
    Reclosing devices should have a delay for every reclose attempt.
    Fuses do not reclose.
    """
    if device.device_class == DeviceClass.FUSE:
        if device.reclose_count > 0:
            _add_issue(issues_detected, device.name,
                       f"Fuse configured with {device.reclose_count} reclose attempts")
    elif device.reclose_count > len(device.reclose_delays):
        _add_issue(issues_detected, device.name,
                   f"{device.reclose_count} reclose attempts but only "
                   f"{len(device.reclose_delays)} delays, 0.1 s used for the rest")
    return issues_detected


def _add_issue(dictionary, key, value):
    """Takes a dictionary, a key, and a value as input and appends the
    key and value or initializes the dictionary if unable to append"""
    try:
        dictionary[key].append(value)
    except KeyError:
        dictionary[key] = [value]
    return dictionary
