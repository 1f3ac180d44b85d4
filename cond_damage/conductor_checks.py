"""
Conductor ampacity checks.

Compares a continuous current against the ampacity of the conductor
table entry for each feeder section.

Functions:
    check_conductor_ampacity: Check one current against one conductor
    feeder_ampacity_checks: Check a load current on every feeder section
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Union

from domain.device import Device
from domain.enums import Severity
from domain.substation import Substation
from domain.utils import coerce_devices, coerce_substation
from fault_study.fault_impedance import resolve_conductor
from fault_study.topology import order_devices
from reference_data.conductors import get_conductor

logger = logging.getLogger(__name__)

# Currents above this fraction of ampacity are flagged as close to the limit
AMPACITY_WARNING_FRACTION = 0.8


@dataclass(frozen=True)
class AmpacityCheck:
    """
    Result of a conductor ampacity check.

    Attributes:
        valid: False only when the current exceeds the ampacity.
        message: Human readable result.
        severity: High above ampacity, medium above 80 % of it, else None.
    """
    valid: bool
    message: str
    severity: Optional[Severity] = None


def check_conductor_ampacity(
    current: float,
    conductor_name: Optional[str]
) -> AmpacityCheck:
    """
    Check a continuous current against a conductor's ampacity.

    Args:
        current: Continuous current (A).
        conductor_name: Conductor table key.

    Returns:
        AmpacityCheck. A conductor not in the table passes with a
        "No conductor data available" message.

    Example:
        >>> check_conductor_ampacity(250, 'ACSR 1/0')
        AmpacityCheck(valid=False, message='Current (250A) exceeds conductor
        ampacity (205A)', severity=<Severity.HIGH: 'high'>)
    """
    conductor = get_conductor(conductor_name)
    if conductor is None:
        return AmpacityCheck(True, "No conductor data available")

    ampacity = conductor.ampacity
    if current > ampacity:
        return AmpacityCheck(
            False,
            f"Current ({current:.0f}A) exceeds conductor ampacity ({ampacity}A)",
            Severity.HIGH,
        )
    if current > ampacity * AMPACITY_WARNING_FRACTION:
        return AmpacityCheck(
            True,
            f"Current ({current:.0f}A) is close to conductor ampacity ({ampacity}A)",
            Severity.MEDIUM,
        )
    return AmpacityCheck(True, "Conductor ampacity is adequate")


def feeder_ampacity_checks(
    devices: Iterable[Union[Device, Mapping]],
    substation: Optional[Union[Substation, Mapping]],
    load_current: float
) -> Dict[str, AmpacityCheck]:
    """
    Check a load current against the conductor of every feeder section.

    Each section uses the device conductor, else the substation default.

    Args:
        devices: Device dataclasses or study document device mappings.
        substation: Substation dataclass, mapping, or None for defaults.
        load_current: Continuous load current carried by the feeder (A).

    Returns:
        Dictionary of device name to AmpacityCheck, in chain order.
    """
    substation = coerce_substation(substation)
    chain = order_devices(coerce_devices(devices))

    results = {}
    for section in chain:
        device = section.device
        conductor_name = resolve_conductor(device, substation)
        check = check_conductor_ampacity(load_current, conductor_name)
        if check.severity is not None:
            logger.warning(f"{device.name} ({conductor_name}): {check.message}")
        results[device.name] = check
    return results
