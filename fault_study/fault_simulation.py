"""
Operation sequence simulation of a persistent fault.

Every device in the feeder chain is evaluated at the fault current
available at its own position, giving its operating time, whether it
clears the fault and the trip/reclose/lockout sequence it runs. The
clearing devices are then ranked by trip time and checked for
out-of-order clearing.

Base Current:
    The fault is given either by distance or by current. A distance is
    converted with the distance-decay estimate in
    fault_impedance.fault_current_by_distance, then scaled by the fault
    type multiplier. The base current is reported with the result but is
    not used for device trip times, which use the impedance model.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Union

from domain.device import Device
from domain.enums import InputMode, fault_type_lookup, fault_type_multiplier, input_mode_lookup
from domain.fault_data import DeviceResult, MiscoordinationIssue, SimulationResult
from domain.substation import Substation
from domain.utils import coerce_devices, coerce_substation
from fault_study.fault_impedance import fault_current_at_device, fault_current_by_distance
from fault_study.topology import order_devices
from relays.curve_interpolation import operating_time
from relays.reclose import device_operations
from study_config import NEVER_OPERATES

logger = logging.getLogger(__name__)


def base_fault_current(fault_input: float, input_mode) -> float:
    """
    Unscaled fault current for the simulation report.

    Args:
        fault_input: Miles from the source, or amperes.
        input_mode: InputMode or its tag. Anything other than distance
            treats fault_input as a current.
    """
    if input_mode_lookup(input_mode) == InputMode.DISTANCE:
        return fault_current_by_distance(fault_input)
    return fault_input


def _evaluate_devices(chain, substation: Substation) -> List[DeviceResult]:
    device_results = []
    for section in chain:
        device = section.device
        current = fault_current_at_device(chain, substation, section.index)
        trip_time = operating_time(device, current)
        clears = trip_time is not None and trip_time < NEVER_OPERATES

        device_results.append(DeviceResult(
            device=device,
            fault_current=current,
            trip_time=trip_time,
            clears=clears,
            distance=section.cumulative_distance,
            operations=device_operations(device, trip_time, current),
        ))
    return device_results


def find_miscoordination(
    clearing_results: List[DeviceResult]
) -> List[MiscoordinationIssue]:
    """
    Out-of-order clearing among devices sorted by trip time.

    Each consecutive pair of the sorted list is compared. An issue is
    recorded when the earlier entry is further from the source than the
    later one while tripping strictly faster.

    Args:
        clearing_results: Clearing DeviceResults sorted by trip time.

    Returns:
        One issue per offending pair, in sorted order.
    """
    issues = []
    for current, following in zip(clearing_results, clearing_results[1:]):
        if (current.distance > following.distance
                and current.trip_time < following.trip_time):
            issues.append(MiscoordinationIssue(
                upstream=following.device,
                downstream=current.device,
                upstream_time=following.trip_time,
                downstream_time=current.trip_time,
                time_difference=following.trip_time - current.trip_time,
            ))
    return issues


def simulate_fault(
    devices: Iterable[Union[Device, Mapping]],
    substation: Optional[Union[Substation, Mapping]],
    fault_type,
    fault_input: float,
    input_mode
) -> SimulationResult:
    """
    Simulate device operations for a persistent fault.

    Args:
        devices: Device dataclasses or study document device mappings.
        substation: Substation dataclass, mapping, or None for defaults.
        fault_type: FaultType or tag, e.g. 'Three-Phase', 'SLG', 'L-L'.
        fault_input: Fault distance (miles) or fault current (A).
        input_mode: InputMode or its tag, 'distance' or 'current'.

    Returns:
        SimulationResult with every device result in chain order, the
        clearing devices sorted by trip time and any out-of-order
        clearing. An empty device list gives empty result lists.

    Example:
        >>> result = simulate_fault(devices, substation, 'Three-Phase', 1.0, 'distance')
        >>> result.first_clearing_device.device.name
        'F1'
    """
    devices = coerce_devices(devices)
    substation = coerce_substation(substation)

    original_fault_current = base_fault_current(fault_input, input_mode)
    fault_current = original_fault_current * fault_type_multiplier(fault_type)

    chain = order_devices(devices)
    device_results = _evaluate_devices(chain, substation)

    clearing_results = sorted(
        (result for result in device_results if result.clears),
        key=lambda result: result.trip_time)
    issues = find_miscoordination(clearing_results)

    logger.info(f"Simulated {fault_type} fault ({fault_current:.0f} A): "
                f"{len(device_results)} devices, {len(clearing_results)} clearing, "
                f"{len(issues)} issues")

    return SimulationResult(
        fault_type=fault_type_lookup(fault_type),
        fault_current=fault_current,
        original_fault_current=original_fault_current,
        device_results=device_results,
        clearing_results=clearing_results,
        miscoordination_issues=issues,
    )
