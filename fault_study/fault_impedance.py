"""
Line impedance and fault current model.

This module determines the fault current available along the feeder from
the source parameters and the conductor of each segment:
- Segment impedance from the conductor table, temperature corrected
- Accumulated impedance to a device (scalar magnitudes)
- Accumulated impedance to an arbitrary point (complex)
- Fault current by the voltage-drop method

Two accumulation paths are kept deliberately. The coordination and
simulation path sums the magnitude of each segment impedance; the
fault location path sums complex impedances and takes the magnitude
once at the end, because the estimate reports the complex fault-point
impedance. The coordination thresholds (0.2 s margin) are calibrated
against the scalar path. Only the per-segment primitive is shared.

Voltage Basis:
    Conductor impedances are per-phase values, so the fault current is
    driven by the phase-to-neutral voltage, nominal kV * 1000 / sqrt(3).

Unknown conductors fall back to a flat resistive 0.5 ohm/mile model and
unknown ambient temperatures to a neutral resistance correction; neither
raises.
"""

import logging
import math
from typing import List, Optional

from domain.device import Device
from domain.enums import fault_type_multiplier
from domain.feeder import FeederSection
from domain.substation import Substation
from reference_data.conductors import get_conductor, temperature_factor
from study_config import (
    BASE_OHMS_PER_MILE,
    BASE_SOURCE_CURRENT,
    DEFAULT_CONDUCTOR,
    DEFAULT_TEMPERATURE,
    FALLBACK_OHMS_PER_MILE,
    MIN_FAULT_CURRENT_FRACTION,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SEGMENT IMPEDANCE
# =============================================================================

def resolve_conductor(device: Device, substation: Substation) -> str:
    """
    Conductor name for the segment feeding a device.

    Priority: device conductor > substation default > ACSR 1/0.
    """
    return device.conductor or substation.default_conductor or DEFAULT_CONDUCTOR


def segment_impedance(
    conductor_name: Optional[str],
    length: float,
    temperature: Optional[float] = DEFAULT_TEMPERATURE
) -> complex:
    """
    Complex impedance of a conductor segment.

    Resistance is corrected for ambient temperature, reactance is not:
        Z = R * length * temp_factor + j X * length

    Args:
        conductor_name: Conductor table key.
        length: Segment length (miles).
        temperature: Ambient temperature (deg C).

    Returns:
        Segment impedance (ohms). An unknown conductor returns the flat
        resistive model 0.5 * length + j0.

    Example:
        >>> z = segment_impedance("ACSR 1/0", 1.0, 25)
        >>> round(z.real, 2), round(z.imag, 2)
        (0.97, 0.52)
    """
    conductor = get_conductor(conductor_name)
    if conductor is None:
        logger.debug(f"No conductor data for {conductor_name!r}, "
                     f"using {FALLBACK_OHMS_PER_MILE} ohm/mile")
        return complex(length * FALLBACK_OHMS_PER_MILE, 0)

    resistance = conductor.resistance * length * temperature_factor(temperature)
    reactance = conductor.reactance * length
    return complex(resistance, reactance)


def system_voltage(substation: Substation) -> float:
    """Phase-to-neutral source voltage (V)."""
    return substation.nominal_voltage * 1000 / math.sqrt(3)


def _minimum_fault_current(substation: Substation) -> float:
    return substation.available_fault_current * MIN_FAULT_CURRENT_FRACTION


# =============================================================================
# BY DEVICE INDEX (SCALAR PATH)
# =============================================================================

def impedance_to_device(
    chain: List[FeederSection],
    substation: Substation,
    index: int
) -> float:
    """
    Accumulated impedance magnitude from the source to a device.

    Sums |Z| of each segment from the source through the device at index
    inclusive, each segment using its own conductor.

    Args:
        chain: Ordered feeder chain.
        substation: Feeder source.
        index: Chain index of the device.

    Returns:
        Impedance magnitude sum (ohms).
    """
    total_impedance = 0.0
    for section in chain[:index + 1]:
        conductor_name = resolve_conductor(section.device, substation)
        total_impedance += abs(segment_impedance(
            conductor_name, section.segment_length, substation.temperature))
    return total_impedance


def fault_current_at_device(
    chain: List[FeederSection],
    substation: Substation,
    index: int
) -> float:
    """
    Fault current at a device by the voltage-drop method.

    The source available fault current drops a voltage across the line
    impedance; the remaining voltage drives the fault current:
        V_fault = V - I_avail * Z
        I = V_fault / Z

    The result is floored at 10 % of the source available fault current,
    so it is never zero or negative.

    Args:
        chain: Ordered feeder chain.
        substation: Feeder source.
        index: Chain index of the device.

    Returns:
        Fault current (A). An index outside the chain, or a zero line
        impedance, returns the source available fault current.

    Example:
        >>> chain = order_devices(devices)
        >>> currents = [fault_current_at_device(chain, source, i)
        ...             for i in range(len(chain))]
    """
    if not 0 <= index < len(chain):
        return substation.available_fault_current

    impedance = impedance_to_device(chain, substation, index)
    if impedance == 0:
        return substation.available_fault_current

    voltage_drop = substation.available_fault_current * impedance
    voltage_at_fault = system_voltage(substation) - voltage_drop
    fault_current = voltage_at_fault / impedance

    return max(fault_current, _minimum_fault_current(substation))


# =============================================================================
# BY ARBITRARY DISTANCE (COMPLEX PATH)
# =============================================================================

def impedance_at_point(
    chain: List[FeederSection],
    substation: Substation,
    distance: float
) -> complex:
    """
    Complex line impedance from the source to a point on the feeder.

    Whole segments are added until the segment containing the point,
    of which only the part up to the point is added. A distance past the
    end of the feeder accumulates every segment.

    Args:
        chain: Ordered feeder chain.
        substation: Feeder source.
        distance: Miles from the source.

    Returns:
        Complex impedance (ohms).
    """
    total_impedance = complex(0, 0)
    covered = 0.0

    for section in chain:
        conductor_name = resolve_conductor(section.device, substation)
        section_length = section.segment_length

        if covered + section_length >= distance:
            # Fault lies within this section
            total_impedance += segment_impedance(
                conductor_name, distance - covered, substation.temperature)
            break

        total_impedance += segment_impedance(
            conductor_name, section_length, substation.temperature)
        covered += section_length

    return total_impedance


def fault_current_at_distance(
    chain: List[FeederSection],
    substation: Substation,
    distance: float,
    fault_type=None
) -> float:
    """
    Fault current at a point on the feeder from the complex impedance.

        I = V / |Z| * multiplier(fault_type)

    floored at 10 % of the source available fault current.

    Args:
        chain: Ordered feeder chain.
        substation: Feeder source.
        distance: Miles from the source.
        fault_type: FaultType or tag. Line-to-line faults scale by 0.866;
            three-phase, single-line-to-ground and unrecognised types
            by 1.0.

    Returns:
        Fault current (A). Zero impedance returns the source available
        fault current.
    """
    impedance = impedance_at_point(chain, substation, distance)
    magnitude = abs(impedance)
    if magnitude == 0:
        return substation.available_fault_current

    fault_current = system_voltage(substation) / magnitude * fault_type_multiplier(fault_type)
    return max(fault_current, _minimum_fault_current(substation))


# =============================================================================
# SUPPORTING ESTIMATES
# =============================================================================

def fault_current_by_distance(
    distance: float,
    source_current: float = BASE_SOURCE_CURRENT,
    ohms_per_mile: float = BASE_OHMS_PER_MILE
) -> float:
    """
    Distance-decay fault current estimate, I = I_source / (1 + k * d).

    This assumes a fixed 10 kA source independent of the study source and
    conductors. It only supplies the base current that the operation
    simulator reports for a fault given by distance.
    """
    return source_current / (1 + ohms_per_mile * distance)


def voltage_drop(
    current: float,
    distance: float,
    conductor_name: Optional[str],
    temperature: Optional[float] = DEFAULT_TEMPERATURE
) -> float:
    """
    Voltage drop (V) of a current along a conductor run.

    Returns 0 when the conductor is not in the table.
    """
    if get_conductor(conductor_name) is None:
        return 0.0
    return current * abs(segment_impedance(conductor_name, distance, temperature))
