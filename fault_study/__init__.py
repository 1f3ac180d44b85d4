"""
Fault study package for feeder protection coordination.

This package provides the feeder model and fault analysis functionality:
topology, fault current calculation, operation simulation and fault
location estimation.

Modules:
    topology: Ordering devices into the radial feeder chain
    fault_impedance: Line impedance and voltage-drop fault current model
    fault_simulation: Device operation sequences for a persistent fault
    fault_location: Distance to fault from a measured current
"""

# =============================================================================
# TOPOLOGY
# =============================================================================

from fault_study.topology import (
    order_devices,
    total_feeder_length,
    nearest_section,
)

# =============================================================================
# IMPEDANCE AND FAULT CURRENT
# =============================================================================

from fault_study.fault_impedance import (
    resolve_conductor,
    segment_impedance,
    system_voltage,
    impedance_to_device,
    fault_current_at_device,
    impedance_at_point,
    fault_current_at_distance,
    fault_current_by_distance,
    voltage_drop,
)

# =============================================================================
# STUDIES
# =============================================================================

from fault_study.fault_simulation import (
    simulate_fault,
    base_fault_current,
    find_miscoordination,
)

from fault_study.fault_location import (
    estimate_fault_location,
    search_distances,
    confidence_level,
)

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # topology
    'order_devices',
    'total_feeder_length',
    'nearest_section',
    # fault_impedance
    'resolve_conductor',
    'segment_impedance',
    'system_voltage',
    'impedance_to_device',
    'fault_current_at_device',
    'impedance_at_point',
    'fault_current_at_distance',
    'fault_current_by_distance',
    'voltage_drop',
    # fault_simulation
    'simulate_fault',
    'base_fault_current',
    'find_miscoordination',
    # fault_location
    'estimate_fault_location',
    'search_distances',
    'confidence_level',
]
