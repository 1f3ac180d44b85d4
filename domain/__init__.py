"""
Domain models for feeder protection coordination studies.

This package contains the core domain models (dataclasses) used throughout
the study engine. Each model represents a distinct concept of a radial
distribution feeder and its protection.

Modules:
    enums: Device classes, fault types, warning and operation kinds
    device: Protective device model (fuse, recloser, TripSaver)
    substation: Feeder source model
    feeder: Ordered feeder chain entry
    coordination_data: Coordination warnings and recommendations
    fault_data: Simulation and fault location results
    utils: Input coercion, plain-data conversion and display formatting

Usage:
    # Import the entire domain package
    import domain as dd

    # Or import specific items
    from domain import Device, Substation, DeviceClass

Input Records:
    Engine operations accept either the dataclasses below or the plain
    mappings of a saved study document:

    >>> import domain as dd
    >>> devices = dd.coerce_devices([
    ...     {'deviceType': 'fuse', 'name': 'F1', 'curveType': 'S&C K-50',
    ...      'distance': 1.0, 'conductorType': 'ACSR 1/0'},
    ... ])
    >>> devices[0].device_class
    <DeviceClass.FUSE: 'fuse'>

Results:
    Results are plain dataclasses. Use dd.to_plain() to obtain nested
    dicts and lists for serialisation.
"""

# =============================================================================
# ENUMERATIONS
# =============================================================================

from domain.enums import (
    DeviceClass,
    FaultType,
    InputMode,
    WarningKind,
    Severity,
    OperationType,
    Confidence,
    CoordinationPhilosophy,
    fault_type_lookup,
    fault_type_multiplier,
    input_mode_lookup,
    fault_type_options,
    input_mode_options,
)

# =============================================================================
# DOMAIN MODELS
# =============================================================================

from domain.device import Device, initialise_dev_dataclass
from domain.substation import Substation, initialise_substation_dataclass
from domain.feeder import FeederSection

# =============================================================================
# RESULTS
# =============================================================================

from domain.coordination_data import Recommendation, CoordinationWarning
from domain.fault_data import (
    Operation,
    DeviceResult,
    MiscoordinationIssue,
    SimulationResult,
    FaultLocationEstimate,
)

# =============================================================================
# UTILITIES
# =============================================================================

from domain.utils import (
    coerce_devices,
    coerce_substation,
    to_plain,
    format_distance,
    format_current,
)

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Enums
    "DeviceClass",
    "FaultType",
    "InputMode",
    "WarningKind",
    "Severity",
    "OperationType",
    "Confidence",
    "CoordinationPhilosophy",
    "fault_type_lookup",
    "fault_type_multiplier",
    "input_mode_lookup",
    "fault_type_options",
    "input_mode_options",
    # Domain models
    "Device",
    "Substation",
    "FeederSection",
    # Initializers
    "initialise_dev_dataclass",
    "initialise_substation_dataclass",
    # Results
    "Recommendation",
    "CoordinationWarning",
    "Operation",
    "DeviceResult",
    "MiscoordinationIssue",
    "SimulationResult",
    "FaultLocationEstimate",
    # Utilities
    "coerce_devices",
    "coerce_substation",
    "to_plain",
    "format_distance",
    "format_current",
]
