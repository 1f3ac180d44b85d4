"""
Domain enumerations for feeder protection studies.

This module contains all enumeration types used throughout the study
engine, plus simple lookup functions with no external dependencies.
"""

from enum import Enum
from typing import Dict, List, Optional


class DeviceClass(Enum):
    """Protective device classes on a radial feeder."""
    FUSE = "fuse"
    RECLOSER = "recloser"
    TRIPSAVER = "tripsaver"

    @classmethod
    def lookup(cls, value) -> Optional["DeviceClass"]:
        """
        Resolve a device class from a member or a case-insensitive tag.

        'protector' and 'single-shot' are accepted for the TripSaver
        class. Returns None if the tag is not recognised.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        tag = value.strip().lower()
        if tag in ('protector', 'single-shot', 'single_shot'):
            return cls.TRIPSAVER
        for member in cls:
            if member.value == tag:
                return member
        return None

    @property
    def recloses(self) -> bool:
        """True for classes that run a trip/reclose sequence."""
        return self in (DeviceClass.RECLOSER, DeviceClass.TRIPSAVER)


class FaultType(Enum):
    """Types of faults for protection analysis."""
    THREE_PHASE = "Three-Phase"
    SINGLE_LINE_GROUND = "Single-Line-to-Ground"
    PHASE_PHASE = "Phase-Phase"

    @property
    def multiplier(self) -> float:
        """Fault current scaling relative to a three-phase fault."""
        return _FAULT_MULTIPLIERS[self]


class InputMode(Enum):
    """How a simulated fault is specified."""
    DISTANCE = "distance"
    CURRENT = "current"


class WarningKind(Enum):
    """Coordination warning categories."""
    MISCOORDINATION = "miscoordination"
    TIGHT_MARGIN = "tight_coordination"


class Severity(Enum):
    HIGH = "high"
    MEDIUM = "medium"


class OperationType(Enum):
    """Events in a device operation sequence."""
    TRIP = "Trip"
    RECLOSE = "Reclose"
    LOCKOUT = "Lockout"
    FUSE_OPEN = "Fuse Open"


class Confidence(Enum):
    """Fault location estimate confidence tiers."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CoordinationPhilosophy(Enum):
    """Recloser/fuse coordination philosophies."""
    FUSE_SAVING = "fuse-saving"
    FUSE_BLOWING = "fuse-blowing"


# =============================================================================
# LOOKUP FUNCTIONS
# =============================================================================

_FAULT_MULTIPLIERS = {
    FaultType.THREE_PHASE: 1.0,
    FaultType.SINGLE_LINE_GROUND: 1.0,
    FaultType.PHASE_PHASE: 0.866,
}

# Accepted spellings for each fault type, lower case
_FAULT_TYPE_ALIASES: Dict[str, FaultType] = {
    'three-phase': FaultType.THREE_PHASE,
    '3-phase': FaultType.THREE_PHASE,
    '3p': FaultType.THREE_PHASE,
    '3ph': FaultType.THREE_PHASE,
    'single-line-to-ground': FaultType.SINGLE_LINE_GROUND,
    'slg': FaultType.SINGLE_LINE_GROUND,
    'phase-ground': FaultType.SINGLE_LINE_GROUND,
    'phase-phase': FaultType.PHASE_PHASE,
    'line-to-line': FaultType.PHASE_PHASE,
    'l-l': FaultType.PHASE_PHASE,
    'll': FaultType.PHASE_PHASE,
    '2-phase': FaultType.PHASE_PHASE,
}


def fault_type_lookup(value) -> Optional[FaultType]:
    """
    Resolve a fault type from a member or any accepted spelling.

    Args:
        value: FaultType member, or a tag such as 'Three-Phase', '3P',
            'SLG', 'L-L' or 'Phase-Phase' (case-insensitive).

    Returns:
        The FaultType, or None if the value is not recognised.

    Example:
        >>> fault_type_lookup('L-L')
        <FaultType.PHASE_PHASE: 'Phase-Phase'>
        >>> fault_type_lookup('arc') is None
        True
    """
    if isinstance(value, FaultType):
        return value
    if not isinstance(value, str):
        return None
    return _FAULT_TYPE_ALIASES.get(value.strip().lower())


def fault_type_multiplier(value) -> float:
    """Multiplier for a fault type; unrecognised types scale by 1.0."""
    fault_type = fault_type_lookup(value)
    if fault_type is None:
        return 1.0
    return fault_type.multiplier


def input_mode_lookup(value) -> Optional[InputMode]:
    if isinstance(value, InputMode):
        return value
    if not isinstance(value, str):
        return None
    tag = value.strip().lower()
    for member in InputMode:
        if member.value == tag:
            return member
    return None


def fault_type_options() -> List[Dict[str, str]]:
    return [{'value': f.value, 'label': f.value} for f in FaultType]


def input_mode_options() -> List[Dict[str, str]]:
    return [
        {'value': InputMode.DISTANCE.value, 'label': 'By Distance'},
        {'value': InputMode.CURRENT.value, 'label': 'By Fault Current'},
    ]
