"""
Study inputs: validation and study document handling.

A study is persisted as a JSON document:

    {
        "substation": {"nominalVoltage": 12.47, "availableFaultCurrent": 5000,
                       "defaultConductor": "ACSR 1/0", "temperature": 75},
        "devices": [{"deviceType": "fuse", "name": "F1", ...}, ...],
        "timestamp": "2024-05-01T09:30:00"
    }

User supplied numbers and tags are validated here, before they reach the
study engine, which itself never raises on data.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from domain.device import Device
from domain.enums import FaultType, InputMode, fault_type_lookup, input_mode_lookup
from domain.substation import Substation
from domain.utils import coerce_devices, coerce_substation

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """Raised for user input the study cannot be run with."""


@dataclass
class StudyInputs:
    """
    A loaded study.

    Attributes:
        substation: Feeder source, defaults substituted where missing.
        devices: Devices in document order.
        timestamp: Save time recorded in the document, if any.
    """
    substation: Substation
    devices: List[Device] = field(default_factory=list)
    timestamp: Optional[str] = None


# =============================================================================
# VALIDATION
# =============================================================================

def validate_positive(value: Any, name: str) -> float:
    """
    Parse a user supplied number and check it is positive.

    Args:
        value: Number or numeric string.
        name: Input name used in the error message.

    Returns:
        The value as a float.

    Raises:
        InputError: If the value is not a finite number greater than zero.

    Example:
        >>> validate_positive("2.5", "fault distance")
        2.5
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InputError(f"{name} must be a number, got {value!r}") from None

    if math.isnan(number) or math.isinf(number) or number <= 0:
        raise InputError(f"{name} must be greater than zero, got {value!r}")
    return number


def validate_fault_type(value: Any) -> FaultType:
    """Resolve a fault type tag, raising InputError if it is unrecognised."""
    fault_type = fault_type_lookup(value)
    if fault_type is None:
        options = ', '.join(f.value for f in FaultType)
        raise InputError(f"Unrecognised fault type {value!r}, expected one of: {options}")
    return fault_type


def validate_input_mode(value: Any) -> InputMode:
    """Resolve an input mode tag, raising InputError if it is unrecognised."""
    input_mode = input_mode_lookup(value)
    if input_mode is None:
        options = ', '.join(m.value for m in InputMode)
        raise InputError(f"Unrecognised input mode {value!r}, expected one of: {options}")
    return input_mode


# =============================================================================
# STUDY DOCUMENTS
# =============================================================================

def parse_study_document(document: Mapping[str, Any]) -> StudyInputs:
    """
    Build study inputs from a study document.

    Args:
        document: Mapping with optional 'substation', 'devices' and
            'timestamp' keys.

    Returns:
        StudyInputs. A missing substation record takes the default source
        and a missing device list gives no devices.

    Raises:
        InputError: If the document is not a mapping.
    """
    if not isinstance(document, Mapping):
        raise InputError(f"Study document must be a mapping, got {type(document).__name__}")

    substation = coerce_substation(document.get('substation'))
    devices = [device for device in coerce_devices(document.get('devices')) if device is not None]

    logger.info(f"Study document with {len(devices)} devices, "
                f"{substation.nominal_voltage} kV source")
    return StudyInputs(substation, devices, document.get('timestamp'))


def load_study(path: Union[str, Path]) -> StudyInputs:
    """
    Load a study from a JSON study document file.

    Raises:
        InputError: If the file is not valid JSON.
    """
    path = Path(path)
    logger.info(f"Loading study {path}")
    try:
        with path.open(encoding='utf-8') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise InputError(f"{path.name} is not a valid study document: {e}") from e
    return parse_study_document(document)


def study_document(
    substation: Union[Substation, Mapping, None],
    devices: Iterable[Union[Device, Mapping]],
    timestamp: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the study document for a substation and its devices.

    Args:
        substation: Substation dataclass or mapping.
        devices: Device dataclasses or mappings.
        timestamp: ISO timestamp, defaults to now.

    Returns:
        JSON serialisable study document.
    """
    return {
        'substation': coerce_substation(substation).to_dict(),
        'devices': [device.to_dict() for device in coerce_devices(devices)],
        'timestamp': timestamp or datetime.now().isoformat(timespec='seconds'),
    }
