"""
Fault study result containers.

This module provides the records returned by the operation simulator
and the fault location estimator. They are plain data with no behaviour
beyond convenience properties, and convert to JSON-safe structures with
domain.utils.to_plain.

Classes:
    Operation: One event in a device operation sequence
    DeviceResult: Per-device outcome of a simulated fault
    MiscoordinationIssue: Out-of-order clearing found in a simulation
    SimulationResult: Complete outcome of a simulated fault
    FaultLocationEstimate: Outcome of the inverse fault location search
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple

from domain.device import Device
from domain.enums import Confidence, FaultType, OperationType


@dataclass(frozen=True)
class Operation:
    """
    One event in a device operation sequence.

    Attributes:
        kind: Trip, Reclose, Lockout or Fuse Open.
        time: Event start time from fault inception (s).
        duration: Event duration (s).
        current: Fault current through the device (A).
    """
    kind: OperationType
    time: float
    duration: float
    current: float

    @property
    def end_time(self) -> float:
        return self.time + self.duration


@dataclass
class DeviceResult:
    """
    Outcome of a simulated fault for one device.

    Attributes:
        device: The device evaluated.
        fault_current: Fault current at the device position (A).
        trip_time: Operating time from the device curve (s), or None if
            the current is outside the curve.
        clears: True when a trip time exists and is below the
            never-operates ceiling.
        distance: Cumulative distance from the source (miles).
        operations: Chronological operation sequence.
    """
    plain_properties: ClassVar[Tuple[str, ...]] = ('total_operations',)

    device: Device
    fault_current: float
    trip_time: Optional[float]
    clears: bool
    distance: float
    operations: List[Operation] = field(default_factory=list)

    @property
    def total_operations(self) -> int:
        return len(self.operations)

    @property
    def device_class(self) -> str:
        return self.device.type_label


@dataclass(frozen=True)
class MiscoordinationIssue:
    """
    A downstream device clearing before the next upstream device.

    Attributes:
        upstream: Device nearer the source that clears later.
        downstream: Device further from the source that clears first.
        upstream_time: Upstream trip time (s).
        downstream_time: Downstream trip time (s).
        time_difference: upstream_time - downstream_time (s).
    """
    upstream: Device
    downstream: Device
    upstream_time: float
    downstream_time: float
    time_difference: float


@dataclass
class SimulationResult:
    """
    Complete outcome of a simulated fault.

    Attributes:
        fault_type: Fault type simulated, or None if unrecognised.
        fault_current: Base current scaled by the fault type (A). Used
            for reporting only; device trip times use the impedance model.
        original_fault_current: Base current before scaling (A).
        device_results: Results for every device, in chain order.
        clearing_results: Clearing devices sorted by trip time.
        miscoordination_issues: Out-of-order clearing among clearing
            devices.
    """
    plain_properties: ClassVar[Tuple[str, ...]] = (
        'first_clearing_device', 'total_devices', 'total_devices_clearing', 'total_issues')

    fault_type: Optional[FaultType]
    fault_current: float
    original_fault_current: float
    device_results: List[DeviceResult] = field(default_factory=list)
    clearing_results: List[DeviceResult] = field(default_factory=list)
    miscoordination_issues: List[MiscoordinationIssue] = field(default_factory=list)

    @property
    def first_clearing_device(self) -> Optional[DeviceResult]:
        return self.clearing_results[0] if self.clearing_results else None

    @property
    def total_devices(self) -> int:
        return len(self.device_results)

    @property
    def total_devices_clearing(self) -> int:
        return len(self.clearing_results)

    @property
    def total_issues(self) -> int:
        return len(self.miscoordination_issues)


@dataclass
class FaultLocationEstimate:
    """
    Outcome of the inverse fault location search.

    Attributes:
        estimated_distance: Best matching distance from the source (miles).
        nearest_device: Device closest to the estimated distance.
        fault_point_impedance: Complex line impedance to the estimate (ohms).
        calculated_fault_current: Predicted current at the estimate (A).
        error_percentage: 100 * |predicted - measured| / measured.
        confidence: High below 5 % error, medium below 15 %, else low.
        total_feeder_length: Largest cumulative device distance (miles).
        error: Explanation when no estimate could be made.
    """
    estimated_distance: float
    nearest_device: Optional[Device]
    fault_point_impedance: complex
    confidence: Confidence
    calculated_fault_current: Optional[float] = None
    error_percentage: Optional[float] = None
    total_feeder_length: Optional[float] = None
    error: Optional[str] = None
