"""
Coordination analysis result containers.

Classes:
    Recommendation: Suggested settings change for a coordination warning
    CoordinationWarning: Miscoordination or tight margin between a pair
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple

from domain.device import Device
from domain.enums import Severity, WarningKind


@dataclass(frozen=True)
class Recommendation:
    """
    Suggested settings change.

    Attributes:
        kind: Rule category, e.g. 'time_dial', 'curve_selection',
            'fuse_upgrade', 'fuse_downgrade', 'margin_increase', 'general'.
        message: Human readable suggestion.
        action: Machine readable action tag, e.g. 'increase_time_dial'.
        device_name: Device the change applies to, None for general advice.
        new_value: Suggested numeric setting or curve name.
        suggested_curves: Alternative curves, for curve changes.
    """
    kind: str
    message: str
    action: str
    device_name: Optional[str] = None
    new_value: Optional[object] = None
    suggested_curves: Tuple[str, ...] = ()


@dataclass
class CoordinationWarning:
    """
    A coordination problem between adjacent devices.

    Attributes:
        kind: Miscoordination or tight margin.
        severity: High for miscoordination, medium for tight margin.
        upstream: Device nearer the source.
        downstream: Device further from the source.
        fault_current: Current at the downstream device used for both
            operating times (A).
        upstream_time: Upstream operating time (s).
        downstream_time: Downstream operating time (s).
        message: Human readable description.
        recommendations: Rule generated settings suggestions.
    """
    plain_properties: ClassVar[Tuple[str, ...]] = ('time_difference',)

    kind: WarningKind
    severity: Severity
    upstream: Device
    downstream: Device
    fault_current: float
    upstream_time: float
    downstream_time: float
    message: str
    recommendations: List[Recommendation] = field(default_factory=list)

    @property
    def devices(self) -> Tuple[Device, Device]:
        """The (upstream, downstream) pair."""
        return self.upstream, self.downstream

    @property
    def time_difference(self) -> float:
        """upstream_time - downstream_time (s)."""
        return self.upstream_time - self.downstream_time
