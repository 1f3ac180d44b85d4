"""
Pairwise coordination analysis of the feeder chain.

Each adjacent (upstream, downstream) pair of the ordered feeder chain is
evaluated at the fault current available at the downstream device. Both
devices' operating times are taken from their curves at that current and
compared:

- Downstream faster than upstream: miscoordination, severity high.
- Upstream less than the coordination margin slower than downstream
  (or faster, the sign is not considered): tight margin, severity medium.

A pair where either device has no operating time at the current (unknown
curve, or current outside the curve) is skipped without a warning.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Union

from domain.coordination_data import CoordinationWarning
from domain.device import Device
from domain.enums import Severity, WarningKind
from domain.substation import Substation
from domain.utils import coerce_devices, coerce_substation
from fault_study.fault_impedance import fault_current_at_device
from fault_study.topology import order_devices
from prot_audit.recommendations import generate_recommendations
from relays.curve_interpolation import operating_time
from study_config import COORDINATION_MARGIN

logger = logging.getLogger(__name__)


def _miscoordination_message(
    upstream: Device,
    downstream: Device,
    fault_current: float,
    time_difference: float
) -> str:
    return (f"{downstream.type_label} {downstream.name} clears before "
            f"{upstream.type_label} {upstream.name} at "
            f"{fault_current / 1000:.1f} kA - potential miscoordination "
            f"({time_difference:.2f}s difference)")


def _tight_margin_message(
    upstream: Device,
    downstream: Device,
    fault_current: float
) -> str:
    return (f"Tight coordination between {upstream.type_label} {upstream.name} "
            f"and {downstream.type_label} {downstream.name} at "
            f"{fault_current / 1000:.1f} kA")


def check_coordination(
    devices: Iterable[Union[Device, Mapping]],
    substation: Optional[Union[Substation, Mapping]],
    philosophy=None
) -> List[CoordinationWarning]:
    """
    Evaluate coordination between every adjacent pair of devices.

    Args:
        devices: Device dataclasses or study document device mappings.
        substation: Substation dataclass, mapping, or None for defaults.
        philosophy: CoordinationPhilosophy, its tag, or None. Selects the
            recommendation rule set only; detection is unaffected.

    Returns:
        Warnings in chain order. For each pair a miscoordination warning
        precedes the tight margin warning when both apply. Fewer than two
        devices give an empty list.

    Example:
        >>> warnings = check_coordination(devices, substation, 'fuse-saving')
        >>> [w.kind.value for w in warnings]
        ['miscoordination', 'tight_coordination']
    """
    devices = coerce_devices(devices)
    substation = coerce_substation(substation)
    chain = order_devices(devices)

    warnings = []
    for i in range(len(chain) - 1):
        upstream = chain[i].device
        downstream = chain[i + 1].device

        fault_current = fault_current_at_device(chain, substation, i + 1)
        upstream_time = operating_time(upstream, fault_current)
        downstream_time = operating_time(downstream, fault_current)

        if upstream_time is None or downstream_time is None:
            logger.debug(f"{upstream.name}/{downstream.name}: no operating time "
                         f"at {fault_current:.0f} A, pair not evaluated")
            continue

        time_difference = upstream_time - downstream_time
        logger.debug(f"{upstream.name} {upstream_time:.3f}s / {downstream.name} "
                     f"{downstream_time:.3f}s at {fault_current:.0f} A")

        if downstream_time < upstream_time:
            warnings.append(CoordinationWarning(
                kind=WarningKind.MISCOORDINATION,
                severity=Severity.HIGH,
                upstream=upstream,
                downstream=downstream,
                fault_current=fault_current,
                upstream_time=upstream_time,
                downstream_time=downstream_time,
                message=_miscoordination_message(
                    upstream, downstream, fault_current, time_difference),
            ))

        if time_difference < COORDINATION_MARGIN:
            warnings.append(CoordinationWarning(
                kind=WarningKind.TIGHT_MARGIN,
                severity=Severity.MEDIUM,
                upstream=upstream,
                downstream=downstream,
                fault_current=fault_current,
                upstream_time=upstream_time,
                downstream_time=downstream_time,
                message=_tight_margin_message(upstream, downstream, fault_current),
            ))

    for warning in warnings:
        warning.recommendations = generate_recommendations(warning, philosophy)

    logger.info(f"Coordination check of {len(chain)} devices: "
                f"{len(warnings)} warnings")
    return warnings
