"""
Coordination recommendation rules.

Recommendations are generated from a flat rule table keyed on the
warning kind and the coordination philosophy. Each entry matches an
(upstream class, downstream class) pair, where None matches any class,
and names the rule that builds the recommendation. Every matching rule
contributes; a rule may decline (for example a fuse that is not on the
K-rating ladder). If nothing is produced, a single generic "review
settings" recommendation is returned.

Philosophies:
    None: Neutral rule set.
    Fuse-saving: Slow the upstream recloser (larger time dial, slower
        curve family) so the downstream fuse clears first.
    Fuse-blowing: Speed up the upstream device and downgrade the
        downstream fuse rating to protect it.
"""

from typing import Callable, Dict, List, Optional, Tuple

from domain.coordination_data import CoordinationWarning, Recommendation
from domain.device import Device
from domain.enums import CoordinationPhilosophy, DeviceClass, WarningKind

Rule = Callable[[Device, Device], Optional[Recommendation]]

# =============================================================================
# REFERENCE LISTS
# =============================================================================

SLOWER_CURVES = ('IEEE D', 'IEEE E', 'ANSI Very Inverse')
FASTER_CURVES = ('IEEE E', 'IEEE F', 'ANSI Extremely Inverse')

# K-link fuse rating ladder, smallest to largest
_FUSE_LADDERS = [
    ['S&C K-25', 'S&C K-35', 'S&C K-50', 'S&C K-75', 'S&C K-100'],
    ['Cooper K-25', 'Cooper K-35', 'Cooper K-50', 'Cooper K-75', 'Cooper K-100'],
]

FUSE_UPGRADES: Dict[str, str] = {
    ladder[i]: ladder[i + 1] for ladder in _FUSE_LADDERS for i in range(len(ladder) - 1)
}
FUSE_DOWNGRADES: Dict[str, str] = {
    upper: lower for lower, upper in FUSE_UPGRADES.items()
}


# =============================================================================
# RULES
# =============================================================================

def _dial(device: Device) -> float:
    return device.time_dial or 1


def _increase_time_dial(factor: float, limit: float) -> Rule:
    def rule(upstream: Device, downstream: Device) -> Recommendation:
        new_dial = round(min(_dial(upstream) * factor, limit), 3)
        return Recommendation(
            kind='time_dial',
            message=(f"Increase {upstream.name} time dial from "
                     f"{_dial(upstream):g} to {new_dial:g}"),
            action='increase_time_dial',
            device_name=upstream.name,
            new_value=new_dial,
        )
    return rule


def _decrease_time_dial(factor: float, limit: float) -> Rule:
    def rule(upstream: Device, downstream: Device) -> Recommendation:
        new_dial = round(max(_dial(upstream) * factor, limit), 3)
        return Recommendation(
            kind='time_dial',
            message=(f"Decrease {upstream.name} time dial from "
                     f"{_dial(upstream):g} to {new_dial:g} to clear ahead of "
                     f"{downstream.name}"),
            action='decrease_time_dial',
            device_name=upstream.name,
            new_value=new_dial,
        )
    return rule


def _slower_curve(upstream: Device, downstream: Device) -> Recommendation:
    return Recommendation(
        kind='curve_selection',
        message=(f"Consider changing {upstream.name} curve from "
                 f"{upstream.curve_name} to a slower curve (e.g., IEEE D or E)"),
        action='change_curve',
        device_name=upstream.name,
        suggested_curves=SLOWER_CURVES,
    )


def _faster_curve(upstream: Device, downstream: Device) -> Recommendation:
    return Recommendation(
        kind='curve_selection',
        message=(f"Consider changing {upstream.name} curve from "
                 f"{upstream.curve_name} to a faster curve (e.g., IEEE E or F)"),
        action='change_curve',
        device_name=upstream.name,
        suggested_curves=FASTER_CURVES,
    )


def _fuse_upgrade(upstream: Device, downstream: Device) -> Optional[Recommendation]:
    new_fuse = FUSE_UPGRADES.get(downstream.curve_name)
    if new_fuse is None:
        return None
    return Recommendation(
        kind='fuse_upgrade',
        message=(f"Consider upgrading {downstream.name} from "
                 f"{downstream.curve_name} to {new_fuse} for better coordination"),
        action='change_fuse',
        device_name=downstream.name,
        new_value=new_fuse,
    )


def _fuse_downgrade(upstream: Device, downstream: Device) -> Optional[Recommendation]:
    new_fuse = FUSE_DOWNGRADES.get(downstream.curve_name)
    if new_fuse is None:
        return None
    return Recommendation(
        kind='fuse_downgrade',
        message=(f"Consider downgrading {downstream.name} from "
                 f"{downstream.curve_name} to {new_fuse} so {upstream.name} "
                 f"protects it"),
        action='change_fuse',
        device_name=downstream.name,
        new_value=new_fuse,
    )


def _review_tripsaver(upstream: Device, downstream: Device) -> Recommendation:
    return Recommendation(
        kind='tripsaver_settings',
        message=(f"Review {downstream.name} settings - TripSavers require "
                 f"specific coordination with upstream devices"),
        action='review_tripsaver',
        device_name=downstream.name,
    )


def _increase_margin(upstream: Device, downstream: Device) -> Recommendation:
    return Recommendation(
        kind='margin_increase',
        message=(f"Increase coordination margin between {upstream.name} and "
                 f"{downstream.name} by adjusting time dial or curve selection"),
        action='increase_margin',
    )


def _general(upstream: Device, downstream: Device) -> Recommendation:
    return Recommendation(
        kind='general',
        message='Review device settings and consider adjusting time dials or curve selection',
        action='review_settings',
    )


# =============================================================================
# RULE TABLE
# =============================================================================

_ANY = None
_FUSE = DeviceClass.FUSE
_RECLOSER = DeviceClass.RECLOSER
_TRIPSAVER = DeviceClass.TRIPSAVER
_MIS = WarningKind.MISCOORDINATION
_TIGHT = WarningKind.TIGHT_MARGIN

RuleEntry = Tuple[Optional[DeviceClass], Optional[DeviceClass], Rule]

RULE_TABLE: Dict[Tuple[WarningKind, Optional[CoordinationPhilosophy]], List[RuleEntry]] = {
    (_MIS, None): [
        (_RECLOSER, _FUSE, _increase_time_dial(1.5, 10)),
        (_RECLOSER, _FUSE, _slower_curve),
        (_RECLOSER, _RECLOSER, _increase_time_dial(1.3, 8)),
        (_ANY, _FUSE, _fuse_upgrade),
        (_ANY, _TRIPSAVER, _review_tripsaver),
    ],
    (_MIS, CoordinationPhilosophy.FUSE_SAVING): [
        (_RECLOSER, _FUSE, _increase_time_dial(1.5, 10)),
        (_RECLOSER, _FUSE, _slower_curve),
        (_RECLOSER, _RECLOSER, _increase_time_dial(1.3, 8)),
        (_RECLOSER, _TRIPSAVER, _increase_time_dial(1.3, 8)),
        (_ANY, _FUSE, _fuse_upgrade),
        (_ANY, _TRIPSAVER, _review_tripsaver),
    ],
    (_MIS, CoordinationPhilosophy.FUSE_BLOWING): [
        (_RECLOSER, _ANY, _decrease_time_dial(0.75, 0.1)),
        (_RECLOSER, _FUSE, _faster_curve),
        (_ANY, _FUSE, _fuse_downgrade),
        (_ANY, _TRIPSAVER, _review_tripsaver),
    ],
    (_TIGHT, None): [
        (_ANY, _ANY, _increase_margin),
    ],
    (_TIGHT, CoordinationPhilosophy.FUSE_SAVING): [
        (_ANY, _ANY, _increase_margin),
        (_RECLOSER, _ANY, _increase_time_dial(1.3, 8)),
    ],
    (_TIGHT, CoordinationPhilosophy.FUSE_BLOWING): [
        (_ANY, _ANY, _increase_margin),
        (_RECLOSER, _FUSE, _decrease_time_dial(0.75, 0.1)),
    ],
}


def philosophy_lookup(value) -> Optional[CoordinationPhilosophy]:
    """
    Resolve a coordination philosophy from a member or tag.

    Accepts 'fuse-saving'/'fuse_saving'/'saving' style tags, case
    insensitive. None or an unrecognised tag selects the neutral rules.
    """
    if isinstance(value, CoordinationPhilosophy) or value is None:
        return value
    if not isinstance(value, str):
        return None
    tag = value.strip().lower().replace('_', '-')
    for member in CoordinationPhilosophy:
        if tag in (member.value, member.value.split('-')[1]):
            return member
    return None


def _matches(rule_class: Optional[DeviceClass], device: Device) -> bool:
    return rule_class is None or rule_class == device.device_class


def generate_recommendations(
    warning: CoordinationWarning,
    philosophy=None
) -> List[Recommendation]:
    """
    Generate settings recommendations for a coordination warning.

    Args:
        warning: Miscoordination or tight margin warning.
        philosophy: CoordinationPhilosophy, its tag, or None for the
            neutral rule set.

    Returns:
        Recommendations in rule table order. Never empty: a generic
        "review settings" recommendation is returned when no rule applies.

    Example:
        >>> recs = generate_recommendations(warning, 'fuse-blowing')
        >>> [r.action for r in recs]
        ['decrease_time_dial', 'change_curve', 'change_fuse']
    """
    philosophy = philosophy_lookup(philosophy)
    upstream, downstream = warning.upstream, warning.downstream

    recommendations = []
    for up_class, down_class, rule in RULE_TABLE.get((warning.kind, philosophy), []):
        if not (_matches(up_class, upstream) and _matches(down_class, downstream)):
            continue
        recommendation = rule(upstream, downstream)
        if recommendation is not None:
            recommendations.append(recommendation)

    if not recommendations:
        recommendations.append(_general(upstream, downstream))
    return recommendations
