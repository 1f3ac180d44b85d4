"""
Conductor capability checks.

Modules:
    conductor_checks: Continuous current against conductor ampacity
"""

from cond_damage.conductor_checks import (
    AmpacityCheck,
    check_conductor_ampacity,
    feeder_ampacity_checks,
)

__all__ = [
    'AmpacityCheck',
    'check_conductor_ampacity',
    'feeder_ampacity_checks',
]
