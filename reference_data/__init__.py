"""
Static reference tables for feeder protection studies.

Modules:
    conductors: Overhead conductor impedance and ampacity data
    curves: Protective device time-current characteristic library

The tables are module-level constants and are only ever read.
"""

from reference_data.conductors import (
    Conductor,
    CONDUCTOR_DATA,
    TEMPERATURE_FACTORS,
    get_conductor,
    temperature_factor,
    conductor_options,
    conductors_by_family,
)
from reference_data.curves import (
    Curve,
    CURVE_LIBRARY,
    CURVE_CATEGORIES,
    get_curve,
    curve_options,
    curves_by_class,
)

__all__ = [
    # conductors
    'Conductor',
    'CONDUCTOR_DATA',
    'TEMPERATURE_FACTORS',
    'get_conductor',
    'temperature_factor',
    'conductor_options',
    'conductors_by_family',
    # curves
    'Curve',
    'CURVE_LIBRARY',
    'CURVE_CATEGORIES',
    'get_curve',
    'curve_options',
    'curves_by_class',
]
