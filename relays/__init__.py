"""
Protective device behaviour package.

This package provides device level protection functionality split into
focused modules:

- curve_interpolation: Curve interpolation and TCC plot series
- reclose: Trip/reclose/lockout operation sequences

All functions are re-exported at the package level.

Usage (targeted imports):
    from relays.curve_interpolation import operating_time
    from relays.reclose import device_operations

Usage (package level):
    import relays
    trip_time = relays.operating_time(device, 1200)
"""

# =============================================================================
# OPERATING TIME
# =============================================================================

from relays.curve_interpolation import (
    operating_time,
    interpolate_curve,
    curve_data,
)

# =============================================================================
# AUTO-RECLOSE SEQUENCES
# =============================================================================

from relays.reclose import (
    get_device_trips,
    recloser_operations,
    fuse_operations,
    device_operations,
)

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # curve_interpolation
    'operating_time',
    'interpolate_curve',
    'curve_data',
    # reclose
    'get_device_trips',
    'recloser_operations',
    'fuse_operations',
    'device_operations',
]
