"""Centralized configuration for the feeder protection study engine.

This module holds the calibrated constants shared by the fault study,
relay and coordination packages. Import the names you need at the top of
any module that applies a study threshold or duration.

Usage:
    from study_config import COORDINATION_MARGIN, NEVER_OPERATES

    if upstream_time - downstream_time < COORDINATION_MARGIN:
        ...

The values are read-only. A study that needs different thresholds passes
them explicitly; nothing here is modified at runtime.
"""

# =============================================================================
# SOURCE DEFAULTS
# =============================================================================

# Source parameters used when a study document omits the substation record
DEFAULT_SUBSTATION = {
    'nominalVoltage': 12.47,            # kV line-to-line
    'availableFaultCurrent': 5000,      # A
    'defaultConductor': 'ACSR 1/0',
    'temperature': 75,                  # deg C
}

DEFAULT_CONDUCTOR = 'ACSR 1/0'
DEFAULT_TEMPERATURE = 75

# =============================================================================
# IMPEDANCE MODEL
# =============================================================================

# Flat resistive model for conductors missing from the reference table
FALLBACK_OHMS_PER_MILE = 0.5

# Fault current never drops below this fraction of the source current
MIN_FAULT_CURRENT_FRACTION = 0.1

# Distance-decay estimate used for the simulator base current
BASE_SOURCE_CURRENT = 10000
BASE_OHMS_PER_MILE = 0.5

# =============================================================================
# COORDINATION
# =============================================================================

COORDINATION_MARGIN = 0.2           # s
NEVER_OPERATES = 100                # s, trip times at or above never clear

# =============================================================================
# OPERATION SEQUENCES
# =============================================================================

TRIP_DURATION = 0.05                # s
RECLOSE_DURATION = 0.02             # s
LOCKOUT_DURATION = 0.1              # s
FUSE_OPEN_DELAY = 0.05              # s after the melt time
FUSE_OPEN_DURATION = 0.1            # s

DEFAULT_RECLOSE_DELAY = 0.1         # s, attempts without a configured delay
DEFAULT_RECLOSE_COUNT = 2
DEFAULT_RECLOSE_DELAYS = (0.1, 0.3)

# =============================================================================
# FAULT LOCATION SEARCH
# =============================================================================

MAX_SEARCH_STEP = 0.1               # miles
SEARCH_POINTS = 100
CONFIDENCE_HIGH = 5                 # % error
CONFIDENCE_MEDIUM = 15              # % error

# =============================================================================
# OUTPUT
# =============================================================================

RESULTS_SUBDIR = "FeederCoordinationResults"
LOG_FILENAME = "feeder_coordination_log.txt"
