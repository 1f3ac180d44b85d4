"""
Overhead conductor reference data.

Impedance values are in ohms per mile at 75 deg C, ampacity in amps.
Resistance is corrected for ambient temperature with TEMPERATURE_FACTORS;
reactance is temperature independent.

Functions:
    get_conductor: Look up a conductor by name
    temperature_factor: Resistance correction for an ambient temperature
    conductor_options: Name/label listing for selection widgets
    conductors_by_family: Names of conductors of one family (ACSR, AAC...)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Conductor:
    """
    Immutable conductor record.

    Attributes:
        name: Table key, e.g. "ACSR 1/0".
        family: Conductor family (ACSR, AAAC, AAC, Copper).
        size: Size designation within the family.
        resistance: Resistance (ohms/mile).
        reactance: Reactance (ohms/mile).
        ampacity: Continuous current rating (A).
        description: Short human readable description.
    """
    name: str
    family: str
    size: str
    resistance: float
    reactance: float
    ampacity: float
    description: str


def _conductor(family: str, size: str, resistance: float, reactance: float,
               ampacity: float, description: str) -> Conductor:
    return Conductor(f"{family} {size}", family, size, resistance, reactance,
                     ampacity, description)


_CONDUCTORS = [
    # ACSR (Aluminum Conductor Steel Reinforced)
    _conductor("ACSR", "#2", 1.12, 0.53, 190, "#2 ACSR - Small distribution"),
    _conductor("ACSR", "1/0", 0.97, 0.52, 205, "1/0 ACSR - Common for distribution"),
    _conductor("ACSR", "2/0", 0.76, 0.51, 230, "2/0 ACSR - Medium distribution"),
    _conductor("ACSR", "4/0", 0.48, 0.49, 280, "4/0 ACSR - Heavy distribution"),
    _conductor("ACSR", "266.8", 0.36, 0.47, 340, "266.8 ACSR - Large distribution"),
    _conductor("ACSR", "336.4", 0.29, 0.46, 380, "336.4 ACSR - Subtransmission"),
    _conductor("ACSR", "397", 0.24, 0.45, 420, "397 ACSR - Subtransmission"),
    _conductor("ACSR", "477", 0.20, 0.44, 450, "477 ACSR - Subtransmission"),
    _conductor("ACSR", "636", 0.15, 0.43, 520, "636 ACSR - Transmission"),
    _conductor("ACSR", "795", 0.12, 0.42, 590, "795 ACSR - Heavy transmission"),
    # AAAC (All Aluminum Alloy Conductor)
    _conductor("AAAC", "1/0", 0.97, 0.52, 205, "1/0 AAAC - Distribution"),
    _conductor("AAAC", "2/0", 0.76, 0.51, 230, "2/0 AAAC - Distribution"),
    _conductor("AAAC", "4/0", 0.48, 0.49, 280, "4/0 AAAC - Distribution"),
    # AAC (All Aluminum Conductor)
    _conductor("AAC", "1/0", 1.12, 0.52, 180, "1/0 AAC - Distribution"),
    _conductor("AAC", "2/0", 0.89, 0.51, 205, "2/0 AAC - Distribution"),
    _conductor("AAC", "4/0", 0.56, 0.49, 250, "4/0 AAC - Distribution"),
    # Copper
    _conductor("Copper", "1/0", 0.69, 0.52, 230, "1/0 Copper - Distribution"),
    _conductor("Copper", "2/0", 0.55, 0.51, 260, "2/0 Copper - Distribution"),
    _conductor("Copper", "4/0", 0.35, 0.49, 310, "4/0 Copper - Distribution"),
]

CONDUCTOR_DATA: Dict[str, Conductor] = {c.name: c for c in _CONDUCTORS}

# Ambient temperature (deg C): resistance correction factor
TEMPERATURE_FACTORS: Dict[int, float] = {
    25: 1.0,
    50: 1.08,
    75: 1.16,
    90: 1.24,
}


def get_conductor(name: Optional[str]) -> Optional[Conductor]:
    """Return the conductor record for name, or None if it is not tabulated."""
    if not name:
        return None
    return CONDUCTOR_DATA.get(name)


def temperature_factor(temperature: Optional[float]) -> float:
    """
    Resistance correction for an ambient temperature.

    Only the tabulated temperatures are corrected. Any other value,
    including None, gets the neutral factor 1.0.

    Example:
        >>> temperature_factor(75)
        1.16
        >>> temperature_factor(60)
        1.0
    """
    try:
        return TEMPERATURE_FACTORS.get(temperature, 1.0)
    except TypeError:
        # Unhashable input
        return 1.0


def conductor_options() -> List[Dict[str, str]]:
    return [
        {'value': c.name, 'label': c.name, 'type': c.family, 'size': c.size}
        for c in CONDUCTOR_DATA.values()
    ]


def conductors_by_family(family: str) -> List[str]:
    return [c.name for c in CONDUCTOR_DATA.values() if c.family == family]
