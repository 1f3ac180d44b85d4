"""
Time-current characteristic library.

Each curve is a piecewise definition of (current A, operating time s)
points with strictly increasing current. Times are base times; recloser
curves are scaled by the device time dial when one is set.

The library covers IEEE/ANSI recloser curves, S&C and Cooper K-link
fuses, S&C TripSaver single-shot protectors and a set of relay vendor
curves that reuse the IEEE shapes.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from domain.enums import DeviceClass


@dataclass(frozen=True)
class Curve:
    """
    Immutable time-current characteristic.

    Attributes:
        name: Library key, e.g. "S&C K-50".
        device_class: The device class the curve belongs to.
        points: ((current, time), ...) with strictly increasing current.

    Properties:
        min_current: Lowest current with a defined operating time.
        max_current: Highest current with a defined operating time.
    """
    name: str
    device_class: DeviceClass
    points: Tuple[Tuple[float, float], ...]

    @property
    def min_current(self) -> float:
        return self.points[0][0]

    @property
    def max_current(self) -> float:
        return self.points[-1][0]

    @property
    def currents(self) -> List[float]:
        return [point[0] for point in self.points]

    @property
    def times(self) -> List[float]:
        return [point[1] for point in self.points]


_RECLOSER = DeviceClass.RECLOSER
_FUSE = DeviceClass.FUSE
_TRIPSAVER = DeviceClass.TRIPSAVER

# Shared curve shapes
_IEEE_C = ((200, 0.05), (500, 0.1), (1000, 0.4), (2000, 1.2), (5000, 4.0), (10000, 8.0))
_IEEE_D = ((200, 0.02), (500, 0.05), (1000, 0.2), (2000, 0.6), (5000, 2.0), (10000, 4.0))
_IEEE_E = ((200, 0.01), (500, 0.025), (1000, 0.1), (2000, 0.3), (5000, 1.0), (10000, 2.0))
_K25 = ((50, 0.1), (100, 0.2), (200, 0.5), (500, 2.0), (1000, 8.0), (2000, 20.0))
_K50 = ((100, 0.1), (200, 0.2), (500, 0.5), (1000, 2.2), (2000, 8.0), (5000, 12.5))
_K100 = ((200, 0.1), (500, 0.3), (1000, 1.0), (2000, 3.5), (5000, 8.0), (10000, 15.0))

_CURVES = [
    # IEEE standard recloser curves
    Curve("IEEE C", _RECLOSER, _IEEE_C),
    Curve("IEEE D", _RECLOSER, _IEEE_D),
    Curve("IEEE E", _RECLOSER, _IEEE_E),
    Curve("IEEE F", _RECLOSER,
          ((200, 0.005), (500, 0.0125), (1000, 0.05), (2000, 0.15), (5000, 0.5), (10000, 1.0))),
    # ANSI/IEEE inverse curves
    Curve("ANSI Extremely Inverse", _RECLOSER,
          ((200, 0.008), (500, 0.02), (1000, 0.08), (2000, 0.24), (5000, 0.8), (10000, 1.6))),
    Curve("ANSI Very Inverse", _RECLOSER,
          ((200, 0.015), (500, 0.0375), (1000, 0.15), (2000, 0.45), (5000, 1.5), (10000, 3.0))),
    Curve("ANSI Inverse", _RECLOSER,
          ((200, 0.03), (500, 0.075), (1000, 0.3), (2000, 0.9), (5000, 3.0), (10000, 6.0))),
    Curve("ANSI Moderately Inverse", _RECLOSER,
          ((200, 0.06), (500, 0.15), (1000, 0.6), (2000, 1.8), (5000, 6.0), (10000, 12.0))),
    # S&C fuses
    Curve("S&C K-25", _FUSE, _K25),
    Curve("S&C K-50", _FUSE, _K50),
    Curve("S&C K-100", _FUSE, _K100),
    Curve("S&C K-200", _FUSE,
          ((500, 0.1), (1000, 0.4), (2000, 1.2), (5000, 3.0), (10000, 6.0), (20000, 12.0))),
    Curve("S&C K-400", _FUSE,
          ((1000, 0.1), (2000, 0.4), (5000, 1.2), (10000, 3.0), (20000, 6.0), (40000, 12.0))),
    # Cooper Power Systems fuses
    Curve("Cooper K-25", _FUSE, _K25),
    Curve("Cooper K-50", _FUSE, _K50),
    Curve("Cooper K-100", _FUSE, _K100),
    # S&C TripSaver
    Curve("TripSaver 25A", _TRIPSAVER,
          ((50, 0.05), (100, 0.1), (200, 0.3), (500, 1.0), (1000, 3.0), (2000, 8.0))),
    Curve("TripSaver 50A", _TRIPSAVER,
          ((100, 0.05), (200, 0.1), (500, 0.3), (1000, 1.0), (2000, 3.0), (5000, 8.0))),
    Curve("TripSaver 100A", _TRIPSAVER,
          ((200, 0.05), (500, 0.15), (1000, 0.5), (2000, 1.5), (5000, 4.0), (10000, 8.0))),
    Curve("TripSaver 200A", _TRIPSAVER,
          ((500, 0.05), (1000, 0.2), (2000, 0.6), (5000, 1.8), (10000, 4.0), (20000, 8.0))),
    # SEL relay curves
    Curve("SEL IEEE C", _RECLOSER, _IEEE_C),
    Curve("SEL IEEE D", _RECLOSER, _IEEE_D),
    Curve("SEL IEEE E", _RECLOSER, _IEEE_E),
    Curve("SEL Custom 1", _RECLOSER,
          ((200, 0.03), (500, 0.075), (1000, 0.3), (2000, 0.9), (5000, 3.0), (10000, 6.0))),
    Curve("SEL Custom 2", _RECLOSER,
          ((200, 0.04), (500, 0.1), (1000, 0.4), (2000, 1.2), (5000, 4.0), (10000, 8.0))),
    # GE relay curves
    Curve("GE IEEE C", _RECLOSER, _IEEE_C),
    Curve("GE IEEE D", _RECLOSER, _IEEE_D),
    # Distribution class fuses
    Curve("Distribution Class 25A", _FUSE, _K25),
    Curve("Distribution Class 50A", _FUSE, _K50),
    Curve("Distribution Class 100A", _FUSE, _K100),
]

CURVE_LIBRARY: Dict[str, Curve] = {curve.name: curve for curve in _CURVES}

CURVE_CATEGORIES: Dict[str, List[str]] = {
    "IEEE Standard": ["IEEE C", "IEEE D", "IEEE E", "IEEE F"],
    "ANSI Standard": ["ANSI Extremely Inverse", "ANSI Very Inverse",
                      "ANSI Inverse", "ANSI Moderately Inverse"],
    "S&C Fuses": ["S&C K-25", "S&C K-50", "S&C K-100", "S&C K-200", "S&C K-400"],
    "Cooper Fuses": ["Cooper K-25", "Cooper K-50", "Cooper K-100"],
    "TripSaver": ["TripSaver 25A", "TripSaver 50A", "TripSaver 100A", "TripSaver 200A"],
    "SEL Relays": ["SEL IEEE C", "SEL IEEE D", "SEL IEEE E", "SEL Custom 1", "SEL Custom 2"],
    "GE Relays": ["GE IEEE C", "GE IEEE D"],
    "Distribution Class": ["Distribution Class 25A", "Distribution Class 50A",
                           "Distribution Class 100A"],
}


def get_curve(name: Optional[str]) -> Optional[Curve]:
    """Return the library curve for name, or None if it is not defined."""
    if not name:
        return None
    return CURVE_LIBRARY.get(name)


def curve_options() -> List[Dict[str, str]]:
    return [
        {'value': curve.name, 'label': curve.name, 'type': curve.device_class.value}
        for curve in CURVE_LIBRARY.values()
    ]


def curves_by_class(device_class) -> List[str]:
    """
    Names of the library curves for one device class.

    Args:
        device_class: DeviceClass member or its string tag ('fuse',
            'recloser', 'tripsaver').

    Returns:
        Curve names in library order. Empty for an unknown class.
    """
    device_class = DeviceClass.lookup(device_class)
    return [
        curve.name for curve in CURVE_LIBRARY.values()
        if curve.device_class == device_class
    ]
