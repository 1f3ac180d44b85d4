"""
Substation (feeder source) domain model.

Classes:
    Substation: Source bus parameters for a radial feeder

Functions:
    initialise_substation_dataclass: Create Substation from a study record
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from study_config import DEFAULT_SUBSTATION


@dataclass
class Substation:
    """
    Source bus parameters of the feeder under study.

    Attributes:
        nominal_voltage: Nominal line-to-line voltage (kV).
        available_fault_current: Fault current available at the source
            bus (A).
        default_conductor: Conductor used for segments whose device does
            not name one.
        temperature: Ambient temperature (deg C) for the resistance
            correction.
    """
    nominal_voltage: float = DEFAULT_SUBSTATION['nominalVoltage']
    available_fault_current: float = DEFAULT_SUBSTATION['availableFaultCurrent']
    default_conductor: Optional[str] = DEFAULT_SUBSTATION['defaultConductor']
    temperature: Optional[float] = DEFAULT_SUBSTATION['temperature']

    def to_dict(self) -> Dict[str, Any]:
        """Return the substation in study document form."""
        return {
            'nominalVoltage': self.nominal_voltage,
            'availableFaultCurrent': self.available_fault_current,
            'defaultConductor': self.default_conductor,
            'temperature': self.temperature,
        }


def initialise_substation_dataclass(
    record: Optional[Mapping[str, Any]]
) -> Substation:
    """
    Initialize a Substation from a study document substation record.

    Missing fields take the default source (12.47 kV, 5000 A, ACSR 1/0,
    75 deg C). A None record returns the default source.
    """
    if record is None:
        return Substation()

    merged = {**DEFAULT_SUBSTATION, **{k: v for k, v in record.items() if v is not None}}
    temperature = merged.get('temperature')

    return Substation(
        nominal_voltage=float(merged['nominalVoltage']),
        available_fault_current=float(merged['availableFaultCurrent']),
        default_conductor=merged.get('defaultConductor'),
        temperature=temperature,
    )
