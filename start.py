import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, Optional

import model_checks
from config_logging.configure_logging import configure_logging, log_arguments, timer
from domain.utils import format_current, format_distance
from fault_study.fault_location import estimate_fault_location
from fault_study.fault_simulation import simulate_fault
from prot_audit.coordination import check_coordination
from save_results import save_result as sr
from user_inputs import get_inputs as gi

logger = logging.getLogger(__name__)


@timer
@log_arguments
def main(
    study_path,
    fault_type: str = 'Three-Phase',
    fault_input: Optional[float] = None,
    input_mode: str = 'distance',
    measured_current: Optional[float] = None,
    philosophy: Optional[str] = None,
    save: bool = False,
    output: Optional[Path] = None
) -> Dict:
    """
    Run a feeder coordination study from a saved study document.

    :param study_path: JSON study document
    :param fault_type: Fault type tag for the simulation and the estimate
    :param fault_input: Fault distance (miles) or current (A) to simulate, None to skip
    :param input_mode: 'distance' or 'current'
    :param measured_current: Measured fault current (A) to locate, None to skip
    :param philosophy: 'fuse-saving', 'fuse-blowing' or None
    :param save: Save an Excel workbook of the results
    :param output: Workbook path, defaults to the results folder
    :return: Dictionary of the study results
    """

    study = gi.load_study(study_path)
    fault_type = gi.validate_fault_type(fault_type)

    # Undertake model checks
    issues = model_checks.device_checks(study.devices, study.substation)

    warnings = check_coordination(study.devices, study.substation, philosophy)
    for warning in warnings:
        logger.info(warning.message)

    simulation = None
    if fault_input is not None:
        fault_input = gi.validate_positive(fault_input, 'fault input')
        input_mode = gi.validate_input_mode(input_mode)
        simulation = simulate_fault(
            study.devices, study.substation, fault_type, fault_input, input_mode)
        first = simulation.first_clearing_device
        if first is not None:
            logger.info(f"First clearing device: {first.device.name} at "
                        f"{first.trip_time:.3f}s ({format_current(first.fault_current)})")

    estimate = None
    if measured_current is not None:
        measured_current = gi.validate_positive(measured_current, 'measured current')
        estimate = estimate_fault_location(
            study.devices, study.substation, measured_current, fault_type)
        logger.info(f"Estimated fault location: {format_distance(estimate.estimated_distance)}")

    workbook = None
    if save:
        workbook = sr.save_dataframe(
            output, study.substation, warnings=warnings, simulation=simulation, estimate=estimate)

    return {
        'issues': issues,
        'warnings': warnings,
        'simulation': simulation,
        'estimate': estimate,
        'workbook': workbook,
    }


def parse_args(argv=None) -> argparse.Namespace:

    parser = argparse.ArgumentParser(description="Radial feeder protection coordination study")
    parser.add_argument('study', type=Path, help="JSON study document")
    parser.add_argument('--fault-type', default='Three-Phase',
                        help="Three-Phase, Single-Line-to-Ground or Phase-Phase")
    parser.add_argument('--fault-input', type=float,
                        help="Fault distance (miles) or fault current (A) to simulate")
    parser.add_argument('--input-mode', default='distance', choices=['distance', 'current'])
    parser.add_argument('--measured-current', type=float,
                        help="Measured fault current (A) to locate")
    parser.add_argument('--philosophy', choices=['fuse-saving', 'fuse-blowing'])
    parser.add_argument('--save', action='store_true', help="Save an Excel workbook")
    parser.add_argument('--output', type=Path, help="Workbook path")
    parser.add_argument('--log-file', type=Path, help="Log file path")
    parser.add_argument('--verbose', action='store_true', help="Log debug detail")
    return parser.parse_args(argv)


if __name__ == '__main__':
    start = time.time()
    args = parse_args()

    # Configure logging
    log_file = configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        filename=args.log_file,
    )

    try:
        results = main(
            args.study,
            fault_type=args.fault_type,
            fault_input=args.fault_input,
            input_mode=args.input_mode,
            measured_current=args.measured_current,
            philosophy=args.philosophy,
            save=args.save,
            output=args.output,
        )
    except gi.InputError as e:
        print(f"Input error: {e}", file=sys.stderr)
        sys.exit(2)

    print(f"{len(results['warnings'])} coordination warnings")
    for warning in results['warnings']:
        print(f"  [{warning.severity.value}] {warning.message}")
    if results['workbook']:
        print(f"Output file saved to {results['workbook']}")

    end = time.time()
    run_time = round(end - start, 6)
    print(f"Script run time: {run_time} seconds (log: {log_file})")
