import logging
import re
import time
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Alignment, Font

from config_logging.configure_logging import getpath
from domain.coordination_data import CoordinationWarning
from domain.fault_data import FaultLocationEstimate, SimulationResult
from domain.substation import Substation
from domain.utils import coerce_substation

logger = logging.getLogger(__name__)

GEN_INFO_SHEET = 'General Information'
WARNINGS_SHEET = 'Coordination Warnings'
SIMULATION_SHEET = 'Fault Simulation'
OPERATIONS_SHEET = 'Device Operations'
ISSUES_SHEET = 'Simulation Issues'
ESTIMATE_SHEET = 'Fault Location'

WARNING_COLUMNS = [
    'Type', 'Severity', 'Upstream Device', 'Downstream Device', 'Fault Current (A)',
    'Upstream Time (s)', 'Downstream Time (s)', 'Time Difference (s)', 'Message',
    'Recommendations',
]
SIMULATION_COLUMNS = [
    'Device', 'Device Type', 'Curve', 'Distance (miles)', 'Fault Current (A)',
    'Trip Time (s)', 'Clears', 'First To Clear', 'Operations',
]
ISSUE_COLUMNS = [
    'Upstream Device', 'Downstream Device', 'Upstream Time (s)', 'Downstream Time (s)',
    'Time Difference (s)',
]
OPERATION_COLUMNS = [
    'Device', 'Operation', 'Time (s)', 'Duration (s)', 'End Time (s)', 'Current (A)',
]


def save_dataframe(
    filepath: Optional[Union[str, Path]],
    substation: Union[Substation, dict, None],
    warnings: Optional[List[CoordinationWarning]] = None,
    simulation: Optional[SimulationResult] = None,
    estimate: Optional[FaultLocationEstimate] = None
) -> Path:
    """ Saves the study results to an Excel workbook.
    A General Information sheet is always written, then one sheet for each
    result supplied. If no filepath is given the workbook is saved in the
    user's results folder.
    :param filepath: Workbook path or None
    :param substation: Feeder source the study was run with
    :param warnings: Coordination warnings
    :param simulation: Fault simulation result
    :param estimate: Fault location estimate
    :return: Path of the saved workbook
    """

    substation = coerce_substation(substation)
    date_string = time.strftime("%Y%m%d-%H%M%S")
    if filepath is None:
        filename = fix_string(f'Feeder Coordination Results {date_string}.xlsx')
        filepath = getpath() / filename
    filepath = Path(filepath)

    logger.info(f"Saving feeder coordination results to {filepath}")

    source_df = clean_dataframe(format_source_data(substation))

    with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
        # General Information sheet
        workbook = writer.book
        source_df.to_excel(writer, sheet_name=GEN_INFO_SHEET, startrow=12, index=False)
        worksheet = workbook[GEN_INFO_SHEET]

        safe_set_cell(worksheet, 'A1', 'Feeder Protection Coordination Study')
        safe_set_cell(worksheet, 'A2', 'Radial feeder coordination assessment')
        safe_set_cell(worksheet, 'A4', 'Script Run Date-Time')
        safe_set_cell(worksheet, 'A5', str(date_string))
        safe_set_cell(worksheet, 'A7', 'Study Parameters:')
        safe_set_cell(worksheet, 'A8', 'Fault current by the voltage-drop method, phase-to-neutral voltage')
        safe_set_cell(worksheet, 'A9', 'Coordination margin: 0.2 s')
        safe_set_cell(worksheet, 'A10', 'Fault current floored at 10% of the available fault current')
        safe_set_cell(worksheet, 'A12', 'Source Data:')

        if warnings is not None:
            clean_dataframe(warnings_frame(warnings)).to_excel(
                writer, sheet_name=WARNINGS_SHEET, index=False)
        if simulation is not None:
            clean_dataframe(simulation_frame(simulation)).to_excel(
                writer, sheet_name=SIMULATION_SHEET, index=False)
            clean_dataframe(operations_frame(simulation)).to_excel(
                writer, sheet_name=OPERATIONS_SHEET, index=False)
            clean_dataframe(issues_frame(simulation)).to_excel(
                writer, sheet_name=ISSUES_SHEET, index=False)
        if estimate is not None:
            clean_dataframe(estimate_frame(estimate)).to_excel(
                writer, sheet_name=ESTIMATE_SHEET, index=False)

    wb = load_workbook(filepath)
    adjust_gen_info_col_size(wb[GEN_INFO_SHEET])
    for sheet_name in (WARNINGS_SHEET, SIMULATION_SHEET, OPERATIONS_SHEET, ISSUES_SHEET,
                       ESTIMATE_SHEET):
        if sheet_name in wb.sheetnames:
            adjust_col_size(wb[sheet_name])

    # Save the adjusted workbook
    wb.save(filepath)
    logger.info(f"Output file saved to {filepath}")
    return filepath


# =============================================================================
# RESULT FORMATTING
# =============================================================================

def format_source_data(substation: Substation) -> pd.DataFrame:

    return pd.DataFrame({
        'Parameter': [
            'Nominal Voltage (kV):',
            'Available Fault Current (A):',
            'Default Conductor:',
            'Temperature (deg C):',
        ],
        'Value': [
            safe_numeric(substation.nominal_voltage),
            safe_numeric(substation.available_fault_current),
            str(substation.default_conductor or ''),
            safe_numeric(substation.temperature),
        ],
    })


def warnings_frame(warnings: List[CoordinationWarning]) -> pd.DataFrame:
    """
    One row per coordination warning. Recommendations are joined into a
    single cell, one per line.
    """
    rows = []
    for warning in warnings:
        rows.append([
            warning.kind.value,
            warning.severity.value,
            warning.upstream.name,
            warning.downstream.name,
            safe_numeric(warning.fault_current),
            safe_numeric(warning.upstream_time),
            safe_numeric(warning.downstream_time),
            safe_numeric(warning.time_difference),
            warning.message,
            '\n'.join(rec.message for rec in warning.recommendations),
        ])
    return pd.DataFrame(rows, columns=WARNING_COLUMNS)


def simulation_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per device evaluated, in feeder order."""
    first_clearing = result.first_clearing_device
    rows = []
    for device_result in result.device_results:
        device = device_result.device
        rows.append([
            device.name,
            device_result.device_class,
            device.curve_name,
            safe_numeric(device_result.distance),
            safe_numeric(device_result.fault_current),
            safe_numeric(device_result.trip_time),
            'Yes' if device_result.clears else 'No',
            'Yes' if device_result is first_clearing else 'No',
            device_result.total_operations,
        ])
    return pd.DataFrame(rows, columns=SIMULATION_COLUMNS)


def operations_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per device operation, devices in feeder order."""
    rows = []
    for device_result in result.device_results:
        for operation in device_result.operations:
            rows.append([
                device_result.device.name,
                operation.kind.value,
                safe_numeric(operation.time),
                safe_numeric(operation.duration),
                safe_numeric(operation.end_time),
                safe_numeric(operation.current),
            ])
    return pd.DataFrame(rows, columns=OPERATION_COLUMNS)


def issues_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per downstream device found clearing before its upstream neighbour."""
    rows = []
    for issue in result.miscoordination_issues:
        rows.append([
            issue.upstream.name,
            issue.downstream.name,
            safe_numeric(issue.upstream_time),
            safe_numeric(issue.downstream_time),
            safe_numeric(issue.time_difference),
        ])
    return pd.DataFrame(rows, columns=ISSUE_COLUMNS)


def estimate_frame(estimate: FaultLocationEstimate) -> pd.DataFrame:
    """Parameter/value table of a fault location estimate."""
    impedance = estimate.fault_point_impedance
    parameters = {
        'Estimated Distance (miles)': safe_numeric(estimate.estimated_distance),
        'Nearest Device': estimate.nearest_device.name if estimate.nearest_device else '',
        'Fault Point Resistance (ohms)': safe_numeric(impedance.real),
        'Fault Point Reactance (ohms)': safe_numeric(impedance.imag),
        'Calculated Fault Current (A)': safe_numeric(estimate.calculated_fault_current),
        'Error (%)': safe_numeric(estimate.error_percentage),
        'Confidence': estimate.confidence.value,
        'Total Feeder Length (miles)': safe_numeric(estimate.total_feeder_length),
    }
    if estimate.error:
        parameters['Error'] = estimate.error

    return pd.DataFrame({
        'Parameter': list(parameters.keys()),
        'Value': list(parameters.values()),
    })


# =============================================================================
# EXCEL HELPERS
# =============================================================================

def safe_numeric(value):
    """
    Safely convert a value to numeric, returning the original numeric value
    """
    try:
        if value is None or pd.isna(value):
            return np.nan
        if value == float('inf') or value == float('-inf'):
            return np.nan

        # If it's already a number, return as-is
        if isinstance(value, (int, float)):
            return value

        # Try to convert string to number
        return float(value)
    except (ValueError, TypeError, OverflowError):
        return np.nan


def clean_dataframe(df):
    """
    Clean DataFrame to ensure Excel compatibility
    """
    if df is None or df.empty:
        return df

    # Create a copy to avoid modifying the original
    df_clean = df.copy()

    # Replace problematic values
    df_clean = df_clean.replace([np.inf, -np.inf], np.nan)

    # Clean string columns (but don't convert everything to string)
    for col in df_clean.columns:
        if pd.api.types.is_object_dtype(df_clean[col]) or pd.api.types.is_string_dtype(df_clean[col]):
            df_clean[col] = df_clean[col].apply(lambda x: clean_string_value(x) if isinstance(x, str) else x)

    # Clean column names
    df_clean.columns = [clean_string_value(str(col)) for col in df_clean.columns]

    return df_clean


def clean_string_value(value):
    """
    Clean string values to remove problematic characters
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ''

    value_str = str(value)

    # Remove control characters (ASCII 0-31 except tab, newline, carriage return)
    value_str = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value_str)

    # Limit length to prevent Excel issues
    if len(value_str) > 32767:  # Excel cell character limit
        value_str = value_str[:32767]

    return value_str


def safe_set_cell(worksheet, cell_reference, value):
    """
    Set cell value with proper cleaning
    """
    worksheet[cell_reference] = clean_string_value(value)


def fix_string(file_name):
    """
    Excel does not allow special characters in file names. Remove any such cases and replace with a '_'
    :param file_name: string
    :return:
    """
    if not file_name:
        return "default_filename"

    file_name_str = str(file_name)
    forbidden_chars = ['\\', '/', ':', '*', '?', '"', '<', '>', '|']

    for char in forbidden_chars:
        file_name_str = file_name_str.replace(char, '_')

    # Remove control characters
    file_name_str = re.sub(r'[\x00-\x1F\x7F]', '_', file_name_str)

    return file_name_str


def adjust_gen_info_col_size(ws):

    ws["A1"].font = Font(bold=True, size=12)
    ws["A2"].font = Font(bold=True, size=12)

    for col in ws.columns:
        col_letter = col[0].column_letter
        ws.column_dimensions[col_letter].width = 30.0


def adjust_col_size(ws):
    """
    Adjust column width of given Excel sheet to its longest cell
    :param ws:
    :return:
    """

    # Apply "Wrap Text" formatting to the header row
    for cell in ws[1]:
        cell.alignment = Alignment(wrap_text=True)
        cell.font = Font(bold=True)

    for col in ws.columns:
        column = col[0].column_letter  # Get the column name
        max_length = 0
        for cell in col:
            if cell.value is None:
                continue
            # Multi-line cells are sized to their longest line
            longest_line = max(len(line) for line in str(cell.value).split('\n'))
            max_length = max(max_length, longest_line)

        # Cap very long message columns
        ws.column_dimensions[column].width = min(max_length + 2, 80)
