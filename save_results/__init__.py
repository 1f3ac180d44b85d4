"""
Results export package.

Modules:
    save_result: Excel workbook of study results (pandas + openpyxl)
"""

from save_results.save_result import (
    save_dataframe,
    warnings_frame,
    simulation_frame,
    operations_frame,
    issues_frame,
    estimate_frame,
    clean_dataframe,
)

__all__ = [
    'save_dataframe',
    'warnings_frame',
    'simulation_frame',
    'operations_frame',
    'issues_frame',
    'estimate_frame',
    'clean_dataframe',
]
