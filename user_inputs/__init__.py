"""
User input package for feeder coordination studies.

This package validates user supplied study parameters and reads and
writes study documents.

Modules:
    get_inputs: Input validation and study document handling.

Example:
    >>> from user_inputs import load_study, validate_positive
    >>>
    >>> study = load_study("feeder_12.json")
    >>> distance = validate_positive("1.5", "fault distance")
"""

from user_inputs.get_inputs import (
    InputError,
    StudyInputs,
    validate_positive,
    validate_fault_type,
    validate_input_mode,
    parse_study_document,
    load_study,
    study_document,
)

__all__ = [
    'InputError',
    'StudyInputs',
    'validate_positive',
    'validate_fault_type',
    'validate_input_mode',
    'parse_study_document',
    'load_study',
    'study_document',
]
