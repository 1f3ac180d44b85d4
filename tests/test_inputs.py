"""
Tests for input validation, study documents and domain conversion
"""

import json

import pytest

from domain import (
    Device,
    DeviceClass,
    FaultType,
    InputMode,
    Substation,
    format_current,
    format_distance,
    initialise_dev_dataclass,
    to_plain,
)
from user_inputs import (
    InputError,
    load_study,
    parse_study_document,
    study_document,
    validate_fault_type,
    validate_input_mode,
    validate_positive,
)


class TestValidation:

    def test_positive_number(self):
        assert validate_positive("2.5", "fault distance") == 2.5
        assert validate_positive(3, "fault current") == 3.0

    @pytest.mark.parametrize("value", ["abc", None, "", "-1", 0, "nan", "inf"])
    def test_rejected(self, value):
        with pytest.raises(InputError):
            validate_positive(value, "fault distance")

    def test_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_positive("x", "fault distance")

    def test_fault_type_aliases(self):
        assert validate_fault_type("3P") == FaultType.THREE_PHASE
        assert validate_fault_type("slg") == FaultType.SINGLE_LINE_GROUND
        assert validate_fault_type("L-L") == FaultType.PHASE_PHASE
        with pytest.raises(InputError):
            validate_fault_type("arc flash")

    def test_input_mode(self):
        assert validate_input_mode("Distance") == InputMode.DISTANCE
        assert validate_input_mode(InputMode.CURRENT) == InputMode.CURRENT
        with pytest.raises(InputError):
            validate_input_mode("impedance")


class TestStudyDocuments:

    def test_parse(self, study_document_record):
        study = parse_study_document(study_document_record)
        assert study.substation.nominal_voltage == 12.47
        assert [d.name for d in study.devices] == ["R1", "F1"]
        recloser, fuse = study.devices
        assert recloser.device_class == DeviceClass.RECLOSER
        assert recloser.reclose_delays == [0.1, 0.3]
        assert recloser.lockout_after
        assert fuse.conductor is None
        assert study.timestamp == '2024-05-01T09:30:00'

    def test_missing_substation_uses_defaults(self):
        study = parse_study_document({'devices': []})
        assert study.substation == Substation()
        assert study.devices == []

    def test_partial_substation_merged(self):
        study = parse_study_document({'substation': {'nominalVoltage': 24.9}})
        assert study.substation.nominal_voltage == 24.9
        assert study.substation.available_fault_current == 5000

    def test_not_a_mapping(self):
        with pytest.raises(InputError):
            parse_study_document([1, 2, 3])

    def test_document_round_trip(self, study_document_record):
        study = parse_study_document(study_document_record)
        document = study_document(study.substation, study.devices, study.timestamp)
        assert parse_study_document(document) == study
        assert document['devices'][0]['deviceType'] == 'recloser'
        assert document['substation']['availableFaultCurrent'] == 5000

    def test_load_study(self, tmp_path, study_document_record):
        path = tmp_path / "feeder.json"
        path.write_text(json.dumps(study_document_record))
        study = load_study(path)
        assert len(study.devices) == 2

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "feeder.json"
        path.write_text("{not json")
        with pytest.raises(InputError):
            load_study(path)


class TestDomainConversion:

    def test_missing_reclose_fields_default(self):
        device = initialise_dev_dataclass(
            {'deviceType': 'Recloser', 'name': 'R1', 'curveType': 'IEEE C', 'distance': '0.5'})
        assert device.device_class == DeviceClass.RECLOSER
        assert device.distance == 0.5
        assert device.reclose_count == 0
        assert device.reclose_delays == [0.1, 0.3]
        assert device.lockout_after is False

    def test_reclose_delay_holes(self):
        device = initialise_dev_dataclass(
            {'deviceType': 'recloser', 'name': 'R1', 'curveType': 'IEEE C',
             'recloseCount': 3, 'recloseDelays': [0.1, None, '', '0.5']})
        assert device.reclose_delays == [0.1, None, None, 0.5]

    def test_unknown_device_type(self):
        device = initialise_dev_dataclass({'deviceType': 'sectionaliser', 'name': 'S1'})
        assert device.device_class is None
        assert device.type_label == "device"

    def test_to_plain(self):
        device = Device("F1", DeviceClass.FUSE, "S&C K-50", 1.0)
        plain = to_plain({'device': device, 'z': complex(1.5, 0.5)})
        assert plain['device']['device_class'] == 'fuse'
        assert plain['z'] == {'real': 1.5, 'imaginary': 0.5}
        json.dumps(plain)

    def test_formatting(self):
        assert format_distance(1.26) == "1.3 miles"
        assert format_distance(2) == "2.0 miles"
        assert format_current(2500) == "2.5 kA"
        assert format_current(640) == "640 A"
