"""
End-to-end study runs
"""

import json
import logging

import pytest

import start
from domain import Device, DeviceClass, Substation
from fault_study import fault_current_at_device, order_devices, simulate_fault
from relays import operating_time


class TestSingleFuseFeeder:
    """12.47 kV, 5000 A source with one K-50 fuse a mile out on ACSR 1/0"""

    def setup_method(self):
        self.substation = Substation(12.47, 5000, "ACSR 1/0", 75)
        self.devices = [Device("F1", DeviceClass.FUSE, "S&C K-50", 1.0, conductor="ACSR 1/0")]

    def test_fault_current_below_source(self):
        chain = order_devices(self.devices)
        current = fault_current_at_device(chain, self.substation, 0)
        assert 500 <= current < 5000
        assert current == pytest.approx(808, abs=1)

    def test_fuse_clears(self):
        result = simulate_fault(self.devices, self.substation, 'Three-Phase', 1.0, 'distance')
        fuse_result = result.device_results[0]
        assert fuse_result.fault_current < 5000
        assert fuse_result.trip_time is not None
        assert fuse_result.trip_time == pytest.approx(
            operating_time(self.devices[0], fuse_result.fault_current))
        assert fuse_result.clears
        assert result.first_clearing_device is fuse_result


class TestStartMain:

    def test_main(self, tmp_path, study_document_record):
        study_path = tmp_path / "feeder.json"
        study_path.write_text(json.dumps(study_document_record))
        output = tmp_path / "results.xlsx"

        results = start.main(
            study_path,
            fault_type='Three-Phase',
            fault_input=1.0,
            input_mode='distance',
            measured_current=2000,
            philosophy='fuse-saving',
            save=True,
            output=output,
        )

        assert results['issues'] == {}
        assert len(results['warnings']) == 1
        assert results['simulation'].total_devices == 2
        assert results['estimate'].nearest_device is not None
        assert results['workbook'] == output
        assert output.exists()

    def test_main_without_optional_studies(self, tmp_path, study_document_record):
        study_path = tmp_path / "feeder.json"
        study_path.write_text(json.dumps(study_document_record))
        results = start.main(study_path)
        assert results['simulation'] is None
        assert results['estimate'] is None
        assert results['workbook'] is None

    def test_main_logs_call_and_runtime(self, tmp_path, study_document_record, caplog):
        study_path = tmp_path / "feeder.json"
        study_path.write_text(json.dumps(study_document_record))
        with caplog.at_level(logging.INFO):
            start.main(study_path, philosophy='fuse-saving')
        assert "Function main called with arguments" in caplog.text
        assert "philosophy='fuse-saving'" in caplog.text
        assert "Finished 'main'" in caplog.text

    def test_parse_args(self):
        args = start.parse_args(["feeder.json", "--fault-input", "1.5",
                                 "--philosophy", "fuse-blowing", "--save"])
        assert args.fault_input == 1.5
        assert args.input_mode == 'distance'
        assert args.philosophy == 'fuse-blowing'
        assert args.save
