"""
Tests for the fault operation simulator
"""

import json

import pytest

from domain import Device, DeviceClass, DeviceResult, FaultType, OperationType, to_plain
from fault_study.fault_simulation import base_fault_current, find_miscoordination, simulate_fault


class TestBaseFaultCurrent:

    def test_distance_mode(self):
        assert base_fault_current(1.0, 'distance') == pytest.approx(10000 / 1.5)

    def test_current_mode(self):
        assert base_fault_current(2500, 'current') == 2500

    def test_fault_type_scaling(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Phase-Phase', 1.0, 'distance')
        assert result.original_fault_current == pytest.approx(10000 / 1.5)
        assert result.fault_current == pytest.approx(10000 / 1.5 * 0.866)
        assert result.fault_type == FaultType.PHASE_PHASE

    def test_slg_not_scaled(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'SLG', 3000, 'current')
        assert result.fault_current == pytest.approx(3000)


class TestSimulateFault:

    def test_device_results_in_chain_order(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Three-Phase', 1.0, 'distance')
        assert [r.device.name for r in result.device_results] == ["R1", "F1"]
        assert [r.distance for r in result.device_results] == pytest.approx([0.5, 1.1])
        assert result.total_devices == 2

    def test_trip_times_use_device_position(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Three-Phase', 1.0, 'distance')
        recloser, fuse = result.device_results
        assert recloser.fault_current > fuse.fault_current
        # Trip times do not depend on the base current
        other = simulate_fault(feeder, substation, 'Three-Phase', 4000, 'current')
        assert [r.trip_time for r in other.device_results] == pytest.approx(
            [recloser.trip_time, fuse.trip_time])

    def test_clearing_sorted_by_trip_time(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Three-Phase', 1.0, 'distance')
        assert result.total_devices_clearing == 2
        times = [r.trip_time for r in result.clearing_results]
        assert times == sorted(times)
        assert result.first_clearing_device.device.name == "F1"

    def test_downstream_clearing_first_is_recorded(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Three-Phase', 1.0, 'distance')
        assert result.total_issues == 1
        issue = result.miscoordination_issues[0]
        assert issue.downstream.name == "F1"
        assert issue.upstream.name == "R1"
        assert issue.time_difference == pytest.approx(issue.upstream_time - issue.downstream_time)

    def test_operation_sequences(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Three-Phase', 1.0, 'distance')
        recloser, fuse = result.device_results
        kinds = [op.kind for op in recloser.operations]
        assert kinds.count(OperationType.TRIP) == 3
        assert kinds.count(OperationType.RECLOSE) == 2
        assert kinds[-1] == OperationType.LOCKOUT
        assert [op.kind for op in fuse.operations] == [OperationType.FUSE_OPEN]
        assert fuse.operations[0].time == pytest.approx(fuse.trip_time + 0.05)

    def test_non_clearing_device(self, substation):
        fuse = Device("F1", DeviceClass.FUSE, "S&C K-25", 0.6)
        result = simulate_fault([fuse], substation, 'Three-Phase', 1.0, 'distance')
        device_result = result.device_results[0]
        assert device_result.trip_time is None
        assert not device_result.clears
        assert device_result.operations == []
        assert result.first_clearing_device is None

    def test_empty_feeder(self, substation):
        result = simulate_fault([], substation, 'Three-Phase', 1.0, 'distance')
        assert result.device_results == []
        assert result.clearing_results == []
        assert result.miscoordination_issues == []


class TestFindMiscoordination:

    @staticmethod
    def _result(name, distance, trip_time):
        device = Device(name, DeviceClass.FUSE, "S&C K-50", distance)
        return DeviceResult(device, 1000, trip_time, True, distance)

    def test_ordered_clearing_has_no_issue(self):
        results = [self._result("A", 0.5, 0.2), self._result("B", 1.0, 0.4)]
        assert find_miscoordination(results) == []

    def test_only_consecutive_pairs(self):
        results = [self._result("C", 3.0, 0.1), self._result("A", 1.0, 0.2),
                   self._result("B", 2.0, 0.3)]
        issues = find_miscoordination(results)
        assert [(i.downstream.name, i.upstream.name) for i in issues] == [("C", "A")]

    def test_equal_times_not_recorded(self):
        results = [self._result("B", 2.0, 0.2), self._result("A", 1.0, 0.2)]
        assert find_miscoordination(results) == []


class TestStudyDocumentRecords:

    def test_reclose_delay_holes_accepted(self, study_document_record):
        record = study_document_record['devices'][0]
        record['recloseCount'] = 3
        record['recloseDelays'] = [0.1, None, 0.5]
        result = simulate_fault(study_document_record['devices'],
                                study_document_record['substation'],
                                'Three-Phase', 1.0, 'distance')
        recloser = result.device_results[0]
        recloses = [op for op in recloser.operations if op.kind == OperationType.RECLOSE]
        assert len(recloses) == 3
        # Unset second delay falls back to 0.1 s
        assert recloses[1].time - recloses[0].time == pytest.approx(0.02 + 0.05 + 0.1)


class TestPlainResult:

    def test_derived_values_serialised(self, feeder, substation):
        result = simulate_fault(feeder, substation, 'Three-Phase', 1.0, 'distance')
        plain = to_plain(result)
        assert plain['total_devices'] == 2
        assert plain['total_devices_clearing'] == 2
        assert plain['total_issues'] == 1
        assert plain['first_clearing_device']['device']['name'] == "F1"
        assert plain['device_results'][0]['total_operations'] == 6
        assert plain['fault_type'] == 'Three-Phase'
        json.dumps(plain)

    def test_no_clearing_device(self, substation):
        fuse = Device("F1", DeviceClass.FUSE, "S&C K-25", 0.6)
        plain = to_plain(simulate_fault([fuse], substation, 'Three-Phase', 1.0, 'distance'))
        assert plain['first_clearing_device'] is None
        assert plain['total_devices_clearing'] == 0
