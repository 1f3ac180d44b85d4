"""
Tests for coordination analysis and recommendations
"""

import pytest

from domain import (
    CoordinationPhilosophy,
    CoordinationWarning,
    Device,
    DeviceClass,
    Severity,
    WarningKind,
)
from fault_study.fault_impedance import fault_current_at_device
from fault_study.topology import order_devices
from prot_audit import check_coordination, generate_recommendations, philosophy_lookup
from relays.curve_interpolation import operating_time


def _pair(time_dial, fuse_curve="S&C K-50"):
    """Recloser at 0.5 miles, fuse 0.5 miles further out (about 808 A at the fuse)

    K-50 melts in about 1.55 s there; IEEE C gives about 0.285 s per unit dial.
    """
    recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5, time_dial=time_dial)
    fuse = Device("F1", DeviceClass.FUSE, fuse_curve, 0.5)
    return [recloser, fuse]


def _warning(kind, upstream, downstream):
    return CoordinationWarning(
        kind=kind, severity=Severity.HIGH, upstream=upstream, downstream=downstream,
        fault_current=1000, upstream_time=0.5, downstream_time=0.2, message="",
    )


class TestCheckCoordination:

    def test_miscoordination_only(self, substation):
        warnings = check_coordination(_pair(10.0), substation)
        assert [w.kind for w in warnings] == [WarningKind.MISCOORDINATION]
        warning = warnings[0]
        assert warning.severity == Severity.HIGH
        assert warning.upstream.name == "R1"
        assert warning.downstream.name == "F1"
        assert warning.time_difference > 0.2
        assert warning.message.startswith("fuse F1 clears before recloser R1 at 0.8 kA")
        assert "potential miscoordination" in warning.message

    def test_tight_margin_only(self, substation):
        warnings = check_coordination(_pair(1.0), substation)
        assert [w.kind for w in warnings] == [WarningKind.TIGHT_MARGIN]
        assert warnings[0].severity == Severity.MEDIUM
        assert warnings[0].message == (
            "Tight coordination between recloser R1 and fuse F1 at 0.8 kA")

    def test_both_warnings(self, substation):
        warnings = check_coordination(_pair(6.0), substation)
        assert [w.kind for w in warnings] == [
            WarningKind.MISCOORDINATION, WarningKind.TIGHT_MARGIN]
        assert warnings[0].fault_current == pytest.approx(808, abs=1)
        assert warnings[0].fault_current > substation.available_fault_current * 0.1
        assert 0 < warnings[0].time_difference < 0.2

    def test_flags_iff_downstream_faster(self, substation):
        for dial in (0.5, 1.0, 2.0, 5.0, 6.0, 10.0):
            devices = _pair(dial)
            chain = order_devices(devices)
            current = fault_current_at_device(chain, substation, 1)
            upstream_time = operating_time(chain[0].device, current)
            downstream_time = operating_time(chain[1].device, current)
            kinds = [w.kind for w in check_coordination(devices, substation)]
            assert (WarningKind.MISCOORDINATION in kinds) == (downstream_time < upstream_time)

    def test_uses_downstream_fault_current(self, substation):
        devices = _pair(10.0)
        chain = order_devices(devices)
        warning = check_coordination(devices, substation)[0]
        assert warning.fault_current == pytest.approx(
            fault_current_at_device(chain, substation, 1))

    def test_pair_outside_curve_skipped(self, substation):
        assert check_coordination(_pair(10.0, fuse_curve="S&C K-400"), substation) == []

    def test_single_and_empty(self, substation):
        assert check_coordination([], substation) == []
        assert check_coordination(_pair(10.0)[:1], substation) == []

    def test_accepts_study_document_records(self, study_document_record):
        warnings = check_coordination(
            study_document_record['devices'], study_document_record['substation'])
        assert [w.kind for w in warnings] == [WarningKind.TIGHT_MARGIN]

    def test_warnings_carry_recommendations(self, substation):
        for warning in check_coordination(_pair(6.0), substation, 'fuse-saving'):
            assert warning.recommendations

    def test_input_not_modified(self, substation):
        devices = _pair(10.0)
        check_coordination(devices, substation)
        assert [d.name for d in devices] == ["R1", "F1"]
        assert devices[0].time_dial == 10.0


class TestRecommendations:

    def setup_method(self):
        self.recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5, time_dial=2.0)
        self.fuse = Device("F1", DeviceClass.FUSE, "S&C K-50", 0.6)

    def test_neutral_recloser_fuse(self):
        warning = _warning(WarningKind.MISCOORDINATION, self.recloser, self.fuse)
        recs = generate_recommendations(warning)
        assert [r.action for r in recs] == [
            'increase_time_dial', 'change_curve', 'change_fuse']
        assert recs[0].new_value == pytest.approx(3.0)
        assert recs[1].suggested_curves == ('IEEE D', 'IEEE E', 'ANSI Very Inverse')
        assert recs[2].new_value == "S&C K-75"

    def test_time_dial_capped(self):
        recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5, time_dial=9.0)
        warning = _warning(WarningKind.MISCOORDINATION, recloser, self.fuse)
        assert generate_recommendations(warning)[0].new_value == 10

    def test_missing_time_dial_treated_as_one(self):
        recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5)
        warning = _warning(WarningKind.MISCOORDINATION, recloser, self.fuse)
        assert generate_recommendations(warning)[0].new_value == pytest.approx(1.5)

    def test_recloser_recloser(self):
        downstream = Device("R2", DeviceClass.RECLOSER, "IEEE E", 1.0)
        recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5, time_dial=7.0)
        warning = _warning(WarningKind.MISCOORDINATION, recloser, downstream)
        recs = generate_recommendations(warning)
        assert [r.action for r in recs] == ['increase_time_dial']
        assert recs[0].new_value == 8

    def test_tripsaver_review(self):
        tripsaver = Device("T1", DeviceClass.TRIPSAVER, "TripSaver 50A", 1.0)
        fuse_upstream = Device("F0", DeviceClass.FUSE, "S&C K-100", 0.5)
        warning = _warning(WarningKind.MISCOORDINATION, fuse_upstream, tripsaver)
        assert [r.action for r in generate_recommendations(warning)] == ['review_tripsaver']

    def test_fuse_off_ladder_falls_back_to_general(self):
        upstream = Device("F0", DeviceClass.FUSE, "S&C K-400", 0.5)
        fuse = Device("F1", DeviceClass.FUSE, "S&C K-200", 1.0)
        warning = _warning(WarningKind.MISCOORDINATION, upstream, fuse)
        recs = generate_recommendations(warning)
        assert [r.action for r in recs] == ['review_settings']
        assert recs[0].kind == 'general'

    def test_tight_margin(self):
        warning = _warning(WarningKind.TIGHT_MARGIN, self.recloser, self.fuse)
        assert [r.kind for r in generate_recommendations(warning)] == ['margin_increase']

    def test_fuse_saving(self):
        warning = _warning(WarningKind.MISCOORDINATION, self.recloser, self.fuse)
        recs = generate_recommendations(warning, CoordinationPhilosophy.FUSE_SAVING)
        assert recs[0].action == 'increase_time_dial'
        assert recs[0].new_value == pytest.approx(3.0)
        assert recs[1].suggested_curves == ('IEEE D', 'IEEE E', 'ANSI Very Inverse')

        tight = _warning(WarningKind.TIGHT_MARGIN, self.recloser, self.fuse)
        actions = [r.action for r in generate_recommendations(tight, 'fuse-saving')]
        assert actions == ['increase_margin', 'increase_time_dial']

    def test_fuse_blowing(self):
        warning = _warning(WarningKind.MISCOORDINATION, self.recloser, self.fuse)
        recs = generate_recommendations(warning, 'fuse-blowing')
        assert [r.action for r in recs] == [
            'decrease_time_dial', 'change_curve', 'change_fuse']
        assert recs[0].new_value == pytest.approx(1.5)
        assert recs[1].suggested_curves == ('IEEE E', 'IEEE F', 'ANSI Extremely Inverse')
        assert recs[2].new_value == "S&C K-35"

    def test_fuse_blowing_dial_floor(self):
        recloser = Device("R1", DeviceClass.RECLOSER, "IEEE C", 0.5, time_dial=0.1)
        warning = _warning(WarningKind.MISCOORDINATION, recloser, self.fuse)
        assert generate_recommendations(warning, 'fuse-blowing')[0].new_value == pytest.approx(0.1)

    def test_philosophy_lookup(self):
        assert philosophy_lookup('Fuse_Saving') == CoordinationPhilosophy.FUSE_SAVING
        assert philosophy_lookup('blowing') == CoordinationPhilosophy.FUSE_BLOWING
        assert philosophy_lookup('other') is None
        assert philosophy_lookup(None) is None
