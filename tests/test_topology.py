"""
Tests for feeder chain ordering
"""

import pytest

from domain import Device, DeviceClass
from fault_study.topology import nearest_section, order_devices, total_feeder_length


def _fuse(name, distance):
    return Device(name, DeviceClass.FUSE, "S&C K-50", distance=distance)


class TestOrderDevices:

    def test_sorted_by_segment_distance(self):
        chain = order_devices([_fuse("A", 2.0), _fuse("B", 1.0), _fuse("C", 0.5)])
        assert [s.device.name for s in chain] == ["C", "B", "A"]
        assert [s.index for s in chain] == [0, 1, 2]

    def test_cumulative_distance_is_running_sum(self):
        chain = order_devices([_fuse("A", 2.0), _fuse("B", 1.0), _fuse("C", 0.5)])
        cumulative = [s.cumulative_distance for s in chain]
        assert cumulative == pytest.approx([0.5, 1.5, 3.5])
        assert all(a <= b for a, b in zip(cumulative, cumulative[1:]))

    def test_segment_length_and_start(self):
        chain = order_devices([_fuse("A", 2.0), _fuse("B", 1.0)])
        assert chain[1].segment_length == 2.0
        assert chain[1].start_distance == pytest.approx(1.0)

    def test_equal_distances_keep_input_order(self):
        chain = order_devices([_fuse("A", 1.0), _fuse("B", 1.0)])
        assert [s.device.name for s in chain] == ["A", "B"]

    def test_input_not_modified(self):
        devices = [_fuse("A", 2.0), _fuse("B", 1.0)]
        order_devices(devices)
        assert [d.name for d in devices] == ["A", "B"]

    def test_empty(self):
        assert order_devices([]) == []
        assert total_feeder_length([]) == 0.0


class TestNearestSection:

    def test_nearest(self):
        chain = order_devices([_fuse("A", 1.0), _fuse("B", 2.0)])
        assert nearest_section(chain, 2.6).device.name == "B"
        assert nearest_section(chain, 0.2).device.name == "A"

    def test_tie_goes_to_first(self):
        chain = order_devices([_fuse("A", 1.0), _fuse("B", 1.0)])
        # Cumulative 1.0 and 2.0, 1.5 is equidistant
        assert nearest_section(chain, 1.5).device.name == "A"

    def test_empty_chain(self):
        assert nearest_section([], 1.0) is None

    def test_total_length(self):
        chain = order_devices([_fuse("A", 1.0), _fuse("B", 2.0)])
        assert total_feeder_length(chain) == pytest.approx(3.0)
