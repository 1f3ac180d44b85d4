"""
Pytest configuration and fixtures for feeder coordination tests
"""

import pytest

from domain import Device, DeviceClass, Substation
from fault_study.topology import order_devices


@pytest.fixture
def substation():
    """Default 12.47 kV, 5000 A source on ACSR 1/0 at 75 deg C"""
    return Substation()


@pytest.fixture
def recloser():
    return Device(
        "R1", DeviceClass.RECLOSER, "IEEE C", distance=0.5,
        time_dial=1.0, reclose_count=2, reclose_delays=[0.1, 0.3],
        lockout_after=True,
    )


@pytest.fixture
def fuse():
    return Device("F1", DeviceClass.FUSE, "S&C K-50", distance=0.6)


@pytest.fixture
def feeder(recloser, fuse):
    """Recloser at 0.5 miles with a K-50 fuse 0.6 miles further out"""
    return [fuse, recloser]


@pytest.fixture
def chain(feeder):
    return order_devices(feeder)


@pytest.fixture
def study_document_record():
    """Saved study document in its persisted camelCase form"""
    return {
        'substation': {
            'nominalVoltage': 12.47,
            'availableFaultCurrent': 5000,
            'defaultConductor': 'ACSR 1/0',
            'temperature': 75,
        },
        'devices': [
            {'id': 1, 'deviceType': 'recloser', 'name': 'R1', 'curveType': 'IEEE C',
             'pickupAmps': 400, 'timeDial': 1.0, 'distance': 0.5,
             'conductorType': 'ACSR 1/0', 'recloseCount': 2, 'recloseDelays': [0.1, 0.3],
             'lockoutAfter': True, 'manualReset': False},
            {'id': 2, 'deviceType': 'fuse', 'name': 'F1', 'curveType': 'S&C K-50',
             'pickupAmps': 50, 'timeDial': None, 'distance': 0.6,
             'conductorType': '', 'recloseCount': 0, 'recloseDelays': [],
             'lockoutAfter': False, 'manualReset': False},
        ],
        'timestamp': '2024-05-01T09:30:00',
    }
