import numpy as np
import pytest

from ukf_fusion.common.state import Gaussian, MeasurementPackage, SensorType
from ukf_fusion.trackers import UnscentedKalmanTracker


@pytest.fixture()
def fusion_tracker():
    yield UnscentedKalmanTracker(use_laser=True, use_radar=True)


@pytest.fixture()
def lidar_measurement():
    def _make(px, py, timestamp):
        return MeasurementPackage(sensor_type=SensorType.LASER, raw_measurements=np.array([px, py]), timestamp=timestamp)

    yield _make


@pytest.fixture()
def radar_measurement():
    def _make(rng, bearing, range_rate, timestamp):
        return MeasurementPackage(sensor_type=SensorType.RADAR, raw_measurements=np.array([rng, bearing, range_rate]), timestamp=timestamp)

    yield _make


@pytest.fixture(scope="function")
def moving_object_state():
    return Gaussian(
        x=np.array([10.0, 5.0, 3.0, 0.3, 0.1]),
        P=np.diag(np.power([0.3, 0.3, 0.5, 5 * np.pi / 180, 2 * np.pi / 180], 2)),
    )
