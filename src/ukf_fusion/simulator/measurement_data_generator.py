import itertools
import typing as tp

import numpy as np

from ..common.state import MeasurementPackage, SensorType
from ..configs import SensorNoiseConfig
from ..measurement_models import LidarMeasurementModel, RadarMeasurementModel
from .object_data_generator import ObjectData


class MeasurementData:
    """Generates noisy lidar and radar measurement packages of the object"""

    def __init__(
        self,
        object_data: ObjectData,
        sensor_noise: tp.Optional[SensorNoiseConfig] = None,
        sensor_pattern: tp.Sequence[SensorType] = (SensorType.LASER, SensorType.RADAR),
        start_timestamp: int = 0,
        random_state=None,
    ):
        """Generates one measurement per timestep of the object data

        Args:
            object_data (ObjectData): ground truth states
            sensor_noise (SensorNoiseConfig): noise of the simulated sensors
            sensor_pattern (sequence of SensorType): sensors cycled through timestep by timestep
            start_timestamp (int): timestamp of the first measurement in microseconds
            random_state: seed of the measurement noise

        Yields:
            (timestep, MeasurementPackage)
        """
        assert len(sensor_pattern) > 0, "sensor pattern should not be empty!"
        sensor_noise = SensorNoiseConfig() if sensor_noise is None else sensor_noise
        self.object_data = object_data
        self.sensor_pattern = tuple(sensor_pattern)
        self.start_timestamp = int(start_timestamp)
        self.meas_models = {
            SensorType.LASER: LidarMeasurementModel(
                sigma_px=sensor_noise.std_laspx,
                sigma_py=sensor_noise.std_laspy,
                random_state=random_state,
            ),
            SensorType.RADAR: RadarMeasurementModel(
                sigma_r=sensor_noise.std_radr,
                sigma_phi=sensor_noise.std_radphi,
                sigma_rd=sensor_noise.std_radrd,
                random_state=None if random_state is None else random_state + 1,
            ),
        }
        self._sensors = itertools.cycle(self.sensor_pattern)
        self.timestep = 0

    def timestamp(self, timestep: int) -> int:
        return self.start_timestamp + int(round(timestep * self.object_data.dt * 1e6))

    def generate(self) -> MeasurementPackage:
        sensor_type = next(self._sensors)
        true_state = self.object_data[self.timestep]
        z = self.meas_models[sensor_type].observe(true_state[:, None])[:, 0]
        return MeasurementPackage(sensor_type=sensor_type, raw_measurements=z, timestamp=self.timestamp(self.timestep))

    def __iter__(self):
        return self

    def __next__(self):
        if self.timestep >= len(self.object_data):
            raise StopIteration
        else:
            result = self.timestep, self.generate()
            self.timestep += 1
            return result
