from dataclasses import dataclass, field

from .initial_covariance_config import (
    LIDAR_INITIAL_COVARIANCE,
    RADAR_INITIAL_COVARIANCE,
    InitialCovarianceConfig,
)
from .noise_config import ProcessNoiseConfig, SensorNoiseConfig


@dataclass
class UKFConfig:
    process_noise: ProcessNoiseConfig = field(default_factory=ProcessNoiseConfig)
    sensor_noise: SensorNoiseConfig = field(default_factory=SensorNoiseConfig)
    use_laser: bool = True
    use_radar: bool = False
    lidar_initial_covariance: InitialCovarianceConfig = LIDAR_INITIAL_COVARIANCE
    radar_initial_covariance: InitialCovarianceConfig = RADAR_INITIAL_COVARIANCE

    def __post_init__(self):
        assert isinstance(self.process_noise, ProcessNoiseConfig), "Argument of wrong type!"
        assert isinstance(self.sensor_noise, SensorNoiseConfig), "Argument of wrong type!"
        assert isinstance(self.use_laser, bool), "use_laser must be bool"
        assert isinstance(self.use_radar, bool), "use_radar must be bool"
