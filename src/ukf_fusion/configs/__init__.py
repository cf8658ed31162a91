# flake8: noqa

from ukf_fusion.configs.initial_covariance_config import (
    LIDAR_INITIAL_COVARIANCE,
    RADAR_INITIAL_COVARIANCE,
    InitialCovarianceConfig,
)
from ukf_fusion.configs.noise_config import ProcessNoiseConfig, SensorNoiseConfig
from ukf_fusion.configs.ukf_config import UKFConfig
