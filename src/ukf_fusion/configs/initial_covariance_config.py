from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class InitialCovarianceConfig:
    """Prior variances for the states a sensor does not observe on the first fix

    Parameters
    ----------
    speed_var : float
        variance of speed, (m/s)^2
    yaw_var : float
        variance of heading, rad^2
    yaw_rate_var : float
        variance of yaw rate, (rad/s)^2
    """

    speed_var: float
    yaw_var: float
    yaw_rate_var: float

    def __post_init__(self):
        assert self.speed_var > 0.0, "speed variance should be positive!"
        assert self.yaw_var > 0.0, "yaw variance should be positive!"
        assert self.yaw_rate_var > 0.0, "yaw rate variance should be positive!"


# no heading information on the first fix for either sensor
LIDAR_INITIAL_COVARIANCE = InitialCovarianceConfig(speed_var=1.0, yaw_var=(2.0 * np.pi) ** 2, yaw_rate_var=1.0)
RADAR_INITIAL_COVARIANCE = InitialCovarianceConfig(speed_var=10.0, yaw_var=(2.0 * np.pi) ** 2, yaw_rate_var=0.5**2)
