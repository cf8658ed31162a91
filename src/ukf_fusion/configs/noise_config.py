from dataclasses import dataclass


@dataclass
class ProcessNoiseConfig:
    """Process noise of the CTRV model

    Parameters
    ----------
    std_a : float
        standard deviation of longitudinal acceleration, m/s^2
    std_yawdd : float
        standard deviation of yaw acceleration, rad/s^2
    """

    std_a: float = 2.5
    std_yawdd: float = 1.0

    def __post_init__(self):
        assert self.std_a > 0.0, "std_a should be positive!"
        assert self.std_yawdd > 0.0, "std_yawdd should be positive!"


@dataclass(frozen=True)
class SensorNoiseConfig:
    """Measurement noise provided by the sensor manufacturer.

    Laser values are in meters, radar range and range rate in m and m/s,
    radar bearing in rad.
    """

    std_laspx: float = 0.15
    std_laspy: float = 0.15
    std_radr: float = 0.3
    std_radphi: float = 0.03
    std_radrd: float = 0.3

    def __post_init__(self):
        for name in ("std_laspx", "std_laspy", "std_radr", "std_radphi", "std_radrd"):
            assert getattr(self, name) > 0.0, f"{name} should be positive!"
