from dataclasses import dataclass
from enum import Enum

import numpy as np


class SensorType(Enum):
    LASER = "L"
    RADAR = "R"

    @property
    def measurement_dim(self) -> int:
        return 2 if self is SensorType.LASER else 3


@dataclass
class Gaussian:
    """Describes state of object

    Parameters
    ----------
    x : np.ndarray (N), N - state dimension
        describes state vector of object
    P : np.ndarray (N x N), N - state dimension
        describes covariance of state of object
    """

    x: np.ndarray
    P: np.ndarray

    def __post_init__(self):
        assert isinstance(self.x, np.ndarray), "Argument of wrong type!"
        assert isinstance(self.P, np.ndarray), "Argument of wrong type!"
        assert self.x.ndim == 1, "x must be N - vector"
        assert self.P.ndim == 2, "P must be N x N matrix"
        assert self.P.shape[0] == self.P.shape[1], "Covariance matrix should be square!"
        assert self.P.shape[0] == self.x.shape[0], "size of vector should be equal P column size!"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__} " f"x = {np.array2string(self.x, max_line_width=np.inf, precision=3)}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Gaussian):
            return NotImplemented
        return np.allclose(self.x, other.x) and np.allclose(self.P, other.P)

    def copy(self) -> "Gaussian":
        return Gaussian(x=self.x.copy(), P=self.P.copy())

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.x)) and np.all(np.isfinite(self.P)))


@dataclass
class MeasurementPackage:
    """Single sensor observation

    Parameters
    ----------
    sensor_type : SensorType
        which sensor produced the observation
    raw_measurements : np.ndarray
        [px, py] for LASER, [range, bearing, range_rate] for RADAR
    timestamp : int
        acquisition time in microseconds
    """

    sensor_type: SensorType
    raw_measurements: np.ndarray
    timestamp: int

    def __post_init__(self):
        assert isinstance(self.sensor_type, SensorType), "Argument of wrong type!"
        self.raw_measurements = np.asarray(self.raw_measurements, dtype=float)
        assert self.raw_measurements.ndim == 1, "raw measurements must be a vector"
        assert (
            self.raw_measurements.shape[0] == self.sensor_type.measurement_dim
        ), f"{self.sensor_type.name} measurement must have {self.sensor_type.measurement_dim} values"
        assert isinstance(self.timestamp, (int, np.integer)), "timestamp must be integer microseconds"

    @property
    def z(self) -> np.ndarray:
        return self.raw_measurements
