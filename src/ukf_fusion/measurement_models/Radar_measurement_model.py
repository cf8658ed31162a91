from typing import Annotated as Ann

import numpy as np

from ukf_fusion.common.exceptions import DegenerateMeasurementError

from .base_measurement_model import MeasurementModel


class RadarMeasurementModel(MeasurementModel):
    MIN_RANGE = 1e-4  # m, below it bearing and range rate are undefined
    angle_index = 1

    def __init__(self, sigma_r: float, sigma_phi: float, sigma_rd: float, *args, **kwargs):
        """Creates the range/bearing/range-rate measurement model of a radar at the origin

        sigma_r : scalar
            standard deviation of measurement noise added to range
        sigma_phi : scalar
            standard deviation of measurement noise added to bearing
        sigma_rd : scalar
            standard deviation of measurement noise added to range rate
        """
        super().__init__(*args, **kwargs)
        self.dim = 3
        self.sigma_r = sigma_r
        self.sigma_phi = sigma_phi
        self.sigma_rd = sigma_rd
        self.R = np.diag([sigma_r**2, sigma_phi**2, sigma_rd**2])

    def __repr__(self) -> str:
        return self.__class__.__name__ + f"(d={self.dim}, R={self.R.tolist()})"

    def h(self, states: Ann[np.ndarray, "5, n"]) -> Ann[np.ndarray, "3, n"]:
        """Maps CTRV states to [range, bearing, range_rate]

        Raises:
            DegenerateMeasurementError: a state lies closer than MIN_RANGE to the sensor
        """
        pos_x, pos_y, v, yaw = states[0], states[1], states[2], states[3]
        rng = self._get_range(states)
        if np.any(~np.isfinite(rng)) or np.any(rng < self.MIN_RANGE):
            raise DegenerateMeasurementError(f"range {np.min(rng)} below {self.MIN_RANGE} m, bearing and range rate undefined")
        bearing = np.arctan2(pos_y, pos_x)
        range_rate = (pos_x * np.cos(yaw) * v + pos_y * np.sin(yaw) * v) / rng
        return np.vstack([rng, bearing, range_rate])

    def _get_range(self, states):
        return np.hypot(states[0], states[1])

    @staticmethod
    def to_cartesian(z: np.ndarray) -> np.ndarray:
        """Position [px, py] of a [range, bearing, ...] measurement"""
        rng, bearing = z[0], z[1]
        return np.array([rng * np.cos(bearing), rng * np.sin(bearing)])
