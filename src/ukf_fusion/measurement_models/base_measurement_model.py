from typing import Annotated as Ann

import numpy as np

from ukf_fusion.common.normalize_angle import normalize_angle


class MeasurementModel:
    """
    MeasurementModel is a base class for different measurement models.

    States and measurements are handled as columns: h maps (states_dim, n) to (meas_dim, n).
    """

    angle_index = None  # row of the measurement vector holding an angle, if any

    def __init__(self, random_state=None, *args, **kwargs):
        self._generator = np.random.RandomState(random_state)
        self.dim: int = None  # Dimension of the measurement vector (meas_dim)
        self.R: Ann[np.ndarray, "meas_dim, meas_dim"] = None  # Measurement noise covariance matrix

    def h(self, states: Ann[np.ndarray, "states_dim, n"]) -> Ann[np.ndarray, "meas_dim, n"]:
        raise NotImplementedError

    def observe(self, states: Ann[np.ndarray, "states_dim, n"]) -> Ann[np.ndarray, "meas_dim, n"]:
        """Add noise to measurements"""
        noiseless = self.h(states)
        noise = self._generator.multivariate_normal(mean=np.zeros(self.dim), cov=self.R, size=noiseless.shape[1]).T
        return noiseless + noise

    def residual(self, z: np.ndarray, z_pred: np.ndarray) -> np.ndarray:
        """Difference of measurements with the angle component wrapped into (-pi, pi]"""
        diff = np.asarray(z, dtype=float) - np.asarray(z_pred, dtype=float)
        if self.angle_index is not None:
            diff[self.angle_index] = normalize_angle(diff[self.angle_index])
        return diff
