from typing import Annotated as Ann

import numpy as np

from .base_measurement_model import MeasurementModel


class LidarMeasurementModel(MeasurementModel):
    def __init__(self, sigma_px: float, sigma_py: float, *args, **kwargs):
        """Creates the linear position measurement model of a laser range finder

        Args:
            sigma_px (scalar): standard deviation of measurement noise of X position
            sigma_py (scalar): standard deviation of measurement noise of Y position

        Attributes:
            dim (scalar): measurement dimension
            H (2 x 5 matrix): observation matrix
            R (2 x 2 matrix): measurement noise covariance

        Notes: the first two entries of the state vector represents
               the X-position and Y-position, respectively.
        """
        super().__init__(*args, **kwargs)
        self.dim = 2
        self.sigma_px = sigma_px
        self.sigma_py = sigma_py
        self.R = np.diag([sigma_px**2, sigma_py**2])
        self.H = np.array(
            [
                [1.0, 0.0, 0.0, 0.0, 0.0],
                [0.0, 1.0, 0.0, 0.0, 0.0],
            ]
        )

    def __repr__(self) -> str:
        return self.__class__.__name__ + f"(d={self.dim}, R={self.R.tolist()})"

    def h(self, states: Ann[np.ndarray, "5, n"]) -> Ann[np.ndarray, "2, n"]:
        return self.H @ states
