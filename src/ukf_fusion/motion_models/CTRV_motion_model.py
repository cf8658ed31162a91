from typing import Annotated as Ann

import numpy as np

from .base_motion_model import BaseMotionModel


class CTRVMotionModel(BaseMotionModel):
    YAW_RATE_THRESHOLD = 1e-3

    def __init__(self, sigma_a: float, sigma_yawdd: float, *args, **kwargs):
        """Creates a 2D constant turn rate and velocity (CTRV) model

        Note:
            the motion model assumes that the state vector x consists of the following states:
            px -> X position
            py -> Y position
            v  -> speed along heading
            yaw -> heading
            yawd -> turn rate
            and, when augmented, of the process noise components:
            nu_a -> longitudinal acceleration
            nu_yawdd -> yaw acceleration

        Attributes:
            d (scalar): object state dimension
            noise_dim (scalar): number of process noise components
            Q (2 x 2 matrix): process noise covariance of (nu_a, nu_yawdd)

        Args:
            sigma_a (scalar): standard deviation of longitudinal acceleration
            sigma_yawdd (scalar): standard deviation of yaw acceleration
        """
        self.d = 5
        self.noise_dim = 2
        self.sigma_a = sigma_a
        self.sigma_yawdd = sigma_yawdd
        super(CTRVMotionModel, self).__init__(*args, **kwargs)

    def __repr__(self) -> str:
        return self.__class__.__name__ + (f"(d={self.d}, " f"sigma_a={self.sigma_a}, " f"sigma_yawdd={self.sigma_yawdd})")

    @property
    def Q(self) -> Ann[np.ndarray, "2, 2"]:
        return np.diag([self.sigma_a**2, self.sigma_yawdd**2])

    def f(self, states: Ann[np.ndarray, "d or d + 2, n"], dt: float) -> Ann[np.ndarray, "d, n"]:
        """Propagates states given as columns by dt seconds

        Rows beyond the fifth are read as (nu_a, nu_yawdd); a plain 5-row input is
        propagated without noise.
        """
        states = np.asarray(states, dtype=float)
        assert states.ndim == 2, "states must be given as columns of a matrix"
        assert states.shape[0] in (self.d, self.d + self.noise_dim), "wrong state dimension"

        pos_x, pos_y, v, yaw, yawd = states[: self.d]
        if states.shape[0] > self.d:
            nu_a, nu_yawdd = states[self.d :]
        else:
            nu_a = nu_yawdd = np.zeros_like(v)

        turning = np.abs(yawd) > self.YAW_RATE_THRESHOLD
        turn_dx, turn_dy = self.turn_displacement(v, yaw, np.where(turning, yawd, 1.0), dt)
        straight_dx, straight_dy = self.straight_displacement(v, yaw, dt)
        next_pos_x = pos_x + np.where(turning, turn_dx, straight_dx)
        next_pos_y = pos_y + np.where(turning, turn_dy, straight_dy)

        return np.vstack(
            [
                next_pos_x + 0.5 * dt**2 * np.cos(yaw) * nu_a,
                next_pos_y + 0.5 * dt**2 * np.sin(yaw) * nu_a,
                v + dt * nu_a,
                yaw + yawd * dt + 0.5 * dt**2 * nu_yawdd,
                yawd + dt * nu_yawdd,
            ]
        )

    def move(self, state_vector: np.ndarray, dt: float, if_noisy: bool = False) -> np.ndarray:
        """Moves a single state vector, drawing accelerations from Q if noisy"""
        assert isinstance(dt, float)
        assert state_vector.shape == (self.d,), f"state must be {self.d} - vector"
        noise = self._generator.multivariate_normal(mean=np.zeros(self.noise_dim), cov=self.Q) if if_noisy else np.zeros(self.noise_dim)
        augmented = np.concatenate([state_vector, noise])[:, None]
        return self.f(augmented, dt)[:, 0]

    @staticmethod
    def turn_displacement(v, yaw, yawd, dt):
        """Exact position change along a circular arc, yawd must be non zero"""
        dx = v / yawd * (np.sin(yaw + yawd * dt) - np.sin(yaw))
        dy = v / yawd * (-np.cos(yaw + yawd * dt) + np.cos(yaw))
        return dx, dy

    @staticmethod
    def straight_displacement(v, yaw, dt):
        return v * np.cos(yaw) * dt, v * np.sin(yaw) * dt
