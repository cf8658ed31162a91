from __future__ import annotations

import typing as tp
from typing import Annotated as Ann

import numpy as np

from ukf_fusion.common.exceptions import NumericalInstabilityError, SingularCovarianceError
from ukf_fusion.common.normalize_angle import normalize_angle
from ukf_fusion.common.sigma_points import SigmaPoints
from ukf_fusion.common.state import Gaussian
from ukf_fusion.measurement_models import LidarMeasurementModel, MeasurementModel
from ukf_fusion.motion_models import CTRVMotionModel

YAW_INDEX = 3
MAX_CONDITION_NUMBER = 1e12


def make_SPD(covariance: np.ndarray) -> np.ndarray:
    return 0.5 * (covariance + covariance.swapaxes(-1, -2))


class GaussianDensity:
    @staticmethod
    def unscented_transform(
        sigma_points: Ann[np.ndarray, "dim, n_sigma"],
        weights: Ann[np.ndarray, "n_sigma"],
        angle_index: tp.Optional[int] = None,
    ) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Recovers mean and covariance from weighted sigma points

        The angle component of every deviation from the mean is wrapped into (-pi, pi]
        before the outer products are accumulated.
        """
        mean = sigma_points @ weights
        diffs = GaussianDensity.deviations(sigma_points, mean, angle_index)
        covariance = (diffs * weights) @ diffs.T
        return mean, covariance

    @staticmethod
    def deviations(sigma_points: np.ndarray, mean: np.ndarray, angle_index: tp.Optional[int] = None) -> np.ndarray:
        diffs = sigma_points - mean[:, None]
        if angle_index is not None:
            diffs[angle_index] = normalize_angle(diffs[angle_index])
        return diffs

    @staticmethod
    def predict(
        state: Gaussian,
        motion_model: CTRVMotionModel,
        sigma_points: SigmaPoints,
        dt: float,
    ) -> tp.Tuple[Gaussian, Ann[np.ndarray, "n_x, n_sigma"]]:
        """Performs unscented Kalman prediction step

        Args:
            state (Gaussian): current belief
            motion_model (CTRVMotionModel): motion model with its process noise
            sigma_points (SigmaPoints): sigma point generator holding the weights
            dt (float): prediction horizon in seconds

        Returns:
            state_pred (Gaussian): predicted belief
            predicted_sigma_points (np.ndarray): augmented sigma points moved through the motion model
        """
        augmented_sigma_points = sigma_points.generate(state, motion_model.Q)
        predicted_sigma_points = motion_model.f(augmented_sigma_points, dt)
        x, P = GaussianDensity.unscented_transform(predicted_sigma_points, sigma_points.weights, angle_index=YAW_INDEX)
        state_pred = Gaussian(x=x, P=P)
        if not state_pred.is_finite():
            raise NumericalInstabilityError(f"non-finite prediction for dt={dt}:\n{x}\n{P}")
        return state_pred, predicted_sigma_points

    @staticmethod
    def invert(S: np.ndarray) -> np.ndarray:
        """Inverts innovation covariance

        Raises:
            SingularCovarianceError: S is non-finite, singular or too ill-conditioned to invert
        """
        if not np.all(np.isfinite(S)):
            raise SingularCovarianceError(f"non-finite innovation covariance:\n{S}")
        condition_number = np.linalg.cond(S)
        if not np.isfinite(condition_number) or condition_number > MAX_CONDITION_NUMBER:
            raise SingularCovarianceError(f"innovation covariance is singular:\n{S}")
        try:
            return np.linalg.inv(S)
        except np.linalg.LinAlgError as error:
            raise SingularCovarianceError(f"innovation covariance is singular:\n{S}") from error

    @staticmethod
    def update(
        state: Gaussian,
        measurement: np.ndarray,
        measurement_model: LidarMeasurementModel,
    ) -> tp.Tuple[Gaussian, np.ndarray, np.ndarray]:
        """Performs linear Kalman update step

        Returns:
            state_upd (Gaussian): updated belief
            innovation (np.ndarray): z - H x
            S (np.ndarray): innovation covariance
        """
        H = measurement_model.H
        innovation = measurement_model.residual(measurement, H @ state.x)
        S = H @ state.P @ H.T + measurement_model.R
        K = state.P @ H.T @ GaussianDensity.invert(S)  # Kalman gain

        x = state.x + K @ innovation
        P = (np.eye(state.x.shape[0]) - K @ H) @ state.P
        state_upd = Gaussian(x=x, P=make_SPD(P))
        if not state_upd.is_finite():
            raise NumericalInstabilityError(f"non-finite update:\n{x}\n{P}")
        return state_upd, innovation, S

    @staticmethod
    def predict_measurement(
        predicted_sigma_points: Ann[np.ndarray, "n_x, n_sigma"],
        weights: Ann[np.ndarray, "n_sigma"],
        measurement_model: MeasurementModel,
    ) -> tp.Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Transforms predicted sigma points into measurement space

        Returns:
            Zsig (np.ndarray (meas_dim x n_sigma)): sigma points in measurement space
            z_pred (np.ndarray (meas_dim)): mean predicted measurement
            S (np.ndarray (meas_dim x meas_dim)): innovation covariance including R
        """
        Zsig = measurement_model.h(predicted_sigma_points)
        z_pred, S = GaussianDensity.unscented_transform(Zsig, weights, angle_index=measurement_model.angle_index)
        return Zsig, z_pred, S + measurement_model.R

    @staticmethod
    def unscented_update(
        state: Gaussian,
        predicted_sigma_points: Ann[np.ndarray, "n_x, n_sigma"],
        weights: Ann[np.ndarray, "n_sigma"],
        measurement: np.ndarray,
        measurement_model: MeasurementModel,
    ) -> tp.Tuple[Gaussian, np.ndarray, np.ndarray]:
        """Performs unscented Kalman update step on the sigma points of the last prediction

        Returns:
            state_upd (Gaussian): updated belief
            innovation (np.ndarray): z - z_pred, angle component wrapped
            S (np.ndarray): innovation covariance
        """
        Zsig, z_pred, S = GaussianDensity.predict_measurement(predicted_sigma_points, weights, measurement_model)

        # cross correlation between state and measurement space
        x_diff = GaussianDensity.deviations(predicted_sigma_points, state.x, angle_index=YAW_INDEX)
        z_diff = GaussianDensity.deviations(Zsig, z_pred, angle_index=measurement_model.angle_index)
        Tc = (x_diff * weights) @ z_diff.T

        K = Tc @ GaussianDensity.invert(S)  # Kalman gain
        innovation = measurement_model.residual(measurement, z_pred)

        x = state.x + K @ innovation
        P = state.P - K @ S @ K.T
        state_upd = Gaussian(x=x, P=make_SPD(P))
        if not state_upd.is_finite():
            raise NumericalInstabilityError(f"non-finite update:\n{x}\n{P}")
        return state_upd, innovation, S
