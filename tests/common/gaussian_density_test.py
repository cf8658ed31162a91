import numpy as np
import pytest

from ukf_fusion.common.exceptions import DegenerateMeasurementError, SingularCovarianceError
from ukf_fusion.common.gaussian_density import GaussianDensity, make_SPD
from ukf_fusion.common.sigma_points import SigmaPoints
from ukf_fusion.common.state import Gaussian
from ukf_fusion.measurement_models import LidarMeasurementModel, RadarMeasurementModel
from ukf_fusion.motion_models import CTRVMotionModel


TOL = 1e-6


def test_make_SPD():
    covariance = np.array([[2.0, 1.0], [0.0, 3.0]])
    np.testing.assert_allclose(make_SPD(covariance), np.array([[2.0, 0.5], [0.5, 3.0]]))


def test_deviations_wrap_angle_component():
    sigma_points = np.array([[3.1, -3.1, 0.0], [1.0, 2.0, 3.0]])
    diffs = GaussianDensity.deviations(sigma_points, np.array([3.1, 2.0]), angle_index=0)
    np.testing.assert_allclose(diffs[0], [0.0, 2 * np.pi - 6.2, -3.1], atol=1e-12)
    np.testing.assert_allclose(diffs[1], [-1.0, 0.0, 1.0])


def test_unscented_transform_without_wrapping_matches_weighted_moments():
    sigma_points = np.array([[1.0, 2.0, 0.0]])
    weights = np.array([0.0, 0.5, 0.5])
    mean, covariance = GaussianDensity.unscented_transform(sigma_points, weights)
    np.testing.assert_allclose(mean, [1.0])
    np.testing.assert_allclose(covariance, [[1.0]])


def test_zero_dt_prediction_keeps_belief():
    state = Gaussian(x=np.array([1.0, 2.0, 3.0, 0.2, 0.1]), P=0.5 * np.eye(5))
    predicted, predicted_sigma_points = GaussianDensity.predict(state, CTRVMotionModel(2.5, 1.0), SigmaPoints(), dt=0.0)
    assert predicted_sigma_points.shape == (5, 15)
    np.testing.assert_allclose(predicted.x, state.x, atol=1e-12)
    np.testing.assert_allclose(predicted.P, state.P, atol=1e-12)


def test_prediction_moves_mean_and_inflates_covariance(moving_object_state):
    predicted, _ = GaussianDensity.predict(moving_object_state, CTRVMotionModel(2.5, 1.0), SigmaPoints(), dt=0.1)
    x = moving_object_state.x
    assert predicted.x[0] > x[0]
    assert predicted.x[1] > x[1]
    np.testing.assert_allclose(predicted.x[3], x[3] + 0.1 * x[4], atol=1e-3)
    assert np.all(np.diag(predicted.P) > np.diag(moving_object_state.P))
    np.testing.assert_allclose(predicted.P, predicted.P.T, atol=1e-12)


def test_linear_update_with_dominating_measurement_noise_keeps_prediction():
    state = Gaussian(x=np.array([1.0, 2.0, 0.5, 0.0, 0.0]), P=np.eye(5))
    noisy_lidar = LidarMeasurementModel(sigma_px=1e6, sigma_py=1e6)
    updated, _, _ = GaussianDensity.update(state, np.array([10.0, -10.0]), noisy_lidar)
    np.testing.assert_allclose(updated.x, state.x, atol=TOL)
    np.testing.assert_allclose(updated.P, state.P, atol=TOL)


def test_linear_update_with_exact_measurement_takes_measurement():
    state = Gaussian(x=np.array([1.0, 2.0, 0.5, 0.0, 0.0]), P=np.eye(5))
    exact_lidar = LidarMeasurementModel(sigma_px=1e-6, sigma_py=1e-6)
    updated, innovation, S = GaussianDensity.update(state, np.array([10.0, -10.0]), exact_lidar)
    np.testing.assert_allclose(updated.x[:2], [10.0, -10.0], atol=TOL)
    np.testing.assert_allclose(updated.P[:2, :2], np.zeros((2, 2)), atol=TOL)
    np.testing.assert_allclose(innovation, [9.0, -12.0])
    np.testing.assert_allclose(S, np.eye(2), atol=TOL)


def test_linear_update_blends_prediction_and_measurement():
    state = Gaussian(x=np.array([0.0, 0.0, 0.0, 0.0, 0.0]), P=np.eye(5))
    lidar = LidarMeasurementModel(sigma_px=1.0, sigma_py=1.0)
    updated, _, _ = GaussianDensity.update(state, np.array([2.0, 4.0]), lidar)
    np.testing.assert_allclose(updated.x[:2], [1.0, 2.0])
    np.testing.assert_allclose(np.diag(updated.P)[:2], [0.5, 0.5])


def test_singular_innovation_covariance_raises():
    state = Gaussian(x=np.zeros(5), P=np.zeros((5, 5)))
    lidar = LidarMeasurementModel(sigma_px=0.0, sigma_py=0.0)
    with pytest.raises(SingularCovarianceError):
        GaussianDensity.update(state, np.array([1.0, 1.0]), lidar)


def test_invert_rejects_non_finite():
    with pytest.raises(SingularCovarianceError):
        GaussianDensity.invert(np.array([[np.inf, 0.0], [0.0, 1.0]]))


def test_predict_measurement_for_radar(moving_object_state):
    motion_model, sigma_points = CTRVMotionModel(2.5, 1.0), SigmaPoints()
    predicted, predicted_sigma_points = GaussianDensity.predict(moving_object_state, motion_model, sigma_points, dt=0.05)
    radar = RadarMeasurementModel(sigma_r=0.3, sigma_phi=0.03, sigma_rd=0.3)

    Zsig, z_pred, S = GaussianDensity.predict_measurement(predicted_sigma_points, sigma_points.weights, radar)

    assert Zsig.shape == (3, 15)
    np.testing.assert_allclose(z_pred[0], np.hypot(predicted.x[0], predicted.x[1]), rtol=1e-2)
    np.testing.assert_allclose(z_pred[1], np.arctan2(predicted.x[1], predicted.x[0]), atol=1e-2)
    assert np.all(np.linalg.eigvalsh(S) > 0.0)
    assert np.all(np.diag(S) >= np.diag(radar.R))


def test_unscented_update_shrinks_uncertainty(moving_object_state):
    motion_model, sigma_points = CTRVMotionModel(2.5, 1.0), SigmaPoints()
    predicted, predicted_sigma_points = GaussianDensity.predict(moving_object_state, motion_model, sigma_points, dt=0.05)
    radar = RadarMeasurementModel(sigma_r=0.3, sigma_phi=0.03, sigma_rd=0.3)
    z = radar.h(predicted.x[:, None])[:, 0]

    updated, innovation, S = GaussianDensity.unscented_update(predicted, predicted_sigma_points, sigma_points.weights, z, radar)

    assert np.trace(updated.P) < np.trace(predicted.P)
    assert np.all(np.diag(updated.P) <= np.diag(predicted.P) + 1e-12)
    np.testing.assert_allclose(updated.x[:2], predicted.x[:2], atol=0.05)
    assert innovation.shape == (3,)
    assert S.shape == (3, 3)


def test_unscented_update_wraps_bearing_residual():
    # object behind the sensor just above the seam, measured bearing just below it
    state = Gaussian(x=np.array([-10.0, 0.5, 0.0, 0.0, 0.0]), P=np.diag([0.1, 0.01, 0.1, 0.01, 0.01]))
    motion_model, sigma_points = CTRVMotionModel(0.1, 0.1), SigmaPoints()
    predicted, predicted_sigma_points = GaussianDensity.predict(state, motion_model, sigma_points, dt=0.01)
    radar = RadarMeasurementModel(sigma_r=0.3, sigma_phi=0.03, sigma_rd=0.3)

    updated, innovation, _ = GaussianDensity.unscented_update(
        predicted, predicted_sigma_points, sigma_points.weights, np.array([10.0, -np.pi + 0.001, 0.0]), radar
    )

    assert 0.0 < innovation[1] < 0.06
    assert 0.3 < updated.x[1] < predicted.x[1]


def test_unscented_update_degenerate_geometry_raises():
    state = Gaussian(x=np.zeros(5), P=0.01 * np.eye(5))
    motion_model, sigma_points = CTRVMotionModel(0.1, 0.1), SigmaPoints()
    predicted, predicted_sigma_points = GaussianDensity.predict(state, motion_model, sigma_points, dt=0.0)
    radar = RadarMeasurementModel(sigma_r=0.3, sigma_phi=0.03, sigma_rd=0.3)
    with pytest.raises(DegenerateMeasurementError):
        GaussianDensity.unscented_update(predicted, predicted_sigma_points, sigma_points.weights, np.array([1.0, 0.0, 0.0]), radar)
