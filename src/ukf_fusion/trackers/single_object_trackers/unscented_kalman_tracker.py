import logging
import typing as tp
from dataclasses import replace

import numpy as np

from ukf_fusion.common.consistency import normalized_innovation_squared
from ukf_fusion.common.exceptions import FilterError, OutOfOrderMeasurementError
from ukf_fusion.common.gaussian_density import GaussianDensity
from ukf_fusion.common.sigma_points import SigmaPoints
from ukf_fusion.common.state import Gaussian, MeasurementPackage, SensorType
from ukf_fusion.configs import ProcessNoiseConfig, UKFConfig
from ukf_fusion.measurement_models import LidarMeasurementModel, RadarMeasurementModel
from ukf_fusion.motion_models import CTRVMotionModel
from ukf_fusion.utils.timer import Timer

from .base_single_object_tracker import SingleObjectTracker
from .initializer import StateInitializer

MICROSECONDS_PER_SECOND = 1e6


class UnscentedKalmanTracker(SingleObjectTracker):
    def __init__(
        self,
        config: tp.Optional[UKFConfig] = None,
        std_a: tp.Optional[float] = None,
        std_yawdd: tp.Optional[float] = None,
        use_laser: tp.Optional[bool] = None,
        use_radar: tp.Optional[bool] = None,
        logger: tp.Optional[logging.Logger] = None,
    ) -> None:
        """Unscented Kalman filter fusing lidar and radar observations of one object

        The belief is over [px, py, v, yaw, yawd] and follows the CTRV motion model.
        Keyword arguments override the corresponding fields of config.

        Every call of process_measurement either fully succeeds or raises a FilterError
        leaving x, P and the clock untouched. Instances are not thread safe.
        """
        config = UKFConfig() if config is None else config
        if std_a is not None or std_yawdd is not None:
            process_noise = ProcessNoiseConfig(
                std_a=config.process_noise.std_a if std_a is None else std_a,
                std_yawdd=config.process_noise.std_yawdd if std_yawdd is None else std_yawdd,
            )
            config = replace(config, process_noise=process_noise)
        if use_laser is not None:
            config = replace(config, use_laser=use_laser)
        if use_radar is not None:
            config = replace(config, use_radar=use_radar)
        self.config = config
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        noise = config.sensor_noise
        self.motion_model = CTRVMotionModel(sigma_a=config.process_noise.std_a, sigma_yawdd=config.process_noise.std_yawdd)
        self.lidar_model = LidarMeasurementModel(sigma_px=noise.std_laspx, sigma_py=noise.std_laspy)
        self.radar_model = RadarMeasurementModel(sigma_r=noise.std_radr, sigma_phi=noise.std_radphi, sigma_rd=noise.std_radrd)
        self.sigma_points = SigmaPoints(n_x=self.motion_model.d, n_noise=self.motion_model.noise_dim)
        self.initializer = StateInitializer(noise, config.lidar_initial_covariance, config.radar_initial_covariance)

        self._state: tp.Optional[Gaussian] = None
        self._predicted_sigma_points: tp.Optional[np.ndarray] = None
        self._sigma_points_stale = True  # predicted sigma points no longer describe the belief
        self._time_us: int = 0
        self.nis: tp.Dict[SensorType, float] = {}
        self.nis_history: tp.Dict[SensorType, tp.List[float]] = {sensor: [] for sensor in SensorType}

    @property
    def name(self):
        return "Unscented Kalman Filter SOT"

    @property
    def use_laser(self) -> bool:
        return self.config.use_laser

    @property
    def use_radar(self) -> bool:
        return self.config.use_radar

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    @property
    def time_us(self) -> int:
        return self._time_us

    @property
    def x(self) -> np.ndarray:
        self._check_initialized()
        return self._state.x.copy()

    @property
    def P(self) -> np.ndarray:
        self._check_initialized()
        return self._state.P.copy()

    @property
    def state(self) -> Gaussian:
        self._check_initialized()
        return self._state.copy()

    @property
    def weights(self) -> np.ndarray:
        return self.sigma_points.weights.copy()

    @property
    def predicted_sigma_points(self) -> tp.Optional[np.ndarray]:
        return None if self._predicted_sigma_points is None else self._predicted_sigma_points.copy()

    def estimate(self) -> Gaussian:
        return self.state

    def step(self, measurement: MeasurementPackage) -> Gaussian:
        self.process_measurement(measurement)
        return self.estimate()

    @Timer(name="process_measurement")
    def process_measurement(self, measurement: MeasurementPackage) -> None:
        """Initializes on the first measurement, otherwise predicts to its timestamp and corrects

        Raises:
            OutOfOrderMeasurementError: timestamp earlier than the last processed one
            NumericalInstabilityError, SingularCovarianceError, DegenerateMeasurementError:
                the filter could not process the measurement, state is unchanged
        """
        assert isinstance(measurement, MeasurementPackage), "Argument of wrong type!"

        if not self.is_initialized:
            try:
                state = self.initializer.initialize(measurement)
            except FilterError as error:
                self.logger.error(f"{error.__class__.__name__} on first measurement at {measurement.timestamp} us: {error}")
                raise
            self._state = state
            self._time_us = int(measurement.timestamp)
            self.logger.debug(f"Initialized by {measurement.sensor_type.name}: {self._state}")
            return

        if measurement.timestamp < self._time_us:
            self.logger.error(f"Measurement at {measurement.timestamp} us arrived after {self._time_us} us")
            raise OutOfOrderMeasurementError(f"timestamp {measurement.timestamp} us precedes last processed {self._time_us} us")

        dt = (measurement.timestamp - self._time_us) / MICROSECONDS_PER_SECOND
        self.logger.debug(f"Process {measurement.sensor_type.name} measurement, dt = {dt:.6f} s")
        try:
            predicted, predicted_sigma_points = GaussianDensity.predict(self._state, self.motion_model, self.sigma_points, dt)
            corrected, nis = self._correct(predicted, predicted_sigma_points, measurement)
        except FilterError as error:
            self.logger.error(f"{error.__class__.__name__} at {measurement.timestamp} us: {error}")
            raise

        self._state = corrected
        self._predicted_sigma_points = predicted_sigma_points
        self._sigma_points_stale = nis is not None
        self._time_us = int(measurement.timestamp)
        if nis is not None:
            self._record_nis(measurement.sensor_type, nis)

    def predict(self, dt: float) -> None:
        """Propagates the belief dt seconds ahead without touching the clock"""
        self._check_initialized()
        predicted, predicted_sigma_points = GaussianDensity.predict(self._state, self.motion_model, self.sigma_points, float(dt))
        self._state = predicted
        self._predicted_sigma_points = predicted_sigma_points
        self._sigma_points_stale = False

    def update_lidar(self, measurement: MeasurementPackage) -> None:
        assert measurement.sensor_type is SensorType.LASER, "lidar update needs a LASER measurement"
        self._check_initialized()
        corrected, innovation, S = GaussianDensity.update(self._state, measurement.z, self.lidar_model)
        self._state = corrected
        self._sigma_points_stale = True
        self._record_nis(SensorType.LASER, normalized_innovation_squared(innovation, S))

    def update_radar(self, measurement: MeasurementPackage) -> None:
        """Corrects with a radar measurement using the sigma points of the last prediction"""
        assert measurement.sensor_type is SensorType.RADAR, "radar update needs a RADAR measurement"
        self._check_initialized()
        state, predicted_sigma_points = self._state, self._predicted_sigma_points
        if self._sigma_points_stale:
            state, predicted_sigma_points = GaussianDensity.predict(state, self.motion_model, self.sigma_points, 0.0)
        corrected, innovation, S = GaussianDensity.unscented_update(
            state,
            predicted_sigma_points,
            self.sigma_points.weights,
            measurement.z,
            self.radar_model,
        )
        self._state = corrected
        self._predicted_sigma_points = predicted_sigma_points
        self._sigma_points_stale = True
        self._record_nis(SensorType.RADAR, normalized_innovation_squared(innovation, S))

    def _correct(
        self,
        predicted: Gaussian,
        predicted_sigma_points: np.ndarray,
        measurement: MeasurementPackage,
    ) -> tp.Tuple[Gaussian, tp.Optional[float]]:
        if measurement.sensor_type is SensorType.LASER:
            if not self.use_laser:
                self.logger.debug("Lidar disabled, keep prediction")
                return predicted, None
            corrected, innovation, S = GaussianDensity.update(predicted, measurement.z, self.lidar_model)
        else:
            if not self.use_radar:
                self.logger.debug("Radar disabled, keep prediction")
                return predicted, None
            corrected, innovation, S = GaussianDensity.unscented_update(
                predicted,
                predicted_sigma_points,
                self.sigma_points.weights,
                measurement.z,
                self.radar_model,
            )
        return corrected, normalized_innovation_squared(innovation, S)

    def _record_nis(self, sensor_type: SensorType, nis: float) -> None:
        self.nis[sensor_type] = nis
        self.nis_history[sensor_type].append(nis)
        self.logger.debug(f"{sensor_type.name} NIS = {nis:.3f}")

    def _check_initialized(self) -> None:
        assert self.is_initialized, "tracker has not received its first measurement yet"
