import numpy as np
from scipy.linalg import LinAlgError, cholesky

from ukf_fusion.common.exceptions import DegenerateMeasurementError, NumericalInstabilityError
from ukf_fusion.common.state import Gaussian, MeasurementPackage, SensorType
from ukf_fusion.configs import InitialCovarianceConfig, SensorNoiseConfig
from ukf_fusion.measurement_models import RadarMeasurementModel


class StateInitializer:
    def __init__(
        self,
        sensor_noise: SensorNoiseConfig,
        lidar_initial_covariance: InitialCovarianceConfig,
        radar_initial_covariance: InitialCovarianceConfig,
    ) -> None:
        """Turns the first measurement into a belief over [px, py, v, yaw, yawd]

        Speed, heading and yaw rate start at zero; their variances come from the
        per sensor InitialCovarianceConfig. All cross covariances start at zero.
        """
        self.sensor_noise = sensor_noise
        self.lidar_initial_covariance = lidar_initial_covariance
        self.radar_initial_covariance = radar_initial_covariance

    def initialize(self, measurement: MeasurementPackage) -> Gaussian:
        """
        Raises:
            NumericalInstabilityError: measurement is not finite or gives a covariance that is not positive definite
            DegenerateMeasurementError: radar range below RadarMeasurementModel.MIN_RANGE
        """
        if not np.all(np.isfinite(measurement.z)):
            raise NumericalInstabilityError(f"non-finite {measurement.sensor_type.name} measurement {measurement.z}")
        if measurement.sensor_type is SensorType.RADAR:
            if measurement.z[0] < RadarMeasurementModel.MIN_RANGE:
                raise DegenerateMeasurementError(f"range {measurement.z[0]} below {RadarMeasurementModel.MIN_RANGE} m, position undefined")
            state = self.from_radar(measurement.z)
        else:
            state = self.from_lidar(measurement.z)
        try:
            cholesky(state.P, lower=True)
        except LinAlgError as error:
            raise NumericalInstabilityError(f"initial covariance is not positive definite:\n{state.P}") from error
        return state

    def from_lidar(self, z: np.ndarray) -> Gaussian:
        prior = self.lidar_initial_covariance
        x = np.array([z[0], z[1], 0.0, 0.0, 0.0])
        P = np.diag(
            [
                self.sensor_noise.std_laspx**2,
                self.sensor_noise.std_laspy**2,
                prior.speed_var,
                prior.yaw_var,
                prior.yaw_rate_var,
            ]
        )
        return Gaussian(x=x, P=P)

    def from_radar(self, z: np.ndarray) -> Gaussian:
        """Polar to cartesian conversion, position variance from first order error propagation"""
        prior = self.radar_initial_covariance
        rng, bearing = z[0], z[1]
        std_r, std_phi = self.sensor_noise.std_radr, self.sensor_noise.std_radphi
        x = np.array([rng * np.cos(bearing), rng * np.sin(bearing), 0.0, 0.0, 0.0])
        P = np.diag(
            [
                std_r**2 * np.cos(bearing) ** 2 + rng**2 * np.sin(bearing) ** 2 * std_phi**2,
                std_r**2 * np.sin(bearing) ** 2 + rng**2 * np.cos(bearing) ** 2 * std_phi**2,
                prior.speed_var,
                prior.yaw_var,
                prior.yaw_rate_var,
            ]
        )
        return Gaussian(x=x, P=P)
