# flake8: noqa

from ukf_fusion.common import (
    DegenerateMeasurementError,
    FilterError,
    Gaussian,
    MeasurementPackage,
    NumericalInstabilityError,
    OutOfOrderMeasurementError,
    SensorType,
    SingularCovarianceError,
)
from ukf_fusion.configs import ProcessNoiseConfig, SensorNoiseConfig, UKFConfig
from ukf_fusion.trackers import UnscentedKalmanTracker

__version__ = "0.1.0"
