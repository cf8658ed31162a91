# flake8: noqa

from ukf_fusion.common.exceptions import (
    DegenerateMeasurementError,
    FilterError,
    NumericalInstabilityError,
    OutOfOrderMeasurementError,
    SingularCovarianceError,
)
from ukf_fusion.common.normalize_angle import normalize_angle
from ukf_fusion.common.sigma_points import SigmaPoints
from ukf_fusion.common.state import Gaussian, MeasurementPackage, SensorType
