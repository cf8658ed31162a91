class FilterError(Exception):
    """Base class for failures surfaced by the filter to its caller."""


class NumericalInstabilityError(FilterError):
    """Covariance could not be factorized or produced non-finite values."""


class SingularCovarianceError(FilterError):
    """Innovation covariance cannot be inverted."""


class DegenerateMeasurementError(FilterError):
    """Predicted state maps to an undefined point in measurement space."""


class OutOfOrderMeasurementError(FilterError):
    """Measurement timestamp precedes the last processed one."""
