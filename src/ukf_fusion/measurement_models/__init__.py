# flake8: noqa

from .base_measurement_model import MeasurementModel
from .Lidar_measurement_model import LidarMeasurementModel
from .Radar_measurement_model import RadarMeasurementModel
