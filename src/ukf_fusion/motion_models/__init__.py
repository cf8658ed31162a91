# flake8: noqa

from .base_motion_model import BaseMotionModel
from .CTRV_motion_model import CTRVMotionModel
