# flake8: noqa

from ukf_fusion.utils.timer import Timer
