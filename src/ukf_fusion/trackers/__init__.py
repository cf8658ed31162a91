# flake8: noqa

from ukf_fusion.trackers.single_object_trackers import UnscentedKalmanTracker
