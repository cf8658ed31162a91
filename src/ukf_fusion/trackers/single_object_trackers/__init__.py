# flake8: noqa

from ukf_fusion.trackers.single_object_trackers.base_single_object_tracker import SingleObjectTracker
from ukf_fusion.trackers.single_object_trackers.initializer import StateInitializer
from ukf_fusion.trackers.single_object_trackers.unscented_kalman_tracker import UnscentedKalmanTracker
