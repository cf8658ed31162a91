import numpy as np


class BaseMotionModel:
    def __init__(self, random_state=None, *args, **kwargs):
        self._generator = np.random.RandomState(random_state)

    def f(self, states, dt):
        raise NotImplementedError

    def move(self, state_vector, dt, if_noisy=False):
        raise NotImplementedError

    def __repr__(self) -> str:
        raise NotImplementedError
