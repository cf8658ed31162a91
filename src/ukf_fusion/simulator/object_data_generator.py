import numpy as np

from ..motion_models import CTRVMotionModel


class ObjectData:
    """Generate groundtruth object data"""

    def __init__(
        self,
        initial_state: np.ndarray,
        motion_model: CTRVMotionModel,
        total_time: int,
        dt: float,
        if_noisy: bool = False,
    ):
        """Init generator

        Args:
            initial_state (np.ndarray (5)): [px, py, v, yaw, yawd] at timestep 0
            motion_model (CTRVMotionModel): a structure specifies the motion model parameters
            total_time (int): number of timesteps
            dt (float): sampling time in seconds
            if_noisy (bool): boolean value indicating whether to draw random accelerations
                             from the process noise of the motion model

        Attributes:
            objects_state_data (tuple of np.ndarray): true state at each timestep
        """
        assert isinstance(total_time, int), "Argument of wrong type!"
        assert total_time > 0, "total time should be positive!"
        assert dt > 0.0, "sampling time should be positive!"
        self._initial_state = np.asarray(initial_state, dtype=float)
        self._motion_model = motion_model
        self._total_time = total_time
        self._dt = float(dt)
        self._if_noisy = if_noisy
        self.objects_state_data = self.generate_objects_data()

    def __len__(self):
        return self._total_time

    def __getitem__(self, key):
        return self.objects_state_data[key]

    def generate_objects_data(self):
        object_state_history = []
        state = self._initial_state
        for _ in range(self._total_time):
            object_state_history.append(state)
            state = self._motion_model.move(state, dt=self._dt, if_noisy=self._if_noisy)
        return tuple(object_state_history)

    def __repr__(self) -> str:
        return self.__class__.__name__ + (
            f"(initial_state={self._initial_state}, " f"motion_model={self._motion_model}, " f"total_time={self._total_time}, " f"dt={self._dt}, " f"if_noisy={self._if_noisy})"
        )

    @property
    def dt(self):
        return self._dt

    @property
    def data(self):
        """Returns

        np.ndarray : (timesteps x object_state_dim)
        """
        return np.array(self.objects_state_data)
