from abc import ABC, abstractmethod


class SingleObjectTracker(ABC):
    """Recursive estimator of the state of one object from a stream of observations"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def step(self, measurement):
        pass

    @abstractmethod
    def estimate(self):
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
