import numpy as np
from scipy.linalg import LinAlgError, block_diag, cholesky

from ukf_fusion.common.exceptions import NumericalInstabilityError
from ukf_fusion.common.state import Gaussian


class SigmaPoints:
    def __init__(self, n_x: int = 5, n_noise: int = 2):
        """Deterministic sigma point set of an augmented Gaussian

        Args:
            n_x (int): dimension of the state vector
            n_noise (int): number of process noise components appended to the state

        Attributes:
            n_aug (int): augmented state dimension
            lambda_ (float): spreading parameter, 3 - n_aug
            weights (np.ndarray (2 * n_aug + 1)): fixed weights of the sigma points
        """
        assert n_x > 0, "state dimension should be positive!"
        assert n_noise >= 0, "noise dimension should be non negative!"
        self.n_x = n_x
        self.n_noise = n_noise
        self.n_aug = n_x + n_noise
        self.lambda_ = 3.0 - self.n_aug
        self.weights = self.compute_weights(self.n_aug, self.lambda_)

    def __repr__(self) -> str:
        return self.__class__.__name__ + (f"(n_x={self.n_x}, " f"n_aug={self.n_aug}, " f"lambda={self.lambda_})")

    @property
    def n_sigma(self) -> int:
        return 2 * self.n_aug + 1

    @staticmethod
    def compute_weights(n_aug: int, lambda_: float = None) -> np.ndarray:
        lambda_ = 3.0 - n_aug if lambda_ is None else lambda_
        weights = np.full(2 * n_aug + 1, 0.5 / (lambda_ + n_aug))
        weights[0] = lambda_ / (lambda_ + n_aug)
        return weights

    def augment(self, state: Gaussian, Q: np.ndarray) -> Gaussian:
        """Appends zero-mean process noise to the state

        Args:
            state (Gaussian): belief of dimension n_x
            Q (np.ndarray (n_noise x n_noise)): process noise covariance

        Returns:
            Gaussian: augmented belief of dimension n_aug with block diagonal covariance
        """
        assert state.x.shape[0] == self.n_x, f"state must be {self.n_x} - vector"
        assert Q.shape == (self.n_noise, self.n_noise), "wrong shape of process noise covariance"
        x_aug = np.concatenate([state.x, np.zeros(self.n_noise)])
        P_aug = block_diag(state.P, Q)
        return Gaussian(x=x_aug, P=P_aug)

    def generate(self, state: Gaussian, Q: np.ndarray) -> np.ndarray:
        """Generates augmented sigma points

        Column 0 is the augmented mean, columns 1..n_aug are the mean plus the scaled
        columns of the lower Cholesky factor, columns n_aug+1..2*n_aug the mean minus them.

        Returns:
            np.ndarray (n_aug x 2 * n_aug + 1): sigma points as columns

        Raises:
            NumericalInstabilityError: augmented covariance is not positive definite
        """
        augmented = self.augment(state, Q)
        if not augmented.is_finite():
            raise NumericalInstabilityError(f"non-finite augmented belief:\n{augmented.x}\n{augmented.P}")
        try:
            A = cholesky(augmented.P, lower=True)
        except LinAlgError as error:
            raise NumericalInstabilityError(f"augmented covariance is not positive definite:\n{augmented.P}") from error

        spread = np.sqrt(self.lambda_ + self.n_aug) * A
        sigma_points = np.empty((self.n_aug, self.n_sigma))
        sigma_points[:, 0] = augmented.x
        sigma_points[:, 1 : self.n_aug + 1] = augmented.x[:, None] + spread
        sigma_points[:, self.n_aug + 1 :] = augmented.x[:, None] - spread
        return sigma_points
