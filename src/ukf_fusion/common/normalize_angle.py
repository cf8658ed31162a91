import numpy as np


def normalize_angle(angle):
    """
    Wrap an angle (or an array of angles) into the half-open interval (-pi, pi].

    Equivalent to repeatedly adding or subtracting 2*pi, but bounded in time for any input.
    Angles already inside the interval are returned unchanged, so applying it twice is a no-op.

    Args:
        angle (float | np.ndarray): angle(s) in radians

    Returns:
        float | np.ndarray: wrapped angle(s), same shape as the input
    """
    angle = np.asarray(angle, dtype=float)
    wrapped = np.pi - np.mod(np.pi - angle, 2.0 * np.pi)
    # np.mod may round up to exactly 2*pi for tiny negative arguments
    wrapped = np.where(wrapped <= -np.pi, wrapped + 2.0 * np.pi, wrapped)
    wrapped = np.where((angle > np.pi) | (angle <= -np.pi), wrapped, angle)
    if wrapped.ndim == 0:
        return float(wrapped)
    return wrapped
