"""Reversible online normalization of a response and its features."""

from typing import Optional

import numpy as np

from online_estimation.exceptions import ConfigurationError

from .moments import StreamingMoment
from .weights import WeightSchedule


def if0then1(value):
    """Replace exact zeros by one (scalar or array)."""
    if np.ndim(value) == 0:
        return 1.0 if value == 0.0 else value
    value = np.asarray(value, dtype=float)
    return np.where(value == 0.0, 1.0, value)


class Normalizer:
    """Centers and scales y and each feature of x by running statistics.

    Values are centered by the running mean and divided by the running
    variance (not the standard deviation). A variance of exactly zero is
    treated as one, so the transform is always defined.

    The transform reflects the statistics at call time: repeated calls
    between updates agree, and ``denormalize_y(normalize_y(y))`` returns
    ``y`` up to rounding as long as no update happens in between.

    Args:
        n_features: Number of features p.
        weight: Weight schedule copied into every underlying moment.
    """

    def __init__(self, n_features: int, weight: Optional[WeightSchedule] = None):
        if n_features < 1:
            raise ConfigurationError(f"n_features must be >= 1, got {n_features}")
        self.n_features = int(n_features)
        self.y_moment = StreamingMoment(weight)
        self.x_moments = [StreamingMoment(weight) for _ in range(self.n_features)]

    def update(self, y: float, x: np.ndarray) -> None:
        """Advance the response and feature moments with raw values."""
        x = self._check_x(x)
        self.y_moment.update(y)
        for moment, xi in zip(self.x_moments, x):
            moment.update(xi)

    def x_means(self) -> np.ndarray:
        return np.array([m.mean() for m in self.x_moments])

    def x_variances(self) -> np.ndarray:
        return np.array([m.variance() for m in self.x_moments])

    def normalize_y(self, y: float) -> float:
        return (float(y) - self.y_moment.mean()) / if0then1(self.y_moment.variance())

    def normalize_x(self, x: np.ndarray) -> np.ndarray:
        x = self._check_x(x)
        return (x - self.x_means()) / if0then1(self.x_variances())

    def denormalize_y(self, z: float) -> float:
        return float(z) * self.y_moment.variance() + self.y_moment.mean()

    def denormalize_x(self, z: np.ndarray) -> np.ndarray:
        z = self._check_x(z)
        return z * self.x_variances() + self.x_means()

    def reset(self) -> None:
        self.y_moment.reset()
        for moment in self.x_moments:
            moment.reset()

    def _check_x(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float).ravel()
        if x.shape != (self.n_features,):
            raise ConfigurationError(
                f"x must have shape ({self.n_features},), got {x.shape}"
            )
        return x
