"""Streaming mean and variance of a scalar sequence."""

from typing import Optional

from .weights import EqualWeight, WeightSchedule


class StreamingMoment:
    """Exponentially weighted running mean and variance.

    For each value x_t with weight γ_t from the schedule:

        μ_t  = μ_{t-1} + γ_t (x_t - μ_{t-1})
        σ²_t = (1 - γ_t) σ²_{t-1} + γ_t (x_t - μ_t)(x_t - μ_{t-1})

    With equal weighting σ² is the biased (population) variance. After a
    single observation the variance is exactly 0.

    Args:
        weight: Weight schedule. The moment keeps its own fresh copy, so
            the same schedule object can seed many moments.
    """

    def __init__(self, weight: Optional[WeightSchedule] = None):
        self._weight = (weight or EqualWeight()).fresh_copy()
        self._mean: float = 0.0
        self._var: float = 0.0
        self._n: int = 0

    def update(self, value: float) -> None:
        """Fold one value into the running statistics."""
        value = float(value)
        gamma = self._weight.next()
        mean_prev = self._mean
        self._mean = mean_prev + gamma * (value - mean_prev)
        self._var = (1.0 - gamma) * self._var + gamma * (value - self._mean) * (value - mean_prev)
        self._n += 1

    def mean(self) -> float:
        return self._mean

    def variance(self) -> float:
        # Rounding in the mean step can leave a tiny negative product.
        return max(self._var, 0.0)

    def std(self) -> float:
        return self.variance() ** 0.5

    @property
    def n(self) -> int:
        return self._n

    @property
    def weight(self) -> WeightSchedule:
        return self._weight

    def reset(self) -> None:
        """Zero all statistics and restart the weight schedule."""
        self._weight.reset()
        self._mean = 0.0
        self._var = 0.0
        self._n = 0

    def __repr__(self) -> str:
        return (
            f"StreamingMoment(mean={self._mean:.6g}, variance={self.variance():.6g}, "
            f"n={self._n}, weight={self._weight.name})"
        )
