"""Online estimation algorithms.

Provides single-pass estimators:
- StochasticGradientEstimator: one (sub)gradient step per observation
  for any loss model and penalty
- FlexibleLeastSquaresEstimator: Kalman-style recursion for a
  time-varying linear model

Usage:
    from online_estimation.estimation import FlexibleLeastSquaresEstimator
    from online_estimation.stats import ExponentialWeight

    estimator = FlexibleLeastSquaresEstimator(3, delta=0.9, weight=ExponentialWeight(0.05))
    for y_t, x_t in stream:
        beta = estimator.update(y_t, x_t)
    print(estimator.state())
"""

from .base_estimator import (
    OnlineEstimatorBase,
    validate_observation,
    validate_design_matrix,
    validate_batch_input,
)

from .sgd import StochasticGradientEstimator

from .fls import FlexibleLeastSquaresEstimator

__all__ = [
    # Base
    "OnlineEstimatorBase",
    "validate_observation",
    "validate_design_matrix",
    "validate_batch_input",
    # Estimators
    "StochasticGradientEstimator",
    "FlexibleLeastSquaresEstimator",
]
