"""Stochastic (sub)gradient estimation with pluggable losses and penalties."""

from typing import Optional

import numpy as np

from online_estimation.models.losses import LossModel, L2Regression
from online_estimation.models.penalties import Penalty, NoPenalty
from online_estimation.stats.weights import WeightSchedule, ConstantWeight, LearningRate

from .base_estimator import OnlineEstimatorBase, validate_batch_input


class StochasticGradientEstimator(OnlineEstimatorBase):
    """Online model fit by one (sub)gradient step per observation.

    For each observation (y, x):

        ŷ = predict(x, β),  ε = y - ŷ
        β_i ← β_i - η_t (∂loss/∂β_i + ∂J/∂β_i)

    where η_t comes from the step size schedule. The L1 penalty enters as
    λ·sign(β_i) (0 at β_i = 0), not the unsigned ``L1Penalty.gradient``.

    Args:
        n_params: Number of coefficients p.
        loss: Loss model (default squared error).
        penalty: Penalty (default none).
        step_size: Weight schedule producing η_t, or a float for a constant
            step size. Defaults to ``LearningRate()``.
    """

    def __init__(
        self,
        n_params: int,
        loss: Optional[LossModel] = None,
        penalty: Optional[Penalty] = None,
        step_size: WeightSchedule | float | None = None,
    ):
        super().__init__(n_params)
        self.loss = loss if loss is not None else L2Regression()
        self.penalty = penalty if penalty is not None else NoPenalty()
        if step_size is None:
            step_size = LearningRate()
        elif not isinstance(step_size, WeightSchedule):
            step_size = ConstantWeight(step_size)
        self._step_size = step_size.fresh_copy()

    @classmethod
    def from_data(cls, Y, X, **kwargs) -> "StochasticGradientEstimator":
        """Construct with p taken from X and replay the rows in order."""
        X = np.asarray(X, dtype=float)
        n_params = X.shape[-1] if X.ndim > 1 else 1
        Y, X = validate_batch_input(Y, X, n_params)
        est = cls(n_params, **kwargs)
        est.update(Y, X)
        return est

    def _update_one(self, y: float, x: np.ndarray) -> None:
        yhat = self.loss.predict(x, self._beta)
        eps = y - yhat
        eta = self._step_size.next()
        grad = self.loss.gradient(eps, x, y, yhat) + self.penalty.subgradient(self._beta)
        self._beta -= eta * grad
        self._yhat = yhat
        self._n_updates += 1

    def _predict_one(self, x: np.ndarray) -> float:
        return self.loss.predict(x, self._beta)

    def reset(self) -> None:
        self._beta = np.zeros(self.n_params)
        self._step_size.reset()
        self._yhat = 0.0
        self._n_updates = 0

    @property
    def step_size(self) -> WeightSchedule:
        return self._step_size

    def state(self) -> dict:
        return {
            "beta": self._beta.copy(),
            "yhat": self._yhat,
            "nobs": self._n_updates,
        }

    def __repr__(self) -> str:
        return (
            f"StochasticGradientEstimator(n_params={self.n_params}, "
            f"loss={self.loss.name}, penalty={self.penalty.name}, "
            f"step_size={self._step_size!r}, nobs={self._n_updates})"
        )
