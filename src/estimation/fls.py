"""Online Flexible Least Squares estimation.

This module implements the online flexible least squares (FLS) algorithm
for a linear model whose coefficients drift slowly over time:

    y_t = x_t' β_t + ε_t,    β_t = β_{t-1} + ω_t

with cost C_t(β_t; μ) = (y_t - x_t' β_t)² + μ ||Δβ_t||². The process noise
covariance is V_ω = I_p / μ, and μ is parameterized by a smoothing
parameter δ ∈ (0, 1) as μ = (1 - δ) / δ:

- δ close to 0: large μ, β changes slowly.
- δ close to 1: small μ, β tracks new observations quickly.

Reference:
    Montana, G., Triantafyllopoulos, K., & Tsagaris, T. (2009). Flexible
    least squares for temporal data mining and statistical arbitrage.
    Expert Systems with Applications, 36(2), 2819-2830.
"""

import logging
from typing import Optional

import numpy as np

from online_estimation.exceptions import ConfigurationError, UnsupportedOperationError
from online_estimation.stats.moments import StreamingMoment
from online_estimation.stats.normalizer import Normalizer, if0then1
from online_estimation.stats.weights import WeightSchedule, EqualWeight

from .base_estimator import OnlineEstimatorBase, validate_batch_input

logger = logging.getLogger(__name__)


class FlexibleLeastSquaresEstimator(OnlineEstimatorBase):
    """Online FLS estimator (a Kalman filter with fixed process noise).

    Observations are normalized by running statistics before entering the
    recursion. For a normalized observation (y', x') the update is:

        ε  = y' - x'·β
        R  = R + V_ω - q K K^T        (q, K from the previous step)
        q  = x'^T R x' + Var(ε)
        K  = R x' / q                 (q == 0 is replaced by 1)
        β  = β + K ε

    R plays the role of the prior covariance of β: each step inflates it
    by V_ω and removes the information gained one step earlier.

    Args:
        n_params: Number of coefficients p.
        delta: Smoothing parameter δ in (0, 1).
        weight: Weight schedule for the normalization and residual
            variance statistics. Defaults to ``EqualWeight()``.
    """

    def __init__(
        self,
        n_params: int,
        delta: float = 0.99,
        weight: Optional[WeightSchedule] = None,
    ):
        super().__init__(n_params)

        delta = float(delta)
        # δ = 1 gives μ = 0 and an infinite V_ω.
        if not (0.0 < delta < 1.0):
            raise ConfigurationError(f"delta must be in (0, 1), got {delta}")
        self._delta = delta

        self._mu = (1.0 - delta) / delta
        self._V_omega: np.ndarray = np.eye(self.n_params) / self._mu
        logger.debug("FLS mu = %s, diag(V_omega) = %s", self._mu, np.diag(self._V_omega))

        self._weight = weight if weight is not None else EqualWeight()
        self._V_eps = StreamingMoment(self._weight)
        self._normalizer = Normalizer(self.n_params, self._weight)

        self.reset()

    @classmethod
    def from_data(cls, Y, X, delta: float = 0.99, weight: Optional[WeightSchedule] = None):
        """Construct with p taken from X and replay the rows in order.

        A single observation (scalar y, vector x) is also accepted.
        """
        if np.ndim(Y) == 0:
            x = np.asarray(X, dtype=float).ravel()
            est = cls(x.shape[0], delta, weight)
            est.update(float(Y), x)
            return est
        X = np.asarray(X, dtype=float)
        n_params = X.shape[-1] if X.ndim > 1 else 1
        Y, X = validate_batch_input(Y, X, n_params)
        est = cls(n_params, delta, weight)
        est.update(Y, X)
        return est

    # ------------------------------------------------------------------ update

    def _update_one(self, y: float, x: np.ndarray) -> None:
        # Statistics include the newest point before normalizing it.
        self._normalizer.update(y, x)
        y_n = self._normalizer.normalize_y(y)
        x_n = self._normalizer.normalize_x(x)

        yhat_n = float(x_n @ self._beta)
        eps = y_n - yhat_n
        self._V_eps.update(eps)

        # Uses q and K of the previous step.
        self._R += self._V_omega - self._q * np.outer(self._K, self._K)
        self._R = 0.5 * (self._R + self._R.T)
        Rx = self._R @ x_n
        self._q = float(x_n @ Rx) + self._V_eps.variance()
        if self._q == 0.0:
            logger.debug("FLS gain denominator is zero at nobs=%d", self._n_updates)
        self._K = Rx / if0then1(self._q)

        self._beta += self._K * eps
        logger.debug("FLS beta = %s", self._beta)

        self._yhat = self._normalizer.denormalize_y(yhat_n)
        self._n_updates += 1

    def _predict_one(self, x: np.ndarray) -> float:
        x_n = self._normalizer.normalize_x(x)
        return self._normalizer.denormalize_y(float(x_n @ self._beta))

    def reset(self) -> None:
        """Reset all state; p, δ and V_ω are kept."""
        self._V_eps.reset()
        self._normalizer.reset()
        self._beta = np.zeros(self.n_params)
        # R_t = P_{t-1} + V_ω with P_0 ≈ 0.
        self._R = self._V_omega.copy()
        self._q = 0.0
        self._K = np.zeros(self.n_params)
        self._yhat = 0.0
        self._n_updates = 0

    # ------------------------------------------------------------------- state

    @staticmethod
    def state_names() -> list[str]:
        return ["beta", "sigma_y", "sigma_x", "sigma_eps", "yhat", "nobs"]

    def state(self) -> dict:
        return {
            "beta": self._beta.copy(),
            "sigma_y": self._normalizer.y_moment.std(),
            "sigma_x": np.sqrt(self._normalizer.x_variances()),
            "sigma_eps": self._V_eps.std(),
            "yhat": self._yhat,
            "nobs": self._n_updates,
        }

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def V_omega(self) -> np.ndarray:
        """Process noise covariance (p, p)."""
        return self._V_omega.copy()

    @property
    def R(self) -> np.ndarray:
        return self._R.copy()

    @property
    def K(self) -> np.ndarray:
        """Most recent gain vector."""
        return self._K.copy()

    @property
    def q(self) -> float:
        return self._q

    @property
    def normalizer(self) -> Normalizer:
        return self._normalizer

    @property
    def residual_moment(self) -> StreamingMoment:
        return self._V_eps

    # ---------------------------------------------------------- not supported

    def merge(self, other: "FlexibleLeastSquaresEstimator") -> None:
        raise UnsupportedOperationError("merging FLS estimators is not supported")

    def coef(self) -> np.ndarray:
        raise UnsupportedOperationError("coef is not supported for FLS, use beta")

    def coeftable(self):
        raise UnsupportedOperationError("coefficient tables are not supported for FLS")

    def confint(self, level: float = 0.95):
        raise UnsupportedOperationError("confidence intervals are not supported for FLS")

    def __repr__(self) -> str:
        return (
            f"FlexibleLeastSquaresEstimator(n_params={self.n_params}, "
            f"delta={self._delta}, nobs={self._n_updates})"
        )
