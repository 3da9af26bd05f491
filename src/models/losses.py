"""Loss models for stochastic gradient estimation.

Each model defines a prediction function ŷ = f(x, β) and the partial
derivative of its per-observation loss with respect to one coefficient:

    gradient(ε, x_i, y, ŷ) = ∂ loss / ∂ β_i,    ε = y - ŷ

Not every argument is used by every model; the common signature lets the
estimator treat the models interchangeably. ``x_i`` may also be a whole
feature vector, in which case the gradient is returned for every
coefficient at once.

| Model              | predict      | gradient                               |
|--------------------|--------------|----------------------------------------|
| L2Regression       | x·β          | -ε x_i                                 |
| L1Regression       | x·β          | -sign(ε) x_i                           |
| LogisticRegression | 1/(1+e^-x·β) | -ε x_i                 (y ∈ {0, 1})    |
| PoissonRegression  | exp(x·β)     | -y x_i + ŷ x_i                         |
| QuantileRegression | x·β          | (1[ε<0] - τ) x_i                       |
| SVMLike            | x·β          | -y x_i if y ŷ < 1 else 0  (y ∈ {-1,1}) |
| HuberRegression    | x·β          | -ε x_i if |ε| <= δ else -δ sign(ε) x_i |
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from scipy.special import expit

from online_estimation.exceptions import ConfigurationError


class LossModel(ABC):
    """Abstract base class for loss models."""

    def linear_predictor(self, x: np.ndarray, beta: np.ndarray):
        """x·β for one row (float) or X @ β for a matrix (array)."""
        x = np.asarray(x, dtype=float)
        eta = x @ np.asarray(beta, dtype=float)
        return float(eta) if x.ndim == 1 else eta

    def predict(self, x: np.ndarray, beta: np.ndarray):
        """Predicted response for one row or for every row of a matrix."""
        return self.linear_predictor(x, beta)

    @abstractmethod
    def gradient(self, eps: float, x_i, y: float, yhat: float):
        """Loss derivative with respect to the coefficient(s) of ``x_i``."""
        pass

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class L2Regression(LossModel):
    """Squared error loss."""

    def gradient(self, eps, x_i, y, yhat):
        return -eps * x_i


@dataclass(frozen=True)
class L1Regression(LossModel):
    """Absolute error loss."""

    def gradient(self, eps, x_i, y, yhat):
        return -np.sign(eps) * x_i


@dataclass(frozen=True)
class LogisticRegression(LossModel):
    """Logistic loss for binary responses y ∈ {0, 1}."""

    def predict(self, x, beta):
        eta = self.linear_predictor(x, beta)
        return float(expit(eta)) if np.ndim(eta) == 0 else expit(eta)

    def gradient(self, eps, x_i, y, yhat):
        return -eps * x_i


@dataclass(frozen=True)
class PoissonRegression(LossModel):
    """Poisson deviance for count responses.

    Very sensitive to the step size: exp(x·β) grows fast.
    """

    def predict(self, x, beta):
        eta = self.linear_predictor(x, beta)
        return float(np.exp(eta)) if np.ndim(eta) == 0 else np.exp(eta)

    def gradient(self, eps, x_i, y, yhat):
        return -y * x_i + yhat * x_i


@dataclass(frozen=True)
class QuantileRegression(LossModel):
    """Check (pinball) loss for the τ-th conditional quantile.

    Attributes:
        tau: Quantile level in (0, 1). 0.5 gives median regression.
    """

    tau: float = 0.5

    def __post_init__(self):
        if not 0.0 < self.tau < 1.0:
            raise ConfigurationError(f"tau must be in (0, 1), got {self.tau}")

    def gradient(self, eps, x_i, y, yhat):
        return (float(eps < 0) - self.tau) * x_i


@dataclass(frozen=True)
class SVMLike(LossModel):
    """Hinge loss for labels y ∈ {-1, 1}.

    A perceptron without penalty, a linear SVM with an L2 penalty.
    """

    def gradient(self, eps, x_i, y, yhat):
        if y * yhat < 1:
            return -y * x_i
        return 0.0 * x_i


@dataclass(frozen=True)
class HuberRegression(LossModel):
    """Huber loss: quadratic within δ of the target, linear beyond.

    Attributes:
        delta: Transition point, must be greater than 0.
    """

    delta: float = 1.0

    def __post_init__(self):
        if not self.delta > 0:
            raise ConfigurationError(f"delta must be greater than 0, got {self.delta}")

    def gradient(self, eps, x_i, y, yhat):
        if abs(eps) <= self.delta:
            return -eps * x_i
        return -self.delta * np.sign(eps) * x_i


LOSS_MODELS = {
    "l2": L2Regression,
    "l1": L1Regression,
    "logistic": LogisticRegression,
    "poisson": PoissonRegression,
    "quantile": QuantileRegression,
    "svm": SVMLike,
    "huber": HuberRegression,
}


def make_loss(kind: str, param: float | None = None) -> LossModel:
    """Create a loss model by name.

    Args:
        kind: One of the keys of ``LOSS_MODELS``.
        param: τ for ``quantile``, δ for ``huber``; ignored otherwise.

    Raises:
        ConfigurationError: If ``kind`` is unknown or ``param`` is invalid.
    """
    try:
        cls = LOSS_MODELS[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown loss {kind!r}, expected one of {sorted(LOSS_MODELS)}"
        ) from None
    if cls in (QuantileRegression, HuberRegression) and param is not None:
        return cls(param)
    return cls()
