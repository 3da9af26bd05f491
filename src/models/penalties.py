"""Regularization penalties for stochastic gradient estimation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from online_estimation.exceptions import ConfigurationError


class Penalty(ABC):
    """Abstract base class for penalties J(β)."""

    @abstractmethod
    def gradient(self, beta: np.ndarray, i: int) -> float:
        """Derivative of J with respect to β[i]."""
        pass

    def subgradient(self, beta: np.ndarray) -> np.ndarray:
        """Signed step contribution of J for every coefficient."""
        beta = np.asarray(beta, dtype=float)
        return np.array([self.gradient(beta, i) for i in range(beta.shape[0])])

    @property
    def name(self) -> str:
        return type(self).__name__


def _check_lambda(lam: float) -> None:
    if lam < 0:
        raise ConfigurationError(f"lam must be >= 0, got {lam}")


@dataclass(frozen=True)
class NoPenalty(Penalty):
    """J(β) = 0."""

    def gradient(self, beta, i):
        return 0.0

    def subgradient(self, beta):
        return np.zeros(np.shape(beta)[0])


@dataclass(frozen=True)
class L1Penalty(Penalty):
    """J(β) = λ Σ|β_i| (lasso).

    ``gradient`` is the magnitude λ; ``subgradient`` applies sign(β_i),
    choosing 0 at β_i = 0.
    """

    lam: float = 0.1

    def __post_init__(self):
        _check_lambda(self.lam)

    def gradient(self, beta, i):
        return self.lam

    def subgradient(self, beta):
        return self.lam * np.sign(np.asarray(beta, dtype=float))


@dataclass(frozen=True)
class L2Penalty(Penalty):
    """J(β) = (λ/2) Σβ_i² (ridge)."""

    lam: float = 0.1

    def __post_init__(self):
        _check_lambda(self.lam)

    def gradient(self, beta, i):
        return self.lam * beta[i]

    def subgradient(self, beta):
        return self.lam * np.asarray(beta, dtype=float)


PENALTIES = {
    "none": NoPenalty,
    "l1": L1Penalty,
    "l2": L2Penalty,
}


def make_penalty(kind: str, lam: float | None = None) -> Penalty:
    """Create a penalty by name (``none``, ``l1`` or ``l2``)."""
    try:
        cls = PENALTIES[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown penalty {kind!r}, expected one of {sorted(PENALTIES)}"
        ) from None
    if cls is NoPenalty or lam is None:
        return cls()
    return cls(lam)
