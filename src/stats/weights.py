"""Weight schedules for exponentially weighted online statistics.

A weight schedule yields one weight γ_t ∈ (0, 1] per observation. Online
statistics are smoothed with it:

    mean_t = mean_{t-1} + γ_t (x_t - mean_{t-1})

γ_t = 1/t reproduces the ordinary running average; a floor λ on γ_t makes
old observations fade exponentially. The same schedules double as step
size sequences η_t for stochastic gradient updates.
"""

import copy
from abc import ABC, abstractmethod

import numpy as np

from online_estimation.exceptions import ConfigurationError


class WeightSchedule(ABC):
    """Abstract base class for weight schedules.

    Subclasses define ``weight(t)`` for the t-th observation (1-based).
    ``next()`` advances the step counter and returns the new weight.
    """

    def __init__(self):
        self._steps_seen: int = 0

    @abstractmethod
    def weight(self, t: int) -> float:
        """Weight assigned to the t-th observation (t >= 1)."""
        pass

    def next(self) -> float:
        """Advance one step and return its weight."""
        self._steps_seen += 1
        return self.weight(self._steps_seen)

    def reset(self) -> None:
        """Forget all steps seen."""
        self._steps_seen = 0

    @property
    def steps_seen(self) -> int:
        """Number of calls to ``next()`` since construction or reset."""
        return self._steps_seen

    @property
    def name(self) -> str:
        return type(self).__name__

    def fresh_copy(self) -> "WeightSchedule":
        """Independent copy with the same parameters and no steps seen."""
        other = copy.deepcopy(self)
        other.reset()
        return other

    def __repr__(self) -> str:
        return f"{self.name}(steps_seen={self._steps_seen})"


def _check_unit_interval(value: float, name: str, closed_right: bool = True) -> float:
    value = float(value)
    upper_ok = value <= 1.0 if closed_right else value < 1.0
    if not (value > 0.0 and upper_ok):
        bound = "(0, 1]" if closed_right else "(0, 1)"
        raise ConfigurationError(f"{name} must be in {bound}, got {value}")
    return value


class EqualWeight(WeightSchedule):
    """γ_t = 1/t: every observation counts equally."""

    def weight(self, t: int) -> float:
        return 1.0 / t


class ExponentialWeight(WeightSchedule):
    """γ_t = max(1/t, λ): equal weighting until 1/t drops below λ."""

    def __init__(self, lam: float = 0.1):
        super().__init__()
        self.lam = _check_unit_interval(lam, "lam")

    def weight(self, t: int) -> float:
        return max(1.0 / t, self.lam)

    def __repr__(self) -> str:
        return f"ExponentialWeight(lam={self.lam}, steps_seen={self._steps_seen})"


class BoundedEqualWeight(ExponentialWeight):
    """Same weights as ExponentialWeight, kept under its historical name."""


class LearningRate(WeightSchedule):
    """γ_t = max(λ, 1/t^r).

    Args:
        r: Decay rate in (0, 1]. r = 1 is equal weighting; smaller r
            forgets faster.
        lam: Lower bound on the weight.
    """

    def __init__(self, r: float = 0.6, lam: float = 0.0):
        super().__init__()
        self.r = _check_unit_interval(r, "r")
        if not 0.0 <= lam <= 1.0:
            raise ConfigurationError(f"lam must be in [0, 1], got {lam}")
        self.lam = float(lam)

    def weight(self, t: int) -> float:
        return max(self.lam, 1.0 / t ** self.r)


class LearningRate2(WeightSchedule):
    """γ_t = max(λ, 1 / (1 + c (t - 1)))."""

    def __init__(self, c: float = 0.5, lam: float = 0.0):
        super().__init__()
        if c <= 0:
            raise ConfigurationError(f"c must be greater than 0, got {c}")
        if not 0.0 <= lam <= 1.0:
            raise ConfigurationError(f"lam must be in [0, 1], got {lam}")
        self.c = float(c)
        self.lam = float(lam)

    def weight(self, t: int) -> float:
        return max(self.lam, 1.0 / (1.0 + self.c * (t - 1)))


class HarmonicWeight(WeightSchedule):
    """γ_t = a / (a + t - 1)."""

    def __init__(self, a: float = 10.0):
        super().__init__()
        if a <= 0:
            raise ConfigurationError(f"a must be greater than 0, got {a}")
        self.a = float(a)

    def weight(self, t: int) -> float:
        return self.a / (self.a + t - 1)


class McclainWeight(WeightSchedule):
    """γ_1 = 1, γ_t = γ_{t-1} / (1 + γ_{t-1} - α).

    The sequence decreases from 1 toward α. It is defined recursively, so
    the last weight is part of the schedule state.
    """

    def __init__(self, alpha: float = 0.1):
        super().__init__()
        self.alpha = _check_unit_interval(alpha, "alpha", closed_right=False)
        self._last: float = 1.0

    def weight(self, t: int) -> float:
        w = 1.0
        for _ in range(1, t):
            w = w / (1.0 + w - self.alpha)
        return w

    def next(self) -> float:
        self._steps_seen += 1
        if self._steps_seen > 1:
            self._last = self._last / (1.0 + self._last - self.alpha)
        return self._last

    def reset(self) -> None:
        super().reset()
        self._last = 1.0


class ConstantWeight(WeightSchedule):
    """γ_t = η for every t (constant step size)."""

    def __init__(self, eta: float = 0.1):
        super().__init__()
        self.eta = _check_unit_interval(eta, "eta")

    def weight(self, t: int) -> float:
        return self.eta

    def __repr__(self) -> str:
        return f"ConstantWeight(eta={self.eta}, steps_seen={self._steps_seen})"


WEIGHT_SCHEDULES = {
    "equal": EqualWeight,
    "exponential": ExponentialWeight,
    "bounded_equal": BoundedEqualWeight,
    "learning_rate": LearningRate,
    "learning_rate2": LearningRate2,
    "harmonic": HarmonicWeight,
    "mcclain": McclainWeight,
    "constant": ConstantWeight,
}


def make_weight(kind: str, param: float | None = None) -> WeightSchedule:
    """Create a weight schedule by name.

    Args:
        kind: One of the keys of ``WEIGHT_SCHEDULES``.
        param: The schedule's decay parameter (λ, r, c, a, α or η).
            None uses the schedule's default.

    Raises:
        ConfigurationError: If ``kind`` is unknown.
    """
    try:
        cls = WEIGHT_SCHEDULES[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown weight schedule {kind!r}, expected one of "
            f"{sorted(WEIGHT_SCHEDULES)}"
        ) from None
    if cls is EqualWeight or param is None:
        return cls()
    return cls(param)


def weight_curve(schedule: WeightSchedule, nobs: int = 50) -> np.ndarray:
    """First ``nobs`` weights of ``schedule``, computed on a fresh copy."""
    w = schedule.fresh_copy()
    return np.array([w.next() for _ in range(nobs)])
