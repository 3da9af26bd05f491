"""Dataclass configurations for building estimators.

The configs double as tyro CLI schemas (see ``replay_cli``).
"""

from dataclasses import dataclass, field
from typing import Literal

from online_estimation.estimation import FlexibleLeastSquaresEstimator, StochasticGradientEstimator
from online_estimation.exceptions import ConfigurationError
from online_estimation.models import LOSS_MODELS, PENALTIES, make_loss, make_penalty
from online_estimation.stats import WEIGHT_SCHEDULES, WeightSchedule, make_weight


@dataclass
class WeightConfig:
    """Weight schedule by name.

    Attributes:
        kind: Schedule name (equal, exponential, learning_rate, ...).
        param: Decay parameter; None uses the schedule default.
    """

    kind: str = "equal"
    param: float | None = None

    def __post_init__(self):
        if self.kind not in WEIGHT_SCHEDULES:
            raise ConfigurationError(
                f"Unknown weight schedule {self.kind!r}, expected one of "
                f"{sorted(WEIGHT_SCHEDULES)}"
            )

    def build(self) -> WeightSchedule:
        return make_weight(self.kind, self.param)


@dataclass
class FLSConfig:
    """Flexible least squares estimator settings."""

    n_params: int = 2
    delta: float = 0.9  # smoothing parameter in (0, 1)
    weight: WeightConfig = field(default_factory=WeightConfig)

    def __post_init__(self):
        if self.n_params < 1:
            raise ConfigurationError(f"n_params must be >= 1, got {self.n_params}")
        if not 0.0 < self.delta < 1.0:
            raise ConfigurationError(f"delta must be in (0, 1), got {self.delta}")

    def build(self) -> FlexibleLeastSquaresEstimator:
        return FlexibleLeastSquaresEstimator(self.n_params, self.delta, self.weight.build())


@dataclass
class SGDConfig:
    """Stochastic gradient estimator settings."""

    n_params: int = 2
    loss: str = "l2"
    loss_param: float | None = None  # tau for quantile, delta for huber
    penalty: Literal["none", "l1", "l2"] = "none"
    penalty_lambda: float | None = None
    step_size: WeightConfig = field(
        default_factory=lambda: WeightConfig(kind="learning_rate", param=0.6)
    )

    def __post_init__(self):
        if self.n_params < 1:
            raise ConfigurationError(f"n_params must be >= 1, got {self.n_params}")
        if self.loss not in LOSS_MODELS:
            raise ConfigurationError(
                f"Unknown loss {self.loss!r}, expected one of {sorted(LOSS_MODELS)}"
            )
        if self.penalty not in PENALTIES:
            raise ConfigurationError(
                f"Unknown penalty {self.penalty!r}, expected one of {sorted(PENALTIES)}"
            )

    def build(self) -> StochasticGradientEstimator:
        return StochasticGradientEstimator(
            self.n_params,
            loss=make_loss(self.loss, self.loss_param),
            penalty=make_penalty(self.penalty, self.penalty_lambda),
            step_size=self.step_size.build(),
        )
