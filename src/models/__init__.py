"""Loss models and penalties for stochastic gradient estimation.

Usage:
    from online_estimation.models import QuantileRegression, L2Penalty

    loss = QuantileRegression(tau=0.9)
    penalty = L2Penalty(lam=0.01)
"""

from .losses import (
    LossModel,
    L2Regression,
    L1Regression,
    LogisticRegression,
    PoissonRegression,
    QuantileRegression,
    SVMLike,
    HuberRegression,
    LOSS_MODELS,
    make_loss,
)

from .penalties import (
    Penalty,
    NoPenalty,
    L1Penalty,
    L2Penalty,
    PENALTIES,
    make_penalty,
)

__all__ = [
    # Losses
    "LossModel",
    "L2Regression",
    "L1Regression",
    "LogisticRegression",
    "PoissonRegression",
    "QuantileRegression",
    "SVMLike",
    "HuberRegression",
    "LOSS_MODELS",
    "make_loss",
    # Penalties
    "Penalty",
    "NoPenalty",
    "L1Penalty",
    "L2Penalty",
    "PENALTIES",
    "make_penalty",
]
