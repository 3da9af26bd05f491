"""Online statistics module.

Provides the building blocks shared by the estimators:
- Weight schedules (how much a new observation counts)
- Streaming mean/variance
- Reversible z-style normalization of responses and features

Usage:
    from online_estimation.stats import ExponentialWeight, StreamingMoment

    moment = StreamingMoment(ExponentialWeight(0.05))
    for value in stream:
        moment.update(value)
    print(moment.mean(), moment.variance())
"""

from .weights import (
    WeightSchedule,
    EqualWeight,
    ExponentialWeight,
    BoundedEqualWeight,
    LearningRate,
    LearningRate2,
    HarmonicWeight,
    McclainWeight,
    ConstantWeight,
    WEIGHT_SCHEDULES,
    make_weight,
    weight_curve,
)

from .moments import StreamingMoment

from .normalizer import Normalizer, if0then1

__all__ = [
    # Weights
    "WeightSchedule",
    "EqualWeight",
    "ExponentialWeight",
    "BoundedEqualWeight",
    "LearningRate",
    "LearningRate2",
    "HarmonicWeight",
    "McclainWeight",
    "ConstantWeight",
    "WEIGHT_SCHEDULES",
    "make_weight",
    "weight_curve",
    # Moments
    "StreamingMoment",
    # Normalization
    "Normalizer",
    "if0then1",
]
