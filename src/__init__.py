"""Online parameter estimation package.

This package provides single-pass estimators that update a model's
parameters one observation at a time, in constant memory:

- Stochastic (sub)gradient models with interchangeable losses
  (L2, L1, logistic, Poisson, quantile, hinge, Huber) and penalties
  (none, L1, L2).
- Online flexible least squares, a Kalman-filter-style recursion that
  tracks a slowly time-varying coefficient vector.

Both are driven by decaying weight schedules that control how much a new
observation counts relative to history.

Based on:
    Montana, G., Triantafyllopoulos, K., & Tsagaris, T. (2009). Flexible
    least squares for temporal data mining and statistical arbitrage.
    Expert Systems with Applications, 36(2), 2819-2830.
"""

__version__ = "0.1.0"
