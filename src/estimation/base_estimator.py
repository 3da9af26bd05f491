"""Base class for online estimators.

This module provides the abstract base class shared by the stochastic
gradient and flexible least squares estimators, plus input validation
for single observations and ordered batches.
"""

from abc import ABC, abstractmethod

import numpy as np

from online_estimation.exceptions import ConfigurationError


class OnlineEstimatorBase(ABC):
    """Abstract base class for single-pass estimators.

    An estimator owns a coefficient vector β of fixed length p and mutates
    it in place once per observation. ``update`` and ``predict`` accept
    either one observation or an ordered batch:

        update(y: float, x: (p,))          one observation
        update(Y: (n,), X: (n, p))         rows replayed in order
        predict(x: (p,)) -> float
        predict(X: (n, p)) -> (n,)

    Batch updates are sequential; the result depends on row order.
    """

    def __init__(self, n_params: int):
        """Initialize estimator state.

        Args:
            n_params: Number of coefficients p.
        """
        if int(n_params) < 1:
            raise ConfigurationError(f"n_params must be >= 1, got {n_params}")
        self.n_params = int(n_params)
        self._beta: np.ndarray = np.zeros(self.n_params)
        self._yhat: float = 0.0
        self._n_updates: int = 0

    @abstractmethod
    def _update_one(self, y: float, x: np.ndarray) -> None:
        """Process one validated observation."""
        pass

    @abstractmethod
    def _predict_one(self, x: np.ndarray) -> float:
        """Predict the response for one validated feature vector."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Restore the state observed right after construction."""
        pass

    @abstractmethod
    def state(self) -> dict:
        """Snapshot of the estimator state (copies, safe to keep)."""
        pass

    def update(self, y, x) -> np.ndarray:
        """Process one observation or an ordered batch.

        Args:
            y: Scalar response, or sequence of n responses.
            x: Feature vector (p,), or matrix (n, p) matching ``y``.

        Returns:
            Copy of the coefficient vector after the update.

        Raises:
            ConfigurationError: If shapes do not match.
        """
        if np.ndim(y) == 0:
            self._update_one(float(y), validate_observation(x, self.n_params))
        else:
            Y, X = validate_batch_input(y, x, self.n_params)
            for yi, xi in zip(Y, X):
                self._update_one(float(yi), xi)
        return self._beta.copy()

    def predict(self, x):
        """Predict from the current coefficients without changing state.

        Args:
            x: Feature vector (p,) or matrix (n, p). With p = 1 a vector of
                length n != 1 is read as a single column, as in ``update``.

        Returns:
            float for a vector, array (n,) for a matrix. Every row of a
            matrix uses the same coefficients.
        """
        x = np.asarray(x, dtype=float)
        if x.ndim == 1 and self.n_params == 1 and x.shape[0] != 1:
            x = x.reshape(-1, 1)
        if x.ndim == 2:
            X = validate_design_matrix(x, self.n_params)
            return np.array([self._predict_one(xi) for xi in X])
        return self._predict_one(validate_observation(x, self.n_params))

    @property
    def beta(self) -> np.ndarray:
        """Current coefficient vector."""
        return self._beta.copy()

    @property
    def yhat(self) -> float:
        """Prediction made during the most recent update."""
        return self._yhat

    @property
    def n_updates(self) -> int:
        """Number of observations processed."""
        return self._n_updates

    nobs = n_updates

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_params={self.n_params}, nobs={self._n_updates})"


def validate_observation(x, n_params: int) -> np.ndarray:
    """Validate one feature vector.

    Args:
        x: Feature vector, any array-like with ``n_params`` elements.
        n_params: Expected number of features.

    Returns:
        Flat float array (n_params,).

    Raises:
        ConfigurationError: If the length is wrong.
    """
    x = np.asarray(x, dtype=float).ravel()
    if x.shape != (n_params,):
        raise ConfigurationError(f"x must have shape ({n_params},), got {x.shape}")
    return x


def validate_design_matrix(X, n_params: int) -> np.ndarray:
    """Validate a feature matrix with one observation per row."""
    X = np.asarray(X, dtype=float)
    if X.ndim == 1 and n_params == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise ConfigurationError(f"X must be 2D, got {X.ndim}D")
    if X.shape[1] != n_params:
        raise ConfigurationError(f"X must have {n_params} columns, got {X.shape[1]}")
    return X


def validate_batch_input(Y, X, n_params: int) -> tuple[np.ndarray, np.ndarray]:
    """Validate an ordered batch of observations.

    Args:
        Y: Responses (n,).
        X: Features (n, p). A 1D X is accepted when p == 1.
        n_params: Expected number of features p.

    Returns:
        Tuple of (Y, X) as float arrays.

    Raises:
        ConfigurationError: If X has the wrong shape or len(Y) != rows(X).
    """
    Y = np.asarray(Y, dtype=float).ravel()
    X = validate_design_matrix(X, n_params)
    if Y.shape[0] != X.shape[0]:
        raise ConfigurationError(
            f"Y length ({Y.shape[0]}) must match X rows ({X.shape[0]})"
        )
    return Y, X
