"""Replay stored data through estimators in fixed-size row chunks."""

from typing import Callable

import numpy as np

from online_estimation.exceptions import ConfigurationError


def maprows(func: Callable, batch_size: int, *data) -> None:
    """Call ``func`` on consecutive row chunks of every array in ``data``.

    Chunks preserve row order; the last one may be shorter than
    ``batch_size``. Typical use feeds an estimator batch by batch:

        maprows(estimator.update, 100, Y, X)

    Args:
        func: Called as ``func(*chunks)`` with one chunk per array.
        batch_size: Rows per chunk, at least 1.
        *data: Arrays sharing the same number of rows (first axis).

    Raises:
        ConfigurationError: If ``batch_size`` < 1 or row counts differ.
    """
    if batch_size < 1:
        raise ConfigurationError(f"batch_size must be >= 1, got {batch_size}")
    if not data:
        return
    arrays = [np.asarray(d) for d in data]
    n_rows = arrays[0].shape[0]
    for a in arrays[1:]:
        if a.shape[0] != n_rows:
            raise ConfigurationError(
                f"All arrays must have {n_rows} rows, got {a.shape[0]}"
            )
    for start in range(0, n_rows, batch_size):
        stop = min(start + batch_size, n_rows)
        func(*(a[start:stop] for a in arrays))
