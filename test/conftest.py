"""Pytest configuration and fixtures for online_estimation tests.

Makes ``src/`` importable as ``online_estimation`` without installation.
"""

import importlib.util
import sys
from pathlib import Path

_package_root = Path(__file__).parent.parent.absolute()
_src_dir = _package_root / "src"

if "online_estimation" not in sys.modules:
    spec = importlib.util.spec_from_file_location(
        "online_estimation",
        _src_dir / "__init__.py",
        submodule_search_locations=[str(_src_dir)],
    )
    online_estimation = importlib.util.module_from_spec(spec)
    sys.modules["online_estimation"] = online_estimation
    spec.loader.exec_module(online_estimation)


import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def linear_data(rng):
    """Noise-free linear data y = X @ beta with three features."""
    def _generate(n_obs: int = 200, beta=(2.0, -1.0, 0.5)):
        beta = np.asarray(beta, dtype=float)
        X = rng.standard_normal((n_obs, beta.shape[0]))
        return X @ beta, X, beta

    return _generate
