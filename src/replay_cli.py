"""Replay a synthetic drifting-coefficient stream through an estimator.

Usage:
    online-estimation-replay fls --n-params 3 --delta 0.9
    online-estimation-replay sgd --loss huber --loss-param 1.5 \
        --replay.plot-path out/path.png
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Union

import numpy as np
import tyro

from online_estimation.batching import maprows
from online_estimation.config import FLSConfig, SGDConfig
from online_estimation.plotting import plot_coefficient_path, save_figure

logger = logging.getLogger(__name__)


@dataclass
class ReplaySettings:
    n_obs: int = 500  # Number of synthetic observations
    batch_size: int = 50  # Rows per replay chunk
    noise_std: float = 0.1  # Observation noise
    drift_std: float = 0.01  # Random-walk step of the true coefficients
    seed: int = 0
    plot_path: Path | None = None  # Path to save the coefficient path plot
    log_level: str = "WARNING"


@dataclass
class FLSReplayConfig(FLSConfig):
    replay: ReplaySettings = field(default_factory=ReplaySettings)


@dataclass
class SGDReplayConfig(SGDConfig):
    replay: ReplaySettings = field(default_factory=ReplaySettings)


ConfigType = Union[
    Annotated[FLSReplayConfig, tyro.conf.subcommand(name="fls")],
    Annotated[SGDReplayConfig, tyro.conf.subcommand(name="sgd")],
]


def generate_drifting_stream(
    n_obs: int,
    n_params: int,
    noise_std: float = 0.1,
    drift_std: float = 0.01,
    seed: int = 0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Linear observations whose true coefficients follow a random walk.

    Returns:
        Tuple of (Y (n,), X (n, p), true coefficients (n, p)).
    """
    rng = np.random.default_rng(seed)
    steps = rng.normal(0.0, drift_std, (n_obs, n_params))
    steps[0] = rng.uniform(-1.0, 1.0, n_params)
    betas = np.cumsum(steps, axis=0)
    X = rng.standard_normal((n_obs, n_params))
    Y = np.einsum("ij,ij->i", X, betas) + rng.normal(0.0, noise_std, n_obs)
    return Y, X, betas


def main(config: ConfigType) -> dict:
    """Replay the stream and report the final estimator state.

    Args:
        config: Estimator and replay configuration.

    Returns:
        The estimator's final ``state()``.
    """
    settings = config.replay
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(levelname)s: %(name)s: %(message)s",
    )

    estimator = config.build()
    Y, X, true_betas = generate_drifting_stream(
        settings.n_obs, config.n_params, settings.noise_std, settings.drift_std, settings.seed
    )
    logger.info("Replaying %d observations through %r", settings.n_obs, estimator)

    history = []

    def replay_chunk(Y_chunk, X_chunk):
        for y, x in zip(Y_chunk, X_chunk):
            history.append(estimator.update(y, x))

    maprows(replay_chunk, settings.batch_size, Y, X)

    state = estimator.state()
    print(f"Final state of {estimator!r}:")
    for key, value in state.items():
        print(f"  {key}: {value}")
    print(f"  true beta (raw scale): {true_betas[-1]}")

    if settings.plot_path:
        ax = plot_coefficient_path(np.array(history))
        save_figure(ax, settings.plot_path)

    return state


def entry_point() -> None:
    config = tyro.cli(ConfigType)
    main(config)


if __name__ == "__main__":
    entry_point()
