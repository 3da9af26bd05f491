"""Plots of weight schedules and coefficient paths."""

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes

from online_estimation.stats.weights import WeightSchedule, weight_curve


def plot_weight_curve(schedule: WeightSchedule, nobs: int = 50, ax: Optional[Axes] = None) -> Axes:
    """Plot the first ``nobs`` weights of a schedule.

    The schedule itself is not advanced.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    ax.plot(np.arange(1, nobs + 1), weight_curve(schedule, nobs), lw=2, label=schedule.name)
    ax.set_xlabel("Number of Observations")
    ax.set_ylabel("Weight Value")
    ax.set_ylim(0, 1)
    ax.legend()
    ax.grid(True)
    return ax


def plot_coefficient_path(betas: np.ndarray, ax: Optional[Axes] = None) -> Axes:
    """Plot coefficient estimates over time, one line per coefficient.

    Args:
        betas: Coefficient history (n_steps, p).
    """
    betas = np.atleast_2d(np.asarray(betas, dtype=float))
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 4))

    steps = np.arange(1, betas.shape[0] + 1)
    for j, b in enumerate(betas.T):
        ax.plot(steps, b, label=f"beta[{j}]")

    ax.set_xlabel("Number of Observations")
    ax.set_ylabel("Coefficient")
    ax.set_title("Coefficient Path")
    ax.legend()
    ax.grid(True)
    return ax


def save_figure(ax: Axes, plot_path: Path) -> None:
    Path(plot_path).parent.mkdir(parents=True, exist_ok=True)
    ax.figure.tight_layout()
    ax.figure.savefig(plot_path)
    plt.close(ax.figure)
    print(f"Plot saved to {plot_path}")
