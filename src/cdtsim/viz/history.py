"""
Plots of a Metropolis run.

- State trajectories: N1_TL, N3_31, N3_22 over the recorded passes
- Move statistics: attempted vs successful moves per move type
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from cdtsim.core.moves import MoveType

if TYPE_CHECKING:
    from cdtsim.core.metropolis import PassSummary
    from cdtsim.core.moves import MoveStatistics


def history_arrays(history: Sequence["PassSummary"]) -> dict[str, np.ndarray]:
    """
    Stack pass summaries into arrays.

    Returns:
        Dict with 'pass', 'timelike_edges', 'three_one', 'two_two', 'total'
    """
    passes = np.array([s.pass_number for s in history], dtype=np.int64)
    counts = np.array([s.state.as_tuple() for s in history], dtype=np.int64).reshape(-1, 3)
    return {
        "pass": passes,
        "timelike_edges": counts[:, 0],
        "three_one": counts[:, 1],
        "two_two": counts[:, 2],
        "total": counts[:, 1] + counts[:, 2],
    }


def plot_state_history(
    history: Sequence["PassSummary"],
    title: str = "State counts per pass",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 6),
) -> tuple[Figure, Axes]:
    """
    Plot the counts recorded on the output cadence.

    Args:
        history: Metropolis.history
        title: Plot title
        ax: Existing axes (creates new if None)

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    data = history_arrays(history)
    ax.plot(data["pass"], data["timelike_edges"], "o-", label="$N_1^{TL}$")
    ax.plot(data["pass"], data["three_one"], "s-", label="$N_3^{(3,1)}$")
    ax.plot(data["pass"], data["two_two"], "^-", label="$N_3^{(2,2)}$")
    ax.plot(data["pass"], data["total"], "k--", alpha=0.6, label="$N_3$ total")

    ax.set_xlabel("Pass")
    ax.set_ylabel("Count")
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)
    return fig, ax


def plot_move_statistics(
    statistics: "MoveStatistics",
    title: str = "Ergodic moves",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5),
) -> tuple[Figure, Axes]:
    """Bar chart of attempted vs successful moves, one group per move type."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    moves = list(MoveType)
    x = np.arange(len(moves))
    width = 0.38

    ax.bar(x - width / 2, statistics.attempted, width, label="Attempted", color="steelblue")
    ax.bar(x + width / 2, statistics.successful, width, label="Successful", color="darkorange")

    ax.set_xticks(x)
    ax.set_xticklabels([move.label for move in moves])
    ax.set_ylabel("Moves")
    ax.set_title(title)
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)
    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
