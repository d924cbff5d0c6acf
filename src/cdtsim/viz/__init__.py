"""
Visualization utilities.

- State count trajectories over passes
- Attempted vs successful move bars
"""

from cdtsim.viz.history import (
    history_arrays,
    plot_move_statistics,
    plot_state_history,
    save_figure,
)

__all__ = [
    "history_arrays",
    "plot_move_statistics",
    "plot_state_history",
    "save_figure",
]
