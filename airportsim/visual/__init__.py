"""Chart rendering for runs and sweeps."""

from airportsim.visual.plots import plot_run_history, plot_sweep

__all__ = ["plot_run_history", "plot_sweep"]
