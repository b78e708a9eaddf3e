"""Static charts of simulation output, rendered with matplotlib (Agg backend)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pandas as pd

    from airportsim.sweep import SweepResult


def plot_sweep(result: SweepResult, path: str | Path) -> Path:
    """Bar chart of the safe P found for each seed, with the mean as a line."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = result.to_dataframe()

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(range(len(df)), df["safe_probability"], color="steelblue", alpha=0.8)
    average = result.average_safe_probability
    if average is not None:
        ax.axhline(average, color="crimson", linestyle="--", label=f"mean {average:.4f}")
        ax.legend()
    ax.set_xticks(range(len(df)))
    ax.set_xticklabels([str(seed) for seed in df["seed"]], rotation=45, ha="right", fontsize=7)
    ax.set_xlabel("Seed")
    ax.set_ylabel("Highest crash-free P")
    ax.set_title(f"{result.queue_type.runway_policy().label}, {result.ticks} ticks")
    ax.grid(True, alpha=0.2)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def plot_run_history(history: pd.DataFrame, path: str | Path, title: str = "Queue depths") -> Path:
    """Line chart of queue depths per tick, from QueueDepthRecorder.to_dataframe()."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, (depth_ax, crash_ax) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    for column, color in (("arrivals", "steelblue"), ("departures", "darkorange"), ("repair_yard", "gray")):
        depth_ax.plot(history["tick"], history[column], label=column, color=color, linewidth=1)
    depth_ax.set_ylabel("Aircraft")
    depth_ax.set_title(title)
    depth_ax.legend()
    depth_ax.grid(True, alpha=0.2)

    crash_ax.step(history["tick"], history["crashes"], color="crimson", where="post")
    crash_ax.set_xlabel("Tick")
    crash_ax.set_ylabel("Crashes (cumulative)")
    crash_ax.grid(True, alpha=0.2)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
