from __future__ import annotations

"""Matplotlib plots for accuracy trends and strength profiles."""

import os
from typing import Mapping, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402


def plot_accuracy_trend(
    df: pd.DataFrame,
    *,
    value_col: str = "accuracy",
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    """Scatter per-session values in session order, with the EWMA line if present.

    Returns False (and draws nothing) when there is no data.
    """
    if df.empty:
        return False
    g = df.sort_values("session_idx")
    plt.figure()
    plt.plot(g["session_idx"], g[value_col], marker="o", linestyle="", label=value_col)
    smooth_col = f"{value_col}_smooth"
    if smooth_col in g.columns:
        plt.plot(g["session_idx"], g[smooth_col], linewidth=2, label=f"{value_col} (EWMA)")
    plt.ylim(0, 105)
    plt.xlabel("Session")
    plt.ylabel(value_col)
    plt.title("Trend: " + value_col)
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True


def plot_strengths(
    strengths: Mapping[str, float],
    *,
    title: str = "Strength by operation",
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    """Horizontal bars on a 0-100 scale, colored by band (80/60/40)."""
    if not strengths:
        return False
    labels = list(strengths.keys())
    vals = np.array([float(strengths[k]) for k in labels])
    colors = np.where(vals >= 80, "tab:green", np.where(vals >= 60, "gold", np.where(vals >= 40, "orange", "tab:red")))
    plt.figure()
    plt.barh(np.arange(len(labels)), vals, color=colors)
    plt.yticks(ticks=np.arange(len(labels)), labels=labels)
    plt.xlim(0, 100)
    plt.xlabel("Strength")
    plt.title(title)
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True
