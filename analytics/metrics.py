from __future__ import annotations

"""Per-operation metrics over answered problems."""

import numpy as np
import pandas as pd


def operation_breakdown(problems: pd.DataFrame) -> pd.DataFrame:
    """Asked, correct, accuracy (%) and mean seconds per operation.

    Input is ``prepare.problems_frame`` output; the result is indexed by
    operation and sorted by accuracy, weakest first.
    """
    if problems.empty:
        return pd.DataFrame(columns=["asked", "correct", "accuracy", "mean_s"]).rename_axis("operation")
    grouped = problems.groupby("operation")
    out = pd.DataFrame(
        {
            "asked": grouped["correct"].size(),
            "correct": grouped["correct"].sum().astype("int64"),
            "mean_s": grouped["elapsed_ms"].mean() / 1000.0,
        }
    )
    out["accuracy"] = np.where(out["asked"] > 0, out["correct"] / out["asked"] * 100.0, 0.0)
    return out[["asked", "correct", "accuracy", "mean_s"]].sort_values("accuracy", kind="stable")
