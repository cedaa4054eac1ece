from __future__ import annotations

"""Smoothing utilities (EWMA by session)."""

import pandas as pd


def ewma_by_session(
    df: pd.DataFrame,
    value_col: str,
    span: int,
    group_cols: list[str] | None = None,
) -> pd.DataFrame:
    """Apply EWMA smoothing in session order, optionally per group.

    Returns a copy of df with a new column f"{value_col}_smooth" and rows sorted by session_idx.
    """
    g = df.sort_values("session_idx").copy()
    if g.empty:
        g[f"{value_col}_smooth"] = pd.Series(dtype="float32")
        return g
    values = g[value_col].astype("float64")
    if group_cols:
        smooth = values.groupby([g[c] for c in group_cols], observed=True).transform(lambda s: s.ewm(span=span).mean())
    else:
        smooth = values.ewm(span=span).mean()
    g[f"{value_col}_smooth"] = smooth.astype("float32")
    return g
